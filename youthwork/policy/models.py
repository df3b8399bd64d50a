"""Engine value objects: worker age, job input and verdicts."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from youthwork.rules.models import AgeGroup, JobCategory, RiskLevel


class PayType(str, Enum):
    """How a job is paid."""
    FIXED = "FIXED"
    HOURLY = "HOURLY"


class Severity(str, Enum):
    """Violation severity."""
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"


@dataclass(frozen=True)
class WorkerAgeInfo:
    """Classified worker age. Derived per request, never persisted."""
    age: int
    age_group: AgeGroup
    is_minor: bool


@dataclass(frozen=True)
class JobInput:
    """A proposed job listing, already validated at the boundary."""
    title: str
    category: JobCategory
    description: str
    pay_amount: Decimal
    pay_type: PayType
    duration_minutes: Optional[int] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    location: Optional[str] = None
    is_school_day: bool = False
    is_school_holiday: bool = False
    requires_working_alone: bool = False
    involves_private_home: bool = False

    @property
    def text(self) -> str:
        """Title and description, for keyword screening."""
        return f"{self.title} {self.description}"

    @property
    def shift_minutes(self) -> Optional[int]:
        """Shift length from the stated duration, else from start/end times."""
        if self.duration_minutes is not None:
            return self.duration_minutes
        if self.start_time is not None and self.end_time is not None:
            return int((self.end_time - self.start_time).total_seconds() // 60)
        return None


@dataclass(frozen=True)
class Violation:
    """A blocking compliance failure."""
    code: str
    message: str
    severity: Severity
    rule: str
    legal_reference: Optional[str] = None


@dataclass(frozen=True)
class ComplianceWarning:
    """A non-blocking compliance concern."""
    code: str
    message: str
    recommendation: str


@dataclass(frozen=True)
class ComplianceResult:
    """Outcome of validating one job for one age group."""
    age_group: AgeGroup
    violations: tuple[Violation, ...] = ()
    warnings: tuple[ComplianceWarning, ...] = ()
    suggestions: tuple[str, ...] = ()
    summary: str = ""

    @property
    def compliant(self) -> bool:
        return not self.violations

    @property
    def violation_codes(self) -> list[str]:
        return [v.code for v in self.violations]

    @property
    def warning_codes(self) -> list[str]:
        return [w.code for w in self.warnings]


@dataclass(frozen=True)
class ValidationSummary:
    """Roll-up of a job evaluated for every age group."""
    can_be_posted: bool
    visible_to: str
    total_violations: int
    total_warnings: int


@dataclass(frozen=True)
class JobValidation:
    """A job evaluated for every age group."""
    results: dict[AgeGroup, ComplianceResult]
    eligible_age_groups: list[AgeGroup]
    summary: ValidationSummary

    @property
    def valid(self) -> bool:
        return bool(self.eligible_age_groups)

    @property
    def results_for_minors(self) -> ComplianceResult:
        return self.results[AgeGroup.MINOR_15_17]

    @property
    def results_for_young_adults(self) -> ComplianceResult:
        return self.results[AgeGroup.YOUNG_ADULT_18_20]


@dataclass(frozen=True)
class AgeEligibilityFilter:
    """Declarative job-listing predicate.

    Exactly one of ``minimum_age_lte`` or ``minimum_age_equals`` is set.
    The external query layer translates ``as_query()`` into its own filter
    syntax; nothing here touches storage.
    """
    minimum_age_lte: Optional[int] = None
    minimum_age_equals: Optional[int] = None
    excluded_categories: tuple[JobCategory, ...] = field(default_factory=tuple)

    def as_query(self) -> dict[str, Any]:
        query: dict[str, Any] = {}
        if self.minimum_age_lte is not None:
            query["minimum_age"] = {"lte": self.minimum_age_lte}
        elif self.minimum_age_equals is not None:
            query["minimum_age"] = {"equals": self.minimum_age_equals}
        if self.excluded_categories:
            query["category"] = {"not_in": [c.value for c in self.excluded_categories]}
        return query


@dataclass(frozen=True)
class JobAgePolicy:
    """Age settings applied to a job when it is published."""
    risk_category: RiskLevel
    minimum_age: int
    requires_adult_present: bool
    policy_version: str
    was_minimum_age_adjusted: bool
