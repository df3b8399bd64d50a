"""Rule table data models."""

import re
from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional


class AgeGroup(str, Enum):
    """Age bands covered by the youth program."""
    MINOR_15_17 = "MINOR_15_17"
    YOUNG_ADULT_18_20 = "YOUNG_ADULT_18_20"


class JobCategory(str, Enum):
    """Job categories a listing can be posted under."""
    BABYSITTING = "BABYSITTING"
    DOG_WALKING = "DOG_WALKING"
    SNOW_CLEARING = "SNOW_CLEARING"
    CLEANING = "CLEANING"
    DIY_HELP = "DIY_HELP"
    TECH_HELP = "TECH_HELP"
    ERRANDS = "ERRANDS"
    TUTORING = "TUTORING"
    OTHER = "OTHER"
    CONSTRUCTION_HELP = "CONSTRUCTION_HELP"
    HEAVY_LIFTING = "HEAVY_LIFTING"
    DRIVING = "DRIVING"
    BAR_SERVICE = "BAR_SERVICE"
    SECURITY_WORK = "SECURITY_WORK"


class RiskLevel(str, Enum):
    """Risk levels that determine a category's baseline minimum age."""
    LOW_RISK = "LOW_RISK"
    MEDIUM_RISK = "MEDIUM_RISK"
    HIGH_RISK = "HIGH_RISK"


class SchoolContext(str, Enum):
    """School calendar context a shift falls in."""
    SCHOOL_DAY = "school_day"
    SCHOOL_HOLIDAY = "school_holiday"


def keyword_pattern(keywords: tuple[str, ...]) -> Optional[re.Pattern]:
    """Compile keywords into a case-insensitive whole-word pattern."""
    if not keywords:
        return None
    # Longest first so multi-word keywords win over their prefixes
    ordered = sorted(keywords, key=len, reverse=True)
    alternatives = "|".join(re.escape(k) for k in ordered)
    return re.compile(rf"(?<!\w)(?:{alternatives})(?!\w)", re.IGNORECASE)


def find_keywords(pattern: Optional[re.Pattern], text: str) -> tuple[str, ...]:
    """Return matched keywords in order of first appearance, lowercased."""
    if pattern is None:
        return ()
    seen: dict[str, None] = {}
    for match in pattern.finditer(text):
        seen.setdefault(match.group(0).lower(), None)
    return tuple(seen)


@dataclass(frozen=True)
class WorkLimits:
    """Resolved numeric limits for one age group in one school context."""
    max_daily_hours: int
    max_weekly_hours: int
    earliest_hour: int
    latest_hour: int
    min_hourly_wage: Decimal
    rest_hours_between_shifts: int


@dataclass(frozen=True)
class DailyWeeklyCap:
    """Daily and weekly hour ceilings."""
    max_daily_hours: int
    max_weekly_hours: int


@dataclass(frozen=True)
class HoursRule:
    """Working-hours rule for one age group."""
    age_group: AgeGroup
    school_day: DailyWeeklyCap
    school_holiday: DailyWeeklyCap
    default_context: SchoolContext
    earliest_hour: int
    latest_hour: int
    rest_hours_between_shifts: int
    school_restrictions: bool


@dataclass(frozen=True)
class TermLimits:
    """School-term and school-holiday figures for display."""
    school_term_max_weekly_hours: int
    school_term_max_daily_hours_school_day: int
    school_term_max_daily_hours_non_school_day: int
    school_holiday_max_weekly_hours: int
    school_holiday_max_daily_hours: int


@dataclass(frozen=True)
class CategoryRule:
    """Per-category policy."""
    category: JobCategory
    risk_level: RiskLevel
    baseline_min_age: int
    minors_allowed: bool
    requires_adult_present: bool = False
    conditions: tuple[str, ...] = ()
    prohibited_keywords: tuple[str, ...] = ()
    notes: str = ""
    _pattern: Optional[re.Pattern] = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_pattern", keyword_pattern(self.prohibited_keywords))

    def matched_keywords(self, text: str) -> tuple[str, ...]:
        return find_keywords(self._pattern, text)


@dataclass(frozen=True)
class HazardRule:
    """A deny-list hazard.

    A hazard matches a job when the job's category is one of its absolute
    categories, or its text contains one of its keywords, or (for night
    window hazards) the job is alone in a private home and overlaps the
    window. ``only_when_working_alone`` narrows every trigger to jobs where
    the worker is unsupervised.
    """
    code: str
    description: str
    age_groups: frozenset[AgeGroup]
    categories: frozenset[JobCategory] = frozenset()
    keywords: tuple[str, ...] = ()
    only_when_working_alone: bool = False
    night_window: Optional[tuple[int, int]] = None
    _pattern: Optional[re.Pattern] = field(default=None, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "_pattern", keyword_pattern(self.keywords))

    def applies_to(self, age_group: AgeGroup) -> bool:
        return age_group in self.age_groups

    def matched_keywords(self, text: str) -> tuple[str, ...]:
        return find_keywords(self._pattern, text)


@dataclass(frozen=True)
class RuleTables:
    """Immutable, fully parsed ruleset.

    Built once from the packaged YAML ruleset. Never mutated; a reload
    produces a new instance.
    """
    id: str
    name: str
    version: str
    content_hash: str
    currency: str
    minor_hourly_wage: Decimal
    young_adult_hourly_wage: Decimal
    low_wage_margin: Decimal
    hours: Mapping[AgeGroup, HoursRule]
    risk_min_ages: Mapping[RiskLevel, int]
    risk_descriptions: Mapping[RiskLevel, str]
    categories: Mapping[JobCategory, CategoryRule]
    hazards: tuple[HazardRule, ...]
    unlock_ages: tuple[int, ...]

    def __post_init__(self) -> None:
        for name in ("hours", "risk_min_ages", "risk_descriptions", "categories"):
            value = getattr(self, name)
            if not isinstance(value, MappingProxyType):
                object.__setattr__(self, name, MappingProxyType(dict(value)))

    def min_hourly_wage(self, age_group: AgeGroup) -> Decimal:
        if age_group == AgeGroup.MINOR_15_17:
            return self.minor_hourly_wage
        return self.young_adult_hourly_wage

    def limits(
        self,
        age_group: AgeGroup,
        is_school_day: bool = False,
        is_school_holiday: bool = False,
    ) -> WorkLimits:
        """Resolve the working limits for an age group and school context.

        When neither flag is set the age group's default context applies
        (school holiday limits in the shipped ruleset).

        Raises:
            ValueError: If both school flags are set
        """
        if is_school_day and is_school_holiday:
            raise ValueError("is_school_day and is_school_holiday are mutually exclusive")

        rule = self.hours[age_group]
        if is_school_day:
            context = SchoolContext.SCHOOL_DAY
        elif is_school_holiday:
            context = SchoolContext.SCHOOL_HOLIDAY
        else:
            context = rule.default_context

        cap = rule.school_day if context == SchoolContext.SCHOOL_DAY else rule.school_holiday

        return WorkLimits(
            max_daily_hours=cap.max_daily_hours,
            max_weekly_hours=cap.max_weekly_hours,
            earliest_hour=rule.earliest_hour,
            latest_hour=rule.latest_hour,
            min_hourly_wage=self.min_hourly_wage(age_group),
            rest_hours_between_shifts=rule.rest_hours_between_shifts,
        )

    def term_limits(self, age_group: AgeGroup) -> Optional[TermLimits]:
        """School-term and holiday figures, or None for groups without school restrictions."""
        rule = self.hours[age_group]
        if not rule.school_restrictions:
            return None
        return TermLimits(
            school_term_max_weekly_hours=rule.school_day.max_weekly_hours,
            school_term_max_daily_hours_school_day=rule.school_day.max_daily_hours,
            school_term_max_daily_hours_non_school_day=rule.school_holiday.max_daily_hours,
            school_holiday_max_weekly_hours=rule.school_holiday.max_weekly_hours,
            school_holiday_max_daily_hours=rule.school_holiday.max_daily_hours,
        )

    def allowed_categories(self, age_group: AgeGroup) -> frozenset[JobCategory]:
        if age_group == AgeGroup.MINOR_15_17:
            return frozenset(c for c, r in self.categories.items() if r.minors_allowed)
        return frozenset(self.categories)

    def hazards_for(self, age_group: AgeGroup) -> tuple[HazardRule, ...]:
        return tuple(h for h in self.hazards if h.applies_to(age_group))

    def restrictions(self, age_group: AgeGroup) -> tuple[str, ...]:
        return tuple(h.description for h in self.hazards_for(age_group))

    def category_rule(self, category: JobCategory) -> CategoryRule:
        return self.categories[category]
