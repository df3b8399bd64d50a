"""Pydantic schemas for compliance validation."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, model_validator

from youthwork.policy.models import JobInput, PayType, Severity
from youthwork.rules.models import AgeGroup, JobCategory


class JobInputSchema(BaseModel):
    """A proposed job listing."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Listing title",
        examples=["Walk our dog after school"],
    )
    category: JobCategory = Field(..., description="Job category")
    description: str = Field(
        default="",
        max_length=5000,
        description="Listing description",
    )
    pay_amount: Decimal = Field(
        ...,
        ge=0,
        description="Pay in NOK: per hour for HOURLY, total for FIXED",
        examples=[150],
    )
    pay_type: PayType = Field(..., description="FIXED or HOURLY")
    duration_minutes: int | None = Field(
        default=None,
        ge=1,
        le=24 * 60,
        description="Expected shift length in minutes",
    )
    start_time: datetime | None = Field(default=None, description="Shift start")
    end_time: datetime | None = Field(default=None, description="Shift end")
    location: str | None = Field(default=None, max_length=200)
    is_school_day: bool = False
    is_school_holiday: bool = False
    requires_working_alone: bool = False
    involves_private_home: bool = False

    @model_validator(mode="after")
    def validate_schedule(self) -> "JobInputSchema":
        """Reject contradictory school flags and inverted shift times."""
        if self.is_school_day and self.is_school_holiday:
            raise ValueError("is_school_day and is_school_holiday are mutually exclusive")

        if self.start_time is not None and self.end_time is not None:
            if (self.start_time.tzinfo is None) != (self.end_time.tzinfo is None):
                raise ValueError(
                    "start_time and end_time must both include a UTC offset or both omit it"
                )
            if self.end_time <= self.start_time:
                raise ValueError("end_time must be after start_time")

        return self

    def to_job_input(self) -> JobInput:
        """Convert to the engine's job value object."""
        return JobInput(
            title=self.title,
            category=self.category,
            description=self.description,
            pay_amount=self.pay_amount,
            pay_type=self.pay_type,
            duration_minutes=self.duration_minutes,
            start_time=self.start_time,
            end_time=self.end_time,
            location=self.location,
            is_school_day=self.is_school_day,
            is_school_holiday=self.is_school_holiday,
            requires_working_alone=self.requires_working_alone,
            involves_private_home=self.involves_private_home,
        )


class ValidateJobRequest(JobInputSchema):
    """Job listing plus an optional worker age to evaluate it for."""

    worker_age: int | None = Field(
        default=None,
        description="Evaluate for this worker as well (15-20)",
        examples=[16],
    )


class ViolationRead(BaseModel):
    """A blocking compliance failure."""

    code: str
    message: str
    severity: Severity
    rule: str
    legal_reference: str | None = None

    model_config = {"from_attributes": True}


class WarningRead(BaseModel):
    """A non-blocking compliance concern."""

    code: str
    message: str
    recommendation: str

    model_config = {"from_attributes": True}


class ComplianceResultRead(BaseModel):
    """Compliance verdict for one age group."""

    compliant: bool
    age_group: AgeGroup
    violations: list[ViolationRead]
    warnings: list[WarningRead]
    suggestions: list[str]
    summary: str

    model_config = {"from_attributes": True}


class ValidationSummaryRead(BaseModel):
    """Roll-up across age groups."""

    can_be_posted: bool
    visible_to: str
    total_violations: int
    total_warnings: int

    model_config = {"from_attributes": True}


class ValidateJobResponse(BaseModel):
    """Job evaluated for every age group."""

    valid: bool
    eligible_age_groups: list[AgeGroup]
    results_for_minors: ComplianceResultRead
    results_for_young_adults: ComplianceResultRead
    summary: ValidationSummaryRead
    result_for_worker: ComplianceResultRead | None = None
    ruleset_version: str


class WorkingHoursWindow(BaseModel):
    """Allowed clock window."""

    earliest: str = Field(..., examples=["06:00"])
    latest: str = Field(..., examples=["20:00"])


class WorkingRules(BaseModel):
    """Resolved limits for one age and school context."""

    allowed_categories: list[JobCategory]
    max_daily_hours: int
    max_weekly_hours: int
    working_hours: WorkingHoursWindow
    min_hourly_wage: float
    rest_between_shifts: int


class SchoolTermLimits(BaseModel):
    """Minor limits during school term."""

    max_weekly_hours: int
    max_daily_hours_school_day: int
    max_daily_hours_non_school_day: int


class SchoolHolidayLimits(BaseModel):
    """Minor limits during school holidays."""

    max_weekly_hours: int
    max_daily_hours: int


class RulesResponse(BaseModel):
    """Read-only dump of the rules for one age and school context."""

    age: int
    age_group: AgeGroup
    is_minor: bool
    ruleset_version: str
    rules: WorkingRules
    restrictions: list[str]
    school_term_limits: SchoolTermLimits | None = None
    school_holiday_limits: SchoolHolidayLimits | None = None
