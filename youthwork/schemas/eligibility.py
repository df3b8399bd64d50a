"""Pydantic schemas for age eligibility."""

from datetime import date
from typing import Any

from pydantic import BaseModel, Field, model_validator

from youthwork.rules.models import AgeGroup, JobCategory, RiskLevel


class EligibilityFilterRead(BaseModel):
    """Listing predicate for an external query layer."""

    minimum_age_lte: int | None = None
    minimum_age_equals: int | None = None
    excluded_categories: list[JobCategory] = Field(default_factory=list)
    query: dict[str, Any] = Field(
        ...,
        description="Plain predicate, e.g. {'minimum_age': {'lte': 16}}",
    )


class EligibilityResponse(BaseModel):
    """What a worker can see now and what unlocks next."""

    age: int
    age_group: AgeGroup
    is_minor: bool
    current_filter: EligibilityFilterRead
    next_threshold_filter: EligibilityFilterRead | None = None
    next_unlock_age: int | None = None
    unlock_message: str = ""
    preparation_tips: list[str] = Field(default_factory=list)


class ClassifyAgeRequest(BaseModel):
    """Classify a worker from an age or a birth date."""

    age: int | None = Field(default=None, examples=[16])
    birth_date: date | None = Field(default=None, examples=["2009-05-14"])

    @model_validator(mode="after")
    def validate_one_source(self) -> "ClassifyAgeRequest":
        """Exactly one of age or birth_date must be given."""
        if (self.age is None) == (self.birth_date is None):
            raise ValueError("Provide exactly one of age or birth_date")
        return self


class WorkerAgeRead(BaseModel):
    """Classified worker age."""

    age: int
    age_group: AgeGroup
    is_minor: bool

    model_config = {"from_attributes": True}


class JobPolicyRequest(BaseModel):
    """Employer's age settings for a new job."""

    category: JobCategory
    requested_minimum_age: int | None = Field(
        default=None,
        description="May raise the category baseline, never lower it",
        examples=[17],
    )
    requested_requires_adult: bool | None = None


class JobPolicyResponse(BaseModel):
    """Age settings a job is published with."""

    risk_category: RiskLevel
    minimum_age: int
    requires_adult_present: bool
    policy_version: str
    was_minimum_age_adjusted: bool
    age_restriction_display: str

    model_config = {"from_attributes": True}
