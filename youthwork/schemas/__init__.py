"""Pydantic schemas for request/response validation."""

from youthwork.schemas.compliance import (
    ComplianceResultRead,
    JobInputSchema,
    RulesResponse,
    ValidateJobRequest,
    ValidateJobResponse,
)
from youthwork.schemas.eligibility import (
    ClassifyAgeRequest,
    EligibilityFilterRead,
    EligibilityResponse,
    JobPolicyRequest,
    JobPolicyResponse,
    WorkerAgeRead,
)

__all__ = [
    "JobInputSchema",
    "ValidateJobRequest",
    "ValidateJobResponse",
    "ComplianceResultRead",
    "RulesResponse",
    "ClassifyAgeRequest",
    "EligibilityFilterRead",
    "EligibilityResponse",
    "JobPolicyRequest",
    "JobPolicyResponse",
    "WorkerAgeRead",
]
