"""Youth labour policy engine.

Pure functions over the rule tables: age classification, job compliance
evaluation and age eligibility filters. Nothing here performs I/O.
"""

from youthwork.policy.age import (
    ADULT_AGE,
    PLATFORM_MAXIMUM_AGE,
    PLATFORM_MINIMUM_AGE,
    OutOfRangeError,
    classify_age,
    classify_birth_date,
    compute_age_years,
)
from youthwork.policy.compliance import (
    classify_eligible_age_groups,
    evaluate_for_all_age_groups,
    format_compliance_report,
    validate_job_compliance,
)
from youthwork.policy.eligibility import (
    apply_age_policy_to_job,
    build_age_eligibility_filter,
    can_see_job,
    get_age_restriction_display,
    get_next_age_unlock,
    get_preparation_tips,
    get_unlock_message,
)
from youthwork.policy.models import (
    AgeEligibilityFilter,
    ComplianceResult,
    ComplianceWarning,
    JobAgePolicy,
    JobInput,
    JobValidation,
    PayType,
    Severity,
    Violation,
    WorkerAgeInfo,
)

__all__ = [
    "ADULT_AGE",
    "PLATFORM_MAXIMUM_AGE",
    "PLATFORM_MINIMUM_AGE",
    "OutOfRangeError",
    "classify_age",
    "classify_birth_date",
    "compute_age_years",
    "classify_eligible_age_groups",
    "evaluate_for_all_age_groups",
    "format_compliance_report",
    "validate_job_compliance",
    "apply_age_policy_to_job",
    "build_age_eligibility_filter",
    "can_see_job",
    "get_age_restriction_display",
    "get_next_age_unlock",
    "get_preparation_tips",
    "get_unlock_message",
    "AgeEligibilityFilter",
    "ComplianceResult",
    "ComplianceWarning",
    "JobAgePolicy",
    "JobInput",
    "JobValidation",
    "PayType",
    "Severity",
    "Violation",
    "WorkerAgeInfo",
]
