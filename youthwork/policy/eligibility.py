"""Age eligibility filters for job listings.

Builds declarative predicates that a listing query executes elsewhere:
jobs a worker can see now, and jobs that open up at the next unlock
threshold. Also derives the minimum age a job is published with.

RULES:
- Employers can raise a job's minimum age, never lower it below the
  category baseline
- Workers under a job's minimum age cannot see or apply to it
"""

from typing import Optional

from youthwork.policy.age import PLATFORM_MINIMUM_AGE, age_group_for, ensure_supported_age
from youthwork.policy.models import AgeEligibilityFilter, JobAgePolicy
from youthwork.rules.models import AgeGroup, JobCategory, RuleTables
from youthwork.rules.tables import get_rule_tables


def excluded_categories(age_group: AgeGroup, tables: Optional[RuleTables] = None) -> tuple[JobCategory, ...]:
    """Categories an age group may not take, in enum order."""
    if tables is None:
        tables = get_rule_tables()
    allowed = tables.allowed_categories(age_group)
    return tuple(c for c in JobCategory if c not in allowed)


def get_next_age_unlock(age: int, tables: Optional[RuleTables] = None) -> Optional[int]:
    """Get the next age at which more listings become visible.

    Args:
        age: Worker's current age (15-20)
        tables: Rule tables (defaults to the process-wide tables)

    Returns:
        Smallest unlock age strictly above ``age``, or None if there is none

    Raises:
        OutOfRangeError: If the age is outside 15-20

    Examples:
        >>> get_next_age_unlock(15)
        16
        >>> get_next_age_unlock(17)
        18
        >>> get_next_age_unlock(20) is None
        True
    """
    ensure_supported_age(age)
    if tables is None:
        tables = get_rule_tables()

    for threshold in tables.unlock_ages:
        if threshold > age:
            return threshold
    return None


def build_age_eligibility_filter(
    age: int,
    for_next_threshold: bool = False,
    tables: Optional[RuleTables] = None,
) -> Optional[AgeEligibilityFilter]:
    """Build the listing predicate for a worker's age.

    The current filter selects jobs with ``minimum_age <= age`` and drops
    categories the worker's age group may not take. The next-threshold
    filter selects jobs whose minimum age is exactly the next unlock age,
    with the exclusions of the group the worker will belong to then.

    Args:
        age: Worker's current age (15-20)
        for_next_threshold: Build the "unlocking next" preview instead
        tables: Rule tables (defaults to the process-wide tables)

    Returns:
        AgeEligibilityFilter, or None for a next-threshold filter when the
        worker has no threshold left

    Raises:
        OutOfRangeError: If the age is outside 15-20
    """
    ensure_supported_age(age)
    if tables is None:
        tables = get_rule_tables()

    if not for_next_threshold:
        return AgeEligibilityFilter(
            minimum_age_lte=age,
            excluded_categories=excluded_categories(age_group_for(age), tables),
        )

    next_age = get_next_age_unlock(age, tables)
    if next_age is None:
        return None

    return AgeEligibilityFilter(
        minimum_age_equals=next_age,
        excluded_categories=excluded_categories(age_group_for(next_age), tables),
    )


def can_see_job(age: int, minimum_age: int) -> bool:
    """Check whether a worker meets a job's minimum age."""
    ensure_supported_age(age)
    ensure_supported_age(minimum_age, "minimum_age")
    return age >= minimum_age


def get_age_restriction_display(minimum_age: int) -> str:
    """Display text for a job's age restriction, e.g. "16+"."""
    ensure_supported_age(minimum_age, "minimum_age")
    return f"{minimum_age}+"


def get_unlock_message(minimum_age: int, current_age: int) -> str:
    """Human-readable unlock message for a job the worker cannot see yet.

    Returns an empty string when the worker is already eligible.
    """
    ensure_supported_age(minimum_age, "minimum_age")
    ensure_supported_age(current_age, "current_age")

    if current_age >= minimum_age:
        return ""

    years = minimum_age - current_age
    if years == 1:
        return f"Unlocks in 1 year when you turn {minimum_age}"
    return f"Unlocks in {years} years when you turn {minimum_age}"


def get_preparation_tips(age: int) -> list[str]:
    """Static advice for growing into the next age bracket."""
    ensure_supported_age(age)

    if age < 16:
        return [
            "Build reliability through small tasks",
            "Practice communication skills",
            "Learn time management",
        ]
    if age < 18:
        return [
            "Gain experience in your current age bracket",
            "Build your profile with completed jobs",
            "Collect positive reviews from employers",
        ]
    return []


def apply_age_policy_to_job(
    category: JobCategory,
    requested_minimum_age: Optional[int] = None,
    requested_requires_adult: Optional[bool] = None,
    tables: Optional[RuleTables] = None,
) -> JobAgePolicy:
    """Derive the age settings a job is published with.

    SAFETY CRITICAL: the minimum age is never lower than the category's
    baseline. A lower request is raised to the baseline and flagged.

    Args:
        category: Job category
        requested_minimum_age: Employer's requested minimum age (15-20)
        requested_requires_adult: Employer's adult-present choice
        tables: Rule tables (defaults to the process-wide tables)

    Returns:
        JobAgePolicy

    Raises:
        OutOfRangeError: If the requested minimum age is outside 15-20
    """
    if tables is None:
        tables = get_rule_tables()

    rule = tables.category_rule(category)
    baseline = max(rule.baseline_min_age, PLATFORM_MINIMUM_AGE)

    if requested_minimum_age is None:
        minimum_age = baseline
        adjusted = False
    else:
        ensure_supported_age(requested_minimum_age, "requested_minimum_age")
        adjusted = requested_minimum_age < baseline
        minimum_age = baseline if adjusted else requested_minimum_age

    requires_adult = (
        rule.requires_adult_present
        if requested_requires_adult is None
        else requested_requires_adult
    )

    return JobAgePolicy(
        risk_category=rule.risk_level,
        minimum_age=minimum_age,
        requires_adult_present=requires_adult,
        policy_version=tables.version,
        was_minimum_age_adjusted=adjusted,
    )
