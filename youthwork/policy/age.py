"""Age classification for the youth program.

Single source of truth for turning a birth date or a raw age into the
age group every other rule is keyed on. Ages outside 15-20 are rejected,
never clamped or reclassified.
"""

from datetime import date
from typing import Optional

from youthwork.policy.models import WorkerAgeInfo
from youthwork.rules.models import AgeGroup
from youthwork.utils.time import today as utc_today

# Platform-wide minimum age (absolute floor)
PLATFORM_MINIMUM_AGE = 15

# Oldest age covered by the youth program
PLATFORM_MAXIMUM_AGE = 20

# Workers from this age are young adults, not minors
ADULT_AGE = 18


class OutOfRangeError(ValueError):
    """Raised when an age falls outside the supported 15-20 range."""

    def __init__(self, age: int, field: str = "age") -> None:
        self.age = age
        self.field = field
        super().__init__(
            f"{field} must be between {PLATFORM_MINIMUM_AGE} and "
            f"{PLATFORM_MAXIMUM_AGE}, got {age}"
        )


def compute_age_years(birth_date: date, today: Optional[date] = None) -> int:
    """Compute age in whole years from a birth date.

    Subtracts years, then one more if this year's birthday hasn't happened
    yet. A 29 February birthday counts from 1 March in non-leap years.

    Args:
        birth_date: Date of birth
        today: Reference date (defaults to today, UTC)

    Returns:
        Age in years
    """
    if today is None:
        today = utc_today()

    age = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        age -= 1

    return age


def ensure_supported_age(age: int, field: str = "age") -> int:
    """Return the age unchanged if it is within 15-20.

    Raises:
        OutOfRangeError: If the age is below 15 or above 20
    """
    if isinstance(age, bool) or not isinstance(age, int):
        raise TypeError(f"{field} must be an integer, got {type(age).__name__}")
    if age < PLATFORM_MINIMUM_AGE or age > PLATFORM_MAXIMUM_AGE:
        raise OutOfRangeError(age, field)
    return age


def age_group_for(age: int) -> AgeGroup:
    """Age group for an age already known to be in range."""
    return AgeGroup.MINOR_15_17 if age < ADULT_AGE else AgeGroup.YOUNG_ADULT_18_20


def classify_age(age: int) -> WorkerAgeInfo:
    """Classify a raw age.

    Args:
        age: Age in whole years

    Returns:
        WorkerAgeInfo with age group and minor flag

    Raises:
        OutOfRangeError: If the age is outside 15-20

    Examples:
        >>> classify_age(16).age_group
        <AgeGroup.MINOR_15_17: 'MINOR_15_17'>
        >>> classify_age(18).is_minor
        False
    """
    ensure_supported_age(age)
    return WorkerAgeInfo(
        age=age,
        age_group=age_group_for(age),
        is_minor=age < ADULT_AGE,
    )


def classify_birth_date(birth_date: date, today: Optional[date] = None) -> WorkerAgeInfo:
    """Classify a worker from their date of birth.

    Raises:
        OutOfRangeError: If the computed age is outside 15-20
    """
    age = compute_age_years(birth_date, today)
    if age < PLATFORM_MINIMUM_AGE or age > PLATFORM_MAXIMUM_AGE:
        raise OutOfRangeError(age, "birth_date")
    return classify_age(age)


def representative_age(age_group: AgeGroup) -> int:
    """Lowest age in an age group."""
    if age_group == AgeGroup.MINOR_15_17:
        return PLATFORM_MINIMUM_AGE
    return ADULT_AGE
