"""Tests for age eligibility filters and job age policy."""

import pytest

from youthwork.policy.age import OutOfRangeError
from youthwork.policy.eligibility import (
    apply_age_policy_to_job,
    build_age_eligibility_filter,
    can_see_job,
    excluded_categories,
    get_age_restriction_display,
    get_next_age_unlock,
    get_preparation_tips,
    get_unlock_message,
)
from youthwork.rules.models import AgeGroup, JobCategory, RiskLevel

MINOR_EXCLUSIONS = [
    "CONSTRUCTION_HELP",
    "HEAVY_LIFTING",
    "DRIVING",
    "BAR_SERVICE",
    "SECURITY_WORK",
]


class TestNextAgeUnlock:
    """Tests for get_next_age_unlock."""

    @pytest.mark.parametrize(
        "age,expected",
        [(15, 16), (16, 18), (17, 18), (18, None), (19, None), (20, None)],
    )
    def test_next_unlock(self, age: int, expected) -> None:
        """Test the next unlock age for every supported age."""
        assert get_next_age_unlock(age) == expected

    def test_out_of_range(self) -> None:
        """Test that unsupported ages are rejected."""
        with pytest.raises(OutOfRangeError):
            get_next_age_unlock(14)


class TestEligibilityFilter:
    """Tests for build_age_eligibility_filter."""

    def test_minor_current_filter(self) -> None:
        """Test that a 15 year old sees jobs up to 15 minus adult-only categories."""
        result = build_age_eligibility_filter(15)

        assert result.as_query() == {
            "minimum_age": {"lte": 15},
            "category": {"not_in": MINOR_EXCLUSIONS},
        }

    def test_young_adult_current_filter(self) -> None:
        """Test that young adults have no category exclusions."""
        result = build_age_eligibility_filter(18)

        assert result.as_query() == {"minimum_age": {"lte": 18}}
        assert result.excluded_categories == ()

    def test_next_threshold_for_15(self) -> None:
        """Test the preview of jobs unlocking at 16."""
        result = build_age_eligibility_filter(15, for_next_threshold=True)

        assert result.as_query() == {
            "minimum_age": {"equals": 16},
            "category": {"not_in": MINOR_EXCLUSIONS},
        }

    def test_next_threshold_uses_future_age_group(self) -> None:
        """Test that the 18 preview drops the minor exclusions."""
        result = build_age_eligibility_filter(16, for_next_threshold=True)

        assert result.as_query() == {"minimum_age": {"equals": 18}}

    @pytest.mark.parametrize("age", [18, 19, 20])
    def test_no_next_threshold_for_young_adults(self, age: int) -> None:
        """Test that there is nothing left to unlock from 18."""
        assert build_age_eligibility_filter(age, for_next_threshold=True) is None

    @pytest.mark.parametrize("age", range(15, 21))
    def test_exactly_one_age_bound(self, age: int) -> None:
        """Test that each filter sets exactly one minimum age bound."""
        result = build_age_eligibility_filter(age)

        assert result.minimum_age_lte == age
        assert result.minimum_age_equals is None

    @pytest.mark.parametrize("age", [14, 21])
    def test_out_of_range(self, age: int) -> None:
        """Test that unsupported ages are rejected, not clamped."""
        with pytest.raises(OutOfRangeError):
            build_age_eligibility_filter(age)

    def test_excluded_categories_in_enum_order(self) -> None:
        """Test that exclusions come out in a stable order."""
        result = excluded_categories(AgeGroup.MINOR_15_17)

        assert [c.value for c in result] == MINOR_EXCLUSIONS


class TestVisibility:
    """Tests for job visibility helpers."""

    def test_can_see_job(self) -> None:
        """Test the minimum age comparison."""
        assert can_see_job(16, 16) is True
        assert can_see_job(17, 16) is True
        assert can_see_job(15, 16) is False

    def test_restriction_display(self) -> None:
        """Test the badge text."""
        assert get_age_restriction_display(16) == "16+"

    def test_unlock_message_singular(self) -> None:
        """Test the one year message."""
        assert get_unlock_message(16, 15) == "Unlocks in 1 year when you turn 16"

    def test_unlock_message_plural(self) -> None:
        """Test the multi-year message."""
        assert get_unlock_message(18, 15) == "Unlocks in 3 years when you turn 18"

    def test_unlock_message_when_eligible(self) -> None:
        """Test that eligible workers get no message."""
        assert get_unlock_message(16, 17) == ""

    def test_preparation_tips(self) -> None:
        """Test that tips exist for minors only."""
        assert get_preparation_tips(15)
        assert get_preparation_tips(17)
        assert get_preparation_tips(18) == []


class TestJobAgePolicy:
    """Tests for apply_age_policy_to_job."""

    def test_defaults_to_category_baseline(self) -> None:
        """Test a job published without an employer preference."""
        policy = apply_age_policy_to_job(JobCategory.CLEANING)

        assert policy.risk_category == RiskLevel.MEDIUM_RISK
        assert policy.minimum_age == 16
        assert policy.was_minimum_age_adjusted is False
        assert policy.policy_version == "1.0.0"

    def test_request_below_baseline_is_raised(self) -> None:
        """Test that employers cannot lower the minimum age."""
        policy = apply_age_policy_to_job(JobCategory.DRIVING, requested_minimum_age=16)

        assert policy.minimum_age == 18
        assert policy.was_minimum_age_adjusted is True

    def test_request_above_baseline_kept(self) -> None:
        """Test that employers can raise the minimum age."""
        policy = apply_age_policy_to_job(JobCategory.DOG_WALKING, requested_minimum_age=17)

        assert policy.minimum_age == 17
        assert policy.was_minimum_age_adjusted is False

    def test_requires_adult_defaults_from_category(self) -> None:
        """Test the adult-present default and override."""
        assert apply_age_policy_to_job(JobCategory.BABYSITTING).requires_adult_present is True
        assert apply_age_policy_to_job(JobCategory.TUTORING).requires_adult_present is False
        assert apply_age_policy_to_job(
            JobCategory.TUTORING, requested_requires_adult=True
        ).requires_adult_present is True

    def test_out_of_range_request(self) -> None:
        """Test that an unsupported requested age is rejected."""
        with pytest.raises(OutOfRangeError) as exc_info:
            apply_age_policy_to_job(JobCategory.TUTORING, requested_minimum_age=12)

        assert exc_info.value.field == "requested_minimum_age"
