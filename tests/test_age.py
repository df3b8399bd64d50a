"""Tests for worker age classification."""

from datetime import date

import pytest

from youthwork.policy.age import (
    OutOfRangeError,
    classify_age,
    classify_birth_date,
    compute_age_years,
)
from youthwork.rules.models import AgeGroup


class TestClassifyAge:
    """Tests for classify_age."""

    @pytest.mark.parametrize("age", range(15, 21))
    def test_is_minor_iff_under_18(self, age: int) -> None:
        """Test that is_minor matches age < 18 across the whole range."""
        assert classify_age(age).is_minor == (age < 18)

    @pytest.mark.parametrize("age", [15, 16, 17])
    def test_minor_age_group(self, age: int) -> None:
        """Test that 15-17 year olds are minors."""
        info = classify_age(age)

        assert info.age == age
        assert info.age_group == AgeGroup.MINOR_15_17

    @pytest.mark.parametrize("age", [18, 19, 20])
    def test_young_adult_age_group(self, age: int) -> None:
        """Test that 18-20 year olds are young adults."""
        assert classify_age(age).age_group == AgeGroup.YOUNG_ADULT_18_20

    @pytest.mark.parametrize("age", [-1, 0, 14, 21, 35])
    def test_out_of_range_rejected(self, age: int) -> None:
        """Test that ages outside 15-20 are rejected, not clamped."""
        with pytest.raises(OutOfRangeError) as exc_info:
            classify_age(age)

        assert exc_info.value.age == age
        assert exc_info.value.field == "age"

    def test_out_of_range_is_value_error(self) -> None:
        """Test that OutOfRangeError can be handled as a ValueError."""
        with pytest.raises(ValueError):
            classify_age(21)

    def test_bool_is_not_an_age(self) -> None:
        """Test that booleans are not accepted as ages."""
        with pytest.raises(TypeError):
            classify_age(True)


class TestComputeAgeYears:
    """Tests for whole-year age computation."""

    def test_on_birthday(self) -> None:
        """Test that the age increments on the birthday itself."""
        assert compute_age_years(date(2009, 6, 15), today=date(2025, 6, 15)) == 16

    def test_day_before_birthday(self) -> None:
        """Test the month/day correction before the birthday."""
        assert compute_age_years(date(2009, 6, 15), today=date(2025, 6, 14)) == 15

    def test_earlier_month(self) -> None:
        """Test that an earlier month still counts as before the birthday."""
        assert compute_age_years(date(2009, 6, 15), today=date(2025, 5, 30)) == 15

    def test_leap_day_birthday(self) -> None:
        """Test that a 29 February birthday counts from 1 March in non-leap years."""
        born = date(2008, 2, 29)

        assert compute_age_years(born, today=date(2025, 2, 28)) == 16
        assert compute_age_years(born, today=date(2025, 3, 1)) == 17

    def test_defaults_to_today(self) -> None:
        """Test that omitting today uses the current date."""
        born = date(date.today().year - 30, 1, 1)

        assert compute_age_years(born) in (29, 30)


class TestClassifyBirthDate:
    """Tests for classify_birth_date."""

    def test_minor_from_birth_date(self) -> None:
        """Test classifying a 16 year old from a birth date."""
        info = classify_birth_date(date(2009, 1, 10), today=date(2025, 9, 1))

        assert info.age == 16
        assert info.is_minor is True

    def test_young_adult_from_birth_date(self) -> None:
        """Test classifying a 19 year old from a birth date."""
        info = classify_birth_date(date(2006, 1, 10), today=date(2025, 9, 1))

        assert info.age_group == AgeGroup.YOUNG_ADULT_18_20

    def test_too_young_reports_birth_date_field(self) -> None:
        """Test that an out-of-range birth date names the birth_date field."""
        with pytest.raises(OutOfRangeError) as exc_info:
            classify_birth_date(date(2012, 1, 1), today=date(2025, 9, 1))

        assert exc_info.value.age == 13
        assert exc_info.value.field == "birth_date"
