"""
Unit tests for the life-expectancy estimator.
"""

from datetime import date, datetime, timedelta, timezone
from itertools import product

import pytest
from pydantic import ValidationError

from app.core import estimator
from app.core.estimator import estimate_life_expectancy, lifestyle_adjustment
from app.core.exceptions import InvalidBirthdate, NonPositiveLifeExpectancy, ProfileIncomplete
from app.models import Lifestyle, Profile

from .factories import BIRTHDATE, BORN_AT, days_after_birth, make_profile


class TestBaseline:
    """Tests for the fixed-baseline example profile."""

    def test_thirty_years_no_flags(self):
        estimate = estimate_life_expectancy(make_profile(), days_after_birth(10950, hours=12))

        assert estimate.baseline_years == 80
        assert estimate.adjusted_years == 80
        assert estimate.total_days == 29200
        assert estimate.days_lived == 10950
        assert estimate.days_remaining == 18250
        assert estimate.percent_completed == pytest.approx(37.5)

    def test_projected_end_date_uses_calendar_days(self):
        estimate = estimate_life_expectancy(make_profile(), days_after_birth(100))
        assert estimate.projected_end_date == BIRTHDATE + timedelta(days=29200)
        assert estimate.projected_end_date == date(2069, 12, 12)

    def test_gender_and_body_fields_are_ignored(self):
        plain = estimate_life_expectancy(make_profile(), days_after_birth(5000))
        detailed = estimate_life_expectancy(
            Profile(birthdate=BIRTHDATE, gender="female", height=170, weight=60, nationality="JP"),
            days_after_birth(5000),
        )
        assert plain == detailed


class TestLifestyleAdjustments:
    """Tests for additive lifestyle deltas."""

    def test_smoker_only(self):
        estimate = estimate_life_expectancy(make_profile(smoker=True), days_after_birth(1))
        assert estimate.adjusted_years == estimate.baseline_years - 10

    def test_drinker_only(self):
        estimate = estimate_life_expectancy(make_profile(drinker=True), days_after_birth(1))
        assert estimate.adjusted_years == 75

    def test_healthy_habits(self):
        estimate = estimate_life_expectancy(
            make_profile(regular_exercise=True, healthy_diet=True), days_after_birth(1)
        )
        assert estimate.adjusted_years == 86

    def test_all_flags(self):
        lifestyle = Lifestyle(smoker=True, drinker=True, regular_exercise=True, healthy_diet=True)
        assert lifestyle_adjustment(lifestyle) == -9

        estimate = estimate_life_expectancy(
            Profile(birthdate=BIRTHDATE, lifestyle=lifestyle), days_after_birth(1)
        )
        assert estimate.adjusted_years == 71

    @pytest.mark.parametrize("flags", list(product([False, True], repeat=4)))
    def test_days_remaining_is_exact(self, flags):
        smoker, drinker, exercise, diet = flags
        profile = make_profile(
            smoker=smoker, drinker=drinker, regular_exercise=exercise, healthy_diet=diet
        )
        estimate = estimate_life_expectancy(profile, days_after_birth(12345, hours=7))

        assert estimate.days_remaining == estimate.adjusted_years * 365 - estimate.days_lived
        assert estimate.percent_completed == 100 * estimate.days_lived / (estimate.adjusted_years * 365)

    def test_non_positive_life_expectancy_is_an_error(self, monkeypatch):
        monkeypatch.setitem(estimator.LIFESTYLE_ADJUSTMENTS, "smoker", -80)
        with pytest.raises(NonPositiveLifeExpectancy):
            estimate_life_expectancy(make_profile(smoker=True), days_after_birth(1))


class TestBoundaries:
    """Tests for edge cases of the day arithmetic."""

    def test_birthdate_equals_now(self):
        estimate = estimate_life_expectancy(make_profile(), BORN_AT)
        assert estimate.days_lived == 0
        assert estimate.percent_completed == 0

    def test_later_on_birth_day_is_still_day_zero(self):
        estimate = estimate_life_expectancy(make_profile(), days_after_birth(0, hours=23))
        assert estimate.days_lived == 0

    def test_future_birthdate(self):
        with pytest.raises(InvalidBirthdate):
            estimate_life_expectancy(make_profile(), BORN_AT - timedelta(seconds=1))

    def test_missing_birthdate(self):
        with pytest.raises(ProfileIncomplete):
            estimate_life_expectancy(Profile(), days_after_birth(1))

    def test_outliving_the_estimate_is_not_clamped(self):
        profile = make_profile(smoker=True, drinker=True)  # 65 years
        estimate = estimate_life_expectancy(profile, days_after_birth(70 * 365))

        assert estimate.days_remaining == -5 * 365
        assert estimate.percent_completed > 100

    def test_naive_now_is_treated_as_utc(self):
        naive = estimate_life_expectancy(make_profile(), datetime(2000, 1, 1, 6))
        aware = estimate_life_expectancy(make_profile(), datetime(2000, 1, 1, 6, tzinfo=timezone.utc))
        assert naive == aware

    def test_other_timezones_are_normalized(self):
        tz = timezone(timedelta(hours=-5))
        # 20:00 at UTC-5 is already the next day in UTC
        estimate = estimate_life_expectancy(make_profile(), datetime(1990, 1, 1, 20, tzinfo=tz))
        assert estimate.days_lived == 1
        assert estimate.reference_now.tzinfo == timezone.utc


class TestDeterminism:

    def test_same_input_same_output(self):
        now = days_after_birth(9999, hours=3)
        first = estimate_life_expectancy(make_profile(smoker=True), now)
        second = estimate_life_expectancy(make_profile(smoker=True), now)

        assert first == second
        assert first.model_dump_json() == second.model_dump_json()

    def test_estimate_is_immutable(self):
        estimate = estimate_life_expectancy(make_profile(), days_after_birth(1))
        with pytest.raises(ValidationError):
            estimate.days_remaining = 0
