"""
Life-expectancy estimator.

Pure and deterministic: the same profile and the same ``now`` always give the
same Estimate. The model is deliberately simple:

- a fixed baseline of 80 years, with no country or gender weighting;
- additive lifestyle adjustments, each applied at most once;
- a fixed 365-day year for the day arithmetic (no leap-year correction).
"""

from datetime import date, datetime, time, timedelta, timezone

from ..models import Estimate, Lifestyle, Profile
from ..utils.clock import as_utc
from .exceptions import InvalidBirthdate, NonPositiveLifeExpectancy, ProfileIncomplete

BASELINE_YEARS = 80
DAYS_PER_YEAR = 365

LIFESTYLE_ADJUSTMENTS = {
    "smoker": -10,
    "drinker": -5,
    "regular_exercise": 3,
    "healthy_diet": 3,
}


def lifestyle_adjustment(lifestyle: Lifestyle) -> int:
    """Sum of the adjustments for every flag that is set."""
    return sum(
        delta for flag, delta in LIFESTYLE_ADJUSTMENTS.items()
        if getattr(lifestyle, flag)
    )


def adjusted_years(profile: Profile) -> int:
    return BASELINE_YEARS + lifestyle_adjustment(profile.lifestyle)


def days_lived(birthdate: date, now: datetime) -> int:
    """Whole days elapsed since midnight UTC of ``birthdate``."""
    born_at = datetime.combine(birthdate, time.min, tzinfo=timezone.utc)
    elapsed = as_utc(now) - born_at
    if elapsed < timedelta(0):
        raise InvalidBirthdate(f"Birthdate {birthdate.isoformat()} lies in the future")
    return elapsed.days


def estimate_life_expectancy(profile: Profile, now: datetime) -> Estimate:
    """
    Turn a profile into an Estimate at instant ``now``.

    Raises:
        ProfileIncomplete: the profile has no birthdate
        InvalidBirthdate: the birthdate is after ``now``
        NonPositiveLifeExpectancy: lifestyle adjustments leave no years
    """
    if profile.birthdate is None:
        raise ProfileIncomplete()

    years = adjusted_years(profile)
    if years <= 0:
        raise NonPositiveLifeExpectancy(
            f"Adjusted life expectancy is {years} years"
        )

    lived = days_lived(profile.birthdate, now)
    total_days = years * DAYS_PER_YEAR

    return Estimate(
        baseline_years=BASELINE_YEARS,
        adjusted_years=years,
        total_days=total_days,
        days_lived=lived,
        days_remaining=total_days - lived,
        percent_completed=100 * lived / total_days,
        projected_end_date=profile.birthdate + timedelta(days=total_days),
        reference_now=as_utc(now),
    )
