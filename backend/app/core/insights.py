"""
Lifestyle tips and life milestones derived from a profile and its estimate.
"""

from typing import List

from ..models import Estimate, InsightsResponse, LifestyleTip, Milestone, Profile
from .estimator import DAYS_PER_YEAR, LIFESTYLE_ADJUSTMENTS

GOLDEN_YEARS_FRACTION = 0.75


def lifestyle_tips(profile: Profile) -> List[LifestyleTip]:
    """Suggestions for every lifestyle flag that currently costs years."""
    lifestyle = profile.lifestyle
    tips = []

    if not lifestyle.regular_exercise:
        tips.append(LifestyleTip(
            title="Exercise More",
            message="Regular exercise could add years to your life expectancy.",
            potential_years=LIFESTYLE_ADJUSTMENTS["regular_exercise"],
        ))
    if lifestyle.smoker:
        tips.append(LifestyleTip(
            title="Quit Smoking",
            message="Quitting smoking could add up to 10 years to your life expectancy.",
            potential_years=-LIFESTYLE_ADJUSTMENTS["smoker"],
        ))
    if not lifestyle.healthy_diet:
        tips.append(LifestyleTip(
            title="Improve Diet",
            message="A balanced diet can significantly increase your life expectancy.",
            potential_years=LIFESTYLE_ADJUSTMENTS["healthy_diet"],
        ))

    return tips


def milestones(estimate: Estimate) -> List[Milestone]:
    age = estimate.days_lived // DAYS_PER_YEAR
    return [
        Milestone(title="5 Years", age=age + 5, description="Focus on preventive health"),
        Milestone(title="10 Years", age=age + 10, description="Key health screening decade"),
        Milestone(
            title="Golden Years",
            age=int(estimate.adjusted_years * GOLDEN_YEARS_FRACTION),
            description="Retirement planning phase",
        ),
    ]


def build_insights(profile: Profile, estimate: Estimate) -> InsightsResponse:
    return InsightsResponse(
        current_age=estimate.days_lived // DAYS_PER_YEAR,
        tips=lifestyle_tips(profile),
        milestones=milestones(estimate),
    )
