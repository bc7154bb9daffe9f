"""
Estimate Models - Derived life-expectancy numbers, never persisted.
"""

from datetime import date, datetime
from typing import List
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class Estimate(BaseModel):
    """Immutable result of one estimator run."""
    model_config = ConfigDict(frozen=True)

    baseline_years: int
    adjusted_years: int
    total_days: int
    days_lived: int
    days_remaining: int
    percent_completed: float
    projected_end_date: date
    reference_now: datetime


class LifeExpectancyResponse(BaseModel):
    """JSON shape handed to the presentation layer."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    life_expectancy: int
    days_lived: int
    days_remaining: int
    percent_completed: float
    baseline_years: int
    total_days: int
    projected_end_date: date
    reference_now: datetime

    @classmethod
    def from_estimate(cls, estimate: Estimate) -> "LifeExpectancyResponse":
        return cls(
            life_expectancy=estimate.adjusted_years,
            days_lived=estimate.days_lived,
            days_remaining=estimate.days_remaining,
            percent_completed=estimate.percent_completed,
            baseline_years=estimate.baseline_years,
            total_days=estimate.total_days,
            projected_end_date=estimate.projected_end_date,
            reference_now=estimate.reference_now,
        )


class CountdownUnits(BaseModel):
    """Remaining time expressed in several display units."""
    model_config = ConfigDict(frozen=True)

    days: float
    weeks: float
    months: float
    years: float


class CountdownResponse(LifeExpectancyResponse):
    """Life expectancy plus the remaining time in every display unit."""
    remaining: CountdownUnits


class LifestyleTip(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str
    message: str
    potential_years: int


class Milestone(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    title: str
    age: int
    description: str


class InsightsResponse(BaseModel):
    """Lifestyle tips and upcoming life milestones."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    current_age: int
    tips: List[LifestyleTip]
    milestones: List[Milestone]
