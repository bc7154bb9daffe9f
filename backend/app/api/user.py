"""
User API endpoints - profile, life expectancy, countdown and insights.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, status

from ..core import build_insights, convert_units, estimate_life_expectancy
from ..core.exceptions import ProfileIncomplete
from ..core.logging_config import LoggerAdapter
from ..models import (
    CountdownResponse,
    Estimate,
    InsightsResponse,
    LifeExpectancyResponse,
    Profile,
    ProfileUpdate,
)
from ..storage import UserStorage, get_user_storage
from ..utils.auth import get_current_user_id
from ..utils.clock import utcnow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/user", tags=["user"])


async def _load_profile(users: UserStorage, user_id: str) -> Profile:
    profile = await users.get_profile(user_id)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return profile


async def _estimate(users: UserStorage, user_id: str) -> tuple[Profile, Estimate]:
    """Load the profile and estimate it at the current wall-clock time."""
    log = LoggerAdapter(logger, {"user_id": user_id})

    profile = await _load_profile(users, user_id)
    try:
        estimate = estimate_life_expectancy(profile, utcnow())
    except ProfileIncomplete:
        log.info("Estimate requested for incomplete profile")
        raise

    log.debug(
        f"Estimate: {estimate.adjusted_years} years, {estimate.days_remaining} days remaining"
    )
    return profile, estimate


@router.get("/profile", response_model=Profile)
async def get_profile(
    user_id: str = Depends(get_current_user_id),
    users: UserStorage = Depends(get_user_storage),
):
    """Get the current user's profile. Partial profiles are returned as-is."""
    return await _load_profile(users, user_id)


@router.put("/profile", response_model=Profile)
async def update_profile(
    profile_update: ProfileUpdate,
    user_id: str = Depends(get_current_user_id),
    users: UserStorage = Depends(get_user_storage),
):
    """
    Update the current user's profile.

    Omitted fields keep their stored value; lifestyle flags merge one by one.
    """
    profile = await users.put_profile(user_id, profile_update)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return profile


@router.get("/life-expectancy", response_model=LifeExpectancyResponse)
async def get_life_expectancy(
    user_id: str = Depends(get_current_user_id),
    users: UserStorage = Depends(get_user_storage),
):
    """
    Estimate the current user's life expectancy.

    Raises:
        ProfileIncomplete: No birthdate on the profile
        InvalidBirthdate: Birthdate is in the future
        NonPositiveLifeExpectancy: Lifestyle adjustments leave no years
    """
    _, estimate = await _estimate(users, user_id)
    return LifeExpectancyResponse.from_estimate(estimate)


@router.get("/countdown", response_model=CountdownResponse)
async def get_countdown(
    user_id: str = Depends(get_current_user_id),
    users: UserStorage = Depends(get_user_storage),
):
    """Life expectancy plus the remaining time in days, weeks, months and years."""
    _, estimate = await _estimate(users, user_id)
    return CountdownResponse(
        **LifeExpectancyResponse.from_estimate(estimate).model_dump(),
        remaining=convert_units(estimate.days_remaining),
    )


@router.get("/insights", response_model=InsightsResponse)
async def get_insights(
    user_id: str = Depends(get_current_user_id),
    users: UserStorage = Depends(get_user_storage),
):
    """Lifestyle tips and upcoming milestones for the current user."""
    profile, estimate = await _estimate(users, user_id)
    return build_insights(profile, estimate)
