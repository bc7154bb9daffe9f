"""Models module."""

from .user import User, UserCreate, UserLogin, Token, TokenData, Credential
from .profile import Gender, Lifestyle, Profile, LifestyleUpdate, ProfileUpdate
from .estimate import (
    Estimate, LifeExpectancyResponse, CountdownUnits, CountdownResponse,
    LifestyleTip, Milestone, InsightsResponse,
)

__all__ = [
    'User', 'UserCreate', 'UserLogin', 'Token', 'TokenData', 'Credential',
    'Gender', 'Lifestyle', 'Profile', 'LifestyleUpdate', 'ProfileUpdate',
    'Estimate', 'LifeExpectancyResponse', 'CountdownUnits', 'CountdownResponse',
    'LifestyleTip', 'Milestone', 'InsightsResponse',
]
