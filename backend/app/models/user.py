"""
User Model - Defines the account and credential structures.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field

from .profile import Profile


class UserCreate(BaseModel):
    """Registration payload."""
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=72)  # bcrypt limit


class UserLogin(BaseModel):
    """Login payload."""
    email: EmailStr
    password: str


class User(BaseModel):
    """User model as returned to clients."""
    user_id: str
    email: EmailStr
    created_at: datetime
    updated_at: datetime
    is_active: bool = True
    profile: Profile = Field(default_factory=Profile)

    class Config:
        from_attributes = True


class Token(BaseModel):
    """JWT token response model."""
    access_token: str
    token_type: str = "bearer"
    expires_at: Optional[datetime] = None


class TokenData(BaseModel):
    """Token payload data."""
    user_id: str
    email: Optional[str] = None
    issued_at: Optional[datetime] = None
    expires_at: Optional[datetime] = None


class Credential(BaseModel):
    """A signed, time-bound token bound to one identity."""
    token: str
    subject: str
    issued_at: datetime
    expires_at: datetime
