"""
Authentication API endpoints.
"""

import logging
from fastapi import APIRouter, Depends, HTTPException, status

from ..models import User, UserCreate, UserLogin, Token
from ..storage import UserStorage, get_user_storage
from ..utils.auth import (
    SessionAuthenticator,
    authenticate_user,
    get_authenticator,
    get_current_user_id,
    get_password_hash,
)
from ..utils.clock import utcnow

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"])


def _token_for(authenticator: SessionAuthenticator, user: dict) -> Token:
    credential = authenticator.issue(user["user_id"], utcnow(), email=user["email"])
    return Token(access_token=credential.token, expires_at=credential.expires_at)


@router.post("/register", response_model=Token, status_code=status.HTTP_201_CREATED)
async def register(
    user_data: UserCreate,
    users: UserStorage = Depends(get_user_storage),
    authenticator: SessionAuthenticator = Depends(get_authenticator),
):
    """
    Register a new user and log them in.

    Raises:
        DuplicateIdentity: If the email is already registered
    """
    user = await users.create_user(
        email=user_data.email,
        hashed_password=get_password_hash(user_data.password),
    )
    return _token_for(authenticator, user)


@router.post("/login", response_model=Token)
async def login(
    credentials: UserLogin,
    users: UserStorage = Depends(get_user_storage),
    authenticator: SessionAuthenticator = Depends(get_authenticator),
):
    """
    Login and get an access token. Never touches the profile.

    Raises:
        InvalidCredentials: If the email or password is wrong
    """
    user = await authenticate_user(users, credentials.email, credentials.password)
    logger.info(f"User {user['user_id']} logged in")
    return _token_for(authenticator, user)


@router.get("/me", response_model=User)
async def get_current_user(
    user_id: str = Depends(get_current_user_id),
    users: UserStorage = Depends(get_user_storage),
):
    """Get current user information."""
    user = await users.get_user(user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )

    return User(**{k: v for k, v in user.items() if k != 'hashed_password'})
