"""
Authentication utilities - stateless JWT sessions and password hashing.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt

from ..core.exceptions import ExpiredToken, InvalidCredentials, InvalidToken
from ..models import Credential, TokenData
from ..storage.user_storage import UserStorage
from .clock import as_utc, utcnow

logger = logging.getLogger(__name__)

# Bearer token security; a missing header is reported by us as InvalidToken
security = HTTPBearer(auto_error=False)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a hashed password."""
    return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))


def get_password_hash(password: str) -> str:
    """Hash a password."""
    return bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt()).decode('utf-8')


class SessionAuthenticator:
    """
    Issues and validates signed, time-bound bearer tokens.

    Nothing is stored server-side: a token stays valid until it expires.
    The signing key is fixed for the lifetime of the instance, and the
    current time is always passed in by the caller.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expires_delta: timedelta = timedelta(days=7),
    ):
        if not secret_key:
            raise ValueError("secret_key must not be empty")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = expires_delta

    def issue(self, identity: str, now: datetime, email: Optional[str] = None) -> Credential:
        """
        Create a token for ``identity`` valid from ``now`` for ``expires_delta``.

        Args:
            identity: User ID to bind the token to
            now: Issue time
            email: Optional login handle to embed for display purposes

        Returns:
            Credential: Encoded token plus its claims
        """
        issued_at = as_utc(now).replace(microsecond=0)
        expires_at = issued_at + self.expires_delta

        claims = {
            "sub": identity,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
        }
        if email:
            claims["email"] = email

        token = jwt.encode(claims, self._secret_key, algorithm=self.algorithm)
        return Credential(token=token, subject=identity, issued_at=issued_at, expires_at=expires_at)

    def validate(self, token: str, now: datetime) -> TokenData:
        """
        Verify a token's signature and expiry against ``now``.

        Raises:
            InvalidToken: Malformed token, bad signature or missing claims
            ExpiredToken: Token is past its expiry
        """
        try:
            # Expiry is checked below against the injected clock
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.algorithm],
                options={"verify_exp": False, "verify_iat": False},
            )
        except JWTError as e:
            raise InvalidToken() from e

        user_id = payload.get("sub")
        exp = payload.get("exp")
        if not isinstance(user_id, str) or not isinstance(exp, (int, float)):
            raise InvalidToken()

        expires_at = datetime.fromtimestamp(exp, tz=timezone.utc)
        if as_utc(now) >= expires_at:
            raise ExpiredToken()

        iat = payload.get("iat")
        return TokenData(
            user_id=user_id,
            email=payload.get("email"),
            issued_at=datetime.fromtimestamp(iat, tz=timezone.utc) if isinstance(iat, (int, float)) else None,
            expires_at=expires_at,
        )


async def authenticate_user(users: UserStorage, email: str, password: str) -> dict:
    """
    Authenticate a user by email and password.

    Raises:
        InvalidCredentials: Unknown email or wrong password
    """
    user = await users.get_user_by_email(email)
    if user is None or not verify_password(password, user["hashed_password"]):
        raise InvalidCredentials()
    return user


def get_authenticator(request: Request) -> SessionAuthenticator:
    """Dependency returning the authenticator created at startup."""
    return request.app.state.authenticator


async def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    authenticator: SessionAuthenticator = Depends(get_authenticator),
) -> str:
    """
    Dependency to get the current user ID from the bearer token.

    Raises:
        InvalidToken: Missing or invalid token
        ExpiredToken: Token has expired
    """
    if credentials is None:
        raise InvalidToken("Not authenticated")

    token_data = authenticator.validate(credentials.credentials, utcnow())
    return token_data.user_id
