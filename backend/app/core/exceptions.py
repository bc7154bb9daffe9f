"""
Domain errors for Lifeclock.

Every error carries the HTTP status it maps to and a stable ``code`` so
clients can tell "log in again" apart from "complete your profile" and
"fix your birthdate".
"""

from fastapi import status


class LifeclockError(Exception):
    """Base class for all Lifeclock errors."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    code: str = "lifeclock_error"
    default_detail: str = "Unexpected error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


# Authentication

class AuthError(LifeclockError):
    """Authentication failed."""
    status_code = status.HTTP_401_UNAUTHORIZED
    code = "auth_error"
    default_detail = "Could not validate credentials"


class InvalidToken(AuthError):
    code = "invalid_token"
    default_detail = "Invalid or missing token"


class ExpiredToken(AuthError):
    code = "expired_token"
    default_detail = "Token has expired"


class InvalidCredentials(AuthError):
    code = "invalid_credentials"
    default_detail = "Incorrect email or password"


class DuplicateIdentity(AuthError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "duplicate_identity"
    default_detail = "Email already registered"


# Profile

class ProfileError(LifeclockError):
    status_code = status.HTTP_400_BAD_REQUEST
    code = "profile_error"
    default_detail = "Profile cannot be used for an estimate"


class ProfileIncomplete(ProfileError):
    code = "profile_incomplete"
    default_detail = "Profile information incomplete"


class InvalidBirthdate(ProfileError):
    status_code = 422  # Unprocessable Content
    code = "invalid_birthdate"
    default_detail = "Birthdate lies in the future"


# Calculation

class CalculationError(LifeclockError):
    status_code = 422  # Unprocessable Content
    code = "calculation_error"
    default_detail = "Estimate could not be calculated"


class NonPositiveLifeExpectancy(CalculationError):
    code = "non_positive_life_expectancy"
    default_detail = "Adjusted life expectancy is not positive"


# Storage

class StoreError(LifeclockError):
    """Opaque failure of the profile store."""
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    code = "store_error"
    default_detail = "Profile store unavailable"


# Countdown (client-side)

class CountdownStateError(LifeclockError):
    """Illegal countdown state transition."""
    status_code = status.HTTP_409_CONFLICT
    code = "countdown_state_error"
    default_detail = "Countdown is already fetching"


ERRORS_BY_CODE = {
    cls.code: cls
    for cls in (
        InvalidToken, ExpiredToken, InvalidCredentials, DuplicateIdentity,
        ProfileIncomplete, InvalidBirthdate, NonPositiveLifeExpectancy,
        StoreError, CountdownStateError,
    )
}
