"""User domain - accounts and authentication state."""

from .models import (
    EMAIL_PATTERN,
    AuthState,
    LoginData,
    User,
    is_valid_email,
    normalize_email,
)

__all__ = [
    "EMAIL_PATTERN",
    "User",
    "LoginData",
    "AuthState",
    "is_valid_email",
    "normalize_email",
]
