"""User and authentication state models."""

import re

from pydantic import BaseModel, Field

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def normalize_email(email: str | None) -> str:
    """Trim and lowercase an email address."""
    return (email or "").strip().lower()


def is_valid_email(email: str | None) -> bool:
    """Loose syntactic check: something@something.tld, no whitespace."""
    return bool(EMAIL_PATTERN.match(email or ""))


class User(BaseModel):
    """A registered user."""

    id: str
    email: str
    created_at: str | None = Field(default=None, alias="createdAt")

    model_config = {"frozen": True, "populate_by_name": True}


class LoginData(BaseModel):
    """Payload of a successful login."""

    user: User
    token: str
    expires_in: str | None = Field(default=None, alias="expiresIn")

    model_config = {"populate_by_name": True}


class AuthState(BaseModel):
    """Who is signed in, and with which token."""

    is_authenticated: bool = False
    user: User | None = None
    token: str | None = None

    model_config = {"frozen": True}

    @classmethod
    def signed_out(cls) -> "AuthState":
        return cls()

    @classmethod
    def signed_in(cls, user: User, token: str) -> "AuthState":
        return cls(is_authenticated=True, user=user, token=token)

    @property
    def email(self) -> str | None:
        return self.user.email if self.user else None
