"""User and login models."""

import re
from typing import Optional

from pydantic import ConfigDict, Field, field_validator

from ticktock.models.base import BaseDataModel

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


class Principal(BaseDataModel):
    """The authenticated user attached to a session."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., min_length=1)
    name: str
    email: str


class LoginCredentials(BaseDataModel):
    """Login form payload.

    Example:
        >>> LoginCredentials(email="test@example.com", password="password123").email
        'test@example.com'
    """

    model_config = ConfigDict(extra="ignore")

    email: str
    password: str
    remember_me: Optional[bool] = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Require a well-formed email address."""
        v = v.strip()
        if not v:
            raise ValueError("Email is required")
        if not EMAIL_PATTERN.match(v):
            raise ValueError("Please enter a valid email address")
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        """Require a password of at least six characters."""
        if not v:
            raise ValueError("Password is required")
        if len(v) < 6:
            raise ValueError("Password must be at least 6 characters long")
        return v
