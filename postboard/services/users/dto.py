"""
DTOs for UserService.

Data Transfer Objects isolate the service layer from ORM models. Output DTOs
never carry the password hash or the refresh-token list.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from postboard.models.user import User

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserCreateIn:
    """
    Input DTO for user creation.

    :param username: Display name.
    :type username: str | None
    :param email: Login email (normalized by the model).
    :type email: str | None
    :param password: Raw password to be hashed by the model.
    :type password: str | None
    """

    username: str | None
    email: str | None
    password: str | None


@dataclass(frozen=True, slots=True)
class UserUpdateIn:
    """
    Input DTO for partial user updates. ``None`` means "leave unchanged".

    A new ``password`` invalidates every session of the user.
    """

    username: str | None = None
    email: str | None = None
    password: str | None = None


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class UserPublicOut:
    """Public-safe view of a user."""

    id: int
    username: str
    email: str
    created_at: datetime | None = None

    @classmethod
    def from_model(cls, user: User) -> UserPublicOut:
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            created_at=user.created_at,
        )
