"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and never import Flask or HTTP
helpers. They are the stable contract between repositories, the token codec
and application services.

The translation to HTTP responses (RFC 7807) is handled by
``postboard/core/errors.py`` through :func:`translate_service_error`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError


def violates(exc: IntegrityError, constraint_name: str) -> bool:
    """
    Check whether an IntegrityError originates from a specific constraint.

    SQLite reports the offending column instead of the constraint name, so the
    column suffix of the constraint (``uq_users_email`` -> ``users.email``) is
    matched as well.

    :param exc: The exception raised by SQLAlchemy during flush/commit.
    :param constraint_name: Name of the database constraint (e.g. ``uq_users_email``).
    :returns: True if the IntegrityError matches the given constraint.
    """
    message = str(exc.orig).lower() if exc.orig else ""
    if constraint_name.lower() in message:
        return True
    _, _, rest = constraint_name.lower().partition("_")
    table, _, column = rest.partition("_")
    return bool(column) and f"{table}.{column}" in message


# --------------------------------------------------------------------------- #
# Base types
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - The HTTP boundary translates them to problem responses.
    """


# --------------------------------------------------------------------------- #
# Input / lookup errors
# --------------------------------------------------------------------------- #


class ValidationError(ServiceError):
    """
    Raised when required input fields are absent or blank.

    :param fields: Names of the missing fields, in request order.
    """

    def __init__(self, fields: Sequence[str], message: str | None = None) -> None:
        self.fields = tuple(fields)
        super().__init__(message or f"Missing required field(s): {', '.join(self.fields)}")


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found in the repository.

    :param entity: Entity name (e.g., "Post").
    :param key: Identifier or search key.
    """

    entity: str
    key: str | int

    def __str__(self) -> str:
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint or business rule conflict occurs.

    :param entity: Entity name (e.g., "User").
    :param detail: Short human-readable explanation.
    """

    entity: str
    detail: str

    def __str__(self) -> str:
        return f"Conflict on {self.entity}: {self.detail}"


class DuplicateUserError(ConflictError):
    """Raised when registering an email that already belongs to a user."""

    def __init__(self) -> None:
        super().__init__("User", "User already exists")

    def __str__(self) -> str:
        return "User already exists"


# --------------------------------------------------------------------------- #
# Session errors
# --------------------------------------------------------------------------- #


class InvalidCredentialsError(ServiceError):
    """Unknown email or wrong password. Both causes share this one error."""

    def __init__(self) -> None:
        super().__init__("Invalid email or password")


class MissingTokenError(ServiceError):
    """
    Raised when a refresh token is required but was not supplied.

    :param authentication_required: ``True`` when the caller must authenticate
        to continue (refresh), ``False`` for a plain bad request (logout).
    """

    def __init__(self, *, authentication_required: bool = False) -> None:
        self.authentication_required = authentication_required
        super().__init__("Refresh token required")


class InvalidRefreshTokenError(ServiceError):
    """Bad signature, expiry, or detected reuse. Causes are never distinguished."""

    def __init__(self) -> None:
        super().__init__("Invalid refresh token")


class UserNotFoundError(ServiceError):
    """A verified refresh token references a user that no longer exists."""

    def __init__(self) -> None:
        super().__init__("User not found")


class SessionConflictError(ServiceError):
    """Concurrent writes kept invalidating a refresh-token list update."""

    def __init__(self) -> None:
        super().__init__("Session state changed concurrently; retry the request")


# --------------------------------------------------------------------------- #
# Token codec errors
# --------------------------------------------------------------------------- #


class TokenError(ServiceError):
    """Base class for token verification failures."""


class InvalidTokenSignatureError(TokenError):
    """Tampered, malformed, wrongly signed, or wrong-kind token."""


class TokenExpiredError(TokenError):
    """Authentic token whose expiry has passed."""
