# postboard/services/auth/dto.py
from __future__ import annotations

from dataclasses import dataclass

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for registration. Fields stay optional so the service can report
    every missing one at once.

    :param username: Display name.
    :type username: str | None
    :param email: Login email.
    :type email: str | None
    :param password: Raw password (hashed by the model).
    :type password: str | None
    """

    username: str | None
    email: str | None
    password: str | None


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email.
    :type email: str | None
    :param password: Raw password (to be verified).
    :type password: str | None
    """

    email: str | None
    password: str | None


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for token refresh and logout.

    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str | None
    """

    refresh_token: str | None


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPairOut:
    """
    Output DTO with access and refresh tokens.

    :param access_token: Encoded access JWT.
    :type access_token: str
    :param refresh_token: Encoded refresh JWT.
    :type refresh_token: str
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class LoginOut:
    """Token pair plus the id of the authenticated user."""

    id: int
    access_token: str
    refresh_token: str
