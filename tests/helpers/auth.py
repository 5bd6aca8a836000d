"""Authentication helpers for tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt as pyjwt
from flask_jwt_extended import create_access_token


def issue_token(identity: int, expires_delta: timedelta | None = None) -> str:
    """Generate an access token for ``identity``.

    Parameters
    ----------
    identity:
        User id to encode as the subject.
    expires_delta:
        Optional expiry delta. If ``None``, the configured lifetime is used.
    """

    return create_access_token(identity=str(identity), expires_delta=expires_delta)


def expired_token(identity: int) -> str:
    """Return an already expired access token for ``identity``."""

    return create_access_token(identity=str(identity), expires_delta=timedelta(seconds=-1))


def forged_token(identity: int, *, secret: str = "not-the-server-secret", kind: str = "access") -> str:
    """Return a well-formed token signed with a secret the server does not use."""

    now = datetime.now(UTC)
    payload = {
        "sub": str(identity),
        "type": kind,
        "jti": "forged",
        "iat": now,
        "nbf": now,
        "exp": now + timedelta(minutes=5),
    }
    return pyjwt.encode(payload, secret, algorithm="HS256")


def bearer(token: str) -> dict[str, str]:
    """Authorization header carrying ``token``."""

    return {"Authorization": f"Bearer {token}"}
