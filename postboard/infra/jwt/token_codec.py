# postboard/infra/jwt/token_codec.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any, cast
from uuid import uuid4

import jwt as pyjwt
from flask import current_app
from flask_jwt_extended.exceptions import JWTExtendedException

from postboard.services._shared.errors import InvalidTokenSignatureError, TokenExpiredError
from postboard.services._shared.ports import TokenClaims, TokenCodec, TokenKind


@dataclass(slots=True)
class JWTTokenCodec(TokenCodec):
    """
    Issue and verify HMAC-signed session tokens.

    Access tokens go through Flask-JWT-Extended so the request gate
    (``verify_jwt_in_request``) accepts them as-is; they are signed with
    ``JWT_SECRET_KEY``. Refresh tokens are signed with the independent
    ``JWT_REFRESH_SECRET_KEY`` through PyJWT, since Flask-JWT-Extended signs
    every token type with one key.

    .. note::
       Access-token helpers require an active Flask app context.
    """

    refresh_secret: str
    access_ttl: timedelta = timedelta(minutes=15)
    refresh_ttl: timedelta = timedelta(days=7)
    algorithm: str = "HS256"

    @classmethod
    def from_config(cls, config: Mapping[str, Any] | None = None) -> JWTTokenCodec:
        """Build a codec from the Flask config (the current app's by default)."""
        cfg = config if config is not None else current_app.config
        return cls(
            refresh_secret=cfg["JWT_REFRESH_SECRET_KEY"],
            access_ttl=cfg["JWT_ACCESS_TOKEN_EXPIRES"],
            refresh_ttl=cfg["JWT_REFRESH_TOKEN_EXPIRES"],
            algorithm=cfg.get("JWT_ALGORITHM", "HS256"),
        )

    # ------------------------------ Issuing ---------------------------------

    def issue_access_token(self, user_id: int) -> str:
        from flask_jwt_extended import create_access_token

        # Flask-JWT-Extended already adds a random jti.
        return cast(str, create_access_token(identity=str(user_id), expires_delta=self.access_ttl))

    def issue_refresh_token(self, user_id: int) -> str:
        now = datetime.now(UTC)
        payload = {
            "sub": str(user_id),
            "type": "refresh",
            "jti": str(uuid4()),
            "iat": now,
            "exp": now + self.refresh_ttl,
        }
        return pyjwt.encode(payload, self.refresh_secret, algorithm=self.algorithm)

    # ----------------------------- Verifying --------------------------------

    def verify(self, token: str, kind: TokenKind, *, allow_expired: bool = False) -> TokenClaims:
        """
        Verify ``token`` as a token of ``kind`` and return its claims.

        :param token: Serialized token.
        :param kind: Expected kind; selects the secret.
        :param allow_expired: Accept an authentic token past its expiry.
        :raises TokenExpiredError: If the token is authentic but expired.
        :raises InvalidTokenSignatureError: For any other verification failure.
        """
        if kind == "access":
            payload = self._decode_access(token, allow_expired=allow_expired)
        else:
            payload = self._decode_refresh(token, allow_expired=allow_expired)

        if payload.get("type") != kind:
            raise InvalidTokenSignatureError(f"Expected a {kind} token")
        try:
            subject = int(payload["sub"])
            expires_at = datetime.fromtimestamp(int(payload["exp"]), tz=UTC)
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidTokenSignatureError("Malformed token claims") from exc
        return TokenClaims(subject=subject, kind=kind, expires_at=expires_at)

    def _decode_access(self, token: str, *, allow_expired: bool) -> dict[str, Any]:
        from flask_jwt_extended import decode_token

        try:
            return cast(dict[str, Any], decode_token(token, allow_expired=allow_expired))
        except pyjwt.ExpiredSignatureError as exc:
            raise TokenExpiredError("Token expired") from exc
        except (pyjwt.InvalidTokenError, JWTExtendedException) as exc:
            raise InvalidTokenSignatureError("Invalid token") from exc

    def _decode_refresh(self, token: str, *, allow_expired: bool) -> dict[str, Any]:
        try:
            return cast(
                dict[str, Any],
                pyjwt.decode(
                    token,
                    self.refresh_secret,
                    algorithms=[self.algorithm],
                    options={"verify_exp": not allow_expired, "require": ["exp", "sub"]},
                ),
            )
        except pyjwt.ExpiredSignatureError as exc:
            raise TokenExpiredError("Token expired") from exc
        except pyjwt.InvalidTokenError as exc:
            raise InvalidTokenSignatureError("Invalid token") from exc
