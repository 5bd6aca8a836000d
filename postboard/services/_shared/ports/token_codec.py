from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Literal, Protocol

TokenKind = Literal["access", "refresh"]


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """
    Verified token payload.

    :param subject: User id the token was issued to.
    :param kind: ``"access"`` or ``"refresh"``.
    :param expires_at: Aware UTC expiry instant.
    """

    subject: int
    kind: TokenKind
    expires_at: datetime


class TokenCodec(Protocol):
    """Port for issuing and verifying signed session tokens."""

    def issue_access_token(self, user_id: int) -> str: ...

    def issue_refresh_token(self, user_id: int) -> str: ...

    def verify(self, token: str, kind: TokenKind, *, allow_expired: bool = False) -> TokenClaims: ...
