# postboard/services/auth/service.py
from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TypeVar

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm.exc import StaleDataError

from postboard.models.user import User
from postboard.repositories.user import UserRepository
from postboard.services._shared.base import BaseService, ServiceContext, require_fields
from postboard.services._shared.errors import (
    DuplicateUserError,
    InvalidCredentialsError,
    InvalidRefreshTokenError,
    MissingTokenError,
    SessionConflictError,
    TokenError,
    UserNotFoundError,
    violates,
)
from postboard.services._shared.ports import TokenCodec
from postboard.services.auth.dto import LoginIn, LoginOut, RefreshIn, RegisterIn, TokenPairOut
from postboard.services.users.dto import UserPublicOut
from postboard.uow.sqlalchemy_uow import SQLAlchemyUnitOfWork

log = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_WRITE_ATTEMPTS = 3


class AuthService(BaseService):
    """
    Session lifecycle service (register / login / logout / refresh).

    The only writer of ``User.refresh_tokens``. Every change to that list is a
    read-modify-write of the user row guarded by ``User.session_version``: a
    commit that finds the row changed since it was read raises
    ``StaleDataError`` and the whole step is replayed against fresh state, at
    most ``write_attempts`` times.

    Externally, login failures are always :class:`InvalidCredentialsError` and
    refresh failures :class:`InvalidRefreshTokenError`; logs record the cause.
    """

    def __init__(
        self,
        *,
        token_codec: TokenCodec,
        write_attempts: int = DEFAULT_WRITE_ATTEMPTS,
        ctx: ServiceContext | None = None,
    ) -> None:
        """
        :param token_codec: Issues and verifies access/refresh tokens.
        :param write_attempts: Optimistic-write attempts before giving up.
        :param ctx: Optional request-scoped context.
        """
        super().__init__(ctx=ctx)
        self.tokens = token_codec
        self.write_attempts = max(1, int(write_attempts))

    # ------------------------------------------------------------------ #
    # Registration
    # ------------------------------------------------------------------ #

    def register(self, dto: RegisterIn) -> UserPublicOut:
        """
        Create an account with no sessions.

        :raises ValidationError: If a field is absent or blank.
        :raises DuplicateUserError: If the email is already registered.
        """
        require_fields(username=dto.username, email=dto.email, password=dto.password)

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            if repo.exists_by_email(dto.email or ""):
                log.info("auth.register.rejected", extra={"reason": "duplicate_email"})
                raise DuplicateUserError()
            try:
                user = repo.add(
                    User(
                        username=dto.username,
                        email=dto.email,
                        password=dto.password,
                        refresh_tokens=[],
                    )
                )
            except IntegrityError as exc:
                if violates(exc, "uq_users_email"):
                    log.info("auth.register.rejected", extra={"reason": "duplicate_email_race"})
                    raise DuplicateUserError() from exc
                raise
            out = UserPublicOut.from_model(user)

        log.info("auth.register.ok", extra={"user_id": out.id})
        return out

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> LoginOut:
        """
        Verify credentials and open a new session.

        :raises InvalidCredentialsError: Missing fields, unknown email or
            wrong password.
        :raises SessionConflictError: If the session list kept changing.
        """
        if not dto.email or not dto.password:
            log.info("auth.login.rejected", extra={"reason": "missing_fields"})
            raise InvalidCredentialsError()

        def _open_session(uow: SQLAlchemyUnitOfWork) -> LoginOut:
            user = uow.users.get_by_email(dto.email or "")
            if user is None:
                log.info("auth.login.rejected", extra={"reason": "unknown_email"})
                raise InvalidCredentialsError()
            if not user.verify_password(dto.password or ""):
                log.info(
                    "auth.login.rejected", extra={"reason": "bad_password", "user_id": user.id}
                )
                raise InvalidCredentialsError()

            access = self.tokens.issue_access_token(user.id)
            refresh = self.tokens.issue_refresh_token(user.id)
            user.refresh_tokens = [*self._live_tokens(user), refresh]
            return LoginOut(id=user.id, access_token=access, refresh_token=refresh)

        out = self._write_sessions("login", _open_session)
        log.info("auth.login.ok", extra={"user_id": out.id})
        return out

    # ------------------------------------------------------------------ #
    # Logout
    # ------------------------------------------------------------------ #

    def logout(self, dto: RefreshIn) -> None:
        """
        End the session identified by a refresh token.

        Succeeds for unknown, foreign or forged tokens alike. An expired but
        authentic token is still purged from its owner's list.

        :raises MissingTokenError: If no token was supplied.
        """
        token = dto.refresh_token
        if not token:
            raise MissingTokenError()

        try:
            claims = self.tokens.verify(token, "refresh", allow_expired=True)
        except TokenError:
            log.info("auth.logout.ignored", extra={"reason": "unverifiable_token"})
            return

        def _purge(uow: SQLAlchemyUnitOfWork) -> bool:
            user = uow.users.get(claims.subject)
            if user is None or token not in user.refresh_tokens:
                return False
            user.refresh_tokens = [t for t in user.refresh_tokens if t != token]
            return True

        removed = self._write_sessions("logout", _purge)
        log.info(
            "auth.logout.ok",
            extra={"user_id": claims.subject, "reason": "removed" if removed else "not_present"},
        )

    # ------------------------------------------------------------------ #
    # Refresh with rotation and reuse detection
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> TokenPairOut:
        """
        Rotate a refresh token and emit a new token pair.

        A verified token that is no longer in its owner's list has been used
        before: the owner's whole list is cleared and committed before the
        request fails.

        :raises MissingTokenError: If no token was supplied (authentication
            required).
        :raises InvalidRefreshTokenError: Bad signature, expiry or reuse.
        :raises UserNotFoundError: If the token's subject no longer exists.
        :raises SessionConflictError: If the session list kept changing.
        """
        token = dto.refresh_token
        if not token:
            raise MissingTokenError(authentication_required=True)

        try:
            claims = self.tokens.verify(token, "refresh")
        except TokenError as exc:
            log.info("auth.refresh.rejected", extra={"reason": type(exc).__name__})
            raise InvalidRefreshTokenError() from exc

        def _rotate(uow: SQLAlchemyUnitOfWork) -> TokenPairOut | None:
            user = uow.users.get(claims.subject)
            if user is None:
                log.info(
                    "auth.refresh.rejected",
                    extra={"reason": "unknown_user", "user_id": claims.subject},
                )
                raise UserNotFoundError()
            if token not in user.refresh_tokens:
                # Reuse: wipe in this transaction, fail once it has committed.
                user.refresh_tokens = []
                return None

            access = self.tokens.issue_access_token(user.id)
            rotated = self.tokens.issue_refresh_token(user.id)
            user.refresh_tokens = [*(t for t in user.refresh_tokens if t != token), rotated]
            return TokenPairOut(access_token=access, refresh_token=rotated)

        pair = self._write_sessions("refresh", _rotate)
        if pair is None:
            log.warning(
                "auth.refresh.reuse_detected",
                extra={"reason": "token_reuse", "user_id": claims.subject},
            )
            raise InvalidRefreshTokenError()

        log.info("auth.refresh.ok", extra={"user_id": claims.subject})
        return pair

    # ------------------------------------------------------------------ #
    # Internals
    # ------------------------------------------------------------------ #

    def _write_sessions(self, operation: str, step: Callable[[SQLAlchemyUnitOfWork], T]) -> T:
        """
        Run ``step`` in a read-write unit of work, replaying it on stale writes.

        :param operation: Name used in logs.
        :param step: Reads the user row and mutates ``refresh_tokens``.
        :returns: Whatever ``step`` returned on the committed attempt.
        :raises SessionConflictError: When every attempt lost a race.
        """
        for attempt in range(1, self.write_attempts + 1):
            try:
                with self.rw_uow() as uow:
                    return step(uow)
            except StaleDataError:
                log.warning(
                    "auth.session_write.conflict",
                    extra={"reason": operation, "attempt": attempt},
                )
        raise SessionConflictError()

    def _live_tokens(self, user: User) -> list[str]:
        """Stored refresh tokens that still verify; dead entries are pruned."""
        live: list[str] = []
        for stored in user.refresh_tokens:
            try:
                self.tokens.verify(stored, "refresh")
            except TokenError:
                continue
            live.append(stored)
        return live
