"""
UserService
===========

CRUD over the ``User`` aggregate for the protected ``/users`` routes.
Passwords are hashed by the model; a password change clears the user's
refresh-token list, ending every session.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy.exc import IntegrityError

from postboard.repositories.user import UserRepository
from postboard.services._shared.base import BaseService, require_fields
from postboard.services._shared.errors import DuplicateUserError, NotFoundError, violates
from postboard.services.users.dto import UserCreateIn, UserPublicOut, UserUpdateIn

log = logging.getLogger(__name__)


class UserService(BaseService):
    """Application service for user records."""

    def create_user(self, dto: UserCreateIn) -> UserPublicOut:
        """
        Create a user with an empty session list.

        :raises ValidationError: If a field is absent or blank.
        :raises DuplicateUserError: If the email is already registered.
        """
        require_fields(username=dto.username, email=dto.email, password=dto.password)

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            if repo.exists_by_email(dto.email or ""):
                raise DuplicateUserError()
            try:
                user = repo.add(
                    repo.model(
                        username=dto.username,
                        email=dto.email,
                        password=dto.password,
                        refresh_tokens=[],
                    )
                )
            except IntegrityError as exc:
                if violates(exc, "uq_users_email"):
                    raise DuplicateUserError() from exc
                raise
            return UserPublicOut.from_model(user)

    def list_users(self) -> list[UserPublicOut]:
        with self.ro_uow() as uow:
            return [UserPublicOut.from_model(u) for u in uow.users.list_all()]

    def get_user(self, user_id: int) -> UserPublicOut:
        """
        Retrieve a user by identifier.

        :raises NotFoundError: If the user does not exist.
        """
        with self.ro_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            return UserPublicOut.from_model(user)

    def update_user(self, user_id: int, dto: UserUpdateIn) -> UserPublicOut:
        """
        Apply the non-``None`` fields of ``dto``.

        :raises ValidationError: If a supplied field is blank.
        :raises NotFoundError: If the user does not exist.
        :raises DuplicateUserError: If the new email belongs to another user.
        """
        updates: dict[str, Any] = {
            k: v
            for k, v in {
                "username": dto.username,
                "email": dto.email,
                "password": dto.password,
            }.items()
            if v is not None
        }
        require_fields(**updates)

        with self.rw_uow() as uow:
            repo: UserRepository = uow.users
            user = repo.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)

            if "email" in updates:
                other = repo.get_by_email(updates["email"])
                if other is not None and other.id != user.id:
                    raise DuplicateUserError()

            try:
                repo.assign_updates(user, updates, flush=False)
                if "password" in updates:
                    user.refresh_tokens = []
                repo.flush()
            except IntegrityError as exc:
                if violates(exc, "uq_users_email"):
                    raise DuplicateUserError() from exc
                raise

            out = UserPublicOut.from_model(user)

        if "password" in updates:
            log.info("users.password_changed.sessions_cleared", extra={"user_id": user_id})
        return out

    def delete_user(self, user_id: int) -> None:
        """:raises NotFoundError: If the user does not exist."""
        with self.rw_uow() as uow:
            user = uow.users.get(user_id)
            if user is None:
                raise NotFoundError("User", user_id)
            uow.users.delete(user)
