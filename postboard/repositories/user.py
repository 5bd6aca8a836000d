"""User repository: the credential store."""

from __future__ import annotations

from typing import cast

from sqlalchemy import select

from postboard.models.user import User
from postboard.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    It never issues tokens and never decides which refresh tokens are valid;
    it only loads and stores rows.
    """

    model = User

    def _filterable_fields(self):
        return {"email": User.email, "username": User.username}

    def _updatable_fields(self):
        """Publicly allowed updatable fields (``password`` goes through the hashing setter)."""
        return {"email", "username", "password"}

    def get_by_email(self, email: str) -> User | None:
        """Fetch a user by email (case-insensitive).

        :param email: Email address to normalise and search.
        :type email: str
        :returns: User instance or ``None`` when not found.
        :rtype: User | None
        """
        stmt = select(User).where(User.email == email.lower().strip())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def exists_by_email(self, email: str) -> bool:
        """Return ``True`` when a user with the provided email exists."""
        stmt = select(User.id).where(User.email == email.lower().strip())
        return bool(self.session.execute(stmt).first())
