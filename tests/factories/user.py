"""Factory Boy definition for :class:`postboard.models.user.User`."""

from __future__ import annotations

import factory

from postboard.models.user import User
from tests.factories import BaseFactory

DEFAULT_PASSWORD = "Passw0rd!"


class UserFactory(BaseFactory):
    """Build persisted users. ``password`` goes through the hashing setter."""

    class Meta:
        model = User

    id = None  # let autoincrement handle it
    email = factory.Sequence(lambda n: f"user{n}@example.com")
    username = factory.Sequence(lambda n: f"user{n}")
    password = DEFAULT_PASSWORD
    refresh_tokens = factory.LazyFunction(list)
