"""Pytest fixtures configuring an isolated transactional database layer.

Each test runs inside a SAVEPOINT-backed transaction against an in-memory
SQLite database so data changes never leak between cases. Service commits
release the SAVEPOINT; the outer transaction is rolled back after the test.
"""

from __future__ import annotations

import os
from collections.abc import Callable, Generator
from typing import Any

import pytest
from flask import Flask
from sqlalchemy import event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import scoped_session, sessionmaker

from postboard.core.config import TestingConfig
from postboard.core.extensions import db as _db
from postboard.factory import create_app
from postboard.infra.jwt import JWTTokenCodec
from postboard.models.user import User

from tests.factories.user import UserFactory
from tests.helpers.auth import expired_token, issue_token


def _enable_sqlite_savepoints(engine: Engine) -> None:
    """Let pysqlite honour BEGIN/SAVEPOINT so nested rollbacks really roll back."""
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_autobegin(dbapi_connection, connection_record):  # pragma: no cover
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):  # pragma: no cover
        conn.exec_driver_sql("BEGIN")


@pytest.fixture(scope="session")
def app() -> Flask:
    """Create a Flask application configured for testing."""
    # Ensure env-based config does not leak into tests
    os.environ.pop("DATABASE_URL", None)
    return create_app(TestingConfig)


@pytest.fixture(scope="session")
def db(app: Flask) -> Generator[Any, None, None]:
    """Create database tables once per test session.

    Yields
    ------
    flask_sqlalchemy.SQLAlchemy
        Database extension bound to the testing application. The app context
        stays pushed for the whole session.
    """
    with app.app_context():
        _enable_sqlite_savepoints(_db.engine)
        _db.create_all()
        yield _db
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope="session")
def connection(db: Any) -> Generator[Any, None, None]:
    """Keep a dedicated connection open for the whole session."""
    conn = db.engine.connect()
    try:
        yield conn
    finally:
        conn.close()


@pytest.fixture()
def session(db: Any, connection: Any) -> Generator[scoped_session, None, None]:
    """Provide a scoped session whose commits only release a SAVEPOINT.

    ``db.session`` is monkey-patched so application code (units of work,
    repositories, health check) uses this session.
    """
    outer = connection.begin()
    scoped = scoped_session(
        sessionmaker(bind=connection, autoflush=False, join_transaction_mode="create_savepoint")
    )
    original_session = db.session
    db.session = scoped
    try:
        yield scoped
    finally:
        scoped.remove()
        db.session = original_session
        outer.rollback()


@pytest.fixture(scope="session")
def faker():
    """Provide a :class:`faker.Faker` instance seeded for deterministic tests."""
    from faker import Faker

    fk = Faker()
    Faker.seed(1337)
    return fk


# -- Hook up Factory Boy to the transactional session -------------------------
@pytest.fixture(autouse=True)
def _factories_session(session: scoped_session) -> Generator[None, None, None]:
    """Wire Factory Boy's session helper to the transactional session fixture."""
    from tests.factories import SQLAlchemySession

    SQLAlchemySession.set(session)
    yield
    SQLAlchemySession.set(None)


@pytest.fixture()
def client(app: Flask):
    """Return a Flask test client."""
    return app.test_client()


@pytest.fixture()
def codec(app: Flask) -> JWTTokenCodec:
    """Token codec configured like the running app."""
    return JWTTokenCodec.from_config(app.config)


@pytest.fixture()
def user() -> User:
    """Persist and return a user whose password is ``Passw0rd!``."""
    return UserFactory()


@pytest.fixture()
def auth_token(user: User) -> str:
    """Valid access token for ``user``."""
    return issue_token(user.id)


@pytest.fixture()
def auth_header(auth_token: str) -> dict[str, str]:
    """Authorization header for authenticated requests."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture()
def expired_auth_token(user: User) -> str:
    """Return an already expired access token for ``user``."""
    return expired_token(user.id)


@pytest.fixture()
def freeze_time() -> Callable[[str | None], Any]:
    """Factory returning :func:`freezegun.freeze_time`.

    Examples
    --------
    >>> def test_with_frozen_time(freeze_time):
    ...     with freeze_time("2024-01-01"):
    ...         ...
    """
    from freezegun import freeze_time as _freeze_time

    def _factory(target: str | None = None) -> Any:
        return _freeze_time(target or "2024-01-01")

    return _factory
