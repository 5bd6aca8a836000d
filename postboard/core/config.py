"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from datetime import timedelta
from typing import Any, Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

# Load .env in development (no-op when the file is missing)
load_dotenv()

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhdw]?)\s*$", re.IGNORECASE)
_DURATION_UNITS: Final[Mapping[str, str]] = {
    "": "seconds",
    "s": "seconds",
    "m": "minutes",
    "h": "hours",
    "d": "days",
    "w": "weeks",
}


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def parse_duration(value: str | int | timedelta) -> timedelta:
    """Convert a lifetime such as ``"15m"``, ``"7d"`` or ``900`` to a timedelta.

    Bare numbers are seconds. Supported suffixes are ``s``, ``m``, ``h``,
    ``d`` and ``w``.

    :param value: Raw duration from the environment or a config object.
    :type value: str | int | timedelta
    :returns: Parsed lifetime.
    :rtype: timedelta
    :raises ValueError: If the value is malformed or not positive.
    """
    if isinstance(value, timedelta):
        delta = value
    elif isinstance(value, int):
        delta = timedelta(seconds=value)
    else:
        match = _DURATION_RE.match(str(value))
        if match is None:
            raise ValueError(f"Invalid duration: {value!r}")
        amount, unit = match.groups()
        delta = timedelta(**{_DURATION_UNITS[unit.lower()]: int(amount)})
    if delta <= timedelta(0):
        raise ValueError(f"Duration must be positive: {value!r}")
    return delta


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints. Empty mounts routes at ``/``.
    SECRET_KEY: str
        Flask secret used for session signing.
    JWT_SECRET_KEY: str
        Access-token secret, consumed by ``flask-jwt-extended`` for signing and
        by the request gate for verification.
    JWT_REFRESH_SECRET_KEY: str
        Independent secret for refresh tokens.
    JWT_ACCESS_TOKEN_EXPIRES: timedelta
        Access-token lifetime (``JWT_EXPIRATION``, default ``15m``).
    JWT_REFRESH_TOKEN_EXPIRES: timedelta
        Refresh-token lifetime (``JWT_REFRESH_EXPIRATION``, default ``7d``).
    AUTH_SESSION_WRITE_ATTEMPTS: int
        Attempts for an optimistic write of a user's refresh-token list.
    SQLALCHEMY_DATABASE_URI: str
        Database connection string consumed by SQLAlchemy.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes. The JWT secrets have no fallback:
    :func:`validate_security_settings` rejects an application without them.
    """

    API_BASE_PREFIX = os.getenv("API_BASE_PREFIX", "")

    # Secrets / security
    SECRET_KEY = os.getenv("SECRET_KEY", "CHANGE_ME")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET", "")
    JWT_REFRESH_SECRET_KEY = os.getenv("JWT_REFRESH_SECRET", "")
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    JWT_ACCESS_TOKEN_EXPIRES = parse_duration(os.getenv("JWT_EXPIRATION", "15m"))
    JWT_REFRESH_TOKEN_EXPIRES = parse_duration(os.getenv("JWT_REFRESH_EXPIRATION", "7d"))
    JWT_TOKEN_LOCATION = ["headers"]
    JWT_HEADER_NAME = "Authorization"
    JWT_HEADER_TYPE = "Bearer"
    AUTH_SESSION_WRITE_ATTEMPTS = int(os.getenv("AUTH_SESSION_WRITE_ATTEMPTS", "3"))

    # DB
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///./dev.db")
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")

    # Reverse proxy
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)
    PROXYFIX_HOPS = int(os.getenv("PROXYFIX_HOPS", "1"))

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development.

    Notes
    -----
    Enables debug mode by default and honors ``SQLALCHEMY_ECHO`` for verbose
    SQL logging when requested.
    """

    DEBUG = env_bool("FLASK_DEBUG", True)
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and uses fixed, distinct JWT secrets.
    - Uses an in-memory SQLite database unless ``TEST_DATABASE_URL`` is set.
    - Disables ``ProxyFix`` so the test client sees the raw WSGI environ.
    """

    TESTING = True
    DEBUG = False
    JWT_SECRET_KEY = "test-access-secret"
    JWT_REFRESH_SECRET_KEY = "test-refresh-secret"
    SQLALCHEMY_DATABASE_URI = os.getenv("TEST_DATABASE_URL", "sqlite:///:memory:")
    SQLALCHEMY_ECHO = env_bool("SQLALCHEMY_ECHO", False)
    USE_PROXYFIX = False


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    Keeps debug and SQL echoing disabled while relying on WSGI-level log
    configuration for noise control.
    """

    DEBUG = False
    SQLALCHEMY_ECHO = False
    PROPAGATE_EXCEPTIONS = False


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)


def validate_security_settings(config: Mapping[str, Any]) -> None:
    """Fail fast when the token secrets or lifetimes are unusable.

    :param config: Loaded Flask configuration.
    :type config: Mapping[str, Any]
    :raises RuntimeError: If a secret is missing, both secrets are equal, or a
        lifetime cannot be parsed.
    """
    access_secret = config.get("JWT_SECRET_KEY") or ""
    refresh_secret = config.get("JWT_REFRESH_SECRET_KEY") or ""
    missing = [
        env
        for env, value in (("JWT_SECRET", access_secret), ("JWT_REFRESH_SECRET", refresh_secret))
        if not str(value).strip()
    ]
    if missing:
        raise RuntimeError(f"Missing required token secret(s): {', '.join(missing)}")
    if access_secret == refresh_secret:
        raise RuntimeError("JWT_SECRET and JWT_REFRESH_SECRET must be different values.")
    for key in ("JWT_ACCESS_TOKEN_EXPIRES", "JWT_REFRESH_TOKEN_EXPIRES"):
        try:
            parse_duration(config.get(key))  # type: ignore[arg-type]
        except (TypeError, ValueError) as exc:
            raise RuntimeError(f"Invalid {key}: {config.get(key)!r}") from exc
