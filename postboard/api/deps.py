"""Shared API helpers for authentication and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar

from flask import Response, current_app, g, jsonify, request
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request

from postboard.core.errors import Forbidden, Unauthenticated
from postboard.infra.jwt import JWTTokenCodec
from postboard.services import AuthService, ServiceContext

F = TypeVar("F", bound=Callable[..., Any])


def _bearer_without_token() -> bool:
    """True when the header names the bearer scheme but carries no credential."""

    header = request.headers.get(current_app.config.get("JWT_HEADER_NAME", "Authorization"), "")
    scheme, _, credential = header.strip().partition(" ")
    return scheme == current_app.config.get("JWT_HEADER_TYPE", "Bearer") and not credential.strip()


def require_auth(func: F) -> F:
    """Gate a handler behind a valid ``Authorization: Bearer`` access token.

    A missing header, or a bearer scheme with no token, is rejected with
    ``401``; any token that fails verification with ``403`` (see the JWT
    loaders in :mod:`postboard.core.errors`). On success the verified
    subject is stored as ``g.current_user_id``. No database lookup happens here.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        if _bearer_without_token():
            raise Unauthenticated("Access denied")
        verify_jwt_in_request(optional=False)
        try:
            g.current_user_id = int(get_jwt_identity())
        except (TypeError, ValueError) as exc:
            raise Forbidden("Invalid token") from exc
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_user_id() -> int | None:
    """Return the id attached by :func:`require_auth` for this request, if any."""

    return getattr(g, "current_user_id", None)


def service_context() -> ServiceContext:
    """Build the request-scoped context handed to services."""

    return ServiceContext(actor_id=current_user_id(), request_id=getattr(g, "request_id", None))


def auth_service() -> AuthService:
    """Wire an :class:`AuthService` from the current app configuration."""

    return AuthService(
        token_codec=JWTTokenCodec.from_config(),
        write_attempts=current_app.config.get("AUTH_SESSION_WRITE_ATTEMPTS", 3),
        ctx=service_context(),
    )


def json_body() -> dict[str, Any]:
    """Return the JSON request body, or an empty mapping when absent or not an object."""

    payload = request.get_json(silent=True)
    return payload if isinstance(payload, dict) else {}


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
