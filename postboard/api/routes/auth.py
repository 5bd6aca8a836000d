"""Session endpoints: register, login, logout and refresh.

None of these routes require an access token; refresh and logout authenticate
through the refresh token in the body.
"""

from __future__ import annotations

from flask import Blueprint

from postboard.api.deps import auth_service, json_body, json_response, timing
from postboard.schemas import (
    LoginResponseSchema,
    LoginSchema,
    RefreshTokenSchema,
    RegisteredUserSchema,
    RegisterSchema,
    TokenPairSchema,
)
from postboard.services import LoginIn, RefreshIn, RegisterIn

bp = Blueprint("auth", __name__)

register_schema = RegisterSchema()
login_schema = LoginSchema()
refresh_token_schema = RefreshTokenSchema()
registered_user_schema = RegisteredUserSchema()
login_response_schema = LoginResponseSchema()
token_pair_schema = TokenPairSchema()


@bp.post("/register")
@timing
def register():
    """Create an account and return its public view."""

    data = register_schema.load(json_body())
    user = auth_service().register(RegisterIn(**data))
    return json_response(registered_user_schema.dump(user), status=201)


@bp.post("/login")
@timing
def login():
    """Authenticate credentials and open a session."""

    data = login_schema.load(json_body())
    result = auth_service().login(LoginIn(**data))
    return json_response(login_response_schema.dump(result))


@bp.post("/logout")
@timing
def logout():
    """End the session of the given refresh token. Always succeeds once a token is supplied."""

    data = refresh_token_schema.load(json_body())
    auth_service().logout(RefreshIn(**data))
    return json_response({"message": "Logged out successfully"})


@bp.post("/refresh")
@timing
def refresh():
    """Rotate a refresh token into a new token pair."""

    data = refresh_token_schema.load(json_body())
    pair = auth_service().refresh(RefreshIn(**data))
    return json_response(token_pair_schema.dump(pair))
