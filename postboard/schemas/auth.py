"""Authentication-related Marshmallow schemas.

Input fields are optional at this layer: the auth service decides which
absences are validation errors and which are credential failures.
"""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class RegisterSchema(Schema):
    """Input payload for account registration."""

    class Meta:
        unknown = EXCLUDE

    username = fields.String(load_default=None, validate=validate.Length(max=50))
    email = fields.Email(load_default=None, validate=validate.Length(max=254))
    password = fields.String(load_default=None, validate=validate.Length(max=128))


class LoginSchema(Schema):
    """Input payload for authenticating a user."""

    class Meta:
        unknown = EXCLUDE

    email = fields.String(load_default=None)
    password = fields.String(load_default=None)


class RefreshTokenSchema(Schema):
    """Input payload carrying a refresh token (logout and refresh)."""

    class Meta:
        unknown = EXCLUDE

    refresh_token = fields.String(data_key="refreshToken", load_default=None)


class TokenPairSchema(Schema):
    """Response payload for a rotated token pair."""

    access_token = fields.String(data_key="accessToken", required=True)
    refresh_token = fields.String(data_key="refreshToken", required=True)


class LoginResponseSchema(TokenPairSchema):
    """Response payload for a successful login."""

    id = fields.Integer(required=True)


class RegisteredUserSchema(Schema):
    """Public view returned by registration."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    email = fields.String(required=True)
