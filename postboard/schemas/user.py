"""User resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class UserCreateSchema(Schema):
    """Payload for creating a user through ``/users``."""

    class Meta:
        unknown = EXCLUDE

    username = fields.String(load_default=None, validate=validate.Length(max=50))
    email = fields.Email(load_default=None, validate=validate.Length(max=254))
    password = fields.String(load_default=None, validate=validate.Length(max=128))


class UserUpdateSchema(Schema):
    """Partial update; a new password ends every session of the user."""

    class Meta:
        unknown = EXCLUDE

    username = fields.String(validate=validate.Length(min=1, max=50))
    email = fields.Email(validate=validate.Length(max=254))
    password = fields.String(validate=validate.Length(min=1, max=128))


class UserSchema(Schema):
    """Public representation of a user entity."""

    id = fields.Integer(required=True)
    username = fields.String(required=True)
    email = fields.String(required=True)
    created_at = fields.DateTime(data_key="createdAt", allow_none=True)
