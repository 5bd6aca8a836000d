"""Post resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class PostCreateSchema(Schema):
    """Payload for publishing a post; ``sender`` defaults to the caller."""

    class Meta:
        unknown = EXCLUDE

    title = fields.String(load_default=None, validate=validate.Length(max=200))
    body = fields.String(load_default=None)
    sender = fields.String(load_default=None, validate=validate.Length(min=1, max=100))


class PostUpdateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    title = fields.String(validate=validate.Length(min=1, max=200))
    body = fields.String()
    sender = fields.String(validate=validate.Length(min=1, max=100))


class PostFilterSchema(Schema):
    """Supported query parameters for listing posts."""

    class Meta:
        unknown = EXCLUDE

    sender = fields.String(load_default=None, validate=validate.Length(min=1, max=100))


class PostSchema(Schema):
    """Public representation of a post."""

    id = fields.Integer(required=True)
    title = fields.String(required=True)
    body = fields.String(required=True)
    sender = fields.String(required=True)
    created_at = fields.DateTime(data_key="createdAt")
