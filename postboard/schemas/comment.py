"""Comment resource schemas."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate


class CommentCreateSchema(Schema):
    """Payload for commenting on a post."""

    class Meta:
        unknown = EXCLUDE

    post_id = fields.Integer(data_key="postId", load_default=None, strict=True)
    sender = fields.String(load_default=None, validate=validate.Length(max=100))
    body = fields.String(load_default=None)


class CommentUpdateSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    body = fields.String(validate=validate.Length(min=1))
    sender = fields.String(validate=validate.Length(min=1, max=100))


class CommentSchema(Schema):
    """Public representation of a comment."""

    id = fields.Integer(required=True)
    post_id = fields.Integer(data_key="postId", required=True)
    sender = fields.String(required=True)
    body = fields.String(required=True)
    created_at = fields.DateTime(data_key="createdAt")
