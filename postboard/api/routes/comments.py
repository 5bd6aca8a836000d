"""Comment endpoints."""

from __future__ import annotations

from flask import Blueprint

from postboard.api.deps import json_body, json_response, require_auth, service_context, timing
from postboard.schemas import CommentCreateSchema, CommentSchema, CommentUpdateSchema
from postboard.services import CommentCreateIn, CommentService, CommentUpdateIn

bp = Blueprint("comments", __name__)

comment_schema = CommentSchema()
comment_list_schema = CommentSchema(many=True)
comment_create_schema = CommentCreateSchema()
comment_update_schema = CommentUpdateSchema()


@bp.post("")
@require_auth
@timing
def create_comment():
    """Comment on an existing post."""

    data = comment_create_schema.load(json_body())
    comment = CommentService(ctx=service_context()).create_comment(CommentCreateIn(**data))
    return json_response(comment_schema.dump(comment), status=201)


@bp.get("/post/<int:post_id>")
@require_auth
@timing
def list_post_comments(post_id: int):
    """Return the comments of one post, newest first."""

    comments = CommentService(ctx=service_context()).list_for_post(post_id)
    return json_response(comment_list_schema.dump(comments))


@bp.get("/<int:comment_id>")
@require_auth
@timing
def get_comment(comment_id: int):
    comment = CommentService(ctx=service_context()).get_comment(comment_id)
    return json_response(comment_schema.dump(comment))


@bp.put("/<int:comment_id>")
@require_auth
@timing
def update_comment(comment_id: int):
    data = comment_update_schema.load(json_body())
    comment = CommentService(ctx=service_context()).update_comment(
        comment_id, CommentUpdateIn(**data)
    )
    return json_response(comment_schema.dump(comment))


@bp.delete("/<int:comment_id>")
@require_auth
@timing
def delete_comment(comment_id: int):
    CommentService(ctx=service_context()).delete_comment(comment_id)
    return json_response({"message": "Comment deleted successfully"})
