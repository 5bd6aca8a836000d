"""Post endpoints."""

from __future__ import annotations

from flask import Blueprint, request

from postboard.api.deps import json_body, json_response, require_auth, service_context, timing
from postboard.schemas import PostCreateSchema, PostFilterSchema, PostSchema, PostUpdateSchema
from postboard.services import PostCreateIn, PostService, PostUpdateIn

bp = Blueprint("posts", __name__)

post_schema = PostSchema()
post_list_schema = PostSchema(many=True)
post_create_schema = PostCreateSchema()
post_update_schema = PostUpdateSchema()
post_filter_schema = PostFilterSchema()


@bp.get("")
@require_auth
@timing
def list_posts():
    """Return posts newest first, optionally narrowed by ``?sender=``."""

    filters = post_filter_schema.load(request.args)
    posts = PostService(ctx=service_context()).list_posts(sender=filters["sender"])
    return json_response(post_list_schema.dump(posts))


@bp.post("")
@require_auth
@timing
def create_post():
    """Publish a post; ``sender`` defaults to the authenticated user."""

    data = post_create_schema.load(json_body())
    post = PostService(ctx=service_context()).create_post(PostCreateIn(**data))
    return json_response(post_schema.dump(post), status=201)


@bp.get("/<int:post_id>")
@require_auth
@timing
def get_post(post_id: int):
    post = PostService(ctx=service_context()).get_post(post_id)
    return json_response(post_schema.dump(post))


@bp.put("/<int:post_id>")
@require_auth
@timing
def update_post(post_id: int):
    data = post_update_schema.load(json_body())
    post = PostService(ctx=service_context()).update_post(post_id, PostUpdateIn(**data))
    return json_response(post_schema.dump(post))


@bp.delete("/<int:post_id>")
@require_auth
@timing
def delete_post(post_id: int):
    PostService(ctx=service_context()).delete_post(post_id)
    return json_response({"message": "Post deleted successfully"})
