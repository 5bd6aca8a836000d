"""User endpoints."""

from __future__ import annotations

from flask import Blueprint

from postboard.api.deps import json_body, json_response, require_auth, service_context, timing
from postboard.schemas import UserCreateSchema, UserSchema, UserUpdateSchema
from postboard.services import UserCreateIn, UserService, UserUpdateIn

bp = Blueprint("users", __name__)

user_schema = UserSchema()
user_list_schema = UserSchema(many=True)
user_create_schema = UserCreateSchema()
user_update_schema = UserUpdateSchema()


@bp.get("")
@require_auth
@timing
def list_users():
    users = UserService(ctx=service_context()).list_users()
    return json_response(user_list_schema.dump(users))


@bp.post("")
@require_auth
@timing
def create_user():
    """Create a user; the response never includes credentials."""

    data = user_create_schema.load(json_body())
    user = UserService(ctx=service_context()).create_user(UserCreateIn(**data))
    return json_response(user_schema.dump(user), status=201)


@bp.get("/<int:user_id>")
@require_auth
@timing
def get_user(user_id: int):
    user = UserService(ctx=service_context()).get_user(user_id)
    return json_response(user_schema.dump(user))


@bp.put("/<int:user_id>")
@require_auth
@timing
def update_user(user_id: int):
    """Partially update a user. Changing the password ends all of its sessions."""

    data = user_update_schema.load(json_body())
    user = UserService(ctx=service_context()).update_user(user_id, UserUpdateIn(**data))
    return json_response(user_schema.dump(user))


@bp.delete("/<int:user_id>")
@require_auth
@timing
def delete_user(user_id: int):
    UserService(ctx=service_context()).delete_user(user_id)
    return json_response({"message": "User deleted successfully"})
