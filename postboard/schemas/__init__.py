"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import (
    LoginResponseSchema,
    LoginSchema,
    RefreshTokenSchema,
    RegisteredUserSchema,
    RegisterSchema,
    TokenPairSchema,
)
from .comment import CommentCreateSchema, CommentSchema, CommentUpdateSchema
from .post import PostCreateSchema, PostFilterSchema, PostSchema, PostUpdateSchema
from .user import UserCreateSchema, UserSchema, UserUpdateSchema

__all__ = [
    "LoginSchema",
    "RegisterSchema",
    "RefreshTokenSchema",
    "TokenPairSchema",
    "LoginResponseSchema",
    "RegisteredUserSchema",
    "UserSchema",
    "UserCreateSchema",
    "UserUpdateSchema",
    "PostSchema",
    "PostCreateSchema",
    "PostUpdateSchema",
    "PostFilterSchema",
    "CommentSchema",
    "CommentCreateSchema",
    "CommentUpdateSchema",
]
