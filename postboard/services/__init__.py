"""Service layer public API.

Callers import services and their DTOs from :mod:`postboard.services` without
knowing the internal layout.

Re-exports
----------
- Base primitives: :class:`BaseService`, :class:`ServiceContext`
- :class:`AuthService` with :class:`RegisterIn`, :class:`LoginIn`,
  :class:`RefreshIn`, :class:`LoginOut`, :class:`TokenPairOut`
- :class:`UserService`, :class:`PostService`, :class:`CommentService` and
  their input/output DTOs
"""

from __future__ import annotations

from ._shared.base import BaseService, ServiceContext
from .auth.dto import LoginIn, LoginOut, RefreshIn, RegisterIn, TokenPairOut
from .auth.service import AuthService
from .comments.dto import CommentCreateIn, CommentOut, CommentUpdateIn
from .comments.service import CommentService
from .posts.dto import PostCreateIn, PostOut, PostUpdateIn
from .posts.service import PostService
from .users.dto import UserCreateIn, UserPublicOut, UserUpdateIn
from .users.service import UserService

__all__ = [
    "BaseService",
    "ServiceContext",
    "AuthService",
    "RegisterIn",
    "LoginIn",
    "RefreshIn",
    "LoginOut",
    "TokenPairOut",
    "UserService",
    "UserCreateIn",
    "UserUpdateIn",
    "UserPublicOut",
    "PostService",
    "PostCreateIn",
    "PostUpdateIn",
    "PostOut",
    "CommentService",
    "CommentCreateIn",
    "CommentUpdateIn",
    "CommentOut",
]
