"""Repository package exposing persistence-layer access for all models."""

from __future__ import annotations

from postboard.repositories.base import BaseRepository
from postboard.repositories.comment import CommentRepository
from postboard.repositories.post import PostRepository
from postboard.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "CommentRepository",
    "PostRepository",
    "UserRepository",
]
