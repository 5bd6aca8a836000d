"""DTOs for PostService."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from postboard.models.post import Post


@dataclass(frozen=True, slots=True)
class PostCreateIn:
    """
    Input DTO for post creation.

    :param title: Required title.
    :param body: Optional body text.
    :param sender: Author; the caller's id is used when omitted.
    """

    title: str | None
    body: str | None = None
    sender: str | None = None


@dataclass(frozen=True, slots=True)
class PostUpdateIn:
    title: str | None = None
    body: str | None = None
    sender: str | None = None


@dataclass(frozen=True, slots=True)
class PostOut:
    id: int
    title: str
    body: str
    sender: str
    created_at: datetime

    @classmethod
    def from_model(cls, post: Post) -> PostOut:
        return cls(
            id=post.id,
            title=post.title,
            body=post.body,
            sender=post.sender,
            created_at=post.created_at,
        )
