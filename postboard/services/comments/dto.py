"""DTOs for CommentService."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from postboard.models.comment import Comment


@dataclass(frozen=True, slots=True)
class CommentCreateIn:
    """
    Input DTO for comment creation. Every field is required.

    :param post_id: Commented post; it must exist.
    :param sender: Author.
    :param body: Comment text.
    """

    post_id: int | None
    sender: str | None
    body: str | None


@dataclass(frozen=True, slots=True)
class CommentUpdateIn:
    body: str | None = None
    sender: str | None = None


@dataclass(frozen=True, slots=True)
class CommentOut:
    id: int
    post_id: int
    sender: str
    body: str
    created_at: datetime

    @classmethod
    def from_model(cls, comment: Comment) -> CommentOut:
        return cls(
            id=comment.id,
            post_id=comment.post_id,
            sender=comment.sender,
            body=comment.body,
            created_at=comment.created_at,
        )
