"""Comment repository."""

from __future__ import annotations

from postboard.models.comment import Comment
from postboard.repositories.base import BaseRepository


class CommentRepository(BaseRepository[Comment]):
    """Persistence-only repository for :class:`Comment`."""

    model = Comment

    def _filterable_fields(self):
        return {"post_id": Comment.post_id, "sender": Comment.sender}

    def _updatable_fields(self):
        return {"body", "sender"}

    def list_for_post(self, post_id: int) -> list[Comment]:
        """Comments of one post, newest first."""
        return self.list_newest_first(post_id=post_id)
