"""Post repository."""

from __future__ import annotations

from postboard.models.post import Post
from postboard.repositories.base import BaseRepository


class PostRepository(BaseRepository[Post]):
    """Persistence-only repository for :class:`Post`."""

    model = Post

    def _filterable_fields(self):
        return {"sender": Post.sender}

    def _updatable_fields(self):
        return {"title", "body", "sender"}
