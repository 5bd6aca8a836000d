"""Post CRUD service."""

from __future__ import annotations

from typing import Any

from postboard.repositories.post import PostRepository
from postboard.services._shared.base import BaseService, require_fields
from postboard.services._shared.errors import NotFoundError
from postboard.services.posts.dto import PostCreateIn, PostOut, PostUpdateIn


class PostService(BaseService):
    """
    Application service for posts.

    ``ctx.actor_id`` supplies the default ``sender`` of new posts.
    """

    def create_post(self, dto: PostCreateIn) -> PostOut:
        """
        Create a post.

        :raises ValidationError: If ``title`` is absent or blank, or no sender
            can be determined.
        """
        sender = dto.sender
        if sender is None and self.ctx.actor_id is not None:
            sender = str(self.ctx.actor_id)
        require_fields(title=dto.title, sender=sender)

        with self.rw_uow() as uow:
            repo: PostRepository = uow.posts
            post = repo.add(repo.model(title=dto.title, body=dto.body or "", sender=sender))
            return PostOut.from_model(post)

    def list_posts(self, *, sender: str | None = None) -> list[PostOut]:
        """Newest first; ``sender`` narrows to one author."""
        with self.ro_uow() as uow:
            return [PostOut.from_model(p) for p in uow.posts.list_newest_first(sender=sender)]

    def get_post(self, post_id: int) -> PostOut:
        with self.ro_uow() as uow:
            post = uow.posts.get(post_id)
            if post is None:
                raise NotFoundError("Post", post_id)
            return PostOut.from_model(post)

    def update_post(self, post_id: int, dto: PostUpdateIn) -> PostOut:
        """
        Apply the non-``None`` fields of ``dto``.

        :raises ValidationError: If ``title`` is set to a blank string.
        :raises NotFoundError: If the post does not exist.
        """
        if dto.title is not None:
            require_fields(title=dto.title)
        updates: dict[str, Any] = {
            k: v
            for k, v in {"title": dto.title, "body": dto.body, "sender": dto.sender}.items()
            if v is not None
        }

        with self.rw_uow() as uow:
            post = uow.posts.get(post_id)
            if post is None:
                raise NotFoundError("Post", post_id)
            uow.posts.assign_updates(post, updates)
            return PostOut.from_model(post)

    def delete_post(self, post_id: int) -> None:
        """Delete a post and its comments."""
        with self.rw_uow() as uow:
            post = uow.posts.get(post_id)
            if post is None:
                raise NotFoundError("Post", post_id)
            uow.posts.delete(post)
