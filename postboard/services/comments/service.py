"""Comment CRUD service."""

from __future__ import annotations

from typing import Any

from postboard.repositories.comment import CommentRepository
from postboard.services._shared.base import BaseService, require_fields
from postboard.services._shared.errors import NotFoundError
from postboard.services.comments.dto import CommentCreateIn, CommentOut, CommentUpdateIn


class CommentService(BaseService):
    """Application service for comments on posts."""

    def create_comment(self, dto: CommentCreateIn) -> CommentOut:
        """
        Attach a comment to an existing post.

        :raises ValidationError: If a field is absent or blank.
        :raises NotFoundError: If the post does not exist.
        """
        require_fields(postId=dto.post_id, sender=dto.sender, body=dto.body)

        with self.rw_uow() as uow:
            if uow.posts.get(dto.post_id) is None:
                raise NotFoundError("Post", dto.post_id or 0)
            repo: CommentRepository = uow.comments
            comment = repo.add(
                repo.model(post_id=dto.post_id, sender=dto.sender, body=dto.body)
            )
            return CommentOut.from_model(comment)

    def list_for_post(self, post_id: int) -> list[CommentOut]:
        """Comments of ``post_id``, newest first; empty for an unknown post."""
        with self.ro_uow() as uow:
            return [CommentOut.from_model(c) for c in uow.comments.list_for_post(post_id)]

    def get_comment(self, comment_id: int) -> CommentOut:
        with self.ro_uow() as uow:
            comment = uow.comments.get(comment_id)
            if comment is None:
                raise NotFoundError("Comment", comment_id)
            return CommentOut.from_model(comment)

    def update_comment(self, comment_id: int, dto: CommentUpdateIn) -> CommentOut:
        """
        Apply the non-``None`` fields of ``dto``.

        :raises ValidationError: If a field is set to a blank string.
        :raises NotFoundError: If the comment does not exist.
        """
        updates: dict[str, Any] = {
            k: v for k, v in {"body": dto.body, "sender": dto.sender}.items() if v is not None
        }
        if updates:
            require_fields(**updates)

        with self.rw_uow() as uow:
            comment = uow.comments.get(comment_id)
            if comment is None:
                raise NotFoundError("Comment", comment_id)
            uow.comments.assign_updates(comment, updates)
            return CommentOut.from_model(comment)

    def delete_comment(self, comment_id: int) -> None:
        with self.rw_uow() as uow:
            comment = uow.comments.get(comment_id)
            if comment is None:
                raise NotFoundError("Comment", comment_id)
            uow.comments.delete(comment)
