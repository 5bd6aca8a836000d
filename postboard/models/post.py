"""Post model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from postboard.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:  # pragma: no cover - typing helper
    from .comment import Comment


class Post(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    A published post.

    ``sender`` is free text; posts created through the API default it to the
    authenticated user's id.
    """

    __tablename__ = "posts"
    __repr_fields__ = ("title", "sender")

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    body: Mapped[str] = mapped_column(Text, nullable=False, default="")
    sender: Mapped[str] = mapped_column(String(100), nullable=False, index=True)

    comments: Mapped[list[Comment]] = relationship(
        back_populates="post",
        cascade="all, delete-orphan",
    )
