"""Comment model."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hobbyconnect.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .post import Post


class Comment(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """Comment left by ``author_id`` on ``post_id``."""

    __tablename__ = "comments"

    content: Mapped[str] = mapped_column(Text, nullable=False)
    post_id: Mapped[int] = mapped_column(
        ForeignKey("posts.id", ondelete="CASCADE"), nullable=False
    )
    author_id: Mapped[str] = mapped_column(String(32), nullable=False)

    post: Mapped[Post] = relationship(back_populates="comments")

    __table_args__ = (Index("ix_comments_post_id", "post_id"),)
