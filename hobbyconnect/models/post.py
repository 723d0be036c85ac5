"""Post and like models."""

from __future__ import annotations

from typing import TYPE_CHECKING

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from hobbyconnect.core.extensions import db

from .base import PKMixin, ReprMixin, TimestampMixin

if TYPE_CHECKING:
    from .comment import Comment
    from .user import User

DEFAULT_CATEGORY = "Uncategorized"


class Post(PKMixin, ReprMixin, TimestampMixin, db.Model):
    """
    User-authored post.

    Fields
    ------
    title, content : str
        Body of the post.
    category : str
        Free-form category, ``"Uncategorized"`` when omitted.
    image_url : str | None
        Optional image reference (upload handling is out of scope).
    author_id : str
        Owning user id as issued by the configured credential store. It is
        not a foreign key because accounts may live outside this database.
    """

    __tablename__ = "posts"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(50), nullable=False, default=DEFAULT_CATEGORY)
    image_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    author_id: Mapped[str] = mapped_column(String(32), nullable=False)

    author: Mapped[User | None] = relationship(primaryjoin="foreign(Post.author_id) == User.id")
    likes: Mapped[list[PostLike]] = relationship(
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="PostLike.created_at",
    )
    comments: Mapped[list[Comment]] = relationship(
        back_populates="post",
        cascade="all, delete-orphan",
    )

    __table_args__ = (
        Index("ix_posts_author_id", "author_id"),
        Index("ix_posts_category_created_at", "category", "created_at"),
    )


class PostLike(TimestampMixin, db.Model):
    """A single user's like on a post (at most one per user and post)."""

    __tablename__ = "post_likes"

    post_id: Mapped[int] = mapped_column(
        ForeignKey("posts.id", ondelete="CASCADE"), primary_key=True
    )
    user_id: Mapped[str] = mapped_column(String(32), primary_key=True)

    post: Mapped[Post] = relationship(back_populates="likes")
