"""Repository for :class:`Post` and its likes."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from sqlalchemy import Select, select
from sqlalchemy.orm import InstrumentedAttribute, selectinload

from hobbyconnect.models.post import Post, PostLike
from hobbyconnect.repositories.base import BaseRepository, Page, Pagination


class PostRepository(BaseRepository[Post]):
    """
    Persistence-only repository for :class:`Post`.

    Listings are ordered newest first. Likes are eager-loaded because every
    serialized post carries its ``likedBy`` list.
    """

    model = Post

    # ---------------------------- Whitelists ----------------------------
    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {
            "created_at": self.model.created_at,
            "updated_at": self.model.updated_at,
            "title": self.model.title,
            "category": self.model.category,
        }

    def _default_eagerload(self, stmt: Select[Any]) -> Select[Any]:
        return stmt.options(selectinload(self.model.likes))

    # ---------------------------- Listings ----------------------------
    def list_posts(self, pagination: Pagination, *, category: str | None = None) -> Page[Post]:
        stmt = select(self.model)
        if category:
            stmt = stmt.where(self.model.category == category)
        return self.paginate_statement(stmt, self._newest_first(pagination), newest_first=True)

    def list_by_author(self, author_id: str, pagination: Pagination) -> Page[Post]:
        stmt = select(self.model).where(self.model.author_id == author_id)
        return self.paginate_statement(stmt, self._newest_first(pagination), newest_first=True)

    @staticmethod
    def _newest_first(pagination: Pagination) -> Pagination:
        if pagination.sort:
            return pagination
        return Pagination(page=pagination.page, limit=pagination.limit, sort=["-created_at"])

    # ---------------------------- Mutations ----------------------------
    def update(self, post: Post, **fields: Any) -> Post:
        """Assign the given non-``None`` fields and flush."""
        for name in ("title", "content", "category", "image_url"):
            value = fields.get(name)
            if value is not None:
                setattr(post, name, value)
        self.flush()
        return post

    # ---------------------------- Likes ----------------------------
    def get_like(self, post_id: int, user_id: str) -> PostLike | None:
        return cast(PostLike | None, self.session.get(PostLike, (post_id, user_id)))

    def add_like(self, post: Post, user_id: str) -> PostLike:
        like = PostLike(post_id=post.id, user_id=user_id)
        post.likes.append(like)
        self.flush()
        return like

    def remove_like(self, post: Post, like: PostLike) -> None:
        post.likes.remove(like)
        self.flush()
