"""Repository for :class:`Comment`."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import InstrumentedAttribute

from hobbyconnect.models.comment import Comment
from hobbyconnect.repositories.base import BaseRepository, Page, Pagination


class CommentRepository(BaseRepository[Comment]):
    """Persistence-only repository for :class:`Comment` (oldest first per post)."""

    model = Comment

    def _sortable_fields(self) -> Mapping[str, InstrumentedAttribute[Any]]:
        return {
            "created_at": self.model.created_at,
            "updated_at": self.model.updated_at,
        }

    def list_comments(self, pagination: Pagination, *, post_id: int | None = None) -> Page[Comment]:
        stmt = select(self.model)
        if post_id is not None:
            stmt = stmt.where(self.model.post_id == post_id)
        return self.paginate_statement(stmt, pagination)

    def update(self, comment: Comment, *, content: str) -> Comment:
        comment.content = content
        self.flush()
        return comment
