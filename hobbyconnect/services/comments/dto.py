"""DTOs for CommentService."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from hobbyconnect.services._shared.dto import PageMeta, PaginationIn


@dataclass(frozen=True, slots=True)
class CommentListIn:
    """
    Listing parameters.

    :param pagination: Page and limit.
    :param post_id: Restrict to comments on one post.
    """

    pagination: PaginationIn = PaginationIn(limit=50)
    post_id: int | None = None


@dataclass(frozen=True, slots=True)
class CommentCreateIn:
    author_id: str
    post_id: int
    content: str


@dataclass(frozen=True, slots=True)
class CommentUpdateIn:
    comment_id: int
    actor_id: str
    content: str


@dataclass(frozen=True, slots=True)
class CommentOut:
    id: int
    post_id: int
    author_id: str
    content: str
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True, slots=True)
class CommentListOut:
    items: list[CommentOut]
    meta: PageMeta
