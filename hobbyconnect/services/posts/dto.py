"""
DTOs for PostService.

Framework-agnostic contracts between the API layer and the post service.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from hobbyconnect.services._shared.dto import PageMeta, PaginationIn

# --------------------------------------------------------------------------- #
# Input DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class PostListIn:
    """
    Listing parameters.

    :param pagination: Page and limit.
    :param category: Optional exact-match category filter.
    """

    pagination: PaginationIn = PaginationIn()
    category: str | None = None


@dataclass(frozen=True, slots=True)
class PostCreateIn:
    """
    Input DTO for creating a post. The author comes from the auth gate.

    :param author_id: Authenticated user id.
    :param title: Post title.
    :param content: Post body.
    :param category: Optional category (defaults to ``"Uncategorized"``).
    :param image_url: Optional image reference.
    """

    author_id: str
    title: str
    content: str
    category: str | None = None
    image_url: str | None = None


@dataclass(frozen=True, slots=True)
class PostUpdateIn:
    """Partial update; ``None`` leaves a field unchanged."""

    post_id: int
    actor_id: str
    title: str | None = None
    content: str | None = None
    category: str | None = None
    image_url: str | None = None


# --------------------------------------------------------------------------- #
# Output DTOs
# --------------------------------------------------------------------------- #


@dataclass(frozen=True, slots=True)
class PostOut:
    id: int
    title: str
    content: str
    category: str
    image_url: str | None
    author_id: str
    liked_by: list[str]
    created_at: datetime
    updated_at: datetime


@dataclass(frozen=True, slots=True)
class PostListOut:
    items: list[PostOut]
    meta: PageMeta


@dataclass(frozen=True, slots=True)
class LikeToggleOut:
    """
    Result of toggling a like.

    :param liked: Whether the caller likes the post after the toggle.
    :param liked_by: User ids currently liking the post.
    """

    liked: bool
    liked_by: list[str]
