"""Repository package exposing persistence-layer access for the domain models."""

from __future__ import annotations

from hobbyconnect.repositories.base import (
    BaseRepository,
    Page,
    Pagination,
    apply_sorting,
    paginate_select,
)
from hobbyconnect.repositories.comment import CommentRepository
from hobbyconnect.repositories.post import PostRepository
from hobbyconnect.repositories.user import SQLAlchemyCredentialStore

__all__ = [
    # Base
    "BaseRepository",
    "Page",
    "Pagination",
    "paginate_select",
    "apply_sorting",
    # Domain
    "PostRepository",
    "CommentRepository",
    "SQLAlchemyCredentialStore",
]
