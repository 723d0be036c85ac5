"""Service layer public API.

This package exposes the essential building blocks for the service layer so that
callers can import from :mod:`hobbyconnect.services` without knowing internal
structure.

Re-exports
----------
- Base primitives (from ``hobbyconnect.services._shared.base``)
    * :class:`BaseService`

- Shared DTOs (from ``hobbyconnect.services._shared.dto``)
    * :class:`PaginationIn`
    * :class:`PageMeta`

- Session lifecycle (from ``hobbyconnect.services.auth``)
    * :class:`SessionService`, :class:`TokenIssuer`, :class:`TokenValidator`

- Content services
    * :class:`UserService`, :class:`PostService`, :class:`CommentService`
"""

from __future__ import annotations

from ._shared.base import BaseService
from ._shared.dto import PageMeta, PaginationIn
from .auth.issuer import TokenIssuer
from .auth.service import SessionService
from .auth.validator import TokenValidator
from .comments.service import CommentService
from .posts.service import PostService
from .users.service import UserService

__all__ = [
    # Base
    "BaseService",
    # Shared DTOs
    "PaginationIn",
    "PageMeta",
    # Auth
    "SessionService",
    "TokenIssuer",
    "TokenValidator",
    # Content
    "UserService",
    "PostService",
    "CommentService",
]
