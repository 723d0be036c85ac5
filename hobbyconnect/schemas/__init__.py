"""Convenience exports for application schemas."""

from __future__ import annotations

from .auth import (
    AccountSchema,
    GoogleSessionSchema,
    GoogleSignInSchema,
    LoginSchema,
    RefreshTokenSchema,
    RegisterSchema,
    TokenResponseSchema,
)
from .comment import CommentCreateSchema, CommentFilterSchema, CommentSchema, CommentUpdateSchema
from .common import MetaSchema, PaginationQuerySchema, build_meta
from .post import (
    LikeToggleSchema,
    PostCreateSchema,
    PostFilterSchema,
    PostSchema,
    PostUpdateSchema,
)
from .user import ContactSchema, ProfileUpdateSchema

__all__ = [
    "AccountSchema",
    "GoogleSessionSchema",
    "GoogleSignInSchema",
    "LoginSchema",
    "RefreshTokenSchema",
    "RegisterSchema",
    "TokenResponseSchema",
    "PaginationQuerySchema",
    "MetaSchema",
    "build_meta",
    "PostSchema",
    "PostCreateSchema",
    "PostUpdateSchema",
    "PostFilterSchema",
    "LikeToggleSchema",
    "CommentSchema",
    "CommentCreateSchema",
    "CommentUpdateSchema",
    "CommentFilterSchema",
    "ContactSchema",
    "ProfileUpdateSchema",
]
