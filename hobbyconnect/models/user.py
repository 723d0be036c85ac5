"""User model: credential, profile and outstanding refresh tokens."""

from __future__ import annotations

from typing import Any

from sqlalchemy import JSON, CheckConstraint, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from hobbyconnect.core.extensions import db

from .base import PublicIdMixin, ReprMixin, TimestampMixin


class User(PublicIdMixin, ReprMixin, TimestampMixin, db.Model):
    """
    Persisted user document.

    Fields
    ------
    email : str
        Login email, unique and stored exactly as submitted.
    password_hash : str | None
        Salted hash for local accounts; ``NULL`` for federated accounts.
    auth_provider : str | None
        Identity provider key (``"google"``) for federated accounts.
    provider_subject : str | None
        Provider-scoped subject id for federated accounts.
    name, bio, avatar_url : str
        Public profile.
    refresh_tokens : list[str]
        Outstanding refresh tokens in issuance order.
    version : int
        Compare-and-swap counter; every successful save increments it.
    """

    __tablename__ = "users"

    email: Mapped[str] = mapped_column(String(254), nullable=False)
    password_hash: Mapped[str | None] = mapped_column(String(255), nullable=True)
    auth_provider: Mapped[str | None] = mapped_column(String(32), nullable=True)
    provider_subject: Mapped[str | None] = mapped_column(String(255), nullable=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    avatar_url: Mapped[str | None] = mapped_column(String(512), nullable=True)
    refresh_tokens: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)
    version: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    __table_args__ = (
        UniqueConstraint("email", name="uq_users_email"),
        CheckConstraint(
            "password_hash IS NOT NULL OR provider_subject IS NOT NULL",
            name="has_credential",
        ),
    )
