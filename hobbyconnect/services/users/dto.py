"""DTOs for UserService."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class ProfileUpdateIn:
    """
    Partial profile update.

    :param user_id: Account being edited.
    :param actor_id: Authenticated caller; must equal ``user_id``.
    :param name: New display name, or ``None`` to keep it.
    :param bio: New bio, or ``None`` to keep it.
    :param avatar_url: New avatar URL, or ``None`` to keep it.
    """

    user_id: str
    actor_id: str
    name: str | None = None
    bio: str | None = None
    avatar_url: str | None = None


@dataclass(frozen=True, slots=True)
class PublicContactOut:
    """Name, email and picture, as looked up by email."""

    name: str
    email: str
    avatar_url: str | None
