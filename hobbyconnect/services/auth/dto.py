# hobbyconnect/services/auth/dto.py
from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import timedelta
from typing import Any

from hobbyconnect.services._shared.errors import ConfigurationError

# ---------------------------- Input DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class RegisterIn:
    """
    Input DTO for local registration.

    :param email: Account email (kept exactly as submitted).
    :param password: Raw password (hashed before storage).
    :param name: Optional display name; defaults to the email local part.
    :param avatar_url: Optional profile picture URL.
    """

    email: str
    password: str
    name: str | None = None
    avatar_url: str | None = None


@dataclass(frozen=True, slots=True)
class LoginIn:
    """
    Input DTO for login.

    :param email: User email.
    :param password: Raw password (to be verified).
    """

    email: str
    password: str


@dataclass(frozen=True, slots=True)
class RefreshIn:
    """
    Input DTO for token refresh.

    :param refresh_token: Encoded refresh token.
    """

    refresh_token: str


@dataclass(frozen=True, slots=True)
class LogoutIn:
    """
    Input DTO for logout.

    :param refresh_token: Encoded refresh token to retire.
    """

    refresh_token: str


@dataclass(frozen=True, slots=True)
class GoogleSignInIn:
    """
    Input DTO for federated sign-in.

    :param credential: Google ID token obtained by the client.
    """

    credential: str


# --------------------------- Output DTOs ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenPair:
    """
    Access and refresh tokens minted together.

    :param access_token: Short-lived encoded access token.
    :param refresh_token: Long-lived encoded refresh token.
    """

    access_token: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class SessionOut:
    """
    Result of every successful session transition.

    :param tokens: Freshly issued pair.
    :param user_id: Subject the pair is bound to.
    :param email: Account email (reported by federated sign-in).
    :param avatar_url: Account avatar (reported by federated sign-in).
    """

    tokens: TokenPair
    user_id: str
    email: str | None = None
    avatar_url: str | None = None


@dataclass(frozen=True, slots=True)
class AccountOut:
    """Public profile of an account."""

    id: str
    email: str
    name: str
    bio: str | None
    avatar_url: str | None


# ------------------------------ Settings ---------------------------------- #


@dataclass(frozen=True, slots=True)
class TokenSettings:
    """
    Token issuance and rotation configuration.

    :param secret: Symmetric signing key; must be non-empty.
    :param algorithm: JWS algorithm.
    :param access_expires: Access token lifetime.
    :param refresh_expires: Refresh token lifetime.
    :param revoke_all_on_reuse: Wipe every session of a user whose unknown
        refresh token is presented.
    :param max_save_attempts: Compare-and-swap retries per transition.
    :raises ConfigurationError: If ``secret`` is empty or a lifetime is not positive.
    """

    secret: str
    algorithm: str = "HS256"
    access_expires: timedelta = timedelta(minutes=15)
    refresh_expires: timedelta = timedelta(days=7)
    revoke_all_on_reuse: bool = True
    max_save_attempts: int = 3

    def __post_init__(self) -> None:
        if not self.secret:
            raise ConfigurationError("TOKEN_SECRET must be configured")
        if self.access_expires <= timedelta(0) or self.refresh_expires <= timedelta(0):
            raise ConfigurationError("Token lifetimes must be positive")
        if self.max_save_attempts < 1:
            raise ConfigurationError("AUTH_SAVE_MAX_ATTEMPTS must be at least 1")

    @classmethod
    def from_mapping(cls, config: Mapping[str, Any]) -> TokenSettings:
        """Build settings from a Flask ``app.config``-like mapping."""
        return cls(
            secret=config.get("TOKEN_SECRET") or "",
            algorithm=config.get("TOKEN_ALGORITHM", "HS256"),
            access_expires=timedelta(seconds=int(config.get("ACCESS_TOKEN_EXPIRES_SECONDS", 900))),
            refresh_expires=timedelta(
                seconds=int(config.get("REFRESH_TOKEN_EXPIRES_SECONDS", 7 * 24 * 3600))
            ),
            revoke_all_on_reuse=bool(config.get("AUTH_REVOKE_ALL_ON_REUSE", True)),
            max_save_attempts=int(config.get("AUTH_SAVE_MAX_ATTEMPTS", 3)),
        )
