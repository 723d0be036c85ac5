"""
Token issuance.

Both tokens of a pair are HS256 JWTs carrying the same ``sub`` (user id)
and the same random ``nonce``; they differ in ``typ`` and lifetime. The
nonce makes every issuance unique even when two pairs are minted for the
same user within the same second.
"""

from __future__ import annotations

import secrets
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

import jwt

from hobbyconnect.services._shared.errors import ConfigurationError, MalformedTokenError
from hobbyconnect.services.auth.dto import TokenPair, TokenSettings

ACCESS = "access"
REFRESH = "refresh"
NONCE_BYTES = 16


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """
    Typed view of a decoded token payload.

    :ivar subject_id: Owning user id (``sub``).
    :ivar nonce: Per-issuance random value shared by both tokens of a pair.
    :ivar token_type: ``"access"`` or ``"refresh"`` (``typ``).
    :ivar issued_at: ``iat`` as a UTC datetime.
    :ivar expires_at: ``exp`` as a UTC datetime.
    """

    subject_id: str
    nonce: str
    token_type: str
    issued_at: datetime
    expires_at: datetime

    def to_payload(self) -> dict[str, Any]:
        return {
            "sub": self.subject_id,
            "nonce": self.nonce,
            "typ": self.token_type,
            "iat": int(self.issued_at.timestamp()),
            "exp": int(self.expires_at.timestamp()),
        }

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> TokenClaims:
        """
        Validate a decoded payload.

        :raises MalformedTokenError: If a claim is missing or has the wrong type.
        """
        sub = payload.get("sub")
        nonce = payload.get("nonce")
        typ = payload.get("typ")
        iat = payload.get("iat")
        exp = payload.get("exp")
        if not isinstance(sub, str) or not sub:
            raise MalformedTokenError("Missing subject")
        if not isinstance(nonce, str) or not nonce:
            raise MalformedTokenError("Missing nonce")
        if typ not in (ACCESS, REFRESH):
            raise MalformedTokenError("Missing token type")
        if isinstance(iat, bool) or not isinstance(iat, int):
            raise MalformedTokenError("Missing issued-at")
        if isinstance(exp, bool) or not isinstance(exp, int):
            raise MalformedTokenError("Missing expiry")
        return cls(
            subject_id=sub,
            nonce=nonce,
            token_type=typ,
            issued_at=datetime.fromtimestamp(iat, tz=UTC),
            expires_at=datetime.fromtimestamp(exp, tz=UTC),
        )


class TokenIssuer:
    """
    Mint access/refresh pairs. Pure: persisting the refresh token is the
    caller's job.

    :param settings: Signing secret, algorithm and lifetimes.
    :raises ConfigurationError: If no settings (or no secret) are provided.
    """

    def __init__(self, settings: TokenSettings | None) -> None:
        if settings is None or not settings.secret:
            raise ConfigurationError("TOKEN_SECRET must be configured")
        self.settings = settings

    def issue(self, subject_id: str) -> TokenPair:
        """Return a new pair bound to ``subject_id`` with a fresh nonce."""
        now = datetime.now(UTC).replace(microsecond=0)
        nonce = secrets.token_hex(NONCE_BYTES)
        access = TokenClaims(
            subject_id=subject_id,
            nonce=nonce,
            token_type=ACCESS,
            issued_at=now,
            expires_at=now + self.settings.access_expires,
        )
        refresh = TokenClaims(
            subject_id=subject_id,
            nonce=nonce,
            token_type=REFRESH,
            issued_at=now,
            expires_at=now + self.settings.refresh_expires,
        )
        return TokenPair(access_token=self._encode(access), refresh_token=self._encode(refresh))

    def _encode(self, claims: TokenClaims) -> str:
        return jwt.encode(
            claims.to_payload(), self.settings.secret, algorithm=self.settings.algorithm
        )
