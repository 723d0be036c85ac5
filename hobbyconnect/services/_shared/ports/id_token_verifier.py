"""
Port for verifying identity tokens issued by an external provider.

The session service only needs the verified identity; how the provider's
signature is checked (JWKS download, audience, issuer) lives in
``hobbyconnect.infra``.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Protocol

from hobbyconnect.services._shared.errors import InvalidTokenError


@dataclass(frozen=True, slots=True)
class FederatedIdentity:
    """
    Identity asserted by a verified provider token.

    :ivar provider: Provider key (e.g. ``"google"``).
    :ivar subject: Provider-scoped stable user id (``sub`` claim).
    :ivar email: Verified email address.
    :ivar name: Display name, when provided.
    :ivar picture: Avatar URL, when provided.
    """

    provider: str
    subject: str
    email: str
    name: str | None = None
    picture: str | None = None


class IdTokenVerifier(Protocol):
    """Verify a provider-issued ID token and return the identity it asserts."""

    def verify(self, credential: str) -> FederatedIdentity:
        """
        :raises InvalidTokenError: If the token is not acceptable.
        :raises ConfigurationError: If the verifier is not configured.
        """


class StubIdTokenVerifier(IdTokenVerifier):
    """
    Deterministic verifier for tests.

    Maps opaque credential strings onto pre-registered identities; any other
    credential is rejected.
    """

    def __init__(self, identities: Mapping[str, FederatedIdentity] | None = None) -> None:
        self.identities = dict(identities or {})

    def verify(self, credential: str) -> FederatedIdentity:
        identity = self.identities.get(credential)
        if identity is None:
            raise InvalidTokenError("Unknown test credential")
        return identity
