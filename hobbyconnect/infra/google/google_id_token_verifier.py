# comments in English; reST docstrings
from __future__ import annotations

import logging
from dataclasses import dataclass, field

import jwt
from jwt import PyJWKClient
from jwt.exceptions import PyJWKClientError

from hobbyconnect.services._shared.errors import ConfigurationError, InvalidTokenError
from hobbyconnect.services._shared.ports.id_token_verifier import (
    FederatedIdentity,
    IdTokenVerifier,
)

log = logging.getLogger(__name__)

GOOGLE_ISSUERS = ("accounts.google.com", "https://accounts.google.com")
GOOGLE_JWKS_URL = "https://www.googleapis.com/oauth2/v3/certs"


@dataclass(slots=True)
class GoogleIdTokenVerifier(IdTokenVerifier):
    """
    Verify Google ID tokens against Google's published signing keys.

    Checks signature (RS256 via JWKS), expiry, audience (our OAuth client id),
    issuer and that Google verified the email address.

    :param client_id: OAuth client id the token must be issued for.
    :param jwks_url: Key set endpoint; the client caches fetched keys.
    """

    client_id: str
    jwks_url: str = GOOGLE_JWKS_URL
    _jwks: PyJWKClient = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not self.client_id:
            raise ConfigurationError("GOOGLE_CLIENT_ID must be configured")
        self._jwks = PyJWKClient(self.jwks_url)

    def verify(self, credential: str) -> FederatedIdentity:
        try:
            signing_key = self._jwks.get_signing_key_from_jwt(credential)
            claims = jwt.decode(
                credential,
                signing_key.key,
                algorithms=["RS256"],
                audience=self.client_id,
                options={"require": ["exp", "iat", "sub", "iss", "aud"]},
            )
        except PyJWKClientError as exc:
            log.warning("auth.google.jwks_error", extra={"event": "auth.google.jwks_error"})
            raise InvalidTokenError("Unable to fetch signing key") from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError("Google credential rejected") from exc

        if claims.get("iss") not in GOOGLE_ISSUERS:
            raise InvalidTokenError("Unexpected issuer")
        email = claims.get("email")
        if not isinstance(email, str) or not claims.get("email_verified"):
            raise InvalidTokenError("Email not verified by provider")
        return FederatedIdentity(
            provider="google",
            subject=str(claims["sub"]),
            email=email,
            name=claims.get("name"),
            picture=claims.get("picture"),
        )
