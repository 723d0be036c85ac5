"""
Token validation.

Access tokens are verified statelessly. Refresh tokens must additionally be
present in their owner's outstanding set; a token that verifies but is not
in the set is treated as stolen and, when configured, every session of the
owner is revoked before the request is rejected.
"""

from __future__ import annotations

import logging

import jwt

from hobbyconnect.services._shared.errors import (
    ConfigurationError,
    InvalidTokenError,
    MalformedTokenError,
    StaleAccountError,
    StoreError,
    TokenExpiredError,
    TokenNotRecognizedError,
)
from hobbyconnect.services._shared.ports.credential_store import CredentialStore, UserAccount
from hobbyconnect.services.auth.dto import TokenSettings
from hobbyconnect.services.auth.issuer import ACCESS, REFRESH, TokenClaims

log = logging.getLogger(__name__)

REQUIRED_CLAIMS = ["sub", "iat", "exp"]


class TokenValidator:
    """
    Verify tokens minted by :class:`~hobbyconnect.services.auth.issuer.TokenIssuer`.

    :param settings: Shared signing configuration.
    :param store: Credential store consulted for refresh tokens.
    """

    def __init__(self, settings: TokenSettings | None, store: CredentialStore) -> None:
        if settings is None or not settings.secret:
            raise ConfigurationError("TOKEN_SECRET must be configured")
        self.settings = settings
        self.store = store

    def decode(self, token: str, expected_type: str) -> TokenClaims:
        """
        Check signature, expiry and payload shape.

        :raises TokenExpiredError: If ``exp`` has passed.
        :raises MalformedTokenError: If the token cannot be parsed or lacks claims.
        :raises InvalidTokenError: On a bad signature or the wrong token type.
        """
        try:
            payload = jwt.decode(
                token,
                self.settings.secret,
                algorithms=[self.settings.algorithm],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as exc:
            raise TokenExpiredError() from exc
        except jwt.InvalidSignatureError as exc:
            raise InvalidTokenError() from exc
        except (jwt.DecodeError, jwt.MissingRequiredClaimError) as exc:
            raise MalformedTokenError() from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError() from exc

        claims = TokenClaims.from_payload(payload)
        if claims.token_type != expected_type:
            raise InvalidTokenError("Unexpected token type")
        return claims

    def validate_access(self, token: str) -> str:
        """Return the subject id of a valid access token. No store lookup."""
        return self.decode(token, ACCESS).subject_id

    def validate_refresh(self, token: str) -> UserAccount:
        """
        Return the owner of a valid, outstanding refresh token.

        :raises InvalidTokenError: If the token fails verification or its owner is gone.
        :raises TokenNotRecognizedError: If the token verifies but is not outstanding.
        :raises StoreError: If the store fails while loading or revoking.
        """
        claims = self.decode(token, REFRESH)
        account = self.store.find_by_id(claims.subject_id)
        if account is None:
            raise InvalidTokenError("Unknown subject")
        if not account.has_refresh_token(token):
            log.warning(
                "auth.refresh.reuse_detected",
                extra={"event": "auth.refresh.reuse_detected", "user_id": account.id},
            )
            if self.settings.revoke_all_on_reuse:
                self.revoke_all(account)
            raise TokenNotRecognizedError()
        return account

    def revoke_all(self, account: UserAccount) -> None:
        """Persist an empty session set for ``account``, retrying stale saves."""
        current: UserAccount | None = account
        for _ in range(self.settings.max_save_attempts):
            if current is None or not current.refresh_tokens:
                return
            try:
                self.store.save(current.without_sessions())
                return
            except StaleAccountError:
                current = self.store.find_by_id(account.id)
        raise StoreError("Could not revoke sessions after repeated conflicts")
