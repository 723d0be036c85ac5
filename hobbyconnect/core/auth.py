"""Session-service wiring: build the auth collaborators once per app.

Configuration is read here and injected as :class:`TokenSettings`; the
services themselves never look at ``current_app.config``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from flask import Flask, current_app

from hobbyconnect.core.extensions import get_redis
from hobbyconnect.services._shared.errors import ConfigurationError
from hobbyconnect.services._shared.ports.credential_store import CredentialStore
from hobbyconnect.services._shared.ports.id_token_verifier import IdTokenVerifier
from hobbyconnect.services.auth.dto import TokenSettings
from hobbyconnect.services.auth.issuer import TokenIssuer
from hobbyconnect.services.auth.service import SessionService
from hobbyconnect.services.auth.validator import TokenValidator
from hobbyconnect.services.users.service import UserService

log = logging.getLogger(__name__)

EXTENSION_KEY = "auth"


@dataclass(slots=True)
class AuthComponents:
    """Collaborators shared by every request of one application."""

    settings: TokenSettings
    store: CredentialStore
    issuer: TokenIssuer
    validator: TokenValidator
    sessions: SessionService
    users: UserService


def build_store(app: Flask) -> CredentialStore:
    """
    Instantiate the credential store selected by ``CREDENTIAL_STORE``.

    :raises ConfigurationError: On an unknown backend name.
    """
    backend = (app.config.get("CREDENTIAL_STORE") or "sqlalchemy").lower()
    if backend == "sqlalchemy":
        from hobbyconnect.repositories.user import SQLAlchemyCredentialStore

        return SQLAlchemyCredentialStore()
    if backend == "redis":
        from hobbyconnect.infra.redis.redis_credential_store import RedisCredentialStore

        try:
            client = get_redis()
        except RuntimeError as exc:
            raise ConfigurationError("CREDENTIAL_STORE=redis requires REDIS_URL") from exc
        return RedisCredentialStore(r=client)
    raise ConfigurationError(f"Unknown CREDENTIAL_STORE {backend!r}")


def build_id_token_verifier(app: Flask) -> IdTokenVerifier | None:
    client_id = app.config.get("GOOGLE_CLIENT_ID")
    if not client_id:
        return None
    from hobbyconnect.infra.google.google_id_token_verifier import (
        GOOGLE_JWKS_URL,
        GoogleIdTokenVerifier,
    )

    return GoogleIdTokenVerifier(
        client_id=client_id, jwks_url=app.config.get("GOOGLE_JWKS_URL") or GOOGLE_JWKS_URL
    )


def init_app(app: Flask) -> None:
    """
    Build the auth components and attach them to ``app.extensions``.

    :raises ConfigurationError: If the token secret or store settings are
        invalid; the application refuses to start.
    """
    settings = TokenSettings.from_mapping(app.config)
    store = build_store(app)
    issuer = TokenIssuer(settings)
    validator = TokenValidator(settings, store)
    sessions = SessionService(
        store=store,
        issuer=issuer,
        validator=validator,
        id_tokens=build_id_token_verifier(app),
    )
    app.extensions[EXTENSION_KEY] = AuthComponents(
        settings=settings,
        store=store,
        issuer=issuer,
        validator=validator,
        sessions=sessions,
        users=UserService(store=store, max_attempts=settings.max_save_attempts),
    )
    log.debug("auth.init", extra={"event": "auth.init"})


def get_auth() -> AuthComponents:
    """Return the auth components of the current application."""
    return current_app.extensions[EXTENSION_KEY]
