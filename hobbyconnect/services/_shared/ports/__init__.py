"""
hobbyconnect.services._shared.ports
===================================

*Ports* (hexagonal interfaces) the service layer depends on.

Modules
-------
- :mod:`credential_store`:
    Defines :class:`~.CredentialStore`, the :class:`~.UserAccount` view and
    the :class:`~.LocalCredential` / :class:`~.FederatedCredential` union.

- :mod:`id_token_verifier`:
    Defines :class:`~.IdTokenVerifier` for federated sign-in.

Concrete adapters (SQLAlchemy, Redis, Google JWKS) live in
``hobbyconnect.repositories`` and ``hobbyconnect.infra``.
"""

from __future__ import annotations

from .credential_store import (
    Credential,
    CredentialStore,
    FederatedCredential,
    InMemoryCredentialStore,
    LocalCredential,
    UserAccount,
)
from .id_token_verifier import FederatedIdentity, IdTokenVerifier, StubIdTokenVerifier

__all__ = [
    "Credential",
    "CredentialStore",
    "FederatedCredential",
    "FederatedIdentity",
    "IdTokenVerifier",
    "InMemoryCredentialStore",
    "LocalCredential",
    "StubIdTokenVerifier",
    "UserAccount",
]
