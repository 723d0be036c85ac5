"""
Credential store port and the account view every adapter returns.

A store persists one document per user: email, credential, profile and the
outstanding refresh tokens. Writes go through :meth:`CredentialStore.save`,
a compare-and-swap keyed on :attr:`UserAccount.version`, so concurrent
session updates for the same user never silently overwrite each other.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, replace
from typing import Protocol
from uuid import uuid4

from hobbyconnect.services._shared.errors import ConflictError, StaleAccountError


@dataclass(frozen=True, slots=True)
class LocalCredential:
    """Email/password credential holding a salted password hash."""

    password_hash: str


@dataclass(frozen=True, slots=True)
class FederatedCredential:
    """Credential delegated to an external identity provider (no password)."""

    provider: str
    subject: str


Credential = LocalCredential | FederatedCredential


@dataclass(frozen=True, slots=True)
class UserAccount:
    """
    Immutable snapshot of a stored user.

    :ivar id: Opaque identifier (uuid4 hex).
    :ivar email: Unique email, compared exactly as stored.
    :ivar credential: Local password hash or federated identity.
    :ivar name: Display name.
    :ivar bio: Optional free-text profile blurb.
    :ivar avatar_url: Optional profile picture URL.
    :ivar refresh_tokens: Outstanding refresh tokens in issuance order.
    :ivar version: Optimistic-concurrency counter bumped by every save.
    """

    id: str
    email: str
    credential: Credential
    name: str
    bio: str | None = None
    avatar_url: str | None = None
    refresh_tokens: tuple[str, ...] = ()
    version: int = 0

    def has_refresh_token(self, token: str) -> bool:
        return token in self.refresh_tokens

    def with_refresh_token(self, token: str) -> UserAccount:
        """Return a copy with ``token`` appended (no duplicates)."""
        if token in self.refresh_tokens:
            return self
        return replace(self, refresh_tokens=(*self.refresh_tokens, token))

    def without_refresh_token(self, token: str) -> UserAccount:
        """Return a copy with ``token`` removed."""
        return replace(self, refresh_tokens=tuple(t for t in self.refresh_tokens if t != token))

    def without_sessions(self) -> UserAccount:
        """Return a copy with every outstanding refresh token dropped."""
        return replace(self, refresh_tokens=())

    def with_profile(
        self,
        *,
        name: str | None = None,
        bio: str | None = None,
        avatar_url: str | None = None,
    ) -> UserAccount:
        """Return a copy with the provided (non-``None``) profile fields replaced."""
        return replace(
            self,
            name=self.name if name is None else name,
            bio=self.bio if bio is None else bio,
            avatar_url=self.avatar_url if avatar_url is None else avatar_url,
        )


class CredentialStore(Protocol):
    """
    Persistence contract for user accounts.

    Implementations MUST make :meth:`save` an atomic compare-and-swap on
    ``version`` and MUST raise instead of swallowing persistence failures.
    """

    def find_by_email(self, email: str) -> UserAccount | None:
        """Return the account registered under ``email`` (exact match)."""

    def find_by_id(self, user_id: str) -> UserAccount | None:
        """Return the account identified by ``user_id``."""

    def create(
        self,
        *,
        email: str,
        credential: Credential,
        name: str,
        avatar_url: str | None = None,
        bio: str | None = None,
    ) -> UserAccount:
        """
        Insert a new account with an empty session set.

        :raises ConflictError: If ``email`` is already registered.
        :raises StoreError: On persistence failure.
        """

    def save(self, account: UserAccount) -> UserAccount:
        """
        Persist ``account`` if nobody else saved since it was read.

        :returns: The stored account with its version bumped.
        :raises StaleAccountError: If the stored version differs from ``account.version``.
        :raises StoreError: On persistence failure.
        """


class InMemoryCredentialStore(CredentialStore):
    """
    Dictionary-backed credential store.

    .. note::
       Uses a threading lock to keep ``create``/``save`` atomic in unit tests.
    """

    def __init__(self) -> None:
        self._by_id: dict[str, UserAccount] = {}
        self._email_index: dict[str, str] = {}
        self._lock = threading.Lock()

    def find_by_email(self, email: str) -> UserAccount | None:
        user_id = self._email_index.get(email)
        return self._by_id.get(user_id) if user_id else None

    def find_by_id(self, user_id: str) -> UserAccount | None:
        return self._by_id.get(user_id)

    def create(
        self,
        *,
        email: str,
        credential: Credential,
        name: str,
        avatar_url: str | None = None,
        bio: str | None = None,
    ) -> UserAccount:
        with self._lock:
            if email in self._email_index:
                raise ConflictError("User", "email already registered")
            account = UserAccount(
                id=uuid4().hex,
                email=email,
                credential=credential,
                name=name,
                bio=bio,
                avatar_url=avatar_url,
            )
            self._by_id[account.id] = account
            self._email_index[email] = account.id
            return account

    def save(self, account: UserAccount) -> UserAccount:
        with self._lock:
            current = self._by_id.get(account.id)
            if current is None or current.version != account.version:
                raise StaleAccountError(account.id, account.version)
            stored = replace(account, version=account.version + 1)
            self._by_id[account.id] = stored
            return stored
