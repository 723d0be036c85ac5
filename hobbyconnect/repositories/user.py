"""Relational credential store backed by the ``users`` table."""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import cast

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from hobbyconnect.core.extensions import db
from hobbyconnect.models.user import User
from hobbyconnect.services._shared.errors import (
    ConflictError,
    StaleAccountError,
    StoreError,
    violates,
)
from hobbyconnect.services._shared.ports.credential_store import (
    Credential,
    CredentialStore,
    FederatedCredential,
    LocalCredential,
    UserAccount,
)

log = logging.getLogger(__name__)


def _credential_columns(credential: Credential) -> dict[str, str | None]:
    if isinstance(credential, LocalCredential):
        return {
            "password_hash": credential.password_hash,
            "auth_provider": None,
            "provider_subject": None,
        }
    return {
        "password_hash": None,
        "auth_provider": credential.provider,
        "provider_subject": credential.subject,
    }


def to_account(row: User) -> UserAccount:
    """Map an ORM row onto the immutable :class:`UserAccount` view."""
    credential: Credential
    if row.password_hash is not None:
        credential = LocalCredential(password_hash=row.password_hash)
    else:
        credential = FederatedCredential(
            provider=row.auth_provider or "", subject=row.provider_subject or ""
        )
    return UserAccount(
        id=row.id,
        email=row.email,
        credential=credential,
        name=row.name,
        bio=row.bio,
        avatar_url=row.avatar_url,
        refresh_tokens=tuple(row.refresh_tokens or ()),
        version=row.version,
    )


class SQLAlchemyCredentialStore(CredentialStore):
    """
    :class:`CredentialStore` over the Flask-scoped SQLAlchemy session.

    Each write is its own transaction. :meth:`save` issues a single
    ``UPDATE ... WHERE id = :id AND version = :expected`` and inspects the
    affected row count, so two writers racing on the same user cannot both
    win regardless of isolation level.
    """

    def __init__(self, session: Session | None = None) -> None:
        self._session = session

    @property
    def session(self) -> Session:
        if self._session is not None:
            return self._session
        return cast(Session, db.session)

    # ---------------------------- Lookups ----------------------------

    def _first(self, *criteria) -> UserAccount | None:
        stmt = select(User).where(*criteria).execution_options(populate_existing=True)
        try:
            row = self.session.execute(stmt).scalars().first()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StoreError("User lookup failed") from exc
        return to_account(row) if row is not None else None

    def find_by_email(self, email: str) -> UserAccount | None:
        return self._first(User.email == email)

    def find_by_id(self, user_id: str) -> UserAccount | None:
        return self._first(User.id == user_id)

    # ---------------------------- Writes -----------------------------

    def create(
        self,
        *,
        email: str,
        credential: Credential,
        name: str,
        avatar_url: str | None = None,
        bio: str | None = None,
    ) -> UserAccount:
        row = User(
            email=email,
            name=name,
            bio=bio,
            avatar_url=avatar_url,
            refresh_tokens=[],
            version=0,
            **_credential_columns(credential),
        )
        try:
            self.session.add(row)
            self.session.commit()
        except IntegrityError as exc:
            self.session.rollback()
            if violates(exc, "uq_users_email") or violates(exc, "users.email"):
                raise ConflictError("User", "email already registered") from exc
            raise StoreError("User insert failed") from exc
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StoreError("User insert failed") from exc
        return to_account(row)

    def save(self, account: UserAccount) -> UserAccount:
        stmt = (
            update(User)
            .where(User.id == account.id, User.version == account.version)
            .values(
                name=account.name,
                bio=account.bio,
                avatar_url=account.avatar_url,
                refresh_tokens=list(account.refresh_tokens),
                version=account.version + 1,
                **_credential_columns(account.credential),
            )
            .execution_options(synchronize_session=False)
        )
        try:
            result = self.session.execute(stmt)
            if result.rowcount != 1:
                self.session.rollback()
                log.debug(
                    "auth.save.stale",
                    extra={"event": "auth.save.stale", "user_id": account.id},
                )
                raise StaleAccountError(account.id, account.version)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise StoreError("User update failed") from exc
        return replace(account, version=account.version + 1)
