# comments in English; reST docstrings
from __future__ import annotations

import json
import logging
from dataclasses import dataclass, replace
from uuid import uuid4

import redis
from redis.exceptions import RedisError

from hobbyconnect.services._shared.errors import ConflictError, StaleAccountError, StoreError
from hobbyconnect.services._shared.ports import (
    Credential,
    CredentialStore,
    FederatedCredential,
    LocalCredential,
    UserAccount,
)

log = logging.getLogger(__name__)


def _b(value: bytes | str | None, default: str = "") -> str:
    if value is None:
        return default
    return value.decode() if isinstance(value, bytes | bytearray) else str(value)


@dataclass(slots=True)
class RedisCredentialStore(CredentialStore):
    """
    Redis-backed credential store.

    Layout
    ------
    - ``user:{id}``: hash holding the whole account document.
    - ``user:email:{email}``: string pointing at the owning user id; created
      with ``SET NX`` so two registrations of the same email cannot both win.

    :meth:`save` uses ``WATCH``/``MULTI``/``EXEC`` on the account hash: the
    version is compared after ``WATCH`` and any concurrent write aborts the
    transaction, which surfaces as :class:`StaleAccountError`.

    :param r: A Redis client (already connected).
    """

    r: redis.Redis

    # -------------------- helpers --------------------

    @staticmethod
    def _k(user_id: str) -> str:
        return f"user:{user_id}"

    @staticmethod
    def _ke(email: str) -> str:
        return f"user:email:{email}"

    @staticmethod
    def _to_mapping(account: UserAccount) -> dict[str, str]:
        mapping = {
            "id": account.id,
            "email": account.email,
            "name": account.name,
            "bio": account.bio or "",
            "avatar_url": account.avatar_url or "",
            "refresh_tokens": json.dumps(list(account.refresh_tokens)),
            "version": str(account.version),
        }
        if isinstance(account.credential, LocalCredential):
            mapping.update(kind="local", password_hash=account.credential.password_hash)
        else:
            mapping.update(
                kind="federated",
                provider=account.credential.provider,
                subject=account.credential.subject,
            )
        return mapping

    @staticmethod
    def _from_hash(h: dict) -> UserAccount:
        # Field names come back as bytes unless the client decodes responses
        def get(name: str) -> bytes | str | None:
            return h.get(name.encode(), h.get(name))

        credential: Credential
        if _b(get("kind")) == "local":
            credential = LocalCredential(password_hash=_b(get("password_hash")))
        else:
            credential = FederatedCredential(
                provider=_b(get("provider")), subject=_b(get("subject"))
            )
        return UserAccount(
            id=_b(get("id")),
            email=_b(get("email")),
            credential=credential,
            name=_b(get("name")),
            bio=_b(get("bio")) or None,
            avatar_url=_b(get("avatar_url")) or None,
            refresh_tokens=tuple(json.loads(_b(get("refresh_tokens"), "[]"))),
            version=int(_b(get("version"), "0")),
        )

    # -------------------- API ------------------------

    def find_by_id(self, user_id: str) -> UserAccount | None:
        try:
            h = self.r.hgetall(self._k(user_id))
        except RedisError as exc:
            raise StoreError("User lookup failed") from exc
        return self._from_hash(h) if h else None

    def find_by_email(self, email: str) -> UserAccount | None:
        try:
            user_id = self.r.get(self._ke(email))
        except RedisError as exc:
            raise StoreError("User lookup failed") from exc
        if not user_id:
            return None
        return self.find_by_id(_b(user_id))

    def create(
        self,
        *,
        email: str,
        credential: Credential,
        name: str,
        avatar_url: str | None = None,
        bio: str | None = None,
    ) -> UserAccount:
        account = UserAccount(
            id=uuid4().hex,
            email=email,
            credential=credential,
            name=name,
            bio=bio,
            avatar_url=avatar_url,
        )
        try:
            # Claim the email first; the hash is only written by the winner
            claimed = self.r.set(self._ke(email), account.id, nx=True)
        except RedisError as exc:
            raise StoreError("User insert failed") from exc
        if not claimed:
            raise ConflictError("User", "email already registered")
        try:
            self.r.hset(self._k(account.id), mapping=self._to_mapping(account))
        except RedisError as exc:
            self._release_email(email, account.id)
            raise StoreError("User insert failed") from exc
        return account

    def _release_email(self, email: str, user_id: str) -> None:
        """Drop an email claim whose account hash was never written."""
        key = self._ke(email)
        try:
            with self.r.pipeline() as p:
                p.watch(key)
                if _b(p.get(key)) != user_id:
                    p.unwatch()
                    return
                p.multi()
                p.delete(key)
                p.execute()
        except RedisError:
            log.error(
                "auth.create.claim_leaked",
                extra={"event": "auth.create.claim_leaked", "user_id": user_id},
                exc_info=True,
            )

    def save(self, account: UserAccount) -> UserAccount:
        key = self._k(account.id)
        stored = replace(account, version=account.version + 1)
        try:
            with self.r.pipeline() as p:
                p.watch(key)
                current = p.hget(key, "version")
                if current is None or int(_b(current)) != account.version:
                    p.unwatch()
                    raise StaleAccountError(account.id, account.version)
                p.multi()
                p.hset(key, mapping=self._to_mapping(stored))
                p.execute()
        except redis.WatchError as exc:
            log.debug("auth.save.stale", extra={"event": "auth.save.stale", "user_id": account.id})
            raise StaleAccountError(account.id, account.version) from exc
        except RedisError as exc:
            raise StoreError("User update failed") from exc
        return stored
