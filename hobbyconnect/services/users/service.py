# hobbyconnect/services/users/service.py
from __future__ import annotations

import logging

from hobbyconnect.services._shared.errors import (
    ForbiddenError,
    NotFoundError,
    StaleAccountError,
    StoreError,
)
from hobbyconnect.services._shared.policies.common import is_owner
from hobbyconnect.services._shared.ports.credential_store import CredentialStore
from hobbyconnect.services.auth.dto import AccountOut
from hobbyconnect.services.auth.service import to_account_out
from hobbyconnect.services.users.dto import ProfileUpdateIn, PublicContactOut

log = logging.getLogger(__name__)


class UserService:
    """
    Profile reads and edits over the credential store.

    Profile edits go through the same compare-and-swap save as session
    changes, so a concurrent login or refresh is never overwritten.
    """

    def __init__(self, *, store: CredentialStore, max_attempts: int = 3) -> None:
        self.store = store
        self.max_attempts = max_attempts

    def get_user(self, user_id: str) -> AccountOut:
        account = self.store.find_by_id(user_id)
        if account is None:
            raise NotFoundError("User", user_id)
        return to_account_out(account)

    def get_by_email(self, email: str) -> PublicContactOut:
        account = self.store.find_by_email(email)
        if account is None:
            raise NotFoundError("User", email)
        return PublicContactOut(name=account.name, email=account.email, avatar_url=account.avatar_url)

    def update_profile(self, dto: ProfileUpdateIn) -> AccountOut:
        """
        Update the caller's own profile.

        :raises ForbiddenError: If the caller edits another account.
        :raises NotFoundError: If the account does not exist.
        :raises StoreError: If the save kept losing races.
        """
        if not is_owner(actor_id=dto.actor_id, owner_id=dto.user_id):
            raise ForbiddenError("You can only update your own profile.")

        for attempt in range(1, self.max_attempts + 1):
            account = self.store.find_by_id(dto.user_id)
            if account is None:
                raise NotFoundError("User", dto.user_id)
            try:
                saved = self.store.save(
                    account.with_profile(name=dto.name, bio=dto.bio, avatar_url=dto.avatar_url)
                )
            except StaleAccountError:
                log.debug(
                    "user.profile.stale",
                    extra={"event": "user.profile.stale", "user_id": dto.user_id, "attempt": attempt},
                )
                continue
            log.info("user.profile.updated", extra={"event": "user.profile.updated", "user_id": saved.id})
            return to_account_out(saved)
        raise StoreError("Profile update kept conflicting")
