"""
Unit tests for SQLAlchemyCredentialStore.
"""

from __future__ import annotations

import pytest

from hobbyconnect.repositories.user import SQLAlchemyCredentialStore
from hobbyconnect.services._shared.errors import ConflictError, StaleAccountError
from hobbyconnect.services._shared.ports.credential_store import (
    FederatedCredential,
    LocalCredential,
)
from tests.factories.user import GoogleUserFactory, UserFactory


@pytest.fixture()
def store(session) -> SQLAlchemyCredentialStore:
    return SQLAlchemyCredentialStore()


class TestLookups:
    def test_find_by_email_is_exact(self, store):
        user = UserFactory(email="dora@test.com")

        assert store.find_by_email("dora@test.com").id == user.id
        assert store.find_by_email("DORA@test.com") is None

    def test_find_by_id_maps_local_credential(self, store):
        user = UserFactory(refresh_tokens=["rt-1", "rt-2"])

        account = store.find_by_id(user.id)

        assert isinstance(account.credential, LocalCredential)
        assert account.credential.password_hash == user.password_hash
        assert account.refresh_tokens == ("rt-1", "rt-2")
        assert account.version == 0

    def test_find_by_id_maps_federated_credential(self, store):
        user = GoogleUserFactory(provider_subject="g-42")

        account = store.find_by_id(user.id)

        assert account.credential == FederatedCredential(provider="google", subject="g-42")

    def test_unknown(self, store):
        assert store.find_by_id("missing") is None
        assert store.find_by_email("missing@test.com") is None


class TestCreate:
    def test_creates_empty_session_set(self, store):
        account = store.create(
            email="eve@test.com", credential=LocalCredential("h"), name="Eve"
        )

        assert account.refresh_tokens == ()
        assert account.version == 0
        assert store.find_by_email("eve@test.com").id == account.id

    def test_duplicate_email_conflicts(self, store):
        UserFactory(email="taken@test.com")

        with pytest.raises(ConflictError):
            store.create(email="taken@test.com", credential=LocalCredential("h"), name="x")


class TestSave:
    def test_bumps_version(self, store):
        account = store.find_by_id(UserFactory().id)

        saved = store.save(account.with_refresh_token("rt-1"))

        assert saved.version == 1
        reloaded = store.find_by_id(account.id)
        assert reloaded.version == 1
        assert reloaded.refresh_tokens == ("rt-1",)

    def test_stale_version_is_rejected(self, store):
        account = store.find_by_id(UserFactory().id)
        store.save(account.with_refresh_token("winner"))

        with pytest.raises(StaleAccountError):
            store.save(account.with_refresh_token("loser"))

        assert store.find_by_id(account.id).refresh_tokens == ("winner",)

    def test_profile_fields_are_written(self, store):
        account = store.find_by_id(UserFactory().id)

        store.save(account.with_profile(bio="Painter", avatar_url="https://img.test/a.png"))

        reloaded = store.find_by_id(account.id)
        assert reloaded.bio == "Painter"
        assert reloaded.avatar_url == "https://img.test/a.png"
