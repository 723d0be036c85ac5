# tests/unit/services/test_token_issuer.py
from __future__ import annotations

from datetime import timedelta

import jwt
import pytest

from hobbyconnect.services._shared.errors import ConfigurationError, MalformedTokenError
from hobbyconnect.services.auth.dto import TokenSettings
from hobbyconnect.services.auth.issuer import ACCESS, REFRESH, TokenClaims, TokenIssuer

SECRET = "unit-test-secret"


@pytest.fixture()
def settings() -> TokenSettings:
    return TokenSettings(secret=SECRET)


@pytest.fixture()
def issuer(settings) -> TokenIssuer:
    return TokenIssuer(settings)


def _claims(token: str) -> dict:
    return jwt.decode(token, SECRET, algorithms=["HS256"])


def test_pair_shares_subject_and_nonce(issuer):
    pair = issuer.issue("user-1")

    access = _claims(pair.access_token)
    refresh = _claims(pair.refresh_token)
    assert access["sub"] == refresh["sub"] == "user-1"
    assert access["nonce"] == refresh["nonce"]
    assert access["typ"] == ACCESS
    assert refresh["typ"] == REFRESH
    assert pair.access_token != pair.refresh_token


def test_lifetimes_follow_settings(freeze_time):
    issuer = TokenIssuer(
        TokenSettings(
            secret=SECRET,
            access_expires=timedelta(minutes=5),
            refresh_expires=timedelta(days=2),
        )
    )
    with freeze_time("2026-01-01 12:00:00"):
        pair = issuer.issue("user-1")
        access = _claims(pair.access_token)
        refresh = _claims(pair.refresh_token)

    assert access["exp"] - access["iat"] == 5 * 60
    assert refresh["exp"] - refresh["iat"] == 2 * 24 * 3600


def test_two_issuances_in_same_instant_differ(issuer, freeze_time):
    with freeze_time("2026-01-01 12:00:00"):
        first = issuer.issue("user-1")
        second = issuer.issue("user-1")

    assert first.access_token != second.access_token
    assert first.refresh_token != second.refresh_token
    assert _claims(first.refresh_token)["nonce"] != _claims(second.refresh_token)["nonce"]


def test_issuer_without_settings_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        TokenIssuer(None)


def test_empty_secret_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        TokenSettings(secret="")


def test_settings_from_mapping_rejects_missing_secret():
    with pytest.raises(ConfigurationError):
        TokenSettings.from_mapping({"TOKEN_SECRET": None})


def test_settings_from_mapping_reads_flask_keys():
    settings = TokenSettings.from_mapping(
        {
            "TOKEN_SECRET": "s",
            "ACCESS_TOKEN_EXPIRES_SECONDS": "60",
            "REFRESH_TOKEN_EXPIRES_SECONDS": 120,
            "AUTH_REVOKE_ALL_ON_REUSE": False,
            "AUTH_SAVE_MAX_ATTEMPTS": 5,
        }
    )
    assert settings.access_expires == timedelta(seconds=60)
    assert settings.refresh_expires == timedelta(seconds=120)
    assert settings.revoke_all_on_reuse is False
    assert settings.max_save_attempts == 5


class TestTokenClaims:
    def test_from_payload_round_trips_issued_claims(self, issuer):
        pair = issuer.issue("user-7")
        claims = TokenClaims.from_payload(_claims(pair.refresh_token))

        assert claims.subject_id == "user-7"
        assert claims.token_type == REFRESH
        assert claims.expires_at > claims.issued_at

    @pytest.mark.parametrize(
        "missing", ["sub", "nonce", "typ", "iat", "exp"],
    )
    def test_from_payload_fails_closed(self, missing):
        payload = {"sub": "u", "nonce": "n", "typ": ACCESS, "iat": 1, "exp": 2}
        payload.pop(missing)
        with pytest.raises(MalformedTokenError):
            TokenClaims.from_payload(payload)

    def test_from_payload_rejects_wrong_types(self):
        with pytest.raises(MalformedTokenError):
            TokenClaims.from_payload({"sub": 42, "nonce": "n", "typ": ACCESS, "iat": 1, "exp": 2})
        with pytest.raises(MalformedTokenError):
            TokenClaims.from_payload({"sub": "u", "nonce": "n", "typ": "id", "iat": 1, "exp": 2})
        with pytest.raises(MalformedTokenError):
            TokenClaims.from_payload({"sub": "u", "nonce": "n", "typ": ACCESS, "iat": True, "exp": 2})
