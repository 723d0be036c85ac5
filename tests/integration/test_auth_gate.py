"""
Integration tests for the access-token gate on protected routes.
"""

from __future__ import annotations

from datetime import timedelta

import pytest

from tests.factories.user import DEFAULT_PASSWORD, UserFactory
from tests.helpers.assertions import assert_problem
from tests.helpers.http import json_headers

WHOAMI = "/api/v1/auth/whoami"


@pytest.fixture()
def login(client):
    def _login():
        email = UserFactory().email
        res = client.post(
            "/api/v1/auth/login",
            json={"email": email, "password": DEFAULT_PASSWORD},
            headers=json_headers(),
        )
        assert res.status_code == 200
        return res.get_json()

    return _login


def test_missing_header(client):
    res = client.get(WHOAMI)
    body = assert_problem(res, 401, "unauthorized")
    assert body["detail"] == "Authentication required"


@pytest.mark.parametrize("header", ["", "Bearer", "Bearer    "])
def test_header_without_token(client, header):
    res = client.get(WHOAMI, headers={"Authorization": header})
    assert_problem(res, 401, "unauthorized")


@pytest.mark.parametrize("scheme", ["Bearer", "Token", "whatever"])
def test_scheme_word_is_not_checked(client, login, scheme):
    pair = login()

    res = client.get(WHOAMI, headers=json_headers(pair["accessToken"], scheme=scheme))

    assert res.status_code == 200
    assert res.get_json()["data"]["id"] == pair["userId"]


def test_garbage_and_forged_tokens_share_one_answer(client, login):
    pair = login()
    forged = pair["accessToken"][:-4] + "AAAA"

    garbage = client.get(WHOAMI, headers=json_headers("not-a-token"))
    tampered = client.get(WHOAMI, headers=json_headers(forged))
    refresh_as_access = client.get(WHOAMI, headers=json_headers(pair["refreshToken"]))

    bodies = [
        assert_problem(r, 401, "unauthorized") for r in (garbage, tampered, refresh_as_access)
    ]
    assert {b["detail"] for b in bodies} == {"Authentication required"}


def test_expired_access_then_refresh(client, login, freeze_time):
    with freeze_time("2026-01-01 12:00:00") as frozen:
        pair = login()
        assert client.get(WHOAMI, headers=json_headers(pair["accessToken"])).status_code == 200

        frozen.tick(timedelta(minutes=16))
        expired = client.get(WHOAMI, headers=json_headers(pair["accessToken"]))
        assert_problem(expired, 401, "unauthorized")

        rotated = client.post(
            "/api/v1/auth/refresh",
            json={"refreshToken": pair["refreshToken"]},
            headers=json_headers(),
        )
        assert rotated.status_code == 200
        fresh = rotated.get_json()["accessToken"]
        assert client.get(WHOAMI, headers=json_headers(fresh)).status_code == 200


def test_expired_refresh_token(client, login, freeze_time):
    with freeze_time("2026-01-01 12:00:00") as frozen:
        pair = login()
        frozen.tick(timedelta(days=8))

        res = client.post(
            "/api/v1/auth/refresh",
            json={"refreshToken": pair["refreshToken"]},
            headers=json_headers(),
        )
        assert_problem(res, 401, "unauthorized")


def test_response_carries_request_id(client):
    res = client.get(WHOAMI, headers={"X-Request-ID": "req-abc"})

    assert res.headers["X-Request-ID"] == "req-abc"
    assert res.get_json()["request_id"] == "req-abc"
