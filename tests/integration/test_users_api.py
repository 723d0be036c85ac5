"""
Integration tests for the /users endpoints.
"""

from __future__ import annotations

import pytest

from tests.factories.user import DEFAULT_PASSWORD, UserFactory
from tests.helpers.assertions import assert_problem
from tests.helpers.http import json_headers

BASE = "/api/v1/users"


@pytest.fixture()
def signed_in(client):
    """Create a user and return ``(user_id, access_token)``."""
    user = UserFactory(name="Ivy", avatar_url="https://img.test/ivy.png")
    user_id, email = user.id, user.email
    res = client.post(
        "/api/v1/auth/login",
        json={"email": email, "password": DEFAULT_PASSWORD},
        headers=json_headers(),
    )
    return user_id, res.get_json()["accessToken"]


def test_get_user(client):
    user = UserFactory(name="Jon", bio="Runner")
    user_id = user.id

    res = client.get(f"{BASE}/{user_id}")

    assert res.status_code == 200
    data = res.get_json()["data"]
    assert data["id"] == user_id
    assert data["bio"] == "Runner"
    assert "passwordHash" not in data


def test_get_unknown_user(client):
    assert_problem(client.get(f"{BASE}/does-not-exist"), 404, "not_found")


def test_get_by_email_returns_contact(client):
    UserFactory(email="kim@test.com", name="Kim", avatar_url="https://img.test/kim.png")

    res = client.get(f"{BASE}/by-email/kim@test.com")

    assert res.status_code == 200
    assert res.get_json() == {
        "name": "Kim",
        "email": "kim@test.com",
        "profilePic": "https://img.test/kim.png",
    }


def test_get_by_unknown_email(client):
    assert_problem(client.get(f"{BASE}/by-email/nobody@test.com"), 404, "not_found")


def test_update_own_profile(client, signed_in):
    user_id, token = signed_in

    res = client.put(f"{BASE}/{user_id}", json={"bio": "Hiker"}, headers=json_headers(token))

    assert res.status_code == 200
    data = res.get_json()["data"]
    assert data["bio"] == "Hiker"
    assert data["name"] == "Ivy"
    assert client.get(f"{BASE}/{user_id}").get_json()["data"]["bio"] == "Hiker"


def test_profile_update_keeps_sessions(client, signed_in):
    user_id, token = signed_in
    # Open a second session, then edit the profile; the refresh token must survive.
    email = client.get(f"{BASE}/{user_id}").get_json()["data"]["email"]
    pair = client.post(
        "/api/v1/auth/login",
        json={"email": email, "password": DEFAULT_PASSWORD},
        headers=json_headers(),
    ).get_json()

    client.put(f"{BASE}/{user_id}", json={"name": "Ivy R."}, headers=json_headers(token))

    res = client.post(
        "/api/v1/auth/refresh", json={"refreshToken": pair["refreshToken"]}, headers=json_headers()
    )
    assert res.status_code == 200


def test_cannot_update_someone_else(client, signed_in):
    _, token = signed_in
    other_id = UserFactory().id

    res = client.put(f"{BASE}/{other_id}", json={"bio": "pwned"}, headers=json_headers(token))

    assert_problem(res, 403, "forbidden")


def test_update_requires_auth(client):
    user_id = UserFactory().id
    res = client.put(f"{BASE}/{user_id}", json={"bio": "x"}, headers=json_headers())
    assert_problem(res, 401, "unauthorized")


def test_update_requires_a_field(client, signed_in):
    user_id, token = signed_in
    res = client.put(f"{BASE}/{user_id}", json={}, headers=json_headers(token))
    assert_problem(res, 422, "validation_error")
