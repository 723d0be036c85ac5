"""
Integration tests for the /comments endpoints.
"""

from __future__ import annotations

import pytest

from hobbyconnect.models import Post, User
from tests.factories.post import CommentFactory, PostFactory
from tests.factories.user import DEFAULT_PASSWORD, UserFactory
from tests.helpers.assertions import assert_pagination, assert_problem
from tests.helpers.http import build_url, json_headers

BASE = "/api/v1/comments"


@pytest.fixture()
def sign_in(client):
    def _sign_in():
        user = UserFactory()
        user_id, email = user.id, user.email
        res = client.post(
            "/api/v1/auth/login",
            json={"email": email, "password": DEFAULT_PASSWORD},
            headers=json_headers(),
        )
        return user_id, res.get_json()["accessToken"]

    return _sign_in


def test_list_by_query_param(client):
    post = PostFactory()
    post_id = post.id
    ids = [CommentFactory(post=post).id for _ in range(2)]
    CommentFactory()

    body = client.get(build_url(BASE, postId=post_id)).get_json()

    assert_pagination(body)
    assert [c["id"] for c in body["data"]] == ids
    assert body["meta"]["total"] == 2


def test_list_by_post_route(client):
    comment = CommentFactory()
    comment_id, post_id = comment.id, comment.post_id

    body = client.get(f"{BASE}/post/{post_id}").get_json()

    assert [c["id"] for c in body["data"]] == [comment_id]
    assert body["data"][0]["postId"] == post_id


def test_list_unknown_post(client):
    assert_problem(client.get(f"{BASE}/post/999999"), 404, "not_found")


def test_get_comment(client):
    comment = CommentFactory(content="Nice shot")
    comment_id = comment.id

    data = client.get(f"{BASE}/{comment_id}").get_json()["data"]

    assert data["content"] == "Nice shot"
    assert set(data) == {"id", "postId", "authorId", "content", "createdAt", "updatedAt"}


def test_create(client, sign_in):
    post_id = PostFactory().id
    user_id, token = sign_in()

    res = client.post(BASE, json={"postId": post_id, "content": "Count me in"}, headers=json_headers(token))

    assert res.status_code == 201
    data = res.get_json()["data"]
    assert data["authorId"] == user_id
    assert data["postId"] == post_id


def test_create_on_unknown_post(client, sign_in):
    _, token = sign_in()

    res = client.post(BASE, json={"postId": 999999, "content": "hello?"}, headers=json_headers(token))

    assert_problem(res, 404, "not_found")


def test_create_requires_auth(client):
    post_id = PostFactory().id
    res = client.post(BASE, json={"postId": post_id, "content": "x"}, headers=json_headers())
    assert_problem(res, 401, "unauthorized")


def test_create_validates(client, sign_in):
    _, token = sign_in()
    res = client.post(BASE, json={"content": ""}, headers=json_headers(token))
    body = assert_problem(res, 422, "validation_error")
    assert set(body["details"]["errors"]) == {"postId", "content"}


def test_author_edits_and_deletes(client, sign_in):
    user_id, token = sign_in()
    post = PostFactory()
    comment_id = CommentFactory(post=post, author_id=user_id).id

    upd = client.put(f"{BASE}/{comment_id}", json={"content": "edited"}, headers=json_headers(token))
    assert upd.status_code == 200
    assert upd.get_json()["data"]["content"] == "edited"

    dele = client.delete(f"{BASE}/{comment_id}", headers=json_headers(token))
    assert dele.status_code == 204
    assert_problem(client.get(f"{BASE}/{comment_id}"), 404, "not_found")


def test_non_author_is_forbidden(client, sign_in):
    comment_id = CommentFactory().id
    _, token = sign_in()

    upd = client.put(f"{BASE}/{comment_id}", json={"content": "hijack"}, headers=json_headers(token))
    dele = client.delete(f"{BASE}/{comment_id}", headers=json_headers(token))

    assert_problem(upd, 403, "forbidden")
    assert_problem(dele, 403, "forbidden")


def test_deleting_post_deletes_comments(client, session, sign_in):
    user_id, token = sign_in()
    post = PostFactory(author=session.get(User, user_id))
    post_id = post.id
    comment_id = CommentFactory(post=post).id

    assert client.delete(f"/api/v1/posts/{post_id}", headers=json_headers(token)).status_code == 204

    assert session.get(Post, post_id) is None
    assert_problem(client.get(f"{BASE}/{comment_id}"), 404, "not_found")
