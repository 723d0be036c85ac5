"""
Unit tests for PostRepository and CommentRepository listings.
"""

from __future__ import annotations

from hobbyconnect.repositories import CommentRepository, Pagination, PostRepository
from tests.factories.post import CommentFactory, PostFactory


def test_posts_default_to_newest_first(session):
    first = PostFactory().id
    second = PostFactory().id

    page = PostRepository(session).list_posts(Pagination(page=1, limit=10))

    assert [p.id for p in page.items] == [second, first]
    assert page.total == 2


def test_posts_explicit_sort(session):
    PostFactory(title="b")
    PostFactory(title="a")

    page = PostRepository(session).list_posts(Pagination(page=1, limit=10, sort=["title"]))

    assert [p.title for p in page.items] == ["a", "b"]


def test_posts_unknown_sort_field_is_ignored(session):
    first = PostFactory().id

    page = PostRepository(session).list_posts(Pagination(page=1, limit=10, sort=["-password"]))

    assert [p.id for p in page.items] == [first]


def test_posts_filtered_by_category(session):
    PostFactory(category="Hiking")
    PostFactory(category="Chess")

    page = PostRepository(session).list_posts(Pagination(page=1, limit=10), category="Chess")

    assert [p.category for p in page.items] == ["Chess"]


def test_like_round_trip(session):
    post = PostFactory()
    fan_id = PostFactory().author_id
    repo = PostRepository(session)

    like = repo.add_like(post, fan_id)
    assert repo.get_like(post.id, fan_id) is like

    repo.remove_like(post, like)
    assert repo.get_like(post.id, fan_id) is None


def test_comments_oldest_first_for_post(session):
    post = PostFactory()
    ids = [CommentFactory(post=post).id for _ in range(2)]
    CommentFactory()

    page = CommentRepository(session).list_comments(Pagination(page=1, limit=10), post_id=post.id)

    assert [c.id for c in page.items] == ids
    assert page.total == 2
