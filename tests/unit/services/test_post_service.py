"""
Unit tests for PostService against the transactional SQLite session.
"""

from __future__ import annotations

import pytest

from hobbyconnect.models import Post
from hobbyconnect.models.post import DEFAULT_CATEGORY
from hobbyconnect.services._shared.dto import PaginationIn
from hobbyconnect.services._shared.errors import ForbiddenError, NotFoundError
from hobbyconnect.services.posts.dto import PostCreateIn, PostListIn, PostUpdateIn
from hobbyconnect.services.posts.service import PostService
from tests.factories.post import PostFactory
from tests.factories.user import UserFactory


@pytest.fixture()
def service() -> PostService:
    return PostService()


class TestPostQueries:
    def test_list_newest_first_with_meta(self, service):
        author = UserFactory()
        ids = [PostFactory(author=author).id for _ in range(3)]

        out = service.list_posts(PostListIn(pagination=PaginationIn(page=1, limit=2)))

        assert [p.id for p in out.items] == [ids[2], ids[1]]
        assert out.meta.total == 3
        assert out.meta.has_next is True
        assert out.meta.has_prev is False

    def test_second_page(self, service):
        ids = [PostFactory().id for _ in range(3)]

        out = service.list_posts(PostListIn(pagination=PaginationIn(page=2, limit=2)))

        assert [p.id for p in out.items] == [ids[0]]
        assert out.meta.has_prev is True
        assert out.meta.has_next is False

    def test_category_filter(self, service):
        PostFactory(category="Hiking")
        painting = PostFactory(category="Painting").id

        out = service.list_posts(PostListIn(category="Painting"))

        assert [p.id for p in out.items] == [painting]

    def test_list_by_author(self, service):
        author = UserFactory()
        mine = PostFactory(author=author).id
        PostFactory()

        out = service.list_by_author(author.id)

        assert [p.id for p in out.items] == [mine]
        assert out.items[0].author_id == author.id

    def test_get_missing(self, service):
        with pytest.raises(NotFoundError):
            service.get_post(999_999)


class TestPostCommands:
    def test_create_defaults_category(self, service):
        author = UserFactory()

        out = service.create_post(PostCreateIn(author_id=author.id, title="Trail", content="Nice"))

        assert out.id is not None
        assert out.category == DEFAULT_CATEGORY
        assert out.author_id == author.id
        assert out.liked_by == []
        assert out.created_at is not None

    def test_author_updates(self, service):
        post = PostFactory(title="Old")
        post_id, author_id = post.id, post.author_id

        out = service.update_post(PostUpdateIn(post_id=post_id, actor_id=author_id, title="New"))

        assert out.title == "New"
        assert out.category == "Hiking"

    def test_other_user_cannot_update(self, service):
        post = PostFactory()
        stranger = UserFactory()

        with pytest.raises(ForbiddenError):
            service.update_post(PostUpdateIn(post_id=post.id, actor_id=stranger.id, title="x"))

    def test_update_missing(self, service):
        with pytest.raises(NotFoundError):
            service.update_post(PostUpdateIn(post_id=999_999, actor_id="anyone", title="x"))

    def test_author_deletes(self, service, session):
        post = PostFactory()
        post_id, author_id = post.id, post.author_id

        service.delete_post(post_id, actor_id=author_id)

        assert session.get(Post, post_id) is None

    def test_other_user_cannot_delete(self, service, session):
        post = PostFactory()
        post_id = post.id
        stranger = UserFactory()

        with pytest.raises(ForbiddenError):
            service.delete_post(post_id, actor_id=stranger.id)
        assert session.get(Post, post_id) is not None


class TestLikes:
    def test_toggle_adds_then_removes(self, service):
        post = PostFactory()
        fan = UserFactory()
        post_id, fan_id = post.id, fan.id

        liked = service.toggle_like(post_id, actor_id=fan_id)
        assert liked.liked is True
        assert liked.liked_by == [fan_id]

        unliked = service.toggle_like(post_id, actor_id=fan_id)
        assert unliked.liked is False
        assert unliked.liked_by == []

    def test_likes_from_several_users(self, service):
        post = PostFactory()
        post_id = post.id
        fans = [UserFactory().id for _ in range(2)]

        for fan_id in fans:
            service.toggle_like(post_id, actor_id=fan_id)

        assert sorted(service.get_post(post_id).liked_by) == sorted(fans)

    def test_like_missing_post(self, service):
        with pytest.raises(NotFoundError):
            service.toggle_like(999_999, actor_id="anyone")
