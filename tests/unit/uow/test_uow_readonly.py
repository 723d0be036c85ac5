import pytest

from hobbyconnect.models import Post
from hobbyconnect.uow import SQLAlchemyReadOnlyUnitOfWork as ROuow
from tests.factories.post import PostFactory


class TestSQLAlchemyReadOnlyUnitOfWork:
    def test_blocks_orm_flush_writes(self, app, db, session):
        post = PostFactory()
        with ROuow() as uow, pytest.raises(RuntimeError, match="ORM flush blocked"):
            uow.session.add(Post(title="x", content="y", category="Art", author_id=post.author_id))
            uow.session.flush()

    def test_allows_reads(self, app, db, session):
        post_id = PostFactory().id

        with ROuow() as uow:
            assert uow.posts.get(post_id) is not None

    def test_disallows_commit(self, app, db, session):
        with ROuow() as uow, pytest.raises(RuntimeError, match="does not allow commit"):
            uow.commit()

    def test_mutations_do_not_persist(self, app, db, session):
        post_id = PostFactory(title="original").id

        with ROuow() as uow:
            uow.posts.get(post_id).title = "mutated"

        with ROuow() as uow:
            assert uow.posts.get(post_id).title == "original"

    def test_guard_is_removed_on_exit(self, app, db, session):
        post = PostFactory()
        with ROuow():
            pass

        # A regular flush after the read-only scope is allowed again
        session.add(Post(title="x", content="y", category="Art", author_id=post.author_id))
        session.flush()
