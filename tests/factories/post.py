"""Factories for posts and comments."""

from __future__ import annotations

import factory

from hobbyconnect.models.comment import Comment
from hobbyconnect.models.post import Post
from tests.factories import BaseFactory
from tests.factories.user import UserFactory


class PostFactory(BaseFactory):
    class Meta:
        model = Post

    title = factory.Faker("sentence", nb_words=4)
    content = factory.Faker("paragraph")
    category = "Hiking"
    author = factory.SubFactory(UserFactory)


class CommentFactory(BaseFactory):
    class Meta:
        model = Comment

    content = factory.Faker("sentence")
    post = factory.SubFactory(PostFactory)
    author_id = factory.LazyAttribute(lambda o: o.post.author_id)
