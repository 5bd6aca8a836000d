"""Factory Boy definitions for posts and comments."""

from __future__ import annotations

import factory

from postboard.models.comment import Comment
from postboard.models.post import Post
from tests.factories import BaseFactory


class PostFactory(BaseFactory):
    class Meta:
        model = Post

    id = None
    title = factory.Faker("sentence", nb_words=4)
    body = factory.Faker("paragraph")
    sender = factory.Sequence(lambda n: f"sender{n}")


class CommentFactory(BaseFactory):
    class Meta:
        model = Comment

    id = None
    post = factory.SubFactory(PostFactory)
    sender = factory.Sequence(lambda n: f"commenter{n}")
    body = factory.Faker("sentence")
