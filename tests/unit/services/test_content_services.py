"""Unit tests for the post and comment services."""

from __future__ import annotations

import pytest

from postboard.models.comment import Comment
from postboard.services._shared.base import ServiceContext
from postboard.services._shared.errors import NotFoundError, ValidationError
from postboard.services.comments.dto import CommentCreateIn, CommentUpdateIn
from postboard.services.comments.service import CommentService
from postboard.services.posts.dto import PostCreateIn, PostUpdateIn
from postboard.services.posts.service import PostService
from tests.factories.post import CommentFactory, PostFactory


@pytest.fixture()
def posts() -> PostService:
    return PostService(ctx=ServiceContext(actor_id=17))


@pytest.fixture()
def comments() -> CommentService:
    return CommentService()


# --------------------------------- Posts ---------------------------------- #
def test_create_post_defaults_sender_to_the_caller(posts):
    out = posts.create_post(PostCreateIn(title="Hello"))

    assert out.sender == "17"
    assert out.body == ""


def test_create_post_keeps_explicit_sender(posts):
    assert posts.create_post(PostCreateIn(title="Hi", sender="alice")).sender == "alice"


def test_create_post_requires_title(posts):
    with pytest.raises(ValidationError) as excinfo:
        posts.create_post(PostCreateIn(title=" "))

    assert excinfo.value.fields == ("title",)


def test_list_posts_newest_first_with_sender_filter(posts):
    older = PostFactory(sender="alice")
    PostFactory(sender="bob")
    newer = PostFactory(sender="alice")

    listed = posts.list_posts(sender="alice")

    assert [p.id for p in listed] == [newer.id, older.id]
    assert len(posts.list_posts()) >= 3


def test_update_and_delete_post(posts):
    post = PostFactory(title="Draft")

    assert posts.update_post(post.id, PostUpdateIn(title="Final")).title == "Final"
    with pytest.raises(ValidationError):
        posts.update_post(post.id, PostUpdateIn(title=""))

    posts.delete_post(post.id)
    with pytest.raises(NotFoundError):
        posts.get_post(post.id)


def test_deleting_a_post_removes_its_comments(posts, session):
    comment = CommentFactory()
    post_id, comment_id = comment.post_id, comment.id

    posts.delete_post(post_id)

    session.expire_all()
    assert session.get(Comment, comment_id) is None


# -------------------------------- Comments -------------------------------- #
def test_create_comment_on_existing_post(comments):
    post = PostFactory()

    out = comments.create_comment(CommentCreateIn(post_id=post.id, sender="carol", body="Nice"))

    assert out.post_id == post.id
    assert comments.get_comment(out.id).body == "Nice"


def test_create_comment_requires_all_fields(comments):
    with pytest.raises(ValidationError) as excinfo:
        comments.create_comment(CommentCreateIn(post_id=None, sender="carol", body=""))

    assert excinfo.value.fields == ("postId", "body")


def test_create_comment_on_missing_post_is_not_found(comments):
    with pytest.raises(NotFoundError):
        comments.create_comment(CommentCreateIn(post_id=424242, sender="carol", body="Hi"))


def test_list_for_post_is_newest_first_and_scoped_to_the_post(comments):
    post = PostFactory()
    first = CommentFactory(post=post)
    second = CommentFactory(post=post)
    CommentFactory()

    assert [c.id for c in comments.list_for_post(post.id)] == [second.id, first.id]
    assert comments.list_for_post(987_654) == []


def test_update_and_delete_comment(comments):
    comment = CommentFactory(body="before")

    assert comments.update_comment(comment.id, CommentUpdateIn(body="after")).body == "after"

    comments.delete_comment(comment.id)
    with pytest.raises(NotFoundError):
        comments.get_comment(comment.id)
