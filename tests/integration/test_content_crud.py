"""Integration tests for the protected post, comment and user routes."""

from __future__ import annotations

from tests.factories.post import CommentFactory, PostFactory
from tests.factories.user import UserFactory


# --------------------------------- Posts ---------------------------------- #
def test_post_lifecycle(client, auth_header) -> None:
    created = client.post(
        "/posts", json={"title": "First", "body": "Hello", "sender": "alice"}, headers=auth_header
    )
    assert created.status_code == 201
    post = created.get_json()
    assert {"id", "title", "body", "sender", "createdAt"} <= set(post)

    fetched = client.get(f"/posts/{post['id']}", headers=auth_header)
    assert fetched.get_json()["title"] == "First"

    updated = client.put(f"/posts/{post['id']}", json={"title": "Edited"}, headers=auth_header)
    assert updated.status_code == 200
    assert updated.get_json()["title"] == "Edited"
    assert updated.get_json()["body"] == "Hello"

    deleted = client.delete(f"/posts/{post['id']}", headers=auth_header)
    assert deleted.status_code == 200
    assert client.get(f"/posts/{post['id']}", headers=auth_header).status_code == 404


def test_create_post_without_title_is_rejected(client, auth_header) -> None:
    resp = client.post("/posts", json={"body": "no title"}, headers=auth_header)

    assert resp.status_code == 400
    assert resp.get_json()["details"]["fields"] == ["title"]


def test_list_posts_filters_by_sender_newest_first(client, auth_header) -> None:
    older = PostFactory(sender="carol")
    PostFactory(sender="dave")
    newer = PostFactory(sender="carol")

    resp = client.get("/posts?sender=carol", headers=auth_header)

    assert resp.status_code == 200
    assert [p["id"] for p in resp.get_json()] == [newer.id, older.id]


def test_unknown_post_is_not_found(client, auth_header) -> None:
    resp = client.get("/posts/987654", headers=auth_header)

    assert resp.status_code == 404
    assert resp.get_json()["code"] == "not_found"


# -------------------------------- Comments -------------------------------- #
def test_comment_lifecycle(client, auth_header) -> None:
    post = PostFactory()

    created = client.post(
        "/comments", json={"postId": post.id, "sender": "erin", "body": "Great"}, headers=auth_header
    )
    assert created.status_code == 201
    comment = created.get_json()
    assert comment["postId"] == post.id

    listed = client.get(f"/comments/post/{post.id}", headers=auth_header)
    assert [c["id"] for c in listed.get_json()] == [comment["id"]]

    updated = client.put(f"/comments/{comment['id']}", json={"body": "Edited"}, headers=auth_header)
    assert updated.get_json()["body"] == "Edited"

    assert client.delete(f"/comments/{comment['id']}", headers=auth_header).status_code == 200
    assert client.get(f"/comments/{comment['id']}", headers=auth_header).status_code == 404


def test_comment_requires_every_field(client, auth_header) -> None:
    resp = client.post("/comments", json={"sender": "erin"}, headers=auth_header)

    assert resp.status_code == 400
    assert resp.get_json()["details"]["fields"] == ["postId", "body"]


def test_comment_on_missing_post_is_not_found(client, auth_header) -> None:
    resp = client.post(
        "/comments", json={"postId": 555555, "sender": "erin", "body": "Hi"}, headers=auth_header
    )

    assert resp.status_code == 404


def test_comment_with_non_integer_post_id_is_rejected(client, auth_header) -> None:
    resp = client.post(
        "/comments", json={"postId": "abc", "sender": "erin", "body": "Hi"}, headers=auth_header
    )

    assert resp.status_code == 400
    assert resp.get_json()["code"] == "validation_error"


def test_comments_of_a_post_are_newest_first(client, auth_header) -> None:
    post = PostFactory()
    first = CommentFactory(post=post)
    second = CommentFactory(post=post)

    resp = client.get(f"/comments/post/{post.id}", headers=auth_header)

    assert [c["id"] for c in resp.get_json()] == [second.id, first.id]


# --------------------------------- Users ---------------------------------- #
def test_user_routes_never_expose_credentials(client, auth_header) -> None:
    created = client.post(
        "/users",
        json={"username": "frank", "email": "frank@example.com", "password": "pw123456"},
        headers=auth_header,
    )
    assert created.status_code == 201

    for resp in (
        created,
        client.get(f"/users/{created.get_json()['id']}", headers=auth_header),
    ):
        body = resp.get_json()
        assert "password" not in body
        assert "password_hash" not in body
        assert "refreshTokens" not in body
        assert "refresh_tokens" not in body

    listed = client.get("/users", headers=auth_header).get_json()
    assert all("password_hash" not in u for u in listed)


def test_create_user_with_duplicate_email_is_rejected(client, auth_header) -> None:
    UserFactory(email="dup@example.com")

    resp = client.post(
        "/users",
        json={"username": "x", "email": "dup@example.com", "password": "pw123456"},
        headers=auth_header,
    )

    assert resp.status_code == 400
    assert resp.get_json()["code"] == "duplicate_user"


def test_password_change_through_users_route_ends_sessions(client, auth_header) -> None:
    target = UserFactory()
    login = client.post(
        "/auth/login", json={"email": target.email, "password": "Passw0rd!"}
    ).get_json()

    resp = client.put(f"/users/{target.id}", json={"password": "Changed-1"}, headers=auth_header)
    assert resp.status_code == 200

    refreshed = client.post("/auth/refresh", json={"refreshToken": login["refreshToken"]})
    assert refreshed.status_code == 403


def test_blank_username_update_is_a_validation_error(client, auth_header) -> None:
    target = UserFactory()

    resp = client.put(f"/users/{target.id}", json={"username": "   "}, headers=auth_header)

    assert resp.status_code == 400
    assert resp.get_json()["code"] == "validation_error"
    assert resp.get_json()["details"]["fields"] == ["username"]


def test_delete_user_then_not_found(client, auth_header) -> None:
    target = UserFactory()

    assert client.delete(f"/users/{target.id}", headers=auth_header).status_code == 200
    assert client.get(f"/users/{target.id}", headers=auth_header).status_code == 404
