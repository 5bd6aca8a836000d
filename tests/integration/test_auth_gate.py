"""Integration tests for the bearer-token gate on protected routes."""

from __future__ import annotations

import pytest

from tests.helpers.auth import bearer, forged_token


def test_missing_header_is_unauthenticated(client) -> None:
    resp = client.get("/posts")

    assert resp.status_code == 401
    assert resp.get_json()["code"] == "unauthenticated"


def test_valid_token_passes_through(client, auth_header) -> None:
    assert client.get("/posts", headers=auth_header).status_code == 200


def test_expired_token_is_forbidden(client, expired_auth_token) -> None:
    resp = client.get("/posts", headers=bearer(expired_auth_token))

    assert resp.status_code == 403
    assert resp.get_json()["code"] == "forbidden"


def test_token_signed_with_another_secret_is_forbidden(client, user) -> None:
    assert client.get("/posts", headers=bearer(forged_token(user.id))).status_code == 403


def test_refresh_token_is_not_an_access_token(client, codec, user) -> None:
    resp = client.get("/posts", headers=bearer(codec.issue_refresh_token(user.id)))

    assert resp.status_code == 403


@pytest.mark.parametrize("header", ["Bearer not-a-jwt", "Bearer a.b.c"])
def test_malformed_bearer_header_is_forbidden(client, header) -> None:
    resp = client.get("/posts", headers={"Authorization": header})

    assert resp.status_code == 403


@pytest.mark.parametrize("header", ["Bearer", "Bearer ", "Bearer    "])
def test_bearer_scheme_without_token_is_unauthenticated(client, header) -> None:
    resp = client.get("/posts", headers={"Authorization": header})

    assert resp.status_code == 401
    assert resp.get_json()["code"] == "unauthenticated"


def test_gate_attaches_identity_used_as_default_sender(client, auth_header, user) -> None:
    resp = client.post("/posts", json={"title": "Mine"}, headers=auth_header)

    assert resp.status_code == 201
    assert resp.get_json()["sender"] == str(user.id)


@pytest.mark.parametrize(
    ("method", "path"),
    [
        ("get", "/users"),
        ("get", "/comments/post/1"),
        ("delete", "/posts/1"),
        ("put", "/comments/1"),
    ],
)
def test_content_routes_require_a_token(client, method, path) -> None:
    assert getattr(client, method)(path).status_code == 401
