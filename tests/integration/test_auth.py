"""Integration tests for the session endpoints."""

from __future__ import annotations

from tests.factories.user import DEFAULT_PASSWORD, UserFactory

REGISTER = {"username": "ada", "email": "ada@example.com", "password": "s3cret-pass"}


def _login(client, email: str, password: str):
    return client.post("/auth/login", json={"email": email, "password": password})


def test_register_then_login_yields_a_usable_pair(client) -> None:
    resp = client.post("/auth/register", json=REGISTER)
    assert resp.status_code == 201
    created = resp.get_json()
    assert set(created) == {"id", "username", "email"}

    resp = _login(client, REGISTER["email"], REGISTER["password"])
    assert resp.status_code == 200
    body = resp.get_json()
    assert set(body) == {"accessToken", "refreshToken", "id"}
    assert body["id"] == created["id"]

    resp = client.get("/posts", headers={"Authorization": f"Bearer {body['accessToken']}"})
    assert resp.status_code == 200


def test_register_missing_field_is_a_validation_error(client) -> None:
    resp = client.post("/auth/register", json={"email": "x@example.com", "password": "pw"})

    assert resp.status_code == 400
    problem = resp.get_json()
    assert resp.mimetype == "application/problem+json"
    assert problem["code"] == "validation_error"
    assert problem["details"]["fields"] == ["username"]
    assert problem["request_id"]


def test_register_duplicate_email_is_rejected(client) -> None:
    UserFactory(email="ada@example.com")

    resp = client.post("/auth/register", json=REGISTER)

    assert resp.status_code == 400
    assert resp.get_json()["code"] == "duplicate_user"
    assert resp.get_json()["detail"] == "User already exists"


def test_register_rejects_malformed_email(client) -> None:
    resp = client.post("/auth/register", json={**REGISTER, "email": "not-an-email"})

    assert resp.status_code == 400
    assert resp.get_json()["code"] == "validation_error"


def test_login_failures_are_indistinguishable(client) -> None:
    user = UserFactory()

    wrong_password = _login(client, user.email, "nope")
    unknown_email = _login(client, "ghost@example.com", DEFAULT_PASSWORD)
    missing = client.post("/auth/login", json={})

    for resp in (wrong_password, unknown_email, missing):
        assert resp.status_code == 400
        assert resp.get_json()["code"] == "invalid_credentials"
        assert resp.get_json()["detail"] == "Invalid email or password"


def test_consecutive_logins_return_different_refresh_tokens(client) -> None:
    user = UserFactory()

    first = _login(client, user.email, DEFAULT_PASSWORD).get_json()
    second = _login(client, user.email, DEFAULT_PASSWORD).get_json()

    assert first["refreshToken"] != second["refreshToken"]
    for token in (first["refreshToken"], second["refreshToken"]):
        assert client.post("/auth/refresh", json={"refreshToken": token}).status_code == 200


def test_refresh_reuse_end_to_end(client) -> None:
    """register -> login -> refresh(t1) -> refresh(t1) fails and kills t2 too."""
    client.post("/auth/register", json=REGISTER)
    t1 = _login(client, REGISTER["email"], REGISTER["password"]).get_json()["refreshToken"]

    rotated = client.post("/auth/refresh", json={"refreshToken": t1})
    assert rotated.status_code == 200
    pair = rotated.get_json()
    assert set(pair) == {"accessToken", "refreshToken"}
    t2 = pair["refreshToken"]

    reused = client.post("/auth/refresh", json={"refreshToken": t1})
    assert reused.status_code == 403
    assert reused.get_json()["code"] == "invalid_refresh_token"

    after_wipe = client.post("/auth/refresh", json={"refreshToken": t2})
    assert after_wipe.status_code == 403


def test_refresh_without_token_is_unauthenticated(client) -> None:
    resp = client.post("/auth/refresh", json={})

    assert resp.status_code == 401
    assert resp.get_json()["detail"] == "Refresh token required"


def test_refresh_with_garbage_token_is_forbidden(client) -> None:
    resp = client.post("/auth/refresh", json={"refreshToken": "garbage"})

    assert resp.status_code == 403


def test_refresh_for_deleted_user_is_forbidden(client, session) -> None:
    user = UserFactory()
    token = _login(client, user.email, DEFAULT_PASSWORD).get_json()["refreshToken"]
    session.delete(user)
    session.commit()

    resp = client.post("/auth/refresh", json={"refreshToken": token})

    assert resp.status_code == 403
    assert resp.get_json()["code"] == "user_not_found"


def test_logout_invalidates_the_token(client) -> None:
    user = UserFactory()
    token = _login(client, user.email, DEFAULT_PASSWORD).get_json()["refreshToken"]

    resp = client.post("/auth/logout", json={"refreshToken": token})
    assert resp.status_code == 200
    assert resp.get_json() == {"message": "Logged out successfully"}

    assert client.post("/auth/refresh", json={"refreshToken": token}).status_code == 403


def test_logout_with_unknown_token_still_succeeds(client) -> None:
    resp = client.post("/auth/logout", json={"refreshToken": "never-issued"})

    assert resp.status_code == 200


def test_logout_without_token_is_a_bad_request(client) -> None:
    resp = client.post("/auth/logout", json={})

    assert resp.status_code == 400
    assert resp.get_json()["code"] == "missing_token"


def test_non_json_body_is_treated_as_empty(client) -> None:
    resp = client.post("/auth/logout", data="refreshToken=abc", content_type="text/plain")

    assert resp.status_code == 400
