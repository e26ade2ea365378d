from __future__ import annotations

from datetime import datetime, timedelta, timezone

from conftest import bearer, login, make_settings, register
from vehicle_tracker.core.enums import Role
from vehicle_tracker.infrastructure.security.jwt_provider import JwtProvider
from vehicle_tracker.main import create_app

COOKIE = "refreshToken"


def _refresh_cookie(client) -> str | None:
    cookie = client.get_cookie(COOKIE)
    return cookie.value if cookie is not None else None


def _set_cookie_header(res) -> str:
    headers = [h for h in res.headers.getlist("Set-Cookie") if h.startswith(f"{COOKIE}=")]
    assert len(headers) == 1
    return headers[0]


def test_register_returns_user_token_and_cookie(client):
    res = register(client, "new@example.com", name="New User")

    assert res.status_code == 201
    body = res.get_json()
    assert body["success"] is True
    assert body["message"] == "User registered successfully"

    user = body["data"]["user"]
    assert user["email"] == "new@example.com"
    assert user["name"] == "New User"
    assert user["role"] == "USER"
    assert user["is_active"] is True
    assert "password" not in user
    assert "password_hash" not in user
    assert "refresh_token" not in user

    assert body["data"]["accessToken"]
    assert _refresh_cookie(client)


def test_refresh_cookie_attributes(client):
    res = register(client, "cookie@example.com")

    header = _set_cookie_header(res)
    assert "HttpOnly" in header
    assert "SameSite=Strict" in header
    assert "Path=/" in header
    assert "Max-Age=604800" in header
    # development environment
    assert "Secure" not in header


def test_refresh_cookie_is_secure_outside_development():
    app = create_app(make_settings(environment="production"))
    res = register(app.test_client(), "prod@example.com")

    assert "Secure" in _set_cookie_header(res)


def test_register_duplicate_email_is_rejected(client):
    assert register(client, "dup@example.com").status_code == 201

    res = register(client, "dup@example.com")

    assert res.status_code == 400
    assert res.get_json()["message"] == "User with this email already exists"


def test_register_validation(client):
    res = client.post("/api/auth/register", json={"email": "x@example.com"})
    assert res.status_code == 400
    assert res.get_json()["message"] == "Email and password are required"

    res = register(client, "short@example.com", password="abc")
    assert res.status_code == 400
    assert res.get_json()["message"] == "Password must be at least 8 characters"

    res = register(client, "not-an-email")
    assert res.status_code == 400
    assert res.get_json()["success"] is False

    res = register(client, "role@example.com", role="SUPERUSER")
    assert res.status_code == 400


def test_login_success_and_failures_share_message(client):
    register(client, "login@example.com")

    ok = login(client, "login@example.com", "UserPass123")
    assert ok.status_code == 200
    assert ok.get_json()["message"] == "Login successful"
    assert ok.get_json()["data"]["accessToken"]

    wrong_password = login(client, "login@example.com", "WrongPass123")
    unknown_email = login(client, "nobody@example.com", "UserPass123")

    assert wrong_password.status_code == 401
    assert unknown_email.status_code == 401
    assert wrong_password.get_json()["message"] == unknown_email.get_json()["message"] == "Invalid email or password"


def test_login_requires_both_fields(client):
    res = client.post("/api/auth/login", json={"email": "login@example.com"})

    assert res.status_code == 400
    assert res.get_json()["message"] == "Email and password are required"


def test_refresh_rotates_the_refresh_token(client):
    register(client, "rotate@example.com")
    original = _refresh_cookie(client)

    res = client.post("/api/auth/refresh")

    assert res.status_code == 200
    body = res.get_json()
    assert body["message"] == "Access token refreshed"
    assert body["data"]["accessToken"]

    rotated = _refresh_cookie(client)
    assert rotated and rotated != original

    # the superseded token is no longer accepted
    client.set_cookie(COOKIE, original)
    res = client.post("/api/auth/refresh")
    assert res.status_code == 403
    assert res.get_json()["message"] == "Invalid refresh token"


def test_new_access_token_from_refresh_works(client):
    register(client, "fresh@example.com")

    token = client.post("/api/auth/refresh").get_json()["data"]["accessToken"]
    res = client.get("/api/auth/me", headers=bearer(token))

    assert res.status_code == 200
    assert res.get_json()["data"]["email"] == "fresh@example.com"


def test_refresh_without_cookie_is_unauthorized(client):
    res = client.post("/api/auth/refresh")

    assert res.status_code == 401
    assert res.get_json()["message"] == "Refresh token is required"


def test_refresh_with_garbage_cookie_is_forbidden(client):
    client.set_cookie(COOKIE, "garbage")

    res = client.post("/api/auth/refresh")

    assert res.status_code == 403


def test_second_login_invalidates_first_session(app):
    first = app.test_client()
    second = app.test_client()
    register(first, "single@example.com")

    assert login(second, "single@example.com", "UserPass123").status_code == 200

    assert first.post("/api/auth/refresh").status_code == 403
    assert second.post("/api/auth/refresh").status_code == 200


def test_logout_revokes_refresh_token_and_clears_cookie(client):
    register(client, "bye@example.com")
    token = _refresh_cookie(client)

    res = client.post("/api/auth/logout")

    assert res.status_code == 200
    assert res.get_json()["message"] == "Logout successful"
    assert _refresh_cookie(client) is None

    client.set_cookie(COOKIE, token)
    assert client.post("/api/auth/refresh").status_code == 403


def test_logout_without_cookie_still_succeeds(client):
    res = client.post("/api/auth/logout")

    assert res.status_code == 200
    assert res.get_json()["success"] is True


def test_me_requires_access_token(client):
    res = client.get("/api/auth/me")

    assert res.status_code == 401
    assert res.get_json()["message"] == "Access token is required"


def test_me_rejects_bad_and_expired_tokens(app, client, settings):
    user_id = register(client, "me@example.com").get_json()["data"]["user"]["id"]

    res = client.get("/api/auth/me", headers=bearer("nonsense"))
    assert res.status_code == 401
    assert res.get_json()["message"] == "Invalid access token"

    refresh = client.get_cookie(COOKIE).value
    res = client.get("/api/auth/me", headers=bearer(refresh))
    assert res.status_code == 401

    past = datetime.now(tz=timezone.utc) - timedelta(hours=1)
    expired = JwtProvider(settings, clock=lambda: past).issue_access_token(
        user_id=user_id, email="me@example.com", role=Role.USER
    )
    res = client.get("/api/auth/me", headers=bearer(expired))
    assert res.status_code == 401
    assert res.get_json()["message"] == "Access token expired"


def test_me_for_deleted_user_is_not_found(client, admin_token):
    body = register(client, "gone@example.com").get_json()["data"]
    client.delete(f"/api/users/{body['user']['id']}", headers=bearer(admin_token))

    res = client.get("/api/auth/me", headers=bearer(body["accessToken"]))

    assert res.status_code == 404
    assert res.get_json()["message"] == "User not found"


def test_update_profile(client):
    token = register(client, "profile@example.com").get_json()["data"]["accessToken"]

    res = client.patch("/api/auth/me", json={"name": "Renamed", "password": "NewPass12345"}, headers=bearer(token))

    assert res.status_code == 200
    assert res.get_json()["data"]["name"] == "Renamed"
    assert login(client, "profile@example.com", "NewPass12345").status_code == 200
    assert login(client, "profile@example.com", "UserPass123").status_code == 401


def test_update_profile_rejects_short_password(client):
    token = register(client, "weak@example.com").get_json()["data"]["accessToken"]

    res = client.patch("/api/auth/me", json={"password": "short"}, headers=bearer(token))

    assert res.status_code == 400


def test_deactivated_user_cannot_login_or_refresh_but_keeps_access_token(app, admin_token):
    member = app.test_client()
    body = register(member, "inactive@example.com").get_json()["data"]
    access = body["accessToken"]

    admin = app.test_client()
    res = admin.put(f"/api/users/{body['user']['id']}", json={"is_active": False}, headers=bearer(admin_token))
    assert res.status_code == 200
    assert res.get_json()["data"]["is_active"] is False

    res = login(app.test_client(), "inactive@example.com", "UserPass123")
    assert res.status_code == 403
    assert res.get_json()["message"] == "Account is deactivated"

    assert member.post("/api/auth/refresh").status_code == 403

    # access tokens are stateless until they expire
    assert member.get("/api/auth/me", headers=bearer(access)).status_code == 200


def test_user_list_is_admin_only(app, admin_token):
    alice = app.test_client()
    alice_token = register(alice, "alice@example.com", name="Alice").get_json()["data"]["accessToken"]

    res = alice.get("/api/users", headers=bearer(alice_token))
    assert res.status_code == 403
    assert res.get_json()["message"] == "Access denied: insufficient role"

    res = app.test_client().get("/api/users", headers=bearer(admin_token))
    assert res.status_code == 200
    emails = [u["email"] for u in res.get_json()["data"]]
    assert "alice@example.com" in emails


def test_mixed_case_email_is_stored_as_given_and_logs_in(client):
    res = register(client, "Bob@EXAMPLE.com")

    assert res.status_code == 201
    assert res.get_json()["data"]["user"]["email"] == "Bob@EXAMPLE.com"

    res = login(client, "Bob@EXAMPLE.com", "UserPass123")
    assert res.status_code == 200
    assert res.get_json()["data"]["user"]["email"] == "Bob@EXAMPLE.com"


def test_anonymous_registration_may_request_admin_role(app):
    member = app.test_client()
    body = register(member, "selfadmin@example.com", role="ADMIN").get_json()["data"]

    assert body["user"]["role"] == "ADMIN"
    assert member.get("/api/users", headers=bearer(body["accessToken"])).status_code == 200
