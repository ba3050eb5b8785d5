"""Tests for the authentication endpoints."""

from __future__ import annotations

from teamhub.infrastructure.models import NotificationModel


def _login(client, email, password):
    return client.post("/auth/token", data={"username": email, "password": password})


def test_register_login_and_read_profile(client):
    response = client.post(
        "/auth/register",
        json={"name": "Nina", "email": "nina@example.com", "password": "hunter22"},
    )
    assert response.status_code == 201
    assert response.json()["role"] == "MEMBER"

    token_response = _login(client, "nina@example.com", "hunter22")
    assert token_response.status_code == 200
    token = token_response.json()["access_token"]

    me = client.get("/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["email"] == "nina@example.com"


def test_duplicate_registration_conflicts(client, make_user):
    make_user("Alice")

    response = client.post(
        "/auth/register",
        json={"name": "Alice", "email": "alice@example.com", "password": "hunter22"},
    )

    assert response.status_code == 409


def test_login_with_wrong_password(client, make_user):
    make_user("Alice")

    assert _login(client, "alice@example.com", "wrong-password").status_code == 401


def test_requests_without_token_are_rejected(client):
    assert client.get("/auth/me").status_code == 401


def test_password_change_revokes_old_tokens_and_records_notification(
    client, make_user, user_password, auth_headers, db_session
):
    alice = make_user("Alice")
    headers = auth_headers(alice)

    response = client.put(
        "/auth/password",
        json={"current_password": user_password, "new_password": "brand-new-pass"},
        headers=headers,
    )

    assert response.status_code == 200
    assert client.get("/auth/me", headers=headers).status_code == 401
    assert _login(client, "alice@example.com", "brand-new-pass").status_code == 200
    notifications = db_session.query(NotificationModel).filter_by(user_id=alice.id).all()
    assert [n.type for n in notifications] == ["security-update"]


def test_password_change_with_wrong_current_password(client, make_user, auth_headers):
    alice = make_user("Alice")

    response = client.put(
        "/auth/password",
        json={"current_password": "not-it", "new_password": "brand-new-pass"},
        headers=auth_headers(alice),
    )

    assert response.status_code == 400
