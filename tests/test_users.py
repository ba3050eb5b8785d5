"""Tests for user registration, authentication and password changes."""

from __future__ import annotations

import pytest

from teamhub.application.use_cases.notifications import list_notifications
from teamhub.application.use_cases.users import (
    authenticate_user,
    change_password,
    create_user,
    get_user,
    update_member_role,
)
from teamhub.domain.entities import NotificationKind, UserRole
from teamhub.domain.errors import ConflictError, NotFoundError, ValidationError


def test_create_user_hashes_password_and_normalises_email(db_session):
    user = create_user(
        db_session, name="Nina", email="Nina@Example.com", password="hunter22", role=UserRole.MANAGER
    )

    assert user.email == "nina@example.com"
    assert user.password != "hunter22"
    assert user.is_manager()
    assert authenticate_user(db_session, "nina@example.com", "hunter22").id == user.id
    assert authenticate_user(db_session, "nina@example.com", "wrong") is None


def test_create_user_rejects_duplicates_and_short_passwords(db_session, make_user):
    make_user("Alice")

    with pytest.raises(ConflictError):
        create_user(db_session, name="Alice", email="ALICE@example.com", password="secret1")
    with pytest.raises(ValidationError):
        create_user(db_session, name="Zed", email="zed@example.com", password="123")


def test_get_user_not_found(db_session):
    with pytest.raises(NotFoundError):
        get_user(db_session, "missing")


def test_change_password_records_security_update(db_session, make_user, user_password):
    user = make_user("Alice")

    updated = change_password(
        db_session, user.id, current_password=user_password, new_password="brand-new-pass"
    )

    assert authenticate_user(db_session, user.email, "brand-new-pass").id == updated.id
    [notification] = list_notifications(db_session, user.id)
    assert notification.kind is NotificationKind.SECURITY_UPDATE
    assert notification.message == "Your password was successfully updated."


def test_change_password_requires_current_password(db_session, make_user):
    user = make_user("Alice")

    with pytest.raises(ValidationError):
        change_password(db_session, user.id, current_password="nope", new_password="brand-new")
    assert list_notifications(db_session, user.id) == []


def test_manager_promotes_member(db_session, make_user):
    manager = make_user("Manager", role=UserRole.MANAGER)
    alice = make_user("Alice")

    promoted = update_member_role(db_session, alice.id, role=UserRole.MANAGER, actor=manager)

    assert promoted.role is UserRole.MANAGER
    assert get_user(db_session, alice.id).is_manager()


def test_member_role_change_rejects_self_and_unknown_users(db_session, make_user):
    manager = make_user("Manager", role=UserRole.MANAGER)

    with pytest.raises(ValidationError):
        update_member_role(db_session, manager.id, role=UserRole.MEMBER, actor=manager)
    with pytest.raises(NotFoundError):
        update_member_role(db_session, "ghost", role=UserRole.MANAGER, actor=manager)
