"""Tests for the durable notification store and its owner-only operations."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from teamhub.application.use_cases.notifications import (
    count_unread_notifications,
    delete_notification,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
    mark_notifications_read,
    record_notification,
)
from teamhub.domain.entities import (
    Notification,
    NotificationKind,
    SecurityUpdatePayload,
    TeamInvitationPayload,
)
from teamhub.domain.errors import ForbiddenError, NotFoundError
from teamhub.infrastructure.repositories import NotificationRepository

BASE_TIME = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)


def _store(db_session, user_id, *, minutes=0, kind=NotificationKind.SECURITY_UPDATE, is_read=False):
    return NotificationRepository(db_session).create(
        Notification(
            id=None,
            user_id=user_id,
            kind=kind,
            title=f"Notice {minutes}",
            message="Something happened",
            payload={"change": "password", "timestamp": BASE_TIME.isoformat()},
            is_read=is_read,
            created_at=BASE_TIME + timedelta(minutes=minutes),
        )
    )


def test_record_notification_persists_unread_row(db_session, make_user):
    user = make_user("Alice")
    payload = TeamInvitationPayload(
        team_id="team-1", team_name="Core", token="abc", invited_by="Manager"
    )

    stored = record_notification(
        db_session,
        recipient_id=user.id,
        payload=payload,
        title="Team Invitation",
        message="Manager invited you to join team Core",
    )

    assert stored.id
    assert stored.is_read is False
    assert stored.kind is NotificationKind.TEAM_INVITATION
    assert stored.payload == payload.to_dict()
    assert stored.typed_payload() == payload
    assert stored.created_at is not None


def test_list_returns_newest_first(db_session, make_user):
    user = make_user("Alice")
    older = _store(db_session, user.id, minutes=0)
    newer = _store(db_session, user.id, minutes=5)
    middle = _store(db_session, user.id, minutes=2)

    ids = [notification.id for notification in list_notifications(db_session, user.id)]

    assert ids == [newer.id, middle.id, older.id]


def test_list_filters_by_unread_kind_and_limit(db_session, make_user):
    user = make_user("Alice")
    _store(db_session, user.id, minutes=0, is_read=True)
    unread = _store(db_session, user.id, minutes=1)
    _store(
        db_session,
        user.id,
        minutes=2,
        kind=NotificationKind.ADDED_TO_TEAM,
    )

    unread_only = list_notifications(db_session, user.id, unread_only=True)
    security = list_notifications(db_session, user.id, kind=NotificationKind.SECURITY_UPDATE)
    limited = list_notifications(db_session, user.id, limit=1)

    assert len(unread_only) == 2
    assert [n.kind for n in security] == [NotificationKind.SECURITY_UPDATE] * 2
    assert len(limited) == 1
    assert limited[0].kind is NotificationKind.ADDED_TO_TEAM
    assert unread.id in {n.id for n in unread_only}


def test_mark_read_by_owner(db_session, make_user):
    user = make_user("Alice")
    notification = _store(db_session, user.id)

    updated = mark_notification_read(db_session, notification.id, user_id=user.id)

    assert updated.is_read is True
    assert count_unread_notifications(db_session, user.id) == 0


def test_mark_read_is_idempotent(db_session, make_user):
    user = make_user("Alice")
    notification = _store(db_session, user.id, is_read=True)

    assert mark_notification_read(db_session, notification.id, user_id=user.id).is_read


def test_mark_read_by_other_user_is_forbidden_and_leaves_row(db_session, make_user):
    owner = make_user("Alice")
    intruder = make_user("Bob")
    notification = _store(db_session, owner.id)

    with pytest.raises(ForbiddenError):
        mark_notification_read(db_session, notification.id, user_id=intruder.id)

    assert NotificationRepository(db_session).get(notification.id).is_read is False


def test_mark_read_unknown_id(db_session, make_user):
    user = make_user("Alice")

    with pytest.raises(NotFoundError):
        mark_notification_read(db_session, "missing", user_id=user.id)


def test_delete_by_owner_and_by_other_user(db_session, make_user):
    owner = make_user("Alice")
    intruder = make_user("Bob")
    notification = _store(db_session, owner.id)

    with pytest.raises(ForbiddenError):
        delete_notification(db_session, notification.id, user_id=intruder.id)
    assert NotificationRepository(db_session).get(notification.id) is not None

    delete_notification(db_session, notification.id, user_id=owner.id)
    assert NotificationRepository(db_session).get(notification.id) is None

    with pytest.raises(NotFoundError):
        delete_notification(db_session, notification.id, user_id=owner.id)


def test_bulk_mark_read_skips_foreign_ids(db_session, make_user):
    alice = make_user("Alice")
    bob = make_user("Bob")
    mine = _store(db_session, alice.id)
    theirs = _store(db_session, bob.id)

    updated = mark_notifications_read(db_session, [mine.id, theirs.id], user_id=alice.id)

    assert updated == 1
    assert count_unread_notifications(db_session, bob.id) == 1


def test_mark_all_read(db_session, make_user):
    user = make_user("Alice")
    for minutes in range(3):
        _store(db_session, user.id, minutes=minutes)

    assert mark_all_notifications_read(db_session, user.id) == 3
    assert count_unread_notifications(db_session, user.id) == 0


def test_payload_round_trips_through_storage(db_session, make_user):
    user = make_user("Alice")
    payload = SecurityUpdatePayload(change="password", timestamp=BASE_TIME)

    stored = record_notification(
        db_session,
        recipient_id=user.id,
        payload=payload,
        title="Password Changed",
        message="Your password was successfully updated.",
    )

    assert NotificationRepository(db_session).get(stored.id).typed_payload() == payload
