"""Tests for notification fan-out triggered by domain actions."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from teamhub.application.use_cases.notifications import (
    COMMENT_ROOM_EVENT,
    NotificationDraft,
    RecipientPolicy,
    TargetedContext,
    fan_out,
    list_notifications,
    notify_added_to_team,
    notify_comment_added,
    notify_event_scheduled,
    notify_security_update,
)
from teamhub.application.use_cases.notifications import store as store_module
from teamhub.domain.entities import (
    AddedToTeamPayload,
    CalendarEvent,
    Comment,
    EventType,
    NotificationKind,
)
from teamhub.infrastructure.models import NotificationModel, ProjectModel
from teamhub.infrastructure.repositories import CommentRepository


def _comment(db_session, task, author, content="Looks good"):
    return CommentRepository(db_session).create(
        Comment(id=None, content=content, task_id=task.id, author_id=author.id)
    )


def _notification_count(db_session) -> int:
    return db_session.query(NotificationModel).count()


def test_comment_notifies_team_and_manager_but_not_author(
    db_session, workspace, publisher, room_publisher
):
    comment = _comment(db_session, workspace.task, workspace.alice)

    stored = notify_comment_added(
        db_session,
        comment=comment,
        task=workspace.task,
        author=workspace.alice,
        publisher=publisher,
        room_publisher=room_publisher,
    )

    assert {n.user_id for n in stored} == {
        workspace.bob.id,
        workspace.carol.id,
        workspace.manager.id,
    }
    assert list_notifications(db_session, workspace.alice.id) == []
    for user in (workspace.bob, workspace.carol):
        notifications = list_notifications(db_session, user.id)
        assert len(notifications) == 1
        assert notifications[0].kind is NotificationKind.COMMENT_ADDED
        assert notifications[0].payload["commentId"] == comment.id
        assert notifications[0].payload["taskId"] == workspace.task.id
        assert notifications[0].title == "New Comment on Task"

    assert [n.id for n in publisher.dispatched] == [n.id for n in stored]


def test_comment_is_broadcast_to_task_room(db_session, workspace, publisher, room_publisher):
    comment = _comment(db_session, workspace.task, workspace.alice)

    notify_comment_added(
        db_session,
        comment=comment,
        task=workspace.task,
        author=workspace.alice,
        origin_session="session-1",
        publisher=publisher,
        room_publisher=room_publisher,
    )

    assert len(room_publisher.broadcasts) == 1
    broadcast = room_publisher.broadcasts[0]
    assert broadcast["room_id"] == workspace.task.id
    assert broadcast["event_type"] == COMMENT_ROOM_EVENT
    assert broadcast["exclude_session"] == "session-1"
    assert broadcast["payload"]["comment"]["id"] == comment.id
    assert broadcast["payload"]["comment"]["author"]["name"] == "Alice"


def test_room_broadcast_can_be_disabled(db_session, workspace, publisher, room_publisher):
    comment = _comment(db_session, workspace.task, workspace.alice)

    notify_comment_added(
        db_session,
        comment=comment,
        task=workspace.task,
        author=workspace.alice,
        policy=RecipientPolicy(broadcast_comments=False),
        publisher=publisher,
        room_publisher=room_publisher,
    )

    assert room_publisher.broadcasts == []
    assert len(publisher.dispatched) == 3


def test_deleted_project_creates_no_notifications(
    db_session, workspace, publisher, room_publisher
):
    comment = _comment(db_session, workspace.task, workspace.alice)
    db_session.query(ProjectModel).filter(ProjectModel.id == workspace.project.id).delete(
        synchronize_session=False
    )
    db_session.commit()

    stored = notify_comment_added(
        db_session,
        comment=comment,
        task=workspace.task,
        author=workspace.alice,
        publisher=publisher,
        room_publisher=room_publisher,
    )

    assert stored == []
    assert _notification_count(db_session) == 0
    assert publisher.dispatched == []
    assert CommentRepository(db_session).get(comment.id) is not None
    assert len(room_publisher.broadcasts) == 1


def test_failed_record_for_one_recipient_does_not_stop_others(
    db_session, workspace, publisher, monkeypatch
):
    original = store_module.NotificationRepository.create

    def flaky_create(self, notification):
        if notification.user_id == workspace.bob.id:
            raise RuntimeError("database hiccup")
        return original(self, notification)

    monkeypatch.setattr(store_module.NotificationRepository, "create", flaky_create)
    draft = NotificationDraft(
        payload=AddedToTeamPayload(team_id="t1", team_name="Core", added_by="Manager"),
        title="New Team Access",
        message="Manager added you to team: Core",
    )

    stored = fan_out(
        db_session,
        context=TargetedContext(
            user_ids=(workspace.alice.id, workspace.bob.id, workspace.carol.id),
            actor_id=workspace.manager.id,
        ),
        draft=draft,
        publisher=publisher,
    )

    assert {n.user_id for n in stored} == {workspace.alice.id, workspace.carol.id}
    assert {n.user_id for n in publisher.dispatched} == {workspace.alice.id, workspace.carol.id}


def test_dispatch_failure_keeps_stored_notifications(db_session, workspace):
    class BrokenPublisher:
        def dispatch(self, notification):
            raise RuntimeError("transport down")

    stored = notify_added_to_team(
        db_session,
        team=workspace.team,
        member_ids=[workspace.alice.id, workspace.bob.id],
        actor=workspace.manager,
        publisher=BrokenPublisher(),
    )

    assert len(stored) == 2
    assert _notification_count(db_session) == 2


def test_added_to_team_excludes_actor_listed_as_member(db_session, workspace, publisher):
    stored = notify_added_to_team(
        db_session,
        team=workspace.team,
        member_ids=[workspace.manager.id, workspace.bob.id],
        actor=workspace.manager,
        publisher=publisher,
    )

    assert [n.user_id for n in stored] == [workspace.bob.id]
    assert stored[0].payload["teamName"] == "Core"
    assert stored[0].payload["addedBy"] == "Manager"


def test_event_scheduled_notifies_attendees_and_team(
    db_session, workspace, make_user, publisher
):
    guest = make_user("Guest")
    start = datetime(2024, 6, 1, 9, 0, tzinfo=timezone.utc)
    event = CalendarEvent(
        id="event-1",
        title="Kickoff",
        type=EventType.MEETING,
        start_time=start,
        end_time=start + timedelta(hours=1),
        project_id=workspace.project.id,
        attendee_ids=[guest.id, workspace.manager.id],
    )

    stored = notify_event_scheduled(
        db_session, event=event, actor=workspace.manager, publisher=publisher
    )

    assert {n.user_id for n in stored} == {
        guest.id,
        workspace.alice.id,
        workspace.bob.id,
        workspace.carol.id,
    }
    assert stored[0].payload["eventTitle"] == "Kickoff"
    assert stored[0].payload["startTime"] == start.isoformat()


def test_security_update_creates_single_row_for_user(db_session, workspace, publisher):
    stored = notify_security_update(db_session, user=workspace.alice, publisher=publisher)

    assert len(stored) == 1
    assert stored[0].user_id == workspace.alice.id
    assert stored[0].kind is NotificationKind.SECURITY_UPDATE
    assert stored[0].title == "Password Changed"
    assert stored[0].payload["change"] == "password"
