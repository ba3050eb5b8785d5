"""Tests for the team, project, task, comment and calendar endpoints."""

from __future__ import annotations

from teamhub.domain.entities import UserRole
from teamhub.infrastructure.models import NotificationModel, ProjectModel


def test_members_cannot_create_teams(client, make_user, auth_headers):
    member = make_user("Alice")

    response = client.post("/teams/", json={"name": "Core"}, headers=auth_headers(member))

    assert response.status_code == 403


def test_manager_creates_team_and_members_are_notified(
    client, make_user, auth_headers, db_session
):
    manager = make_user("Manager", role=UserRole.MANAGER)
    yara = make_user("Yara")

    response = client.post(
        "/teams/",
        json={"name": "Platform", "member_ids": [manager.id, yara.id]},
        headers=auth_headers(manager),
    )

    assert response.status_code == 201
    assert {m["user_id"] for m in response.json()["members"]} == {manager.id, yara.id}
    recipients = {row.user_id for row in db_session.query(NotificationModel).all()}
    assert recipients == {yara.id}

    members = client.get(
        f"/teams/{response.json()['id']}/members", headers=auth_headers(yara)
    )
    assert {m["name"] for m in members.json()} == {"Manager", "Yara"}


def test_project_and_task_lifecycle(client, workspace, auth_headers):
    manager_headers = auth_headers(workspace.manager)

    project = client.post(
        "/projects/",
        json={"name": "Website", "team_id": workspace.team.id},
        headers=manager_headers,
    )
    assert project.status_code == 201
    project_id = project.json()["id"]

    visible = client.get("/projects/", headers=auth_headers(workspace.alice))
    assert project_id in {p["id"] for p in visible.json()}

    task = client.post(
        "/tasks/",
        json={"name": "Design", "project_id": project_id, "priority": "HIGH"},
        headers=auth_headers(workspace.alice),
    )
    assert task.status_code == 201
    assert task.json()["priority"] == "HIGH"

    assert client.delete(
        f"/tasks/{task.json()['id']}", headers=auth_headers(workspace.bob)
    ).status_code == 403
    assert client.delete(
        f"/tasks/{task.json()['id']}", headers=manager_headers
    ).status_code == 204
    assert client.delete(f"/projects/{project_id}", headers=manager_headers).status_code == 204
    assert client.get(f"/projects/{project_id}", headers=manager_headers).status_code == 404


def test_comment_creation_notifies_everyone_but_author(
    client, workspace, auth_headers, db_session
):
    response = client.post(
        f"/comments/task/{workspace.task.id}",
        json={"content": "Draft is ready"},
        headers=auth_headers(workspace.alice),
    )

    assert response.status_code == 201
    assert response.json()["author"]["name"] == "Alice"
    recipients = {row.user_id for row in db_session.query(NotificationModel).all()}
    assert recipients == {workspace.bob.id, workspace.carol.id, workspace.manager.id}

    listed = client.get(
        f"/comments/task/{workspace.task.id}", headers=auth_headers(workspace.bob)
    )
    assert [c["id"] for c in listed.json()] == [response.json()["id"]]


def test_comment_is_created_even_when_project_is_gone(
    client, workspace, auth_headers, db_session
):
    db_session.query(ProjectModel).filter(ProjectModel.id == workspace.project.id).delete(
        synchronize_session=False
    )
    db_session.commit()

    response = client.post(
        f"/comments/task/{workspace.task.id}",
        json={"content": "Anyone there?"},
        headers=auth_headers(workspace.alice),
    )

    assert response.status_code == 201
    assert db_session.query(NotificationModel).count() == 0


def test_comment_on_missing_task(client, workspace, auth_headers):
    response = client.post(
        "/comments/task/missing",
        json={"content": "Hello"},
        headers=auth_headers(workspace.alice),
    )

    assert response.status_code == 404


def test_only_author_deletes_comment(client, workspace, auth_headers):
    created = client.post(
        f"/comments/task/{workspace.task.id}",
        json={"content": "Mine"},
        headers=auth_headers(workspace.alice),
    ).json()

    assert client.delete(
        f"/comments/{created['id']}", headers=auth_headers(workspace.bob)
    ).status_code == 403
    assert client.delete(
        f"/comments/{created['id']}", headers=auth_headers(workspace.alice)
    ).status_code == 204


def test_calendar_event_round_trip(client, workspace, auth_headers, db_session):
    headers = auth_headers(workspace.manager)

    created = client.post(
        "/calendar/",
        json={
            "title": "Kickoff",
            "type": "MEETING",
            "start_time": "2024-06-01T09:00:00Z",
            "end_time": "2024-06-01T10:00:00Z",
            "project_id": workspace.project.id,
        },
        headers=headers,
    )

    assert created.status_code == 201
    assert created.json()["attendee_ids"] == [workspace.manager.id]
    listed = client.get(
        "/calendar/",
        params={"start": "2024-05-31T00:00:00Z", "end": "2024-06-02T00:00:00Z"},
        headers=auth_headers(workspace.alice),
    )
    assert [e["title"] for e in listed.json()] == ["Kickoff"]
    recipients = {row.user_id for row in db_session.query(NotificationModel).all()}
    assert recipients == {workspace.alice.id, workspace.bob.id, workspace.carol.id}


def test_calendar_event_with_unknown_attendee_is_a_bad_request(client, workspace, auth_headers):
    response = client.post(
        "/calendar/",
        json={
            "title": "Kickoff",
            "type": "MEETING",
            "start_time": "2024-06-01T09:00:00Z",
            "end_time": "2024-06-01T10:00:00Z",
            "attendee_ids": ["ghost"],
        },
        headers=auth_headers(workspace.manager),
    )

    assert response.status_code == 400
    assert "ghost" in response.json()["detail"]


def test_task_status_update_and_filtered_listing(client, workspace, auth_headers):
    headers = auth_headers(workspace.alice)

    response = client.put(
        f"/tasks/{workspace.task.id}",
        json={"status": "IN_PROGRESS", "assigned_to_id": workspace.alice.id},
        headers=headers,
    )

    assert response.status_code == 200
    assert response.json()["status"] == "IN_PROGRESS"
    assert response.json()["assigned_to_id"] == workspace.alice.id
    assert response.json()["name"] == "Write docs"

    mine = client.get("/tasks/", headers=headers)
    assert [task["id"] for task in mine.json()] == [workspace.task.id]
    done = client.get(
        "/tasks/",
        params={"projectId": workspace.project.id, "status": "COMPLETED"},
        headers=headers,
    )
    assert done.json() == []


def test_task_update_rejects_unknown_status(client, workspace, auth_headers):
    response = client.put(
        f"/tasks/{workspace.task.id}",
        json={"status": "SHIPPED"},
        headers=auth_headers(workspace.alice),
    )

    assert response.status_code == 422


def test_project_update_is_manager_only(client, workspace, auth_headers):
    assert client.put(
        f"/projects/{workspace.project.id}",
        json={"name": "Renamed"},
        headers=auth_headers(workspace.alice),
    ).status_code == 403

    response = client.put(
        f"/projects/{workspace.project.id}",
        json={"name": "Relaunch", "description": "Second attempt"},
        headers=auth_headers(workspace.manager),
    )

    assert response.status_code == 200
    assert response.json()["name"] == "Relaunch"
    assert response.json()["description"] == "Second attempt"
    assert response.json()["team_id"] == workspace.team.id


def test_manager_changes_member_role(client, workspace, auth_headers):
    response = client.put(
        f"/teams/{workspace.bob.id}/role",
        json={"role": "MANAGER"},
        headers=auth_headers(workspace.manager),
    )

    assert response.status_code == 200
    assert response.json()["role"] == "MANAGER"
    assert client.get("/auth/me", headers=auth_headers(workspace.bob)).json()["role"] == "MANAGER"
    assert client.put(
        f"/teams/{workspace.manager.id}/role",
        json={"role": "MEMBER"},
        headers=auth_headers(workspace.alice),
    ).status_code == 403
