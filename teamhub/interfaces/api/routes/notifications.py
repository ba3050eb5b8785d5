"""Endpoints and websocket handler for realtime notifications."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import (
    APIRouter,
    Depends,
    HTTPException,
    Query,
    Response,
    WebSocket,
    WebSocketDisconnect,
    status,
)
from anyio import to_thread
from sqlalchemy.orm import Session, sessionmaker

from teamhub.application.use_cases.notifications import (
    count_unread_notifications,
    delete_notification,
    list_notifications,
    mark_all_notifications_read,
    mark_notification_read,
    mark_notifications_read,
)
from teamhub.domain.entities import NotificationKind, User
from teamhub.domain.errors import TeamHubError, UnauthenticatedError
from teamhub.infrastructure.database import get_db, get_session_factory
from teamhub.infrastructure.notifications import (
    PresenceSession,
    presence_router,
    serialize_notification,
)
from teamhub.interfaces.api.dependencies import get_current_user, resolve_current_user
from teamhub.interfaces.api.routes_helpers import to_http_error
from teamhub.interfaces.api.schemas import (
    MarkedReadResponse,
    NotificationList,
    NotificationRead,
)

router = APIRouter(prefix="/notifications", tags=["notifications"])
logger = logging.getLogger(__name__)

_POLICY_VIOLATION = 1008


@router.get("/", response_model=NotificationList)
def read_notifications(
    unread_only: bool = Query(False),
    kind: NotificationKind | None = Query(None, alias="type"),
    limit: int | None = Query(None, ge=1, le=200),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Return the notifications of the authenticated user, newest first."""

    notifications = list_notifications(
        db, current_user.id, unread_only=unread_only, kind=kind, limit=limit
    )
    return NotificationList(
        items=[NotificationRead.from_entity(notification) for notification in notifications],
        unread_count=count_unread_notifications(db, current_user.id),
    )


@router.put("/read-all", response_model=MarkedReadResponse)
def mark_all_read(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return MarkedReadResponse(updated=mark_all_notifications_read(db, user_id=current_user.id))


@router.put("/{notification_id}/read", response_model=NotificationRead)
def mark_read(
    notification_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        notification = mark_notification_read(db, notification_id, user_id=current_user.id)
    except TeamHubError as exc:
        raise to_http_error(exc) from exc
    return NotificationRead.from_entity(notification)


@router.delete("/{notification_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_notification(
    notification_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        delete_notification(db, notification_id, user_id=current_user.id)
    except TeamHubError as exc:
        raise to_http_error(exc) from exc
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _credential_from(websocket: WebSocket) -> str | None:
    token = websocket.query_params.get("token")
    if token:
        return token
    scheme, _, value = websocket.headers.get("authorization", "").partition(" ")
    if scheme.lower() == "bearer" and value:
        return value.strip()
    return None


def _authenticate(session_factory: sessionmaker[Session], token: str | None) -> User:
    db = session_factory()
    try:
        return resolve_current_user(token, db)
    finally:
        db.close()


def _unread_backlog(session_factory: sessionmaker[Session], user_id: str) -> list[dict[str, Any]]:
    db = session_factory()
    try:
        pending = list_notifications(db, user_id, unread_only=True)
        return [serialize_notification(notification) for notification in pending]
    finally:
        db.close()


def _acknowledge(session_factory: sessionmaker[Session], ids: list[str], user_id: str) -> int:
    db = session_factory()
    try:
        return mark_notifications_read(db, ids, user_id=user_id)
    finally:
        db.close()


@router.websocket("/ws")
async def notifications_websocket(
    websocket: WebSocket,
    session_factory: sessionmaker[Session] = Depends(get_session_factory),
) -> None:
    """Websocket endpoint that streams notifications to the authenticated user.

    Database work runs in short-lived sessions on worker threads so an idle
    connection holds no pooled connection and never blocks the event loop.
    """

    token = _credential_from(websocket)
    try:
        user = await to_thread.run_sync(_authenticate, session_factory, token)
    except HTTPException:
        await websocket.close(code=_POLICY_VIOLATION)
        return

    try:
        session = await presence_router.connect(token, websocket)
    except UnauthenticatedError:
        await websocket.close(code=_POLICY_VIOLATION)
        return
    logger.info(
        "User %s has %d open notification session(s)",
        user.id,
        len(presence_router.sessions_for(user.id)),
    )

    try:
        pending = await to_thread.run_sync(_unread_backlog, session_factory, user.id)
        await websocket.send_json({"type": "init", "sessionId": session.id, "data": pending})
        while True:
            try:
                message = await websocket.receive_json()
            except WebSocketDisconnect:
                raise
            except ValueError:
                continue

            if isinstance(message, dict):
                await _handle_client_message(websocket, session, message, session_factory)
    except WebSocketDisconnect:
        pass
    finally:
        presence_router.disconnect(session)
        if not presence_router.is_online(user.id):
            logger.info("User %s has no open notification sessions", user.id)


async def _handle_client_message(
    websocket: WebSocket,
    session: PresenceSession,
    message: dict[str, Any],
    session_factory: sessionmaker[Session],
) -> None:
    message_type = message.get("type")
    if message_type == "ping":
        await websocket.send_json({"type": "pong"})
    elif message_type == "join_task":
        presence_router.join_room(session, str(message.get("taskId") or ""))
    elif message_type == "leave_task":
        presence_router.leave_room(session, str(message.get("taskId") or ""))
    elif message_type == "ack":
        ids = message.get("ids", [])
        if isinstance(ids, list) and ids:
            await to_thread.run_sync(
                _acknowledge,
                session_factory,
                [str(notification_id) for notification_id in ids],
                session.user_id,
            )
    else:
        logger.debug("Ignoring websocket message of type %r", message_type)
