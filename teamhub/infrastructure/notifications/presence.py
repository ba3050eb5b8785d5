"""Presence tracking and live delivery over websocket connections.

The :class:`PresenceRouter` owns the only copy of the presence state: which
sessions are open, which user each belongs to, and which rooms each has
joined. Every session joins the room of its own user when it connects so that
a user can be addressed directly; collaboration rooms keyed by task id are
joined and left explicitly by the client.

User rooms and collaboration rooms live in separate namespaces, so a client
joining a room named after another user's id never receives that user's
notifications.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
import logging
from typing import Any, Callable, DefaultDict, Protocol
import uuid

from teamhub.domain.entities import Principal
from teamhub.domain.errors import UnauthenticatedError
from teamhub.infrastructure.security import verify_credential

logger = logging.getLogger(__name__)

_USER_ROOM_PREFIX = "user:"
_COLLAB_ROOM_PREFIX = "room:"


class Connection(Protocol):
    """Transport primitives the router relies on (``fastapi.WebSocket`` fits)."""

    async def accept(self) -> None: ...

    async def send_json(self, data: Any) -> None: ...


CredentialVerifier = Callable[[str | None], Principal]


@dataclass(eq=False)
class PresenceSession:
    """A live connection bound to the user that opened it."""

    id: str
    principal: Principal
    connection: Connection
    rooms: set[str] = field(default_factory=set)

    @property
    def user_id(self) -> str:
        return self.principal.id


class PresenceRouter:
    """Map users to their live sessions and push events to them."""

    def __init__(self, verifier: CredentialVerifier) -> None:
        self._verifier = verifier
        self._sessions: dict[str, PresenceSession] = {}
        self._rooms: DefaultDict[str, dict[str, PresenceSession]] = defaultdict(dict)

    async def connect(self, credential: str | None, connection: Connection) -> PresenceSession:
        """Verify ``credential`` and register a session for ``connection``.

        Raises :class:`UnauthenticatedError` before accepting the connection
        when the credential is missing or invalid.
        """

        principal = self._verifier(credential)
        if not principal.id:
            raise UnauthenticatedError("Credential does not identify a user")

        await connection.accept()
        session = PresenceSession(
            id=uuid.uuid4().hex, principal=principal, connection=connection
        )
        self._sessions[session.id] = session
        self._add_to_room(session, _user_room(principal.id))
        logger.info("User %s connected (session %s)", principal.id, session.id)
        return session

    def disconnect(self, session: PresenceSession) -> None:
        """Drop ``session`` and every room membership it holds. Idempotent."""

        if self._sessions.pop(session.id, None) is None:
            return
        for room in list(session.rooms):
            self._remove_from_room(session, room)
        logger.info("User %s disconnected (session %s)", session.user_id, session.id)

    def join_room(self, session: PresenceSession, room_id: str) -> None:
        if not self._is_live(session) or not room_id:
            return
        self._add_to_room(session, _collab_room(room_id))
        logger.debug("Session %s joined room %s", session.id, room_id)

    def leave_room(self, session: PresenceSession, room_id: str) -> None:
        if not self._is_live(session) or not room_id:
            return
        self._remove_from_room(session, _collab_room(room_id))
        logger.debug("Session %s left room %s", session.id, room_id)

    async def deliver(self, recipient_id: str, event: str, data: Any) -> int:
        """Push ``data`` as ``event`` to every live session of ``recipient_id``.

        Returns the number of sessions that received it; zero when the user is
        offline.
        """

        return await self._send(_user_room(recipient_id), event, data, exclude=None)

    async def broadcast_to_room(
        self,
        room_id: str,
        event: str,
        data: Any,
        *,
        exclude: str | None = None,
    ) -> int:
        """Push ``data`` to every session in a collaboration room.

        ``exclude`` is the id of a session (usually the originator) to skip.
        """

        return await self._send(_collab_room(room_id), event, data, exclude=exclude)

    def sessions_for(self, user_id: str) -> list[PresenceSession]:
        return list(self._rooms.get(_user_room(user_id), {}).values())

    def is_online(self, user_id: str) -> bool:
        return bool(self._rooms.get(_user_room(user_id)))

    def rooms_for(self, session: PresenceSession) -> set[str]:
        """Return the collaboration rooms ``session`` currently belongs to."""

        return {
            room[len(_COLLAB_ROOM_PREFIX):]
            for room in session.rooms
            if room.startswith(_COLLAB_ROOM_PREFIX)
        }

    def get_session(self, session_id: str) -> PresenceSession | None:
        return self._sessions.get(session_id)

    def _is_live(self, session: PresenceSession) -> bool:
        return bool(session.user_id) and session.id in self._sessions

    def _add_to_room(self, session: PresenceSession, room: str) -> None:
        self._rooms[room][session.id] = session
        session.rooms.add(room)

    def _remove_from_room(self, session: PresenceSession, room: str) -> None:
        members = self._rooms.get(room)
        if members is not None:
            members.pop(session.id, None)
            if not members:
                self._rooms.pop(room, None)
        session.rooms.discard(room)

    async def _send(
        self, room: str, event: str, data: Any, *, exclude: str | None
    ) -> int:
        targets = [
            session
            for session in self._rooms.get(room, {}).values()
            if session.id != exclude
        ]
        delivered = 0
        for session in targets:
            # Membership may change while an earlier send is awaiting.
            if session.id not in self._rooms.get(room, {}):
                continue
            try:
                await session.connection.send_json({"type": event, "data": data})
            except Exception:
                logger.warning(
                    "Dropping session %s of user %s after failed %s push",
                    session.id,
                    session.user_id,
                    event,
                    exc_info=True,
                )
                self.disconnect(session)
            else:
                delivered += 1
        return delivered


def _user_room(user_id: str) -> str:
    return f"{_USER_ROOM_PREFIX}{user_id}"


def _collab_room(room_id: str) -> str:
    return f"{_COLLAB_ROOM_PREFIX}{room_id}"


presence_router = PresenceRouter(verify_credential)


__all__ = [
    "Connection",
    "CredentialVerifier",
    "PresenceRouter",
    "PresenceSession",
    "presence_router",
]
