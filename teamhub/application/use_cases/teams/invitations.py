"""Use cases covering the invitation token lifecycle.

An invitation is created (or reset to pending with a fresh token) per email
and team, then accepted or declined by the invited account.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging

from sqlalchemy.orm import Session

from teamhub.application.use_cases.notifications import notify_team_invitation
from teamhub.config import get_settings
from teamhub.domain.entities import Invitation, InvitationStatus, Team, User
from teamhub.domain.errors import ForbiddenError, NotFoundError, ValidationError
from teamhub.infrastructure.email import send_team_invitation_email
from teamhub.infrastructure.repositories import (
    InvitationRepository,
    TeamRepository,
    UserRepository,
)
from teamhub.infrastructure.security import generate_invitation_token

logger = logging.getLogger(__name__)


@dataclass
class InvitationResult:
    email: str
    status: str
    invitation: Invitation | None = None


class AcceptOutcome(Enum):
    JOINED = "joined"
    ALREADY_MEMBER = "already_member"
    ALREADY_ACCEPTED = "already_accepted"


def invite_team_members(
    session: Session,
    *,
    emails: list[str],
    team_name: str,
    role: str,
    actor: User,
    message: str | None = None,
) -> list[InvitationResult]:
    """Invite every address in ``emails`` to ``team_name``.

    Each address is processed on its own; a failure is reported as ``failed``
    in the results without stopping the others.
    """

    addresses = list(dict.fromkeys(email.strip().lower() for email in emails if email.strip()))
    if not addresses or not team_name or not role:
        raise ValidationError("Required fields missing")

    team = TeamRepository(session).get_by_name(team_name)
    if team is None:
        raise NotFoundError("Team not found")

    results: list[InvitationResult] = []
    for address in addresses:
        try:
            invitation = _invite(
                session, team=team, email=address, role=role, actor=actor, message=message
            )
        except Exception:
            session.rollback()
            logger.exception("Invitation to %s for team %s failed", address, team.name)
            results.append(InvitationResult(email=address, status="failed"))
        else:
            results.append(InvitationResult(email=address, status="sent", invitation=invitation))
    return results


def _invite(
    session: Session,
    *,
    team: Team,
    email: str,
    role: str,
    actor: User,
    message: str | None,
) -> Invitation:
    invitation = InvitationRepository(session).upsert(
        email=email,
        team_id=team.id,
        role=role,
        token=generate_invitation_token(),
        invited_by=actor.id,
    )

    invite_link = f"{get_settings().frontend_url.rstrip('/')}/invitation/{invitation.token}"
    if not send_team_invitation_email(
        email,
        inviter_name=actor.name,
        team_name=team.name,
        role=role,
        invite_link=invite_link,
        message=message,
    ):
        logger.warning("Invitation email to %s was not sent", email)

    existing_user = UserRepository(session).get_by_email(email)
    if existing_user is not None:
        notify_team_invitation(
            session,
            team=team,
            invitation=invitation,
            recipient_id=existing_user.id,
            actor=actor,
        )
    return invitation


def accept_invitation(session: Session, token: str, *, user: User) -> tuple[AcceptOutcome, Team]:
    """Join the invited team as ``user``."""

    repository = InvitationRepository(session)
    invitation = repository.get_by_token(token)
    if invitation is None:
        raise NotFoundError("Invitation not found")
    if invitation.email != user.email.lower():
        raise ForbiddenError(
            f"This invitation was sent to {invitation.email}. You are logged in as {user.email}."
        )

    team_repository = TeamRepository(session)
    team = team_repository.get(invitation.team_id)
    if team is None:
        raise NotFoundError("Team not found")

    if invitation.status is InvitationStatus.ACCEPTED:
        return AcceptOutcome.ALREADY_ACCEPTED, team
    if invitation.status is InvitationStatus.DECLINED:
        raise ValidationError("This invitation was previously declined")

    if team_repository.is_member(team.id, user.id):
        repository.set_status(invitation.id, InvitationStatus.ACCEPTED)
        return AcceptOutcome.ALREADY_MEMBER, team

    team_repository.add_member(team.id, user.id, role=invitation.role)
    repository.set_status(invitation.id, InvitationStatus.ACCEPTED)
    return AcceptOutcome.JOINED, team


def decline_invitation(session: Session, token: str, *, user: User) -> Invitation:
    repository = InvitationRepository(session)
    invitation = repository.get_by_token(token)
    if invitation is None or invitation.status is not InvitationStatus.PENDING:
        raise ValidationError("Invalid or expired invitation")
    if invitation.email != user.email.lower():
        raise ForbiddenError("You cannot decline an invitation sent to another email")
    return repository.set_status(invitation.id, InvitationStatus.DECLINED)
