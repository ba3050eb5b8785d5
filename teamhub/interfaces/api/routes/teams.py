"""Routes to manage teams, members and invitations."""

import logging

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from teamhub.application.use_cases.teams import (
    AcceptOutcome,
    accept_invitation,
    create_team,
    decline_invitation,
    invite_team_members,
    list_team_members,
    list_teams,
)
from teamhub.application.use_cases.users import update_member_role
from teamhub.domain.entities import User
from teamhub.domain.errors import TeamHubError
from teamhub.infrastructure.database import get_db
from teamhub.interfaces.api.dependencies import get_current_user, require_manager
from teamhub.interfaces.api.routes_helpers import to_http_error
from teamhub.interfaces.api.schemas import (
    InvitationAcceptResponse,
    InvitationBatchResponse,
    InvitationCreate,
    InvitationRead,
    InvitationResultRead,
    MemberRoleUpdate,
    TeamCreate,
    TeamRead,
    UserRead,
    UserSummaryRead,
)

router = APIRouter(prefix="/teams", tags=["teams"])
logger = logging.getLogger(__name__)

_ACCEPT_MESSAGES = {
    AcceptOutcome.JOINED: "Successfully joined the team",
    AcceptOutcome.ALREADY_MEMBER: "You are already a member of this team",
    AcceptOutcome.ALREADY_ACCEPTED: "Invitation already accepted",
}


@router.get("/", response_model=list[TeamRead])
def read_teams(
    search: str | None = Query(None, description="Filter teams by name"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    teams = list_teams(db, user=current_user, search=search)
    return [TeamRead.model_validate(team) for team in teams]


@router.post("/", response_model=TeamRead, status_code=status.HTTP_201_CREATED)
def create_new_team(
    payload: TeamCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager),
):
    """Create a team; every added member except the creator is notified."""

    try:
        team = create_team(db, name=payload.name, member_ids=payload.member_ids, actor=current_user)
    except TeamHubError as exc:
        raise to_http_error(exc) from exc
    return TeamRead.model_validate(team)


@router.get("/{team_id}/members", response_model=list[UserSummaryRead])
def read_team_members(
    team_id: str,
    db: Session = Depends(get_db),
    _: User = Depends(get_current_user),
):
    try:
        members = list_team_members(db, team_id)
    except TeamHubError as exc:
        raise to_http_error(exc) from exc
    return [UserSummaryRead.model_validate(member) for member in members]


@router.put("/{user_id}/role", response_model=UserRead)
def change_member_role(
    user_id: str,
    payload: MemberRoleUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager),
):
    try:
        user = update_member_role(db, user_id, role=payload.role, actor=current_user)
    except TeamHubError as exc:
        raise to_http_error(exc) from exc
    return UserRead.model_validate(user)


@router.post("/invitations", response_model=InvitationBatchResponse)
def send_invitations(
    payload: InvitationCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_manager),
):
    """Invite each email to the team, reporting the outcome per address."""

    try:
        results = invite_team_members(
            db,
            emails=[str(email) for email in payload.emails],
            team_name=payload.team_name,
            role=payload.role,
            actor=current_user,
            message=payload.message,
        )
    except TeamHubError as exc:
        raise to_http_error(exc) from exc

    sent = sum(1 for result in results if result.status == "sent")
    return InvitationBatchResponse(
        message=f"Processed {len(results)} invitations ({sent} sent)",
        results=[InvitationResultRead(email=r.email, status=r.status) for r in results],
    )


@router.post("/invitations/{token}/accept", response_model=InvitationAcceptResponse)
def accept_team_invitation(
    token: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        outcome, team = accept_invitation(db, token, user=current_user)
    except TeamHubError as exc:
        raise to_http_error(exc) from exc
    return InvitationAcceptResponse(
        message=_ACCEPT_MESSAGES[outcome], team_id=team.id, team_name=team.name
    )


@router.post("/invitations/{token}/decline", response_model=InvitationRead)
def decline_team_invitation(
    token: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    try:
        invitation = decline_invitation(db, token, user=current_user)
    except TeamHubError as exc:
        raise to_http_error(exc) from exc
    return InvitationRead.model_validate(invitation)
