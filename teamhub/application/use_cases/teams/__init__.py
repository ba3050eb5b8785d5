"""Use cases for managing teams and invitations."""

from .create_team import create_team
from .invitations import (
    AcceptOutcome,
    InvitationResult,
    accept_invitation,
    decline_invitation,
    invite_team_members,
)
from .list_teams import list_team_members, list_teams

__all__ = [
    "AcceptOutcome",
    "InvitationResult",
    "accept_invitation",
    "create_team",
    "decline_invitation",
    "invite_team_members",
    "list_team_members",
    "list_teams",
]
