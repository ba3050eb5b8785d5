"""Use case for creating a team with its initial members."""

import logging

from sqlalchemy.orm import Session

from teamhub.application.use_cases.notifications import notify_added_to_team
from teamhub.config import get_settings
from teamhub.domain.entities import Team, User
from teamhub.domain.errors import ConflictError, ValidationError
from teamhub.infrastructure.email import send_added_to_team_email
from teamhub.infrastructure.repositories import TeamRepository, UserRepository

logger = logging.getLogger(__name__)


def create_team(
    session: Session,
    *,
    name: str,
    member_ids: list[str],
    actor: User,
) -> Team:
    """Create ``name`` with ``member_ids`` and tell the added users about it.

    The actor is never notified, even when listed among the members.
    """

    name = name.strip()
    if not name:
        raise ValidationError("Team name is required")

    repository = TeamRepository(session)
    if repository.get_by_name(name):
        raise ConflictError("Team name already exists")

    unique_ids = list(dict.fromkeys(member_id for member_id in member_ids if member_id))
    members = UserRepository(session).list_by_ids(unique_ids)
    unknown = set(unique_ids) - {member.id for member in members}
    if unknown:
        raise ValidationError(f"Unknown user ids: {', '.join(sorted(unknown))}")

    team = repository.create(name, unique_ids)

    notify_added_to_team(session, team=team, member_ids=unique_ids, actor=actor)

    dashboard_link = f"{get_settings().frontend_url.rstrip('/')}/dashboard"
    for member in members:
        if member.id == actor.id:
            continue
        if not send_added_to_team_email(
            member.email,
            added_by=actor.name,
            team_name=team.name,
            dashboard_link=dashboard_link,
        ):
            logger.warning("Could not email %s about team %s", member.email, team.name)

    return team
