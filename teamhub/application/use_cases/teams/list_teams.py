"""Use cases for browsing teams and their members."""

from collections.abc import Sequence

from sqlalchemy.orm import Session

from teamhub.domain.entities import Team, User
from teamhub.domain.errors import NotFoundError
from teamhub.infrastructure.repositories import TeamRepository, UserRepository


def list_teams(session: Session, *, user: User, search: str | None = None) -> Sequence[Team]:
    """Managers see every team; members only the teams they belong to."""

    member_id = None if user.is_manager() else user.id
    return TeamRepository(session).list(member_id=member_id, search=search)


def list_team_members(session: Session, team_id: str) -> Sequence[User]:
    repository = TeamRepository(session)
    if repository.get(team_id) is None:
        raise NotFoundError("Team not found")
    return UserRepository(session).list_by_ids(repository.member_ids(team_id))
