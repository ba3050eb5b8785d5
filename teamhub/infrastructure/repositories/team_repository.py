"""Persistence helpers for teams and their memberships."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy.orm import Session

from teamhub.domain.entities import Team, TeamMember
from teamhub.infrastructure.models import TeamMemberModel, TeamModel
from teamhub.utils import ensure_utc


class TeamRepository:
    """Provide CRUD operations for :class:`Team` aggregates."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, team_id: str) -> Team | None:
        model = self.session.get(TeamModel, team_id)
        return self._to_entity(model) if model else None

    def get_by_name(self, name: str) -> Team | None:
        model = self.session.query(TeamModel).filter(TeamModel.name == name).first()
        return self._to_entity(model) if model else None

    def list(self, *, member_id: str | None = None, search: str | None = None) -> Sequence[Team]:
        query = self.session.query(TeamModel)
        if member_id is not None:
            query = query.join(TeamMemberModel).filter(TeamMemberModel.user_id == member_id)
        if search:
            query = query.filter(TeamModel.name.ilike(f"%{search}%"))
        query = query.order_by(TeamModel.name.asc())
        return [self._to_entity(model) for model in query.all()]

    def create(self, name: str, member_ids: Iterable[str] = ()) -> Team:
        model = TeamModel(name=name)
        for user_id in dict.fromkeys(member_ids):
            model.members.append(TeamMemberModel(user_id=user_id))
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def member_ids(self, team_id: str) -> set[str]:
        rows = (
            self.session.query(TeamMemberModel.user_id)
            .filter(TeamMemberModel.team_id == team_id)
            .all()
        )
        return {row.user_id for row in rows}

    def is_member(self, team_id: str, user_id: str) -> bool:
        return (
            self.session.query(TeamMemberModel)
            .filter(TeamMemberModel.team_id == team_id, TeamMemberModel.user_id == user_id)
            .first()
            is not None
        )

    def add_member(self, team_id: str, user_id: str, *, role: str = "MEMBER") -> TeamMember:
        model = TeamMemberModel(team_id=team_id, user_id=user_id, role=role)
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._member_to_entity(model)

    @staticmethod
    def _member_to_entity(model: TeamMemberModel) -> TeamMember:
        return TeamMember(
            id=model.id,
            team_id=model.team_id,
            user_id=model.user_id,
            role=model.role,
            joined_at=ensure_utc(model.joined_at),
        )

    @classmethod
    def _to_entity(cls, model: TeamModel) -> Team:
        return Team(
            id=model.id,
            name=model.name,
            members=[cls._member_to_entity(member) for member in model.members],
            created_at=ensure_utc(model.created_at),
        )


__all__ = ["TeamRepository"]
