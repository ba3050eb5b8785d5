"""Persistence helpers for team invitations."""

from __future__ import annotations

from sqlalchemy.orm import Session

from teamhub.domain.entities import Invitation, InvitationStatus
from teamhub.infrastructure.models import InvitationModel
from teamhub.utils import ensure_utc


class InvitationRepository:
    """Store and look up invitations by token or by (email, team)."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_token(self, token: str) -> Invitation | None:
        model = self.session.query(InvitationModel).filter(InvitationModel.token == token).first()
        return self._to_entity(model) if model else None

    def upsert(
        self,
        *,
        email: str,
        team_id: str,
        role: str,
        token: str,
        invited_by: str | None,
    ) -> Invitation:
        """Create the invitation or reset an existing one to pending with ``token``."""

        model = (
            self.session.query(InvitationModel)
            .filter(InvitationModel.email == email, InvitationModel.team_id == team_id)
            .first()
        )
        if model is None:
            model = InvitationModel(email=email, team_id=team_id)
        model.role = role
        model.token = token
        model.status = InvitationStatus.PENDING.value
        model.invited_by = invited_by
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    def set_status(self, invitation_id: str, status: InvitationStatus) -> Invitation:
        model = self.session.get(InvitationModel, invitation_id)
        if model is None:
            msg = f"Invitation with id {invitation_id} not found"
            raise ValueError(msg)
        model.status = InvitationStatus(status).value
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: InvitationModel) -> Invitation:
        return Invitation(
            id=model.id,
            email=model.email,
            team_id=model.team_id,
            role=model.role,
            token=model.token,
            status=InvitationStatus(model.status),
            invited_by=model.invited_by,
            created_at=ensure_utc(model.created_at),
            updated_at=ensure_utc(model.updated_at),
        )


__all__ = ["InvitationRepository"]
