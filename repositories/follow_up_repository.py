"""
Follow-up Repository - Data access layer for follow-up reminders
"""

from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.enums import ClientStatus, FollowUpStatus
from domain.models import Client, FollowUp


class FollowUpRepository(BaseRepository[FollowUp]):
    """Repository for follow-up data access"""

    def __init__(self, db: Session):
        super().__init__(db, FollowUp)

    def get_by_id(self, follow_up_id: UUID) -> Optional[FollowUp]:
        """Get follow-up by ID"""
        return (
            self.db.query(FollowUp).filter(FollowUp.follow_up_id == follow_up_id).first()
        )

    def get_owned(
        self, follow_up_id: UUID, client_id: UUID, dietician_id: UUID
    ) -> Optional[FollowUp]:
        """Get a follow-up only if it belongs to both the client and the dietician"""
        return (
            self.db.query(FollowUp)
            .filter(
                FollowUp.follow_up_id == follow_up_id,
                FollowUp.client_id == client_id,
                FollowUp.dietician_id == dietician_id,
            )
            .first()
        )

    def list_for_client(
        self, client_id: UUID, status: Optional[FollowUpStatus] = None
    ) -> List[FollowUp]:
        query = self.db.query(FollowUp).filter(FollowUp.client_id == client_id)
        if status is not None:
            query = query.filter(FollowUp.status == status)
        return query.order_by(FollowUp.date, FollowUp.created_at).all()

    def delete_pending_for_client(self, client_id: UUID) -> int:
        """Remove every Pending follow-up of a client. The caller commits."""
        return (
            self.db.query(FollowUp)
            .filter(
                FollowUp.client_id == client_id,
                FollowUp.status == FollowUpStatus.PENDING,
            )
            .delete(synchronize_session="fetch")
        )

    def bulk_add(self, follow_ups: List[FollowUp]) -> List[FollowUp]:
        """Stage a batch of follow-ups. The caller commits."""
        self.db.add_all(follow_ups)
        self.db.flush()
        return follow_ups

    def due_on(self, dietician_id: UUID, day: date) -> List[tuple]:
        """
        Pending follow-ups of a dietician dated ``day``, joined with their
        client and excluding deleted clients.

        Returns ``(FollowUp, Client)`` pairs ordered by client name.
        """
        return (
            self.db.query(FollowUp, Client)
            .join(Client, Client.client_id == FollowUp.client_id)
            .filter(
                FollowUp.dietician_id == dietician_id,
                FollowUp.date == day,
                FollowUp.status == FollowUpStatus.PENDING,
                Client.status != ClientStatus.DELETED,
            )
            .order_by(Client.full_name, FollowUp.timing)
            .all()
        )
