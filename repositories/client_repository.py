"""
Client Repository - Data access layer for the client roster
"""

from datetime import datetime
from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy import func
from sqlalchemy.orm import Session

from repositories.base import BaseRepository
from domain.enums import ClientStatus
from domain.models import Client, DietPlan, FollowUp, Subscription


class ClientRepository(BaseRepository[Client]):
    """Repository for client data access"""

    def __init__(self, db: Session):
        super().__init__(db, Client)

    def get_by_id(self, client_id: UUID, with_lock: bool = False) -> Optional[Client]:
        """Get client by ID, optionally locking the row for the rest of the transaction"""
        query = self.db.query(Client).filter(Client.client_id == client_id)
        if with_lock and self.db.get_bind().dialect.name != "sqlite":
            query = query.with_for_update()
        return query.first()

    def get_for_dietician(self, client_id: UUID, dietician_id: UUID) -> Optional[Client]:
        """Get client by ID only if it belongs to the dietician"""
        return (
            self.db.query(Client)
            .filter(Client.client_id == client_id, Client.dietician_id == dietician_id)
            .first()
        )

    def list_for_dietician(
        self, dietician_id: UUID, status: Optional[ClientStatus] = None
    ) -> List[Client]:
        query = self.db.query(Client).filter(Client.dietician_id == dietician_id)
        if status is not None:
            query = query.filter(Client.status == status)
        return query.order_by(Client.full_name).all()

    def count_by_status(self, dietician_id: UUID) -> Dict[ClientStatus, int]:
        """Number of clients per status for one dietician"""
        rows = (
            self.db.query(Client.status, func.count(Client.client_id))
            .filter(Client.dietician_id == dietician_id)
            .group_by(Client.status)
            .all()
        )
        return {status: count for status, count in rows}

    def count_created_since(self, dietician_id: UUID, since: datetime) -> int:
        """Non-deleted clients created at or after ``since``"""
        return (
            self.db.query(func.count(Client.client_id))
            .filter(
                Client.dietician_id == dietician_id,
                Client.status != ClientStatus.DELETED,
                Client.created_at >= since,
            )
            .scalar()
        ) or 0

    def hard_delete(self, client: Client) -> None:
        """
        Permanently remove a client and every dependent record.

        Subscriptions (with payments and pauses), diet plans (with days) and
        follow-ups cascade through the ORM relationships. The caller commits.
        """
        self.db.delete(client)
        self.db.flush()

    def dependent_counts(self, client_id: UUID) -> Dict[str, int]:
        """Rows still referencing a client, used to verify cascade deletes"""
        return {
            "subscriptions": self.db.query(Subscription)
            .filter(Subscription.client_id == client_id)
            .count(),
            "diet_plans": self.db.query(DietPlan).filter(DietPlan.client_id == client_id).count(),
            "follow_ups": self.db.query(FollowUp).filter(FollowUp.client_id == client_id).count(),
        }
