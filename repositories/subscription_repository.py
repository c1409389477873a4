"""
Subscription Repository - Data access layer for the subscription ledger
"""

from datetime import date
from typing import List, Optional
from uuid import UUID

from sqlalchemy.orm import Session, selectinload

from repositories.base import BaseRepository
from domain.enums import SubscriptionStatus
from domain.models import PauseInterval, Subscription

# Statuses that count toward "the client's current subscription"
LIVE_STATUSES = (SubscriptionStatus.ACTIVE, SubscriptionStatus.PAUSED)


class SubscriptionRepository(BaseRepository[Subscription]):
    """Repository for subscription data access"""

    def __init__(self, db: Session):
        super().__init__(db, Subscription)

    def get_by_id(self, subscription_id: UUID) -> Optional[Subscription]:
        """Get subscription by ID"""
        return (
            self.db.query(Subscription)
            .options(selectinload(Subscription.payments), selectinload(Subscription.pauses))
            .filter(Subscription.subscription_id == subscription_id)
            .first()
        )

    def get_for_update(self, subscription_id: UUID) -> Optional[Subscription]:
        """
        Load a subscription for a read-modify-write.

        Takes a row lock where the backend supports it and always refreshes
        state already held by the session, so the version the caller writes
        against is the one currently stored.
        """
        query = (
            self.db.query(Subscription)
            .filter(Subscription.subscription_id == subscription_id)
            .populate_existing()
        )
        if self.db.get_bind().dialect.name != "sqlite":
            query = query.with_for_update()
        subscription = query.first()
        if subscription is not None:
            # Children are reloaded as well so the open-pause lookup is current
            self.db.refresh(subscription, attribute_names=["payments", "pauses"])
        return subscription

    def get_latest_for_client(self, client_id: UUID) -> Optional[Subscription]:
        """Most recent subscription by end date"""
        return (
            self.db.query(Subscription)
            .options(selectinload(Subscription.payments), selectinload(Subscription.pauses))
            .filter(Subscription.client_id == client_id)
            .order_by(Subscription.end_date.desc(), Subscription.created_at.desc())
            .first()
        )

    def list_for_client(self, client_id: UUID) -> List[Subscription]:
        return (
            self.db.query(Subscription)
            .filter(Subscription.client_id == client_id)
            .order_by(Subscription.end_date.desc())
            .all()
        )

    def expire_live_for_client(
        self,
        client_id: UUID,
        closed_on: date,
        exclude_id: Optional[UUID] = None,
    ) -> int:
        """
        Move every ACTIVE or PAUSED subscription of a client to EXPIRED.

        Open pauses of the expired subscriptions end on ``closed_on``. The
        status UPDATE also bumps the version, so concurrent ledger writes
        against any of these rows fail their version check. The caller commits.
        """
        query = self.db.query(Subscription.subscription_id).filter(
            Subscription.client_id == client_id,
            Subscription.status.in_(LIVE_STATUSES),
        )
        if exclude_id is not None:
            query = query.filter(Subscription.subscription_id != exclude_id)
        ids = [row[0] for row in query.all()]
        if not ids:
            return 0

        self.db.query(PauseInterval).filter(
            PauseInterval.subscription_id.in_(ids),
            PauseInterval.end_date.is_(None),
        ).update({PauseInterval.end_date: closed_on}, synchronize_session="fetch")
        return (
            self.db.query(Subscription)
            .filter(
                Subscription.subscription_id.in_(ids),
                Subscription.status.in_(LIVE_STATUSES),
            )
            .update(
                {
                    Subscription.status: SubscriptionStatus.EXPIRED,
                    Subscription.version: Subscription.version + 1,
                },
                synchronize_session="fetch",
            )
        )
