"""
Subscription ledger models: billing periods with their payment and pause history.
"""

from sqlalchemy import (
    Column,
    Date,
    ForeignKey,
    Integer,
    Numeric,
    Text,
    TIMESTAMP,
    Uuid,
)
from sqlalchemy.orm import relationship
import uuid

from app.dates import utcnow
from domain.enums import PaymentMethod, SubscriptionStatus
from domain.models.client import enum_column_type
from domain.models.database import Base


class Subscription(Base):
    """One billing period of one client"""

    __tablename__ = "subscription"

    subscription_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    client_id = Column(
        Uuid,
        ForeignKey("client.client_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    # Catalog entry the plan was picked from; NULL for custom plans
    plan_id = Column(Uuid, ForeignKey("plan.plan_id", ondelete="SET NULL"), index=True)
    plan_name = Column(Text, nullable=False)  # snapshot, not a live reference
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    total_amount = Column(Numeric(12, 2), nullable=False)
    amount_paid = Column(Numeric(12, 2), nullable=False, default=0)
    status = Column(
        enum_column_type(SubscriptionStatus, "subscription_status"),
        nullable=False,
        default=SubscriptionStatus.PENDING_PAYMENT,
        index=True,
    )
    version = Column(Integer, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    # Every UPDATE is guarded by "WHERE version = <loaded version>"
    __mapper_args__ = {"version_id_col": version}

    client = relationship("Client", back_populates="subscriptions")
    payments = relationship(
        "PaymentRecord",
        back_populates="subscription",
        cascade="all, delete-orphan",
        order_by="PaymentRecord.seq",
    )
    pauses = relationship(
        "PauseInterval",
        back_populates="subscription",
        cascade="all, delete-orphan",
        order_by="PauseInterval.seq",
    )

    def open_pause(self):
        """The pause interval that has not ended yet, if any."""
        for pause in self.pauses:
            if pause.end_date is None:
                return pause
        return None


class PaymentRecord(Base):
    """Append-only payment entry"""

    __tablename__ = "subscription_payment"

    payment_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    subscription_id = Column(
        Uuid,
        ForeignKey("subscription.subscription_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    seq = Column(Integer, nullable=False)
    paid_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    amount = Column(Numeric(12, 2), nullable=False)
    method = Column(
        enum_column_type(PaymentMethod, "payment_method"),
        nullable=False,
        default=PaymentMethod.CASH,
    )
    note = Column(Text)

    subscription = relationship("Subscription", back_populates="payments")


class PauseInterval(Base):
    """A span of calendar days during which the subscription clock is stopped"""

    __tablename__ = "subscription_pause"

    pause_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    subscription_id = Column(
        Uuid,
        ForeignKey("subscription.subscription_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    seq = Column(Integer, nullable=False)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date)  # NULL while the pause is open
    reason = Column(Text)

    subscription = relationship("Subscription", back_populates="pauses")
