"""
Weekly diet plan models. Authored elsewhere; the engagement engine only reads
each day's date and publication status.
"""

from sqlalchemy import (
    Column,
    Date,
    ForeignKey,
    JSON,
    TIMESTAMP,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship
import uuid

from app.dates import utcnow
from domain.enums import DietDayStatus
from domain.models.client import enum_column_type
from domain.models.database import Base


class DietPlan(Base):
    """One calendar week of meals for one client"""

    __tablename__ = "diet_plan"
    __table_args__ = (UniqueConstraint("client_id", "week_start_date"),)

    plan_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    client_id = Column(
        Uuid,
        ForeignKey("client.client_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    week_start_date = Column(Date, nullable=False)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    client = relationship("Client", back_populates="diet_plans")
    days = relationship(
        "DietDay",
        back_populates="plan",
        cascade="all, delete-orphan",
        order_by="DietDay.date",
    )


class DietDay(Base):
    """A single day of a diet plan"""

    __tablename__ = "diet_day"

    day_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    plan_id = Column(
        Uuid, ForeignKey("diet_plan.plan_id", ondelete="CASCADE"), nullable=False
    )
    # Denormalized from the plan so the batch readiness query needs no join
    client_id = Column(Uuid, nullable=False)
    date = Column(Date, nullable=False, index=True)
    status = Column(
        enum_column_type(DietDayStatus, "diet_day_status"),
        nullable=False,
        default=DietDayStatus.NO_DIET,
    )
    meals = Column(JSON, nullable=False, default=list)  # [{time, items: [...]}, ...]

    plan = relationship("DietPlan", back_populates="days")
