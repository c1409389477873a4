"""
Plan catalog model. Subscriptions copy a plan's name and terms when assigned.
"""

from sqlalchemy import Boolean, Column, Integer, JSON, Numeric, Text, TIMESTAMP, Uuid
import uuid

from app.dates import utcnow
from domain.models.database import Base


class Plan(Base):
    """A priced program a dietician can assign"""

    __tablename__ = "plan"

    plan_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    name = Column(Text, nullable=False)
    duration_months = Column(Integer, nullable=False)
    price = Column(Numeric(12, 2), nullable=False)
    description = Column(Text)
    features = Column(JSON, nullable=False, default=list)  # ["Weekly call", ...]
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    is_recommended = Column(Boolean, nullable=False, default=False)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )
