"""
Client roster model.
"""

from sqlalchemy import Column, Date, Text, TIMESTAMP, Uuid, Enum as SQLEnum
from sqlalchemy.orm import relationship
import uuid

from app.dates import utcnow
from domain.enums import ClientStatus
from domain.models.database import Base


def enum_column_type(enum_cls, name: str) -> SQLEnum:
    """Enum column that stores member values rather than member names."""
    return SQLEnum(
        enum_cls,
        name=name,
        values_callable=lambda members: [m.value for m in members],
        validate_strings=True,
    )


class Client(Base):
    """A dietician's client"""

    __tablename__ = "client"

    client_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    dietician_id = Column(Uuid, nullable=False, index=True)
    full_name = Column(Text, nullable=False)
    email = Column(Text)
    phone = Column(Text)
    notes = Column(Text)
    status = Column(
        enum_column_type(ClientStatus, "client_status"),
        nullable=False,
        default=ClientStatus.NEW,
        index=True,
    )
    program_start_date = Column(Date)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(
        TIMESTAMP(timezone=True), nullable=False, default=utcnow, onupdate=utcnow
    )

    subscriptions = relationship(
        "Subscription", back_populates="client", cascade="all, delete-orphan"
    )
    diet_plans = relationship(
        "DietPlan", back_populates="client", cascade="all, delete-orphan"
    )
    follow_ups = relationship(
        "FollowUp", back_populates="client", cascade="all, delete-orphan"
    )
