"""
Follow-up reminder model.
"""

from sqlalchemy import Column, Date, ForeignKey, Text, TIMESTAMP, Uuid
from sqlalchemy.orm import relationship
import uuid

from app.dates import utcnow
from domain.enums import FollowUpStatus
from domain.models.client import enum_column_type
from domain.models.database import Base


class FollowUp(Base):
    """Scheduled check-in between a dietician and a client"""

    __tablename__ = "follow_up"

    follow_up_id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    client_id = Column(
        Uuid,
        ForeignKey("client.client_id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    dietician_id = Column(Uuid, nullable=False, index=True)
    date = Column(Date, nullable=False, index=True)
    timing = Column(Text, nullable=False)
    category = Column(Text, nullable=False, default="Diet")
    meet_link = Column(Text)
    status = Column(
        enum_column_type(FollowUpStatus, "follow_up_status"),
        nullable=False,
        default=FollowUpStatus.PENDING,
    )
    notes = Column(Text)
    created_at = Column(TIMESTAMP(timezone=True), nullable=False, default=utcnow)

    client = relationship("Client", back_populates="follow_ups")
