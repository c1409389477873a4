import datetime as dt
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, Field

from domain.enums import FollowUpStatus


class FollowUpCreate(BaseModel):
    date: dt.date
    timing: Optional[str] = Field(None, max_length=40)
    category: Optional[str] = Field(None, max_length=60)
    meet_link: Optional[str] = None
    notes: Optional[str] = None


class FollowUpUpdate(BaseModel):
    """Partial update; only fields that are sent are applied."""

    # ISO date or datetime; reduced to a calendar day by the service
    date: Optional[str] = None
    timing: Optional[str] = Field(None, max_length=40)
    category: Optional[str] = Field(None, max_length=60)
    meet_link: Optional[str] = None
    status: Optional[FollowUpStatus] = None
    notes: Optional[str] = None


class FollowUpResponse(BaseModel):
    follow_up_id: UUID
    client_id: UUID
    dietician_id: UUID
    date: dt.date
    timing: str
    category: str
    meet_link: Optional[str] = None
    status: FollowUpStatus
    notes: Optional[str] = None
    created_at: dt.datetime

    model_config = {"from_attributes": True}
