import datetime as dt
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from domain.enums import SeverityColor


class ClientCounts(BaseModel):
    """Roster counts for one dietician"""

    active: int = 0
    paused: int = 0
    lead: int = 0
    expired: int = Field(0, description="Clients whose status is DELETED")
    new: int = Field(0, description="Non-deleted clients created in the recent window")


class DueFollowUp(BaseModel):
    follow_up_id: UUID
    client_id: UUID
    client_name: str
    date: dt.date
    timing: str
    category: str
    severity: Optional[SeverityColor] = None
    color: str = Field(..., description="Display color derived from diet severity")


class DietPendingClient(BaseModel):
    client_id: UUID
    client_name: str
    severity: SeverityColor


class DietPendingSummary(BaseModel):
    black: int = 0
    red: int = 0
    yellow: int = 0
    total: int = Field(0, description="black + red + yellow, not affected by truncation")
    clients: List[DietPendingClient] = []


class DashboardStatsResponse(BaseModel):
    dietician_id: UUID
    as_of: dt.date
    counts: ClientCounts
    todays_follow_ups: List[DueFollowUp]
    diet_pending: DietPendingSummary
