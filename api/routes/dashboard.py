"""Dietician dashboard routes"""

import logging
from datetime import date
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from api.dependencies import Caller, get_db, require_dietician
from domain.schemas.dashboard_schemas import DashboardStatsResponse
from services import DashboardService

router = APIRouter(prefix="/dietician", tags=["Dashboard"])
logger = logging.getLogger("nutridesk.api.dashboard")


@router.get("/stats", response_model=DashboardStatsResponse)
def get_dashboard_stats(
    as_of: Optional[date] = Query(None, description="Reference day (default: today)"),
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_dietician),
):
    """
    Daily operating picture for the calling dietician:

    - client counts by status plus recently created clients
    - pending follow-ups due today, colored by the client's diet severity
    - clients whose upcoming diet days are not all published, most severe first
    """
    return DashboardService.get_stats(db, caller.user_id, today=as_of)
