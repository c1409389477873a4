"""Diet plan and diet readiness routes"""

import logging
from datetime import date
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from api.dependencies import Caller, get_db, require_dietician
from domain.schemas.diet_plan_schemas import (
    DietPlanResponse,
    DietPlanUpsert,
    DietStatusResponse,
)
from services import ClientService, DietPlanService, DietStatusService

router = APIRouter(prefix="/clients/{client_id}", tags=["Diet Plans"])
logger = logging.getLogger("nutridesk.api.diet_plans")


@router.get("/diet-plan", response_model=Optional[DietPlanResponse])
def get_diet_plan(
    client_id: UUID,
    week_start: Optional[date] = Query(None, description="First day of the week (default: this Monday)"),
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_dietician),
):
    ClientService.get_client(db, client_id, caller.user_id)
    return DietPlanService.get_week(db, client_id, week_start)


@router.put("/diet-plan", response_model=DietPlanResponse)
def save_diet_plan(
    client_id: UUID,
    body: DietPlanUpsert,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_dietician),
):
    """Create or overwrite one week of the client's diet plan."""
    ClientService.get_client(db, client_id, caller.user_id)
    return DietPlanService.save_week(db, client_id, body)


@router.get("/diet-status", response_model=DietStatusResponse)
def get_diet_status(
    client_id: UUID,
    as_of: Optional[date] = Query(None, description="Reference day (default: today)"),
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_dietician),
):
    """Severity color for today, tomorrow and the day after."""
    ClientService.get_client(db, client_id, caller.user_id)
    color, flags = DietStatusService.classify_client(db, client_id, as_of)
    return DietStatusResponse(
        client_id=client_id,
        as_of=min(flags),
        color=color,
        published={d.isoformat(): v for d, v in flags.items()},
    )
