"""Plan catalog routes"""

import logging
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from api.dependencies import Caller, get_db, require_dietician, require_role
from domain.enums import CallerRole
from domain.schemas.plan_schemas import PlanCreate, PlanResponse, PlanUpdate
from services import PlanService

router = APIRouter(prefix="/plans", tags=["Plans"])
logger = logging.getLogger("nutridesk.api.plans")


@router.get("", response_model=List[PlanResponse])
def list_plans(
    include_inactive: bool = Query(False),
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_role(CallerRole.DIETICIAN, CallerRole.CLIENT)),
):
    """Offered plans, cheapest first. Only dieticians can see withdrawn ones."""
    if caller.role != CallerRole.DIETICIAN:
        include_inactive = False
    return PlanService.list_plans(db, include_inactive)


@router.post("", response_model=PlanResponse, status_code=status.HTTP_201_CREATED)
def create_plan(
    body: PlanCreate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_dietician),
):
    return PlanService.create_plan(db, body)


@router.put("/{plan_id}", response_model=PlanResponse)
def update_plan(
    plan_id: UUID,
    body: PlanUpdate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_dietician),
):
    return PlanService.update_plan(db, plan_id, body)


@router.delete("/{plan_id}", response_model=PlanResponse)
def deactivate_plan(
    plan_id: UUID,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_dietician),
):
    """Soft delete: the plan stops being offered but stays linked to history."""
    return PlanService.deactivate_plan(db, plan_id)
