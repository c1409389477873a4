"""Follow-up routes"""

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from api.dependencies import Caller, get_db, require_dietician
from domain.enums import FollowUpStatus
from domain.schemas.follow_up_schemas import (
    FollowUpCreate,
    FollowUpResponse,
    FollowUpUpdate,
)
from services import ClientService, FollowUpService

router = APIRouter(prefix="/clients/{client_id}/follow-ups", tags=["Follow-ups"])
logger = logging.getLogger("nutridesk.api.follow_ups")


@router.get("", response_model=List[FollowUpResponse])
def list_follow_ups(
    client_id: UUID,
    status_filter: Optional[FollowUpStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_dietician),
):
    """All follow-ups of a client in date order."""
    ClientService.get_client(db, client_id, caller.user_id)
    return FollowUpService.list_for_client(db, client_id, status_filter)


@router.post("", response_model=FollowUpResponse, status_code=status.HTTP_201_CREATED)
def create_follow_up(
    client_id: UUID,
    body: FollowUpCreate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_dietician),
):
    ClientService.get_client(db, client_id, caller.user_id)
    return FollowUpService.create(db, client_id, caller.user_id, body)


@router.patch("/{follow_up_id}", response_model=FollowUpResponse)
def update_follow_up(
    client_id: UUID,
    follow_up_id: UUID,
    body: FollowUpUpdate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_dietician),
):
    """Reschedule, complete or annotate a follow-up."""
    return FollowUpService.update(db, follow_up_id, client_id, caller.user_id, body)


@router.delete("/{follow_up_id}")
def delete_follow_up(
    client_id: UUID,
    follow_up_id: UUID,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_dietician),
):
    FollowUpService.delete(db, follow_up_id, client_id, caller.user_id)
    return {"status": "ok", "deleted": str(follow_up_id)}
