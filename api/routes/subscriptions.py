"""Subscription ledger routes: assign plan, record payment, pause/resume"""

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from api.dependencies import Caller, get_db, require_dietician, require_role
from app.exceptions import UnauthorizedError
from domain.enums import CallerRole
from domain.schemas.subscription_schemas import (
    AssignPlanRequest,
    RecordPaymentRequest,
    SubscriptionActionRequest,
    SubscriptionResponse,
)
from services import ClientService, SubscriptionService

router = APIRouter(prefix="/clients/{client_id}", tags=["Subscriptions"])
logger = logging.getLogger("nutridesk.api.subscriptions")


@router.get("/subscription", response_model=Optional[SubscriptionResponse])
def get_subscription(
    client_id: UUID,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_role(CallerRole.DIETICIAN, CallerRole.CLIENT)),
):
    """
    Get the client's most recent subscription (by end date), or null.

    Clients may only read their own subscription.
    """
    if caller.role == CallerRole.CLIENT:
        if caller.user_id != client_id:
            raise UnauthorizedError("Clients can only view their own subscription")
        ClientService.get_client(db, client_id)
    else:
        ClientService.get_client(db, client_id, caller.user_id)
    return SubscriptionService.get_latest_for_client(db, client_id)


@router.get("/subscriptions", response_model=List[SubscriptionResponse])
def list_subscriptions(
    client_id: UUID,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_dietician),
):
    """Full subscription history of a client, newest end date first."""
    ClientService.get_client(db, client_id, caller.user_id)
    return SubscriptionService.list_for_client(db, client_id)


@router.post(
    "/subscription",
    response_model=SubscriptionResponse,
    status_code=status.HTTP_201_CREATED,
)
def assign_plan(
    client_id: UUID,
    body: AssignPlanRequest,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_dietician),
):
    """
    Assign a plan to a client.

    Expires the client's current ACTIVE/PAUSED subscription and creates a new
    one in PENDING_PAYMENT ending ``duration_months`` calendar months after
    ``start_date``.
    """
    ClientService.get_client(db, client_id, caller.user_id)
    logger.info(
        "Assigning plan %r to client %s: price=%s months=%d start=%s",
        body.plan_name,
        client_id,
        body.price,
        body.duration_months,
        body.start_date,
    )
    return SubscriptionService.assign_plan(
        db,
        client_id,
        body.plan_name,
        body.price,
        body.duration_months,
        body.start_date,
        plan_id=body.plan_id,
    )


@router.patch("/subscription", response_model=SubscriptionResponse)
def record_payment(
    client_id: UUID,
    body: RecordPaymentRequest,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_dietician),
):
    """Record a payment against one of the client's subscriptions."""
    ClientService.get_client(db, client_id, caller.user_id)
    return SubscriptionService.record_payment(
        db,
        body.subscription_id,
        body.amount,
        body.method,
        body.note,
        client_id=client_id,
    )


@router.put("/subscription", response_model=SubscriptionResponse)
def pause_or_resume(
    client_id: UUID,
    body: SubscriptionActionRequest,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_dietician),
):
    """
    Pause or resume a subscription.

    Returns 400 with code INVALID_STATE_TRANSITION when pausing a subscription
    that is not ACTIVE or resuming one that is not PAUSED.
    """
    ClientService.get_client(db, client_id, caller.user_id)
    return SubscriptionService.apply_action(
        db, body.subscription_id, body.action, body.reason, client_id=client_id
    )
