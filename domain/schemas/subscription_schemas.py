from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field, model_validator

from domain.enums import PaymentMethod, SubscriptionAction, SubscriptionStatus


class AssignPlanRequest(BaseModel):
    plan_id: Optional[UUID] = Field(None, description="Catalog plan this assignment was picked from")
    plan_name: str = Field(..., min_length=1, description="Plan name snapshot")
    price: Decimal = Field(..., gt=0, description="Total amount due for the period")
    duration_months: int = Field(..., ge=1, le=120)
    start_date: date


class RecordPaymentRequest(BaseModel):
    subscription_id: UUID
    amount: Decimal = Field(..., ge=0)
    method: PaymentMethod = PaymentMethod.CASH
    note: Optional[str] = None


class SubscriptionActionRequest(BaseModel):
    subscription_id: UUID
    action: SubscriptionAction
    reason: Optional[str] = None

    @model_validator(mode="after")
    def reason_only_for_pause(self):
        if self.action == SubscriptionAction.RESUME:
            self.reason = None
        return self


class PaymentRecordResponse(BaseModel):
    paid_at: datetime
    amount: Decimal
    method: PaymentMethod
    note: Optional[str] = None

    model_config = {"from_attributes": True}


class PauseIntervalResponse(BaseModel):
    start_date: date
    end_date: Optional[date] = None
    reason: Optional[str] = None

    model_config = {"from_attributes": True}


class SubscriptionResponse(BaseModel):
    subscription_id: UUID
    client_id: UUID
    plan_id: Optional[UUID] = None
    plan_name: str
    start_date: date
    end_date: date
    total_amount: Decimal
    amount_paid: Decimal
    status: SubscriptionStatus
    payments: List[PaymentRecordResponse] = []
    pauses: List[PauseIntervalResponse] = []
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
