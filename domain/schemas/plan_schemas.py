from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field


class PlanCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)
    duration_months: int = Field(..., ge=1, le=120)
    price: Decimal = Field(..., gt=0)
    description: Optional[str] = None
    features: List[str] = Field(default_factory=list)
    is_recommended: bool = False


class PlanUpdate(BaseModel):
    """Partial update; only fields that are sent are applied."""

    name: Optional[str] = Field(None, min_length=1, max_length=120)
    duration_months: Optional[int] = Field(None, ge=1, le=120)
    price: Optional[Decimal] = Field(None, gt=0)
    description: Optional[str] = None
    features: Optional[List[str]] = None
    is_active: Optional[bool] = None
    is_recommended: Optional[bool] = None


class PlanResponse(BaseModel):
    plan_id: UUID
    name: str
    duration_months: int
    price: Decimal
    description: Optional[str] = None
    features: List[str] = []
    is_active: bool
    is_recommended: bool
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
