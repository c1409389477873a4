from pydantic import BaseModel, EmailStr, Field, field_validator
from typing import Optional
from datetime import date, datetime
from uuid import UUID

from domain.enums import ClientStatus


class ClientCreate(BaseModel):
    full_name: str = Field(..., min_length=1, max_length=200)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    notes: Optional[str] = None
    status: ClientStatus = ClientStatus.NEW
    program_start_date: Optional[date] = None

    @field_validator("full_name")
    def strip_name(cls, v):
        return v.strip()

    @field_validator("status")
    def not_deleted(cls, v):
        if v == ClientStatus.DELETED:
            raise ValueError("Clients cannot be created as DELETED")
        return v


class ClientUpdate(BaseModel):
    """Partial update; only fields that are sent are applied."""

    full_name: Optional[str] = Field(None, min_length=1, max_length=200)
    email: Optional[EmailStr] = None
    phone: Optional[str] = None
    notes: Optional[str] = None
    status: Optional[ClientStatus] = None
    program_start_date: Optional[date] = None

    @field_validator("status")
    def not_deleted(cls, v):
        if v == ClientStatus.DELETED:
            raise ValueError("Use DELETE /clients/{id} to delete a client")
        return v


class ClientResponse(BaseModel):
    client_id: UUID
    dietician_id: UUID
    full_name: str
    email: Optional[str] = None
    phone: Optional[str] = None
    notes: Optional[str] = None
    status: ClientStatus
    program_start_date: Optional[date] = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ClientDeleteResponse(BaseModel):
    client_id: UUID
    permanently_deleted: bool
    message: str
