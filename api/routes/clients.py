"""Client roster routes"""

import logging
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from api.dependencies import Caller, get_db, require_dietician
from domain.enums import ClientStatus
from domain.schemas.client_schemas import (
    ClientCreate,
    ClientDeleteResponse,
    ClientResponse,
    ClientUpdate,
)
from services import ClientService

router = APIRouter(prefix="/clients", tags=["Clients"])
logger = logging.getLogger("nutridesk.api.clients")


@router.post("", response_model=ClientResponse, status_code=status.HTTP_201_CREATED)
def create_client(
    body: ClientCreate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_dietician),
):
    """Onboard a client. A program start date schedules the follow-ups."""
    return ClientService.create_client(db, caller.user_id, body)


@router.get("", response_model=List[ClientResponse])
def list_clients(
    status_filter: Optional[ClientStatus] = Query(None, alias="status"),
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_dietician),
):
    """List the caller's clients, optionally filtered by status."""
    return ClientService.list_clients(db, caller.user_id, status_filter)


@router.get("/{client_id}", response_model=ClientResponse)
def get_client(
    client_id: UUID,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_dietician),
):
    return ClientService.get_client(db, client_id, caller.user_id)


@router.patch("/{client_id}", response_model=ClientResponse)
def update_client(
    client_id: UUID,
    body: ClientUpdate,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_dietician),
):
    """Update roster fields. Changing the program start date regenerates follow-ups."""
    return ClientService.update_client(db, client_id, caller.user_id, body)


@router.delete("/{client_id}", response_model=ClientDeleteResponse)
def delete_client(
    client_id: UUID,
    db: Session = Depends(get_db),
    caller: Caller = Depends(require_dietician),
):
    """
    Delete a client in two stages.

    The first call marks the client DELETED; a second call removes it and all
    of its records permanently.
    """
    _, permanent = ClientService.delete_client(db, client_id, caller.user_id)
    message = (
        "Client and all associated records permanently deleted"
        if permanent
        else "Client marked as deleted"
    )
    return ClientDeleteResponse(
        client_id=client_id, permanently_deleted=permanent, message=message
    )
