"""
Client roster: onboarding, updates and two-stage deletion.

Setting or changing a client's program start date regenerates the client's
follow-up schedule.
"""

import logging
import uuid
from typing import List, Optional, Tuple

from sqlalchemy.orm import Session

from app.exceptions import NotFoundError
from domain.enums import ClientStatus
from domain.models import Client
from domain.schemas.client_schemas import ClientCreate, ClientUpdate
from repositories import ClientRepository
from services.follow_up_service import FollowUpService

logger = logging.getLogger("nutridesk.clients")


class ClientService:
    @staticmethod
    def create_client(db: Session, dietician_id: uuid.UUID, data: ClientCreate) -> Client:
        """Create a client; schedules follow-ups when a program start date is given."""
        client = Client(
            dietician_id=dietician_id,
            full_name=data.full_name,
            email=data.email,
            phone=data.phone,
            notes=data.notes,
            status=data.status,
            program_start_date=data.program_start_date,
        )
        try:
            ClientRepository(db).add(client)
            if client.program_start_date is not None:
                FollowUpService.generate(
                    db, client.client_id, dietician_id, client.program_start_date, commit=False
                )
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(
            f"client_created client_id={client.client_id} dietician_id={dietician_id} "
            f"status={client.status.value} start={client.program_start_date}"
        )
        return client

    @staticmethod
    def get_client(
        db: Session, client_id: uuid.UUID, dietician_id: Optional[uuid.UUID] = None
    ) -> Client:
        """
        Get a client, optionally requiring that it belongs to ``dietician_id``.

        Raises:
            NotFoundError: client absent (or owned by someone else)
        """
        repo = ClientRepository(db)
        if dietician_id is None:
            client = repo.get_by_id(client_id)
        else:
            client = repo.get_for_dietician(client_id, dietician_id)
        if client is None:
            raise NotFoundError(f"Client {client_id} not found")
        return client

    @staticmethod
    def list_clients(
        db: Session, dietician_id: uuid.UUID, status: Optional[ClientStatus] = None
    ) -> List[Client]:
        return ClientRepository(db).list_for_dietician(dietician_id, status)

    @staticmethod
    def update_client(
        db: Session, client_id: uuid.UUID, dietician_id: uuid.UUID, data: ClientUpdate
    ) -> Client:
        """
        Apply a partial update.

        A changed program start date triggers a replace-all regeneration of the
        client's pending follow-ups.
        """
        client = ClientService.get_client(db, client_id, dietician_id)
        changes = data.model_dump(exclude_unset=True)
        previous_start = client.program_start_date

        for field, value in changes.items():
            if field in ("full_name", "status") and value is None:
                continue
            setattr(client, field, value)

        start_changed = (
            "program_start_date" in changes
            and client.program_start_date is not None
            and client.program_start_date != previous_start
        )
        try:
            if start_changed:
                FollowUpService.generate(
                    db, client.client_id, client.dietician_id, client.program_start_date, commit=False
                )
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(
            f"client_updated client_id={client_id} fields={sorted(changes)} "
            f"follow_ups_regenerated={start_changed}"
        )
        return client

    @staticmethod
    def delete_client(
        db: Session, client_id: uuid.UUID, dietician_id: uuid.UUID
    ) -> Tuple[Client, bool]:
        """
        Two-stage delete.

        The first call marks the client DELETED. Calling again on a DELETED
        client removes it permanently along with its subscriptions, diet plans
        and follow-ups.

        Returns:
            (client, permanently_deleted)
        """
        repo = ClientRepository(db)
        client = ClientService.get_client(db, client_id, dietician_id)

        if client.status != ClientStatus.DELETED:
            client.status = ClientStatus.DELETED
            repo.update(client)
            logger.info(f"client_soft_deleted client_id={client_id}")
            return client, False

        dependents = repo.dependent_counts(client_id)
        try:
            repo.hard_delete(client)
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(f"client_hard_deleted client_id={client_id} removed={dependents}")
        return client, True
