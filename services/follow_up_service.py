"""
Follow-up scheduling and management.
"""

import logging
import uuid
from datetime import date
from typing import List, Optional

from sqlalchemy.orm import Session

from app.config import settings
from app.dates import add_months, normalize_date
from app.exceptions import NotFoundError, ServiceValidationError
from domain.enums import FollowUpStatus
from domain.models import FollowUp
from domain.schemas.follow_up_schemas import FollowUpCreate, FollowUpUpdate
from repositories import FollowUpRepository

logger = logging.getLogger("nutridesk.follow_ups")


class FollowUpService:
    @staticmethod
    def schedule_dates(start_date: date) -> List[date]:
        """Monthly anchor dates after a program start (start + 1 .. N months)."""
        step = settings.follow_up_interval_months
        return [
            add_months(start_date, step * i)
            for i in range(1, settings.follow_up_count + 1)
        ]

    @staticmethod
    def generate(
        db: Session,
        client_id: uuid.UUID,
        dietician_id: uuid.UUID,
        start_date,
        commit: bool = True,
    ) -> List[FollowUp]:
        """
        Replace a client's pending follow-ups with a fresh monthly batch.

        Every Pending follow-up of the client is deleted, including ones that
        were adjusted by hand, and a new batch anchored on ``start_date`` is
        inserted. Completed and Rescheduled follow-ups are kept.
        """
        start = normalize_date(start_date)
        repo = FollowUpRepository(db)
        try:
            removed = repo.delete_pending_for_client(client_id)
            follow_ups = repo.bulk_add(
                [
                    FollowUp(
                        client_id=client_id,
                        dietician_id=dietician_id,
                        date=day,
                        timing=settings.follow_up_default_timing,
                        category=settings.follow_up_default_category,
                        status=FollowUpStatus.PENDING,
                    )
                    for day in FollowUpService.schedule_dates(start)
                ]
            )
            if commit:
                db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(
            f"follow_ups_generated client_id={client_id} start={start} "
            f"created={len(follow_ups)} replaced_pending={removed}"
        )
        return follow_ups

    @staticmethod
    def list_for_client(
        db: Session, client_id: uuid.UUID, status: Optional[FollowUpStatus] = None
    ) -> List[FollowUp]:
        return FollowUpRepository(db).list_for_client(client_id, status)

    @staticmethod
    def create(
        db: Session, client_id: uuid.UUID, dietician_id: uuid.UUID, data: FollowUpCreate
    ) -> FollowUp:
        """Add a single follow-up by hand"""
        follow_up = FollowUp(
            client_id=client_id,
            dietician_id=dietician_id,
            date=normalize_date(data.date),
            timing=data.timing or settings.follow_up_default_timing,
            category=data.category or settings.follow_up_default_category,
            meet_link=data.meet_link,
            notes=data.notes,
            status=FollowUpStatus.PENDING,
        )
        follow_up = FollowUpRepository(db).create(follow_up)
        logger.info(f"follow_up_created client_id={client_id} date={follow_up.date}")
        return follow_up

    @staticmethod
    def update(
        db: Session,
        follow_up_id: uuid.UUID,
        client_id: uuid.UUID,
        dietician_id: uuid.UUID,
        data: FollowUpUpdate,
    ) -> FollowUp:
        """
        Apply a partial update. A new date is reduced to a calendar day.

        Raises:
            NotFoundError: follow-up absent or owned by another dietician
            ServiceValidationError: date cannot be parsed
        """
        repo = FollowUpRepository(db)
        follow_up = repo.get_owned(follow_up_id, client_id, dietician_id)
        if follow_up is None:
            raise NotFoundError("Follow-up not found or unauthorized")

        changes = data.model_dump(exclude_unset=True)
        if "date" in changes:
            if changes["date"] is None:
                raise ServiceValidationError("date cannot be empty")
            try:
                changes["date"] = normalize_date(changes["date"])
            except (TypeError, ValueError) as e:
                raise ServiceValidationError(str(e)) from e
        for field, value in changes.items():
            if field in ("timing", "category", "status") and value is None:
                continue
            setattr(follow_up, field, value)

        follow_up = repo.update(follow_up)
        logger.info(
            f"follow_up_updated follow_up_id={follow_up_id} fields={sorted(changes)}"
        )
        return follow_up

    @staticmethod
    def delete(
        db: Session, follow_up_id: uuid.UUID, client_id: uuid.UUID, dietician_id: uuid.UUID
    ) -> None:
        repo = FollowUpRepository(db)
        follow_up = repo.get_owned(follow_up_id, client_id, dietician_id)
        if follow_up is None:
            raise NotFoundError("Follow-up not found or unauthorized")
        db.delete(follow_up)
        db.commit()
        logger.info(f"follow_up_deleted follow_up_id={follow_up_id}")
