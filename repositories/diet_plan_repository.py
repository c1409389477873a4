"""
Diet Plan Repository - Data access layer for weekly diet plans
"""

from datetime import date
from typing import Dict, Iterable, List, Optional, Set
from uuid import UUID

from sqlalchemy.orm import Session, selectinload

from repositories.base import BaseRepository
from domain.enums import DietDayStatus
from domain.models import DietDay, DietPlan


class DietPlanRepository(BaseRepository[DietPlan]):
    """Repository for diet plan data access"""

    def __init__(self, db: Session):
        super().__init__(db, DietPlan)

    def get_by_id(self, plan_id: UUID) -> Optional[DietPlan]:
        """Get diet plan by ID"""
        return self.db.query(DietPlan).filter(DietPlan.plan_id == plan_id).first()

    def get_week(self, client_id: UUID, week_start_date: date) -> Optional[DietPlan]:
        return (
            self.db.query(DietPlan)
            .options(selectinload(DietPlan.days))
            .filter(
                DietPlan.client_id == client_id,
                DietPlan.week_start_date == week_start_date,
            )
            .first()
        )

    def published_dates(
        self, client_ids: Iterable[UUID], start: date, end: date
    ) -> Dict[UUID, Set[date]]:
        """
        Published diet days for many clients in one range query.

        Returns ``{client_id: {date, ...}}`` covering ``start..end`` inclusive;
        clients without any published day in range are absent.
        """
        ids = list(client_ids)
        if not ids:
            return {}
        rows = (
            self.db.query(DietDay.client_id, DietDay.date)
            .filter(
                DietDay.client_id.in_(ids),
                DietDay.date >= start,
                DietDay.date <= end,
                DietDay.status == DietDayStatus.PUBLISHED,
            )
            .all()
        )
        grouped: Dict[UUID, Set[date]] = {}
        for client_id, day in rows:
            grouped.setdefault(client_id, set()).add(day)
        return grouped

    def replace_week(
        self, client_id: UUID, week_start_date: date, days: List[dict]
    ) -> DietPlan:
        """
        Create or overwrite one week of a client's plan.

        ``days`` items carry ``date``, ``status`` and ``meals``. The caller commits.
        """
        plan = self.get_week(client_id, week_start_date)
        if plan is None:
            plan = DietPlan(client_id=client_id, week_start_date=week_start_date)
            self.db.add(plan)
        plan.days = [
            DietDay(
                client_id=client_id,
                date=d["date"],
                status=d["status"],
                meals=d.get("meals") or [],
            )
            for d in sorted(days, key=lambda d: d["date"])
        ]
        self.db.flush()
        return plan
