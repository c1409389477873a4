"""
Minimal diet plan persistence used by the authoring workflow.
"""

import logging
import uuid
from datetime import date, timedelta
from typing import Optional

from sqlalchemy.orm import Session

from app.dates import normalize_date
from domain.enums import DietDayStatus
from domain.models import DietPlan
from domain.schemas.diet_plan_schemas import DietPlanUpsert
from repositories import DietPlanRepository

logger = logging.getLogger("nutridesk.diet_plans")


def week_start(day: date) -> date:
    """Monday of the week containing ``day``"""
    return day - timedelta(days=day.weekday())


class DietPlanService:
    @staticmethod
    def get_week(
        db: Session, client_id: uuid.UUID, week_start_date: Optional[date] = None
    ) -> Optional[DietPlan]:
        """The plan starting on ``week_start_date`` (default: this week's Monday), or None"""
        start = normalize_date(week_start_date) if week_start_date else week_start(normalize_date())
        return DietPlanRepository(db).get_week(client_id, start)

    @staticmethod
    def save_week(db: Session, client_id: uuid.UUID, data: DietPlanUpsert) -> DietPlan:
        """Create or overwrite one week; days are stored by calendar date."""
        days = [
            {"date": normalize_date(d.date), "status": d.status, "meals": d.meals}
            for d in data.days
        ]
        try:
            plan = DietPlanRepository(db).replace_week(
                client_id, normalize_date(data.week_start_date), days
            )
            db.commit()
        except Exception:
            db.rollback()
            raise
        logger.info(
            f"diet_plan_saved client_id={client_id} week={plan.week_start_date} "
            f"published={sum(1 for d in plan.days if d.status == DietDayStatus.PUBLISHED)}"
        )
        return plan
