"""
Diet publication readiness.

Looks at whether today's, tomorrow's and the day after tomorrow's diet days are
PUBLISHED and reduces that to a severity color, checked in this order:

    today not published                  -> BLACK
    today, tomorrow, day after published -> GREEN
    today, tomorrow published            -> YELLOW
    anything else with today published   -> RED

RED therefore covers both "today only" and "today and the day after but not
tomorrow".
"""

import logging
import uuid
from datetime import date, timedelta
from typing import AbstractSet, Dict, Iterable, Optional, Tuple

from sqlalchemy.orm import Session

from app.config import settings
from app.dates import normalize_date
from domain.enums import SeverityColor
from repositories import DietPlanRepository

logger = logging.getLogger("nutridesk.diet_status")


def target_dates(today: date) -> Tuple[date, date, date]:
    return today, today + timedelta(days=1), today + timedelta(days=2)


def classify(published: AbstractSet[date], today: date) -> SeverityColor:
    """Severity color for one client given the set of its published diet days."""
    t0, t1, t2 = (d in published for d in target_dates(today))
    if not t0:
        return SeverityColor.BLACK
    if t1 and t2:
        return SeverityColor.GREEN
    if t1:
        return SeverityColor.YELLOW
    return SeverityColor.RED


class DietStatusService:
    @staticmethod
    def query_window(today: date) -> Tuple[date, date]:
        """Date range read by the batch query; always covers today..today+2."""
        return (
            today - timedelta(days=settings.diet_window_days_back),
            today + timedelta(days=settings.diet_window_days_forward),
        )

    @staticmethod
    def classify_batch(
        db: Session,
        client_ids: Iterable[uuid.UUID],
        today: Optional[date] = None,
    ) -> Dict[uuid.UUID, SeverityColor]:
        """
        Classify many clients with a single range query.

        Every requested client gets a color; a client with no published day in
        the window is BLACK.
        """
        ids = list(dict.fromkeys(client_ids))
        if not ids:
            return {}
        day = normalize_date(today)
        start, end = DietStatusService.query_window(day)
        published = DietPlanRepository(db).published_dates(ids, start, end)
        colors = {cid: classify(published.get(cid, frozenset()), day) for cid in ids}
        logger.debug(
            "diet_status_batch clients=%d window=%s..%s as_of=%s", len(ids), start, end, day
        )
        return colors

    @staticmethod
    def classify_client(
        db: Session, client_id: uuid.UUID, today: Optional[date] = None
    ) -> Tuple[SeverityColor, Dict[date, bool]]:
        """Color plus the three publication flags it was derived from"""
        day = normalize_date(today)
        targets = target_dates(day)
        published = DietPlanRepository(db).published_dates([client_id], targets[0], targets[-1])
        days = published.get(client_id, frozenset())
        return classify(days, day), {d: d in days for d in targets}
