"""
Dietician home dashboard: roster counts, today's follow-ups and the list of
clients whose diet plan needs attention. Read-only.
"""

import logging
import uuid
from datetime import date, datetime, timedelta
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from app.config import settings
from app.dates import normalize_date, utcnow
from domain.enums import ClientStatus, SeverityColor
from domain.schemas.dashboard_schemas import (
    ClientCounts,
    DashboardStatsResponse,
    DietPendingClient,
    DietPendingSummary,
    DueFollowUp,
)
from repositories import ClientRepository, FollowUpRepository
from services.diet_status_service import DietStatusService

logger = logging.getLogger("nutridesk.dashboard")

SEVERITY_DISPLAY_COLORS = {
    SeverityColor.BLACK: "#1F2937",
    SeverityColor.RED: "#EF4444",
    SeverityColor.YELLOW: "#F59E0B",
    SeverityColor.GREEN: "#10B981",
}
NEUTRAL_DISPLAY_COLOR = "#9CA3AF"

PENDING_COLORS = (SeverityColor.BLACK, SeverityColor.RED, SeverityColor.YELLOW)


def display_color(severity: Optional[SeverityColor]) -> str:
    if severity is None:
        return NEUTRAL_DISPLAY_COLOR
    return SEVERITY_DISPLAY_COLORS[severity]


class DashboardService:
    @staticmethod
    def client_counts(
        db: Session, dietician_id: uuid.UUID, now: Optional[datetime] = None
    ) -> ClientCounts:
        repo = ClientRepository(db)
        by_status = repo.count_by_status(dietician_id)
        since = (now or utcnow()) - timedelta(days=settings.new_client_window_days)
        return ClientCounts(
            active=by_status.get(ClientStatus.ACTIVE, 0),
            paused=by_status.get(ClientStatus.PAUSED, 0),
            lead=by_status.get(ClientStatus.LEAD, 0),
            expired=by_status.get(ClientStatus.DELETED, 0),
            new=repo.count_created_since(dietician_id, since),
        )

    @staticmethod
    def diet_pending(
        colors: Dict[uuid.UUID, SeverityColor], names: Dict[uuid.UUID, str]
    ) -> DietPendingSummary:
        """
        Summarize non-green clients, most severe first.

        Counts cover every pending client; the list is cut to
        ``diet_pending_limit`` entries.
        """
        pending = [
            DietPendingClient(client_id=cid, client_name=names.get(cid, ""), severity=color)
            for cid, color in colors.items()
            if color in PENDING_COLORS
        ]
        pending.sort(key=lambda p: (p.severity.rank, p.client_name.lower(), str(p.client_id)))

        black = sum(1 for p in pending if p.severity == SeverityColor.BLACK)
        red = sum(1 for p in pending if p.severity == SeverityColor.RED)
        yellow = sum(1 for p in pending if p.severity == SeverityColor.YELLOW)
        return DietPendingSummary(
            black=black,
            red=red,
            yellow=yellow,
            total=black + red + yellow,
            clients=pending[: settings.diet_pending_limit],
        )

    @staticmethod
    def get_stats(
        db: Session,
        dietician_id: uuid.UUID,
        today: Optional[date] = None,
        now: Optional[datetime] = None,
    ) -> DashboardStatsResponse:
        """
        Build the dietician's daily operating picture.

        Diet severity is computed for ACTIVE clients only; follow-ups of
        clients in any other status get the neutral display color.
        """
        day = normalize_date(today if today is not None else now)

        counts = DashboardService.client_counts(db, dietician_id, now)

        active_clients = ClientRepository(db).list_for_dietician(
            dietician_id, ClientStatus.ACTIVE
        )
        names = {c.client_id: c.full_name for c in active_clients}
        colors = DietStatusService.classify_batch(db, names.keys(), day)

        due: List[DueFollowUp] = []
        for follow_up, client in FollowUpRepository(db).due_on(dietician_id, day):
            severity = colors.get(client.client_id)
            due.append(
                DueFollowUp(
                    follow_up_id=follow_up.follow_up_id,
                    client_id=client.client_id,
                    client_name=client.full_name,
                    date=follow_up.date,
                    timing=follow_up.timing,
                    category=follow_up.category,
                    severity=severity,
                    color=display_color(severity),
                )
            )

        pending = DashboardService.diet_pending(colors, names)
        logger.info(
            f"dashboard_stats dietician_id={dietician_id} as_of={day} "
            f"active={counts.active} due_follow_ups={len(due)} diet_pending={pending.total}"
        )
        return DashboardStatsResponse(
            dietician_id=dietician_id,
            as_of=day,
            counts=counts,
            todays_follow_ups=due,
            diet_pending=pending,
        )
