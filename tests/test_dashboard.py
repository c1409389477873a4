"""
Tests for the dietician dashboard aggregation.
"""

import uuid
from datetime import date, timedelta

from sqlalchemy.orm import Session

from test_fixtures import database, db_session, dietician_id, make_client, publish_days
from app.dates import utcnow
from domain.enums import ClientStatus, FollowUpStatus, SeverityColor
from domain.models import FollowUp
from services import DashboardService
from services.dashboard_service import NEUTRAL_DISPLAY_COLOR, SEVERITY_DISPLAY_COLORS

TODAY = date(2024, 3, 6)
WEEK_START = date(2024, 3, 4)
T0, T1, T2 = TODAY, TODAY + timedelta(days=1), TODAY + timedelta(days=2)


def _follow_up(db: Session, client, day=TODAY, status=FollowUpStatus.PENDING, timing="11:00 am"):
    follow_up = FollowUp(
        client_id=client.client_id,
        dietician_id=client.dietician_id,
        date=day,
        timing=timing,
        category="Diet",
        status=status,
    )
    db.add(follow_up)
    db.commit()
    return follow_up


def test_diet_pending_scenario(db_session: Session, dietician_id):
    """A is GREEN, B is RED, C is BLACK: two pending, C before B."""
    a = make_client(db_session, dietician_id, full_name="Anita Rao")
    b = make_client(db_session, dietician_id, full_name="Bala Iyer")
    c = make_client(db_session, dietician_id, full_name="Chitra Nair")
    publish_days(db_session, a.client_id, WEEK_START, [T0, T1, T2])
    publish_days(db_session, b.client_id, WEEK_START, [T0])

    stats = DashboardService.get_stats(db_session, dietician_id, today=TODAY)

    pending = stats.diet_pending
    assert pending.total == 2
    assert (pending.black, pending.red, pending.yellow) == (1, 1, 0)
    assert [p.client_id for p in pending.clients] == [c.client_id, b.client_id]
    assert [p.severity for p in pending.clients] == [SeverityColor.BLACK, SeverityColor.RED]
    assert stats.as_of == TODAY


def test_diet_pending_only_considers_active_clients(db_session: Session, dietician_id):
    make_client(db_session, dietician_id, full_name="Paused Person", status=ClientStatus.PAUSED)
    make_client(db_session, dietician_id, full_name="Lead Person", status=ClientStatus.LEAD)

    stats = DashboardService.get_stats(db_session, dietician_id, today=TODAY)

    assert stats.diet_pending.total == 0
    assert stats.diet_pending.clients == []


def test_diet_pending_truncates_list_but_not_total(db_session: Session, dietician_id):
    for i in range(12):
        make_client(db_session, dietician_id, full_name=f"Client {i:02d}")
    yellow = make_client(db_session, dietician_id, full_name="Aaron Yellow")
    publish_days(db_session, yellow.client_id, WEEK_START, [T0, T1])

    stats = DashboardService.get_stats(db_session, dietician_id, today=TODAY)

    assert stats.diet_pending.total == 13
    assert stats.diet_pending.black == 12
    assert stats.diet_pending.yellow == 1
    assert len(stats.diet_pending.clients) == 10
    # Most severe first, then by name; the lone yellow falls off the list
    assert all(p.severity == SeverityColor.BLACK for p in stats.diet_pending.clients)
    assert stats.diet_pending.clients[0].client_name == "Client 00"


def test_client_counts(db_session: Session, dietician_id):
    make_client(db_session, dietician_id, status=ClientStatus.ACTIVE)
    make_client(db_session, dietician_id, status=ClientStatus.ACTIVE, profile_type="athlete")
    make_client(db_session, dietician_id, status=ClientStatus.PAUSED, profile_type="casual")
    make_client(db_session, dietician_id, status=ClientStatus.LEAD, profile_type="health")
    make_client(db_session, dietician_id, status=ClientStatus.DELETED, full_name="Gone Client")
    make_client(db_session, uuid.uuid4(), status=ClientStatus.ACTIVE, full_name="Someone Else")

    counts = DashboardService.client_counts(db_session, dietician_id)

    assert counts.active == 2
    assert counts.paused == 1
    assert counts.lead == 1
    assert counts.expired == 1
    # Deleted clients are not new
    assert counts.new == 4


def test_new_client_window(db_session: Session, dietician_id):
    make_client(db_session, dietician_id)

    later = utcnow() + timedelta(days=8)
    counts = DashboardService.client_counts(db_session, dietician_id, now=later)

    assert counts.new == 0
    assert counts.active == 1


def test_todays_follow_ups_carry_severity_color(db_session: Session, dietician_id):
    red = make_client(db_session, dietician_id, full_name="Bala Iyer")
    publish_days(db_session, red.client_id, WEEK_START, [T0])
    lead = make_client(db_session, dietician_id, full_name="Lata Shah", status=ClientStatus.LEAD)
    gone = make_client(db_session, dietician_id, full_name="Zed Gone", status=ClientStatus.DELETED)

    _follow_up(db_session, red)
    _follow_up(db_session, lead)
    _follow_up(db_session, gone)
    _follow_up(db_session, red, status=FollowUpStatus.COMPLETED, timing="4:00 pm")
    _follow_up(db_session, red, day=TODAY + timedelta(days=1))

    stats = DashboardService.get_stats(db_session, dietician_id, today=TODAY)

    due = stats.todays_follow_ups
    assert [f.client_name for f in due] == ["Bala Iyer", "Lata Shah"]
    assert due[0].severity == SeverityColor.RED
    assert due[0].color == SEVERITY_DISPLAY_COLORS[SeverityColor.RED]
    assert due[1].severity is None
    assert due[1].color == NEUTRAL_DISPLAY_COLOR


def test_follow_ups_of_other_dieticians_are_hidden(db_session: Session, dietician_id):
    mine = make_client(db_session, dietician_id)
    theirs = make_client(db_session, uuid.uuid4(), profile_type="athlete")
    _follow_up(db_session, mine)
    _follow_up(db_session, theirs)

    stats = DashboardService.get_stats(db_session, dietician_id, today=TODAY)

    assert [f.client_id for f in stats.todays_follow_ups] == [mine.client_id]


def test_empty_dashboard(db_session: Session, dietician_id):
    stats = DashboardService.get_stats(db_session, dietician_id, today=TODAY)

    assert stats.counts.active == 0
    assert stats.todays_follow_ups == []
    assert stats.diet_pending.total == 0
