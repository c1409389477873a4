"""
Tests for diet readiness classification.
"""

import itertools
import uuid
from datetime import date, timedelta

import pytest
from sqlalchemy.orm import Session

from test_fixtures import database, db_session, dietician_id, make_client, publish_days
from domain.enums import SeverityColor
from services import DietStatusService
from services.diet_status_service import classify, target_dates

# A Wednesday, so today..today+2 fall inside the week starting Monday 2024-03-04
TODAY = date(2024, 3, 6)
WEEK_START = date(2024, 3, 4)
T0, T1, T2 = TODAY, TODAY + timedelta(days=1), TODAY + timedelta(days=2)


def _expected(t0: bool, t1: bool, t2: bool) -> SeverityColor:
    if not t0:
        return SeverityColor.BLACK
    if t1 and t2:
        return SeverityColor.GREEN
    if t1:
        return SeverityColor.YELLOW
    return SeverityColor.RED


@pytest.mark.parametrize("flags", list(itertools.product([False, True], repeat=3)))
def test_classify_all_combinations(flags):
    published = {d for d, on in zip((T0, T1, T2), flags) if on}
    assert classify(published, TODAY) == _expected(*flags)


def test_classify_table_spot_checks():
    assert classify(set(), TODAY) == SeverityColor.BLACK
    assert classify({T1, T2}, TODAY) == SeverityColor.BLACK
    assert classify({T0}, TODAY) == SeverityColor.RED
    assert classify({T0, T2}, TODAY) == SeverityColor.RED
    assert classify({T0, T1}, TODAY) == SeverityColor.YELLOW
    assert classify({T0, T1, T2}, TODAY) == SeverityColor.GREEN


def test_classify_ignores_days_outside_target_window():
    far = {TODAY - timedelta(days=3), TODAY + timedelta(days=5)}
    assert classify(far | {T0, T1, T2}, TODAY) == SeverityColor.GREEN
    assert classify(far, TODAY) == SeverityColor.BLACK


def test_target_dates_cross_month_boundary():
    assert target_dates(date(2024, 2, 28)) == (
        date(2024, 2, 28),
        date(2024, 2, 29),
        date(2024, 3, 1),
    )


def test_classify_batch_reads_published_days(db_session: Session, dietician_id):
    green = make_client(db_session, dietician_id, full_name="Green Client")
    yellow = make_client(db_session, dietician_id, full_name="Yellow Client")
    red = make_client(db_session, dietician_id, full_name="Red Client")
    black = make_client(db_session, dietician_id, full_name="Black Client")

    publish_days(db_session, green.client_id, WEEK_START, [T0, T1, T2])
    publish_days(db_session, yellow.client_id, WEEK_START, [T0, T1], not_saved=[T2])
    publish_days(db_session, red.client_id, WEEK_START, [T0], not_saved=[T1, T2])
    # Saved but unpublished days do not count
    publish_days(db_session, black.client_id, WEEK_START, [], not_saved=[T0, T1, T2])

    colors = DietStatusService.classify_batch(
        db_session,
        [green.client_id, yellow.client_id, red.client_id, black.client_id],
        TODAY,
    )

    assert colors == {
        green.client_id: SeverityColor.GREEN,
        yellow.client_id: SeverityColor.YELLOW,
        red.client_id: SeverityColor.RED,
        black.client_id: SeverityColor.BLACK,
    }


def test_classify_batch_client_without_any_plan_is_black(db_session: Session, dietician_id):
    client = make_client(db_session, dietician_id)
    unknown = uuid.uuid4()

    colors = DietStatusService.classify_batch(db_session, [client.client_id, unknown], TODAY)

    assert colors == {client.client_id: SeverityColor.BLACK, unknown: SeverityColor.BLACK}


def test_classify_batch_empty_input(db_session: Session):
    assert DietStatusService.classify_batch(db_session, [], TODAY) == {}


def test_classify_batch_spans_two_plan_weeks(db_session: Session, dietician_id):
    """Sunday: tomorrow and the day after live in next week's plan."""
    sunday = date(2024, 3, 10)
    client = make_client(db_session, dietician_id)
    publish_days(db_session, client.client_id, WEEK_START, [sunday])
    publish_days(
        db_session,
        client.client_id,
        WEEK_START + timedelta(days=7),
        [sunday + timedelta(days=1), sunday + timedelta(days=2)],
    )

    colors = DietStatusService.classify_batch(db_session, [client.client_id], sunday)
    assert colors[client.client_id] == SeverityColor.GREEN


def test_classify_client_returns_flags(db_session: Session, dietician_id):
    client = make_client(db_session, dietician_id)
    publish_days(db_session, client.client_id, WEEK_START, [T0, T2])

    color, flags = DietStatusService.classify_client(db_session, client.client_id, TODAY)

    assert color == SeverityColor.RED
    assert flags == {T0: True, T1: False, T2: True}
