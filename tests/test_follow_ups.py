"""
Tests for follow-up generation and management.
"""

import uuid
from datetime import date

import pytest
from sqlalchemy.orm import Session

from test_fixtures import database, db_session, dietician_id, make_client
from app.exceptions import NotFoundError, ServiceValidationError
from domain.enums import FollowUpStatus
from domain.models import FollowUp
from domain.schemas.follow_up_schemas import FollowUpCreate, FollowUpUpdate
from services import FollowUpService


def _dates(follow_ups):
    return sorted(f.date for f in follow_ups)


def test_schedule_dates_are_monthly():
    assert FollowUpService.schedule_dates(date(2024, 1, 31)) == [
        date(2024, 2, 29),
        date(2024, 3, 31),
        date(2024, 4, 30),
        date(2024, 5, 31),
        date(2024, 6, 30),
        date(2024, 7, 31),
    ]


def test_generate_creates_six_pending(db_session: Session, dietician_id):
    client = make_client(db_session, dietician_id)

    created = FollowUpService.generate(db_session, client.client_id, dietician_id, date(2024, 1, 15))

    assert len(created) == 6
    assert _dates(created) == [date(2024, m, 15) for m in range(2, 8)]
    for f in created:
        assert f.status == FollowUpStatus.PENDING
        assert f.timing == "11:00 am"
        assert f.category == "Diet"
        assert f.dietician_id == dietician_id


def test_generate_is_idempotent_for_same_start(db_session: Session, dietician_id):
    client = make_client(db_session, dietician_id)

    FollowUpService.generate(db_session, client.client_id, dietician_id, date(2024, 1, 15))
    FollowUpService.generate(db_session, client.client_id, dietician_id, date(2024, 1, 15))

    stored = FollowUpService.list_for_client(db_session, client.client_id)
    assert _dates(stored) == [date(2024, m, 15) for m in range(2, 8)]


def test_generate_replaces_pending_but_keeps_history(db_session: Session, dietician_id):
    """A new start date discards every Pending reminder, including hand-edited ones."""
    client = make_client(db_session, dietician_id)
    first = FollowUpService.generate(db_session, client.client_id, dietician_id, date(2024, 1, 10))
    first = sorted(first, key=lambda f: f.date)

    FollowUpService.update(
        db_session,
        first[0].follow_up_id,
        client.client_id,
        dietician_id,
        FollowUpUpdate(status=FollowUpStatus.COMPLETED),
    )
    FollowUpService.update(
        db_session,
        first[1].follow_up_id,
        client.client_id,
        dietician_id,
        FollowUpUpdate(timing="5:00 pm"),
    )

    FollowUpService.generate(db_session, client.client_id, dietician_id, date(2024, 3, 1))

    stored = FollowUpService.list_for_client(db_session, client.client_id)
    completed = [f for f in stored if f.status == FollowUpStatus.COMPLETED]
    pending = [f for f in stored if f.status == FollowUpStatus.PENDING]
    assert _dates(completed) == [date(2024, 2, 10)]
    assert _dates(pending) == [date(2024, m, 1) for m in range(4, 10)]
    assert all(f.timing == "11:00 am" for f in pending)


def test_generate_only_touches_its_client(db_session: Session, dietician_id):
    a = make_client(db_session, dietician_id, profile_type="athlete")
    b = make_client(db_session, dietician_id, profile_type="health")
    FollowUpService.generate(db_session, a.client_id, dietician_id, date(2024, 1, 1))
    FollowUpService.generate(db_session, b.client_id, dietician_id, date(2024, 1, 1))

    FollowUpService.generate(db_session, a.client_id, dietician_id, date(2024, 5, 1))

    assert len(FollowUpService.list_for_client(db_session, b.client_id)) == 6
    assert db_session.query(FollowUp).count() == 12


def test_list_filters_by_status(db_session: Session, dietician_id):
    client = make_client(db_session, dietician_id)
    created = FollowUpService.generate(db_session, client.client_id, dietician_id, date(2024, 1, 1))
    FollowUpService.update(
        db_session,
        created[0].follow_up_id,
        client.client_id,
        dietician_id,
        FollowUpUpdate(status=FollowUpStatus.RESCHEDULED),
    )

    pending = FollowUpService.list_for_client(db_session, client.client_id, FollowUpStatus.PENDING)
    assert len(pending) == 5


def test_create_manual_follow_up_uses_defaults(db_session: Session, dietician_id):
    client = make_client(db_session, dietician_id)

    follow_up = FollowUpService.create(
        db_session, client.client_id, dietician_id, FollowUpCreate(date=date(2024, 6, 3))
    )

    assert follow_up.status == FollowUpStatus.PENDING
    assert follow_up.timing == "11:00 am"
    assert follow_up.category == "Diet"


def test_update_normalizes_date(db_session: Session, dietician_id):
    client = make_client(db_session, dietician_id)
    follow_up = FollowUpService.create(
        db_session, client.client_id, dietician_id, FollowUpCreate(date=date(2024, 6, 3))
    )

    updated = FollowUpService.update(
        db_session,
        follow_up.follow_up_id,
        client.client_id,
        dietician_id,
        FollowUpUpdate(date="2024-06-10T15:45:00"),
    )

    assert updated.date == date(2024, 6, 10)


def test_update_rejects_bad_date(db_session: Session, dietician_id):
    client = make_client(db_session, dietician_id)
    follow_up = FollowUpService.create(
        db_session, client.client_id, dietician_id, FollowUpCreate(date=date(2024, 6, 3))
    )

    with pytest.raises(ServiceValidationError):
        FollowUpService.update(
            db_session,
            follow_up.follow_up_id,
            client.client_id,
            dietician_id,
            FollowUpUpdate(date="someday"),
        )


def test_update_by_other_dietician_is_not_found(db_session: Session, dietician_id):
    client = make_client(db_session, dietician_id)
    follow_up = FollowUpService.create(
        db_session, client.client_id, dietician_id, FollowUpCreate(date=date(2024, 6, 3))
    )

    with pytest.raises(NotFoundError):
        FollowUpService.update(
            db_session,
            follow_up.follow_up_id,
            client.client_id,
            uuid.uuid4(),
            FollowUpUpdate(notes="hijack"),
        )


def test_delete_follow_up(db_session: Session, dietician_id):
    client = make_client(db_session, dietician_id)
    follow_up = FollowUpService.create(
        db_session, client.client_id, dietician_id, FollowUpCreate(date=date(2024, 6, 3))
    )

    FollowUpService.delete(db_session, follow_up.follow_up_id, client.client_id, dietician_id)

    assert FollowUpService.list_for_client(db_session, client.client_id) == []
    with pytest.raises(NotFoundError):
        FollowUpService.delete(db_session, follow_up.follow_up_id, client.client_id, dietician_id)
