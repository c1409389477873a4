"""
Tests for the client roster: onboarding, updates and two-stage deletion.
"""

import uuid
from datetime import date

import pytest
from pydantic import ValidationError
from sqlalchemy.orm import Session

from test_fixtures import database, db_session, dietician_id, make_client, publish_days, unique_email
from app.exceptions import NotFoundError
from domain.enums import ClientStatus, FollowUpStatus
from domain.models import Client, DietDay, PaymentRecord, PauseInterval
from domain.schemas.client_schemas import ClientCreate, ClientUpdate
from repositories import ClientRepository
from services import ClientService, FollowUpService, SubscriptionService


def test_create_client_without_start_date(db_session: Session, dietician_id):
    client = ClientService.create_client(
        db_session,
        dietician_id,
        ClientCreate(full_name="  Sarah Martinez ", email=unique_email("sarah")),
    )

    assert client.full_name == "Sarah Martinez"
    assert client.status == ClientStatus.NEW
    assert client.dietician_id == dietician_id
    assert FollowUpService.list_for_client(db_session, client.client_id) == []


def test_create_client_with_start_date_schedules_follow_ups(db_session: Session, dietician_id):
    client = ClientService.create_client(
        db_session,
        dietician_id,
        ClientCreate(
            full_name="Raj Patel",
            status=ClientStatus.ACTIVE,
            program_start_date=date(2024, 1, 1),
        ),
    )

    follow_ups = FollowUpService.list_for_client(db_session, client.client_id)
    assert [f.date for f in follow_ups] == [date(2024, m, 1) for m in range(2, 8)]
    assert all(f.dietician_id == dietician_id for f in follow_ups)


def test_client_cannot_be_created_deleted():
    with pytest.raises(ValidationError):
        ClientCreate(full_name="Nobody", status=ClientStatus.DELETED)


def test_update_start_date_regenerates_follow_ups(db_session: Session, dietician_id):
    client = ClientService.create_client(
        db_session,
        dietician_id,
        ClientCreate(full_name="Emma Johnson", program_start_date=date(2024, 1, 1)),
    )

    ClientService.update_client(
        db_session,
        client.client_id,
        dietician_id,
        ClientUpdate(program_start_date=date(2024, 2, 15)),
    )

    follow_ups = FollowUpService.list_for_client(db_session, client.client_id, FollowUpStatus.PENDING)
    assert [f.date for f in follow_ups] == [date(2024, m, 15) for m in range(3, 9)]


def test_update_other_fields_keeps_follow_ups(db_session: Session, dietician_id):
    client = ClientService.create_client(
        db_session,
        dietician_id,
        ClientCreate(full_name="Emma Johnson", program_start_date=date(2024, 1, 1)),
    )
    original_ids = {
        f.follow_up_id for f in FollowUpService.list_for_client(db_session, client.client_id)
    }

    updated = ClientService.update_client(
        db_session,
        client.client_id,
        dietician_id,
        ClientUpdate(status=ClientStatus.ACTIVE, notes="prefers evening calls"),
    )

    assert updated.status == ClientStatus.ACTIVE
    assert updated.notes == "prefers evening calls"
    current_ids = {
        f.follow_up_id for f in FollowUpService.list_for_client(db_session, client.client_id)
    }
    assert current_ids == original_ids


def test_client_of_other_dietician_is_not_found(db_session: Session, dietician_id):
    client = make_client(db_session, dietician_id)

    with pytest.raises(NotFoundError):
        ClientService.get_client(db_session, client.client_id, uuid.uuid4())
    with pytest.raises(NotFoundError):
        ClientService.delete_client(db_session, client.client_id, uuid.uuid4())


def test_list_clients_filters_by_status(db_session: Session, dietician_id):
    make_client(db_session, dietician_id, status=ClientStatus.ACTIVE)
    make_client(db_session, dietician_id, status=ClientStatus.LEAD, profile_type="athlete")

    leads = ClientService.list_clients(db_session, dietician_id, ClientStatus.LEAD)
    everyone = ClientService.list_clients(db_session, dietician_id)

    assert [c.full_name for c in leads] == ["Michael Chen"]
    assert [c.full_name for c in everyone] == ["Michael Chen", "Sarah Martinez"]


def test_two_stage_delete_cascades(db_session: Session, dietician_id):
    client = ClientService.create_client(
        db_session,
        dietician_id,
        ClientCreate(
            full_name="Sarah Martinez",
            status=ClientStatus.ACTIVE,
            program_start_date=date(2024, 1, 1),
        ),
    )
    sub = SubscriptionService.assign_plan(
        db_session, client.client_id, "Gold 3M", 6000, 3, date(2024, 1, 1)
    )
    SubscriptionService.record_payment(db_session, sub.subscription_id, 2000)
    SubscriptionService.pause(db_session, sub.subscription_id)
    publish_days(db_session, client.client_id, date(2024, 3, 4), [date(2024, 3, 6)])

    # First call only flips the status
    _, permanent = ClientService.delete_client(db_session, client.client_id, dietician_id)
    assert permanent is False
    soft = ClientService.get_client(db_session, client.client_id, dietician_id)
    assert soft.status == ClientStatus.DELETED
    repo = ClientRepository(db_session)
    assert repo.dependent_counts(client.client_id) == {
        "subscriptions": 1,
        "diet_plans": 1,
        "follow_ups": 6,
    }

    # Second call removes the client and everything hanging off it
    _, permanent = ClientService.delete_client(db_session, client.client_id, dietician_id)
    assert permanent is True
    assert db_session.query(Client).filter_by(client_id=client.client_id).first() is None
    assert repo.dependent_counts(client.client_id) == {
        "subscriptions": 0,
        "diet_plans": 0,
        "follow_ups": 0,
    }
    assert db_session.query(PaymentRecord).count() == 0
    assert db_session.query(PauseInterval).count() == 0
    assert db_session.query(DietDay).filter_by(client_id=client.client_id).count() == 0
