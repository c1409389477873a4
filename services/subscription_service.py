"""
Subscription ledger: billing and pause/resume state machine for a client's plan.

States: PENDING_PAYMENT -> ACTIVE <-> PAUSED, plus EXPIRED/COMPLETED which
nothing here enters by time or by full payment.

Every mutation of an existing subscription is a single read-modify-write unit:
the row is read with a lock (where supported) and written back under a version
check. Losing a version race rolls back and replays the operation against the
fresh row, so two concurrent resumes cannot both extend the end date.
"""

import logging
import uuid
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Callable, List, Optional, Union

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from app.config import settings
from app.dates import add_days, add_months, normalize_date, utcnow, whole_days_between
from app.exceptions import (
    ConflictError,
    InvalidStateTransitionError,
    NotFoundError,
    ServiceValidationError,
)
from domain.enums import PaymentMethod, SubscriptionAction, SubscriptionStatus
from domain.models import PauseInterval, PaymentRecord, Subscription
from repositories import ClientRepository, PlanRepository, SubscriptionRepository

logger = logging.getLogger("nutridesk.subscriptions")

DEFAULT_PAUSE_REASON = "Dietician Paused"


def _to_decimal(value, field: str) -> Decimal:
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise ServiceValidationError(f"{field} must be a number") from e


class SubscriptionService:
    @staticmethod
    def assign_plan(
        db: Session,
        client_id: uuid.UUID,
        plan_name: Optional[str],
        total_amount: Union[Decimal, float, int, None],
        duration_months: Optional[int],
        start_date: Union[date, datetime, str, None],
        plan_id: Optional[uuid.UUID] = None,
        now: Optional[datetime] = None,
    ) -> Subscription:
        """
        Start a new billing period for a client.

        Any ACTIVE or PAUSED subscription of the client is expired first, so at
        most one live subscription exists afterwards. An open pause on an
        expired subscription ends on the assignment day. The new one starts in
        PENDING_PAYMENT with nothing paid.

        ``plan_id`` links the subscription to a catalog plan. The name, price
        and duration passed in are stored as given.

        Raises:
            ServiceValidationError: a required field is missing or not positive,
                or the catalog plan is inactive
            NotFoundError: client or catalog plan does not exist
        """
        missing = [
            name
            for name, value in (
                ("plan_name", plan_name),
                ("price", total_amount),
                ("duration_months", duration_months),
                ("start_date", start_date),
            )
            if value is None or (isinstance(value, str) and not value.strip())
        ]
        if missing:
            raise ServiceValidationError(
                "Missing required fields", details={"missing": missing}
            )

        amount = _to_decimal(total_amount, "price")
        if amount <= 0:
            raise ServiceValidationError("price must be greater than 0")
        try:
            months = int(duration_months)
        except (TypeError, ValueError) as e:
            raise ServiceValidationError("duration_months must be a whole number") from e
        if months < 1:
            raise ServiceValidationError("duration_months must be at least 1")
        try:
            start = normalize_date(start_date)
        except (TypeError, ValueError) as e:
            raise ServiceValidationError(str(e)) from e
        end = add_months(start, months)

        clients = ClientRepository(db)
        if clients.get_by_id(client_id, with_lock=True) is None:
            raise NotFoundError(f"Client {client_id} not found")
        if plan_id is not None:
            plan = PlanRepository(db).get_by_id(plan_id)
            if plan is None:
                raise NotFoundError(f"Plan {plan_id} not found")
            if not plan.is_active:
                raise ServiceValidationError(
                    "Plan is no longer offered", details={"plan_id": str(plan_id)}
                )

        repo = SubscriptionRepository(db)
        try:
            expired = repo.expire_live_for_client(client_id, normalize_date(now or utcnow()))
            subscription = repo.add(
                Subscription(
                    client_id=client_id,
                    plan_id=plan_id,
                    plan_name=plan_name.strip(),
                    start_date=start,
                    end_date=end,
                    total_amount=amount,
                    amount_paid=Decimal("0"),
                    status=SubscriptionStatus.PENDING_PAYMENT,
                )
            )
            db.commit()
        except Exception:
            db.rollback()
            raise

        logger.info(
            "plan_assigned client_id=%s subscription_id=%s plan=%r start=%s end=%s "
            "total=%s expired_previous=%d",
            client_id,
            subscription.subscription_id,
            subscription.plan_name,
            start,
            end,
            amount,
            expired,
        )
        return subscription

    @staticmethod
    def record_payment(
        db: Session,
        subscription_id: uuid.UUID,
        amount: Union[Decimal, float, int],
        method: PaymentMethod = PaymentMethod.CASH,
        note: Optional[str] = None,
        client_id: Optional[uuid.UUID] = None,
        now: Optional[datetime] = None,
    ) -> Subscription:
        """
        Append a payment and add it to ``amount_paid``.

        A positive payment on a PENDING_PAYMENT subscription activates it. Any
        other live subscription of the client is expired in the same
        transaction. The
        paid total is not clamped to the price and full payment does not
        complete the subscription.
        """
        value = _to_decimal(amount, "amount")
        if value < 0:
            raise ServiceValidationError("amount cannot be negative")
        paid_at = now or utcnow()

        def apply(subscription: Subscription) -> None:
            subscription.payments.append(
                PaymentRecord(
                    seq=len(subscription.payments) + 1,
                    paid_at=paid_at,
                    amount=value,
                    method=PaymentMethod(method),
                    note=note,
                )
            )
            subscription.amount_paid = Decimal(subscription.amount_paid or 0) + value
            if subscription.status == SubscriptionStatus.PENDING_PAYMENT and value > 0:
                subscription.status = SubscriptionStatus.ACTIVE
                expired = SubscriptionRepository(db).expire_live_for_client(
                    subscription.client_id,
                    normalize_date(paid_at),
                    exclude_id=subscription.subscription_id,
                )
                logger.info(
                    "subscription_activated subscription_id=%s expired_previous=%d",
                    subscription.subscription_id,
                    expired,
                )
            subscription.updated_at = paid_at

        subscription = _ledger_write(db, "record_payment", subscription_id, client_id, apply)
        logger.info(
            "payment_recorded subscription_id=%s amount=%s method=%s amount_paid=%s status=%s",
            subscription_id,
            value,
            PaymentMethod(method).value,
            subscription.amount_paid,
            subscription.status.value,
        )
        return subscription

    @staticmethod
    def pause(
        db: Session,
        subscription_id: uuid.UUID,
        reason: Optional[str] = None,
        client_id: Optional[uuid.UUID] = None,
        now: Optional[datetime] = None,
    ) -> Subscription:
        """
        Stop the subscription clock from today.

        Raises:
            InvalidStateTransitionError: subscription is not ACTIVE
        """
        instant = now or utcnow()
        day = normalize_date(instant)

        def apply(subscription: Subscription) -> None:
            if subscription.status == SubscriptionStatus.PAUSED:
                raise InvalidStateTransitionError(
                    "Subscription is already paused",
                    current_status=subscription.status.value,
                    action=SubscriptionAction.PAUSE.value,
                )
            if subscription.status != SubscriptionStatus.ACTIVE:
                raise InvalidStateTransitionError(
                    f"Cannot pause a subscription in status {subscription.status.value}",
                    current_status=subscription.status.value,
                    action=SubscriptionAction.PAUSE.value,
                )
            subscription.pauses.append(
                PauseInterval(
                    seq=len(subscription.pauses) + 1,
                    start_date=day,
                    reason=reason or DEFAULT_PAUSE_REASON,
                )
            )
            subscription.status = SubscriptionStatus.PAUSED
            subscription.updated_at = instant

        subscription = _ledger_write(db, "pause", subscription_id, client_id, apply)
        logger.info("subscription_paused subscription_id=%s from=%s", subscription_id, day)
        return subscription

    @staticmethod
    def resume(
        db: Session,
        subscription_id: uuid.UUID,
        client_id: Optional[uuid.UUID] = None,
        now: Optional[datetime] = None,
    ) -> Subscription:
        """
        Restart the subscription clock.

        Closes the open pause at today and pushes the end date forward by the
        number of whole days paused (nothing when resumed on the same day).

        Raises:
            InvalidStateTransitionError: subscription is not PAUSED
        """
        instant = now or utcnow()
        day = normalize_date(instant)
        shifted = {"days": 0}

        def apply(subscription: Subscription) -> None:
            if subscription.status != SubscriptionStatus.PAUSED:
                raise InvalidStateTransitionError(
                    "Subscription is not paused",
                    current_status=subscription.status.value,
                    action=SubscriptionAction.RESUME.value,
                )
            shifted["days"] = 0
            pause = subscription.open_pause()
            if pause is not None:
                pause.end_date = day
                days_paused = whole_days_between(pause.start_date, day)
                if days_paused > 0:
                    subscription.end_date = add_days(subscription.end_date, days_paused)
                    shifted["days"] = days_paused
            subscription.status = SubscriptionStatus.ACTIVE
            subscription.updated_at = instant

        subscription = _ledger_write(db, "resume", subscription_id, client_id, apply)
        logger.info(
            "subscription_resumed subscription_id=%s days_paused=%d end_date=%s",
            subscription_id,
            shifted["days"],
            subscription.end_date,
        )
        return subscription

    @staticmethod
    def apply_action(
        db: Session,
        subscription_id: uuid.UUID,
        action: SubscriptionAction,
        reason: Optional[str] = None,
        client_id: Optional[uuid.UUID] = None,
        now: Optional[datetime] = None,
    ) -> Subscription:
        """Dispatch a PAUSE or RESUME request."""
        if action == SubscriptionAction.PAUSE:
            return SubscriptionService.pause(db, subscription_id, reason, client_id, now)
        if action == SubscriptionAction.RESUME:
            return SubscriptionService.resume(db, subscription_id, client_id, now)
        raise ServiceValidationError(f"Unknown action: {action}")

    @staticmethod
    def get_subscription(db: Session, subscription_id: uuid.UUID) -> Subscription:
        subscription = SubscriptionRepository(db).get_by_id(subscription_id)
        if subscription is None:
            raise NotFoundError(f"Subscription {subscription_id} not found")
        return subscription

    @staticmethod
    def get_latest_for_client(db: Session, client_id: uuid.UUID) -> Optional[Subscription]:
        """Most recent subscription of a client by end date, or None"""
        return SubscriptionRepository(db).get_latest_for_client(client_id)

    @staticmethod
    def list_for_client(db: Session, client_id: uuid.UUID) -> List[Subscription]:
        return SubscriptionRepository(db).list_for_client(client_id)


def _ledger_write(
    db: Session,
    operation: str,
    subscription_id: uuid.UUID,
    client_id: Optional[uuid.UUID],
    apply: Callable[[Subscription], None],
) -> Subscription:
    """
    Run ``apply`` against a freshly locked subscription and commit it.

    On a lost version race the transaction is rolled back and the whole
    read-apply-commit cycle runs again, up to ``ledger_max_retries`` times.
    """
    repo = SubscriptionRepository(db)
    attempts = settings.ledger_max_retries
    for attempt in range(1, attempts + 1):
        try:
            subscription = repo.get_for_update(subscription_id)
            if subscription is None or (
                client_id is not None and subscription.client_id != client_id
            ):
                raise NotFoundError(f"Subscription {subscription_id} not found")
            apply(subscription)
            db.commit()
            return subscription
        except StaleDataError:
            db.rollback()
            logger.warning(
                "%s lost a concurrent update on subscription %s (attempt %d/%d)",
                operation,
                subscription_id,
                attempt,
                attempts,
            )
        except InvalidStateTransitionError as e:
            db.rollback()
            logger.warning(
                "%s rejected for subscription %s: %s", operation, subscription_id, e
            )
            raise
        except Exception:
            db.rollback()
            raise

    raise ConflictError(
        f"Subscription {subscription_id} is being modified concurrently, try again",
        code="CONCURRENT_MODIFICATION",
    )
