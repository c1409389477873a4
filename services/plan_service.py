"""
Plan catalog: the priced programs a dietician offers.
"""

import logging
import uuid
from typing import List

from sqlalchemy.orm import Session

from app.exceptions import NotFoundError, ServiceValidationError
from domain.models import Plan
from domain.schemas.plan_schemas import PlanCreate, PlanUpdate
from repositories import PlanRepository

logger = logging.getLogger("nutridesk.plans")

# Columns that may not be cleared by an update
_REQUIRED_FIELDS = ("name", "duration_months", "price", "is_active", "is_recommended")


class PlanService:
    @staticmethod
    def list_plans(db: Session, include_inactive: bool = False) -> List[Plan]:
        return PlanRepository(db).list_plans(include_inactive)

    @staticmethod
    def get_plan(db: Session, plan_id: uuid.UUID) -> Plan:
        plan = PlanRepository(db).get_by_id(plan_id)
        if plan is None:
            raise NotFoundError(f"Plan {plan_id} not found")
        return plan

    @staticmethod
    def create_plan(db: Session, data: PlanCreate) -> Plan:
        plan = Plan(
            name=data.name.strip(),
            duration_months=data.duration_months,
            price=data.price,
            description=data.description,
            features=list(data.features),
            is_recommended=data.is_recommended,
            is_active=True,
        )
        plan = PlanRepository(db).create(plan)
        logger.info(
            f"plan_created plan_id={plan.plan_id} name={plan.name!r} price={plan.price}"
        )
        return plan

    @staticmethod
    def update_plan(db: Session, plan_id: uuid.UUID, data: PlanUpdate) -> Plan:
        """
        Apply a partial update.

        Subscriptions already assigned from the plan keep their own name and
        terms.

        Raises:
            NotFoundError: plan does not exist
            ServiceValidationError: a required field is sent as null
        """
        repo = PlanRepository(db)
        plan = repo.get_by_id(plan_id)
        if plan is None:
            raise NotFoundError(f"Plan {plan_id} not found")

        changes = data.model_dump(exclude_unset=True)
        cleared = [f for f in _REQUIRED_FIELDS if f in changes and changes[f] is None]
        if cleared:
            raise ServiceValidationError(
                "Fields cannot be empty", details={"fields": cleared}
            )
        if "name" in changes:
            changes["name"] = changes["name"].strip()
        if changes.get("features") is None:
            changes.pop("features", None)
        for field, value in changes.items():
            setattr(plan, field, value)

        plan = repo.update(plan)
        logger.info(f"plan_updated plan_id={plan_id} fields={sorted(changes)}")
        return plan

    @staticmethod
    def deactivate_plan(db: Session, plan_id: uuid.UUID) -> Plan:
        """Withdraw a plan from the catalog. The row stays for history."""
        repo = PlanRepository(db)
        plan = repo.get_by_id(plan_id)
        if plan is None:
            raise NotFoundError(f"Plan {plan_id} not found")
        plan.is_active = False
        plan = repo.update(plan)
        logger.info(f"plan_deactivated plan_id={plan_id}")
        return plan
