"""
Domain models package - SQLAlchemy ORM models.
"""

from domain.models.database import Base, Database, create_database
from domain.models.client import Client
from domain.models.plan import Plan
from domain.models.subscription import Subscription, PaymentRecord, PauseInterval
from domain.models.diet_plan import DietPlan, DietDay
from domain.models.follow_up import FollowUp

__all__ = [
    # Database
    "Base",
    "Database",
    "create_database",
    # Roster
    "Client",
    # Catalog
    "Plan",
    # Ledger
    "Subscription",
    "PaymentRecord",
    "PauseInterval",
    # Diet plans
    "DietPlan",
    "DietDay",
    # Follow-ups
    "FollowUp",
]
