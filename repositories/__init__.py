"""
Repositories package - Data access layer.
"""

from repositories.base import BaseRepository
from repositories.client_repository import ClientRepository
from repositories.plan_repository import PlanRepository
from repositories.subscription_repository import SubscriptionRepository
from repositories.diet_plan_repository import DietPlanRepository
from repositories.follow_up_repository import FollowUpRepository

__all__ = [
    "BaseRepository",
    "ClientRepository",
    "PlanRepository",
    "SubscriptionRepository",
    "DietPlanRepository",
    "FollowUpRepository",
]
