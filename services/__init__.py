"""Services package - Business logic layer"""

from services.client_service import ClientService
from services.plan_service import PlanService
from services.subscription_service import SubscriptionService
from services.diet_status_service import DietStatusService
from services.diet_plan_service import DietPlanService
from services.follow_up_service import FollowUpService
from services.dashboard_service import DashboardService


__all__ = [
    "ClientService",
    "PlanService",
    "SubscriptionService",
    "DietStatusService",
    "DietPlanService",
    "FollowUpService",
    "DashboardService",
]
