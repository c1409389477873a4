"""
Domain schemas package - Pydantic models for validation.
"""

from domain.schemas.client_schemas import (
    ClientCreate,
    ClientUpdate,
    ClientResponse,
    ClientDeleteResponse,
)
from domain.schemas.plan_schemas import (
    PlanCreate,
    PlanUpdate,
    PlanResponse,
)
from domain.schemas.subscription_schemas import (
    AssignPlanRequest,
    RecordPaymentRequest,
    SubscriptionActionRequest,
    PaymentRecordResponse,
    PauseIntervalResponse,
    SubscriptionResponse,
)
from domain.schemas.diet_plan_schemas import (
    DietDayInput,
    DietPlanUpsert,
    DietDayResponse,
    DietPlanResponse,
    DietStatusResponse,
)
from domain.schemas.follow_up_schemas import (
    FollowUpCreate,
    FollowUpUpdate,
    FollowUpResponse,
)
from domain.schemas.dashboard_schemas import (
    ClientCounts,
    DueFollowUp,
    DietPendingClient,
    DietPendingSummary,
    DashboardStatsResponse,
)

__all__ = [
    # Clients
    "ClientCreate",
    "ClientUpdate",
    "ClientResponse",
    "ClientDeleteResponse",
    # Plan catalog
    "PlanCreate",
    "PlanUpdate",
    "PlanResponse",
    # Subscriptions
    "AssignPlanRequest",
    "RecordPaymentRequest",
    "SubscriptionActionRequest",
    "PaymentRecordResponse",
    "PauseIntervalResponse",
    "SubscriptionResponse",
    # Diet plans
    "DietDayInput",
    "DietPlanUpsert",
    "DietDayResponse",
    "DietPlanResponse",
    "DietStatusResponse",
    # Follow-ups
    "FollowUpCreate",
    "FollowUpUpdate",
    "FollowUpResponse",
    # Dashboard
    "ClientCounts",
    "DueFollowUp",
    "DietPendingClient",
    "DietPendingSummary",
    "DashboardStatsResponse",
]
