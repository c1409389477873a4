"""API routes package"""

from . import clients, plans, subscriptions, follow_ups, diet_plans, dashboard, health

__all__ = ["clients", "plans", "subscriptions", "follow_ups", "diet_plans", "dashboard", "health"]
