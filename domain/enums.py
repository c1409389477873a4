"""
Domain enums for NutriDesk.
Closed enumerations for every status and role field used across the models.
"""

import enum


class ClientStatus(str, enum.Enum):
    """Roster lifecycle of a client"""

    LEAD = "LEAD"
    NEW = "NEW"
    ACTIVE = "ACTIVE"
    PAUSED = "PAUSED"
    DELETED = "DELETED"


class SubscriptionStatus(str, enum.Enum):
    """Billing lifecycle of one subscription period"""

    PENDING_PAYMENT = "PENDING_PAYMENT"
    ACTIVE = "ACTIVE"
    PAUSED = "PAUSED"
    EXPIRED = "EXPIRED"
    COMPLETED = "COMPLETED"


class PaymentMethod(str, enum.Enum):
    CASH = "CASH"
    UPI = "UPI"
    BANK_TRANSFER = "BANK_TRANSFER"


class SubscriptionAction(str, enum.Enum):
    PAUSE = "PAUSE"
    RESUME = "RESUME"


class DietDayStatus(str, enum.Enum):
    """Publication state of one day of a weekly diet plan"""

    NO_DIET = "NO_DIET"
    NOT_SAVED = "NOT_SAVED"
    PUBLISHED = "PUBLISHED"


class SeverityColor(str, enum.Enum):
    """Triage signal for how urgently a client's diet plan needs attention"""

    BLACK = "BLACK"
    RED = "RED"
    YELLOW = "YELLOW"
    GREEN = "GREEN"

    @property
    def rank(self) -> int:
        """Lower rank sorts first (most severe)."""
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    SeverityColor.BLACK: 0,
    SeverityColor.RED: 1,
    SeverityColor.YELLOW: 2,
    SeverityColor.GREEN: 3,
}


class FollowUpStatus(str, enum.Enum):
    PENDING = "Pending"
    COMPLETED = "Completed"
    RESCHEDULED = "Rescheduled"


class CallerRole(str, enum.Enum):
    """Role asserted by the upstream authentication layer"""

    DIETICIAN = "DIETICIAN"
    CLIENT = "CLIENT"
