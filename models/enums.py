"""
Centralized Enum definitions for the project.
"""

from enum import Enum


class SaleStatus(str, Enum):
    """Lifecycle state of the sale a line belongs to"""

    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"


class Trend(str, Enum):
    """Direction of a product's demand slope"""

    UP = "UP"
    DOWN = "DOWN"
    STABLE = "STABLE"


class Urgency(str, Enum):
    """Stock-health tier of a product"""

    CRITICAL = "CRITICAL"  # Stock runs out within the supplier lead time
    LOW = "LOW"  # Inside the safety buffer
    OK = "OK"
    OVERSTOCK = "OVERSTOCK"  # More than the overstock ceiling of cover


class AlertSeverity(str, Enum):
    """Severity (or priority) of an alert"""

    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class AnomalyType(str, Enum):
    """Kinds of anomaly raised by the detectors"""

    MARGIN = "MARGIN"
    SALES_DROP = "SALES_DROP"
    SALES_SPIKE = "SALES_SPIKE"
    SLOW_MOVING = "SLOW_MOVING"
    DEADSTOCK = "DEADSTOCK"


class MarketPosition(str, Enum):
    """Position of our price relative to the market average"""

    BELOW = "BELOW"
    COMPETITIVE = "COMPETITIVE"
    ABOVE = "ABOVE"


class PromotionType(str, Enum):
    """Campaign templates produced by the promotion generator"""

    DEADSTOCK_CLEARANCE = "DEADSTOCK_CLEARANCE"
    SLOW_MOVER = "SLOW_MOVER"
    BUNDLE = "BUNDLE"
    VOLUME_DISCOUNT = "VOLUME_DISCOUNT"


class MarketingAlertType(str, Enum):
    """Marketing alert categories"""

    OPPORTUNITY = "OPPORTUNITY"
    ACTION_REQUIRED = "ACTION_REQUIRED"
    INFO = "INFO"


class CustomerSegment(str, Enum):
    """RFM customer segments supplied by the CRM collaborator"""

    CHAMPIONS = "CHAMPIONS"
    LOYAL = "LOYAL"
    POTENTIAL = "POTENTIAL"
    NEW = "NEW"
    AT_RISK = "AT_RISK"
    LOST = "LOST"


# Sort ranks. Every variant must appear; lookups fail loudly on a new member.
URGENCY_RANK: dict[Urgency, int] = {
    Urgency.CRITICAL: 0,
    Urgency.LOW: 1,
    Urgency.OK: 2,
    Urgency.OVERSTOCK: 3,
}

SEVERITY_RANK: dict[AlertSeverity, int] = {
    AlertSeverity.HIGH: 0,
    AlertSeverity.MEDIUM: 1,
    AlertSeverity.LOW: 2,
}
