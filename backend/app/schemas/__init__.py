"""
Pydantic schemas package.
"""

from app.schemas.subscription import (
    SubscriptionBase,
    SubscriptionCreate,
    SubscriptionUpdate,
    SubscriptionResponse,
    SubscriptionListResponse,
    SubscriptionDraft,
    ParseTextRequest,
    ParseScreenshotRequest,
)
from app.schemas.renewal import (
    UrgencySummary,
    UpcomingRenewal,
    UpcomingRenewalsResponse,
    RolloverResponse,
    MonthlyTotal,
    MonthlyTotalsResponse,
)

__all__ = [
    "SubscriptionBase",
    "SubscriptionCreate",
    "SubscriptionUpdate",
    "SubscriptionResponse",
    "SubscriptionListResponse",
    "SubscriptionDraft",
    "ParseTextRequest",
    "ParseScreenshotRequest",
    "UrgencySummary",
    "UpcomingRenewal",
    "UpcomingRenewalsResponse",
    "RolloverResponse",
    "MonthlyTotal",
    "MonthlyTotalsResponse",
]
