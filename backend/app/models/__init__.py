"""
Database models package.
"""

from app.models.subscription import Subscription, Frequency, Currency, SubscriptionStatus
from app.models.ai_settings import AISettingsRecord

__all__ = [
    "Subscription",
    "Frequency",
    "Currency",
    "SubscriptionStatus",
    "AISettingsRecord",
]
