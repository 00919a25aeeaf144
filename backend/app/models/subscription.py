"""
Subscription database model.
"""

import uuid
from datetime import datetime
from sqlalchemy import Column, String, DateTime, Date, Numeric, Text, Enum
import enum
from app.database import Base


class Frequency(str, enum.Enum):
    """Billing frequency enumeration."""
    monthly = "monthly"
    annual = "annual"


class Currency(str, enum.Enum):
    """Supported billing currencies."""
    USD = "USD"
    EUR = "EUR"


class SubscriptionStatus(str, enum.Enum):
    """Subscription status enumeration."""
    active = "active"
    inactive = "inactive"


class Subscription(Base):
    """A recurring payment the user is tracking."""

    __tablename__ = "subscriptions"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(200), nullable=False)
    cost = Column(Numeric(12, 2), nullable=False)
    currency = Column(Enum(Currency), nullable=False, default=Currency.USD)
    renewal_date = Column(Date, nullable=False, index=True)  # Next billing date
    frequency = Column(Enum(Frequency), nullable=False, default=Frequency.monthly)
    status = Column(Enum(SubscriptionStatus), nullable=False, default=SubscriptionStatus.active, index=True)
    tags = Column(Text, nullable=False, default="")  # Whitespace-separated hashtags
    added_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    last_modified_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    @property
    def is_active(self) -> bool:
        return self.status == SubscriptionStatus.active
