"""
Subscription schemas.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import date, datetime
from decimal import Decimal

from app.models.subscription import Currency, Frequency, SubscriptionStatus


class SubscriptionBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    cost: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2)
    currency: Currency = Currency.USD
    renewal_date: date
    frequency: Frequency = Frequency.monthly
    tags: str = ""

    @field_validator("name", "tags", mode="before")
    @classmethod
    def strip_text(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value


class SubscriptionCreate(SubscriptionBase):
    status: SubscriptionStatus = SubscriptionStatus.active


class SubscriptionUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    cost: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    currency: Optional[Currency] = None
    renewal_date: Optional[date] = None
    frequency: Optional[Frequency] = None
    status: Optional[SubscriptionStatus] = None
    tags: Optional[str] = None

    @field_validator("name", "tags", mode="before")
    @classmethod
    def strip_text(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value


class SubscriptionResponse(BaseModel):
    id: str
    name: str
    cost: Decimal
    currency: Currency
    renewal_date: date
    frequency: Frequency
    status: SubscriptionStatus
    tags: str
    added_at: datetime
    last_modified_at: datetime

    class Config:
        from_attributes = True


class SubscriptionListResponse(BaseModel):
    items: List[SubscriptionResponse]
    total: int
    rolled_over: List[str] = []


class SubscriptionDraft(SubscriptionBase):
    """A normalized subscription ready to be confirmed and saved."""
    status: SubscriptionStatus = SubscriptionStatus.active
    defaulted_fields: List[str] = []
    original_renewal_date: Optional[date] = None  # Set when a past date was rolled forward


class ParseTextRequest(BaseModel):
    text: str = Field(..., min_length=1)
    api_key: Optional[str] = None


class ParseScreenshotRequest(BaseModel):
    image_data_url: str = Field(..., description="data:image/...;base64,... or bare base64")
    api_key: Optional[str] = None
