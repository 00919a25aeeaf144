"""Schemas for renewal urgency and rollover results."""

from pydantic import BaseModel
from typing import List
from datetime import date

from app.services.renewal_calculator import UrgencyTier


class UrgencySummary(BaseModel):
    very_urgent_count: int = 0
    urgent_count: int = 0
    normal_count: int = 0
    most_severe_tier: UrgencyTier = UrgencyTier.normal
    reference_date: date


class UpcomingRenewal(BaseModel):
    subscription_id: str
    name: str
    cost: float
    currency: str
    frequency: str
    renewal_date: date
    days_until: int
    tier: UrgencyTier


class UpcomingRenewalsResponse(BaseModel):
    renewals: List[UpcomingRenewal]
    summary: UrgencySummary


class RolloverResponse(BaseModel):
    updated_ids: List[str]
    reference_date: date
    count: int


class MonthlyTotal(BaseModel):
    currency: str
    monthly_total: float


class MonthlyTotalsResponse(BaseModel):
    totals: List[MonthlyTotal]
