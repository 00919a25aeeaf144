"""API endpoints for renewal urgency, consumed by the tray and menu."""

from datetime import date
from fastapi import APIRouter, Depends, Query
from typing import Optional

from app.config import settings
from app.dependencies import get_store
from app.schemas.renewal import UrgencySummary, UpcomingRenewalsResponse
from app.services import rollover_service, urgency_service
from app.services.subscription_store import SqlSubscriptionStore

router = APIRouter(prefix="/renewals", tags=["renewals"])


@router.get("/summary", response_model=UrgencySummary)
def get_urgency_summary(
    reference_date: Optional[date] = Query(None, description="Defaults to today"),
    store: SqlSubscriptionStore = Depends(get_store)
):
    """Counts per urgency tier and the most severe tier, for the tray icon state."""
    reference_date = reference_date or date.today()
    rollover_service.rollover_past_due(store, reference_date)
    return urgency_service.summarize(store.list_active(), reference_date)


@router.get("/upcoming", response_model=UpcomingRenewalsResponse)
def get_upcoming_renewals(
    limit: Optional[int] = Query(None, ge=1, le=100),
    reference_date: Optional[date] = Query(None, description="Defaults to today"),
    store: SqlSubscriptionStore = Depends(get_store)
):
    """The next renewals with days-until and tier, plus the overall summary."""
    reference_date = reference_date or date.today()
    rollover_service.rollover_past_due(store, reference_date)

    active = store.list_active()
    return UpcomingRenewalsResponse(
        renewals=urgency_service.describe_upcoming(active, limit or settings.upcoming_limit, reference_date),
        summary=urgency_service.summarize(active, reference_date),
    )
