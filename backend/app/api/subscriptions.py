"""API endpoints for subscription management."""

from datetime import date
from fastapi import APIRouter, Depends, HTTPException, Query
from typing import List, Optional

from app.dependencies import get_store
from app.models.subscription import Subscription, SubscriptionStatus
from app.schemas.subscription import (
    SubscriptionCreate,
    SubscriptionUpdate,
    SubscriptionResponse,
    SubscriptionListResponse,
)
from app.schemas.renewal import RolloverResponse, MonthlyTotal, MonthlyTotalsResponse
from app.services import rollover_service
from app.services.subscription_store import SqlSubscriptionStore

router = APIRouter(prefix="/subscriptions", tags=["subscriptions"])


def _get_or_404(store: SqlSubscriptionStore, subscription_id: str) -> Subscription:
    subscription = store.get(subscription_id)
    if not subscription:
        raise HTTPException(status_code=404, detail="Subscription not found")
    return subscription


@router.get("", response_model=SubscriptionListResponse)
def list_subscriptions(
    status: Optional[SubscriptionStatus] = Query(None),
    store: SqlSubscriptionStore = Depends(get_store)
):
    """
    List subscriptions. Past-due renewal dates are rolled forward first,
    so active subscriptions never show a date before today.
    """
    rolled_over = rollover_service.rollover_past_due(store)

    if status == SubscriptionStatus.active:
        items = store.list_active()
    elif status == SubscriptionStatus.inactive:
        items = store.list_inactive()
    else:
        items = store.list_all()

    return SubscriptionListResponse(
        items=[SubscriptionResponse.model_validate(s) for s in items],
        total=len(items),
        rolled_over=rolled_over,
    )


@router.get("/search", response_model=List[SubscriptionResponse])
def search_subscriptions(
    q: str = Query(..., min_length=1),
    store: SqlSubscriptionStore = Depends(get_store)
):
    """Search subscriptions by name or tag."""
    return [SubscriptionResponse.model_validate(s) for s in store.search(q)]


@router.get("/totals", response_model=MonthlyTotalsResponse)
def get_monthly_totals(store: SqlSubscriptionStore = Depends(get_store)):
    """Monthly spend per currency; annual plans count as 1/12 of their cost."""
    totals = store.monthly_totals()
    return MonthlyTotalsResponse(
        totals=[
            MonthlyTotal(currency=currency, monthly_total=float(total))
            for currency, total in sorted(totals.items())
        ]
    )


@router.post("/rollover", response_model=RolloverResponse)
def rollover_subscriptions(
    reference_date: Optional[date] = Query(None, description="Defaults to today"),
    store: SqlSubscriptionStore = Depends(get_store)
):
    """Advance every past-due active subscription to its next renewal."""
    reference_date = reference_date or date.today()
    updated = rollover_service.rollover_past_due(store, reference_date)
    return RolloverResponse(updated_ids=updated, reference_date=reference_date, count=len(updated))


@router.get("/{subscription_id}", response_model=SubscriptionResponse)
def get_subscription(
    subscription_id: str,
    store: SqlSubscriptionStore = Depends(get_store)
):
    """Get a single subscription."""
    return SubscriptionResponse.model_validate(_get_or_404(store, subscription_id))


@router.post("", response_model=SubscriptionResponse, status_code=201)
def create_subscription(
    data: SubscriptionCreate,
    store: SqlSubscriptionStore = Depends(get_store)
):
    """Manually add a subscription, or save a confirmed parsed draft."""
    subscription = Subscription(**data.model_dump())
    subscription_id = store.insert(subscription)
    return SubscriptionResponse.model_validate(store.get(subscription_id))


@router.patch("/{subscription_id}", response_model=SubscriptionResponse)
def update_subscription(
    subscription_id: str,
    update: SubscriptionUpdate,
    store: SqlSubscriptionStore = Depends(get_store)
):
    """Edit a subscription, including activating or deactivating it."""
    _get_or_404(store, subscription_id)

    update_data = update.model_dump(exclude_unset=True)
    for field in ("name", "cost", "currency", "renewal_date", "frequency", "status", "tags"):
        if field in update_data and update_data[field] is None:
            raise HTTPException(status_code=422, detail=f"{field} cannot be null")

    store.update(subscription_id, update_data)
    return SubscriptionResponse.model_validate(store.get(subscription_id))


@router.delete("/{subscription_id}")
def delete_subscription(
    subscription_id: str,
    store: SqlSubscriptionStore = Depends(get_store)
):
    """Delete a subscription."""
    if not store.delete(subscription_id):
        raise HTTPException(status_code=404, detail="Subscription not found")
    return {"deleted": True}


@router.post("/{subscription_id}/renew", response_model=SubscriptionResponse)
def renew_subscription(
    subscription_id: str,
    store: SqlSubscriptionStore = Depends(get_store)
):
    """Mark a subscription as renewed: move its renewal date forward one period."""
    subscription = _get_or_404(store, subscription_id)

    updated = rollover_service.rollover_single(store, subscription)
    if updated is None:
        raise HTTPException(status_code=409, detail="Subscription cannot be renewed: unrecognized frequency or date out of range")
    return SubscriptionResponse.model_validate(updated)
