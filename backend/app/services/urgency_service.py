"""Service for classifying active subscriptions by how soon they renew."""

import logging
from datetime import date
from typing import Any, Iterable, List, Optional

from app.models.subscription import SubscriptionStatus
from app.schemas.renewal import UrgencySummary, UpcomingRenewal
from app.services.renewal_calculator import UrgencyTier, classify_urgency, days_until

logger = logging.getLogger(__name__)


def _active(records: Iterable[Any]) -> List[Any]:
    return [r for r in records if r.status == SubscriptionStatus.active]


def tier_for(record: Any, reference_date: date) -> UrgencyTier:
    """Urgency tier of a single subscription."""
    return classify_urgency(days_until(record.renewal_date, reference_date), record.frequency)


def summarize(records: Iterable[Any], reference_date: Optional[date] = None) -> UrgencySummary:
    """
    Count active subscriptions per urgency tier.

    Each record lands in exactly one tier; ``urgent_count`` does not include
    very urgent ones. A record whose frequency cannot be classified is
    logged and left out of the counts.
    """
    reference_date = reference_date or date.today()
    counts = {tier: 0 for tier in UrgencyTier}

    for record in _active(records):
        try:
            counts[tier_for(record, reference_date)] += 1
        except ValueError:
            logger.warning(f"Cannot classify {record.id}: unrecognized frequency {record.frequency!r}")

    if counts[UrgencyTier.very_urgent]:
        most_severe = UrgencyTier.very_urgent
    elif counts[UrgencyTier.urgent]:
        most_severe = UrgencyTier.urgent
    else:
        most_severe = UrgencyTier.normal

    return UrgencySummary(
        very_urgent_count=counts[UrgencyTier.very_urgent],
        urgent_count=counts[UrgencyTier.urgent],
        normal_count=counts[UrgencyTier.normal],
        most_severe_tier=most_severe,
        reference_date=reference_date,
    )


def top_upcoming(records: Iterable[Any], n: int) -> List[Any]:
    """The ``n`` active subscriptions renewing soonest, ties broken by name."""
    if n <= 0:
        return []
    ordered = sorted(_active(records), key=lambda r: (r.renewal_date, r.name))
    return ordered[:n]


def describe_upcoming(
    records: Iterable[Any],
    n: int,
    reference_date: Optional[date] = None,
) -> List[UpcomingRenewal]:
    """``top_upcoming`` with days-until and tier attached, for menus and tooltips."""
    reference_date = reference_date or date.today()
    upcoming = []
    for r in top_upcoming(records, n):
        try:
            tier = tier_for(r, reference_date)
        except ValueError:
            logger.warning(f"Cannot classify {r.id}: unrecognized frequency {r.frequency!r}")
            continue
        upcoming.append(UpcomingRenewal(
            subscription_id=str(r.id),
            name=r.name,
            cost=float(r.cost),
            currency=getattr(r.currency, "value", r.currency),
            frequency=getattr(r.frequency, "value", r.frequency),
            renewal_date=r.renewal_date,
            days_until=days_until(r.renewal_date, reference_date),
            tier=tier,
        ))
    return upcoming
