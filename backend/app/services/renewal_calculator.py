"""
Renewal date arithmetic and urgency classification.

Every place that needs "when does this renew next" or "how soon is it"
goes through this module so the thresholds stay in one spot.

Month and year steps use ``relativedelta``, which clamps to the last day
of the target month: Jan 31 + 1 month is Feb 29 (leap year) or Feb 28,
and Feb 29 + 1 year is Feb 28. The clamped day is carried into the next
step, so Jan 31 stepped monthly goes Feb 29, Mar 29, Apr 29.
"""

import enum
from datetime import date
from typing import Union

from dateutil.relativedelta import relativedelta

from app.models.subscription import Frequency


VERY_URGENT_DAYS = 2
URGENT_DAYS = {
    Frequency.monthly: 3,
    Frequency.annual: 30,
}

_STEPS = {
    Frequency.monthly: relativedelta(months=1),
    Frequency.annual: relativedelta(years=1),
}


class UrgencyTier(str, enum.Enum):
    """Urgency tiers, least to most severe."""
    normal = "normal"
    urgent = "urgent"
    very_urgent = "very_urgent"


def next_occurrence(current: date, frequency: Union[Frequency, str]) -> date:
    """
    Advance a renewal date by exactly one billing period.

    Raises:
        ValueError: if ``frequency`` is not monthly or annual.
    """
    return current + _STEPS[Frequency(frequency)]


def advance_until_future(current: date, frequency: Union[Frequency, str], reference_date: date) -> date:
    """
    Step ``current`` forward one period at a time until it is on or after
    ``reference_date``. Dates already on or after the reference are returned as-is.
    """
    step = _STEPS[Frequency(frequency)]
    result = current
    while result < reference_date:
        result = result + step
    return result


def days_until(target: date, reference_date: date) -> int:
    """Whole days from ``reference_date`` to ``target``; negative when overdue."""
    return (target - reference_date).days


def classify_urgency(days: int, frequency: Union[Frequency, str]) -> UrgencyTier:
    """Classify how soon a renewal is, given days until it and its frequency."""
    if days <= VERY_URGENT_DAYS:
        return UrgencyTier.very_urgent
    if days <= URGENT_DAYS[Frequency(frequency)]:
        return UrgencyTier.urgent
    return UrgencyTier.normal
