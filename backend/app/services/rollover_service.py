"""Service for advancing stale renewal dates."""

import logging
from datetime import date
from typing import Any, Iterable, List, Optional

from app.models.subscription import Frequency, SubscriptionStatus
from app.services.renewal_calculator import advance_until_future, next_occurrence
from app.services.subscription_store import SubscriptionStore

logger = logging.getLogger(__name__)


def _frequency_of(record: Any) -> Optional[Frequency]:
    try:
        return Frequency(record.frequency)
    except ValueError:
        return None


def _apply(store: SubscriptionStore, record: Any, new_date: date) -> bool:
    if not store.update(record.id, {"renewal_date": new_date}):
        return False
    # Keep the caller's snapshot in step with what was written
    if record.renewal_date != new_date:
        record.renewal_date = new_date
    return True


def rollover_past_due(
    store: SubscriptionStore,
    reference_date: Optional[date] = None,
    records: Optional[Iterable[Any]] = None,
) -> List[str]:
    """
    Move every active subscription whose renewal date is before
    ``reference_date`` forward to its next occurrence on or after it.

    Records that are not past due are left alone and not re-saved, so a
    second run with the same reference date changes nothing. A record with
    an unrecognized frequency, or a date that cannot be advanced, is
    skipped and the scan continues.

    Returns:
        Ids of the subscriptions that were advanced.
    """
    reference_date = reference_date or date.today()
    if records is None:
        records = store.list_active()

    advanced = []
    for record in records:
        if record.status != SubscriptionStatus.active:
            continue
        if record.renewal_date >= reference_date:
            continue

        frequency = _frequency_of(record)
        if frequency is None:
            logger.warning(f"Skipping {record.id}: unrecognized frequency {record.frequency!r}")
            continue

        old_date = record.renewal_date
        try:
            new_date = advance_until_future(old_date, frequency, reference_date)
        except ValueError as e:
            logger.warning(f"Skipping {record.id}: cannot advance {old_date}: {e}")
            continue
        if _apply(store, record, new_date):
            logger.info(f"Rolled over '{record.name}' from {old_date} to {new_date}")
            advanced.append(record.id)

    return advanced


def rollover_single(store: SubscriptionStore, record: Any) -> Optional[Any]:
    """
    Advance one subscription by exactly one period from its current
    renewal date ("mark as renewed"), whether or not it is past due.

    Returns:
        The updated record, or None if its frequency is unrecognized, the
        next date is past the last representable year, or the store no
        longer has it.
    """
    frequency = _frequency_of(record)
    if frequency is None:
        logger.warning(f"Cannot renew {record.id}: unrecognized frequency {record.frequency!r}")
        return None

    try:
        new_date = next_occurrence(record.renewal_date, frequency)
    except ValueError as e:
        logger.warning(f"Cannot renew {record.id}: {e}")
        return None
    if not _apply(store, record, new_date):
        return None

    logger.info(f"Renewed '{record.name}', next renewal {new_date}")
    return record
