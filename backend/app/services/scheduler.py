"""Periodic background rollover."""

import asyncio
import logging
from datetime import date
from typing import List, Optional

from app.database import SessionLocal
from app.services.rollover_service import rollover_past_due
from app.services.subscription_store import SqlSubscriptionStore

logger = logging.getLogger(__name__)


def run_rollover_once(reference_date: Optional[date] = None) -> List[str]:
    """Roll over past-due subscriptions using a session of its own."""
    db = SessionLocal()
    try:
        return rollover_past_due(SqlSubscriptionStore(db), reference_date)
    finally:
        db.close()


async def rollover_loop(interval_seconds: int) -> None:
    """
    Run ``run_rollover_once`` now and then every ``interval_seconds`` until cancelled.
    A failed pass is logged and retried on the next tick.
    """
    while True:
        try:
            updated = await asyncio.to_thread(run_rollover_once)
            if updated:
                logger.info(f"Periodic rollover advanced {len(updated)} subscription(s)")
        except Exception as e:
            logger.error(f"Periodic rollover failed: {e}")
        await asyncio.sleep(interval_seconds)
