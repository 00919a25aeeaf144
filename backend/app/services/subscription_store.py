"""Persistence for subscriptions."""

import logging
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Dict, List, Optional, Protocol, Sequence

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.models.subscription import Subscription, SubscriptionStatus, Frequency

logger = logging.getLogger(__name__)


class SubscriptionStore(Protocol):
    """What the rollover engine and aggregator need from storage."""

    def list_active(self) -> Sequence[Any]:
        ...

    def update(self, subscription_id: str, fields: Dict[str, Any]) -> bool:
        ...

    def insert(self, record: Any) -> str:
        ...


class SqlSubscriptionStore:
    """SQLAlchemy-backed subscription store. Each write commits on its own."""

    def __init__(self, db: Session):
        self.db = db

    def get(self, subscription_id: str) -> Optional[Subscription]:
        return self.db.query(Subscription).filter(Subscription.id == subscription_id).first()

    def list_active(self) -> List[Subscription]:
        return self.db.query(Subscription).filter(
            Subscription.status == SubscriptionStatus.active
        ).order_by(Subscription.renewal_date, Subscription.name).all()

    def list_inactive(self) -> List[Subscription]:
        return self.db.query(Subscription).filter(
            Subscription.status == SubscriptionStatus.inactive
        ).order_by(Subscription.name).all()

    def list_all(self) -> List[Subscription]:
        return self.db.query(Subscription).order_by(Subscription.renewal_date, Subscription.name).all()

    def search(self, query: str) -> List[Subscription]:
        """Case-insensitive substring match on name or tags."""
        pattern = f"%{query}%"
        return self.db.query(Subscription).filter(
            or_(Subscription.name.ilike(pattern), Subscription.tags.ilike(pattern))
        ).order_by(Subscription.renewal_date, Subscription.name).all()

    def insert(self, record: Subscription) -> str:
        self.db.add(record)
        self.db.commit()
        self.db.refresh(record)
        logger.info(f"Added subscription '{record.name}' ({record.id})")
        return record.id

    def update(self, subscription_id: str, fields: Dict[str, Any]) -> bool:
        """Apply ``fields`` to one subscription. Returns False if it does not exist."""
        subscription = self.get(subscription_id)
        if subscription is None:
            return False

        for field, value in fields.items():
            setattr(subscription, field, value)
        subscription.last_modified_at = datetime.utcnow()

        try:
            self.db.commit()
        except Exception as e:
            self.db.rollback()
            logger.error(f"Failed to update subscription {subscription_id}: {e}")
            raise
        self.db.refresh(subscription)
        return True

    def delete(self, subscription_id: str) -> bool:
        subscription = self.get(subscription_id)
        if subscription is None:
            return False
        self.db.delete(subscription)
        self.db.commit()
        logger.info(f"Deleted subscription {subscription_id}")
        return True

    def monthly_totals(self) -> Dict[str, Decimal]:
        """
        Monthly spend per currency across active subscriptions.
        Annual subscriptions count as a twelfth of their cost.
        """
        totals: Dict[str, Decimal] = {}
        for s in self.list_active():
            cost = Decimal(s.cost)
            monthly = cost if s.frequency == Frequency.monthly else cost / 12
            key = s.currency.value
            totals[key] = totals.get(key, Decimal("0")) + monthly

        return {
            currency: total.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
            for currency, total in totals.items()
        }
