"""
Turns raw parsed fields into a subscription draft.

Runs in two passes. The defaulting pass fills the fields listed in
``DEFAULTS`` when they are missing. The validation pass then requires every
field in ``REQUIRED``, checks shapes and allowed values, and finally rolls
a past renewal date forward to its next occurrence. Receipts and
confirmation emails usually show the last charge, so a past date means
"the next time this renews" rather than bad input.
"""

import logging
import re
from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Dict, List, Mapping, Optional

from app.models.subscription import Currency, Frequency, SubscriptionStatus
from app.schemas.subscription import SubscriptionDraft
from app.services.errors import FieldTypeError, FieldValueError, MissingFieldError
from app.services.renewal_calculator import advance_until_future

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "frequency": Frequency.monthly.value,
    "currency": Currency.USD.value,
    "tags": "",
}

REQUIRED = ("name", "cost", "renewal_date")

# Model output uses camelCase
ALIASES = {
    "renewalDate": "renewal_date",
}

ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
CENT = Decimal("0.01")

# Column limits on subscriptions.name and subscriptions.cost (Numeric 12,2)
MAX_NAME_LENGTH = 200
MAX_COST = Decimal(10) ** 10


def _is_missing(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str) and not value.strip():
        return True
    return False


def _collect(raw: Mapping[str, Any]) -> Dict[str, Any]:
    fields: Dict[str, Any] = {}
    for key, value in raw.items():
        fields[ALIASES.get(key, key)] = value
    return fields


def apply_defaults(fields: Dict[str, Any]) -> List[str]:
    """Fill missing defaultable fields in place. Returns the names that were filled."""
    filled = []
    for name, default in DEFAULTS.items():
        if _is_missing(fields.get(name)):
            fields[name] = default
            if name != "tags":
                logger.info(f"{name} unclear, defaulting to {default}")
                filled.append(name)
    return filled


def _check_name(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise FieldTypeError("name", "non-empty text")
    if len(value.strip()) > MAX_NAME_LENGTH:
        raise FieldTypeError("name", f"text of at most {MAX_NAME_LENGTH} characters")
    return value.strip()


def _check_cost(value: Any) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise FieldTypeError("cost", "a positive number")
    try:
        cost = Decimal(str(value))
    except InvalidOperation:
        raise FieldTypeError("cost", "a positive number")
    if not cost.is_finite() or cost <= 0:
        raise FieldTypeError("cost", "a positive number")
    if cost >= MAX_COST:
        raise FieldTypeError("cost", "a positive number below 10^10")

    cost = cost.quantize(CENT, rounding=ROUND_HALF_UP)
    if cost <= 0 or cost >= MAX_COST:
        raise FieldTypeError("cost", "a positive number below 10^10")
    return cost


def _check_renewal_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not ISO_DATE.match(value.strip()):
        raise FieldTypeError("renewal_date", "a date in YYYY-MM-DD format")
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        raise FieldTypeError("renewal_date", "a valid calendar date in YYYY-MM-DD format")


def _check_choice(field: str, value: Any, allowed) -> str:
    options = [member.value for member in allowed]
    if value not in options:
        raise FieldValueError(field, options)
    return value


def _coerce_tags(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, (list, tuple)):
        return " ".join(str(v).strip() for v in value if str(v).strip())
    return str(value).strip()


def normalize_fields(
    raw: Mapping[str, Any],
    today: Optional[date] = None,
    source: str = "input",
) -> SubscriptionDraft:
    """
    Validate and complete raw parsed fields.

    Args:
        raw: Field mapping from the parser. Values may be missing, null or wrong-typed.
        today: Reference date for rolling past renewal dates forward.
        source: Where the fields came from, used in error messages.

    Raises:
        MissingFieldError: name, cost or renewal date absent.
        FieldTypeError: name, cost or renewal date malformed.
        FieldValueError: currency or frequency outside the supported set.
    """
    today = today or date.today()
    fields = _collect(raw)

    defaulted = apply_defaults(fields)

    missing = [name for name in REQUIRED if _is_missing(fields.get(name))]
    if missing:
        raise MissingFieldError(missing, source)

    name = _check_name(fields["name"])
    cost = _check_cost(fields["cost"])
    renewal_date = _check_renewal_date(fields["renewal_date"])

    currency = _check_choice("currency", fields["currency"], Currency)
    frequency = _check_choice("frequency", fields["frequency"], Frequency)

    original_date = None
    if renewal_date < today:
        original_date = renewal_date
        renewal_date = advance_until_future(renewal_date, frequency, today)
        logger.info(f"Updated past renewal date {original_date} to next occurrence {renewal_date}")

    return SubscriptionDraft(
        name=name,
        cost=cost,
        currency=Currency(currency),
        renewal_date=renewal_date,
        frequency=Frequency(frequency),
        tags=_coerce_tags(fields["tags"]),
        status=SubscriptionStatus.active,
        defaulted_fields=defaulted,
        original_renewal_date=original_date,
    )
