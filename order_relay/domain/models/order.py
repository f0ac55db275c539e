"""
Read helpers for commerce order records.

Order records arrive as JSON mappings in the platform's own schema
(``billing.first_name``, ``total`` as a decimal string, ``date_created``
as an ISO timestamp). None of these helpers raise on malformed input:
missing or mistyped fields read as empty strings, zero, or the epoch.
"""
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Mapping

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Totals must stay representable as JSON numbers once summed
MAX_TOTAL_EXPONENT = 300


def billing_of(order: Any) -> Dict[str, Any]:
    """Return the billing block of an order, or an empty dict."""
    if not isinstance(order, Mapping):
        return {}
    billing = order.get("billing")
    return dict(billing) if isinstance(billing, Mapping) else {}


def text_field(data: Mapping[str, Any], name: str) -> str:
    """Read ``name`` as a string; absent or null reads as ``""``."""
    value = data.get(name)
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def parse_total(value: Any) -> Decimal:
    """Parse an order total; anything non-numeric or absurdly large counts as zero."""
    if value is None or isinstance(value, bool):
        return Decimal(0)
    try:
        amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return Decimal(0)
    if not amount.is_finite() or amount.adjusted() > MAX_TOTAL_EXPONENT:
        return Decimal(0)
    return amount


def parse_date(value: Any) -> datetime:
    """
    Parse an order timestamp for comparison.

    Naive timestamps are read as UTC. Unparsable or missing values map
    to the epoch so they sort before every real date.
    """
    if not value or not isinstance(value, str):
        return EPOCH
    try:
        parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
