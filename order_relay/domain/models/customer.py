from dataclasses import dataclass
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Any, Dict, Optional

CENTS = Decimal("0.01")


@dataclass
class CustomerProfile:
    """
    Customer view built from the orders that share one identity key.

    ``total_spent`` accumulates unrounded; ``rounded_total_spent`` is the
    value emitted to callers.
    """

    identity_key: str
    name: str
    email: Optional[str]
    phone: Optional[str]
    city: str
    state: str
    total_orders: int = 1
    total_spent: Decimal = Decimal(0)
    last_order_date: Optional[str] = None

    @property
    def rounded_total_spent(self) -> Decimal:
        with localcontext() as ctx:
            ctx.prec = max(28, self.total_spent.adjusted() + 4)
            return self.total_spent.quantize(CENTS, rounding=ROUND_HALF_UP)

    def to_dict(self) -> Dict[str, Any]:
        """Wire form used by the mobile client."""
        return {
            "id": self.identity_key,
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "city": self.city,
            "state": self.state,
            "totalOrders": self.total_orders,
            "totalSpent": float(self.rounded_total_spent),
            "lastOrderDate": self.last_order_date,
        }
