import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

from order_relay.adapters.interfaces.order_source import OrderSourceInterface
from order_relay.core.exceptions import UpstreamUnavailableError
from order_relay.domain.models.customer import CustomerProfile
from order_relay.domain.models.order import billing_of, parse_date, parse_total, text_field

logger = logging.getLogger(__name__)


def identity_key(billing: Mapping[str, Any]) -> Optional[str]:
    """Trimmed phone if present, else trimmed email, else None."""
    phone = text_field(billing, "phone").strip()
    if phone:
        return phone
    email = text_field(billing, "email").strip()
    return email or None


def aggregate(orders: Iterable[Any]) -> List[CustomerProfile]:
    """
    Collapse a batch of orders into one profile per identity key.

    Orders with neither phone nor email are skipped. On a repeated key
    the count and running total grow, a differing non-empty email
    replaces the stored one, and ``last_order_date`` moves only to a
    strictly later date. Profiles come out in first-seen order.
    """
    customers: Dict[str, CustomerProfile] = {}

    for order in orders:
        billing = billing_of(order)
        key = identity_key(billing)
        if key is None:
            continue

        email = text_field(billing, "email").strip() or None
        total = parse_total(order.get("total"))
        date_created = order.get("date_created") or None

        profile = customers.get(key)
        if profile is None:
            name = f"{text_field(billing, 'first_name')} {text_field(billing, 'last_name')}".strip()
            customers[key] = CustomerProfile(
                identity_key=key,
                name=name,
                email=email,
                phone=text_field(billing, "phone").strip() or None,
                city=text_field(billing, "city"),
                state=text_field(billing, "state"),
                total_orders=1,
                total_spent=total,
                last_order_date=date_created,
            )
            continue

        profile.total_orders += 1
        profile.total_spent += total

        if email and email != profile.email:
            profile.email = email

        if parse_date(date_created) > parse_date(profile.last_order_date):
            profile.last_order_date = date_created

    return list(customers.values())


def find_by_identity(orders: Iterable[Any], identity: str) -> List[Dict[str, Any]]:
    """
    Orders whose billing email or phone equals ``identity``, ignoring case
    and surrounding whitespace, most recent first.
    """
    wanted = (identity or "").strip().lower()
    if not wanted:
        return []

    matches = []
    for order in orders:
        billing = billing_of(order)
        email = text_field(billing, "email").strip().lower()
        phone = text_field(billing, "phone").strip().lower()
        if email == wanted or phone == wanted:
            matches.append(order)

    matches.sort(key=lambda o: parse_date(o.get("date_created")), reverse=True)
    return matches


class CustomerService:
    """Builds customer views from the commerce backend's recent orders."""

    def __init__(self, order_source: OrderSourceInterface, page_size: int = 100, status: str = "any"):
        self.order_source = order_source
        self.page_size = page_size
        self.status = status

    async def _recent_orders(self, failure_message: str) -> List[Dict[str, Any]]:
        try:
            return await self.order_source.fetch_orders(per_page=self.page_size, status=self.status)
        except UpstreamUnavailableError as e:
            logger.error(
                f"{failure_message}: {e.detail}",
                extra={"upstream_status": e.upstream_status, "upstream_body": e.upstream_body}
            )
            raise e.with_detail(failure_message)

    async def list_customers(self) -> List[CustomerProfile]:
        orders = await self._recent_orders("Failed to fetch customers")
        customers = aggregate(orders)
        logger.debug(f"Aggregated {len(orders)} orders into {len(customers)} customers")
        return customers

    async def orders_for(self, identity: str) -> List[Dict[str, Any]]:
        orders = await self._recent_orders("Failed to fetch customer orders")
        return find_by_identity(orders, identity)

    def format_customer_data(self, profile: CustomerProfile) -> Dict[str, Any]:
        return profile.to_dict()
