import logging
from typing import Any, Dict, List

from order_relay.adapters.interfaces.order_source import OrderSourceInterface
from order_relay.core.exceptions import UpstreamUnavailableError

logger = logging.getLogger(__name__)


class OrderService:
    """Passes order and product calls through to the commerce backend."""

    def __init__(
        self,
        order_source: OrderSourceInterface,
        orders_page_size: int = 50,
        products_page_size: int = 100
    ):
        self.order_source = order_source
        self.orders_page_size = orders_page_size
        self.products_page_size = products_page_size

    async def list_orders(self) -> List[Dict[str, Any]]:
        try:
            return await self.order_source.fetch_orders(per_page=self.orders_page_size)
        except UpstreamUnavailableError as e:
            raise self._failed(e, "Failed to fetch orders")

    async def get_order(self, order_id: str) -> Dict[str, Any]:
        try:
            return await self.order_source.fetch_order(order_id)
        except UpstreamUnavailableError as e:
            raise self._failed(e, "Failed to fetch order")

    async def update_order(self, order_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        logger.info(f"Updating order {order_id}", extra={"fields": sorted(patch)})
        try:
            return await self.order_source.update_order(order_id, patch)
        except UpstreamUnavailableError as e:
            raise self._failed(e, "Failed to update order")

    async def list_products(self) -> List[Dict[str, Any]]:
        try:
            return await self.order_source.fetch_products(per_page=self.products_page_size)
        except UpstreamUnavailableError as e:
            raise self._failed(e, "Failed to fetch products")

    @staticmethod
    def _failed(error: UpstreamUnavailableError, message: str) -> UpstreamUnavailableError:
        logger.error(
            f"{message}: {error.detail}",
            extra={"upstream_status": error.upstream_status, "upstream_body": error.upstream_body}
        )
        return error.with_detail(message)
