from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, List, Optional


class APIStatus(str, Enum):
    """Enum defining possible API status values."""
    AVAILABLE = "available"
    DEGRADED = "degraded"
    UNAVAILABLE = "unavailable"
    UNKNOWN = "unknown"


class OrderSourceInterface(ABC):
    """
    Abstract base interface for commerce backends.

    Records are returned as the platform's own JSON mappings; this layer
    does not reshape them.
    """

    @abstractmethod
    async def fetch_orders(
        self,
        per_page: int,
        status: Optional[str] = None,
        page: int = 1
    ) -> List[Dict[str, Any]]:
        """
        Retrieves one page of orders.

        Args:
            per_page: Page size requested from the backend.
            status: Optional status filter (e.g. "any", "processing").
            page: 1-based page number.

        Returns:
            List[Dict[str, Any]]: Raw order records.

        Raises:
            UpstreamUnavailableError: If the backend cannot be reached or errors.
        """
        pass

    @abstractmethod
    async def fetch_order(self, order_id: str) -> Dict[str, Any]:
        """
        Retrieves a single order.

        Raises:
            NotFoundError: If the backend reports the order does not exist.
            UpstreamUnavailableError: On any other backend failure.
        """
        pass

    @abstractmethod
    async def update_order(self, order_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        """
        Applies a partial update to an order and returns the updated record.

        Raises:
            UpstreamUnavailableError: If the update is rejected or fails.
        """
        pass

    @abstractmethod
    async def fetch_products(self, per_page: int, page: int = 1) -> List[Dict[str, Any]]:
        """Retrieves one page of products."""
        pass

    @abstractmethod
    async def is_available(self) -> APIStatus:
        """
        Checks if the backend is reachable and answering.

        Returns:
            APIStatus: The current status of the API.
        """
        pass

    async def close(self) -> None:
        """Releases any held connections."""
        return None
