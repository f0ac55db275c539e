from typing import Any, Dict, List, Optional

import httpx

from order_relay.adapters.interfaces.order_source import APIStatus, OrderSourceInterface
from order_relay.core.exceptions import NotFoundError, UpstreamUnavailableError
from order_relay.core.logging import get_logger

logger = get_logger(__name__)


class WooCommerceAdaptor(OrderSourceInterface):
    """
    Order source backed by the WooCommerce REST API.

    Credentials travel as ``consumer_key``/``consumer_secret`` query
    parameters when ``query_string_auth`` is set, otherwise as HTTP Basic
    auth. Failed calls are never retried here.
    """

    PLATFORM = "woocommerce"

    def __init__(
        self,
        url: str,
        consumer_key: str,
        consumer_secret: str,
        version: str = "wc/v3",
        query_string_auth: bool = True,
        timeout: float = 10,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        """
        Initialize the adaptor.

        Args:
            url: Store root URL (e.g. https://shop.example.com)
            consumer_key: REST API consumer key
            consumer_secret: REST API consumer secret
            version: REST namespace, "wc/v3" by default
            query_string_auth: Send credentials as query parameters
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used by tests
        """
        self.url = (url or "").rstrip("/")
        self.version = version.strip("/")
        self._client: Optional[httpx.AsyncClient] = None

        if self.url:
            params = {}
            auth = None
            if query_string_auth:
                params = {"consumer_key": consumer_key, "consumer_secret": consumer_secret}
            else:
                auth = (consumer_key, consumer_secret)

            self._client = httpx.AsyncClient(
                base_url=f"{self.url}/wp-json/{self.version}/",
                params=params,
                auth=auth,
                timeout=timeout,
                headers={"Accept": "application/json"},
                transport=transport,
            )
        else:
            logger.warning("WOO_URL is not set; commerce API calls will fail")

    @classmethod
    def from_settings(cls, settings, **kwargs) -> "WooCommerceAdaptor":
        return cls(
            url=settings.WOO_URL,
            consumer_key=settings.WOO_CK,
            consumer_secret=settings.WOO_CS,
            version=settings.WOO_API_VERSION,
            query_string_auth=settings.WOO_QUERY_STRING_AUTH,
            timeout=settings.DEFAULT_TIMEOUT,
            **kwargs
        )

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Any] = None
    ) -> Any:
        if self._client is None:
            raise UpstreamUnavailableError("Commerce API URL is not configured")

        try:
            response = await self._client.request(method, path, params=params, json=json)
        except httpx.RequestError as e:
            logger.error(
                f"Commerce API request failed: {method} {path}: {str(e)}",
                extra={"path": path, "method": method}
            )
            raise UpstreamUnavailableError(
                f"Could not reach commerce API: {e.__class__.__name__}",
                original_exception=e
            )

        if response.is_error:
            body = _response_body(response)
            logger.error(
                f"Commerce API returned {response.status_code} for {method} {path}",
                extra={"path": path, "method": method, "status_code": response.status_code, "upstream_body": body}
            )
            raise UpstreamUnavailableError(
                "Commerce API returned an error",
                upstream_status=response.status_code,
                upstream_body=body
            )

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Commerce API returned a non-JSON body for {method} {path}")
            raise UpstreamUnavailableError("Commerce API returned an invalid body", original_exception=e)

    async def fetch_orders(
        self,
        per_page: int,
        status: Optional[str] = None,
        page: int = 1
    ) -> List[Dict[str, Any]]:
        params: Dict[str, Any] = {"per_page": per_page, "page": page}
        if status:
            params["status"] = status
        data = await self._request("GET", "orders", params=params)
        return data if isinstance(data, list) else []

    async def fetch_order(self, order_id: str) -> Dict[str, Any]:
        try:
            return await self._request("GET", f"orders/{order_id}")
        except UpstreamUnavailableError as e:
            if e.upstream_status == 404:
                raise NotFoundError("Order", order_id)
            raise

    async def update_order(self, order_id: str, patch: Dict[str, Any]) -> Dict[str, Any]:
        return await self._request("PUT", f"orders/{order_id}", json=patch)

    async def fetch_products(self, per_page: int, page: int = 1) -> List[Dict[str, Any]]:
        data = await self._request("GET", "products", params={"per_page": per_page, "page": page})
        return data if isinstance(data, list) else []

    async def is_available(self) -> APIStatus:
        if self._client is None:
            return APIStatus.UNKNOWN
        try:
            await self._request("GET", "orders", params={"per_page": 1})
            return APIStatus.AVAILABLE
        except UpstreamUnavailableError as e:
            if e.upstream_status is not None and e.upstream_status < 500:
                return APIStatus.DEGRADED
            return APIStatus.UNAVAILABLE

    async def close(self) -> None:
        if self._client is not None:
            await self._client.aclose()


def _response_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text
