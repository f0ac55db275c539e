import asyncio
import base64
import json

import httpx
import pytest

from order_relay.adapters.implementations.woocommerce import WooCommerceAdaptor
from order_relay.adapters.interfaces.order_source import APIStatus
from order_relay.core.exceptions import NotFoundError, UpstreamUnavailableError


def _adaptor(handler, **kwargs):
    options = {"url": "https://shop.example.com/", "consumer_key": "ck_1", "consumer_secret": "cs_1"}
    options.update(kwargs)
    return WooCommerceAdaptor(transport=httpx.MockTransport(handler), **options)


def _run(adaptor, coro_factory):
    async def scenario():
        try:
            return await coro_factory(adaptor)
        finally:
            await adaptor.close()
    return asyncio.run(scenario())


class TestRequests:
    def test_fetch_orders_uses_query_string_auth_and_filters(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=[{"id": 1}])

        orders = _run(_adaptor(handler), lambda a: a.fetch_orders(per_page=100, status="any"))

        assert orders == [{"id": 1}]
        request = seen[0]
        assert request.method == "GET"
        assert request.url.path == "/wp-json/wc/v3/orders"
        assert request.url.params["consumer_key"] == "ck_1"
        assert request.url.params["consumer_secret"] == "cs_1"
        assert request.url.params["per_page"] == "100"
        assert request.url.params["status"] == "any"

    def test_basic_auth_when_query_string_auth_disabled(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json=[])

        _run(_adaptor(handler, query_string_auth=False), lambda a: a.fetch_products(per_page=100))

        request = seen[0]
        assert "consumer_key" not in request.url.params
        expected = base64.b64encode(b"ck_1:cs_1").decode()
        assert request.headers["Authorization"] == f"Basic {expected}"
        assert request.url.path == "/wp-json/wc/v3/products"

    def test_update_order_sends_patch_as_json(self):
        seen = []

        def handler(request):
            seen.append(request)
            return httpx.Response(200, json={"id": 5, "status": "completed"})

        updated = _run(_adaptor(handler), lambda a: a.update_order("5", {"status": "completed"}))

        assert updated == {"id": 5, "status": "completed"}
        assert seen[0].method == "PUT"
        assert seen[0].url.path == "/wp-json/wc/v3/orders/5"
        assert json.loads(seen[0].content) == {"status": "completed"}

    def test_non_list_page_reads_as_empty(self):
        orders = _run(_adaptor(lambda r: httpx.Response(200, json={"unexpected": True})),
                      lambda a: a.fetch_orders(per_page=10))
        assert orders == []


class TestErrors:
    def test_error_status_raises_upstream_unavailable(self):
        def handler(request):
            return httpx.Response(401, json={"code": "woocommerce_rest_cannot_view"})

        with pytest.raises(UpstreamUnavailableError) as exc_info:
            _run(_adaptor(handler), lambda a: a.fetch_orders(per_page=50))

        assert exc_info.value.upstream_status == 401
        assert exc_info.value.upstream_body == {"code": "woocommerce_rest_cannot_view"}
        assert exc_info.value.status_code == 502

    def test_missing_order_raises_not_found(self):
        def handler(request):
            return httpx.Response(404, json={"code": "woocommerce_rest_shop_order_invalid_id"})

        with pytest.raises(NotFoundError):
            _run(_adaptor(handler), lambda a: a.fetch_order("404"))

    def test_transport_error_raises_upstream_unavailable(self):
        def handler(request):
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(UpstreamUnavailableError):
            _run(_adaptor(handler), lambda a: a.fetch_products(per_page=100))

    def test_non_json_body_raises_upstream_unavailable(self):
        with pytest.raises(UpstreamUnavailableError):
            _run(_adaptor(lambda r: httpx.Response(200, text="<html>")), lambda a: a.fetch_orders(per_page=1))

    def test_unconfigured_url_fails_on_use(self):
        adaptor = WooCommerceAdaptor(url="", consumer_key="", consumer_secret="")

        with pytest.raises(UpstreamUnavailableError, match="not configured"):
            _run(adaptor, lambda a: a.fetch_orders(per_page=1))


class TestAvailability:
    @pytest.mark.parametrize(
        "status_code, expected",
        [(200, APIStatus.AVAILABLE), (401, APIStatus.DEGRADED), (503, APIStatus.UNAVAILABLE)],
    )
    def test_status_mapping(self, status_code, expected):
        adaptor = _adaptor(lambda r: httpx.Response(status_code, json=[]))
        assert _run(adaptor, lambda a: a.is_available()) == expected

    def test_unconfigured_is_unknown(self):
        adaptor = WooCommerceAdaptor(url="", consumer_key="", consumer_secret="")
        assert _run(adaptor, lambda a: a.is_available()) == APIStatus.UNKNOWN


def test_from_settings(settings):
    settings.WOO_URL = "https://shop.example.com"
    settings.WOO_API_VERSION = "wc/v2"
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=[])

    adaptor = WooCommerceAdaptor.from_settings(settings, transport=httpx.MockTransport(handler))
    _run(adaptor, lambda a: a.fetch_orders(per_page=1))

    assert seen[0].url.path == "/wp-json/wc/v2/orders"
