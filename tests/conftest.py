"""
Shared fixtures and fakes.

Environment defaults are set before anything imports ``order_relay`` so
the module-level application never touches a real store or backend.
"""
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import pytest

_TMP = Path(tempfile.mkdtemp(prefix="order-relay-tests-"))
os.environ.setdefault("TOKENS_FILE", str(_TMP / "tokens.json"))
os.environ.setdefault("WOO_URL", "")
os.environ.setdefault("ENABLE_STRUCTURED_LOGGING", "false")

from order_relay.adapters.interfaces.order_source import APIStatus, OrderSourceInterface  # noqa: E402
from order_relay.adapters.interfaces.push_provider import PushProvider  # noqa: E402
from order_relay.adapters.interfaces.token_store import TokenStore  # noqa: E402
from order_relay.core.config import Settings  # noqa: E402
from order_relay.core.exceptions import PersistenceError, UpstreamUnavailableError  # noqa: E402
from order_relay.domain.models.device import DeviceToken, NotificationMessage  # noqa: E402


def make_order(
    order_id: Any = 1,
    phone: Optional[str] = None,
    email: Optional[str] = None,
    total: Any = "0.00",
    date: Optional[str] = None,
    first_name: str = "Asha",
    last_name: str = "Rao",
    city: str = "Pune",
    state: str = "MH",
) -> Dict[str, Any]:
    return {
        "id": order_id,
        "total": total,
        "date_created": date,
        "billing": {
            "first_name": first_name,
            "last_name": last_name,
            "email": email,
            "phone": phone,
            "city": city,
            "state": state,
        },
        "line_items": [],
    }


class FakeOrderSource(OrderSourceInterface):
    def __init__(self, orders=None, products=None, error: Optional[Exception] = None):
        self.orders = orders or []
        self.products = products or []
        self.error = error
        self.calls: List[tuple] = []
        self.closed = False

    def _check(self):
        if self.error is not None:
            raise self.error

    async def fetch_orders(self, per_page, status=None, page=1):
        self.calls.append(("fetch_orders", per_page, status))
        self._check()
        return list(self.orders)

    async def fetch_order(self, order_id):
        self.calls.append(("fetch_order", order_id))
        self._check()
        for order in self.orders:
            if str(order.get("id")) == str(order_id):
                return order
        from order_relay.core.exceptions import NotFoundError
        raise NotFoundError("Order", order_id)

    async def update_order(self, order_id, patch):
        self.calls.append(("update_order", order_id, patch))
        self._check()
        return {"id": int(order_id), **patch}

    async def fetch_products(self, per_page, page=1):
        self.calls.append(("fetch_products", per_page))
        self._check()
        return list(self.products)

    async def is_available(self):
        return APIStatus.UNAVAILABLE if self.error else APIStatus.AVAILABLE

    async def close(self):
        self.closed = True


class FakePushProvider(PushProvider):
    """Records every batch; raises a provider error on the listed call numbers."""

    def __init__(self, max_batch_size: int = 100, fail_on: Sequence[int] = (), error: Optional[Exception] = None):
        self.max_batch_size = max_batch_size
        self.fail_on = set(fail_on)
        self.error = error
        self.batches: List[List[NotificationMessage]] = []

    def address_for(self, token: DeviceToken):
        return token.expo_push_token

    async def send(self, batch):
        self.batches.append(list(batch))
        if len(self.batches) in self.fail_on:
            raise self.error or UpstreamUnavailableError("Push service returned an error", upstream_status=503)
        return [{"status": "ok", "id": f"ticket-{len(self.batches)}-{i}"} for i in range(len(batch))]

    @property
    def sent_messages(self) -> List[NotificationMessage]:
        return [message for batch in self.batches for message in batch]


class MemoryTokenStore(TokenStore):
    def __init__(self, tokens=None, fail_load: bool = False, fail_save: bool = False):
        self.saved: List[List[DeviceToken]] = []
        self.tokens = list(tokens or [])
        self.fail_load = fail_load
        self.fail_save = fail_save

    def load(self):
        if self.fail_load:
            raise PersistenceError("store unreadable")
        return list(self.tokens)

    def save(self, tokens):
        if self.fail_save:
            raise PersistenceError("disk full")
        self.tokens = list(tokens)
        self.saved.append(list(tokens))


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        TOKENS_FILE=str(tmp_path / "tokens.json"),
        WOO_URL="",
        PUSH_BATCH_SIZE=100,
    )


@pytest.fixture
def order_source() -> FakeOrderSource:
    return FakeOrderSource()


@pytest.fixture
def push_provider() -> FakePushProvider:
    return FakePushProvider()


@pytest.fixture
def token_store() -> MemoryTokenStore:
    return MemoryTokenStore()


@pytest.fixture
def client(settings, order_source, push_provider, token_store):
    from fastapi.testclient import TestClient
    from order_relay.main import create_application

    app = create_application(
        settings=settings,
        order_source=order_source,
        push_provider=push_provider,
        token_store=token_store,
    )
    with TestClient(app) as test_client:
        yield test_client
