import asyncio

from order_relay.domain.models.device import DeviceToken
from order_relay.services.device_registry import DeviceTokenRegistry
from order_relay.services.notification_dispatcher import NotificationDispatcher
from order_relay.services.order_events import AckStatus, OrderEventHandler
from tests.conftest import FakePushProvider, MemoryTokenStore, make_order


def _handler(provider, devices=1):
    store = MemoryTokenStore(tokens=[DeviceToken(expo_push_token=f"ExponentPushToken[{i}]") for i in range(devices)])
    return OrderEventHandler(DeviceTokenRegistry(store), NotificationDispatcher(provider), currency_symbol="₹")


class TestOrderEventHandler:
    def test_payload_without_id_is_ignored(self):
        provider = FakePushProvider()
        handler = _handler(provider)

        for payload in ({}, {"webhook_id": "12"}, {"id": 0}, None, "text", []):
            ack = asyncio.run(handler.handle(payload))
            assert ack.status == AckStatus.IGNORED
            assert ack.to_dict()["success"] is True

        assert provider.batches == []

    def test_new_order_notifies_every_device(self):
        provider = FakePushProvider()
        handler = _handler(provider, devices=3)

        ack = asyncio.run(handler.handle(make_order(4521, total="1499.00", first_name="Meera")))

        assert ack.status == AckStatus.DISPATCHED
        assert ack.dispatch.messages == 3
        message = provider.sent_messages[0]
        assert message.title == "🛒 New Order #4521"
        assert message.body == "Amount ₹1499.00 from Meera"
        assert message.data == {"orderId": 4521}

    def test_missing_billing_degrades_to_empty_name(self):
        provider = FakePushProvider()
        ack = asyncio.run(_handler(provider).handle({"id": 9, "total": "5"}))

        assert ack.status == AckStatus.DISPATCHED
        assert provider.sent_messages[0].body == "Amount ₹5 from "

    def test_provider_failure_still_acknowledged(self):
        provider = FakePushProvider(fail_on={1})
        ack = asyncio.run(_handler(provider).handle(make_order(1)))

        assert ack.status == AckStatus.DISPATCHED
        assert ack.dispatch.batches_failed == 1

    def test_internal_failure_is_dropped(self):
        provider = FakePushProvider(fail_on={1}, error=RuntimeError("boom"))
        ack = asyncio.run(_handler(provider).handle(make_order(1)))

        assert ack.status == AckStatus.DROPPED
        assert ack.to_dict() == {"success": True, "status": "dropped"}
