from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional

from order_relay.core.logging import get_logger
from order_relay.domain.models.device import NotificationEvent
from order_relay.domain.models.order import billing_of, text_field
from order_relay.services.device_registry import DeviceTokenRegistry
from order_relay.services.notification_dispatcher import DispatchResult, NotificationDispatcher

logger = get_logger(__name__)


class AckStatus(str, Enum):
    DISPATCHED = "dispatched"
    IGNORED = "ignored"
    DROPPED = "dropped"


@dataclass
class WebhookAck:
    status: AckStatus
    dispatch: Optional[DispatchResult] = None

    def to_dict(self) -> dict:
        return {"success": True, "status": self.status.value}


class OrderEventHandler:
    """
    Turns new-order webhooks into push notifications.

    ``handle`` never raises: a payload without an order id is ignored and
    any failure while dispatching is logged and dropped, so the sender
    always gets an acknowledgment and never retries.
    """

    def __init__(
        self,
        registry: DeviceTokenRegistry,
        dispatcher: NotificationDispatcher,
        currency_symbol: str = "₹"
    ):
        self.registry = registry
        self.dispatcher = dispatcher
        self.currency_symbol = currency_symbol

    def build_event(self, order: Mapping[str, Any]) -> NotificationEvent:
        order_id = order.get("id")
        total = text_field(order, "total")
        first_name = text_field(billing_of(order), "first_name")
        return NotificationEvent(
            title=f"🛒 New Order #{order_id}",
            body=f"Amount {self.currency_symbol}{total} from {first_name}",
            data={"orderId": order_id},
        )

    async def handle(self, payload: Any) -> WebhookAck:
        if not isinstance(payload, Mapping) or not payload.get("id"):
            logger.info("Order webhook without an order id; acknowledging without dispatch")
            return WebhookAck(AckStatus.IGNORED)

        try:
            event = self.build_event(payload)
            logger.info(f"Order received #{payload.get('id')} | Amount: {payload.get('total')}")
            result = await self.dispatcher.notify_all(self.registry.list_all(), event)
        except Exception as e:
            logger.error(f"Order webhook dropped: {str(e)}", exc_info=True)
            return WebhookAck(AckStatus.DROPPED)

        return WebhookAck(AckStatus.DISPATCHED, dispatch=result)
