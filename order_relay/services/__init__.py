"""
Services package for Order Relay.

Service classes coordinate between domain models and the external
adaptors. The customer aggregation is a pure function over a batch of
orders; the device registry is the only shared mutable state.
"""

from order_relay.services.customer_service import CustomerService, aggregate, find_by_identity, identity_key
from order_relay.services.device_registry import DeviceTokenRegistry, RegistrationResult
from order_relay.services.notification_dispatcher import DispatchResult, NotificationDispatcher
from order_relay.services.order_events import OrderEventHandler, WebhookAck
from order_relay.services.order_service import OrderService

__all__ = [
    "CustomerService",
    "aggregate",
    "find_by_identity",
    "identity_key",
    "DeviceTokenRegistry",
    "RegistrationResult",
    "DispatchResult",
    "NotificationDispatcher",
    "OrderEventHandler",
    "WebhookAck",
    "OrderService",
]
