from order_relay.domain.models.customer import CustomerProfile
from order_relay.domain.models.device import DeviceToken, NotificationEvent, NotificationMessage

__all__ = [
    "CustomerProfile",
    "DeviceToken",
    "NotificationEvent",
    "NotificationMessage",
]
