from typing import Any, Dict

from fastapi import APIRouter, Depends, Request

from order_relay.api.dependencies import get_dispatcher, get_registry, read_payload
from order_relay.core.exceptions import InvalidInputError
from order_relay.core.logging import get_logger
from order_relay.domain.models.device import DeviceToken, NotificationEvent
from order_relay.services.device_registry import DeviceTokenRegistry
from order_relay.services.notification_dispatcher import NotificationDispatcher

devices_router = APIRouter()
logger = get_logger(__name__)

TEST_EVENT = NotificationEvent(
    title="Test Notification",
    body="Your WooCommerce app is working!",
)


@devices_router.post("/save-token", summary="Register a device for push notifications")
async def save_token(
    request: Request,
    registry: DeviceTokenRegistry = Depends(get_registry)
) -> Dict[str, Any]:
    payload = await read_payload(request)
    if not isinstance(payload, dict):
        raise InvalidInputError("No body received")

    logger.info("Incoming token payload", extra={"fields": sorted(payload)})

    token = DeviceToken.from_dict(payload)
    if token.is_empty():
        raise InvalidInputError("No token received", field="expoPushToken")

    result = registry.register(token)
    return {"success": True, "inserted": result.inserted}


@devices_router.get("/test-notification", summary="Send a test push to every device")
async def test_notification(
    registry: DeviceTokenRegistry = Depends(get_registry),
    dispatcher: NotificationDispatcher = Depends(get_dispatcher)
) -> Dict[str, Any]:
    result = await dispatcher.notify_all(registry.list_all(), TEST_EVENT)
    return result.to_dict()
