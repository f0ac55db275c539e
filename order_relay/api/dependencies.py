import json
from typing import Any, Optional

from fastapi import Request

from order_relay.api.container import ServiceContainer
from order_relay.core.logging import get_logger
from order_relay.services.customer_service import CustomerService
from order_relay.services.device_registry import DeviceTokenRegistry
from order_relay.services.notification_dispatcher import NotificationDispatcher
from order_relay.services.order_events import OrderEventHandler
from order_relay.services.order_service import OrderService

logger = get_logger(__name__)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


def get_order_service(request: Request) -> OrderService:
    return get_container(request).order_service


def get_customer_service(request: Request) -> CustomerService:
    return get_container(request).customer_service


def get_registry(request: Request) -> DeviceTokenRegistry:
    return get_container(request).registry


def get_dispatcher(request: Request) -> NotificationDispatcher:
    return get_container(request).dispatcher


def get_event_handler(request: Request) -> OrderEventHandler:
    return get_container(request).event_handler


async def read_payload(request: Request) -> Optional[Any]:
    """
    Read a JSON or form-encoded request body.

    Returns:
        The decoded body, or None when the body is empty or cannot be decoded.
    """
    content_type = request.headers.get("content-type", "").lower()

    if content_type.startswith(FORM_CONTENT_TYPES):
        try:
            form = await request.form()
        except Exception as e:
            logger.warning(f"Could not decode form body: {str(e)}")
            return None
        return {key: value for key, value in form.items() if isinstance(value, str)} or None

    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except ValueError:
        logger.warning("Request body is not valid JSON")
        return None
