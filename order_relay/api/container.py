from dataclasses import dataclass
from typing import Optional

from order_relay.adapters.factory import AdaptorFactory
from order_relay.adapters.interfaces.order_source import OrderSourceInterface
from order_relay.adapters.interfaces.push_provider import PushProvider
from order_relay.adapters.interfaces.token_store import TokenStore
from order_relay.core.config import Settings
from order_relay.infrastructure.storage import create_token_store
from order_relay.services.customer_service import CustomerService
from order_relay.services.device_registry import DeviceTokenRegistry
from order_relay.services.notification_dispatcher import NotificationDispatcher
from order_relay.services.order_events import OrderEventHandler
from order_relay.services.order_service import OrderService


@dataclass
class ServiceContainer:
    """Everything a request handler needs, built once per application."""

    settings: Settings
    order_source: OrderSourceInterface
    push_provider: PushProvider
    registry: DeviceTokenRegistry
    dispatcher: NotificationDispatcher
    order_service: OrderService
    customer_service: CustomerService
    event_handler: OrderEventHandler

    async def aclose(self) -> None:
        await self.order_source.close()
        await self.push_provider.close()


def build_container(
    settings: Settings,
    order_source: Optional[OrderSourceInterface] = None,
    push_provider: Optional[PushProvider] = None,
    token_store: Optional[TokenStore] = None,
    factory: Optional[AdaptorFactory] = None
) -> ServiceContainer:
    """
    Wire the services from settings. Any collaborator passed in explicitly
    is used instead of the configured one.
    """
    factory = factory or AdaptorFactory()
    if order_source is None:
        order_source = factory.create_order_source(settings)
    if push_provider is None:
        push_provider = factory.create_push_provider(settings)
    if token_store is None:
        token_store = create_token_store(settings)
    registry = DeviceTokenRegistry(token_store)
    dispatcher = NotificationDispatcher(push_provider, sound=settings.PUSH_SOUND)

    return ServiceContainer(
        settings=settings,
        order_source=order_source,
        push_provider=push_provider,
        registry=registry,
        dispatcher=dispatcher,
        order_service=OrderService(
            order_source,
            orders_page_size=settings.ORDERS_PAGE_SIZE,
            products_page_size=settings.PRODUCTS_PAGE_SIZE,
        ),
        customer_service=CustomerService(
            order_source,
            page_size=settings.CUSTOMER_ORDERS_PAGE_SIZE,
            status=settings.CUSTOMER_ORDER_STATUS,
        ),
        event_handler=OrderEventHandler(
            registry,
            dispatcher,
            currency_symbol=settings.CURRENCY_SYMBOL,
        ),
    )
