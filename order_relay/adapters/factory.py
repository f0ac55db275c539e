import logging
from typing import Any, Optional

from order_relay.adapters.implementations import (
    ORDER_SOURCE_IMPLEMENTATIONS,
    PUSH_PROVIDER_IMPLEMENTATIONS,
)
from order_relay.adapters.interfaces.order_source import OrderSourceInterface
from order_relay.adapters.interfaces.push_provider import PushProvider
from order_relay.adapters.registry import AdaptorRegistry
from order_relay.core.config import Settings
from order_relay.core.exceptions import AdaptorConfigError

logger = logging.getLogger(__name__)


def default_order_sources() -> AdaptorRegistry[OrderSourceInterface]:
    registry = AdaptorRegistry(OrderSourceInterface)
    for name, adaptor_class in ORDER_SOURCE_IMPLEMENTATIONS.items():
        registry.register(name, adaptor_class)
    return registry


def default_push_providers() -> AdaptorRegistry[PushProvider]:
    registry = AdaptorRegistry(PushProvider)
    for name, provider_class in PUSH_PROVIDER_IMPLEMENTATIONS.items():
        registry.register(name, provider_class)
    return registry


class AdaptorFactory:
    """
    Builds the configured order source and push provider.

    Implementations are looked up by the ``COMMERCE_PLATFORM`` and
    ``PUSH_PROVIDER`` settings and constructed through their
    ``from_settings`` classmethod.
    """

    def __init__(
        self,
        order_sources: Optional[AdaptorRegistry[OrderSourceInterface]] = None,
        push_providers: Optional[AdaptorRegistry[PushProvider]] = None
    ):
        self.order_sources = order_sources or default_order_sources()
        self.push_providers = push_providers or default_push_providers()

    def create_order_source(self, settings: Settings, **kwargs: Any) -> OrderSourceInterface:
        """
        Create the order source named by ``settings.COMMERCE_PLATFORM``.

        Raises:
            AdaptorConfigError: If no adaptor is registered under that name
        """
        return self._create(self.order_sources, settings.COMMERCE_PLATFORM, settings, **kwargs)

    def create_push_provider(self, settings: Settings, **kwargs: Any) -> PushProvider:
        """
        Create the push provider named by ``settings.PUSH_PROVIDER``.

        Raises:
            AdaptorConfigError: If no provider is registered under that name
        """
        return self._create(self.push_providers, settings.PUSH_PROVIDER, settings, **kwargs)

    def _create(self, registry: AdaptorRegistry, name: str, settings: Settings, **kwargs: Any):
        if not registry.is_registered(name):
            available = ", ".join(registry.list()) or "none"
            raise AdaptorConfigError(f"Unknown adaptor '{name}' (available: {available})")

        adaptor = registry.get(name).from_settings(settings, **kwargs)
        logger.info(f"Created {name} adaptor")
        return adaptor
