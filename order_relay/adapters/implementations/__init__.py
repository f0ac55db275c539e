"""
Concrete adaptors for commerce backends and push providers.
"""

from order_relay.adapters.implementations.woocommerce import WooCommerceAdaptor
from order_relay.adapters.implementations.expo import ExpoPushProvider

PLATFORM_WOOCOMMERCE = WooCommerceAdaptor.PLATFORM
PROVIDER_EXPO = ExpoPushProvider.PROVIDER

# Built-in implementations, keyed by the names used in settings
ORDER_SOURCE_IMPLEMENTATIONS = {
    PLATFORM_WOOCOMMERCE: WooCommerceAdaptor,
}

PUSH_PROVIDER_IMPLEMENTATIONS = {
    PROVIDER_EXPO: ExpoPushProvider,
}

__all__ = [
    "WooCommerceAdaptor",
    "ExpoPushProvider",
    "PLATFORM_WOOCOMMERCE",
    "PROVIDER_EXPO",
    "ORDER_SOURCE_IMPLEMENTATIONS",
    "PUSH_PROVIDER_IMPLEMENTATIONS",
]
