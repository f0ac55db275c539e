import pytest

from order_relay.adapters.factory import AdaptorFactory
from order_relay.adapters.implementations import ExpoPushProvider, WooCommerceAdaptor
from order_relay.adapters.interfaces.order_source import OrderSourceInterface
from order_relay.adapters.registry import AdaptorRegistry
from order_relay.core.exceptions import AdaptorConfigError


class TestAdaptorRegistry:
    def test_register_and_lookup_is_case_insensitive(self):
        registry = AdaptorRegistry(OrderSourceInterface)
        registry.register("WooCommerce", WooCommerceAdaptor)

        assert registry.get("woocommerce") is WooCommerceAdaptor
        assert registry.is_registered("WOOCOMMERCE")
        assert registry.list() == ["woocommerce"]

    def test_rejects_duplicates_and_wrong_types(self):
        registry = AdaptorRegistry(OrderSourceInterface)
        registry.register("woocommerce", WooCommerceAdaptor)

        with pytest.raises(ValueError):
            registry.register("woocommerce", WooCommerceAdaptor)
        with pytest.raises(ValueError):
            registry.register("expo", ExpoPushProvider)
        with pytest.raises(ValueError):
            registry.register("", WooCommerceAdaptor)

    def test_unknown_name_is_not_registered(self):
        registry = AdaptorRegistry(OrderSourceInterface)
        registry.register("woocommerce", WooCommerceAdaptor)

        assert not registry.is_registered("shopify")
        assert not registry.is_registered(None)
        assert registry.get("shopify") is None


class TestAdaptorFactory:
    def test_builds_configured_defaults(self, settings):
        factory = AdaptorFactory()
        settings.PUSH_BATCH_SIZE = 50

        assert isinstance(factory.create_order_source(settings), WooCommerceAdaptor)
        provider = factory.create_push_provider(settings)
        assert isinstance(provider, ExpoPushProvider)
        assert provider.max_batch_size == 50

    def test_unknown_names_raise_config_error(self, settings):
        settings.COMMERCE_PLATFORM = "shopify"
        settings.PUSH_PROVIDER = "apns"
        factory = AdaptorFactory()

        with pytest.raises(AdaptorConfigError, match="shopify"):
            factory.create_order_source(settings)
        with pytest.raises(AdaptorConfigError, match="apns"):
            factory.create_push_provider(settings)

    def test_empty_registry_lists_no_alternatives(self, settings):
        factory = AdaptorFactory(order_sources=AdaptorRegistry(OrderSourceInterface))

        with pytest.raises(AdaptorConfigError, match=r"available: none"):
            factory.create_order_source(settings)
