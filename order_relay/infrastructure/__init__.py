"""Infrastructure layer for Order Relay."""

from order_relay.infrastructure.storage import JsonFileTokenStore, RedisTokenStore, create_token_store

__all__ = ["JsonFileTokenStore", "RedisTokenStore", "create_token_store"]
