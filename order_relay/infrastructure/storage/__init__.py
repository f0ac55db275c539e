"""
Durable stores for the device registry.
"""

from order_relay.core.config import Settings
from order_relay.core.exceptions import AdaptorConfigError
from order_relay.infrastructure.storage.json_file_store import JsonFileTokenStore
from order_relay.infrastructure.storage.redis_store import RedisTokenStore


def create_token_store(settings: Settings):
    """Build the store named by ``settings.DEVICE_STORE_BACKEND``."""
    backend = settings.DEVICE_STORE_BACKEND.lower()
    if backend == "file":
        return JsonFileTokenStore(settings.TOKENS_FILE)
    if backend == "redis":
        return RedisTokenStore.from_settings(settings)
    raise AdaptorConfigError(f"Unknown device store backend '{settings.DEVICE_STORE_BACKEND}'")


__all__ = ["JsonFileTokenStore", "RedisTokenStore", "create_token_store"]
