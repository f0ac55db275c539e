import json
from typing import List, Optional, Sequence

import redis
from redis.exceptions import RedisError

from order_relay.adapters.interfaces.token_store import TokenStore, tokens_from_json, tokens_to_json
from order_relay.core.exceptions import PersistenceError
from order_relay.core.logging import get_logger
from order_relay.domain.models.device import DeviceToken

logger = get_logger(__name__)


class RedisTokenStore(TokenStore):
    """Keeps the device registry as one JSON array under a single Redis key."""

    def __init__(self, client: redis.Redis, key: str):
        self.client = client
        self.key = key

    @classmethod
    def from_settings(cls, settings, client: Optional[redis.Redis] = None) -> "RedisTokenStore":
        if client is None:
            connection_kwargs = {
                "host": settings.REDIS_HOST,
                "port": settings.REDIS_PORT,
                "db": settings.REDIS_DB,
            }
            if settings.REDIS_PASSWORD:
                connection_kwargs["password"] = settings.REDIS_PASSWORD
            client = redis.Redis(**connection_kwargs)
        return cls(client, settings.DEVICE_STORE_REDIS_KEY)

    def load(self) -> List[DeviceToken]:
        try:
            raw = self.client.get(self.key)
        except RedisError as e:
            raise PersistenceError(f"Redis error reading {self.key}: {str(e)}", original_exception=e)

        if raw is None:
            logger.info(f"No device tokens stored under {self.key}; starting empty")
            return []

        try:
            return tokens_from_json(json.loads(raw), self.key)
        except ValueError as e:
            raise PersistenceError(f"Stored tokens under {self.key} are malformed: {str(e)}", original_exception=e)

    def save(self, tokens: Sequence[DeviceToken]) -> None:
        try:
            self.client.set(self.key, json.dumps(tokens_to_json(tokens)))
        except RedisError as e:
            raise PersistenceError(f"Redis error writing {self.key}: {str(e)}", original_exception=e)
