from abc import ABC, abstractmethod
from typing import Any, List, Sequence

from order_relay.core.logging import get_logger
from order_relay.domain.models.device import DeviceToken

logger = get_logger(__name__)


class TokenStore(ABC):
    """
    Durable home of the device registry.

    ``save`` always receives the complete current set and replaces what
    was stored before.
    """

    @abstractmethod
    def load(self) -> List[DeviceToken]:
        """
        Read the persisted set.

        Returns:
            List[DeviceToken]: Stored tokens; empty when nothing is stored.

        Raises:
            PersistenceError: If stored data exists but cannot be read or parsed.
        """
        pass

    @abstractmethod
    def save(self, tokens: Sequence[DeviceToken]) -> None:
        """
        Replace the persisted set with ``tokens``.

        Raises:
            PersistenceError: If the write fails.
        """
        pass


def tokens_from_json(data: Any, source: str) -> List[DeviceToken]:
    """
    Decode a stored JSON array of token objects.

    Entries that are not objects or carry no token are skipped.

    Raises:
        ValueError: If the top level is not an array.
    """
    if not isinstance(data, list):
        raise ValueError(f"expected a JSON array in {source}, got {type(data).__name__}")

    tokens = []
    for index, entry in enumerate(data):
        token = DeviceToken.from_dict(entry) if isinstance(entry, dict) else None
        if token is None or token.is_empty():
            logger.warning(f"Skipping malformed device entry #{index} in {source}")
            continue
        tokens.append(token)
    return tokens


def tokens_to_json(tokens: Sequence[DeviceToken]) -> List[dict]:
    return [token.to_dict() for token in tokens]
