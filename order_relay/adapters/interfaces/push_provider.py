from abc import ABC, abstractmethod
from typing import Any, Dict, Iterator, List, Optional, Sequence

from order_relay.domain.models.device import DeviceToken, NotificationMessage


class PushProvider(ABC):
    """
    Abstract push notification provider.

    A provider reaches one address family of a ``DeviceToken`` and accepts
    at most ``max_batch_size`` messages per submission.
    """

    max_batch_size: int = 100

    @abstractmethod
    def address_for(self, token: DeviceToken) -> Optional[str]:
        """
        Returns the address this provider delivers to for ``token``, or
        None when the device is not reachable through this provider.
        """
        pass

    def chunk(self, messages: Sequence[NotificationMessage]) -> Iterator[List[NotificationMessage]]:
        """Splits messages into batches no larger than ``max_batch_size``."""
        size = self.max_batch_size
        for start in range(0, len(messages), size):
            yield list(messages[start:start + size])

    @abstractmethod
    async def send(self, batch: Sequence[NotificationMessage]) -> List[Dict[str, Any]]:
        """
        Submits one batch.

        Returns:
            List[Dict[str, Any]]: One provider ticket per message.

        Raises:
            UpstreamUnavailableError: If the provider rejects the batch or
                cannot be reached.
        """
        pass

    async def close(self) -> None:
        """Releases any held connections."""
        return None
