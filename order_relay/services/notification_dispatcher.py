from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from order_relay.adapters.interfaces.push_provider import PushProvider
from order_relay.core.exceptions import UpstreamUnavailableError
from order_relay.core.logging import get_logger
from order_relay.domain.models.device import DeviceToken, NotificationEvent, NotificationMessage

logger = get_logger(__name__)


@dataclass
class DispatchResult:
    """Outcome of one fan-out; failed provider batches are counted, not raised."""

    messages: int = 0
    unreachable: int = 0
    batches_sent: int = 0
    batches_failed: int = 0
    tickets: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": True,
            "messages": self.messages,
            "unreachable": self.unreachable,
            "batchesSent": self.batches_sent,
            "batchesFailed": self.batches_failed,
        }


class NotificationDispatcher:
    """
    Builds one message per reachable device and submits them in
    provider-sized batches, one after another.

    A provider error on one batch is logged and the remaining batches are
    still sent. Any other exception aborts the dispatch.
    """

    def __init__(self, provider: PushProvider, sound: Optional[str] = "default"):
        self.provider = provider
        self.sound = sound

    def build_messages(
        self,
        endpoints: Sequence[DeviceToken],
        event: NotificationEvent
    ) -> List[NotificationMessage]:
        messages = []
        for endpoint in endpoints:
            address = self.provider.address_for(endpoint)
            if not address:
                continue
            messages.append(NotificationMessage(
                to=address,
                title=event.title,
                body=event.body,
                sound=self.sound,
                data=dict(event.data),
            ))
        return messages

    async def notify_all(
        self,
        endpoints: Sequence[DeviceToken],
        event: NotificationEvent
    ) -> DispatchResult:
        if not isinstance(event, NotificationEvent):
            raise TypeError(f"expected NotificationEvent, got {type(event).__name__}")

        messages = self.build_messages(endpoints, event)
        result = DispatchResult(messages=len(messages), unreachable=len(endpoints) - len(messages))

        if result.unreachable:
            # fcmToken-only devices have no address this provider can use
            logger.info(f"{result.unreachable} registered devices are not reachable by the push provider")

        for index, batch in enumerate(self.provider.chunk(messages), start=1):
            try:
                tickets = await self.provider.send(batch)
            except UpstreamUnavailableError as e:
                result.batches_failed += 1
                logger.error(
                    f"Push batch {index} ({len(batch)} messages) failed: {e.detail}",
                    extra={"upstream_status": e.upstream_status, "upstream_body": e.upstream_body}
                )
                continue

            result.batches_sent += 1
            result.tickets.extend(tickets or [])

        logger.info(
            f"Dispatched '{event.title}' to {result.messages} devices",
            extra={"batches_sent": result.batches_sent, "batches_failed": result.batches_failed}
        )
        return result
