from typing import Any, Dict, List, Optional, Sequence

import httpx

from order_relay.adapters.interfaces.push_provider import PushProvider
from order_relay.core.exceptions import UpstreamUnavailableError
from order_relay.core.logging import get_logger
from order_relay.domain.models.device import DeviceToken, NotificationMessage

logger = get_logger(__name__)

DEFAULT_PUSH_URL = "https://exp.host/--/api/v2/push/send"


class ExpoPushProvider(PushProvider):
    """Push provider for the Expo push service; reaches ``expoPushToken`` devices."""

    PROVIDER = "expo"

    def __init__(
        self,
        push_url: str = DEFAULT_PUSH_URL,
        access_token: Optional[str] = None,
        max_batch_size: int = 100,
        timeout: float = 10,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.push_url = push_url
        self.max_batch_size = max_batch_size

        headers = {
            "Accept": "application/json",
            "Accept-Encoding": "gzip, deflate",
            "Content-Type": "application/json",
        }
        if access_token:
            headers["Authorization"] = f"Bearer {access_token}"

        self._client = httpx.AsyncClient(timeout=timeout, headers=headers, transport=transport)

    @classmethod
    def from_settings(cls, settings, **kwargs) -> "ExpoPushProvider":
        return cls(
            push_url=settings.EXPO_PUSH_URL,
            access_token=settings.EXPO_ACCESS_TOKEN,
            max_batch_size=settings.PUSH_BATCH_SIZE,
            timeout=settings.DEFAULT_TIMEOUT,
            **kwargs
        )

    def address_for(self, token: DeviceToken) -> Optional[str]:
        return token.expo_push_token

    async def send(self, batch: Sequence[NotificationMessage]) -> List[Dict[str, Any]]:
        if not batch:
            return []

        payload = [message.to_dict() for message in batch]
        try:
            response = await self._client.post(self.push_url, json=payload)
        except httpx.RequestError as e:
            logger.error(f"Expo push request failed: {str(e)}")
            raise UpstreamUnavailableError(
                f"Could not reach push service: {e.__class__.__name__}",
                original_exception=e
            )

        try:
            body = response.json()
        except ValueError:
            body = response.text

        if response.is_error or (isinstance(body, dict) and body.get("errors")):
            logger.error(
                f"Expo push service rejected a batch of {len(batch)}",
                extra={"status_code": response.status_code, "upstream_body": body}
            )
            raise UpstreamUnavailableError(
                "Push service returned an error",
                upstream_status=response.status_code,
                upstream_body=body
            )

        tickets = body.get("data") if isinstance(body, dict) else None
        if not isinstance(tickets, list):
            tickets = []

        for message, ticket in zip(batch, tickets):
            if isinstance(ticket, dict) and ticket.get("status") == "error":
                logger.warning(
                    f"Expo rejected message to {message.to}: {ticket.get('message')}",
                    extra={"details": ticket.get("details")}
                )
        return tickets

    async def close(self) -> None:
        await self._client.aclose()
