from typing import Any, Dict

from fastapi import APIRouter, Depends, Request, status

from order_relay.api.dependencies import get_event_handler, read_payload
from order_relay.services.order_events import OrderEventHandler

webhooks_router = APIRouter()


@webhooks_router.post(
    "/order-created",
    summary="New-order webhook",
    description="Always acknowledged with 200 so the sender does not redeliver.",
    status_code=status.HTTP_200_OK
)
async def order_created(
    request: Request,
    handler: OrderEventHandler = Depends(get_event_handler)
) -> Dict[str, Any]:
    payload = await read_payload(request)
    ack = await handler.handle(payload if payload is not None else {})
    return ack.to_dict()
