from typing import Any, Dict, List

from fastapi import APIRouter, Body, Depends, Path

from order_relay.api.dependencies import get_order_service
from order_relay.services.order_service import OrderService

orders_router = APIRouter()


@orders_router.get("", summary="List recent orders")
async def list_orders(
    order_service: OrderService = Depends(get_order_service)
) -> List[Dict[str, Any]]:
    return await order_service.list_orders()


@orders_router.get("/{order_id}", summary="Get one order")
async def get_order(
    order_id: str = Path(...),
    order_service: OrderService = Depends(get_order_service)
) -> Dict[str, Any]:
    return await order_service.get_order(order_id)


@orders_router.put("/{order_id}", summary="Update an order")
async def update_order(
    order_id: str = Path(...),
    patch: Dict[str, Any] = Body(...),
    order_service: OrderService = Depends(get_order_service)
) -> Dict[str, Any]:
    """Forwards the body unchanged as a partial update."""
    return await order_service.update_order(order_id, patch)
