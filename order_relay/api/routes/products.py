from typing import Any, Dict, List

from fastapi import APIRouter, Depends

from order_relay.api.dependencies import get_order_service
from order_relay.services.order_service import OrderService

products_router = APIRouter()


@products_router.get("", summary="List products")
async def list_products(
    order_service: OrderService = Depends(get_order_service)
) -> List[Dict[str, Any]]:
    return await order_service.list_products()
