from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Path

from order_relay.api.dependencies import get_customer_service
from order_relay.services.customer_service import CustomerService

customers_router = APIRouter()


@customers_router.get(
    "",
    summary="List customers",
    description="Customers derived from recent orders, one per phone number or email."
)
async def list_customers(
    customer_service: CustomerService = Depends(get_customer_service)
) -> List[Dict[str, Any]]:
    customers = await customer_service.list_customers()
    return [customer_service.format_customer_data(c) for c in customers]


@customers_router.get(
    "/orders/{identity}",
    summary="Orders for one customer",
    description="Orders whose billing email or phone matches, newest first."
)
async def customer_orders(
    identity: str = Path(...),
    customer_service: CustomerService = Depends(get_customer_service)
) -> List[Dict[str, Any]]:
    return await customer_service.orders_for(identity)
