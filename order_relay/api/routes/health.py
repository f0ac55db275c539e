from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from order_relay import __version__
from order_relay.api.container import ServiceContainer
from order_relay.api.dependencies import get_container

health_router = APIRouter()


class HealthStatus(BaseModel):
    """Basic health status response model."""
    status: str
    version: str = __version__
    service: str = "Order Relay"


class DependencyStatus(BaseModel):
    """Status of a single dependency."""
    name: str
    status: str
    details: Optional[Dict] = None


class DetailedHealthStatus(HealthStatus):
    """Detailed health status with dependency information."""
    dependencies: List[DependencyStatus]


@health_router.get(
    "",
    response_model=HealthStatus,
    status_code=status.HTTP_200_OK,
    summary="Basic health check"
)
async def get_health() -> HealthStatus:
    return HealthStatus(status="ok")


@health_router.get(
    "/detailed",
    response_model=DetailedHealthStatus,
    status_code=status.HTTP_200_OK,
    summary="Detailed health check",
    description="Includes commerce API reachability and the registered device count."
)
async def get_detailed_health(
    container: ServiceContainer = Depends(get_container)
) -> DetailedHealthStatus:
    commerce_status = await container.order_source.is_available()
    dependencies = [
        DependencyStatus(
            name="commerce_api",
            status=commerce_status.value,
            details={"platform": container.settings.COMMERCE_PLATFORM}
        ),
        DependencyStatus(
            name="device_registry",
            status="ok",
            details={
                "backend": container.settings.DEVICE_STORE_BACKEND,
                "devices": len(container.registry)
            }
        ),
    ]
    overall = "ok" if commerce_status.value == "available" else "degraded"
    return DetailedHealthStatus(status=overall, dependencies=dependencies)
