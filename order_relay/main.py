import time
import uuid
from contextlib import asynccontextmanager
from typing import Callable, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from order_relay.adapters.interfaces.order_source import OrderSourceInterface
from order_relay.adapters.interfaces.push_provider import PushProvider
from order_relay.adapters.interfaces.token_store import TokenStore
from order_relay.api.container import build_container
from order_relay.api.error_handlers import register_exception_handlers
from order_relay.core.config import Settings, get_settings, load_env_file
from order_relay.core.logging import configure_logging, get_logger, set_correlation_id


# Load environment variables and configure logging early
load_env_file()
configure_logging()
logger = get_logger(__name__)


def create_application(
    settings: Optional[Settings] = None,
    order_source: Optional[OrderSourceInterface] = None,
    push_provider: Optional[PushProvider] = None,
    token_store: Optional[TokenStore] = None
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    The device registry is loaded here, once per process. Collaborators
    passed in replace the ones named in settings.

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = settings or get_settings()
    container = build_container(
        settings,
        order_source=order_source,
        push_provider=push_provider,
        token_store=token_store,
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Starting up Order Relay")
        yield
        logger.info("Shutting down Order Relay")
        await container.aclose()

    app = FastAPI(
        title=settings.PROJECT_NAME,
        openapi_url=f"{settings.API_PREFIX}/openapi.json",
        docs_url=f"{settings.API_PREFIX}/docs",
        redoc_url=f"{settings.API_PREFIX}/redoc",
        debug=settings.DEBUG,
        lifespan=lifespan,
    )
    app.state.container = container

    configure_middleware(app, settings)
    register_exception_handlers(app)
    register_routers(app, settings)

    return app


def configure_middleware(app: FastAPI, settings: Settings) -> None:
    """
    Configure middleware components for the FastAPI application.

    Args:
        app: FastAPI application instance
        settings: Application settings
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def add_correlation_id(request: Request, call_next: Callable):
        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
        set_correlation_id(correlation_id)

        start_time = time.time()
        response = await call_next(request)
        response.headers["X-Correlation-ID"] = correlation_id

        process_time = time.time() - start_time
        logger.info(
            "Request completed",
            extra={
                "request_path": request.url.path,
                "method": request.method,
                "status_code": response.status_code,
                "process_time_ms": round(process_time * 1000, 2)
            }
        )
        return response


def register_routers(app: FastAPI, settings: Settings) -> None:
    """
    Register API routers with the FastAPI application.

    Args:
        app: FastAPI application instance
        settings: Application settings
    """
    from order_relay.api.routes.customers import customers_router
    from order_relay.api.routes.devices import devices_router
    from order_relay.api.routes.health import health_router
    from order_relay.api.routes.orders import orders_router
    from order_relay.api.routes.products import products_router
    from order_relay.api.routes.webhooks import webhooks_router

    prefix = settings.API_PREFIX

    app.include_router(health_router, prefix=f"{prefix}/health", tags=["Health"])
    app.include_router(orders_router, prefix=f"{prefix}/orders", tags=["Orders"])
    app.include_router(products_router, prefix=f"{prefix}/products", tags=["Products"])
    app.include_router(customers_router, prefix=f"{prefix}/customers", tags=["Customers"])
    app.include_router(devices_router, prefix=prefix, tags=["Devices"])
    app.include_router(webhooks_router, prefix=prefix, tags=["Webhooks"])


app = create_application()


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run("order_relay.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
