"""
Orders API - FastAPI Application Entry Point.

Customers, products and orders over an async SQLAlchemy store. The order
workflow (creation, listing, status transitions) lives in
orders_api.services.order_service; this module only wires the HTTP surface.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from orders_api.config import get_settings
from orders_api.database import engine, async_session_maker, Base
from orders_api.limiter import limiter
from orders_api.logging_config import configure_logging
from orders_api.middleware import CorrelationIdMiddleware, ExceptionHandlingMiddleware
from orders_api.routers import customers, health, orders, products
from orders_api.seed import seed_database

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup: Create database tables (schema migrations are managed outside this service)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables created")

    if settings.SEED_DATABASE:
        await seed_database(async_session_maker)

    yield

    # Shutdown: Cleanup
    await engine.dispose()
    logger.info("Database connection closed")


def create_app() -> FastAPI:
    configure_logging(settings.LOG_LEVEL)

    app = FastAPI(
        title=settings.APP_NAME,
        description="Customers, products and orders with optimistic concurrency on order status",
        version="1.0.0",
        lifespan=lifespan,
    )

    # Rate Limiting
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Middleware added last runs first: correlation id wraps the exception handler
    app.add_middleware(ExceptionHandlingMiddleware)
    app.add_middleware(CorrelationIdMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["ETag", "Location", "X-Correlation-ID"],
    )

    # Include Routers
    app.include_router(orders.router, prefix="/api/v1/orders", tags=["Orders"])
    app.include_router(customers.router, prefix="/api/v1/customers", tags=["Customers"])
    app.include_router(products.router, prefix="/api/v1/products", tags=["Products"])
    app.include_router(health.router, prefix="/health", tags=["Health"])

    @app.get("/")
    async def root():
        """Root endpoint with system info."""
        return {"name": settings.APP_NAME, "status": "operational"}

    return app


app = create_app()
