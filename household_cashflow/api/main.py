"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from household_cashflow.api.middleware import MetricsMiddleware, RequestIDMiddleware
from household_cashflow.api.v1 import income, projection, safe_to_spend, strategies
from household_cashflow.config import settings
from household_cashflow.infrastructure.observability.logging import setup_logging

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Household Cashflow Engine",
        description="Balance projection, safe-to-spend and purchase strategy service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(projection.router, prefix="/v1", tags=["projection"])
    app.include_router(safe_to_spend.router, prefix="/v1", tags=["safe-to-spend"])
    app.include_router(strategies.router, prefix="/v1", tags=["strategies"])
    app.include_router(income.router, prefix="/v1", tags=["income"])

    return app


app = create_app()
