"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from micr_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from micr_gateway.api.v1 import institutions, micr, transit
from micr_gateway.infrastructure.observability.logging import setup_logging
from micr_gateway.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="MICR Gateway",
        description="Canadian MICR parsing, transit validation and institution risk service",
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
    app.include_router(micr.router, prefix="/v1", tags=["micr"])
    app.include_router(transit.router, prefix="/v1", tags=["transit"])
    app.include_router(institutions.router, prefix="/v1", tags=["institutions"])

    return app


app = create_app()
