"""FastAPI application factory"""

from contextlib import asynccontextmanager
from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from invoice_gateway.api.middleware import RequestIDMiddleware, MetricsMiddleware
from invoice_gateway.api.v1 import invoices, payments
from invoice_gateway.infrastructure.database.session import init_db
from invoice_gateway.infrastructure.observability.logging import setup_logging
from invoice_gateway.config import settings

setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Invoice Gateway",
        description="Invoice payment validation and status service",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    # Last added runs first
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(invoices.router, prefix="/v1", tags=["invoices"])
    app.include_router(payments.router, prefix="/v1", tags=["payments"])

    return app


app = create_app()
