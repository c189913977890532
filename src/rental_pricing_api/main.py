"""FastAPI application exposing the rental pricing engine over HTTP.

This package provides REST endpoints for:
- Health checks
- Stay quotes, nightly prices and channel markup
- Additional costs, extras and city tax
- Payment split
- Calendar pricing period reconciliation

The engine is stateless; every request carries the listing data it needs.
"""

from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from mangum import Mangum

from rental_pricing import __version__
from rental_pricing.config import get_settings
from rental_pricing.utils.logging import configure_logging, get_logger
from rental_pricing_api.exceptions import register_exception_handlers
from rental_pricing_api.middleware.correlation import CorrelationIdMiddleware
from rental_pricing_api.routes import (
    costs_router,
    periods_router,
    pricing_router,
    split_router,
)

settings = get_settings()
configure_logging(settings.log_level)
logger = get_logger(__name__)

app = FastAPI(
    title="Rental Pricing API",
    description="Pricing engine for vacation rentals and experiences",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(CorrelationIdMiddleware)

# Register exception handlers for consistent error responses
register_exception_handlers(app)

app.include_router(pricing_router, prefix="/api")
app.include_router(costs_router, prefix="/api")
app.include_router(split_router, prefix="/api")
app.include_router(periods_router, prefix="/api")


@app.get("/api/ping")
async def ping() -> dict[str, Any]:
    """Health check endpoint."""
    return {
        "status": "ok",
        "timestamp": datetime.now(UTC).isoformat(),
        "service": "rental-pricing",
        "version": __version__,
    }


# Lambda handler - Mangum wraps FastAPI for AWS Lambda + API Gateway
handler = Mangum(app, lifespan="off")


def run_server(host: str = "0.0.0.0", port: int = 8080, reload: bool = True) -> None:
    """Run the FastAPI server.

    Args:
        host: Host to bind to (default: 0.0.0.0)
        port: Port to listen on (default: 8080)
        reload: Enable hot reload for development (default: True)
    """
    import uvicorn

    logger.info("Starting pricing API on %s:%d", host, port)
    if reload:
        # Use string reference for reload mode (uvicorn requirement)
        uvicorn.run(
            "rental_pricing_api.main:app",
            host=host,
            port=port,
            reload=True,
            reload_dirs=["src"],
        )
    else:
        uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    run_server()
