"""
Pricing Microservice
Static price lookups and percent coupon validation
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import os
import sys

import uvicorn

# Add the repository root (for shared/) to the path when run from a checkout
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../../.."))

from shared.core import (
    ServiceHealth,
    setup_logging,
    RequestLoggingMiddleware,
    get_logger,
    install_error_handlers,
)
from pricing_service.core_settings import get_settings
from pricing_service.api.routes import router as pricing_router
from pricing_service.domain import catalog

settings = get_settings()
SERVICE_NAME = "pricing-coupons-service"
SERVICE_VERSION = settings.SERVICE_VERSION
SERVICE_DESCRIPTION = "Price lookup and coupon validation microservice"
API_PREFIX = "/api/pricing"

setup_logging(
    service_name=SERVICE_NAME,
    level=settings.LOG_LEVEL,
    fmt=settings.LOG_FORMAT
)

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(
        f"Starting {SERVICE_NAME} version {SERVICE_VERSION} "
        f"({len(catalog.PRICES)} prices, {len(catalog.COUPONS)} coupons)"
    )
    yield
    logger.info(f"Shutting down {SERVICE_NAME}")


app = FastAPI(
    title=SERVICE_NAME,
    description=SERVICE_DESCRIPTION,
    version=SERVICE_VERSION,
    lifespan=lifespan,
    docs_url=f"{API_PREFIX}/docs",
    redoc_url=f"{API_PREFIX}/redoc",
    openapi_url=f"{API_PREFIX}/openapi.json"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)
install_error_handlers(app)

health_service = ServiceHealth(SERVICE_NAME, SERVICE_VERSION, prefix=API_PREFIX)
app.include_router(health_service.create_health_router())
app.include_router(pricing_router)


@app.get("/")
async def root():
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "status": "running",
        "docs": f"{API_PREFIX}/docs"
    }


def run() -> None:
    uvicorn.run(app, host="0.0.0.0", port=settings.listen_port, access_log=False)


if __name__ == "__main__":
    run()
