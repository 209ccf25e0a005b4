"""
Inventory Microservice
Per-store stock counts with reserve / confirm flow
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
import asyncio
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
from inventory_service.core_settings import get_settings
from inventory_service.api.routes import router as inventory_router
from inventory_service.infrastructure.db import engine, init_models

# Service configuration
settings = get_settings()
SERVICE_NAME = "inventory-service"
SERVICE_VERSION = settings.SERVICE_VERSION
SERVICE_DESCRIPTION = "Per-store stock tracking microservice"
API_PREFIX = "/api/inventory"

setup_logging(
    service_name=SERVICE_NAME,
    level=settings.LOG_LEVEL,
    fmt=settings.LOG_FORMAT
)

logger = get_logger(__name__)


def initialize_database() -> bool:
    """Create tables if needed. Failures are logged, never raised, so liveness keeps answering."""
    try:
        init_models()
    except Exception as e:
        logger.error(f"Database initialization failed, serving without it: {e}")
        return False
    logger.info("Database models initialized")
    return True


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"Starting {SERVICE_NAME} version {SERVICE_VERSION}")

    # Initialize in the background so the server accepts requests right away
    app.state.db_init = asyncio.create_task(asyncio.to_thread(initialize_database))

    yield

    logger.info(f"Shutting down {SERVICE_NAME}")
    if not app.state.db_init.done():
        app.state.db_init.cancel()
    engine.dispose()


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

health_service = ServiceHealth(SERVICE_NAME, SERVICE_VERSION, prefix=API_PREFIX, engine=engine)
app.include_router(health_service.create_health_router())
app.include_router(inventory_router)


@app.get("/")
async def root():
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "status": "running",
        "docs": f"{API_PREFIX}/docs"
    }


@app.get("/info")
async def info():
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "description": SERVICE_DESCRIPTION,
        "environment": os.getenv("ENVIRONMENT", "development"),
        "endpoints": {
            "health": f"{API_PREFIX}/health",
            "ready": f"{API_PREFIX}/health/ready",
            "live": f"{API_PREFIX}/health/live",
            "metrics": f"{API_PREFIX}/metrics",
            "stock": f"{API_PREFIX}/stock",
            "docs": f"{API_PREFIX}/docs"
        }
    }


def run() -> None:
    uvicorn.run(app, host="0.0.0.0", port=settings.PORT, access_log=False)


if __name__ == "__main__":
    run()
