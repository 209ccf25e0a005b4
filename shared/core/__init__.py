"""Shared core utilities for the inventory and pricing services.

Provides health endpoints, logging and domain error rendering.
"""

from .health import ServiceHealth, HealthStatus
from .errors import ServiceError, NotFoundError, ConflictError, install_error_handlers
from .logging_config import (
    setup_logging,
    get_logger,
    RequestLoggingMiddleware,
    set_request_context,
    generate_request_id,
    LoggerAdapter,
)

__all__ = [
    # Health checks
    "ServiceHealth",
    "HealthStatus",
    # Errors
    "ServiceError",
    "NotFoundError",
    "ConflictError",
    "install_error_handlers",
    # Logging
    "setup_logging",
    "get_logger",
    "RequestLoggingMiddleware",
    "set_request_context",
    "generate_request_id",
    "LoggerAdapter",
]
