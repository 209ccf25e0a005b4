"""Domain errors rendered as ``{"ok": false, "reason": ...}`` JSON bodies."""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

import logging

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base class for expected domain failures with a reason code"""

    status_code: int = 400
    reason: str = "bad_request"

    def __init__(self, message: str = ""):
        super().__init__(message or self.reason)


class NotFoundError(ServiceError):
    status_code = 404
    reason = "not_found"


class ConflictError(ServiceError):
    status_code = 409
    reason = "conflict"


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    logger.info(f"{request.method} {request.url.path} rejected: {exc.reason} ({exc})")
    return JSONResponse(
        status_code=exc.status_code,
        content={"ok": False, "reason": exc.reason},
    )


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
