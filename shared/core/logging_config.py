"""
Logging configuration shared by the inventory and pricing services.

Two output formats:
- ``dev``: one compact human-readable line per record, request lines look
  like ``GET /api/inventory/stock 200 3.12 ms``
- ``json``: one structured JSON object per record for log aggregation
"""

import logging
import os
import sys
import json
import time
import traceback
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from contextvars import ContextVar
import uuid
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

# Context variables for request tracking
request_id_var: ContextVar[Optional[str]] = ContextVar('request_id', default=None)
correlation_id_var: ContextVar[Optional[str]] = ContextVar('correlation_id', default=None)


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class StructuredFormatter(logging.Formatter):
    """JSON formatter: service, environment, trace context, location and error."""

    def format(self, record: logging.LogRecord) -> str:
        log_obj = {
            "@timestamp": _utcnow(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "service": os.getenv('SERVICE_NAME', 'unknown-service'),
            "environment": os.getenv('ENVIRONMENT', 'development'),
            "version": os.getenv('SERVICE_VERSION', '1.0.0'),
        }

        trace_context = _get_trace_context()
        if trace_context:
            log_obj["trace"] = trace_context

        log_obj["location"] = {
            "file": record.pathname,
            "line": record.lineno,
            "function": record.funcName,
            "module": record.module
        }

        if record.exc_info:
            log_obj["error"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
                "stacktrace": traceback.format_exception(*record.exc_info)
            }

        if hasattr(record, 'extra_fields'):
            log_obj["custom"] = record.extra_fields

        if hasattr(record, 'duration_ms'):
            log_obj["performance"] = {
                "duration_ms": record.duration_ms
            }

        return json.dumps(log_obj, default=str)


class DevFormatter(logging.Formatter):
    """Plain single-line formatter for local development."""

    def __init__(self):
        super().__init__("%(asctime)s %(levelname)-7s [%(name)s] %(message)s", "%H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        request_id = request_id_var.get()
        if request_id:
            line = f"{line} rid={request_id[:8]}"
        return line


def _get_trace_context() -> Optional[Dict[str, Any]]:
    request_id = request_id_var.get()
    correlation_id = correlation_id_var.get()

    if not any([request_id, correlation_id]):
        return None

    context = {}
    if request_id:
        context["request_id"] = request_id
    if correlation_id:
        context["correlation_id"] = correlation_id
    return context


class PerformanceFilter(logging.Filter):
    """Adds duration_ms to records logged with a ``duration`` in seconds"""

    def filter(self, record: logging.LogRecord) -> bool:
        if hasattr(record, 'duration'):
            record.duration_ms = record.duration * 1000
        return True


class SecurityFilter(logging.Filter):
    """Redacts sensitive words from log messages"""

    SENSITIVE_FIELDS = [
        'password', 'token', 'api_key', 'secret',
        'authorization', 'cookie', 'session'
    ]

    def filter(self, record: logging.LogRecord) -> bool:
        if not isinstance(record.msg, str):
            return True
        lowered = record.msg.lower()
        for field in self.SENSITIVE_FIELDS:
            if field in lowered:
                record.msg = record.msg.replace(field, f"{field}=***REDACTED***")
        return True


def setup_logging(
    service_name: str,
    level: str = "INFO",
    fmt: str = "dev"
) -> None:
    """
    Configure the root logger for a service.

    Args:
        service_name: Name reported in structured records
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        fmt: ``dev`` for readable lines, ``json`` for structured output
    """
    os.environ['SERVICE_NAME'] = service_name

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    root_logger.handlers = []

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(StructuredFormatter() if fmt == "json" else DevFormatter())
    console_handler.addFilter(PerformanceFilter())
    console_handler.addFilter(SecurityFilter())
    root_logger.addHandler(console_handler)

    # uvicorn's own access log duplicates RequestLoggingMiddleware
    logging.getLogger('uvicorn.access').setLevel(logging.WARNING)
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)

    root_logger.debug(
        "Logging initialized",
        extra={'extra_fields': {'service': service_name, 'level': level, 'format': fmt}}
    )


class LoggerAdapter(logging.LoggerAdapter):
    """Injects the current request context into every record"""

    def process(self, msg, kwargs):
        extra = kwargs.get('extra', {})

        request_id = request_id_var.get()
        if request_id:
            extra['request_id'] = request_id

        correlation_id = correlation_id_var.get()
        if correlation_id:
            extra['correlation_id'] = correlation_id

        kwargs['extra'] = extra
        return msg, kwargs


def get_logger(name: str) -> LoggerAdapter:
    """Get a logger with request context support (usually ``get_logger(__name__)``)"""
    return LoggerAdapter(logging.getLogger(name), {})


def set_request_context(
    request_id: Optional[str] = None,
    correlation_id: Optional[str] = None
) -> None:
    if request_id:
        request_id_var.set(request_id)
    if correlation_id:
        correlation_id_var.set(correlation_id)


def generate_request_id() -> str:
    return str(uuid.uuid4())


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs one line per request with method, path, status and duration.
    Propagates X-Request-ID back on the response.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get('X-Request-ID') or generate_request_id()
        set_request_context(
            request_id=request_id,
            correlation_id=request.headers.get('X-Correlation-ID')
        )

        logger = get_logger(__name__)
        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            duration = time.perf_counter() - start_time
            logger.error(
                f"{request.method} {request.url.path} 500 {duration * 1000:.2f} ms",
                exc_info=True,
                extra={
                    'duration': duration,
                    'extra_fields': {'method': request.method, 'path': request.url.path}
                }
            )
            raise

        duration = time.perf_counter() - start_time
        logger.info(
            f"{request.method} {request.url.path} {response.status_code} {duration * 1000:.2f} ms",
            extra={
                'duration': duration,
                'extra_fields': {
                    'method': request.method,
                    'path': request.url.path,
                    'status_code': response.status_code,
                    'client_host': request.client.host if request.client else None
                }
            }
        )

        response.headers['X-Request-ID'] = request_id
        return response
