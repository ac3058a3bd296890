"""Request/Response logging middleware."""

import json
import logging
import time
import uuid
from collections.abc import Callable
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

REDACTED = "[REDACTED]"


def redact(value: Any, sensitive_keys: set[str]) -> Any:
    """Recursively replace values of sensitive keys in a decoded JSON body."""
    if isinstance(value, dict):
        return {
            key: REDACTED if key.lower() in sensitive_keys else redact(item, sensitive_keys)
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [redact(item, sensitive_keys) for item in value]
    return value


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware for logging all API requests and responses."""

    def __init__(
        self,
        app: Any,
        log_body: bool = False,
        log_headers: bool = False,
        sensitive_headers: set[str] | None = None,
        sensitive_fields: set[str] | None = None,
        exclude_paths: set[str] | None = None,
        max_body_size: int = 1024,
    ):
        """
        Initialize request logging middleware.

        Args:
            app: ASGI application
            log_body: Whether to log JSON request bodies
            log_headers: Whether to log headers
            sensitive_headers: Headers to redact
            sensitive_fields: JSON body keys to redact
            exclude_paths: Paths to exclude from logging (e.g., health checks)
            max_body_size: Maximum body size to log in bytes
        """
        super().__init__(app)
        self.log_body = log_body
        self.log_headers = log_headers
        self.sensitive_headers = sensitive_headers or {"authorization", "cookie"}
        self.sensitive_fields = sensitive_fields or {"password", "password_hash", "token"}
        self.exclude_paths = exclude_paths or {
            "/health",
            "/api/health",
            "/favicon.ico",
        }
        self.max_body_size = max_body_size

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Process request and response logging."""

        # Skip logging for excluded paths
        if request.url.path in self.exclude_paths:
            return await call_next(request)

        # Generate request ID for tracing
        request_id = str(uuid.uuid4())
        request.state.request_id = request_id

        start_time = time.time()

        await self._log_request(request, request_id)

        try:
            response = await call_next(request)
        except Exception as e:
            process_time = time.time() - start_time
            logger.error(
                "API Request Failed",
                extra={
                    "event": "request_failed",
                    "request_id": request_id,
                    "method": request.method,
                    "path": request.url.path,
                    "error_type": type(e).__name__,
                    "process_time": f"{process_time:.4f}s",
                },
                exc_info=True,
            )
            raise

        process_time = time.time() - start_time
        self._log_response(request, response, request_id, process_time)

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{process_time:.4f}"

        return response

    async def _log_request(self, request: Request, request_id: str):
        """Log incoming request."""

        log_data = {
            "event": "request_started",
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client_ip": self._get_client_ip(request),
            "user_agent": request.headers.get("user-agent"),
        }

        if self.log_headers:
            log_data["headers"] = self._filter_headers(dict(request.headers))

        # Only JSON bodies; multipart uploads are never read here
        content_type = request.headers.get("content-type", "")
        if (
            self.log_body
            and request.method in ("POST", "PUT", "PATCH")
            and content_type.startswith("application/json")
        ):
            body = await self._get_request_body(request)
            if body is not None:
                log_data["body"] = body

        logger.info("API Request", extra=log_data)

    def _log_response(
        self, request: Request, response: Response, request_id: str, process_time: float
    ):
        """Log outgoing response."""

        log_data = {
            "event": "request_completed",
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "process_time": f"{process_time:.4f}s",
            "user_id": getattr(request.state, "user_id", None),
        }

        # Determine log level based on status code
        if response.status_code >= 500:
            logger.error("API Response", extra=log_data)
        elif response.status_code >= 400:
            logger.warning("API Response", extra=log_data)
        else:
            logger.info("API Response", extra=log_data)

    def _get_client_ip(self, request: Request) -> str:
        """Get client IP address from request."""

        # Check for forwarded headers (behind proxy)
        forwarded_for = request.headers.get("x-forwarded-for")
        if forwarded_for:
            return forwarded_for.split(",")[0].strip()

        real_ip = request.headers.get("x-real-ip")
        if real_ip:
            return real_ip

        if request.client:
            return request.client.host

        return "unknown"

    def _filter_headers(self, headers: dict[str, str]) -> dict[str, str]:
        """Filter sensitive headers from logging."""

        return {
            key: REDACTED if key.lower() in self.sensitive_headers else value
            for key, value in headers.items()
        }

    async def _get_request_body(self, request: Request) -> Any:
        """Get decoded JSON request body for logging, with sensitive fields redacted."""

        body = await request.body()

        if not body:
            return None

        if len(body) > self.max_body_size:
            return f"[BODY TOO LARGE: {len(body)} bytes]"

        try:
            parsed = json.loads(body)
        except (UnicodeDecodeError, json.JSONDecodeError):
            return "[INVALID JSON BODY]"

        return redact(parsed, self.sensitive_fields)


# Performance monitoring middleware
class PerformanceMiddleware(BaseHTTPMiddleware):
    """Middleware that flags slow requests."""

    def __init__(self, app: Any, slow_request_threshold: float = 1.0):
        """
        Initialize performance middleware.

        Args:
            app: ASGI application
            slow_request_threshold: Threshold for slow request logging (seconds)
        """
        super().__init__(app)
        self.slow_threshold = slow_request_threshold

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """Monitor request performance."""

        start_time = time.time()
        response = await call_next(request)
        process_time = time.time() - start_time

        if process_time > self.slow_threshold:
            logger.warning(
                f"Slow request detected: {request.method} {request.url.path}",
                extra={
                    "event": "slow_request",
                    "method": request.method,
                    "path": request.url.path,
                    "process_time": f"{process_time:.4f}s",
                    "threshold": f"{self.slow_threshold}s",
                    "status_code": response.status_code,
                },
            )

        return response
