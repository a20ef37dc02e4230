"""
Recipes API Logging Middleware
Structured logging with request/response tracking and performance monitoring
"""

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
import structlog
import time
import uuid
from typing import Dict, Any

logger = structlog.get_logger()

SLOW_REQUEST_SECONDS = 2.0


class LoggingMiddleware(BaseHTTPMiddleware):
    """
    Logging middleware that provides:
    - Request/response logging with unique IDs
    - Slow request warnings
    - Error tracking
    """

    def __init__(self, app):
        super().__init__(app)

        # Paths to exclude from detailed logging
        self.exclude_paths = {
            "/health", "/favicon.ico"
        }

    async def dispatch(self, request: Request, call_next):
        """Process request with logging"""
        start_time = time.time()
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())

        # Every log line emitted while handling this request carries its id
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)
        request.state.request_id = request_id

        try:
            # Skip detailed logging for excluded paths
            if any(request.url.path.startswith(path) for path in self.exclude_paths):
                response = await call_next(request)
                response.headers["X-Request-ID"] = request_id
                return response

            request_info = self._extract_request_info(request)

            logger.info(
                "Request started",
                **request_info,
                event_type="request_start"
            )

            response = await call_next(request)

            process_time = time.time() - start_time
            response_info = self._extract_response_info(response, process_time)

            logger.log(
                self._determine_log_level(response.status_code),
                "Request completed",
                **request_info,
                **response_info,
                event_type="request_complete"
            )

            if process_time > SLOW_REQUEST_SECONDS:
                logger.warning(
                    "Slow request detected",
                    endpoint=f"{request.method} {request.url.path}",
                    response_time=process_time,
                    event_type="slow_request"
                )

            response.headers["X-Request-ID"] = request_id
            return response

        except Exception as e:
            process_time = time.time() - start_time

            logger.error(
                "Request failed",
                method=request.method,
                path=request.url.path,
                client_ip=self._get_client_ip(request),
                process_time=process_time,
                error=str(e),
                error_type=type(e).__name__,
                event_type="request_error"
            )

            raise

    def _extract_request_info(self, request: Request) -> Dict[str, Any]:
        """Extract request information"""
        return {
            "method": request.method,
            "path": request.url.path,
            "query_params": dict(request.query_params),
            "client_ip": self._get_client_ip(request),
            "user_agent": request.headers.get("user-agent", ""),
        }

    def _extract_response_info(self, response: Response, process_time: float) -> Dict[str, Any]:
        """Extract response information"""
        return {
            "status_code": response.status_code,
            "process_time": round(process_time, 4),
        }

    def _get_client_ip(self, request: Request) -> str:
        """Extract client IP address"""
        forwarded = request.headers.get("x-forwarded-for")
        if forwarded:
            return forwarded.split(",")[0].strip()

        forwarded = request.headers.get("x-real-ip")
        if forwarded:
            return forwarded

        return request.client.host if request.client else "unknown"

    def _determine_log_level(self, status_code: int) -> int:
        """Determine appropriate log level based on status code"""
        if status_code >= 500:
            return 40  # ERROR
        elif status_code >= 400:
            return 30  # WARNING
        else:
            return 20  # INFO
