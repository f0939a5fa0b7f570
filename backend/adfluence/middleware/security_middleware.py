"""Security middleware for production deployment."""

from fastapi import Request, Response, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from typing import Callable, Iterable, Optional
import time

from adfluence.services.logging_service import logger, app_metrics

# Responses on these prefixes carry account data or tokens
PRIVATE_PATHS = ("/api/register", "/api/login", "/api/logout", "/api/me", "/api/dashboard")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Add security headers to all responses.

    Implements OWASP recommended security headers.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Add security headers to response.

        Args:
            request: HTTP request
            call_next: Next middleware/handler

        Returns:
            HTTP response with security headers
        """
        response = await call_next(request)

        # Strict Transport Security (HSTS)
        response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"

        csp_directives = [
            "default-src 'self'",
            "img-src 'self' data: https:",
            "frame-ancestors 'none'",
            "base-uri 'self'",
            "form-action 'self'"
        ]
        response.headers["Content-Security-Policy"] = "; ".join(csp_directives)

        response.headers["X-Frame-Options"] = "DENY"
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"

        if request.url.path.startswith(PRIVATE_PATHS):
            response.headers["Cache-Control"] = "no-store, no-cache, must-revalidate, private"
            response.headers["Pragma"] = "no-cache"

        return response


class RequestValidationMiddleware(BaseHTTPMiddleware):
    """
    Reject oversized bodies and suspicious paths before routing.
    """

    def __init__(self, app, max_content_length: int = 10 * 1024 * 1024):
        """
        Initialize request validation middleware.

        Args:
            app: FastAPI application
            max_content_length: Maximum request body size (default 10MB)
        """
        super().__init__(app)
        self.max_content_length = max_content_length

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Validate request before processing.

        Args:
            request: HTTP request
            call_next: Next middleware/handler

        Returns:
            Error response or normal response
        """
        content_length = request.headers.get("content-length")
        if content_length:
            try:
                length = int(content_length)
                if length > self.max_content_length:
                    return JSONResponse(
                        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                        content={
                            "error": "ValidationError",
                            "detail": f"Request body too large. Maximum: {self.max_content_length} bytes"
                        }
                    )
            except ValueError:
                pass

        suspicious_patterns = [
            "../",  # Path traversal
            "..\\",  # Path traversal (Windows)
            "<script",
            "javascript:",
        ]

        path_lower = request.url.path.lower()
        for pattern in suspicious_patterns:
            if pattern in path_lower:
                return JSONResponse(
                    status_code=status.HTTP_400_BAD_REQUEST,
                    content={"error": "ValidationError", "detail": "Invalid request path"}
                )

        return await call_next(request)


class AuditLogMiddleware(BaseHTTPMiddleware):
    """
    Log security-relevant requests and count every request.

    Logs authentication calls and state-changing marketplace calls.
    Request bodies are never logged.
    """

    def __init__(self, app, audited_paths: Optional[Iterable[str]] = None):
        """Initialize audit log middleware."""
        super().__init__(app)
        self.audited_paths = tuple(audited_paths or ("/api/register", "/api/login", "/api/logout", "/api/campaigns"))

    def _should_log(self, path: str, method: str) -> bool:
        """
        Determine if request should be logged.

        Args:
            path: Request path
            method: HTTP method

        Returns:
            True if should log
        """
        return method in ("POST", "PUT", "PATCH", "DELETE") and path.startswith(self.audited_paths)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Log request and response for audit trail.

        Args:
            request: HTTP request
            call_next: Next middleware/handler

        Returns:
            HTTP response
        """
        started = time.perf_counter()
        response = await call_next(request)

        # Route template keeps per-campaign paths under one counter
        route = request.scope.get("route")
        app_metrics.increment_request(getattr(route, "path", request.url.path), success=response.status_code < 500)

        if self._should_log(request.url.path, request.method):
            logger.info(
                "Audit",
                method=request.method,
                path=request.url.path,
                status=response.status_code,
                ip=request.client.host if request.client else "unknown",
                duration_ms=round((time.perf_counter() - started) * 1000, 2)
            )

        return response
