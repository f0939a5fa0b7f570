"""Middleware modules for FastAPI application."""

from adfluence.middleware.security_middleware import (
    SecurityHeadersMiddleware,
    RequestValidationMiddleware,
    AuditLogMiddleware
)

__all__ = [
    "SecurityHeadersMiddleware",
    "RequestValidationMiddleware",
    "AuditLogMiddleware"
]
