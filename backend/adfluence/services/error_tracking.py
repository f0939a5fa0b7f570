"""
Error Tracking Service

Integrates with Sentry when a DSN is configured; always logs locally.
"""

from typing import Optional, Dict, Any
import sentry_sdk
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

from adfluence.config import settings
from adfluence.services.logging_service import logger


class ErrorTracker:
    """Centralized error tracking."""

    def __init__(self, dsn: Optional[str] = None):
        """Initialize error tracking."""
        self.sentry_enabled = False

        if dsn:
            self._initialize_sentry(dsn)

    def _initialize_sentry(self, dsn: str):
        """Initialize Sentry SDK."""
        try:
            sentry_sdk.init(
                dsn=dsn,
                environment=settings.ENVIRONMENT,
                release=settings.APP_VERSION,
                traces_sample_rate=0.1,
                integrations=[
                    FastApiIntegration(),
                    SqlalchemyIntegration()
                ],
                before_send=self._filter_before_send,
                attach_stacktrace=True,
                send_default_pii=False  # Never ship emails or tokens
            )

            self.sentry_enabled = True
            logger.info("Sentry error tracking enabled", environment=settings.ENVIRONMENT)

        except Exception as e:
            logger.error("Failed to initialize Sentry", error=str(e))

    def _filter_before_send(self, event: Dict[str, Any], hint: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        """
        Filter events before sending to Sentry.

        Returns None to drop the event, or the event to send it.
        """
        if 'request' in event:
            url = event['request'].get('url', '')
            if '/health' in url:
                return None

        # Domain errors below 500 are expected outcomes, not incidents
        exc_info = hint.get("exc_info") if hint else None
        if exc_info:
            from adfluence.errors import MarketplaceError
            error = exc_info[1]
            if isinstance(error, MarketplaceError) and error.status_code < 500:
                return None

        return event

    def capture_exception(
        self,
        exception: Exception,
        context: Optional[Dict[str, Any]] = None,
        tags: Optional[Dict[str, str]] = None
    ):
        """
        Capture an exception.

        Args:
            exception: The exception to capture
            context: Additional context data
            tags: Custom tags for filtering
        """
        logger.error(
            "Exception captured",
            error_type=type(exception).__name__,
            error=str(exception),
            **(context or {})
        )

        if self.sentry_enabled:
            with sentry_sdk.new_scope() as scope:
                if context:
                    scope.set_context("request", context)
                if tags:
                    for key, value in tags.items():
                        scope.set_tag(key, value)
                sentry_sdk.capture_exception(exception)


# Global error tracker instance
error_tracker = ErrorTracker(settings.SENTRY_DSN)
