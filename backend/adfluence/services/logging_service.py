"""
Structured logging and in-process request metrics.

Every log line is a single JSON object: timestamp, level, logger, message
and whatever keyword context the call site passed. Request counters feed
the /health endpoint.
"""

import json
import logging
from collections import Counter
from datetime import datetime
from typing import Any, Dict

from adfluence.config import settings


class JsonFormatter(logging.Formatter):
    """Render a record and its attached context as one JSON line."""

    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "timestamp": datetime.utcfromtimestamp(record.created).isoformat() + "Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(getattr(record, "context", {}))
        if record.exc_info:
            entry["traceback"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class StructuredLogger:
    """
    Keyword-context front end over a stdlib logger.

        logger.info("Campaign created", campaign_id=str(campaign.id))
    """

    def __init__(self, name: str, level: str = "INFO"):
        self.logger = logging.getLogger(name)
        self.logger.setLevel(getattr(logging, level.upper(), logging.INFO))
        self.logger.propagate = False

        # Module reloads must not stack handlers
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            handler.setFormatter(JsonFormatter())
            self.logger.addHandler(handler)

    def _log(self, level: int, message: str, context: Dict[str, Any]) -> None:
        self.logger.log(level, message, extra={"context": context})

    def info(self, message: str, **context):
        self._log(logging.INFO, message, context)

    def warning(self, message: str, **context):
        self._log(logging.WARNING, message, context)

    def error(self, message: str, **context):
        self._log(logging.ERROR, message, context)


class ApplicationMetrics:
    """Request totals overall and per route template, kept in memory."""

    def __init__(self):
        self.started_at = datetime.utcnow()
        self.totals = Counter()
        self.by_endpoint: Dict[str, Counter] = {}

    def increment_request(self, endpoint: str, success: bool = True):
        outcome = "success" if success else "error"
        for counter in (self.totals, self.by_endpoint.setdefault(endpoint, Counter())):
            counter["total"] += 1
            counter[outcome] += 1

    def get_metrics(self) -> Dict[str, Any]:
        """Snapshot for the health endpoint."""
        def counts(counter: Counter) -> Dict[str, int]:
            return {key: counter[key] for key in ("total", "success", "error")}

        return {
            "requests": {
                **counts(self.totals),
                "by_endpoint": {path: counts(c) for path, c in self.by_endpoint.items()},
            },
            "uptime_seconds": (datetime.utcnow() - self.started_at).total_seconds(),
        }

    def get_error_rate(self) -> float:
        """Percentage of requests that ended in a server error."""
        if not self.totals["total"]:
            return 0.0
        return self.totals["error"] / self.totals["total"] * 100


logger = StructuredLogger("adfluence", level=settings.LOG_LEVEL)
app_metrics = ApplicationMetrics()
