"""
Centralized logging configuration with structured logging support.
"""
import json
import logging
import logging.config
import sys
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from .config import ReliabilitySettings

# Context variable correlating every log entry of one analysis run.
# Set by get_scale_report() for the duration of the report.
calculation_id_context: ContextVar[Optional[str]] = ContextVar(
    "calculation_id", default=None
)


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for production logging.

    Produces structured log entries with consistent fields for log aggregation.
    """

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        log_entry: Dict[str, Any] = {
            "timestamp": timestamp.isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        calculation_id = calculation_id_context.get()
        if calculation_id:
            log_entry["calculation_id"] = calculation_id

        # Add extra structured fields from record
        if hasattr(record, "n_items"):
            log_entry["n_items"] = record.n_items
        if hasattr(record, "n_obs"):
            log_entry["n_obs"] = record.n_obs
        if hasattr(record, "metric"):
            log_entry["metric"] = record.metric

        # Add source location for error-level logs
        if record.levelno >= logging.ERROR:
            log_entry["source"] = f"{record.pathname}:{record.lineno}"

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def build_logging_config(settings: ReliabilitySettings) -> Dict[str, Any]:
    """
    Build the dictConfig mapping for the given settings.

    Uses JSON output in production and a human-readable format otherwise.
    """
    log_level = getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO)
    is_production = settings.ENV == "production"

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
            "json": {
                "()": JSONFormatter,
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": log_level,
                "formatter": "json" if is_production else "default",
                "stream": sys.stdout,
            },
        },
        "loggers": {
            "item_reliability": {
                "level": log_level,
                "handlers": ["console"],
                "propagate": False,
            },
        },
    }


def setup_logging(settings: ReliabilitySettings) -> None:
    """
    Configure logging for the item_reliability package.

    Configures:
    - Log level from settings
    - JSON formatting for production (structured for log aggregators)
    - Human-readable format for development
    - Calculation ID correlation via context variables
    """
    logging.config.dictConfig(build_logging_config(settings))
