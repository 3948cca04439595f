# logging_config.py

import logging
import structlog
import sys
from typing import Any, Dict
from flask import has_app_context, current_app


def add_app_context(logger: logging.Logger, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add Flask application context to log entries"""
    if has_app_context():
        event_dict["app"] = current_app.config.get('APP_NAME')
        event_dict["env"] = current_app.config.get('FLASK_ENV')
    return event_dict


def setup_logging(app_name: str = "apartment-registry", log_level: str = "INFO") -> None:
    """
    Configure structured logging

    Args:
        app_name: Application name for log identification
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    level = getattr(logging, log_level.upper())

    # Configure structlog
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            add_app_context,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    # Configure standard logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
    )

    # Set application logger
    logging.getLogger(app_name).setLevel(level)

    # Reduce noise from third-party libraries
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("openpyxl").setLevel(logging.WARNING)


def get_logger(name: str = None) -> structlog.BoundLogger:
    """
    Get a structured logger instance

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured structlog instance
    """
    return structlog.get_logger(name or __name__)


class PerformanceLogger:
    """Performance and monitoring logger"""

    def __init__(self):
        self.logger = get_logger("performance")

    def log_bulk_operation(self, operation: str, file_format: str, duration_ms: float,
                           record_count: int, skipped: int = 0):
        """Log bulk import/export performance"""
        self.logger.info(
            "Bulk operation",
            operation=operation,
            file_format=file_format,
            duration_ms=duration_ms,
            record_count=record_count,
            skipped=skipped,
            event_type="bulk_operation"
        )


# Global logger instance
performance_logger = PerformanceLogger()
