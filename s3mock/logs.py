"""JSON structured logging configuration."""
from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional

from .settings import get_settings

LOGGER_NAME = "s3mock"


class JSONFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if hasattr(record, "extra_data"):
            log_data.update(record.extra_data)

        return json.dumps(log_data, default=str)


def setup_logging(level: Optional[int] = None) -> logging.Logger:
    """Set up JSON structured logging."""
    if level is None:
        level = logging.getLevelName(get_settings().log_level)
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(JSONFormatter())
        logger.addHandler(handler)

    return logger


def get_logger() -> logging.Logger:
    """Get the mock S3 logger."""
    return logging.getLogger(LOGGER_NAME)


def log_operation(operation: str, mode: str, params: Any) -> None:
    """Log an operation invocation."""
    logger = get_logger()
    if not logger.isEnabledFor(logging.DEBUG):
        return
    target: Dict[str, Any] = {}
    if isinstance(params, Mapping):
        target = {"bucket": params.get("Bucket"), "key": params.get("Key")}
    logger.debug(
        f"{operation} invoked ({mode})",
        extra={
            "extra_data": {
                "event": "operation",
                "operation": operation,
                "mode": mode,
                **target,
            }
        },
    )


def log_error(operation: str, error: BaseException) -> None:
    """Log an error delivered to the caller."""
    logger = get_logger()
    logger.info(
        f"{operation} failed: {error}",
        extra={
            "extra_data": {
                "event": "error",
                "operation": operation,
                "error_type": type(error).__name__,
                "error_code": getattr(error, "code", None),
                "status_code": getattr(error, "status_code", None),
            }
        },
    )
