import json
import logging
import os
import sys
from datetime import datetime, timezone
from typing import Any, Dict

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RESERVED_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime"}


class StructuredFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_data[key] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data, default=str)


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(StructuredFormatter())
        logger.addHandler(handler)
        logger.setLevel(os.environ.get("LOG_LEVEL", "INFO").upper())
        logger.propagate = False

    return logger


class RequestLogger:
    """One structured line per handled admin request."""

    def __init__(self, logger_name: str = "api"):
        self.logger = get_logger(logger_name)

    def log_request(
        self,
        method: str,
        path: str,
        status_code: int,
        duration_ms: float,
        request_id: str,
        **extra,
    ):
        level = logging.WARNING if status_code >= 400 else logging.INFO
        self.logger.log(
            level,
            f"{method} {path} {status_code}",
            extra={
                "request_id": request_id,
                "http": {
                    "method": method,
                    "path": path,
                    "status_code": status_code,
                    "duration_ms": round(duration_ms, 2),
                },
                **extra,
            },
        )

    def log_error(
        self,
        error: Exception,
        context: Dict[str, Any],
        request_id: str,
    ):
        self.logger.error(
            str(error),
            extra={
                "request_id": request_id,
                "error": {
                    "type": type(error).__name__,
                    "message": str(error),
                    "context": context,
                },
            },
            exc_info=error,
        )


api_logger = RequestLogger("api")
