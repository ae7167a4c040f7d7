"""
Logging configuration for the Jobly API.

One stdout handler on the root logger. Uvicorn's own loggers are routed
through it so request lines share the format of application logs.
"""

import logging
import sys
from typing import Any, Dict
from datetime import datetime, timezone
from pythonjsonlogger import jsonlogger

# Loggers that install their own handlers; cleared so they propagate to root
UVICORN_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


class JoblyJsonFormatter(jsonlogger.JsonFormatter):
    """JSON log lines tagged with the service name."""

    def __init__(self, *args: Any, service: str = "jobly", **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.service = service

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record['timestamp'] = datetime.now(timezone.utc).isoformat()
        log_record['level'] = record.levelname
        log_record['logger'] = record.name
        log_record['service'] = self.service

        if record.levelno >= logging.WARNING:
            log_record['location'] = f"{record.pathname}:{record.lineno}"


def build_formatter(json_logs: bool, service: str = "jobly") -> logging.Formatter:
    """JSON for production, one readable line per record for development."""
    if json_logs:
        return JoblyJsonFormatter('%(message)s', service=service)
    return logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def setup_logging(log_level: str = "INFO", json_logs: bool = True, service: str = "jobly") -> None:
    """
    Configure logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Whether to use JSON formatting (True for production, False for development)
        service: Value of the "service" field on JSON records
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(build_formatter(json_logs, service))

    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    root_logger.addHandler(console_handler)

    for name in UVICORN_LOGGERS:
        uvicorn_logger = logging.getLogger(name)
        uvicorn_logger.handlers.clear()
        uvicorn_logger.propagate = True

    # SQL echo and passlib backend probing are noisy at INFO
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.ERROR)
