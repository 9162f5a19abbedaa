"""
tokenlock - Structured Logging Configuration

Configures structured JSON logging for the vesting service:
- JSON format for easy parsing and aggregation
- Log rotation to prevent disk space issues
- Console and file handlers

Usage:
    from tokenlock.core.logging_config import setup_logging

    logger = setup_logging(
        name="tokenlock.blockchain",
        log_file="/var/log/tokenlock/vesting.json",
        level="INFO"
    )

    logger.info("Schedule registered", extra={"event": "vesting.setup"})
"""

import logging
import logging.handlers
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import IO, Any, Dict, Optional

from pythonjsonlogger.json import JsonFormatter

from .config import Config


class CustomJsonFormatter(JsonFormatter):
    """
    JSON formatter with additional context fields.

    Adds timestamp, environment, service and source location to all records.
    """

    def __init__(
        self,
        fmt: str = "%(timestamp)s %(level)s %(name)s %(message)s",
        timestamp: bool = True,
        environment: Optional[str] = None,
        service_name: str = "tokenlock",
    ):
        """
        Initialize custom JSON formatter.

        Args:
            fmt: Log format string
            timestamp: Whether to add timestamps
            environment: Environment name (testnet, production)
            service_name: Service name for context
        """
        super().__init__(fmt=fmt)
        self.timestamp = timestamp
        self.environment = environment or "production"
        self.service_name = service_name

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any],
    ) -> None:
        """Add custom fields to log record."""
        super().add_fields(log_record, record, message_dict)

        if self.timestamp and not log_record.get("timestamp"):
            log_record["timestamp"] = datetime.now(timezone.utc).isoformat()

        log_record["environment"] = self.environment
        log_record["service"] = self.service_name

        if not log_record.get("level"):
            log_record["level"] = record.levelname.lower()

        log_record["source"] = {
            "function": record.funcName,
            "module": record.module,
            "line": record.lineno,
        }


def setup_logging(
    name: str = "tokenlock",
    log_file: Optional[str] = None,
    level: str = "INFO",
    environment: str = "production",
    enable_console: bool = True,
    stream: Optional[IO[str]] = None,
    max_bytes: int = 100 * 1024 * 1024,  # 100MB
    backup_count: int = 10,
) -> logging.Logger:
    """
    Setup structured JSON logging.

    Args:
        name: Logger name (typically package or module name)
        log_file: Path to JSON log file (optional)
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        environment: Environment identifier
        enable_console: Whether to log to a console stream
        stream: Console stream, stdout by default
        max_bytes: Maximum log file size before rotation
        backup_count: Number of backup files to keep

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers to avoid duplicates
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = CustomJsonFormatter(
        timestamp=True,
        environment=environment,
        service_name=name.split(".")[0],
    )

    if enable_console:
        console_handler = logging.StreamHandler(stream or sys.stdout)
        console_handler.setLevel(getattr(logging, level.upper()))
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if log_file:
        try:
            log_path = Path(log_file)
            log_path.parent.mkdir(parents=True, exist_ok=True)

            file_handler = logging.handlers.RotatingFileHandler(
                filename=log_file,
                maxBytes=max_bytes,
                backupCount=backup_count,
            )
            file_handler.setLevel(getattr(logging, level.upper()))
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)
        except OSError as e:
            logger.warning(
                "Could not create file handler for %s: %s",
                log_file,
                e,
                extra={"event": "logging.file_handler_failed"},
            )

    return logger


def setup_vesting_logging(config: type = Config) -> logging.Logger:
    """Setup logging for vesting operations from the selected network config."""
    return setup_logging(
        name="tokenlock",
        log_file=config.LOG_FILE or None,
        level=config.LOG_LEVEL,
        environment=config.LOG_ENVIRONMENT,
    )
