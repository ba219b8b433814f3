"""Logging configuration and utilities."""
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional
from logging.handlers import RotatingFileHandler

from ocrspace.core.config import settings


class JSONFormatter(logging.Formatter):
    """Custom JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "thread": record.threadName,
        }

        # Add exception info if present
        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Add extra fields
        if hasattr(record, "extra_fields"):
            log_data["extra"] = record.extra_fields

        return json.dumps(log_data, default=str)


class Logger:
    """Logger factory with structured logging support."""

    _loggers: Dict[str, logging.Logger] = {}

    @classmethod
    def _formatter(cls) -> logging.Formatter:
        if settings.log_format == "json":
            return JSONFormatter()
        return logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    @classmethod
    def get_logger(cls, name: str, log_to_file: Optional[bool] = None) -> logging.Logger:
        """Get or create a logger with the given name.

        Args:
            name: Logger name (e.g., 'ocrspace.request', 'ocrspace.cli')
            log_to_file: Whether to log to file in addition to console,
                defaults to ``settings.log_to_file``

        Returns:
            Configured logger instance
        """
        if name in cls._loggers:
            return cls._loggers[name]

        if log_to_file is None:
            log_to_file = settings.log_to_file

        logger = logging.getLogger(name)
        logger.setLevel(settings.log_level)
        logger.handlers = []  # Clear any existing handlers

        # Console handler
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(settings.log_level)
        console_handler.setFormatter(cls._formatter())
        logger.addHandler(console_handler)

        # File handler
        if log_to_file:
            settings.log_path.mkdir(parents=True, exist_ok=True)
            log_file = settings.log_path / f"{name}.log"
            file_handler = RotatingFileHandler(
                log_file,
                maxBytes=settings.log_max_size_mb * 1024 * 1024,
                backupCount=settings.log_backup_count,
            )
            file_handler.setLevel(settings.log_level)
            file_handler.setFormatter(cls._formatter())
            logger.addHandler(file_handler)

        cls._loggers[name] = logger
        return logger

    @classmethod
    def log_with_context(
        cls,
        logger: logging.Logger,
        level: str,
        message: str,
        **context: Any
    ) -> None:
        """Log a message with additional context.

        Args:
            logger: Logger instance
            level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
            message: Log message
            **context: Additional context to include in the log
        """
        logger.log(
            getattr(logging, level.upper()),
            message,
            extra={"extra_fields": context},
        )


# Create default loggers
request_logger = Logger.get_logger("ocrspace.request")
client_logger = Logger.get_logger("ocrspace.client")


class RequestTimer:
    """Context manager for timing an OCR request and logging the outcome."""

    def __init__(
        self,
        operation: str,
        logger: Optional[logging.Logger] = None,
        log_level: str = "DEBUG",
        **context: Any
    ):
        self.operation = operation
        self.logger = logger or request_logger
        self.log_level = log_level
        self.context = context
        self.start_time: Optional[datetime] = None
        self.end_time: Optional[datetime] = None

    def __enter__(self):
        """Start timing."""
        self.start_time = datetime.now(timezone.utc)
        Logger.log_with_context(
            self.logger,
            self.log_level,
            f"Starting {self.operation}",
            operation=self.operation,
            **self.context
        )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Stop timing and log duration."""
        self.end_time = datetime.now(timezone.utc)

        if exc_type:
            Logger.log_with_context(
                self.logger,
                "ERROR",
                f"Failed {self.operation}: {exc_val}",
                operation=self.operation,
                duration_seconds=self.duration,
                error=str(exc_val),
                error_type=exc_type.__name__,
                **self.context
            )
        else:
            Logger.log_with_context(
                self.logger,
                self.log_level,
                f"Completed {self.operation}",
                operation=self.operation,
                duration_seconds=self.duration,
                **self.context
            )

    @property
    def duration(self) -> Optional[float]:
        """Get operation duration in seconds."""
        if self.start_time and self.end_time:
            return (self.end_time - self.start_time).total_seconds()
        return None


def log_ocr_request(
    payload_kind: str,
    endpoint: str,
    mode: str,
    duration: Optional[float] = None,
    status_code: Optional[int] = None,
    error: Optional[str] = None,
    **extra: Any
) -> None:
    """Log one executed OCR request.

    Args:
        payload_kind: 'url', 'file' or 'base64Image'
        endpoint: Endpoint the request was posted to
        mode: 'sync' or 'async'
        duration: Round trip in seconds
        status_code: HTTP status if a response arrived
        error: Error message if failed
        **extra: Additional context
    """
    context = {
        "payload_kind": payload_kind,
        "endpoint": endpoint,
        "mode": mode,
    }

    if duration is not None:
        context["duration_seconds"] = duration
    if status_code is not None:
        context["status_code"] = status_code
    if error:
        context["error"] = error

    context.update(extra)

    level = "ERROR" if error else "INFO"
    outcome = f"failed: {error}" if error else f"HTTP {status_code}"
    message = f"OCR request ({payload_kind}, {mode}) {outcome}"

    Logger.log_with_context(request_logger, level, message, **context)
