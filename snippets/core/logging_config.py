"""
Centralized logging configuration.

This module provides consistent logging across all application modules.
Logs are written to both console (stdout) and daily log files.

Two output formats are supported:
- text: ``timestamp | level | module:line | message [rid=...] key=value``
- json: one JSON object per line, for log shippers

Every record carries the id of the HTTP request being served (bound by
RequestLoggingMiddleware or the server failure handler) and any ``extra=``
fields passed by the caller.
"""
import json
import logging
import sys
from contextvars import ContextVar
from datetime import date, datetime, timezone
from pathlib import Path
from typing import Any, Dict, Mapping, Optional


# Module-level flag to prevent duplicate handler registration
_logging_configured = False

# Request-scoped id, bound while a request is being served
_REQUEST_ID: ContextVar[Optional[str]] = ContextVar("snippets_request_id", default=None)

# Attributes every LogRecord has; anything else came in through `extra=`
_STANDARD_ATTRS = set(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime", "request_id", "taskName", "color_message"}


def bind_request_id(request_id: Optional[str]):
    """Bind a request id to the current context. Returns a reset token."""
    return _REQUEST_ID.set(request_id)


def reset_request_id(token) -> None:
    """Restore the request id that was bound before ``bind_request_id``."""
    _REQUEST_ID.reset(token)


def get_request_id() -> Optional[str]:
    """Return the request id bound to the current context, if any."""
    return _REQUEST_ID.get()


def _install_request_id_factory() -> None:
    """Stamp every new LogRecord with the request id bound at creation time."""
    base_factory = logging.getLogRecordFactory()
    if getattr(base_factory, "_stamps_request_id", False):
        return

    def factory(*args, **kwargs) -> logging.LogRecord:
        record = base_factory(*args, **kwargs)
        record.request_id = _REQUEST_ID.get()
        return record

    factory._stamps_request_id = True
    logging.setLogRecordFactory(factory)


def _record_extras(record: logging.LogRecord) -> Dict[str, Any]:
    return {
        key: value
        for key, value in record.__dict__.items()
        if key not in _STANDARD_ATTRS and not key.startswith("_")
    }


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Path):
        return str(value)
    return repr(value)


class TextFormatter(logging.Formatter):
    """Single-line console format with request id and extra fields appended."""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s:%(lineno)d | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        base = super().format(record)

        request_id = getattr(record, "request_id", None) or get_request_id()
        parts = [f"rid={request_id}"] if request_id else []
        parts.extend(
            f"{key}={value}" for key, value in sorted(_record_extras(record).items())
        )
        if not parts:
            return base

        # Keep tracebacks below the key=value tail
        head, sep, tail = base.partition("\n")
        return f"{head} " + " ".join(parts) + sep + tail


class JsonFormatter(logging.Formatter):
    """Render log records as one JSON object per line."""

    def __init__(self, service: str = "bookstore-snippets") -> None:
        super().__init__()
        self.service = service

    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc)
        return dt.strftime("%Y-%m-%dT%H:%M:%S") + f".{int(record.msecs):03d}Z"

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "timestamp": self.formatTime(record),
            "level": record.levelname,
            "service": self.service,
            "logger": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None) or get_request_id(),
        }
        payload.update(_record_extras(record))
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=_json_default, separators=(",", ":"))


def build_formatter(log_format: str) -> logging.Formatter:
    """Return the formatter for ``log_format`` ("text" or "json")."""
    if log_format == "json":
        return JsonFormatter()
    return TextFormatter()


def setup_logging(
    log_level: str = "INFO",
    log_dir: Optional[Path] = None,
    log_format: str = "text",
    level_overrides: Optional[Mapping[str, str]] = None,
) -> logging.Logger:
    """
    Configure application-wide logging.

    This function should be called once at application startup.
    It configures both console and file logging with consistent formatting.

    Args:
        log_level: Console logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_dir: Directory for log files. Defaults to 'logs/' in project root.
        log_format: "text" or "json"
        level_overrides: Per-logger levels applied after the defaults

    Returns:
        Configured root logger instance

    Example:
        >>> from snippets.core.logging_config import setup_logging
        >>> logger = setup_logging("INFO")
        >>> logger.info("Application started")
    """
    global _logging_configured

    # Prevent duplicate handler registration on repeated calls
    if _logging_configured:
        return logging.getLogger()

    if log_dir is None:
        log_dir = Path(__file__).parent.parent.parent / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    _install_request_id_factory()
    formatter = build_formatter(log_format)

    # Console handler - always enabled for immediate feedback
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(getattr(logging, log_level.upper()))

    # File handler - daily log files for persistence
    log_file = log_dir / f"app_{datetime.now().strftime('%Y%m%d')}.log"
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setFormatter(formatter)
    file_handler.setLevel(logging.DEBUG)  # File captures everything

    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)
    root_logger.addHandler(console_handler)
    root_logger.addHandler(file_handler)

    # Suppress noisy third-party loggers
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    # Request completion is logged by RequestLoggingMiddleware
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    for name, level in (level_overrides or {}).items():
        logging.getLogger(name).setLevel(getattr(logging, level.upper()))

    _logging_configured = True

    root_logger.debug(
        "Logging configured",
        extra={"level": log_level, "format": log_format, "file": str(log_file)},
    )

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a specific module.

    Using __name__ as the logger name preserves the module hierarchy.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Processing user request")
        2024-01-15 10:30:45 | INFO     | snippets.api.routes:42 | Processing user request
    """
    return logging.getLogger(name)


class LoggerMixin:
    """
    Mixin class to add logging capability to any class.

    Provides a self.logger attribute named after the class.

    Example:
        >>> class MyService(LoggerMixin):
        ...     def process(self):
        ...         self.logger.info("Processing...")
    """

    @property
    def logger(self) -> logging.Logger:
        """Get logger named after this class."""
        return get_logger(self.__class__.__name__)
