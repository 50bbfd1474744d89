"""Structured logging configuration for validator-cli.

Logs are emitted through structlog on top of the standard library
``logging`` module, either as JSON lines (default) or as coloured console
output for interactive use.

Usage:
    from validator_cli.logging import get_logger, configure_logging

    # Configure at application startup
    configure_logging(log_level="INFO", log_format="json")

    # Get logger in modules
    logger = get_logger(__name__)
    logger.info("resolution_started", identifier_count=3, state_id="head")

Custom backends:
    class SyslogBackend(LoggingBackend):
        def get_handler(self) -> logging.Handler:
            return logging.handlers.SysLogHandler(address="/dev/log")

    register_backend("syslog", SyslogBackend())
    configure_logging(log_level="INFO", backend="syslog")
"""

import logging
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Callable, Optional, TextIO

import structlog
from structlog.types import Processor


SERVICE_NAME = "validator-cli"


# =============================================================================
# Logging Backend Interface
# =============================================================================


class LoggingBackend(ABC):
    """Abstract base class for custom logging backends."""

    @abstractmethod
    def get_handler(self) -> logging.Handler:
        """Return a logging.Handler instance for this backend."""
        pass

    def get_processors(self) -> list[Processor]:
        """Return additional structlog processors for this backend."""
        return []

    def get_formatter(self) -> Optional[logging.Formatter]:
        """Return a custom formatter, or None to use the message-only default."""
        return None


@dataclass
class LoggingConfig:
    """Configuration for logging setup.

    Attributes:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Output format - 'json' for structured, 'text' for console
        stream: Output stream for default handler
        service_name: Service name included in logs
        backend: Name of registered backend to use (optional)
        extra_context: Static context added to all log entries
    """

    log_level: str = "INFO"
    log_format: str = "json"
    stream: Optional[TextIO] = None
    service_name: str = SERVICE_NAME
    backend: Optional[str] = None
    extra_context: dict = field(default_factory=dict)


_backends: dict[str, LoggingBackend] = {}
_current_config: Optional[LoggingConfig] = None


def register_backend(name: str, backend: LoggingBackend) -> None:
    """Register a custom logging backend under ``name``."""
    _backends[name] = backend


def unregister_backend(name: str) -> None:
    """Unregister a logging backend."""
    _backends.pop(name, None)


def get_registered_backends() -> list[str]:
    """Get list of registered backend names."""
    return list(_backends.keys())


def get_current_config() -> Optional[LoggingConfig]:
    """Get the current logging configuration, or None if not configured."""
    return _current_config


def _create_service_context_processor(
    service_name: str, extra_context: Optional[dict] = None
) -> Callable:
    extra = extra_context or {}

    def _add_service_context(
        logger: logging.Logger, method_name: str, event_dict: dict  # noqa: ARG001
    ) -> dict:
        event_dict["service"] = service_name
        event_dict.update(extra)
        return event_dict

    return _add_service_context


def configure_logging(
    log_level: str = "INFO",
    log_format: str = "json",
    stream: Optional[TextIO] = None,
    service_name: str = SERVICE_NAME,
    backend: Optional[str] = None,
    extra_context: Optional[dict] = None,
) -> None:
    """Configure structured logging.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Output format - 'json' for structured, 'text' for console
        stream: Output stream (default: sys.stderr)
        service_name: Service name included in all log entries
        backend: Name of registered backend to use instead of the stream
        extra_context: Static context dict added to all log entries
    """
    global _current_config

    if stream is None:
        stream = sys.stderr

    _current_config = LoggingConfig(
        log_level=log_level,
        log_format=log_format,
        stream=stream,
        service_name=service_name,
        backend=backend,
        extra_context=extra_context or {},
    )

    selected = _backends.get(backend) if backend else None

    common_processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        _create_service_context_processor(service_name, extra_context),
    ]
    if selected is not None:
        common_processors.extend(selected.get_processors())

    if log_format == "json":
        processors = common_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = common_processors + [
            structlog.dev.ConsoleRenderer(colors=stream.isatty() if hasattr(stream, "isatty") else False),
        ]

    structlog.reset_defaults()
    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()

    if selected is not None:
        handler = selected.get_handler()
        handler.setFormatter(selected.get_formatter() or logging.Formatter("%(message)s"))
    else:
        handler = logging.StreamHandler(stream)
        handler.setFormatter(logging.Formatter("%(message)s"))

    level = getattr(logging, log_level.upper(), logging.INFO)
    handler.setLevel(level)
    root_logger.addHandler(handler)
    root_logger.setLevel(level)


def get_logger(name: str = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


class ResolverLogger:
    """Domain-specific logger with predefined resolution events."""

    def __init__(self, name: str = None):
        self._logger = get_logger(name)

    def resolution_started(self, identifiers: list[str], state_id: str, **extra) -> None:
        self._logger.info(
            "resolution_started",
            identifier_count=len(identifiers),
            state_id=state_id,
            **extra
        )

    def identifier_resolved(self, identifier: str, kind: str, index: int, **extra) -> None:
        self._logger.debug(
            "identifier_resolved",
            identifier=identifier,
            kind=kind,
            index=index,
            **extra
        )

    def range_resolved(self, identifier: str, requested: int, found: int, **extra) -> None:
        self._logger.debug(
            "range_resolved",
            identifier=identifier,
            requested=requested,
            found=found,
            **extra
        )

    def inverted_range(self, identifier: str, low: int, high: int, **extra) -> None:
        """A range whose start exceeds its end resolves to nothing."""
        self._logger.warning(
            "inverted_range",
            identifier=identifier,
            low=low,
            high=high,
            **extra
        )

    def ambiguous_match(self, identifier: str, indices: list[int], selected: int, **extra) -> None:
        self._logger.warning(
            "ambiguous_match",
            identifier=identifier,
            matched_indices=indices,
            selected_index=selected,
            **extra
        )

    def resolution_failed(self, error: str, error_type: str, identifier: str = None, **extra) -> None:
        self._logger.error(
            "resolution_failed",
            identifier=identifier,
            error=error,
            error_type=error_type,
            **extra
        )

    def resolution_completed(self, identifier_count: int, validator_count: int, **extra) -> None:
        self._logger.info(
            "resolution_completed",
            identifier_count=identifier_count,
            validator_count=validator_count,
            **extra
        )

    def info(self, event: str, **kwargs) -> None:
        self._logger.info(event, **kwargs)

    def warning(self, event: str, **kwargs) -> None:
        self._logger.warning(event, **kwargs)

    def error(self, event: str, **kwargs) -> None:
        self._logger.error(event, **kwargs)

    def debug(self, event: str, **kwargs) -> None:
        self._logger.debug(event, **kwargs)


# =============================================================================
# Pre-built Backends
# =============================================================================


class StreamBackend(LoggingBackend):
    """Stream-based backend for stdout/stderr or an open file."""

    def __init__(self, stream: TextIO = None):
        self.stream = stream or sys.stderr

    def get_handler(self) -> logging.Handler:
        return logging.StreamHandler(self.stream)


class FileBackend(LoggingBackend):
    """Append log lines to a file."""

    def __init__(self, file_path: str):
        self.file_path = file_path

    def get_handler(self) -> logging.Handler:
        return logging.FileHandler(self.file_path, encoding="utf-8")


def configure_for_file(
    file_path: str,
    log_level: str = "INFO",
    log_format: str = "json",
    service_name: str = SERVICE_NAME,
) -> None:
    """Configure logging to append to ``file_path``."""
    register_backend("file", FileBackend(file_path))
    configure_logging(
        log_level=log_level,
        log_format=log_format,
        service_name=service_name,
        backend="file",
    )
