"""
Error types and structured logging for uxpro

Every module logs through the helpers at the bottom of this file. They share
one structlog configuration: JSON lines on stderr by default, a coloured
console renderer with ``--verbose``. Tool output on stdout never mixes with
log records.
"""

import functools
import logging
import sys
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional

import structlog


class ErrorSeverity(Enum):
    """Error severity levels."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class UxProError(Exception):
    """Base class of every error raised inside uxpro."""

    def __init__(self, message: str, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message)
        self.severity = severity


class ConfigurationError(UxProError):
    """Unreadable or invalid configuration file."""

    def __init__(self, message: str):
        super().__init__(message, ErrorSeverity.ERROR)


class IndexingError(UxProError):
    """Index construction failed (empty corpus, nothing loaded)."""

    def __init__(self, message: str, severity: ErrorSeverity = ErrorSeverity.ERROR):
        super().__init__(message, severity)


class DataLoadError(UxProError):
    """A data file exists but could not be decoded or parsed."""

    def __init__(self, message: str):
        super().__init__(message, ErrorSeverity.WARNING)


class SearchValidationError(UxProError):
    """Rejected tool argument: query, max_results or an enum-like option."""

    def __init__(self, message: str):
        super().__init__(message, ErrorSeverity.WARNING)


class IndexNotReadyError(UxProError):
    """A search targeted a domain, stack or platform without an index."""

    def __init__(self, message: str):
        super().__init__(message, ErrorSeverity.WARNING)


@dataclass(frozen=True)
class SearchError:
    """Error value handed back to tool callers instead of an exception."""

    error: str

    def to_dict(self) -> Dict[str, str]:
        return {"error": self.error}


class ErrorHandler:
    """Owns the structlog configuration and routes errors to a log level."""

    def __init__(self, logger_name: str = "uxpro", verbose: bool = False):
        self.logger_name = logger_name
        self.verbose = verbose
        self._configure()
        self.logger = structlog.get_logger(logger_name)

    def _configure(self):
        renderer = (
            structlog.dev.ConsoleRenderer(colors=True)
            if self.verbose
            else structlog.processors.JSONRenderer()
        )
        structlog.configure(
            processors=[
                structlog.contextvars.merge_contextvars,
                structlog.processors.TimeStamper(fmt="ISO"),
                structlog.processors.add_log_level,
                structlog.processors.StackInfoRenderer(),
                structlog.dev.set_exc_info,
                renderer,
            ],
            context_class=dict,
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )

        # stderr keeps stdout free for JSON tool output; force re-binds the
        # stream when the CLI reconfigures logging within one process
        logging.basicConfig(
            format="%(message)s",
            stream=sys.stderr,
            level=logging.DEBUG if self.verbose else logging.WARNING,
            force=True,
        )

    def handle_error(self, error: Exception, context: str = "") -> bool:
        """
        Log ``error`` at the level its severity asks for.

        Args:
            error: The exception to report
            context: Where it happened, usually the calling tool or loader

        Returns:
            bool: True when processing can continue (warnings and below)
        """
        severity = error.severity if isinstance(error, UxProError) else ErrorSeverity.ERROR
        event = {
            "error_type": type(error).__name__,
            "context": context,
            "severity": severity.value,
        }
        message = str(error)

        if severity is ErrorSeverity.CRITICAL:
            self.logger.critical(message, **event)
            return False
        if severity is ErrorSeverity.ERROR:
            self.logger.error(message, **event)
            return False
        if severity is ErrorSeverity.WARNING:
            self.logger.warning(message, **event)
        else:
            self.logger.info(message, **event)
        return True

    def log_info(self, message: str, **context):
        self.logger.info(message, **context)

    def log_warning(self, message: str, **context):
        self.logger.warning(message, **context)

    def log_error(self, message: str, **context):
        self.logger.error(message, **context)

    def log_success(self, message: str, **context):
        """Info-level record tagged ``outcome=success`` (index builds, validations)."""
        self.logger.info(message, outcome="success", **context)

    def log_debug(self, message: str, **context):
        """Debug record, emitted only in verbose mode."""
        if self.verbose:
            self.logger.debug(message, **context)


_error_handler: Optional[ErrorHandler] = None


def get_error_handler(verbose: bool = False) -> ErrorHandler:
    """Return the process-wide handler, creating it on first use."""
    global _error_handler
    if _error_handler is None:
        _error_handler = ErrorHandler(verbose=verbose)
    return _error_handler


def configure_logging(verbose: bool = False) -> ErrorHandler:
    """Replace the process-wide handler, e.g. when the CLI receives ``--verbose``."""
    global _error_handler
    _error_handler = ErrorHandler(verbose=verbose)
    return _error_handler


def handle_error(error: Exception, context: str = "") -> bool:
    return get_error_handler().handle_error(error, context)


def log_info(message: str, **context):
    get_error_handler().log_info(message, **context)


def log_warning(message: str, **context):
    get_error_handler().log_warning(message, **context)


def log_error(message: str, **context):
    get_error_handler().log_error(message, **context)


def log_success(message: str, **context):
    get_error_handler().log_success(message, **context)


def log_debug(message: str, **context):
    get_error_handler().log_debug(message, **context)


def returns_search_error(func: Callable) -> Callable:
    """Turn ``UxProError`` raised by ``func`` into a ``SearchError`` value.

    Public search functions never raise across their boundary; callers render
    the error string as regular tool output.
    """

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except UxProError as e:
            handle_error(e, context=func.__name__)
            return SearchError(error=str(e))

    return wrapper
