"""
Shared Error Handling Utilities - absorbed failure reporting.

Failures that must not abort an acquisition (a missing digest utility, an
unsupported `pm` filter flag, a collector that cannot run) are reported
through this service. It logs them under the reporting component's logger
and keeps per-component counts for the run summary.
"""

import logging
import traceback
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorSeverity(Enum):
    """Severity levels for errors."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass
class ErrorContext:
    """Where an error happened."""
    operation: str
    component: str
    metadata: Dict[str, Any] = field(default_factory=dict)


@dataclass
class ErrorInfo:
    """Information about an error that occurred."""
    severity: ErrorSeverity
    message: str
    exception: Optional[Exception]
    context: ErrorContext
    stack_trace: Optional[str] = None

    def __post_init__(self):
        if self.exception is not None and not self.stack_trace:
            self.stack_trace = "".join(traceback.format_exception(
                type(self.exception), self.exception, self.exception.__traceback__
            ))


class ErrorHandler(ABC):
    """Abstract base class for error handlers."""

    @abstractmethod
    def can_handle(self, error_info: ErrorInfo) -> bool:
        pass

    @abstractmethod
    def handle(self, error_info: ErrorInfo) -> bool:
        """Handle the error. Return True if it was dealt with."""
        pass


class LoggingErrorHandler(ErrorHandler):
    """Logs errors on the logger named after the reporting component."""

    _LEVELS = {
        ErrorSeverity.DEBUG: logging.DEBUG,
        ErrorSeverity.INFO: logging.INFO,
        ErrorSeverity.WARNING: logging.WARNING,
        ErrorSeverity.ERROR: logging.ERROR,
        ErrorSeverity.CRITICAL: logging.CRITICAL,
    }

    def can_handle(self, error_info: ErrorInfo) -> bool:
        return True

    def handle(self, error_info: ErrorInfo) -> bool:
        logger = logging.getLogger(error_info.context.component)
        log_message = f"{error_info.context.operation}: {error_info.message}"

        if error_info.context.metadata:
            log_message += f" | Metadata: {error_info.context.metadata}"

        level = self._LEVELS[error_info.severity]
        exc_info = error_info.exception if level >= logging.ERROR else None
        logger.log(level, log_message, exc_info=exc_info)
        return True


class ErrorHandlingService:
    """
    Central registry of error handlers with per-component statistics.
    """

    def __init__(self):
        self.handlers: List[ErrorHandler] = []
        self.error_stats: Dict[str, int] = {}
        self.logger = logging.getLogger("error.handling.service")

        self.add_handler(LoggingErrorHandler())

    def add_handler(self, handler: ErrorHandler) -> None:
        self.handlers.append(handler)

    def handle_error(self, error_info: ErrorInfo) -> bool:
        """
        Handle an error using registered handlers.

        Returns:
            True if some handler dealt with the error
        """
        error_key = f"{error_info.context.component}_{error_info.severity.value}"
        self.error_stats[error_key] = self.error_stats.get(error_key, 0) + 1

        for handler in self.handlers:
            if handler.can_handle(error_info) and handler.handle(error_info):
                return True

        return False

    def create_error_context(self, operation: str, component: str, **metadata) -> ErrorContext:
        return ErrorContext(operation=operation, component=component, metadata=metadata)

    def get_error_stats(self) -> Dict[str, int]:
        return self.error_stats.copy()

    def reset_error_stats(self) -> None:
        self.error_stats.clear()


# Global error handling service instance
_error_service = ErrorHandlingService()


def get_error_service() -> ErrorHandlingService:
    """Get the global error handling service."""
    return _error_service


def log_and_continue(message: str,
                     component: str = "unknown_component",
                     severity: ErrorSeverity = ErrorSeverity.WARNING,
                     operation: str = "log_and_continue",
                     exception: Optional[Exception] = None,
                     **metadata) -> None:
    """Report an absorbed failure and continue execution."""
    context = _error_service.create_error_context(operation, component, **metadata)

    error_info = ErrorInfo(
        severity=severity,
        message=message,
        exception=exception,
        context=context
    )

    _error_service.handle_error(error_info)
