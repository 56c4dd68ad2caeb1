import logging
import sys
from contextvars import ContextVar
from typing import Optional

import orjson

from grouphub.utils.config import LOG_LEVEL

_current_error_logger: ContextVar[Optional['ErrorLogger']] = ContextVar('current_error_logger', default=None)

_FORMAT = (
    '%(asctime)s - %(name)s - %(levelname)s - '
    '%(module)s:%(funcName)s:%(lineno)d - %(message)s'
)


def _build_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
    return handler


class ErrorLogger:
    """
    Request-scoped logger for errors, state changes and debugging.

    Keyword arguments passed to any level method are appended to the message
    as an orjson-encoded object, together with the request id when one is bound.
    """

    def __init__(self, name: str = "grouphub", request_id: Optional[str] = None):
        self.name = name
        self.request_id = request_id
        self.logger = logging.getLogger(f"grouphub.{name}")
        self.logger.setLevel(getattr(logging, LOG_LEVEL, logging.INFO))
        self.logger.propagate = False
        # One handler per named logger, shared by every request.
        if not self.logger.handlers:
            self.logger.addHandler(_build_handler())

    def _render(self, message: str, kwargs: dict) -> str:
        if self.request_id:
            kwargs = {'request_id': self.request_id, **kwargs}
        if not kwargs:
            return message
        return f"{message} | {orjson.dumps(kwargs, default=str).decode()}"

    def info(self, message: str, **kwargs):
        self.logger.info(self._render(message, kwargs), stacklevel=2)

    def warning(self, message: str, **kwargs):
        self.logger.warning(self._render(message, kwargs), stacklevel=2)

    def error(self, message: str, **kwargs):
        self.logger.error(self._render(message, kwargs), stacklevel=2)

    def debug(self, message: str, **kwargs):
        self.logger.debug(self._render(message, kwargs), stacklevel=2)

    def _log_exception(self, message: str, exc: Exception, kwargs: dict):
        error_data = {
            'error_type': type(exc).__name__,
            'error_message': str(exc),
            **kwargs
        }
        # Attribute the record to whoever called the public helper.
        self.logger.error(self._render(message, error_data), exc_info=exc, stacklevel=3)

    def exception(self, message: str, exc: Exception, **kwargs):
        """Log exception with full traceback."""
        self._log_exception(message, exc, kwargs)

    def log_database_error(self, operation: str, error: Exception, **kwargs):
        """Log database error."""
        self._log_exception(
            f"Database error during {operation}",
            error,
            {"operation": operation, **kwargs}
        )

    def log_unhandled_error(self, method: str, path: str, error: Exception):
        self._log_exception(
            f"Unhandled error on {method} {path}",
            error,
            {"method": method, "path": path}
        )


def get_error_logger() -> ErrorLogger:
    """
    Get the current request's error logger.

    Outside a request (startup, scripts, tests calling services directly) a
    fresh unbound logger is returned.
    """
    logger = _current_error_logger.get()
    if logger is None:
        return ErrorLogger()
    return logger
