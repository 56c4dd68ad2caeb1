from .errors import ErrorLogger, get_error_logger
from .dependencies import (
    get_error_logger_dependency,
    ErrorLoggerDep,
)
from .middleware import LoggingMiddleware

__all__ = [
    "ErrorLogger",
    "get_error_logger",
    "get_error_logger_dependency",
    "ErrorLoggerDep",
    "LoggingMiddleware",
]
