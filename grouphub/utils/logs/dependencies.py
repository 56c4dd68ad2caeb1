from typing import Annotated
from fastapi import Depends

from .errors import ErrorLogger, get_error_logger


async def get_error_logger_dependency() -> ErrorLogger:
    """
    Dependency for ErrorLogger.
    Returns the logger bound by LoggingMiddleware for the current request.
    """
    return get_error_logger()


ErrorLoggerDep = Annotated[ErrorLogger, Depends(get_error_logger_dependency)]
