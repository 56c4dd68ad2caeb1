from abc import ABC
from typing import Optional

from asyncpg import Connection

from grouphub.utils.logs import ErrorLogger, get_error_logger


class BaseController(ABC):
    """
    Abstract base class for all controller classes.

    Controllers turn validated request input into service calls and wrap
    the results in view objects. They raise ``ServiceError`` subclasses and
    leave the HTTP mapping to the handlers registered in ``grouphub.main``.
    """

    def __init__(
        self,
        db: Connection,
        logger: Optional[ErrorLogger] = None
    ):
        self._db = db
        self._logger = logger or get_error_logger()

    @property
    def db(self) -> Connection:
        """Database connection."""
        return self._db

    @property
    def logger(self) -> ErrorLogger:
        return self._logger
