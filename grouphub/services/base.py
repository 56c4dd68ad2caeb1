from abc import ABC
from contextlib import asynccontextmanager
from typing import Optional

import asyncpg
from asyncpg import Connection

from grouphub.utils.errors import StoreError
from grouphub.utils.logs import ErrorLogger, get_error_logger


class BaseService(ABC):
    """
    Abstract base class for all service layer classes.

    Services own the SQL for their tables and translate driver failures into
    the errors in ``grouphub.utils.errors``.
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

    @asynccontextmanager
    async def store_errors(self, operation: str, **context):
        """
        Re-raise any PostgresError escaping the block as a StoreError.

        Callers catch the specific violations they can explain (unique,
        foreign key) inside the block; whatever is left is logged in full and
        surfaced without driver detail.
        """
        try:
            yield
        except asyncpg.PostgresError as e:
            self._logger.log_database_error(operation, e, **context)
            raise StoreError(f"Database error during {operation}") from e
