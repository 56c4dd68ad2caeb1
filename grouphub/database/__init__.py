import logging
from contextlib import asynccontextmanager
from pathlib import Path

import asyncpg
from fastapi import FastAPI
from yoyo import get_backend, read_migrations

from grouphub.utils.config import (
    db_connection_string, DB_POOL_MIN_SIZE, DB_POOL_MAX_SIZE, RUN_MIGRATIONS
)

logger = logging.getLogger(__name__)

MIGRATIONS_PATH = Path(__file__).parent / "migrations"


def run_migrations(database_url: str, auto_apply: bool = True) -> dict:
    """
    Run database migrations using yoyo.

    Args:
        database_url: PostgreSQL connection string
        auto_apply: If True, automatically apply pending migrations

    Returns:
        dict with migration status
    """
    backend = get_backend(database_url)
    migrations = read_migrations(str(MIGRATIONS_PATH))

    try:
        pending_list = list(backend.to_apply(migrations))
        result = {
            "pending_count": len(pending_list),
            "pending": [m.id for m in pending_list],
            "newly_applied": []
        }

        if pending_list and auto_apply:
            logger.info("Applying %d pending migration(s): %s", len(pending_list), result["pending"])
            try:
                backend.apply_migrations(backend.to_apply(migrations))
                result["newly_applied"] = result["pending"]
            except Exception as e:
                # Another worker applied the same migrations first.
                if "duplicate key" in str(e) or "UniqueViolation" in type(e).__name__:
                    logger.info("Migrations already applied by another worker")
                else:
                    raise
        elif pending_list:
            logger.warning("%d pending migrations not applied (auto_apply=False)", len(pending_list))
        else:
            logger.info("Database schema is up to date")
    finally:
        backend.connection.close()

    return result


async def create_db_pool(dsn: str = db_connection_string) -> asyncpg.Pool:
    return await asyncpg.create_pool(
        dsn,
        min_size=DB_POOL_MIN_SIZE,
        max_size=DB_POOL_MAX_SIZE,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """FastAPI lifespan manager: schema migrations and the connection pool."""

    if RUN_MIGRATIONS:
        logger.info("Running database migrations...")
        try:
            migration_result = run_migrations(db_connection_string, auto_apply=True)
        except Exception as e:
            logger.error("Migration failed: %s", e)
            raise
        if migration_result["newly_applied"]:
            logger.info("Applied migrations: %s", migration_result["newly_applied"])

    app.state.db_pool = await create_db_pool()

    yield

    logger.info("Shutting down server...")
    await app.state.db_pool.close()
    logger.info("Group service shutdown complete")
