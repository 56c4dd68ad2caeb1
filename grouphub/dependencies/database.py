from typing import Annotated

from asyncpg import Connection
from fastapi import Depends, Request


async def acquire_db_connection(request: Request):
    async with request.app.state.db_pool.acquire() as connection:
        yield connection


DbConnectionDep = Annotated[Connection, Depends(acquire_db_connection)]
