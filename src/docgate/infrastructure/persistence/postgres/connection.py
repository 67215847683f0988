"""PostgreSQL async connection pool."""

import psycopg
from psycopg_pool import AsyncConnectionPool

from docgate.domain.exceptions import StoreError


def create_pool(conninfo: str, min_size: int = 2, max_size: int = 10) -> AsyncConnectionPool:
    """Create async connection pool.

    Pool is created with open=False. Caller must call await pool.open()
    before use (PoolLifespanMiddleware does it on ASGI startup).
    """
    return AsyncConnectionPool(
        conninfo=conninfo,
        min_size=min_size,
        max_size=max_size,
        open=False,
        name="docgate",
    )


async def check_connection(pool: AsyncConnectionPool) -> None:
    """Round-trip a trivial query. Raises StoreError if the database is unreachable."""
    try:
        async with pool.connection() as conn:
            await conn.execute("SELECT 1")
    except psycopg.Error as e:
        raise StoreError(f"Database unavailable: {e}") from e
