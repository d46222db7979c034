"""PostgreSQL async connection pool."""

from psycopg_pool import AsyncConnectionPool

from wardgate.config import Settings


def create_pool(settings: Settings) -> AsyncConnectionPool:
    """Create async connection pool for the configured database.

    The pool is created closed. Callers open it with ``await pool.open()``
    before the first unit of work and close it on shutdown.
    """
    return AsyncConnectionPool(
        conninfo=settings.database_url,
        min_size=settings.pool_min_size,
        max_size=settings.pool_max_size,
        kwargs={"application_name": "wardgate"},
        open=False,
    )
