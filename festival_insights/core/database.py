"""
Async PostgreSQL connection pool module for warehouse connectivity.

This module provides an async PostgreSQL connection pool using asyncpg. The
pool is owned by the application (created in the FastAPI lifespan) and handed
to request handlers, which wrap it in a WarehouseReader before passing it to
the correlation services. The services themselves never reach for this
module; they only see the reader they are given.

Key Components:
- Global connection pool singleton (_pool)
- init_db(): Initialize the connection pool at application startup
- get_db_pool(): Get the pool instance (initializes if needed)
- close_db(): Gracefully close the pool at application shutdown

Usage:
    await init_db()                              # lifespan startup
    reader = WarehouseReader(await get_db_pool())  # per request
    await close_db()                             # lifespan shutdown
"""

import logging
from typing import Dict, Optional

import asyncpg
from asyncpg import Pool

from festival_insights.core.config import get_settings


logger = logging.getLogger(__name__)

# Every session the engine opens is read-only and tagged in pg_stat_activity
WAREHOUSE_SERVER_SETTINGS: Dict[str, str] = {
    "application_name": "festival-insights",
    "default_transaction_read_only": "on",
}


# =============================================================================
# Global Pool Singleton
# =============================================================================

# None until init_db() is called
_pool: Optional[Pool] = None


# =============================================================================
# Pool Lifecycle Functions
# =============================================================================

async def init_db() -> Pool:
    """
    Open the warehouse pool if it is not open yet.

    Sizing and the command timeout come from Settings. Sessions are opened
    with WAREHOUSE_SERVER_SETTINGS, so a stray write fails at the database
    instead of succeeding silently.

    Raises:
        asyncpg.PostgresError: If connection to the database fails.
        OSError: If the database host is unreachable.
    """
    global _pool

    if _pool is None:
        settings = get_settings()
        _pool = await asyncpg.create_pool(
            dsn=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            command_timeout=settings.db_command_timeout,
            server_settings=WAREHOUSE_SERVER_SETTINGS,
        )
        logger.info(
            "Warehouse pool opened (min=%d, max=%d)",
            settings.db_pool_min_size, settings.db_pool_max_size,
        )

    return _pool


async def get_db_pool() -> Pool:
    """Return the warehouse pool, opening it lazily on first use."""
    if _pool is None:
        return await init_db()
    return _pool


async def close_db() -> None:
    """Close the warehouse pool; a no-op when it was never opened."""
    global _pool

    if _pool is not None:
        await _pool.close()
        _pool = None
        logger.info("Warehouse pool closed")
