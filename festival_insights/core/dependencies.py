"""
FastAPI dependency injection module for the Festival Insights backend.

This module provides reusable FastAPI dependencies for configuration access
and warehouse reads. Endpoint handlers never touch the connection pool
directly: they receive a WarehouseReader and hand it to the correlation
services, which keeps the services testable with plain in-memory doubles.

Key Dependencies Provided:
- get_settings_dependency: Returns the cached Settings singleton
- get_warehouse_reader: Wraps the application pool in a WarehouseReader
- SettingsDep: Type alias for injecting Settings into endpoints
- WarehouseDep: Type alias for injecting a WarehouseReader into endpoints

Usage Examples:
    @router.get("/correlations/weather")
    async def weather(reader: WarehouseDep, settings: SettingsDep) -> WeatherOutcome:
        return await run_weather_engagement(reader, settings.default_lookback_days)

Testing:
    app.dependency_overrides[get_warehouse_reader] = lambda: fake_reader
    app.dependency_overrides[get_settings_dependency] = lambda: test_settings
"""

from typing import Annotated

from fastapi import Depends

from festival_insights.core.config import Settings, get_settings
from festival_insights.core.database import get_db_pool
from festival_insights.services.warehouse import WarehouseReader


# =============================================================================
# Settings Dependency
# =============================================================================

def get_settings_dependency() -> Settings:
    """
    Return the Settings singleton instance.

    This is a thin wrapper around get_settings() so tests can swap the
    configuration through FastAPI's dependency override mechanism.

    Raises:
        pydantic.ValidationError: If required environment variables
            (DATABASE_URL) are missing.
    """
    return get_settings()


# =============================================================================
# Warehouse Dependency
# =============================================================================

async def get_warehouse_reader() -> WarehouseReader:
    """
    Build a WarehouseReader around the application's connection pool.

    The reader holds no connection of its own; each query acquires one from
    the pool and releases it immediately, so concurrent analyzers inside one
    request do not contend for a single connection.

    Raises:
        asyncpg.PostgresError: If the pool has to be created lazily and the
            database is unreachable.
    """
    pool = await get_db_pool()
    return WarehouseReader(pool)


# =============================================================================
# Type Aliases for Dependency Injection
# =============================================================================

# Usage: async def endpoint(settings: SettingsDep)
SettingsDep = Annotated[Settings, Depends(get_settings_dependency)]

# Usage: async def endpoint(reader: WarehouseDep)
WarehouseDep = Annotated[WarehouseReader, Depends(get_warehouse_reader)]
