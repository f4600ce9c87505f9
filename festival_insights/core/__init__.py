"""
Core infrastructure package for the Festival Insights backend.

Provides:
- Configuration management via pydantic-settings
- Async PostgreSQL warehouse connectivity via asyncpg
- FastAPI dependency injection utilities

This module re-exports key components from submodules for convenient importing:

    from festival_insights.core import get_settings, get_db_pool, WarehouseDep

Components Re-exported:
    Settings: Pydantic settings class with all configuration parameters
    get_settings: Function returning the cached Settings singleton
    init_db: Async function to initialize the database connection pool
    close_db: Async function to close the database connection pool
    get_db_pool: Async function to get the database connection pool
    get_settings_dependency: FastAPI dependency returning Settings
    get_warehouse_reader: FastAPI dependency returning a WarehouseReader
    SettingsDep: Type alias for Settings dependency injection
    WarehouseDep: Type alias for WarehouseReader dependency injection
"""

# =============================================================================
# Re-exports from festival_insights.core.config
# =============================================================================
from festival_insights.core.config import Settings, get_settings

# =============================================================================
# Re-exports from festival_insights.core.database
# =============================================================================
from festival_insights.core.database import init_db, close_db, get_db_pool

# =============================================================================
# Re-exports from festival_insights.core.dependencies
# =============================================================================
from festival_insights.core.dependencies import (
    get_settings_dependency,
    get_warehouse_reader,
    SettingsDep,
    WarehouseDep,
)


__all__ = [
    # Configuration
    "Settings",
    "get_settings",
    # Database lifecycle
    "init_db",
    "close_db",
    "get_db_pool",
    # Dependency injection
    "get_settings_dependency",
    "get_warehouse_reader",
    "SettingsDep",
    "WarehouseDep",
]
