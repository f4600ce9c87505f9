"""
SQL Query Module for the Festival Insights Backend.

Provides parameterized SQL read queries for the correlation engine
(correlation_queries). Follows the Repository Pattern for clean separation
between business logic and data access; all queries are executed through
festival_insights.services.warehouse.WarehouseReader.

Example usage:
    from festival_insights.sql import WEATHER_DAYS_QUERY, get_source_count_query

    rows = await conn.fetch(WEATHER_DAYS_QUERY, since)
    count = await conn.fetchval(get_source_count_query(DataSource.WEATHER))
"""

# =============================================================================
# CORRELATION QUERIES - Warehouse reads for the correlation engine
# =============================================================================

from festival_insights.sql.correlation_queries import (
    CLICK_EVENTS_QUERY,
    ENGAGEMENT_DAYS_QUERY,
    HASHTAG_USAGE_QUERY,
    SENTIMENT_DAYS_QUERY,
    SOURCE_TABLES,
    WEATHER_DAYS_QUERY,
    get_source_count_query,
)


__all__ = [
    "CLICK_EVENTS_QUERY",
    "ENGAGEMENT_DAYS_QUERY",
    "HASHTAG_USAGE_QUERY",
    "SENTIMENT_DAYS_QUERY",
    "SOURCE_TABLES",
    "WEATHER_DAYS_QUERY",
    "get_source_count_query",
]
