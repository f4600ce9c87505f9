"""
Warehouse Reader - injected read client for the correlation engine.

The analyzers never construct their own database clients. Request handling
code creates a WarehouseReader around the application's asyncpg pool (or a
test double) and passes it in; the analyzers only call the fetch methods
below and work on the returned in-memory records.

Each fetch issues exactly one parameterized query. Upstream failures
(asyncpg errors, timeouts) propagate unchanged: substituting defaults for a
failed read would silently corrupt the sample.
"""

import logging
from datetime import date
from typing import Any, List, Optional

from asyncpg import Pool

from festival_insights.models import (
    ClickEvent,
    DataSource,
    EngagementDay,
    HashtagUsage,
    SentimentDay,
    WeatherDay,
)
from festival_insights.sql.correlation_queries import (
    CLICK_EVENTS_QUERY,
    ENGAGEMENT_DAYS_QUERY,
    HASHTAG_USAGE_QUERY,
    SENTIMENT_DAYS_QUERY,
    WEATHER_DAYS_QUERY,
    get_source_count_query,
)


logger = logging.getLogger(__name__)


def _as_float(value: Any) -> Optional[float]:
    # NUMERIC columns arrive as Decimal
    if value is None:
        return None
    return float(value)


class WarehouseReader:
    """
    Read-only access to the analytics warehouse.

    Args:
        pool: asyncpg connection pool (or any object exposing an async
            `acquire()` context manager yielding a connection).

    Example:
        >>> reader = WarehouseReader(await get_db_pool())
        >>> weather = await reader.fetch_weather_days(date(2026, 7, 1))
    """

    def __init__(self, pool: Pool):
        self._pool = pool

    async def _fetch(self, query: str, *args: Any) -> List[Any]:
        async with self._pool.acquire() as conn:
            return await conn.fetch(query, *args)

    # -------------------------------------------------------------------------
    # Daily series
    # -------------------------------------------------------------------------

    async def fetch_weather_days(self, since: date) -> List[WeatherDay]:
        rows = await self._fetch(WEATHER_DAYS_QUERY, since)
        return [
            WeatherDay(
                date=row['date'],
                tempAvg=_as_float(row['temp_avg']),
                rain=_as_float(row['rain']),
            )
            for row in rows
        ]

    async def fetch_engagement_days(self, since: date) -> List[EngagementDay]:
        rows = await self._fetch(ENGAGEMENT_DAYS_QUERY, since)
        return [
            EngagementDay(
                date=row['date'],
                engagement=_as_float(row['engagement']),
                reach=_as_float(row['reach']),
                followers=_as_float(row['followers']),
            )
            for row in rows
        ]

    async def fetch_sentiment_days(self, since: date) -> List[SentimentDay]:
        rows = await self._fetch(SENTIMENT_DAYS_QUERY, since)
        return [
            SentimentDay(
                date=row['date'],
                avgSentimentScore=_as_float(row['avg_sentiment_score']),
            )
            for row in rows
        ]

    # -------------------------------------------------------------------------
    # Event-level records
    # -------------------------------------------------------------------------

    async def fetch_hashtag_usage(self, since: date) -> List[HashtagUsage]:
        rows = await self._fetch(HASHTAG_USAGE_QUERY, since)
        return [
            HashtagUsage(
                hashtag=row['hashtag'],
                color=row['color'],
                engagement=_as_float(row['engagement']),
                reach=_as_float(row['reach']),
            )
            for row in rows
        ]

    async def fetch_click_events(self, since: date) -> List[ClickEvent]:
        rows = await self._fetch(CLICK_EVENTS_QUERY, since)
        return [
            ClickEvent(
                timestamp=row['click_timestamp'],
                utmSource=row['utm_source'],
                utmMedium=row['utm_medium'],
                converted=bool(row['converted']),
                conversionValue=_as_float(row['conversion_value']),
            )
            for row in rows
        ]

    # -------------------------------------------------------------------------
    # Pre-check
    # -------------------------------------------------------------------------

    async def count_source_rows(self, source: DataSource) -> int:
        """Total rows in the source's backing table (0 means not connected)."""
        query = get_source_count_query(source)
        async with self._pool.acquire() as conn:
            count = await conn.fetchval(query)
        logger.debug("Source %s has %s rows", source.value, count)
        return int(count or 0)
