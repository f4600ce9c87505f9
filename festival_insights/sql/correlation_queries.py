"""
Correlation Queries Module for the Festival Insights Backend.

Provides parameterized PostgreSQL read queries for the correlation engine.
Every daily query joins its fact table to dim_date so rows come back keyed
by calendar date, and takes the lookback start date as $1. Nothing here
writes: the engine is read-only.

Sources:
- fact_weather_daily: daily temperature and precipitation
- fact_account_insights_daily: page engagement, reach and follows, one row
  per connected account per day (summed per date here)
- agg_sentiment_daily: daily mean comment sentiment
- fact_content_hashtag + dim_hashtag: hashtag uses, pre-joined to each
  content item's latest fact_content_insights snapshot
- fact_link_clicks + dim_link: tracked-link clicks with UTM tags

This module follows the Repository Pattern for clean separation between
business logic and data access.
"""

from typing import Dict

from festival_insights.models import DataSource


# =============================================================================
# PRE-CHECK COUNT TABLES
# =============================================================================

# Row count of the backing table decides whether a source is connected at all.
# Table names are interpolated, so they only ever come from this mapping.
SOURCE_TABLES: Dict[DataSource, str] = {
    DataSource.WEATHER: "fact_weather_daily",
    DataSource.HASHTAGS: "fact_content_hashtag",
    DataSource.SENTIMENT: "agg_sentiment_daily",
    DataSource.ATTRIBUTION: "fact_link_clicks",
}


def get_source_count_query(source: DataSource) -> str:
    """
    Generate the connected-source pre-check query.

    Args:
        source: Warehouse source to count rows for.

    Returns:
        SQL returning a single `row_count` column.

    Raises:
        KeyError: If the source has no registered table.
    """
    table = SOURCE_TABLES[source]
    return f"SELECT COUNT(*) AS row_count FROM {table}"


# =============================================================================
# DAILY SERIES QUERIES
# =============================================================================

WEATHER_DAYS_QUERY: str = """
    -- Daily weather for the lookback window
    SELECT
        d.date AS date,
        w.temp_avg AS temp_avg,
        w.rain AS rain
    FROM fact_weather_daily w
    JOIN dim_date d ON d.id = w.date_id
    WHERE d.date >= $1
    ORDER BY d.date ASC
"""

# Summed across connected accounts. SUM over all-NULL input stays NULL,
# which keeps "not measured" distinct from a measured zero.
ENGAGEMENT_DAYS_QUERY: str = """
    -- Account-level insights per date for the lookback window
    SELECT
        d.date AS date,
        SUM(a.page_engagement) AS engagement,
        SUM(a.page_reach) AS reach,
        SUM(a.page_follows) AS followers
    FROM fact_account_insights_daily a
    JOIN dim_date d ON d.id = a.date_id
    WHERE d.date >= $1
    GROUP BY d.date
    ORDER BY d.date ASC
"""

SENTIMENT_DAYS_QUERY: str = """
    -- Daily mean sentiment for the lookback window
    SELECT
        d.date AS date,
        s.avg_sentiment_score AS avg_sentiment_score
    FROM agg_sentiment_daily s
    JOIN dim_date d ON d.id = s.date_id
    WHERE d.date >= $1
      AND s.avg_sentiment_score IS NOT NULL
    ORDER BY d.date ASC
"""


# =============================================================================
# EVENT-LEVEL QUERIES
# =============================================================================

# One row per hashtag use. The LATERAL join picks each content item's most
# recent insights snapshot; uses without a snapshot come back with NULLs.
HASHTAG_USAGE_QUERY: str = """
    -- Hashtag uses with latest content performance snapshot
    SELECT
        h.hashtag AS hashtag,
        h.color AS color,
        latest.likes + latest.comments + latest.shares + latest.saves AS engagement,
        latest.reach AS reach
    FROM fact_content_hashtag ch
    JOIN dim_hashtag h ON h.id = ch.hashtag_id
    LEFT JOIN LATERAL (
        SELECT ci.likes, ci.comments, ci.shares, ci.saves, ci.reach
        FROM fact_content_insights ci
        WHERE ci.content_id = ch.content_id
        ORDER BY ci.snapshot_at DESC
        LIMIT 1
    ) latest ON TRUE
    WHERE ch.created_at >= $1
"""

CLICK_EVENTS_QUERY: str = """
    -- Tracked-link clicks with UTM tags for the lookback window
    SELECT
        c.click_timestamp AS click_timestamp,
        l.utm_source AS utm_source,
        l.utm_medium AS utm_medium,
        COALESCE(c.converted, FALSE) AS converted,
        c.conversion_value AS conversion_value
    FROM fact_link_clicks c
    JOIN dim_link l ON l.id = c.link_id
    WHERE c.click_timestamp >= $1
"""
