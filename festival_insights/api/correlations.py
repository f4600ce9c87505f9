"""
FastAPI router module for cross-signal correlation endpoints.

This module implements endpoints for:
- Weather <-> engagement correlation
- Hashtag <-> performance ranking and trending-colour comparison
- Sentiment <-> follower-growth correlation (behind the Data-Quality Guard)
- Attribution <-> conversion ROI breakdown
- The full insights report combining all four
- The account-level data-quality view

Every endpoint takes a lookback window in days (7-365, narrowed by the
configured MIN/MAX_LOOKBACK_DAYS, default from settings). Statistical edge
cases (too few days, constant series, no clicks) come back as
`unavailable` sections with a reason, never as HTTP errors. Only genuine
upstream failures on single-analyzer endpoints become HTTP 500. The full
report isolates failures per section instead.
"""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, HTTPException, Query

from festival_insights.core.config import Settings
from festival_insights.core.dependencies import SettingsDep, WarehouseDep
from festival_insights.models import (
    AttributionOutcome,
    DataQualityResponse,
    FullInsightsReport,
    HashtagOutcome,
    SentimentOutcome,
    WeatherOutcome,
)
from festival_insights.services.attribution_roi import run_attribution_roi
from festival_insights.services.data_quality import run_account_quality
from festival_insights.services.hashtag_performance import run_hashtag_performance
from festival_insights.services.sentiment_growth import run_sentiment_growth
from festival_insights.services.synthesizer import generate_full_insights_report
from festival_insights.services.weather_engagement import run_weather_engagement

# Configure logging
logger = logging.getLogger(__name__)

# Create router with prefix and tags for OpenAPI documentation
router = APIRouter(prefix="/correlations", tags=["correlations"])


# =============================================================================
# Query Parameters
# =============================================================================

DaysQuery = Annotated[
    Optional[int],
    Query(ge=7, le=365, description="Lookback window in days (defaults to DEFAULT_LOOKBACK_DAYS)"),
]


def _resolve_days(days: Optional[int], settings: Settings) -> int:
    """
    Requested lookback, or the configured default when omitted.

    Raises:
        HTTPException 422: If days falls outside the configured lookback bounds
    """
    if days is None:
        return settings.default_lookback_days
    if not settings.min_lookback_days <= days <= settings.max_lookback_days:
        raise HTTPException(
            status_code=422,
            detail=(
                f"days must be between {settings.min_lookback_days} "
                f"and {settings.max_lookback_days}"
            ),
        )
    return days


# =============================================================================
# Domain Analyzer Endpoints
# =============================================================================


@router.get("/weather", response_model=WeatherOutcome)
async def get_weather_correlation(
    reader: WarehouseDep,
    settings: SettingsDep,
    days: DaysQuery = None,
) -> WeatherOutcome:
    """
    Correlate daily temperature and rain with engagement and reach.

    Returns:
        WeatherOutcome: available with temperature/rain correlations, sunny
        vs rainy means, insights and recommendations; or unavailable with a
        reason (no_data, insufficient_data).

    Raises:
        HTTPException 500: If the warehouse read fails
    """
    try:
        return await run_weather_engagement(reader, _resolve_days(days, settings))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error computing weather correlation: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Error computing weather correlation: {str(e)}",
        )


@router.get("/hashtags", response_model=HashtagOutcome)
async def get_hashtag_performance(
    reader: WarehouseDep,
    settings: SettingsDep,
    days: DaysQuery = None,
    min_usage: Optional[int] = Query(
        None, ge=1, description="Minimum uses for a hashtag to be ranked"
    ),
) -> HashtagOutcome:
    """
    Rank hashtags by engagement rate and compare trending colours.

    Returns:
        HashtagOutcome: available with top/worst performers, colour buckets
        and insights; or unavailable (no_data, insufficient_data).

    Raises:
        HTTPException 500: If the warehouse read fails
    """
    try:
        return await run_hashtag_performance(
            reader,
            _resolve_days(days, settings),
            min_usage or settings.hashtag_min_usage,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error computing hashtag performance: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Error computing hashtag performance: {str(e)}",
        )


@router.get("/sentiment", response_model=SentimentOutcome)
async def get_sentiment_growth(
    reader: WarehouseDep,
    settings: SettingsDep,
    days: DaysQuery = None,
) -> SentimentOutcome:
    """
    Correlate daily sentiment with follower growth.

    Sparse follower tracking yields unavailable(unreliable_data) with the
    Data-Quality Guard's warnings attached.

    Raises:
        HTTPException 500: If the warehouse read fails
    """
    try:
        return await run_sentiment_growth(
            reader,
            _resolve_days(days, settings),
            settings.min_populated_days,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error computing sentiment correlation: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Error computing sentiment correlation: {str(e)}",
        )


@router.get("/attribution", response_model=AttributionOutcome)
async def get_attribution_roi(
    reader: WarehouseDep,
    settings: SettingsDep,
    days: DaysQuery = None,
) -> AttributionOutcome:
    """
    Break tracked-link conversions down by platform and content format.

    Raises:
        HTTPException 500: If the warehouse read fails
    """
    try:
        return await run_attribution_roi(reader, _resolve_days(days, settings))
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error computing attribution ROI: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Error computing attribution ROI: {str(e)}",
        )


# =============================================================================
# Combined Endpoints
# =============================================================================


@router.get("/full-report", response_model=FullInsightsReport)
async def get_full_insights_report(
    reader: WarehouseDep,
    settings: SettingsDep,
    days: DaysQuery = None,
) -> FullInsightsReport:
    """
    Run all four analyzers concurrently and synthesize one report.

    A failing source only marks its own section unavailable(failed); the
    remaining sections are still returned. actionItems is never empty.
    """
    try:
        return await generate_full_insights_report(
            reader,
            _resolve_days(days, settings),
            min_usage=settings.hashtag_min_usage,
            min_populated_days=settings.min_populated_days,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error generating full insights report: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Error generating full insights report: {str(e)}",
        )


@router.get("/data-quality", response_model=DataQualityResponse)
async def get_data_quality(
    reader: WarehouseDep,
    settings: SettingsDep,
    days: DaysQuery = None,
) -> DataQualityResponse:
    """
    Density assessments for followers, engagement and reach, plus the
    narrative constraints they imply.

    Raises:
        HTTPException 500: If the warehouse read fails
    """
    try:
        return await run_account_quality(
            reader,
            _resolve_days(days, settings),
            settings.min_populated_days,
        )
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error assessing data quality: {e}", exc_info=True)
        raise HTTPException(
            status_code=500,
            detail=f"Error assessing data quality: {str(e)}",
        )
