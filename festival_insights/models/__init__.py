"""
Package initialization file for backend models.

This module exports all Pydantic schemas and enumerations from schemas.py and
enums.py, making them importable from festival_insights.models directly.

Usage:
    from festival_insights.models import (
        CorrelationResult,
        CorrelationStrength,
        FullInsightsReport,
        WeatherDay,
        # ... etc
    )
"""

# =============================================================================
# Enums
# =============================================================================

from festival_insights.models.enums import (
    CorrelationStrength,
    Priority,
    HashtagColor,
    Platform,
    ContentMedium,
    ReportStatus,
    UnavailableReason,
    DataSource,
)


# =============================================================================
# Schemas
# =============================================================================

from festival_insights.models.schemas import (
    # -------------------------------------------------------------------------
    # Warehouse input records
    # -------------------------------------------------------------------------
    DailyMetricPoint,
    WeatherDay,
    EngagementDay,
    SentimentDay,
    HashtagUsage,
    ClickEvent,

    # -------------------------------------------------------------------------
    # Alignment
    # -------------------------------------------------------------------------
    AlignedSeries,
    AlignedSeriesPair,

    # -------------------------------------------------------------------------
    # Statistics
    # -------------------------------------------------------------------------
    CorrelationResult,
    DataQualityAssessment,

    # -------------------------------------------------------------------------
    # Domain reports
    # -------------------------------------------------------------------------
    AnalysisPeriod,
    WeatherCorrelations,
    WeatherEngagementReport,
    HashtagPerformance,
    ColorBucket,
    ColorCorrelation,
    HashtagPerformanceReport,
    GrowthBucket,
    SentimentImpact,
    SentimentGrowthReport,
    PlatformStats,
    PlatformBreakdown,
    MediumStats,
    MediumBreakdown,
    TopConvertingContent,
    AttributionROIReport,

    # -------------------------------------------------------------------------
    # Tagged outcomes
    # -------------------------------------------------------------------------
    AnalyzerOutcome,
    WeatherOutcome,
    HashtagOutcome,
    SentimentOutcome,
    AttributionOutcome,

    # -------------------------------------------------------------------------
    # Synthesis
    # -------------------------------------------------------------------------
    ActionItem,
    FullInsightsReport,
    DataQualityResponse,
)


# =============================================================================
# Public API Declaration
# =============================================================================

__all__ = [
    # Enums
    "CorrelationStrength",
    "Priority",
    "HashtagColor",
    "Platform",
    "ContentMedium",
    "ReportStatus",
    "UnavailableReason",
    "DataSource",

    # Warehouse input records
    "DailyMetricPoint",
    "WeatherDay",
    "EngagementDay",
    "SentimentDay",
    "HashtagUsage",
    "ClickEvent",

    # Alignment
    "AlignedSeries",
    "AlignedSeriesPair",

    # Statistics
    "CorrelationResult",
    "DataQualityAssessment",

    # Domain reports
    "AnalysisPeriod",
    "WeatherCorrelations",
    "WeatherEngagementReport",
    "HashtagPerformance",
    "ColorBucket",
    "ColorCorrelation",
    "HashtagPerformanceReport",
    "GrowthBucket",
    "SentimentImpact",
    "SentimentGrowthReport",
    "PlatformStats",
    "PlatformBreakdown",
    "MediumStats",
    "MediumBreakdown",
    "TopConvertingContent",
    "AttributionROIReport",

    # Tagged outcomes
    "AnalyzerOutcome",
    "WeatherOutcome",
    "HashtagOutcome",
    "SentimentOutcome",
    "AttributionOutcome",

    # Synthesis
    "ActionItem",
    "FullInsightsReport",
    "DataQualityResponse",
]
