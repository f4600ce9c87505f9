"""
Backend Services Module

This module contains the correlation engine for the Festival Insights
backend. Analyzers are pure functions over already fetched records; each has
an async `run_*` companion that fetches its records through an injected
WarehouseReader.

Services:
- correlation: Pearson coefficient, strength buckets, insight text, p-values
- alignment: Date-keyed inner join of daily series, follower deltas
- data_quality: Data-Quality Guard and narrative constraints
- weather_engagement: Weather <-> engagement analyzer
- hashtag_performance: Hashtag <-> performance analyzer
- sentiment_growth: Sentiment <-> follower-growth analyzer
- attribution_roi: Attribution <-> conversion analyzer
- synthesizer: Full insights report with concurrent, failure-isolated runs
- warehouse: WarehouseReader (read-only warehouse access)

All services are designed to be consumed by the API layer
(festival_insights/api/).
"""

# =============================================================================
# Correlation Primitives
# =============================================================================

from festival_insights.services.correlation import (
    calculate_pearson_correlation,
    get_correlation_strength,
    generate_correlation_insight,
    percentage_change,
    correlation_p_value,
    build_correlation_result,
)

# =============================================================================
# Series Alignment
# =============================================================================

from festival_insights.services.alignment import (
    MIN_MATCHED_DAYS,
    to_date_key,
    align_series,
    align_pair,
    compute_daily_deltas,
    lookback_period,
)

# =============================================================================
# Data-Quality Guard
# =============================================================================

from festival_insights.services.data_quality import (
    MIN_POPULATED_DAYS,
    assess_series_quality,
    assess_follower_tracking,
    assess_account_quality,
    build_narrative_constraints,
    run_account_quality,
)

# =============================================================================
# Domain Analyzers
# =============================================================================

from festival_insights.services.weather_engagement import (
    analyze_weather_engagement,
    run_weather_engagement,
)
from festival_insights.services.hashtag_performance import (
    analyze_hashtag_performance,
    run_hashtag_performance,
)
from festival_insights.services.sentiment_growth import (
    analyze_sentiment_growth,
    run_sentiment_growth,
)
from festival_insights.services.attribution_roi import (
    analyze_attribution_roi,
    run_attribution_roi,
)

# =============================================================================
# Synthesis and Data Access
# =============================================================================

from festival_insights.services.synthesizer import (
    synthesize_report,
    generate_full_insights_report,
)
from festival_insights.services.warehouse import WarehouseReader


__all__ = [
    # Correlation primitives
    "calculate_pearson_correlation",
    "get_correlation_strength",
    "generate_correlation_insight",
    "percentage_change",
    "correlation_p_value",
    "build_correlation_result",
    # Alignment
    "MIN_MATCHED_DAYS",
    "to_date_key",
    "align_series",
    "align_pair",
    "compute_daily_deltas",
    "lookback_period",
    # Data quality
    "MIN_POPULATED_DAYS",
    "assess_series_quality",
    "assess_follower_tracking",
    "assess_account_quality",
    "build_narrative_constraints",
    "run_account_quality",
    # Analyzers
    "analyze_weather_engagement",
    "run_weather_engagement",
    "analyze_hashtag_performance",
    "run_hashtag_performance",
    "analyze_sentiment_growth",
    "run_sentiment_growth",
    "analyze_attribution_roi",
    "run_attribution_roi",
    # Synthesis and data access
    "synthesize_report",
    "generate_full_insights_report",
    "WarehouseReader",
]
