"""
Sentiment <-> Follower-Growth analyzer.

Relates daily mean comment sentiment to day-over-day follower growth.

Follower counts are the sparsest series in the warehouse, so the
Data-Quality Guard runs first: when follower tracking is unreliable the
analyzer reports nothing (reason unreliable_data) and hands the guard's
warnings upward instead of risking a "zero growth" conclusion.

Growth is derived on the follower series itself, in date order, before it
is joined to sentiment.
"""

import logging
from datetime import date
from typing import List, Optional, Sequence

from festival_insights.models import (
    AnalysisPeriod,
    DailyMetricPoint,
    EngagementDay,
    GrowthBucket,
    SentimentDay,
    SentimentGrowthReport,
    SentimentImpact,
    SentimentOutcome,
    UnavailableReason,
)
from festival_insights.services.alignment import (
    MIN_MATCHED_DAYS,
    align_pair,
    compute_daily_deltas,
    lookback_period,
    points_from_records,
)
from festival_insights.services.correlation import build_correlation_result, mean
from festival_insights.services.data_quality import MIN_POPULATED_DAYS, assess_follower_tracking
from festival_insights.services.warehouse import WarehouseReader


logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

# Sentiment above +0.3 / below -0.3 counts as a strongly positive / negative day
HIGH_SENTIMENT_THRESHOLD: float = 0.3

POSITIVE_CORRELATION_THRESHOLD: float = 0.3

# Positive-day growth must beat negative-day growth by this factor
POSITIVE_GROWTH_FACTOR: float = 1.5


# =============================================================================
# Analysis
# =============================================================================


def _bucket(growths: List[float]) -> GrowthBucket:
    return GrowthBucket(avgFollowerGrowth=mean(growths), count=len(growths))


def analyze_sentiment_growth(
    sentiment_days: Sequence[SentimentDay],
    engagement_days: Sequence[EngagementDay],
    period: AnalysisPeriod,
    min_populated_days: int = MIN_POPULATED_DAYS,
) -> SentimentOutcome:
    """
    Correlate sentiment with follower growth over already fetched records.

    Args:
        sentiment_days: agg_sentiment_daily rows for the window
        engagement_days: Account insights per date (follower counts)
        period: Window the records cover
        min_populated_days: Follower density threshold for the guard

    Returns:
        SentimentOutcome: available with a SentimentGrowthReport, or
        unavailable (no_data / unreliable_data / insufficient_data).
    """
    if not sentiment_days or not engagement_days:
        return SentimentOutcome.unavailable(
            UnavailableReason.NO_DATA,
            detail="No sentiment or follower rows in the lookback window",
        )

    followers = points_from_records(engagement_days, "followers")
    quality = assess_follower_tracking(followers, period.days, min_populated_days)
    if not quality.isReliable:
        logger.info(
            "Sentiment analysis suppressed: follower data on %d of %d days",
            quality.populatedDays, quality.windowDays,
        )
        return SentimentOutcome.unavailable(
            UnavailableReason.UNRELIABLE_DATA,
            detail="Follower tracking is too sparse for growth analysis",
            warnings=quality.warnings,
        )

    sentiment = [
        DailyMetricPoint(date=s.date, value=s.avgSentimentScore) for s in sentiment_days
    ]
    growth = compute_daily_deltas(followers)
    aligned = align_pair(sentiment, growth)

    if len(aligned.dates) < MIN_MATCHED_DAYS:
        return SentimentOutcome.unavailable(
            UnavailableReason.INSUFFICIENT_DATA,
            detail=f"{len(aligned.dates)} matched days (minimum {MIN_MATCHED_DAYS})",
        )

    correlation = build_correlation_result(
        "sentiment", "follower growth", aligned.x, aligned.y
    )

    positive: List[float] = []
    negative: List[float] = []
    neutral: List[float] = []
    for score, delta in zip(aligned.x, aligned.y):
        if score > HIGH_SENTIMENT_THRESHOLD:
            positive.append(delta)
        elif score < -HIGH_SENTIMENT_THRESHOLD:
            negative.append(delta)
        else:
            neutral.append(delta)

    positive_growth = mean(positive)
    negative_growth = mean(negative)

    insights: List[str] = []
    if correlation.coefficient > POSITIVE_CORRELATION_THRESHOLD:
        insights.append("Positive sentiment correlates with follower growth")

    # A lift needs observed days on both sides
    if positive and negative and positive_growth > negative_growth * POSITIVE_GROWTH_FACTOR:
        lift = positive_growth / max(negative_growth, 1.0) * 100 - 100
        insights.append(
            f"High positive sentiment days see {lift:.0f}% more follower growth"
        )

    report = SentimentGrowthReport(
        period=period,
        correlation=correlation,
        sentimentImpact=SentimentImpact(
            highPositiveDays=_bucket(positive),
            highNegativeDays=_bucket(negative),
            neutralDays=_bucket(neutral),
        ),
        followerDataQuality=quality,
        insights=insights,
    )
    return SentimentOutcome.available(report, warnings=quality.warnings)


async def run_sentiment_growth(
    reader: WarehouseReader,
    days: int,
    min_populated_days: int = MIN_POPULATED_DAYS,
    today: Optional[date] = None,
) -> SentimentOutcome:
    """Fetch the window's sentiment and follower rows, then analyze them."""
    period = lookback_period(days, today)
    sentiment_days = await reader.fetch_sentiment_days(period.startDate)
    engagement_days = await reader.fetch_engagement_days(period.startDate)
    return analyze_sentiment_growth(sentiment_days, engagement_days, period, min_populated_days)
