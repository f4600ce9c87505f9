"""
Insight & Action-Item Synthesizer.

Combines the four domain outcomes into one FullInsightsReport:

- keyInsights: every available report's insights in the order weather,
  hashtags, sentiment, attribution, with duplicates removed (first wins)
- actionItems: prioritized actions derived from the reports, never empty
- dataQuality / narrativeConstraints: the Data-Quality Guard's view of the
  account series, for any narrative layer built on raw metrics

Follower-growth insights are dropped whenever follower tracking is flagged
as unreliable, even if the sentiment analyzer itself produced a report.

generate_full_insights_report() is the async entry point. It gates each
analyzer on a row-count pre-check and runs all of them concurrently in an
asyncio.TaskGroup. Every task catches its own failure and turns it into an
unavailable(failed) section, so one broken source never cancels the
others. Cancellation of the whole request still propagates.
"""

import asyncio
import logging
from datetime import date
from typing import Awaitable, Callable, List, Optional, Sequence, Type, TypeVar

from festival_insights.models import (
    ActionItem,
    AnalysisPeriod,
    AnalyzerOutcome,
    AttributionOutcome,
    DataQualityAssessment,
    DataSource,
    FullInsightsReport,
    HashtagOutcome,
    Priority,
    SentimentOutcome,
    UnavailableReason,
    WeatherOutcome,
)
from festival_insights.services.alignment import lookback_period
from festival_insights.services.attribution_roi import run_attribution_roi
from festival_insights.services.data_quality import (
    MIN_POPULATED_DAYS,
    build_narrative_constraints,
    run_account_quality,
)
from festival_insights.services.hashtag_performance import (
    DEFAULT_MIN_USAGE,
    run_hashtag_performance,
)
from festival_insights.services.sentiment_growth import run_sentiment_growth
from festival_insights.services.warehouse import WarehouseReader
from festival_insights.services.weather_engagement import run_weather_engagement


logger = logging.getLogger(__name__)

OutcomeT = TypeVar("OutcomeT", bound=AnalyzerOutcome)


# =============================================================================
# Constants
# =============================================================================

WEATHER_IMPACT: str = "Improved engagement during optimal weather"

TOP_HASHTAGS_IN_ACTION: int = 3

DEFAULT_ACTION_ITEM = ActionItem(
    priority=Priority.MEDIUM,
    action="Continue collecting data for more accurate insights",
    expectedImpact="Better correlation analysis with more data points",
)


# =============================================================================
# Pure Synthesis
# =============================================================================


def _follower_claims_allowed(
    sentiment: SentimentOutcome,
    data_quality: Sequence[DataQualityAssessment],
) -> bool:
    if not sentiment.is_available or not sentiment.data.followerDataQuality.isReliable:
        return False
    return not any(a.suppressGrowthClaims for a in data_quality)


def _dedupe(items: List[str]) -> List[str]:
    seen = set()
    unique: List[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            unique.append(item)
    return unique


def synthesize_report(
    period: AnalysisPeriod,
    weather: WeatherOutcome,
    hashtags: HashtagOutcome,
    sentiment: SentimentOutcome,
    attribution: AttributionOutcome,
    data_quality: Sequence[DataQualityAssessment] = (),
) -> FullInsightsReport:
    """
    Merge four analyzer outcomes into a FullInsightsReport.

    Args:
        period: Lookback window of the report
        weather: Weather <-> engagement outcome
        hashtags: Hashtag <-> performance outcome
        sentiment: Sentiment <-> follower-growth outcome
        attribution: Attribution <-> conversion outcome
        data_quality: Account-level assessments (followers, engagement, reach)

    Returns:
        FullInsightsReport whose actionItems always holds at least one item.
    """
    insights: List[str] = []
    action_items: List[ActionItem] = []

    if weather.is_available:
        insights.extend(weather.data.insights)
        for recommendation in weather.data.recommendations:
            action_items.append(
                ActionItem(
                    priority=Priority.MEDIUM,
                    action=recommendation,
                    expectedImpact=WEATHER_IMPACT,
                )
            )

    if hashtags.is_available:
        insights.extend(hashtags.data.insights)
        top = hashtags.data.topPerformers[:TOP_HASHTAGS_IN_ACTION]
        if top:
            action_items.append(
                ActionItem(
                    priority=Priority.HIGH,
                    action=f"Continue using top hashtags: {', '.join(h.hashtag for h in top)}",
                    expectedImpact="Maintain high engagement rates",
                )
            )

    if _follower_claims_allowed(sentiment, data_quality):
        insights.extend(sentiment.data.insights)

    if attribution.is_available:
        insights.extend(attribution.data.insights)
        facebook = attribution.data.byPlatform.facebook
        instagram = attribution.data.byPlatform.instagram
        winner: Optional[str] = None
        if facebook.rate > instagram.rate:
            winner = "Facebook"
        elif instagram.rate > facebook.rate:
            winner = "Instagram"
        if winner:
            action_items.append(
                ActionItem(
                    priority=Priority.HIGH,
                    action=f"Increase {winner} content budget",
                    expectedImpact=f"Higher conversion rate on {winner}",
                )
            )

    if not action_items:
        action_items.append(DEFAULT_ACTION_ITEM)

    return FullInsightsReport(
        period=period,
        weather=weather,
        hashtags=hashtags,
        sentiment=sentiment,
        attribution=attribution,
        keyInsights=_dedupe(insights),
        actionItems=action_items,
        dataQuality=list(data_quality),
        narrativeConstraints=build_narrative_constraints(data_quality),
    )


# =============================================================================
# Concurrent Orchestration
# =============================================================================


async def _gated_analysis(
    reader: WarehouseReader,
    source: DataSource,
    outcome_cls: Type[OutcomeT],
    run: Callable[[], Awaitable[OutcomeT]],
) -> OutcomeT:
    """Run one analyzer behind its pre-check, isolating any failure."""
    try:
        if await reader.count_source_rows(source) == 0:
            logger.info("Source %s not connected; skipping analysis", source.value)
            return outcome_cls.unavailable(
                UnavailableReason.NOT_CONNECTED,
                detail=f"No {source.value} data has been loaded",
            )
        outcome = await run()
    except Exception as e:
        logger.error("%s analysis failed: %s", source.value, e, exc_info=True)
        return outcome_cls.unavailable(
            UnavailableReason.FAILED,
            detail=f"{source.value} analysis failed: {type(e).__name__}",
        )

    logger.info(
        "%s analysis: %s%s",
        source.value,
        outcome.status.value,
        f" ({outcome.reason.value})" if outcome.reason else "",
    )
    return outcome


async def _account_quality(
    reader: WarehouseReader,
    days: int,
    min_populated_days: int,
    today: Optional[date],
) -> List[DataQualityAssessment]:
    try:
        response = await run_account_quality(reader, days, min_populated_days, today=today)
    except Exception as e:
        logger.error("Account data-quality assessment failed: %s", e, exc_info=True)
        return []
    return response.assessments


async def generate_full_insights_report(
    reader: WarehouseReader,
    days: int,
    min_usage: int = DEFAULT_MIN_USAGE,
    min_populated_days: int = MIN_POPULATED_DAYS,
    today: Optional[date] = None,
) -> FullInsightsReport:
    """
    Run every analyzer concurrently and synthesize the full report.

    Args:
        reader: Injected warehouse reader
        days: Lookback window in days
        min_usage: Minimum uses for a hashtag to be ranked
        min_populated_days: Density threshold for the Data-Quality Guard
        today: Anchor date; defaults to date.today()

    Returns:
        FullInsightsReport. Sections whose source is empty are
        unavailable(not_connected); sections whose analyzer raised are
        unavailable(failed).
    """
    period = lookback_period(days, today)
    logger.info("Generating full insights report for %d days", days)

    async with asyncio.TaskGroup() as tg:
        weather_task = tg.create_task(
            _gated_analysis(
                reader,
                DataSource.WEATHER,
                WeatherOutcome,
                lambda: run_weather_engagement(reader, days, today=today),
            )
        )
        hashtag_task = tg.create_task(
            _gated_analysis(
                reader,
                DataSource.HASHTAGS,
                HashtagOutcome,
                lambda: run_hashtag_performance(reader, days, min_usage, today=today),
            )
        )
        sentiment_task = tg.create_task(
            _gated_analysis(
                reader,
                DataSource.SENTIMENT,
                SentimentOutcome,
                lambda: run_sentiment_growth(reader, days, min_populated_days, today=today),
            )
        )
        attribution_task = tg.create_task(
            _gated_analysis(
                reader,
                DataSource.ATTRIBUTION,
                AttributionOutcome,
                lambda: run_attribution_roi(reader, days, today=today),
            )
        )
        quality_task = tg.create_task(_account_quality(reader, days, min_populated_days, today))

    return synthesize_report(
        period,
        weather_task.result(),
        hashtag_task.result(),
        sentiment_task.result(),
        attribution_task.result(),
        quality_task.result(),
    )
