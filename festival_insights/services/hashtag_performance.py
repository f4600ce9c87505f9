"""
Hashtag <-> Performance analyzer.

Aggregates hashtag uses (each pre-joined to its content's latest insights
snapshot) into per-hashtag engagement rates, ranks them, and compares the
vendor's trending colours.

Rules:
- Every use counts toward timesUsed, even when the content has no
  snapshot yet; such uses add nothing to engagement or reach.
- avgEngagementRate = totalEngagement / totalReach x 100, or 0 when the
  hashtag reached nobody.
- Only hashtags used at least `min_usage` times are ranked.
- Colour buckets average the per-hashtag rates; colour is opaque vendor
  data and unclassified hashtags sit in no bucket.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Sequence

from festival_insights.models import (
    AnalysisPeriod,
    ColorBucket,
    ColorCorrelation,
    HashtagColor,
    HashtagOutcome,
    HashtagPerformance,
    HashtagPerformanceReport,
    HashtagUsage,
    UnavailableReason,
)
from festival_insights.services.alignment import lookback_period
from festival_insights.services.correlation import mean
from festival_insights.services.warehouse import WarehouseReader


logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

DEFAULT_MIN_USAGE: int = 3

# Length of the top and worst ranking lists
RANKING_SIZE: int = 10

# Red average below this share of the green average is flagged
RED_UNDERPERFORMANCE_RATIO: float = 0.5


@dataclass
class _HashtagTotals:
    hashtag: str
    color: Optional[HashtagColor]
    total_engagement: float = 0.0
    total_reach: float = 0.0
    count: int = 0


# =============================================================================
# Analysis
# =============================================================================


def _aggregate_usage(usages: Sequence[HashtagUsage]) -> Dict[str, _HashtagTotals]:
    totals: Dict[str, _HashtagTotals] = {}
    for usage in usages:
        entry = totals.get(usage.hashtag)
        if entry is None:
            entry = _HashtagTotals(hashtag=usage.hashtag, color=usage.color)
            totals[usage.hashtag] = entry
        # Uses without a snapshot still count
        entry.total_engagement += usage.engagement or 0.0
        entry.total_reach += usage.reach or 0.0
        entry.count += 1
    return totals


def _color_bucket(performances: List[HashtagPerformance], color: HashtagColor) -> ColorBucket:
    rates = [p.avgEngagementRate for p in performances if p.color == color]
    return ColorBucket(avgEngagement=mean(rates), count=len(rates))


def analyze_hashtag_performance(
    usages: Sequence[HashtagUsage],
    period: AnalysisPeriod,
    min_usage: int = DEFAULT_MIN_USAGE,
) -> HashtagOutcome:
    """
    Rank hashtags by engagement rate and compare trending colours.

    Args:
        usages: One record per hashtag use in the window
        period: Window the records cover
        min_usage: Minimum uses for a hashtag to be ranked

    Returns:
        HashtagOutcome: available with a HashtagPerformanceReport, or
        unavailable (no_data when there are no uses, insufficient_data when
        no hashtag reaches min_usage).
    """
    if not usages:
        return HashtagOutcome.unavailable(
            UnavailableReason.NO_DATA,
            detail="No hashtag usage in the lookback window",
        )

    performances = [
        HashtagPerformance(
            hashtag=t.hashtag,
            avgEngagementRate=(
                t.total_engagement / t.total_reach * 100 if t.total_reach > 0 else 0.0
            ),
            avgReach=t.total_reach / t.count,
            timesUsed=t.count,
            color=t.color,
        )
        for t in _aggregate_usage(usages).values()
        if t.count >= min_usage
    ]

    if not performances:
        logger.info("Hashtag analysis skipped: no hashtag used %d+ times", min_usage)
        return HashtagOutcome.unavailable(
            UnavailableReason.INSUFFICIENT_DATA,
            detail=f"No hashtag used at least {min_usage} times",
        )

    # Stable sort keeps first-seen order among equal rates
    ranked = sorted(performances, key=lambda p: p.avgEngagementRate, reverse=True)

    color_correlation = ColorCorrelation(
        green=_color_bucket(performances, HashtagColor.GREEN),
        blue=_color_bucket(performances, HashtagColor.BLUE),
        red=_color_bucket(performances, HashtagColor.RED),
    )
    green_avg = color_correlation.green.avgEngagement
    blue_avg = color_correlation.blue.avgEngagement
    red_avg = color_correlation.red.avgEngagement

    top = ranked[0]
    insights: List[str] = [
        f"Top performing hashtag: {top.hashtag} ({top.avgEngagementRate:.2f}% engagement)"
    ]

    if green_avg > blue_avg and green_avg > red_avg:
        insights.append(
            "Green (trending) hashtags show the best engagement - continue using them"
        )

    if 0 < red_avg < green_avg * RED_UNDERPERFORMANCE_RATIO:
        insights.append(
            "Red (overused) hashtags perform significantly worse - consider avoiding them"
        )

    report = HashtagPerformanceReport(
        period=period,
        topPerformers=ranked[:RANKING_SIZE],
        worstPerformers=list(reversed(ranked[-RANKING_SIZE:])),
        colorCorrelation=color_correlation,
        insights=insights,
    )
    return HashtagOutcome.available(report)


async def run_hashtag_performance(
    reader: WarehouseReader,
    days: int,
    min_usage: int = DEFAULT_MIN_USAGE,
    today: Optional[date] = None,
) -> HashtagOutcome:
    """Fetch the window's hashtag uses, then analyze them."""
    period = lookback_period(days, today)
    usages = await reader.fetch_hashtag_usage(period.startDate)
    return analyze_hashtag_performance(usages, period, min_usage)
