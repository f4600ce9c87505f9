"""
Data-Quality Guard - density check ahead of any metric narrative.

The warehouse writes a row per day even when a collector failed, so a
reading of exactly 0 is ambiguous: it may be a real zero or a day that was
never measured. Before anything claims "zero follower growth" or "weak
retention", the underlying series must be dense enough to tell the two
apart.

Rules:
- A day is POPULATED when its value is measured and non-zero.
- A series is RELIABLE when it has at least MIN_POPULATED_DAYS populated
  days, regardless of how long the requested window is.
- Unreliable series carry human-readable warnings. For follower tracking
  the assessment also sets suppressGrowthClaims, which downstream layers
  (the synthesizer and any LLM narrative built from raw metrics) must treat
  as a hard constraint.

Warnings are data, never exceptions.
"""

import logging
from datetime import date
from typing import Iterable, List, Optional, Sequence

from festival_insights.models import (
    DailyMetricPoint,
    DataQualityAssessment,
    DataQualityResponse,
    EngagementDay,
)
from festival_insights.services.alignment import lookback_period, points_from_records
from festival_insights.services.warehouse import WarehouseReader


logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

MIN_POPULATED_DAYS: int = 7

FOLLOWER_METRIC: str = "followers"


# =============================================================================
# Assessments
# =============================================================================


def _is_populated(value: Optional[float]) -> bool:
    return value is not None and value != 0


def assess_series_quality(
    points: Sequence[DailyMetricPoint],
    metric: str,
    window_days: int,
    min_populated_days: int = MIN_POPULATED_DAYS,
) -> DataQualityAssessment:
    """
    Classify one daily series as reliable or unreliable.

    Args:
        points: Daily readings for the window; None means not measured
        metric: Metric name used in warning text
        window_days: Length of the requested lookback window
        min_populated_days: Density threshold (independent of window_days)

    Returns:
        DataQualityAssessment with day counts, coverage and warnings.
    """
    total_days = len(points)
    populated_days = sum(1 for p in points if _is_populated(p.value))
    zero_days = sum(1 for p in points if p.value is not None and p.value == 0)
    missing_days = max(window_days - populated_days, 0)

    coverage = populated_days / window_days if window_days > 0 else 0.0
    coverage = max(0.0, min(1.0, coverage))

    is_reliable = populated_days >= min_populated_days

    warnings: List[str] = []
    if not is_reliable:
        warnings.append(
            f"Only {populated_days} of {window_days} days have {metric} data "
            f"(minimum {min_populated_days} required); treat {metric} as not "
            f"measured for this period."
        )
        if zero_days > 0:
            warnings.append(
                f"{zero_days} day(s) report {metric} as exactly 0; in a sparse "
                f"series these are likely collection gaps, not real zeros."
            )
        logger.info(
            "Unreliable %s series: %d populated of %d window days",
            metric, populated_days, window_days,
        )

    return DataQualityAssessment(
        metric=metric,
        windowDays=window_days,
        totalDays=total_days,
        populatedDays=populated_days,
        zeroDays=zero_days,
        missingDays=missing_days,
        minPopulatedDays=min_populated_days,
        coverageRatio=coverage,
        isReliable=is_reliable,
        warnings=warnings,
    )


def assess_follower_tracking(
    follower_points: Sequence[DailyMetricPoint],
    window_days: int,
    min_populated_days: int = MIN_POPULATED_DAYS,
) -> DataQualityAssessment:
    """
    Follower-specific assessment.

    Identical to assess_series_quality, but an unreliable result also sets
    suppressGrowthClaims and adds the explicit "no zero-growth claims"
    warning.
    """
    assessment = assess_series_quality(
        follower_points, FOLLOWER_METRIC, window_days, min_populated_days
    )
    if assessment.isReliable:
        return assessment

    warnings = list(assessment.warnings)
    warnings.append(
        "Follower tracking is sparse: do not report zero follower growth or "
        "weak retention for this period."
    )
    return assessment.model_copy(
        update={"suppressGrowthClaims": True, "warnings": warnings}
    )


def assess_account_quality(
    engagement_days: Sequence[EngagementDay],
    window_days: int,
    min_populated_days: int = MIN_POPULATED_DAYS,
) -> List[DataQualityAssessment]:
    """
    Assess followers, engagement and reach for the account-level series.

    Returns:
        Assessments in fixed order: followers, engagement, reach.
    """
    return [
        assess_follower_tracking(
            points_from_records(engagement_days, "followers"),
            window_days,
            min_populated_days,
        ),
        assess_series_quality(
            points_from_records(engagement_days, "engagement"),
            "engagement",
            window_days,
            min_populated_days,
        ),
        assess_series_quality(
            points_from_records(engagement_days, "reach"),
            "reach",
            window_days,
            min_populated_days,
        ),
    ]


# =============================================================================
# Narrative Constraints
# =============================================================================


def build_narrative_constraints(
    assessments: Iterable[DataQualityAssessment],
) -> List[str]:
    """
    Turn unreliable assessments into hard constraints for a narrative layer.

    Example:
        >>> build_narrative_constraints([sparse_followers])
        ['Do not conclude zero follower growth or weak retention: followers data is populated on only 3 of 30 days.']
    """
    constraints: List[str] = []
    for assessment in assessments:
        if assessment.isReliable:
            continue

        coverage = (
            f"{assessment.metric} data is populated on only "
            f"{assessment.populatedDays} of {assessment.windowDays} days."
        )
        if assessment.suppressGrowthClaims:
            constraint = (
                f"Do not conclude zero follower growth or weak retention: {coverage}"
            )
        else:
            constraint = f"Do not draw conclusions about {assessment.metric} trends: {coverage}"

        if constraint not in constraints:
            constraints.append(constraint)

    return constraints


async def run_account_quality(
    reader: WarehouseReader,
    days: int,
    min_populated_days: int = MIN_POPULATED_DAYS,
    today: Optional[date] = None,
) -> DataQualityResponse:
    """Fetch the window's account insights and assess their density."""
    period = lookback_period(days, today)
    engagement_days = await reader.fetch_engagement_days(period.startDate)
    assessments = assess_account_quality(engagement_days, period.days, min_populated_days)
    return DataQualityResponse(
        period=period,
        assessments=assessments,
        narrativeConstraints=build_narrative_constraints(assessments),
    )
