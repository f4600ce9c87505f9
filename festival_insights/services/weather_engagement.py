"""
Weather <-> Engagement analyzer.

Relates daily weather (temperature, precipitation) to account-level
engagement and reach.

Matching rules:
- A weather day needs a temperature; missing precipitation counts as dry.
- An engagement day is an observation only when engagement or reach is
  positive. The account insights table writes zero-filled rows for days the
  collector did not run, and those must not read as "nobody engaged".
- Days are inner-joined on calendar date; fewer than MIN_MATCHED_DAYS
  matched days yields an unavailable outcome.

Derived figures:
- temperature vs engagement, temperature vs reach (Pearson)
- rain indicator (1 = any precipitation) vs engagement (Pearson)
- mean engagement on dry ("sunny") vs wet ("rainy") days
"""

import logging
from datetime import date
from typing import List, Optional, Sequence

from festival_insights.models import (
    AnalysisPeriod,
    DailyMetricPoint,
    EngagementDay,
    UnavailableReason,
    WeatherCorrelations,
    WeatherDay,
    WeatherEngagementReport,
    WeatherOutcome,
)
from festival_insights.services.alignment import MIN_MATCHED_DAYS, align_series, lookback_period
from festival_insights.services.correlation import (
    build_correlation_result,
    mean,
    percentage_change,
)
from festival_insights.services.warehouse import WarehouseReader


logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

# Temperature coefficient above which warm weather is called out
WARM_WEATHER_THRESHOLD: float = 0.3

# Sunny mean must beat rainy mean by this factor to be reported
SUNNY_ADVANTAGE_FACTOR: float = 1.2


# =============================================================================
# Analysis
# =============================================================================


def _engagement_observed(day: EngagementDay) -> bool:
    return (day.engagement or 0) > 0 or (day.reach or 0) > 0


def analyze_weather_engagement(
    weather_days: Sequence[WeatherDay],
    engagement_days: Sequence[EngagementDay],
    period: AnalysisPeriod,
) -> WeatherOutcome:
    """
    Correlate weather with engagement over already fetched records.

    Args:
        weather_days: fact_weather_daily rows for the window
        engagement_days: Account insights per date for the window
        period: Window the records cover

    Returns:
        WeatherOutcome: available with a WeatherEngagementReport, or
        unavailable (no_data / insufficient_data).

    Raises:
        ValueError: If either input repeats a date.
    """
    if not weather_days or not engagement_days:
        return WeatherOutcome.unavailable(
            UnavailableReason.NO_DATA,
            detail="No weather or engagement rows in the lookback window",
        )

    temperature = [DailyMetricPoint(date=w.date, value=w.tempAvg) for w in weather_days]
    rain = [
        DailyMetricPoint(date=w.date, value=w.rain if w.rain is not None else 0.0)
        for w in weather_days
    ]

    observed = [e for e in engagement_days if _engagement_observed(e)]
    engagement = [DailyMetricPoint(date=e.date, value=e.engagement or 0.0) for e in observed]
    reach = [DailyMetricPoint(date=e.date, value=e.reach or 0.0) for e in observed]

    aligned = align_series({
        "temperature": temperature,
        "rain": rain,
        "engagement": engagement,
        "reach": reach,
    })

    if aligned.size < MIN_MATCHED_DAYS:
        logger.info(
            "Weather analysis skipped: %d matched days (minimum %d)",
            aligned.size, MIN_MATCHED_DAYS,
        )
        return WeatherOutcome.unavailable(
            UnavailableReason.INSUFFICIENT_DATA,
            detail=f"{aligned.size} matched days (minimum {MIN_MATCHED_DAYS})",
        )

    temps = aligned.column("temperature")
    engagements = aligned.column("engagement")
    reaches = aligned.column("reach")
    rain_flags = [1.0 if r > 0 else 0.0 for r in aligned.column("rain")]

    temp_engagement = build_correlation_result("temperature", "engagement", temps, engagements)
    temp_reach = build_correlation_result("temperature", "reach", temps, reaches)
    rain_engagement = build_correlation_result("rain", "engagement", rain_flags, engagements)

    sunny = [e for e, wet in zip(engagements, rain_flags) if wet == 0.0]
    rainy = [e for e, wet in zip(engagements, rain_flags) if wet == 1.0]
    sunny_mean = mean(sunny)
    rainy_mean = mean(rainy)

    insights: List[str] = []
    recommendations: List[str] = []

    if temp_engagement.coefficient > WARM_WEATHER_THRESHOLD:
        insights.append(
            f"Warmer weather correlates with higher engagement "
            f"(r={temp_engagement.coefficient:.2f})"
        )
        recommendations.append("Schedule more content during warm weather periods")

    # Both segments must have days; an empty one has no mean to compare
    compare_segments = bool(sunny) and bool(rainy)

    if compare_segments and sunny_mean > rainy_mean * SUNNY_ADVANTAGE_FACTOR:
        diff = percentage_change(rainy_mean, sunny_mean)
        insights.append(f"Sunny days show {diff:.0f}% higher engagement than rainy days")
        recommendations.append("Focus outdoor/visual content on sunny days")

    if compare_segments and rainy_mean > sunny_mean:
        insights.append("Rainy days show higher engagement - users may be on phones more")
        recommendations.append("Prepare engaging content for rainy forecasts")

    report = WeatherEngagementReport(
        period=period,
        correlations=WeatherCorrelations(
            temperatureVsEngagement=temp_engagement,
            temperatureVsReach=temp_reach,
            rainVsEngagement=rain_engagement,
            sunnyDaysEngagement=sunny_mean,
            rainyDaysEngagement=rainy_mean,
            sunnyDays=len(sunny),
            rainyDays=len(rainy),
        ),
        insights=insights,
        recommendations=recommendations,
    )
    return WeatherOutcome.available(report)


async def run_weather_engagement(
    reader: WarehouseReader,
    days: int,
    today: Optional[date] = None,
) -> WeatherOutcome:
    """Fetch the window's weather and engagement rows, then analyze them."""
    period = lookback_period(days, today)
    weather_days = await reader.fetch_weather_days(period.startDate)
    engagement_days = await reader.fetch_engagement_days(period.startDate)
    return analyze_weather_engagement(weather_days, engagement_days, period)
