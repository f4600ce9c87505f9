"""
Attribution <-> Conversion (ROI) analyzer.

Breaks tracked-link clicks down by platform (utm_source) and content format
(utm_medium), computes conversion rates, and names the platform and format
that convert best.

Rules:
- UTM tags are matched case-insensitively; clicks from any other source
  count as unattributed, clicks with any other medium sit in no bucket.
- rate = conversions / clicks x 100 (0 with no clicks).
- A format is only ranked with at least MIN_MEDIUM_CLICKS clicks.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Dict, List, Optional, Sequence

from festival_insights.models import (
    AnalysisPeriod,
    AttributionOutcome,
    AttributionROIReport,
    ClickEvent,
    ContentMedium,
    MediumBreakdown,
    MediumStats,
    Platform,
    PlatformBreakdown,
    PlatformStats,
    TopConvertingContent,
    UnavailableReason,
)
from festival_insights.services.alignment import lookback_period
from festival_insights.services.warehouse import WarehouseReader


logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

# One platform's rate must exceed the other's by this factor to be called out
PLATFORM_ADVANTAGE_FACTOR: float = 1.5

# Floor for the losing rate so a 0% platform does not divide by zero
MIN_COMPARISON_RATE: float = 0.1

MIN_MEDIUM_CLICKS: int = 10

TOP_CONVERTING_LIMIT: int = 5


@dataclass
class _ClickTotals:
    clicks: int = 0
    conversions: int = 0
    value: float = 0.0

    def add(self, click: ClickEvent) -> None:
        self.clicks += 1
        if click.converted:
            self.conversions += 1
            self.value += click.conversionValue or 0.0

    @property
    def rate(self) -> float:
        return conversion_rate(self.conversions, self.clicks)


def conversion_rate(conversions: int, clicks: int) -> float:
    """Conversion rate in percent; 0 when there were no clicks."""
    return conversions / clicks * 100 if clicks > 0 else 0.0


def _normalize_tag(tag: Optional[str]) -> Optional[str]:
    return tag.strip().lower() if tag else None


# =============================================================================
# Analysis
# =============================================================================


def analyze_attribution_roi(
    clicks: Sequence[ClickEvent],
    period: AnalysisPeriod,
) -> AttributionOutcome:
    """
    Compare conversion performance across platforms and content formats.

    Args:
        clicks: Tracked-link clicks in the window
        period: Window the records cover

    Returns:
        AttributionOutcome: available with an AttributionROIReport, or
        unavailable (no_data) when there were no clicks.

    Example:
        100 Facebook clicks with 10 conversions and 100 Instagram clicks with
        4 conversions give rates 10.0 and 4.0 and the insight
        "Facebook has 150% higher conversion rate than Instagram".
    """
    if not clicks:
        return AttributionOutcome.unavailable(
            UnavailableReason.NO_DATA,
            detail="No tracked-link clicks in the lookback window",
        )

    platforms: Dict[Platform, _ClickTotals] = {p: _ClickTotals() for p in Platform}
    mediums: Dict[ContentMedium, _ClickTotals] = {m: _ClickTotals() for m in ContentMedium}
    platform_names = {p.value: p for p in Platform}
    medium_names = {m.value: m for m in ContentMedium}
    unattributed = 0

    for click in clicks:
        platform = platform_names.get(_normalize_tag(click.utmSource))
        if platform is None:
            unattributed += 1
        else:
            platforms[platform].add(click)

        medium = medium_names.get(_normalize_tag(click.utmMedium))
        if medium is not None:
            mediums[medium].add(click)

    fb_rate = platforms[Platform.FACEBOOK].rate
    ig_rate = platforms[Platform.INSTAGRAM].rate

    insights: List[str] = []
    if fb_rate > ig_rate * PLATFORM_ADVANTAGE_FACTOR:
        lift = (fb_rate / max(ig_rate, MIN_COMPARISON_RATE) - 1) * 100
        insights.append(f"Facebook has {lift:.0f}% higher conversion rate than Instagram")
    elif ig_rate > fb_rate * PLATFORM_ADVANTAGE_FACTOR:
        lift = (ig_rate / max(fb_rate, MIN_COMPARISON_RATE) - 1) * 100
        insights.append(f"Instagram has {lift:.0f}% higher conversion rate than Facebook")

    # Stable sort keeps post/story/reel/ad order among equal rates
    ranked = sorted(
        (m for m in ContentMedium if mediums[m].clicks >= MIN_MEDIUM_CLICKS),
        key=lambda m: mediums[m].rate,
        reverse=True,
    )
    if ranked and mediums[ranked[0]].rate > 0:
        best = ranked[0]
        insights.append(
            f"{best.value} content has the highest conversion rate "
            f"({mediums[best].rate:.1f}%)"
        )

    top_converting = [
        TopConvertingContent(
            contentType=m.value,
            conversionRate=mediums[m].rate,
            avgValue=(
                mediums[m].value / mediums[m].conversions if mediums[m].conversions else 0.0
            ),
            clicks=mediums[m].clicks,
        )
        for m in ranked[:TOP_CONVERTING_LIMIT]
    ]

    if unattributed:
        logger.debug("%d of %d clicks have no recognised platform", unattributed, len(clicks))

    def platform_stats(platform: Platform) -> PlatformStats:
        totals = platforms[platform]
        return PlatformStats(
            clicks=totals.clicks,
            conversions=totals.conversions,
            rate=totals.rate,
            value=totals.value,
        )

    def medium_stats(medium: ContentMedium) -> MediumStats:
        totals = mediums[medium]
        return MediumStats(clicks=totals.clicks, conversions=totals.conversions, rate=totals.rate)

    report = AttributionROIReport(
        period=period,
        byPlatform=PlatformBreakdown(
            facebook=platform_stats(Platform.FACEBOOK),
            instagram=platform_stats(Platform.INSTAGRAM),
        ),
        byMedium=MediumBreakdown(
            post=medium_stats(ContentMedium.POST),
            story=medium_stats(ContentMedium.STORY),
            reel=medium_stats(ContentMedium.REEL),
            ad=medium_stats(ContentMedium.AD),
        ),
        unattributedClicks=unattributed,
        topConverting=top_converting,
        insights=insights,
    )
    return AttributionOutcome.available(report)


async def run_attribution_roi(
    reader: WarehouseReader,
    days: int,
    today: Optional[date] = None,
) -> AttributionOutcome:
    """Fetch the window's clicks, then analyze them."""
    period = lookback_period(days, today)
    clicks = await reader.fetch_click_events(period.startDate)
    return analyze_attribution_roi(clicks, period)
