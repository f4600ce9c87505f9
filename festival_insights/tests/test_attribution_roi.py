"""
Test suite for the Attribution <-> Conversion (ROI) analyzer.

The tests verify:
1. Platform rates and the platform comparison insight
2. Case-insensitive UTM matching and unattributed clicks
3. Medium breakdown, ranking threshold and topConverting values
4. Division safety when a platform has no clicks
"""

import pytest
from datetime import datetime

from festival_insights.models import ClickEvent, ReportStatus, UnavailableReason
from festival_insights.services.attribution_roi import (
    analyze_attribution_roi,
    conversion_rate,
    run_attribution_roi,
)
from festival_insights.tests.conftest import StubWarehouseReader, assert_close


def click(source, medium='post', converted=False, value=None):
    return ClickEvent(
        timestamp=datetime(2026, 7, 15, 10, 0),
        utmSource=source,
        utmMedium=medium,
        converted=converted,
        conversionValue=value,
    )


class TestPlatformBreakdown:
    """Platform rates and insight."""

    @pytest.mark.scenario
    def test_facebook_outperforms_instagram(self, attribution_clicks, analysis_period):
        outcome = analyze_attribution_roi(attribution_clicks, analysis_period)

        assert outcome.status == ReportStatus.AVAILABLE
        platforms = outcome.data.byPlatform
        assert platforms.facebook.clicks == 100
        assert platforms.facebook.conversions == 10
        assert_close(platforms.facebook.rate, 10.0)
        assert_close(platforms.facebook.value, 500.0)
        assert_close(platforms.instagram.rate, 4.0)
        assert_close(platforms.instagram.value, 100.0)
        assert 'Facebook has 150% higher conversion rate than Instagram' in outcome.data.insights

    def test_unattributed_clicks(self, attribution_clicks, analysis_period):
        outcome = analyze_attribution_roi(attribution_clicks, analysis_period)
        assert outcome.data.unattributedClicks == 5

    def test_instagram_outperforms_facebook(self, analysis_period):
        clicks = [click('instagram', converted=i < 5) for i in range(20)]
        clicks += [click('facebook', converted=i < 1) for i in range(20)]

        outcome = analyze_attribution_roi(clicks, analysis_period)

        assert 'Instagram has 400% higher conversion rate than Facebook' in outcome.data.insights

    def test_platform_without_clicks(self, analysis_period):
        clicks = [click('facebook', converted=i < 2) for i in range(10)]

        outcome = analyze_attribution_roi(clicks, analysis_period)

        assert outcome.data.byPlatform.instagram.rate == 0.0
        # Losing rate floored at 0.1: (20 / 0.1 - 1) x 100
        assert 'Facebook has 19900% higher conversion rate than Instagram' in outcome.data.insights

    def test_similar_rates_no_platform_insight(self, analysis_period):
        clicks = [click('facebook', medium=None, converted=i < 3) for i in range(20)]
        clicks += [click('instagram', medium=None, converted=i < 4) for i in range(20)]

        outcome = analyze_attribution_roi(clicks, analysis_period)

        assert outcome.data.insights == []


class TestMediumBreakdown:
    """Medium breakdown and topConverting."""

    def test_medium_stats(self, attribution_clicks, analysis_period):
        outcome = analyze_attribution_roi(attribution_clicks, analysis_period)
        mediums = outcome.data.byMedium

        assert mediums.post.clicks == 60
        assert mediums.post.conversions == 10
        assert_close(mediums.post.rate, 100 * 10 / 60)
        assert mediums.reel.clicks == 40
        assert mediums.story.clicks == 100
        assert mediums.ad.clicks == 0
        assert mediums.ad.rate == 0.0

    def test_best_medium_insight(self, attribution_clicks, analysis_period):
        outcome = analyze_attribution_roi(attribution_clicks, analysis_period)
        assert 'post content has the highest conversion rate (16.7%)' in outcome.data.insights

    def test_top_converting(self, attribution_clicks, analysis_period):
        outcome = analyze_attribution_roi(attribution_clicks, analysis_period)
        top = outcome.data.topConverting

        assert [t.contentType for t in top] == ['post', 'story', 'reel']
        assert_close(top[0].avgValue, 50.0)
        assert_close(top[1].avgValue, 25.0)
        assert top[2].avgValue == 0.0
        assert top[0].clicks == 60

    def test_medium_below_click_threshold_not_ranked(self, analysis_period):
        clicks = [click('facebook', medium='ad', converted=True, value=10.0) for _ in range(5)]
        clicks += [click('facebook', medium='post', converted=i < 1) for i in range(10)]

        outcome = analyze_attribution_roi(clicks, analysis_period)

        assert [t.contentType for t in outcome.data.topConverting] == ['post']
        assert outcome.data.byMedium.ad.conversions == 5


class TestAttributionUnavailable:
    """Unavailable outcomes and helpers."""

    def test_no_clicks(self, analysis_period):
        outcome = analyze_attribution_roi([], analysis_period)
        assert outcome.reason == UnavailableReason.NO_DATA

    def test_conversion_rate(self):
        assert conversion_rate(0, 0) == 0.0
        assert_close(conversion_rate(1, 8), 12.5)

    @pytest.mark.asyncio
    async def test_run_fetches_clicks(self, attribution_clicks, today):
        reader = StubWarehouseReader(clicks=attribution_clicks)

        outcome = await run_attribution_roi(reader, 30, today=today)

        assert outcome.is_available
        assert reader.calls == ['fetch_click_events']
