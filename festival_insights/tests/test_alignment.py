"""
Test suite for the date-keyed series aligner.

The tests verify:
1. Inner join keeps only dates present in every series, ascending
2. Unmeasured points are dropped before the join
3. Duplicate dates are rejected
4. Day-over-day deltas skip collection gaps
5. Lookback windows and date keys
"""

from datetime import date, datetime

import pytest

from festival_insights.models import DailyMetricPoint
from festival_insights.services.alignment import (
    align_pair,
    align_series,
    compute_daily_deltas,
    lookback_period,
    points_from_records,
    to_date_key,
)
from festival_insights.tests.conftest import day


def series(values_by_offset):
    return [DailyMetricPoint(date=day(i), value=v) for i, v in values_by_offset.items()]


# =============================================================================
# ALIGNMENT TESTS
# =============================================================================


class TestAlignSeries:
    """Tests for align_series() and align_pair()."""

    def test_intersection_only(self):
        x = series({0: 1.0, 1: 2.0, 2: 3.0, 3: 4.0})
        y = series({2: 30.0, 3: 40.0, 4: 50.0})

        pair = align_pair(x, y)

        assert pair.dates == [day(2).isoformat(), day(3).isoformat()]
        assert pair.x == [3.0, 4.0]
        assert pair.y == [30.0, 40.0]

    def test_output_sorted_ascending_regardless_of_input_order(self):
        x = series({5: 5.0, 1: 1.0, 3: 3.0})
        y = series({3: 30.0, 5: 50.0, 1: 10.0})

        pair = align_pair(x, y)

        assert pair.dates == sorted(pair.dates)
        assert pair.x == [1.0, 3.0, 5.0]
        assert pair.y == [10.0, 30.0, 50.0]

    def test_none_values_are_not_matched(self):
        x = series({0: 1.0, 1: None, 2: 3.0})
        y = series({0: 10.0, 1: 20.0, 2: 30.0})

        pair = align_pair(x, y)

        assert pair.dates == [day(0).isoformat(), day(2).isoformat()]

    def test_zero_is_kept_as_measured(self):
        pair = align_pair(series({0: 0.0, 1: 2.0}), series({0: 5.0, 1: 6.0}))
        assert pair.x == [0.0, 2.0]

    def test_three_way_join(self):
        aligned = align_series({
            'a': series({0: 1.0, 1: 2.0, 2: 3.0}),
            'b': series({1: 20.0, 2: 30.0}),
            'c': series({0: 100.0, 2: 300.0}),
        })

        assert aligned.size == 1
        assert aligned.dates == [day(2).isoformat()]
        assert aligned.column('a') == [3.0]
        assert aligned.column('b') == [30.0]
        assert aligned.column('c') == [300.0]

    def test_disjoint_series_give_empty_result(self):
        pair = align_pair(series({0: 1.0}), series({1: 2.0}))
        assert pair.dates == []
        assert pair.x == [] and pair.y == []

    def test_unmeasured_series_joins_to_empty(self):
        x = series({0: None, 1: None, 2: None})
        y = series({0: 10.0, 1: 20.0, 2: 30.0})

        pair = align_pair(x, y)

        assert pair.dates == []
        assert pair.x == [] and pair.y == []

    def test_empty_series_joins_to_empty(self):
        aligned = align_series({'a': [], 'b': series({0: 1.0, 1: 2.0})})
        assert aligned.size == 0
        assert aligned.column('b') == []

    def test_duplicate_dates_rejected(self):
        x = [
            DailyMetricPoint(date=day(0), value=1.0),
            DailyMetricPoint(date=day(0), value=2.0),
        ]
        with pytest.raises(ValueError, match='duplicate dates'):
            align_pair(x, series({0: 1.0}))

    def test_empty_mapping_rejected(self):
        with pytest.raises(ValueError):
            align_series({})


# =============================================================================
# DERIVED SERIES TESTS
# =============================================================================


class TestDailyDeltas:
    """Tests for compute_daily_deltas()."""

    def test_deltas_dated_on_later_day(self):
        deltas = compute_daily_deltas(series({0: 100.0, 1: 110.0, 2: 125.0}))

        assert [d.date for d in deltas] == [day(1), day(2)]
        assert [d.value for d in deltas] == [10.0, 15.0]

    def test_unsorted_input_is_ordered_first(self):
        deltas = compute_daily_deltas(series({2: 125.0, 0: 100.0, 1: 110.0}))
        assert [d.value for d in deltas] == [10.0, 15.0]

    def test_gaps_produce_no_delta(self):
        # Day 2 was not collected; neither 1->2 nor 2->3 yields a delta
        deltas = compute_daily_deltas(
            series({0: 100.0, 1: 105.0, 2: 0.0, 3: 120.0, 4: None, 5: 130.0})
        )

        assert [d.date for d in deltas] == [day(1)]
        assert deltas[0].value == 5.0

    def test_too_few_points(self):
        assert compute_daily_deltas([]) == []
        assert compute_daily_deltas(series({0: 100.0})) == []


# =============================================================================
# DATE HELPER TESTS
# =============================================================================


class TestDateHelpers:
    """Tests for to_date_key(), lookback_period() and points_from_records()."""

    def test_date_keys(self):
        assert to_date_key(date(2026, 7, 4)) == '2026-07-04'
        assert to_date_key(datetime(2026, 7, 4, 23, 59)) == '2026-07-04'
        assert to_date_key('2026-07-04T08:00:00Z') == '2026-07-04'

    def test_invalid_string_key(self):
        with pytest.raises(ValueError):
            to_date_key('yesterday')

    def test_lookback_period(self, today):
        period = lookback_period(30, today)
        assert period.endDate == date(2026, 7, 31)
        assert period.startDate == date(2026, 7, 1)
        assert period.days == 30

    def test_points_from_records(self, dense_follower_days):
        points = points_from_records(dense_follower_days, 'followers')
        assert len(points) == len(dense_follower_days)
        assert points[0].date == day(0)
        assert points[0].value == 5000.0
