"""
Date-Keyed Series Aligner.

Joins daily series coming from different warehouse sources (weather,
account insights, sentiment) into one matched dataset keyed by calendar
date. Sources differ in start/end dates and have gaps, so the join is an
INNER join: a date survives only when every series has a measured value for
it. Zero-filling the missing side would corrupt the correlation math (a day
with weather but no engagement row would read as "zero engagement").

Derived series such as day-over-day follower growth are computed on the
source series, in source order, BEFORE alignment, and only then joined:
growth for a date must be measured against the true previous reading, not
against whichever date happens to precede it after the join.

Algorithm:
    1. Convert each series to a two-column frame (date key, value), dropping
       unmeasured points and rejecting duplicate dates.
    2. Inner-merge the frames on the date key.
    3. Sort ascending by date key and emit index-aligned lists.

Dependencies:
    - pandas: frame merge for the multi-way inner join
"""

from datetime import date, datetime, timedelta
from functools import reduce
from typing import List, Mapping, Optional, Sequence, Union

import pandas as pd

from festival_insights.models import (
    AlignedSeries,
    AlignedSeriesPair,
    AnalysisPeriod,
    DailyMetricPoint,
)


# =============================================================================
# Constants
# =============================================================================

# Every daily analyzer needs at least this many matched days before it
# reports anything; below it a report would be a misleading low-confidence one
MIN_MATCHED_DAYS: int = 7

_DATE_COLUMN = "date_key"


# =============================================================================
# Date Keys
# =============================================================================


def to_date_key(value: Union[date, datetime, str]) -> str:
    """
    Truncate a date-like value to its YYYY-MM-DD key.

    No timezone conversion is applied: the warehouse already stores
    calendar dates, and datetimes are truncated as given.

    Raises:
        ValueError: If a string does not start with an ISO date.
    """
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    return date.fromisoformat(str(value)[:10]).isoformat()


def lookback_period(days: int, today: Optional[date] = None) -> AnalysisPeriod:
    """
    Window covering the last `days` days up to and including today.

    Args:
        days: Lookback length (request layer bounds it to 7-365)
        today: Anchor date; defaults to date.today()
    """
    end = today or date.today()
    return AnalysisPeriod(startDate=end - timedelta(days=days), endDate=end, days=days)


# =============================================================================
# Alignment
# =============================================================================


def _series_frame(name: str, points: Sequence[DailyMetricPoint]) -> pd.DataFrame:
    keys: List[str] = []
    values: List[float] = []
    for point in points:
        if point.value is None:
            continue
        keys.append(to_date_key(point.date))
        values.append(float(point.value))

    # Explicit dtypes so a series with no measured points still merges on str keys
    frame = pd.DataFrame({
        _DATE_COLUMN: pd.Series(keys, dtype=str),
        name: pd.Series(values, dtype="float64"),
    })

    duplicated = frame[_DATE_COLUMN].duplicated()
    if duplicated.any():
        dupes = sorted(set(frame.loc[duplicated, _DATE_COLUMN]))
        raise ValueError(f"Series '{name}' has duplicate dates: {', '.join(dupes)}")

    return frame


def align_series(series: Mapping[str, Sequence[DailyMetricPoint]]) -> AlignedSeries:
    """
    Inner-join named daily series on calendar date.

    Args:
        series: Mapping of series name to its points. At least one series is
            required; points with value None are treated as not measured.

    Returns:
        AlignedSeries whose dates are the intersection of every series' dates
        in ascending order, with one index-aligned value list per name.

    Raises:
        ValueError: If no series is given, or a series repeats a date.

    Example:
        >>> aligned = align_series({"temperature": temps, "engagement": engagement})
        >>> aligned.column("temperature")[0], aligned.column("engagement")[0]
    """
    if not series:
        raise ValueError("align_series requires at least one series")

    frames = [_series_frame(name, points) for name, points in series.items()]
    merged = reduce(
        lambda left, right: left.merge(right, on=_DATE_COLUMN, how="inner"),
        frames,
    )
    merged = merged.sort_values(_DATE_COLUMN, kind="mergesort").reset_index(drop=True)

    return AlignedSeries(
        dates=merged[_DATE_COLUMN].tolist(),
        values={name: merged[name].astype(float).tolist() for name in series},
    )


def align_pair(
    x: Sequence[DailyMetricPoint],
    y: Sequence[DailyMetricPoint],
) -> AlignedSeriesPair:
    """
    Inner-join two daily series; len(x) == len(y) == len(dates) on output.
    """
    aligned = align_series({"x": x, "y": y})
    return AlignedSeriesPair(
        dates=aligned.dates,
        x=aligned.column("x"),
        y=aligned.column("y"),
    )


# =============================================================================
# Derived Series
# =============================================================================


def _is_measured_count(value: Optional[float]) -> bool:
    return value is not None and value > 0


def compute_daily_deltas(points: Sequence[DailyMetricPoint]) -> List[DailyMetricPoint]:
    """
    Day-over-day change of a cumulative series (e.g. follower counts).

    For each point after the first (in ascending date order) the delta is
    value[i] - value[i-1], dated on day i. A delta is only produced when both
    readings were measured; a gap in collection (None, or a non-positive
    count the collector writes when it failed) yields no delta rather than
    a spike against zero.

    Args:
        points: Cumulative readings; order does not matter.

    Returns:
        Delta points, one per consecutive pair of measured readings.
    """
    ordered = sorted(points, key=lambda p: to_date_key(p.date))
    deltas: List[DailyMetricPoint] = []

    for previous, current in zip(ordered, ordered[1:]):
        if not _is_measured_count(previous.value) or not _is_measured_count(current.value):
            continue
        deltas.append(
            DailyMetricPoint(date=current.date, value=current.value - previous.value)
        )

    return deltas


def points_from_records(records: Sequence[object], field: str) -> List[DailyMetricPoint]:
    """
    Project one optional numeric field of dated records into a series.

    Args:
        records: Any objects with a `date` attribute and the named field
        field: Attribute to read; None values stay None (not measured)
    """
    return [
        DailyMetricPoint(date=getattr(record, "date"), value=getattr(record, field))
        for record in records
    ]
