"""
Domain service: turn raw price snapshots into aligned daily percentage series.

Pipeline owned here:
  - normalize_daily:         one point per UTC day, last observation wins.
  - align_to_subject:        drop benchmark days before the subject's first day.
  - with_percentage_change:  change relative to each series' own first price.

Pure functions over domain entities; no I/O and no shared state.
"""

import math
from dataclasses import replace
from datetime import date, datetime, timezone
from typing import Iterable, Sequence

from fantoken_chart.domain.entities.price_series import DailyPoint, Snapshot
from fantoken_chart.domain.errors import (
    DivisionByZeroError,
    EmptySeriesError,
    InvalidInputError,
    NoOverlapError,
)


def normalize_daily(snapshots: Iterable[Snapshot]) -> list[DailyPoint]:
    """Collapse ascending snapshots into one DailyPoint per UTC day.

    The last snapshot observed for a day supplies that day's price. Days
    without observations are not synthesized.

    Raises:
        EmptySeriesError:  if *snapshots* is empty.
        InvalidInputError: if timestamps go backwards or a price is negative,
                           NaN or infinite.
    """
    by_day: dict[date, float] = {}
    previous: datetime | None = None
    for snapshot in snapshots:
        if not isinstance(snapshot.timestamp, datetime):
            raise InvalidInputError(f"Malformed timestamp: {snapshot.timestamp!r}")
        price = snapshot.price
        if not isinstance(price, (int, float)) or not math.isfinite(price) or price < 0:
            raise InvalidInputError(f"Malformed price at {snapshot.timestamp.isoformat()}: {price!r}")
        current = _as_utc(snapshot.timestamp)
        if previous is not None and current < previous:
            raise InvalidInputError(
                f"Snapshots are not ascending: {current.isoformat()} follows {previous.isoformat()}"
            )
        previous = current
        by_day[current.date()] = float(price)

    if not by_day:
        raise EmptySeriesError("price series has no snapshots")
    # dicts keep insertion order and input is ascending, so days already are.
    return [DailyPoint(day=day, price=price) for day, price in by_day.items()]


def align_to_subject(
    subject: Sequence[DailyPoint], benchmark: Sequence[DailyPoint]
) -> list[DailyPoint]:
    """Return the suffix of *benchmark* starting on or after the subject's first day.

    Raises:
        EmptySeriesError: if *subject* is empty.
        NoOverlapError:   if every benchmark day predates the subject.
    """
    if not subject:
        raise EmptySeriesError("subject series is empty")
    start = subject[0].day
    aligned = [point for point in benchmark if point.day >= start]
    if not aligned:
        raise NoOverlapError(f"benchmark has no data on or after {start.isoformat()}")
    return aligned


def with_percentage_change(points: Sequence[DailyPoint]) -> list[DailyPoint]:
    """Return copies of *points* carrying their change from the first price, in percent.

    Index 0 is always exactly 0.0. The input sequence is left untouched.

    Raises:
        EmptySeriesError:    if *points* is empty.
        DivisionByZeroError: if the first price is zero.
    """
    if not points:
        raise EmptySeriesError("cannot compute percentage change of an empty series")
    first_price = points[0].price
    if first_price == 0:
        raise DivisionByZeroError(
            f"first price on {points[0].day.isoformat()} is zero; percentage change is undefined"
        )
    return [
        replace(point, percentage_change=(point.price - first_price) / first_price * 100)
        for point in points
    ]


def _as_utc(timestamp: datetime) -> datetime:
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)
