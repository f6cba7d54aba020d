"""
Domain service: shared vertical scale and canvas projection of percentage series.

Both series are projected with one SharedScale so their magnitudes compare
visually. X positions are rank based: point i of n sits at i / (n - 1) of the
width regardless of calendar gaps between days.
"""

from typing import Sequence

from fantoken_chart.domain.entities.price_series import DailyPoint, PlotPoint, SharedScale
from fantoken_chart.domain.errors import EmptySeriesError, InvalidInputError

# Half-range substituted around a flat scale; every point lands on the midline.
DEGENERATE_HALF_RANGE = 1.0


def shared_scale(subject: Sequence[DailyPoint], benchmark: Sequence[DailyPoint]) -> SharedScale:
    """Min and max percentage change across both series."""
    values = [_percentage(point) for point in (*subject, *benchmark)]
    if not values:
        raise EmptySeriesError("cannot compute a scale over two empty series")
    return SharedScale(min=min(values), max=max(values))


def project(
    points: Sequence[DailyPoint],
    scale: SharedScale,
    width: float,
    height: float,
) -> list[PlotPoint]:
    """Map each point to canvas coordinates, higher percentages nearer the top."""
    low, high = scale.min, scale.max
    if scale.is_degenerate:
        low, high = low - DEGENERATE_HALF_RANGE, high + DEGENERATE_HALF_RANGE
    span = high - low
    last_index = len(points) - 1

    plot: list[PlotPoint] = []
    for index, point in enumerate(points):
        x = (index / last_index) * width if last_index > 0 else 0.0
        y = height - ((_percentage(point) - low) / span) * height
        plot.append(PlotPoint(x=x, y=y))
    return plot


def to_svg_points(plot: Sequence[PlotPoint]) -> str:
    """Format a plot as an SVG `points` attribute: "x,y x,y ..."."""
    return " ".join(f"{_fmt(p.x)},{_fmt(p.y)}" for p in plot)


def _percentage(point: DailyPoint) -> float:
    if point.percentage_change is None:
        raise InvalidInputError(f"point on {point.day.isoformat()} has no percentage change")
    return point.percentage_change


def _fmt(value: float) -> str:
    return format(round(value, 2), "g")
