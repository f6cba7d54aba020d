"""
Use-case: compare a subject token's price series against a benchmark series.
Depends only on Domain services and entities; no infrastructure imports.

Flow: normalize both series -> align benchmark to subject -> percentage change
-> shared scale -> project each series -> metrics -> share texts.
"""

import logging
from typing import Sequence

from fantoken_chart.domain.entities.price_series import ComparisonProjection, Snapshot
from fantoken_chart.domain.services.comparison import compare, compose_share_text
from fantoken_chart.domain.services.geometry import project, shared_scale
from fantoken_chart.domain.services.series import (
    align_to_subject,
    normalize_daily,
    with_percentage_change,
)

logger = logging.getLogger(__name__)


class CompareAndProjectUseCase:
    def __init__(self, benchmark_name: str = "Farcaster Network") -> None:
        self._benchmark_name = benchmark_name

    def execute(
        self,
        subject_raw: Sequence[Snapshot],
        benchmark_raw: Sequence[Snapshot],
        canvas_width: float,
        canvas_height: float,
        display_name: str = "",
        subject_id: str = "",
    ) -> ComparisonProjection:
        """Produce plots, metrics and share texts for one comparison.

        Args:
            subject_raw:   Ascending snapshots of the user's token.
            benchmark_raw: Ascending snapshots of the benchmark token.
            canvas_width:  Chart width the plots are projected onto.
            canvas_height: Chart height; y grows downwards.
            display_name:  Name used in the share texts.
            subject_id:    Identifier of the subject, carried on the share texts.

        Raises:
            ValueError:       if the canvas has a non-positive dimension.
            ComparisonError:  any EmptySeries, NoOverlap, DivisionByZero or
                              InvalidInput failure; nothing partial is returned.
        """
        if canvas_width <= 0 or canvas_height <= 0:
            raise ValueError("canvas dimensions must be positive")

        subject_daily = normalize_daily(subject_raw)
        benchmark_daily = align_to_subject(subject_daily, normalize_daily(benchmark_raw))

        subject_series = with_percentage_change(subject_daily)
        benchmark_series = with_percentage_change(benchmark_daily)

        scale = shared_scale(subject_series, benchmark_series)
        logger.debug(
            "Comparing %d subject days with %d benchmark days, scale [%.4f, %.4f]",
            len(subject_series),
            len(benchmark_series),
            scale.min,
            scale.max,
        )

        comparison = compare(subject_series, benchmark_series)
        return ComparisonProjection(
            subject_plot=project(subject_series, scale, canvas_width, canvas_height),
            benchmark_plot=project(benchmark_series, scale, canvas_width, canvas_height),
            comparison=comparison,
            share_text=compose_share_text(
                comparison, display_name, self._benchmark_name, subject_id=subject_id
            ),
            scale=scale,
            subject_series=subject_series,
            benchmark_series=benchmark_series,
        )
