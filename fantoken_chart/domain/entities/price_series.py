"""
Domain entities for token price series and their chart projection.
Zero external dependencies: pure Python dataclasses only.
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional


@dataclass(frozen=True)
class Snapshot:
    timestamp: datetime
    price: float


@dataclass(frozen=True)
class DailyPoint:
    """One observation per calendar day.

    percentage_change stays None until with_percentage_change() runs.
    """

    day: date
    price: float
    percentage_change: Optional[float] = None


@dataclass(frozen=True)
class SharedScale:
    min: float
    max: float

    @property
    def is_degenerate(self) -> bool:
        return self.max == self.min


@dataclass(frozen=True)
class PlotPoint:
    x: float
    y: float


@dataclass(frozen=True)
class ComparisonResult:
    subject_change_pct: float
    benchmark_change_pct: float
    delta_pct: float

    @property
    def outperforms(self) -> bool:
        return self.delta_pct > 0


@dataclass(frozen=True)
class ShareText:
    """URL-encoded share messages for both outcomes of a comparison."""

    favorable: str
    unfavorable: str
    subject_id: str = ""

    def for_delta(self, delta_pct: float) -> str:
        return self.favorable if delta_pct > 0 else self.unfavorable


@dataclass(frozen=True)
class ComparisonProjection:
    subject_plot: list[PlotPoint]
    benchmark_plot: list[PlotPoint]
    comparison: ComparisonResult
    share_text: ShareText
    scale: SharedScale
    subject_series: list[DailyPoint]
    benchmark_series: list[DailyPoint]


@dataclass(frozen=True)
class TokenInfo:
    address: str
    symbol: str
    total_supply: float
    unique_holders: int
    lifetime_volume: float


@dataclass(frozen=True)
class TokenSeries:
    info: TokenInfo
    snapshots: list[Snapshot]
