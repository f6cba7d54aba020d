"""
Domain service: headline comparison metrics and the share messages built from them.

Business decisions owned here:
  - The headline change of a series is its last percentage change.
  - delta = subject change - benchmark change; positive means outperformance.
  - Share texts are two fixed templates, chosen by the sign of delta.
"""

from typing import Sequence
from urllib.parse import quote

from fantoken_chart.domain.entities.price_series import ComparisonResult, DailyPoint, ShareText
from fantoken_chart.domain.errors import DivisionByZeroError, EmptySeriesError, InvalidInputError

COMPOSE_URL = "https://warpcast.com/~/compose"

FAVORABLE_TEMPLATE = (
    "Did you know {display_name}'s Fan Token is a better performing asset than the "
    "{benchmark_name} Fan Token? Up {subject:.2f}%! Compared to {benchmark:.2f}% "
    "\n\n BUY BEFORE IT GOES HIGHER!"
)
UNFAVORABLE_TEMPLATE = (
    "OMG! I should have bought the {benchmark_name} Fan Token as a proxy instead of "
    "@{display_name}. \n\n @zoz.eth was RIGHT! \n https://warpcast.com/zoz.eth/0xf80996f4"
)

# Characters encodeURIComponent leaves alone on top of quote()'s own safe set.
_URI_COMPONENT_SAFE = "!*'()"


def compare(subject: Sequence[DailyPoint], benchmark: Sequence[DailyPoint]) -> ComparisonResult:
    """Build the ComparisonResult of two percentage-change series.

    Raises:
        EmptySeriesError:  if either series is empty.
        InvalidInputError: if a last point has no percentage change yet.
    """
    subject_change = _last_change(subject, "subject")
    benchmark_change = _last_change(benchmark, "benchmark")
    return ComparisonResult(
        subject_change_pct=subject_change,
        benchmark_change_pct=benchmark_change,
        delta_pct=subject_change - benchmark_change,
    )


def change_from_start(percentages: Sequence[float]) -> float:
    """Relative change of the last percentage against the first one, in percent.

    This is a ratio of percentages, not of prices, and its base is the first
    percentage change, which is 0 for every series produced by
    with_percentage_change().

    Raises:
        EmptySeriesError:    if *percentages* is empty.
        DivisionByZeroError: if the earliest percentage is zero.
    """
    if not percentages:
        raise EmptySeriesError("no percentages to compare")
    earliest, latest = percentages[0], percentages[-1]
    if earliest == 0:
        raise DivisionByZeroError("earliest percentage is zero; change from start is undefined")
    return (latest - earliest) / earliest * 100


def compose_share_text(
    comparison: ComparisonResult,
    display_name: str,
    benchmark_name: str = "Farcaster Network",
    subject_id: str = "",
) -> ShareText:
    """Render both share messages, encoded for a compose URL query parameter.

    *subject_id* rides along on the ShareText so the compose link can embed
    the subject's frame.
    """
    favorable = FAVORABLE_TEMPLATE.format(
        display_name=display_name,
        benchmark_name=benchmark_name,
        subject=comparison.subject_change_pct,
        benchmark=comparison.benchmark_change_pct,
    )
    unfavorable = UNFAVORABLE_TEMPLATE.format(
        display_name=display_name,
        benchmark_name=benchmark_name,
    )
    return ShareText(
        favorable=_encode(favorable),
        unfavorable=_encode(unfavorable),
        subject_id=subject_id,
    )


def build_share_url(encoded_text: str, subject_id: str, embed_base: str) -> str:
    """Compose link that posts *encoded_text* and embeds the subject's frame."""
    embed = f"{embed_base.rstrip('/')}/frames?fid={subject_id}"
    return f"{COMPOSE_URL}?text={encoded_text}&embeds[]={embed}"


def _encode(text: str) -> str:
    # The text ends up nested inside another URL, so literal "%" is escaped twice.
    return quote(text, safe=_URI_COMPONENT_SAFE).replace("%25", "%2525")


def _last_change(points: Sequence[DailyPoint], label: str) -> float:
    if not points:
        raise EmptySeriesError(f"{label} series is empty")
    change = points[-1].percentage_change
    if change is None:
        raise InvalidInputError(f"{label} series has no percentage change")
    return change
