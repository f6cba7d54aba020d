"""
Infrastructure adapter: comparison projection -> SVG card (ICardRenderer).

The card is 1200x630 (the 1.91:1 frame aspect ratio). The chart area is the
canvas the plots were projected onto, placed below the header. All dynamic
text is XML-escaped.
"""

from html import escape
from typing import Optional

from fantoken_chart.domain.entities.price_series import ComparisonProjection
from fantoken_chart.domain.entities.profile import ProfileIdentity
from fantoken_chart.domain.ports.card_renderer_port import ICardRenderer
from fantoken_chart.domain.services.geometry import to_svg_points

GAIN_TEXT = "#22c55e"
LOSS_TEXT = "#ef4444"
GAIN_LINE = "#0af03b"
LOSS_LINE = "#f55663"
BENCHMARK_LINE = "#8A2BE2"
MUTED_TEXT = "#9ca3af"

_FONT = "font-family=\"Inter, Helvetica, Arial, sans-serif\""


class SvgCardRenderer(ICardRenderer):
    WIDTH = 1200
    HEIGHT = 630
    PADDING = 32
    CHART_TOP = 130

    def __init__(self, chart_width: int = 1050, chart_height: int = 350) -> None:
        self._chart_width = chart_width
        self._chart_height = chart_height

    def render_comparison(
        self,
        projection: ComparisonProjection,
        identity: ProfileIdentity,
        benchmark_name: str,
    ) -> str:
        comparison = projection.comparison
        delta = comparison.delta_pct
        width, height = self._chart_width, self._chart_height
        subject_points = to_svg_points(projection.subject_plot)
        benchmark_points = to_svg_points(projection.benchmark_plot)
        chart_left = (self.WIDTH - width) / 2
        footer_top = self.CHART_TOP + height + 40

        body = [
            "<defs>",
            '<linearGradient id="gradient" x1="0" y1="0" x2="0" y2="1">',
            f'<stop offset="0%" stop-color="{GAIN_LINE if delta > 0 else LOSS_LINE}" stop-opacity="0.35"/>',
            f'<stop offset="100%" stop-color="{GAIN_LINE if delta > 0 else LOSS_LINE}" stop-opacity="0"/>',
            "</linearGradient>",
            f'<clipPath id="avatar-clip"><circle cx="{self.PADDING + 32}" cy="{self.PADDING + 32}" r="32"/></clipPath>',
            "</defs>",
            f'<rect width="{self.WIDTH}" height="{self.HEIGHT}" fill="#ffffff"/>',
            self._avatar(identity.avatar_url),
            f'<text x="{self.PADDING + 80}" y="{self.PADDING + 30}" font-size="30" font-weight="bold" '
            f'fill="#000000" {_FONT}>{escape(identity.display_name)} Performance Vs {escape(benchmark_name)}</text>',
            f'<text x="{self.PADDING + 80}" y="{self.PADDING + 60}" font-size="20" '
            f'fill="{MUTED_TEXT}" {_FONT}>@{escape(identity.handle)}</text>',
            f'<text x="{self.WIDTH - self.PADDING}" y="{self.PADDING + 45}" text-anchor="end" font-size="40" '
            f'font-weight="bold" fill="{GAIN_TEXT if delta >= 0 else LOSS_TEXT}" {_FONT}>{signed_pct(delta)}</text>',
            f'<g transform="translate({_num(chart_left)},{self.CHART_TOP})">',
            f'<path d="M0,{height} {subject_points} {width},{height} Z" fill="url(#gradient)"/>',
            f'<polyline fill="none" stroke="{GAIN_LINE if delta > 0 else LOSS_LINE}" stroke-width="3" '
            f'points="{subject_points}"/>',
            f'<polyline fill="none" stroke="{BENCHMARK_LINE}" stroke-width="3" points="{benchmark_points}"/>',
            "</g>",
            f'<text x="{self.PADDING}" y="{footer_top}" font-size="20" fill="#000000" {_FONT}>'
            f"User Token Change: {comparison.subject_change_pct:.2f}%</text>",
            f'<text x="{self.PADDING}" y="{footer_top + 32}" font-size="20" fill="#000000" {_FONT}>'
            f"{escape(benchmark_name)} Token Change: {comparison.benchmark_change_pct:.2f}%</text>",
            f'<text x="{self.WIDTH - self.PADDING}" y="{footer_top + 32}" text-anchor="end" font-size="20" '
            f'fill="#000000" {_FONT}>Change Compared to {escape(benchmark_name)}: {delta:.2f}%</text>',
        ]
        return self._document(body)

    def render_no_token(self) -> str:
        return self._notice(
            "No Fan Token Yet",
            "This user doesn't have a Fan Token, or their auction is still ongoing.",
            title_size=60,
        )

    def render_error(self) -> str:
        return self._notice(
            "Error",
            "An error occurred while fetching data. Please try again later.",
            title_size=40,
        )

    def _notice(self, title: str, message: str, title_size: int) -> str:
        middle = self.HEIGHT / 2
        return self._document([
            f'<rect width="{self.WIDTH}" height="{self.HEIGHT}" fill="#111827"/>',
            f'<text x="{self.WIDTH / 2:g}" y="{middle - 20:g}" text-anchor="middle" font-size="{title_size}" '
            f'font-weight="bold" fill="#ffffff" {_FONT}>{escape(title)}</text>',
            f'<text x="{self.WIDTH / 2:g}" y="{middle + 40:g}" text-anchor="middle" font-size="28" '
            f'fill="#ffffff" {_FONT}>{escape(message)}</text>',
        ])

    def _avatar(self, avatar_url: Optional[str]) -> str:
        cx, cy = self.PADDING + 32, self.PADDING + 32
        if not avatar_url:
            return f'<circle cx="{cx}" cy="{cy}" r="32" fill="#e5e7eb"/>'
        return (
            f'<image href="{escape(avatar_url)}" x="{self.PADDING}" y="{self.PADDING}" '
            f'width="64" height="64" clip-path="url(#avatar-clip)" preserveAspectRatio="xMidYMid slice"/>'
        )

    def _document(self, body: list[str]) -> str:
        return (
            f'<svg xmlns="http://www.w3.org/2000/svg" width="{self.WIDTH}" height="{self.HEIGHT}" '
            f'viewBox="0 0 {self.WIDTH} {self.HEIGHT}">' + "".join(body) + "</svg>"
        )


def signed_pct(value: float) -> str:
    """"+12.34%" for gains and zero, "-5.00%" for losses."""
    return f"{'+' if value >= 0 else ''}{value:.2f}%"


def _num(value: float) -> str:
    return format(value, "g")
