"""
Use-case: build the frame for one interaction with the fan token chart.
Depends only on Domain ports, services and entities; no infrastructure imports.

The subject series, the benchmark series and the identity are independent
upstream calls, so they are awaited together; the comparison only starts once
all three have answered, and a failed fetch cancels the ones still in flight.
Every data problem ends in a fallback frame, never in an exception reaching
the frame client.
"""

import asyncio
import logging

from fantoken_chart.application.use_cases.compare_and_project import CompareAndProjectUseCase
from fantoken_chart.application.use_cases.resolve_symbol import ResolveSymbolUseCase, strip_fid_prefix
from fantoken_chart.domain.entities.frame import FrameButton, FrameRequest, FrameView
from fantoken_chart.domain.entities.profile import ProfileIdentity
from fantoken_chart.domain.errors import ComparisonError, UpstreamError
from fantoken_chart.domain.ports.card_renderer_port import ICardRenderer
from fantoken_chart.domain.ports.identity_port import IIdentityProvider
from fantoken_chart.domain.ports.snapshot_source_port import ISnapshotSource
from fantoken_chart.domain.services.comparison import build_share_url

logger = logging.getLogger(__name__)

TEXT_INPUT_PROMPT = "Search by FID or @username"


class RenderComparisonFrameUseCase:
    def __init__(
        self,
        resolver: ResolveSymbolUseCase,
        snapshots: ISnapshotSource,
        identity: IIdentityProvider,
        renderer: ICardRenderer,
        comparer: CompareAndProjectUseCase,
        *,
        benchmark_symbol: str,
        benchmark_name: str,
        app_url: str,
        share_embed_base: str,
        canvas_width: int,
        canvas_height: int,
    ) -> None:
        self._resolver = resolver
        self._snapshots = snapshots
        self._identity = identity
        self._renderer = renderer
        self._comparer = comparer
        self._benchmark_symbol = benchmark_symbol
        self._benchmark_name = benchmark_name
        self._search_target = f"{app_url.rstrip('/')}/frames?action=search"
        self._share_embed_base = share_embed_base
        self._canvas_width = canvas_width
        self._canvas_height = canvas_height

    async def execute(self, request: FrameRequest) -> FrameView:
        symbol = self._resolver.execute(request)
        user_id = strip_fid_prefix(symbol)

        fetches = [
            asyncio.ensure_future(self._snapshots.get_token_series(symbol)),
            asyncio.ensure_future(self._snapshots.get_token_series(self._benchmark_symbol)),
            asyncio.ensure_future(self._identity.get_identity(user_id)),
        ]
        try:
            subject, benchmark, identity = await asyncio.gather(*fetches)
        except (UpstreamError, ComparisonError) as exc:
            logger.error("Upstream fetch for %s failed: %s", symbol, exc)
            await _cancel_pending(fetches)
            return self._error_view(symbol)

        if subject is None:
            logger.info("No fan token found for %s", symbol)
            return self._no_token_view(symbol)
        if benchmark is None:
            logger.error("Benchmark token %s not found", self._benchmark_symbol)
            return self._error_view(symbol)

        profile = identity or ProfileIdentity.placeholder(user_id)
        try:
            projection = self._comparer.execute(
                subject.snapshots,
                benchmark.snapshots,
                self._canvas_width,
                self._canvas_height,
                display_name=profile.display_name,
                subject_id=user_id,
            )
        except ComparisonError as exc:
            logger.warning("Comparison for %s failed: %s", symbol, exc)
            return self._error_view(symbol)

        delta = projection.comparison.delta_pct
        share_url = build_share_url(
            projection.share_text.for_delta(delta),
            projection.share_text.subject_id,
            self._share_embed_base,
        )
        return FrameView(
            image_svg=self._renderer.render_comparison(projection, profile, self._benchmark_name),
            buttons=[
                FrameButton(label="🔎 Search", action="post", target=self._search_target),
                FrameButton(label="Share", action="link", target=share_url),
            ],
            text_input=TEXT_INPUT_PROMPT,
            state={"symbol": symbol},
        )

    def _no_token_view(self, symbol: str) -> FrameView:
        return FrameView(
            image_svg=self._renderer.render_no_token(),
            buttons=[FrameButton(label="🔎 Search Another", action="post", target=self._search_target)],
            text_input=TEXT_INPUT_PROMPT,
            state={"symbol": symbol},
        )

    def _error_view(self, symbol: str) -> FrameView:
        return FrameView(
            image_svg=self._renderer.render_error(),
            buttons=[FrameButton(label="🔎 Try Again", action="post", target=self._search_target)],
            text_input=TEXT_INPUT_PROMPT,
            state={"symbol": symbol},
        )


async def _cancel_pending(fetches: list[asyncio.Future]) -> None:
    """Cancel fetches still in flight and wait until they have all settled."""
    for fetch in fetches:
        fetch.cancel()
    await asyncio.gather(*fetches, return_exceptions=True)
