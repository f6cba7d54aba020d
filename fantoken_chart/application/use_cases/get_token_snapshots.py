"""
Use-case: retrieve token info and hourly price snapshots for a symbol.
Depends only on Domain ports and entities; no infrastructure imports.
"""

from typing import Optional

from fantoken_chart.domain.entities.price_series import TokenSeries
from fantoken_chart.domain.ports.snapshot_source_port import ISnapshotSource


class GetTokenSnapshotsUseCase:
    def __init__(self, source: ISnapshotSource) -> None:
        self._source = source

    async def execute(self, symbol: str) -> Optional[TokenSeries]:
        """Fetch the series for *symbol*; None when no such token exists.

        Raises:
            ValueError:    if *symbol* is blank.
            UpstreamError: propagated from ISnapshotSource on API failure.
        """
        if not symbol or not symbol.strip():
            raise ValueError("symbol must be a non-empty string")
        return await self._source.get_token_series(symbol.strip())
