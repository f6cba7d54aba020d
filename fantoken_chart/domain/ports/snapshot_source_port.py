"""
Port (interface) for token price snapshot sources.
Infrastructure adapters (e.g. SubgraphSnapshotSource) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from fantoken_chart.domain.entities.price_series import TokenSeries


class ISnapshotSource(ABC):
    @abstractmethod
    async def get_token_series(self, symbol: str) -> Optional[TokenSeries]:
        """Return token info and ascending hourly snapshots, or None if no token has *symbol*.

        Raises:
            UpstreamError: if the source cannot be queried.
        """
        ...
