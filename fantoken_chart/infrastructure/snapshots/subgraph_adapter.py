"""
Infrastructure adapter: Moxie protocol subgraph (The Graph) -> ISnapshotSource.
All GraphQL field names and string-encoded numbers are confined here; the rest
of the codebase only sees TokenSeries, TokenInfo and Snapshot.
"""

from datetime import datetime, timezone
from typing import Any, Optional

import httpx

from fantoken_chart.domain.entities.price_series import Snapshot, TokenInfo, TokenSeries
from fantoken_chart.domain.errors import InvalidInputError
from fantoken_chart.domain.ports.snapshot_source_port import ISnapshotSource
from fantoken_chart.infrastructure.graphql.client import GraphQLClient
from fantoken_chart.infrastructure.observability.logging_utils import get_logger

logger = get_logger(__name__)

HOURLY_SNAPSHOTS_QUERY = """
query HourlySnapshots($symbol: String!) {
  subjectTokens(where: { symbol: $symbol }) {
    id
    symbol
    totalSupply
    uniqueHolders
    lifetimeVolume
    hourlySnapshots(orderBy: endTimestamp, orderDirection: asc, first: 1000) {
      endTimestamp
      endPrice
    }
  }
}
"""


class SubgraphSnapshotSource(ISnapshotSource):
    """Reads token info and hourly end-of-period prices from the subgraph."""

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = GraphQLClient(url, timeout=timeout, transport=transport)

    async def get_token_series(self, symbol: str) -> Optional[TokenSeries]:
        logger.info("Requested symbol: %s", symbol)
        data = await self._client.request(HOURLY_SNAPSHOTS_QUERY, {"symbol": symbol})

        tokens = data.get("subjectTokens") or []
        if not tokens:
            logger.info("No subject token found for symbol: %s", symbol)
            return None

        token = tokens[0]
        snapshots = [_to_snapshot(raw) for raw in token.get("hourlySnapshots") or []]
        info = TokenInfo(
            address=token.get("id", ""),
            symbol=token.get("symbol", symbol),
            total_supply=_number(token.get("totalSupply", 0), float, "totalSupply"),
            unique_holders=_number(token.get("uniqueHolders", 0), int, "uniqueHolders"),
            lifetime_volume=_number(token.get("lifetimeVolume", 0), float, "lifetimeVolume"),
        )
        logger.info("Returning data for %s with %d snapshots", info.symbol, len(snapshots))
        return TokenSeries(info=info, snapshots=snapshots)


def _to_snapshot(raw: dict[str, Any]) -> Snapshot:
    seconds = _number(raw.get("endTimestamp"), int, "endTimestamp")
    return Snapshot(
        timestamp=datetime.fromtimestamp(seconds, tz=timezone.utc),
        price=_number(raw.get("endPrice"), float, "endPrice"),
    )


def _number(value: Any, kind: type, field_name: str):
    try:
        return kind(value)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"Malformed {field_name}: {value!r}") from exc
