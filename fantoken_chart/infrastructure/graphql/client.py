"""
Minimal async GraphQL-over-HTTP client built on httpx.

Both upstream services (the Moxie subgraph and Airstack) speak plain GraphQL
POSTs, so the transport details live here once. Transport failures and
GraphQL `errors` payloads both surface as UpstreamError.
"""

from typing import Any, Optional

import httpx

from fantoken_chart.domain.errors import UpstreamError
from fantoken_chart.infrastructure.observability.logging_utils import get_logger

logger = get_logger(__name__)


class GraphQLClient:
    def __init__(
        self,
        url: str,
        headers: Optional[dict[str, str]] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        """
        Args:
            url:       GraphQL endpoint.
            headers:   Extra request headers (e.g. Authorization).
            timeout:   Per-request timeout in seconds.
            transport: Optional httpx transport; tests pass httpx.MockTransport.
        """
        self._url = url
        self._headers = headers or {}
        self._timeout = timeout
        self._transport = transport

    async def request(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        """POST *query* with *variables* and return the `data` object."""
        async with httpx.AsyncClient(
            timeout=self._timeout, headers=self._headers, transport=self._transport
        ) as client:
            try:
                response = await client.post(
                    self._url, json={"query": query, "variables": variables}
                )
                response.raise_for_status()
                payload = response.json()
            except httpx.HTTPError as exc:
                raise UpstreamError(f"GraphQL request to {self._url} failed: {exc}") from exc
            except ValueError as exc:
                raise UpstreamError(f"GraphQL response from {self._url} is not JSON") from exc

        errors = payload.get("errors")
        if errors:
            message = errors[0].get("message", "unknown error") if isinstance(errors, list) else str(errors)
            logger.error("GraphQL errors from %s: %s", self._url, errors)
            raise UpstreamError(f"GraphQL error: {message}")
        return payload.get("data") or {}
