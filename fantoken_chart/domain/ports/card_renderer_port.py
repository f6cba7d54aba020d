"""
Port (interface) for the frame image renderer.
Infrastructure adapters (e.g. SvgCardRenderer) must implement this interface.
"""

from abc import ABC, abstractmethod

from fantoken_chart.domain.entities.price_series import ComparisonProjection
from fantoken_chart.domain.entities.profile import ProfileIdentity


class ICardRenderer(ABC):
    @abstractmethod
    def render_comparison(
        self,
        projection: ComparisonProjection,
        identity: ProfileIdentity,
        benchmark_name: str,
    ) -> str:
        """Render the comparison card for *identity*."""
        ...

    @abstractmethod
    def render_no_token(self) -> str:
        """Render the card shown when the user has no fan token."""
        ...

    @abstractmethod
    def render_error(self) -> str:
        """Render the card shown when a comparison cannot be produced."""
        ...
