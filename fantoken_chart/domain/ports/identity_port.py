"""
Port (interface) for social identity lookups.
Infrastructure adapters (e.g. AirstackIdentityProvider) must implement this interface.
"""

from abc import ABC, abstractmethod
from typing import Optional

from fantoken_chart.domain.entities.profile import ProfileIdentity


class IIdentityProvider(ABC):
    @abstractmethod
    async def get_identity(self, user_id: str) -> Optional[ProfileIdentity]:
        """Return the display identity for *user_id*, or None if it is unknown.

        Raises:
            UpstreamError: if the lookup service fails.
        """
        ...
