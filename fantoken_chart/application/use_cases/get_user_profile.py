"""
Use-case: retrieve the social profile behind a fan token symbol.
Depends only on Domain ports and entities; no infrastructure imports.
"""

from typing import Optional

from fantoken_chart.application.use_cases.resolve_symbol import strip_fid_prefix
from fantoken_chart.domain.entities.profile import ProfileIdentity
from fantoken_chart.domain.ports.identity_port import IIdentityProvider


class GetUserProfileUseCase:
    def __init__(self, provider: IIdentityProvider) -> None:
        self._provider = provider

    async def execute(self, symbol: str) -> Optional[ProfileIdentity]:
        """Look up the profile for *symbol*, accepting both "fid:123" and "123".

        Raises:
            ValueError:    if *symbol* is blank.
            UpstreamError: propagated from IIdentityProvider on API failure.
        """
        if not symbol or not symbol.strip():
            raise ValueError("symbol must be a non-empty string")
        return await self._provider.get_identity(strip_fid_prefix(symbol.strip()))
