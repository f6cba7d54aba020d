"""
Infrastructure adapter: Airstack social graph -> IIdentityProvider.

Airstack profile fields are optional and sometimes nested. They are resolved
here, in one place, with a fixed fallback order:
  avatar:       profileImageContentValue.image.extraSmall -> profileImage -> None
  display name: profileDisplayName -> profileName -> user id
  handle:       profileName -> user id
"""

from typing import Any, Optional

import httpx

from fantoken_chart.domain.entities.profile import ProfileIdentity
from fantoken_chart.domain.ports.identity_port import IIdentityProvider
from fantoken_chart.infrastructure.graphql.client import GraphQLClient
from fantoken_chart.infrastructure.observability.logging_utils import get_logger

logger = get_logger(__name__)

USER_QUERY = """
query GetUserSocialCapital($userId: String!) {
  Socials(
    input: {filter: {userId: {_eq: $userId}}, blockchain: ethereum}
  ) {
    Social {
      profileName
      profileDisplayName
      isFarcasterPowerUser
      userId
      profileBio
      profileImage
      profileImageContentValue {
        image {
          extraSmall
        }
      }
      socialCapital {
        socialCapitalScore
        socialCapitalRank
      }
    }
  }
}
"""


class AirstackIdentityProvider(IIdentityProvider):
    """Looks up Farcaster profiles by fid through the Airstack GraphQL API."""

    def __init__(
        self,
        api_key: Optional[str],
        url: str = "https://api.airstack.xyz/gql",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        if not api_key:
            raise ValueError("AIRSTACK_API_KEY is not defined")
        self._client = GraphQLClient(
            url, headers={"Authorization": api_key}, timeout=timeout, transport=transport
        )

    async def get_identity(self, user_id: str) -> Optional[ProfileIdentity]:
        logger.info("Fetching profile from Airstack for userId: %s", user_id)
        data = await self._client.request(USER_QUERY, {"userId": user_id})
        socials = (data.get("Socials") or {}).get("Social") or []
        if not socials:
            logger.info("Airstack has no profile for userId: %s", user_id)
            return None
        return identity_from_social(socials[0], user_id)


def identity_from_social(social: dict[str, Any], user_id: str) -> ProfileIdentity:
    """Map one Airstack `Social` row onto ProfileIdentity."""
    handle = social.get("profileName") or user_id
    capital = social.get("socialCapital") or {}
    return ProfileIdentity(
        user_id=str(social.get("userId") or user_id),
        handle=handle,
        display_name=social.get("profileDisplayName") or handle,
        avatar_url=_avatar_url(social),
        bio=social.get("profileBio") or None,
        is_power_user=bool(social.get("isFarcasterPowerUser")),
        social_capital_score=capital.get("socialCapitalScore"),
        social_capital_rank=capital.get("socialCapitalRank"),
    )


def _avatar_url(social: dict[str, Any]) -> Optional[str]:
    image = (social.get("profileImageContentValue") or {}).get("image") or {}
    return image.get("extraSmall") or social.get("profileImage") or None
