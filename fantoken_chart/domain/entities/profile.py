"""
Domain entity for the social identity shown next to a fan token chart.
Zero external dependencies: pure Python dataclasses only.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ProfileIdentity:
    """Display identity of a token owner.

    Only user_id, handle and display_name are guaranteed. Upstream fields that
    may be absent are resolved to these attributes by the identity adapter, so
    rendering never probes raw payloads.
    """

    user_id: str
    handle: str
    display_name: str
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    is_power_user: bool = False
    social_capital_score: Optional[float] = None
    social_capital_rank: Optional[int] = None

    @classmethod
    def placeholder(cls, user_id: str) -> "ProfileIdentity":
        """Identity used when the lookup service knows nothing about *user_id*."""
        return cls(user_id=user_id, handle=user_id, display_name=f"fid:{user_id}")
