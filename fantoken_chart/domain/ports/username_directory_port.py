"""
Port (interface) for the read-only username -> fid directory used by frame search.
The directory is loaded once at startup and never mutated afterwards.
"""

from abc import ABC, abstractmethod
from typing import Optional


class IUsernameDirectory(ABC):
    @abstractmethod
    def lookup(self, username: str) -> Optional[int]:
        """Return the fid registered for *username* (case-insensitive), if any."""
        ...

    @abstractmethod
    def entries(self) -> list[tuple[str, int]]:
        """All (username, fid) pairs, in load order."""
        ...
