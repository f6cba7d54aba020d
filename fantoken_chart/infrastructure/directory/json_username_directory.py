"""
Infrastructure adapter: JSON file of [username, fid] pairs -> IUsernameDirectory.
Loaded once by the composition root and exposed read-only for the process lifetime.
"""

import json
from pathlib import Path
from types import MappingProxyType
from typing import Iterable, Optional, Union

from fantoken_chart.domain.ports.username_directory_port import IUsernameDirectory
from fantoken_chart.infrastructure.observability.logging_utils import get_logger

logger = get_logger(__name__)


class JsonUsernameDirectory(IUsernameDirectory):
    def __init__(self, pairs: Iterable[tuple[str, int]]) -> None:
        self._entries = tuple((str(name).lower(), int(fid)) for name, fid in pairs)
        self._by_name = MappingProxyType(dict(self._entries))

    def lookup(self, username: str) -> Optional[int]:
        return self._by_name.get(username.strip().lower())

    def entries(self) -> list[tuple[str, int]]:
        return list(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    @classmethod
    def load(cls, path: Union[str, Path]) -> "JsonUsernameDirectory":
        """Read *path*; a missing file yields an empty directory.

        Raises:
            ValueError: if the file is not a JSON list of [username, fid] pairs.
        """
        path = Path(path)
        if not path.exists():
            logger.warning("Username map %s not found; @username search is disabled", path)
            return cls([])
        with path.open("r", encoding="utf-8") as fh:
            raw = json.load(fh)
        if not isinstance(raw, list) or any(
            not isinstance(pair, (list, tuple)) or len(pair) != 2 for pair in raw
        ):
            raise ValueError(f"{path} must hold a JSON list of [username, fid] pairs")
        directory = cls((name, fid) for name, fid in raw)
        logger.info("Loaded %d usernames from %s", len(directory), path)
        return directory
