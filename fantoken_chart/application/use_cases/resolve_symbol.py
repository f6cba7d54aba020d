"""
Use-case: decide which fan token symbol a frame interaction asks for.
Depends only on Domain ports and entities; no infrastructure imports.

Precedence: typed search input, the "random" action, the requester's own fid,
a `fid` query parameter, then the configured default symbol.
"""

import logging
import random
from typing import Optional

from fantoken_chart.domain.entities.frame import FrameRequest
from fantoken_chart.domain.ports.username_directory_port import IUsernameDirectory

logger = logging.getLogger(__name__)

FID_PREFIX = "fid:"


def fid_symbol(fid: object) -> str:
    return f"{FID_PREFIX}{fid}"


def strip_fid_prefix(symbol: str) -> str:
    return symbol[len(FID_PREFIX):] if symbol.startswith(FID_PREFIX) else symbol


class ResolveSymbolUseCase:
    def __init__(
        self,
        directory: IUsernameDirectory,
        default_symbol: str = "fid:5650",
        rng: Optional[random.Random] = None,
    ) -> None:
        self._directory = directory
        self._default_symbol = default_symbol
        self._rng = rng or random.Random()

    def execute(self, request: FrameRequest) -> str:
        symbol = self._resolve(request)
        logger.info("Resolved frame request to symbol %s", symbol)
        return symbol

    def _resolve(self, request: FrameRequest) -> str:
        text = (request.input_text or "").strip()
        if text:
            return self._from_search(text)

        if request.action == "random":
            entries = self._directory.entries()
            if entries:
                _, fid = self._rng.choice(entries)
                return fid_symbol(fid)
            logger.warning("Random pick requested but the username directory is empty")

        if request.is_post and request.requester_fid:
            return fid_symbol(request.requester_fid)

        if request.fid_param:
            return fid_symbol(request.fid_param)

        return self._default_symbol

    def _from_search(self, text: str) -> str:
        if text.startswith("@"):
            fid = self._directory.lookup(text[1:])
            if fid is None:
                logger.info("Username %s not in directory; searching it verbatim", text)
                return text
            return fid_symbol(fid)
        if text.isdigit():
            return fid_symbol(text)
        return text
