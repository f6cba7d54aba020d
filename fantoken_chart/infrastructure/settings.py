"""
Runtime settings read from environment variables (optionally via a .env file).
Read once by the composition root; everything downstream receives plain values.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_SUBGRAPH_URL = (
    "https://api.studio.thegraph.com/query/23537/moxie_protocol_stats_mainnet/version/latest"
)
DEFAULT_AIRSTACK_URL = "https://api.airstack.xyz/gql"


@dataclass(frozen=True)
class Settings:
    app_url: str = "http://localhost:8000"
    share_embed_base: str = "http://localhost:8000"
    subgraph_url: str = DEFAULT_SUBGRAPH_URL
    airstack_api_url: str = DEFAULT_AIRSTACK_URL
    airstack_api_key: Optional[str] = None
    benchmark_symbol: str = "id:farcaster"
    benchmark_name: str = "Farcaster Network"
    default_symbol: str = "fid:5650"
    username_map_path: str = "data/username_fids.json"
    canvas_width: int = 1050
    canvas_height: int = 350
    http_timeout_seconds: float = 10.0
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Build settings from *environ* (defaults to os.environ).

        Raises:
            ValueError: if a numeric variable cannot be parsed.
        """
        env = os.environ if environ is None else environ
        app_url = env.get("APP_URL", cls.app_url).rstrip("/")
        return cls(
            app_url=app_url,
            share_embed_base=env.get("SHARE_EMBED_BASE", app_url).rstrip("/"),
            subgraph_url=env.get("SUBGRAPH_URL", cls.subgraph_url),
            airstack_api_url=env.get("AIRSTACK_API_URL", cls.airstack_api_url),
            airstack_api_key=env.get("AIRSTACK_API_KEY") or None,
            benchmark_symbol=env.get("BENCHMARK_SYMBOL", cls.benchmark_symbol),
            benchmark_name=env.get("BENCHMARK_NAME", cls.benchmark_name),
            default_symbol=env.get("DEFAULT_SYMBOL", cls.default_symbol),
            username_map_path=env.get("USERNAME_MAP_PATH", cls.username_map_path),
            canvas_width=_positive_int(env, "CANVAS_WIDTH", cls.canvas_width),
            canvas_height=_positive_int(env, "CANVAS_HEIGHT", cls.canvas_height),
            http_timeout_seconds=float(env.get("HTTP_TIMEOUT_SECONDS", cls.http_timeout_seconds)),
            log_level=env.get("LOG_LEVEL", cls.log_level).upper(),
        )


def _positive_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = env.get(key)
    if raw is None:
        return default
    value = int(raw)
    if value <= 0:
        raise ValueError(f"{key} must be a positive integer, got {raw!r}")
    return value
