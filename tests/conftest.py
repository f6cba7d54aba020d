"""Shared fixtures and port fakes for the fan token chart tests."""

from __future__ import annotations

import random
import re
from datetime import datetime, timedelta, timezone
from html import unescape
from typing import Optional

import pytest

from fantoken_chart.domain.entities.price_series import Snapshot, TokenInfo, TokenSeries
from fantoken_chart.domain.entities.profile import ProfileIdentity
from fantoken_chart.domain.ports.identity_port import IIdentityProvider
from fantoken_chart.domain.ports.snapshot_source_port import ISnapshotSource
from fantoken_chart.infrastructure.directory.json_username_directory import JsonUsernameDirectory
from fantoken_chart.infrastructure.settings import Settings

START = datetime(2024, 8, 1, tzinfo=timezone.utc)
META = re.compile(r'<meta property="([^"]+)" content="([^"]*)"/>')


def meta_tags(document: str) -> dict[str, str]:
    """Frame and Open Graph meta tags of an HTML document, unescaped."""
    return {unescape(k): unescape(v) for k, v in META.findall(document)}


def daily_snapshots(prices: list[float], start: datetime = START, hours: tuple[int, ...] = (23,)) -> list[Snapshot]:
    """One snapshot per price, one day apart, at the last hour in *hours*.

    Earlier hours get a decoy price of 999 so last-observation-wins is exercised.
    """
    snapshots = []
    for offset, price in enumerate(prices):
        day = start + timedelta(days=offset)
        for hour in hours[:-1]:
            snapshots.append(Snapshot(timestamp=day.replace(hour=hour), price=999.0))
        snapshots.append(Snapshot(timestamp=day.replace(hour=hours[-1]), price=price))
    return snapshots


def token_series(symbol: str, snapshots: list[Snapshot]) -> TokenSeries:
    return TokenSeries(
        info=TokenInfo(
            address=f"0x{symbol.encode().hex()}",
            symbol=symbol,
            total_supply=1000.0,
            unique_holders=42,
            lifetime_volume=12.5,
        ),
        snapshots=snapshots,
    )


class FakeSnapshotSource(ISnapshotSource):
    def __init__(self, series: dict[str, TokenSeries], error: Optional[Exception] = None) -> None:
        self.series = series
        self.error = error
        self.requested: list[str] = []

    async def get_token_series(self, symbol: str) -> Optional[TokenSeries]:
        self.requested.append(symbol)
        if self.error is not None:
            raise self.error
        return self.series.get(symbol)


class FakeIdentityProvider(IIdentityProvider):
    def __init__(self, profiles: dict[str, ProfileIdentity]) -> None:
        self.profiles = profiles
        self.requested: list[str] = []

    async def get_identity(self, user_id: str) -> Optional[ProfileIdentity]:
        self.requested.append(user_id)
        return self.profiles.get(user_id)


@pytest.fixture
def dwr() -> ProfileIdentity:
    return ProfileIdentity(
        user_id="3",
        handle="dwr.eth",
        display_name="Dan <Romero>",
        avatar_url="https://img.example/dwr.png",
    )


@pytest.fixture
def subject_snapshots() -> list[Snapshot]:
    return daily_snapshots([1.0, 1.1, 1.21], hours=(9, 15, 23))


@pytest.fixture
def benchmark_snapshots() -> list[Snapshot]:
    # Two extra days before the subject starts.
    return daily_snapshots([5.0, 4.0, 2.0, 1.9, 2.0], start=START - timedelta(days=2))


@pytest.fixture
def snapshot_source(subject_snapshots, benchmark_snapshots) -> FakeSnapshotSource:
    return FakeSnapshotSource(
        {
            "fid:3": token_series("fid:3", subject_snapshots),
            "id:farcaster": token_series("id:farcaster", benchmark_snapshots),
        }
    )


@pytest.fixture
def identity_provider(dwr) -> FakeIdentityProvider:
    return FakeIdentityProvider({"3": dwr})


@pytest.fixture
def directory() -> JsonUsernameDirectory:
    return JsonUsernameDirectory([("dwr.eth", 3), ("v", 2)])


@pytest.fixture
def rng() -> random.Random:
    return random.Random(7)


@pytest.fixture
def settings() -> Settings:
    return Settings(app_url="https://frames.example", share_embed_base="https://embed.example")
