"""Tests for infrastructure adapters: GraphQL sources, directory, secrets, settings."""

from __future__ import annotations

import asyncio
import json
import os
from datetime import datetime, timezone

import httpx
import pytest

from fantoken_chart.domain.errors import InvalidInputError, UpstreamError
from fantoken_chart.infrastructure.directory.json_username_directory import JsonUsernameDirectory
from fantoken_chart.infrastructure.identity.airstack_adapter import (
    AirstackIdentityProvider,
    identity_from_social,
)
from fantoken_chart.infrastructure.secrets.secrets_manager_adapter import SecretsManagerAdapter
from fantoken_chart.infrastructure.settings import Settings
from fantoken_chart.infrastructure.snapshots.subgraph_adapter import SubgraphSnapshotSource

SUBGRAPH_URL = "https://subgraph.example/query"
AIRSTACK_URL = "https://airstack.example/gql"


def _transport(payload: dict, status_code: int = 200, seen: list | None = None) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        if seen is not None:
            seen.append(request)
        return httpx.Response(status_code, json=payload)

    return httpx.MockTransport(handler)


SUBGRAPH_PAYLOAD = {
    "data": {
        "subjectTokens": [
            {
                "id": "0xabc",
                "symbol": "fid:3",
                "totalSupply": "1500.5",
                "uniqueHolders": "12",
                "lifetimeVolume": "99.25",
                "hourlySnapshots": [
                    {"endTimestamp": "1722470400", "endPrice": "0.0125"},
                    {"endTimestamp": "1722474000", "endPrice": "0.013"},
                ],
            }
        ]
    }
}


# ---------------------------------------------------------------------------
# SubgraphSnapshotSource
# ---------------------------------------------------------------------------

def test_subgraph_parses_token_series():
    seen: list[httpx.Request] = []
    source = SubgraphSnapshotSource(SUBGRAPH_URL, transport=_transport(SUBGRAPH_PAYLOAD, seen=seen))

    series = asyncio.run(source.get_token_series("fid:3"))

    assert series is not None
    assert series.info.address == "0xabc"
    assert series.info.total_supply == 1500.5
    assert series.info.unique_holders == 12
    assert series.info.lifetime_volume == 99.25
    assert [s.price for s in series.snapshots] == [0.0125, 0.013]
    assert series.snapshots[0].timestamp == datetime(2024, 8, 1, tzinfo=timezone.utc)

    body = json.loads(seen[0].content)
    assert body["variables"] == {"symbol": "fid:3"}
    assert "hourlySnapshots" in body["query"]


def test_subgraph_unknown_symbol_returns_none():
    source = SubgraphSnapshotSource(SUBGRAPH_URL, transport=_transport({"data": {"subjectTokens": []}}))
    assert asyncio.run(source.get_token_series("fid:0")) is None


def test_subgraph_graphql_errors_raise_upstream_error():
    payload = {"errors": [{"message": "indexer unavailable"}]}
    source = SubgraphSnapshotSource(SUBGRAPH_URL, transport=_transport(payload))
    with pytest.raises(UpstreamError, match="indexer unavailable"):
        asyncio.run(source.get_token_series("fid:3"))


def test_subgraph_http_failure_raises_upstream_error():
    source = SubgraphSnapshotSource(SUBGRAPH_URL, transport=_transport({}, status_code=502))
    with pytest.raises(UpstreamError):
        asyncio.run(source.get_token_series("fid:3"))


def test_subgraph_malformed_price_raises_invalid_input():
    payload = json.loads(json.dumps(SUBGRAPH_PAYLOAD))
    payload["data"]["subjectTokens"][0]["hourlySnapshots"][1]["endPrice"] = "n/a"
    source = SubgraphSnapshotSource(SUBGRAPH_URL, transport=_transport(payload))
    with pytest.raises(InvalidInputError, match="endPrice"):
        asyncio.run(source.get_token_series("fid:3"))


# ---------------------------------------------------------------------------
# AirstackIdentityProvider
# ---------------------------------------------------------------------------

SOCIAL = {
    "profileName": "dwr.eth",
    "profileDisplayName": "Dan Romero",
    "isFarcasterPowerUser": True,
    "userId": "3",
    "profileBio": "Working on Farcaster",
    "profileImage": "https://img.example/full.png",
    "profileImageContentValue": {"image": {"extraSmall": "https://img.example/xs.png"}},
    "socialCapital": {"socialCapitalScore": 51.2, "socialCapitalRank": 4},
}


def test_airstack_maps_profile_and_sends_api_key():
    seen: list[httpx.Request] = []
    provider = AirstackIdentityProvider(
        "secret-key",
        url=AIRSTACK_URL,
        transport=_transport({"data": {"Socials": {"Social": [SOCIAL]}}}, seen=seen),
    )

    identity = asyncio.run(provider.get_identity("3"))

    assert identity is not None
    assert identity.handle == "dwr.eth"
    assert identity.display_name == "Dan Romero"
    assert identity.avatar_url == "https://img.example/xs.png"
    assert identity.is_power_user
    assert identity.social_capital_rank == 4
    assert seen[0].headers["Authorization"] == "secret-key"
    assert json.loads(seen[0].content)["variables"] == {"userId": "3"}


def test_airstack_unknown_user_returns_none():
    provider = AirstackIdentityProvider(
        "k", url=AIRSTACK_URL, transport=_transport({"data": {"Socials": {"Social": None}}})
    )
    assert asyncio.run(provider.get_identity("999999")) is None


def test_airstack_requires_api_key():
    with pytest.raises(ValueError, match="AIRSTACK_API_KEY"):
        AirstackIdentityProvider(None)


def test_avatar_falls_back_to_profile_image():
    social = dict(SOCIAL, profileImageContentValue=None)
    assert identity_from_social(social, "3").avatar_url == "https://img.example/full.png"


def test_avatar_absent_when_no_image_field():
    social = {"profileName": "anon"}
    identity = identity_from_social(social, "77")
    assert identity.avatar_url is None
    assert identity.display_name == "anon"
    assert identity.user_id == "77"


def test_display_name_falls_back_to_user_id():
    identity = identity_from_social({}, "77")
    assert (identity.handle, identity.display_name) == ("77", "77")


# ---------------------------------------------------------------------------
# JsonUsernameDirectory
# ---------------------------------------------------------------------------

def test_directory_loads_pairs(tmp_path):
    path = tmp_path / "map.json"
    path.write_text(json.dumps([["DWR.eth", 3], ["v", "2"]]), encoding="utf-8")
    directory = JsonUsernameDirectory.load(path)
    assert directory.lookup("dwr.eth") == 3
    assert directory.lookup("V") == 2
    assert directory.lookup("nobody") is None
    assert directory.entries() == [("dwr.eth", 3), ("v", 2)]


def test_directory_missing_file_is_empty(tmp_path):
    directory = JsonUsernameDirectory.load(tmp_path / "absent.json")
    assert len(directory) == 0
    assert directory.entries() == []


def test_directory_rejects_malformed_file(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"dwr.eth": 3}), encoding="utf-8")
    with pytest.raises(ValueError):
        JsonUsernameDirectory.load(path)


def test_directory_entries_cannot_mutate_it(directory):
    directory.entries().clear()
    assert directory.lookup("dwr.eth") == 3


# ---------------------------------------------------------------------------
# SecretsManagerAdapter
# ---------------------------------------------------------------------------

class FakeSecretsClient:
    def __init__(self, secret: dict) -> None:
        self.secret = secret
        self.calls: list[str] = []

    def get_secret_value(self, SecretId: str) -> dict:
        self.calls.append(SecretId)
        return {"SecretString": json.dumps(self.secret)}


def test_secrets_load_into_env_keeps_existing_values(monkeypatch):
    monkeypatch.setenv("AIRSTACK_API_URL", "https://already.set")
    monkeypatch.delenv("AIRSTACK_API_KEY", raising=False)
    client = FakeSecretsClient({"AIRSTACK_API_KEY": "from-secret", "AIRSTACK_API_URL": "https://other"})

    loaded = SecretsManagerAdapter(client=client).load_into_env("arn:secret")

    assert loaded == ["AIRSTACK_API_KEY"]
    assert client.calls == ["arn:secret"]
    assert os.environ["AIRSTACK_API_KEY"] == "from-secret"
    assert os.environ["AIRSTACK_API_URL"] == "https://already.set"


def test_secrets_overwrite(monkeypatch):
    monkeypatch.setenv("AIRSTACK_API_KEY", "old")
    adapter = SecretsManagerAdapter(client=FakeSecretsClient({"AIRSTACK_API_KEY": "new"}))
    assert adapter.load_into_env("arn", overwrite=True) == ["AIRSTACK_API_KEY"]
    assert os.environ["AIRSTACK_API_KEY"] == "new"


def test_secrets_client_region_comes_from_environment(monkeypatch):
    created: list[tuple[str, str]] = []
    monkeypatch.setattr(
        "fantoken_chart.infrastructure.secrets.secrets_manager_adapter.boto3.client",
        lambda service, region_name: created.append((service, region_name)),
    )
    monkeypatch.setenv("AWS_DEFAULT_REGION", "eu-west-1")

    SecretsManagerAdapter()
    SecretsManagerAdapter(region="ap-south-1")

    assert created == [("secretsmanager", "eu-west-1"), ("secretsmanager", "ap-south-1")]


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

def test_settings_defaults():
    settings = Settings.from_env({})
    assert settings.benchmark_symbol == "id:farcaster"
    assert settings.default_symbol == "fid:5650"
    assert (settings.canvas_width, settings.canvas_height) == (1050, 350)
    assert settings.airstack_api_key is None
    assert settings.share_embed_base == settings.app_url


def test_settings_from_environment():
    settings = Settings.from_env(
        {
            "APP_URL": "https://frames.example/",
            "AIRSTACK_API_KEY": "k",
            "CANVAS_WIDTH": "800",
            "HTTP_TIMEOUT_SECONDS": "2.5",
            "LOG_LEVEL": "debug",
        }
    )
    assert settings.app_url == "https://frames.example"
    assert settings.share_embed_base == "https://frames.example"
    assert settings.airstack_api_key == "k"
    assert settings.canvas_width == 800
    assert settings.http_timeout_seconds == 2.5
    assert settings.log_level == "DEBUG"


def test_settings_rejects_non_positive_canvas():
    with pytest.raises(ValueError, match="CANVAS_HEIGHT"):
        Settings.from_env({"CANVAS_HEIGHT": "0"})
