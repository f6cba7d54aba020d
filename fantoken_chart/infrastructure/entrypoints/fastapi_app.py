"""
FastAPI entry point and Composition Root.

create_app() wires every infrastructure adapter into the application layer.
Any adapter can be injected instead, which is how the tests run the real
routes against fakes.

Run locally:
    uvicorn fantoken_chart.infrastructure.entrypoints.fastapi_app:create_app --factory --reload --port 8000
"""

import os
import random
from typing import Optional
from urllib.parse import parse_qs, urlparse

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse
from pydantic import BaseModel, Field

from fantoken_chart.application.use_cases.compare_and_project import CompareAndProjectUseCase
from fantoken_chart.application.use_cases.get_token_snapshots import GetTokenSnapshotsUseCase
from fantoken_chart.application.use_cases.get_user_profile import GetUserProfileUseCase
from fantoken_chart.application.use_cases.render_comparison_frame import RenderComparisonFrameUseCase
from fantoken_chart.application.use_cases.resolve_symbol import ResolveSymbolUseCase
from fantoken_chart.domain.entities.frame import FrameRequest
from fantoken_chart.domain.entities.price_series import TokenSeries
from fantoken_chart.domain.errors import InvalidInputError, UpstreamError
from fantoken_chart.domain.ports.card_renderer_port import ICardRenderer
from fantoken_chart.domain.ports.identity_port import IIdentityProvider
from fantoken_chart.domain.ports.snapshot_source_port import ISnapshotSource
from fantoken_chart.domain.ports.username_directory_port import IUsernameDirectory
from fantoken_chart.infrastructure.directory.json_username_directory import JsonUsernameDirectory
from fantoken_chart.infrastructure.identity.airstack_adapter import AirstackIdentityProvider
from fantoken_chart.infrastructure.observability.logging_utils import configure_logging, get_logger
from fantoken_chart.infrastructure.rendering.frame_html import render_frame_html
from fantoken_chart.infrastructure.rendering.svg_card_renderer import SvgCardRenderer
from fantoken_chart.infrastructure.secrets.secrets_manager_adapter import SecretsManagerAdapter
from fantoken_chart.infrastructure.settings import Settings
from fantoken_chart.infrastructure.snapshots.subgraph_adapter import SubgraphSnapshotSource

logger = get_logger(__name__)

PAGE_TITLE = "Moxie Fan Token Chart"
PAGE_DESCRIPTION = "Check the performance of Moxie Fan Tokens"


class UntrustedData(BaseModel):
    fid: Optional[int] = None
    inputText: Optional[str] = None
    buttonIndex: Optional[int] = None
    url: Optional[str] = None


class FramePacket(BaseModel):
    """Frame signature packet. Only untrustedData is read; signatures are not verified."""

    untrustedData: UntrustedData = Field(default_factory=UntrustedData)
    trustedData: Optional[dict] = None


def load_settings() -> Settings:
    """Read .env, pull secrets from Secrets Manager when configured, then build Settings."""
    load_dotenv()
    secret_arn = os.environ.get("AIRSTACK_SECRET_ARN")
    if secret_arn:
        SecretsManagerAdapter().load_into_env(secret_arn)
    return Settings.from_env()


def token_series_payload(series: TokenSeries) -> dict:
    info = series.info
    return {
        "tokenInfo": {
            "address": info.address,
            "symbol": info.symbol,
            "totalSupply": info.total_supply,
            "uniqueHolders": info.unique_holders,
            "lifetimeVolume": info.lifetime_volume,
        },
        "hourlySnapshots": [
            {"date": s.timestamp.isoformat().replace("+00:00", "Z"), "price": s.price}
            for s in series.snapshots
        ],
    }


def create_app(
    settings: Optional[Settings] = None,
    snapshot_source: Optional[ISnapshotSource] = None,
    identity_provider: Optional[IIdentityProvider] = None,
    directory: Optional[IUsernameDirectory] = None,
    renderer: Optional[ICardRenderer] = None,
    rng: Optional[random.Random] = None,
) -> FastAPI:
    settings = settings or load_settings()
    configure_logging(settings.log_level)

    snapshot_source = snapshot_source or SubgraphSnapshotSource(
        settings.subgraph_url, timeout=settings.http_timeout_seconds
    )
    identity_provider = identity_provider or AirstackIdentityProvider(
        settings.airstack_api_key,
        url=settings.airstack_api_url,
        timeout=settings.http_timeout_seconds,
    )
    directory = directory or JsonUsernameDirectory.load(settings.username_map_path)
    renderer = renderer or SvgCardRenderer(settings.canvas_width, settings.canvas_height)

    snapshots_uc = GetTokenSnapshotsUseCase(snapshot_source)
    profile_uc = GetUserProfileUseCase(identity_provider)
    frame_uc = RenderComparisonFrameUseCase(
        ResolveSymbolUseCase(directory, default_symbol=settings.default_symbol, rng=rng),
        snapshot_source,
        identity_provider,
        renderer,
        CompareAndProjectUseCase(benchmark_name=settings.benchmark_name),
        benchmark_symbol=settings.benchmark_symbol,
        benchmark_name=settings.benchmark_name,
        app_url=settings.app_url,
        share_embed_base=settings.share_embed_base,
        canvas_width=settings.canvas_width,
        canvas_height=settings.canvas_height,
    )
    post_url = f"{settings.app_url}/frames"

    app = FastAPI(title="Moxie Fan Token Chart API")

    @app.exception_handler(HTTPException)
    async def error_body(request: Request, exc: HTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.get("/api/hourly-snapshots")
    async def hourly_snapshots(symbol: str = ""):
        try:
            series = await snapshots_uc.execute(symbol)
        except (UpstreamError, InvalidInputError) as exc:
            logger.error("Error fetching hourly snapshots for %s: %s", symbol, exc)
            raise HTTPException(status_code=500, detail=f"Failed to fetch hourly snapshots: {exc}") from exc
        except ValueError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        if series is None:
            raise HTTPException(status_code=404, detail="Fan token not found")
        return token_series_payload(series)

    @app.get("/api/user-data")
    async def user_data(symbol: str = ""):
        try:
            profile = await profile_uc.execute(symbol)
        except UpstreamError as exc:
            logger.error("Error fetching user data for %s: %s", symbol, exc)
            raise HTTPException(status_code=500, detail=str(exc)) from exc
        except ValueError as exc:
            raise HTTPException(status_code=400, detail="symbol parameter is required") from exc
        if profile is None:
            raise HTTPException(status_code=404, detail="User not found")
        return {
            "userData": {
                "userId": profile.user_id,
                "profileName": profile.handle,
                "profileDisplayName": profile.display_name,
                "profileImage": profile.avatar_url,
                "profileBio": profile.bio,
                "isFarcasterPowerUser": profile.is_power_user,
                "socialCapital": {
                    "socialCapitalScore": profile.social_capital_score,
                    "socialCapitalRank": profile.social_capital_rank,
                },
            }
        }

    @app.get("/frames", response_class=HTMLResponse)
    async def frames_get(
        action: Optional[str] = None,
        fid: Optional[str] = None,
        userfid: Optional[str] = None,
    ):
        view = await frame_uc.execute(FrameRequest(action=action, fid_param=fid or userfid))
        return HTMLResponse(render_frame_html(view, post_url))

    @app.post("/frames", response_class=HTMLResponse)
    async def frames_post(
        packet: FramePacket,
        action: Optional[str] = None,
        fid: Optional[str] = None,
    ):
        data = packet.untrustedData
        request = FrameRequest(
            input_text=data.inputText,
            action=action,
            requester_fid=data.fid,
            fid_param=fid or _fid_from_url(data.url),
            is_post=True,
        )
        view = await frame_uc.execute(request)
        return HTMLResponse(render_frame_html(view, post_url))

    @app.get("/", response_class=HTMLResponse)
    async def landing(fid: Optional[str] = None, userfid: Optional[str] = None):
        view = await frame_uc.execute(FrameRequest(fid_param=fid or userfid))
        return HTMLResponse(
            render_frame_html(
                view,
                post_url,
                title=PAGE_TITLE,
                description=PAGE_DESCRIPTION,
                body=f"Loading {PAGE_TITLE}...",
            )
        )

    @app.get("/health")
    async def health():
        return {"status": "ok"}

    return app


def _fid_from_url(url: Optional[str]) -> Optional[str]:
    if not url:
        return None
    values = parse_qs(urlparse(url).query).get("fid")
    return values[0] if values else None


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(create_app, factory=True, host="0.0.0.0", port=int(os.environ.get("PORT", "8000")))
