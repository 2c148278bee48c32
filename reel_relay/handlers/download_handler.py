"""POST /download: resolve a post reference and relay the video."""
from __future__ import annotations

import json
import logging
from typing import Any

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse
from starlette.types import Receive, Scope, Send

from reel_relay.config import Settings
from reel_relay.models import ResolutionRequest
from reel_relay.services import (
    InvalidRequest,
    MediaFetcher,
    ProviderClient,
    iter_media,
    passthrough_headers,
    resolve_media_url,
)
from reel_relay.utils.filenames import content_disposition, download_filename

router = APIRouter()
logger = logging.getLogger(__name__)

REFERENCE_FIELD = "code_or_id_or_url"
VIDEO_MEDIA_TYPE = "video/mp4"


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------

def get_provider(request: Request) -> ProviderClient:
    return request.app.state.provider


def get_media_fetcher(request: Request) -> MediaFetcher:
    return request.app.state.media_fetcher


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------

class MediaStreamResponse(StreamingResponse):
    """Streams a CDN response and closes it however the ASGI call ends.

    Covers a normal finish, a client disconnect (cancelled stream or
    ``ClientDisconnect``) and a mid-body failure alike.
    """

    def __init__(self, upstream: httpx.Response, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.upstream = upstream

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)
        finally:
            await self.upstream.aclose()


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def validate_reference(payload: Any) -> ResolutionRequest:
    """Check the inbound body and return the trimmed reference.

    The reference is not parsed any further: the provider accepts codes,
    numeric ids and full URLs alike.
    """
    if not isinstance(payload, dict):
        raise InvalidRequest("Request body is not a JSON object")
    reference = payload.get(REFERENCE_FIELD)
    if not isinstance(reference, str):
        raise InvalidRequest(f"{REFERENCE_FIELD} missing or not a string")
    reference = reference.strip()
    if not reference:
        raise InvalidRequest(f"{REFERENCE_FIELD} is empty")
    return ResolutionRequest(reference=reference)


async def _read_payload(request: Request) -> Any:
    raw_body = await request.body()
    try:
        return json.loads(raw_body)
    except ValueError as exc:
        raise InvalidRequest("Request body is not valid JSON") from exc


# ---------------------------------------------------------------------------
# POST download
# ---------------------------------------------------------------------------


@router.post("/download")
async def download(
    request: Request,
    provider: ProviderClient = Depends(get_provider),
    media_fetcher: MediaFetcher = Depends(get_media_fetcher),
    settings: Settings = Depends(get_app_settings),
):
    resolution = validate_reference(await _read_payload(request))
    logger.info("Download requested for %s", resolution.reference)

    media_url = await resolve_media_url(provider, resolution.reference)
    media_resp = await media_fetcher.open(media_url)

    headers = passthrough_headers(media_resp)
    headers["Content-Disposition"] = content_disposition(download_filename(settings.filename_prefix))
    return MediaStreamResponse(
        media_resp,
        iter_media(media_resp, media_fetcher.chunk_size),
        status_code=200,
        media_type=VIDEO_MEDIA_TYPE,
        headers=headers,
    )
