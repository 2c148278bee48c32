"""Client for the upstream media-info provider (RapidAPI Instagram scraper).

A single lookup per call, no retries: failures are terminal for the request
and surfaced as distinct :mod:`reel_relay.services.errors` types.
"""
from __future__ import annotations

import logging

import httpx
from pydantic import ValidationError

from reel_relay.config import Settings
from reel_relay.models import ProviderResponse

from .errors import UpstreamHTTPError, UpstreamMalformedBody, UpstreamUnreachable

logger = logging.getLogger(__name__)


class ProviderClient:  # pylint: disable=too-few-public-methods
    """Minimal async client for the ``/media_info`` lookup."""

    _LOOKUP_PATH = "/media_info"

    def __init__(self, settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._base_url = settings.provider_base_url.rstrip("/")
        self._headers = {
            "X-RapidAPI-Key": settings.provider_api_key,
            "X-RapidAPI-Host": settings.resolved_provider_host,
        }
        self._client = httpx.AsyncClient(
            timeout=settings.provider_timeout_s,
            headers=self._headers,
            transport=transport,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def lookup(self, reference: str) -> ProviderResponse:
        """Resolve *reference* into the provider's media document."""

        url = f"{self._base_url}{self._LOOKUP_PATH}"
        logger.debug("GET %s reference=%s", url, reference)
        try:
            resp = await self._client.get(url, params={"code_or_id_or_url": reference})
        except httpx.TransportError as exc:
            logger.error("Provider request failed: %r", exc)
            raise UpstreamUnreachable(f"Provider request failed: {exc!r}") from exc
        except httpx.DecodingError as exc:
            # Content-Encoding header that the body does not honour.
            logger.warning("Provider body could not be decoded: %r", exc)
            raise UpstreamMalformedBody(f"Provider body could not be decoded: {exc!r}") from exc

        logger.info("Provider responded with status %s", resp.status_code)
        if resp.status_code != 200:
            error = UpstreamHTTPError(resp.status_code, resp.text)
            logger.warning("Provider error %s: %s", error.status, error.body_excerpt)
            raise error

        return self._parse(resp)

    async def close(self) -> None:
        await self._client.aclose()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _parse(resp: httpx.Response) -> ProviderResponse:
        try:
            payload = resp.json()
        except ValueError as exc:
            error = UpstreamMalformedBody("Provider body is not valid JSON", resp.text)
            logger.warning("%s: %s", error.detail, error.body_excerpt)
            raise error from exc

        try:
            return ProviderResponse.model_validate(payload)
        except ValidationError as exc:
            error = UpstreamMalformedBody(f"Provider body has unexpected shape: {exc.error_count()} errors", resp.text)
            logger.warning("%s: %s", error.detail, error.body_excerpt)
            raise error from exc
