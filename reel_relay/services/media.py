"""Streamed fetch of the selected media variant from the CDN."""
from __future__ import annotations

import logging
from collections.abc import AsyncIterator

import httpx

from reel_relay.config import Settings

from .errors import MediaFetchFailed

logger = logging.getLogger(__name__)


class MediaFetcher:
    """Opens the media URL as a stream; no auth headers are sent."""

    def __init__(self, settings: Settings, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._chunk_size = settings.media_chunk_size
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.media_timeout_s, connect=settings.media_connect_timeout_s),
            follow_redirects=True,
            transport=transport,
        )

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    async def open(self, url: str) -> httpx.Response:
        """Send the GET and return the response with its body still unread.

        The status is checked before returning so a failure can still be
        reported as a JSON error. The caller owns the returned response and
        must close it.
        """

        logger.debug("GET media %s", url)
        try:
            request = self._client.build_request("GET", url)
            resp = await self._client.send(request, stream=True)
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.error("Media request failed: %r", exc)
            raise MediaFetchFailed(f"Media request failed: {exc!r}") from exc

        if resp.status_code != 200:
            await resp.aclose()
            logger.warning("Media CDN responded with status %s", resp.status_code)
            raise MediaFetchFailed(f"Media CDN responded with status {resp.status_code}", resp.status_code)
        return resp

    async def close(self) -> None:
        await self._client.aclose()


async def iter_media(resp: httpx.Response, chunk_size: int) -> AsyncIterator[bytes]:
    """Yield the body of *resp* and always close it.

    Headers have already gone out by the time this runs, so a transport
    error is logged and re-raised to abort the connection rather than
    converted into a JSON error.
    """

    relayed = 0
    try:
        async for chunk in resp.aiter_bytes(chunk_size):
            relayed += len(chunk)
            yield chunk
    except httpx.HTTPError:
        logger.exception("Media stream broke after %d bytes", relayed)
        raise
    finally:
        await resp.aclose()
        logger.debug("Media stream closed after %d bytes", relayed)


def passthrough_headers(resp: httpx.Response) -> dict[str, str]:
    """Headers from the CDN response that stay valid for the relayed body."""

    headers: dict[str, str] = {}
    content_length = resp.headers.get("Content-Length")
    if content_length and not resp.headers.get("Content-Encoding"):
        headers["Content-Length"] = content_length
    return headers
