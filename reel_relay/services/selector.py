from __future__ import annotations

import logging
from typing import Any
from urllib.parse import urlsplit

from pydantic import BaseModel, ValidationError

from reel_relay.models import MediaItem, MediaVariant, ProviderData, ProviderResponse

from .errors import NoPlayableVariant, UpstreamMalformedBody

logger = logging.getLogger(__name__)


def select_variant(response: ProviderResponse) -> MediaVariant:
    """Pick the variant to relay from a provider lookup.

    Only ``items[0]`` (the primary post) is consulted, and its first video
    version is taken as-is: the provider lists encodings best-first, so no
    re-ranking by width or height happens here. Nothing beyond that path is
    validated, so a broken trailing variant or carousel entry is ignored.
    """

    if not response.is_ok:
        logger.info("Provider status is %r, nothing to relay", response.status)
        raise NoPlayableVariant(f"Provider status {response.status!r}")
    if response.data is None:
        raise NoPlayableVariant("Provider returned no data")

    data = _validate(ProviderData, response.data, "data")
    if not data.items:
        raise NoPlayableVariant("Provider returned no items")

    item = _validate(MediaItem, data.items[0], "items[0]")
    if not item.video_versions:
        raise NoPlayableVariant("Primary item has no video versions")

    chosen = _validate(MediaVariant, item.video_versions[0], "video_versions[0]")
    if not is_https_url(chosen.url):
        raise UpstreamMalformedBody("Selected variant URL is not an absolute https URL", chosen.url)

    logger.debug("Selected variant %sx%s type=%s", chosen.width, chosen.height, chosen.type)
    return chosen


def is_https_url(url: str) -> bool:
    try:
        parts = urlsplit(url)
    except ValueError:
        return False
    return parts.scheme == "https" and bool(parts.hostname)


def _validate(model: type[BaseModel], value: Any, where: str):
    try:
        return model.model_validate(value)
    except ValidationError as exc:
        error = UpstreamMalformedBody(f"Provider {where} has unexpected shape: {exc.error_count()} errors", repr(value))
        logger.warning("%s: %s", error.detail, error.body_excerpt)
        raise error from exc
