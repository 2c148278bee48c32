from __future__ import annotations

import logging

from .provider import ProviderClient
from .selector import select_variant

logger = logging.getLogger(__name__)


async def resolve_media_url(provider: ProviderClient, reference: str) -> str:
    """Look *reference* up with the provider and return the URL to relay."""

    response = await provider.lookup(reference)
    variant = select_variant(response)
    logger.info("Resolved %s to a %sx%s variant", reference, variant.width, variant.height)
    return variant.url
