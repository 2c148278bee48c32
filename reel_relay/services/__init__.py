from .errors import (
    InvalidRequest,
    MediaFetchFailed,
    NoPlayableVariant,
    RelayError,
    UpstreamHTTPError,
    UpstreamMalformedBody,
    UpstreamUnreachable,
)
from .media import MediaFetcher, iter_media, passthrough_headers
from .provider import ProviderClient
from .relay import resolve_media_url
from .selector import select_variant

__all__ = [
    "InvalidRequest",
    "MediaFetchFailed",
    "NoPlayableVariant",
    "RelayError",
    "UpstreamHTTPError",
    "UpstreamMalformedBody",
    "UpstreamUnreachable",
    "MediaFetcher",
    "iter_media",
    "passthrough_headers",
    "ProviderClient",
    "resolve_media_url",
    "select_variant",
]
