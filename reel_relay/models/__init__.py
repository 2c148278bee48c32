from .provider import MediaItem, MediaVariant, ProviderData, ProviderResponse
from .relay import ErrorBody, ResolutionRequest

__all__ = [
    "MediaItem",
    "MediaVariant",
    "ProviderData",
    "ProviderResponse",
    "ErrorBody",
    "ResolutionRequest",
]
