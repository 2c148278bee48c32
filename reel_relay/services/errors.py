"""Failure taxonomy for the resolve-and-relay pipeline.

Every error carries the HTTP status it maps to and a fixed, user-facing
``public_message``. Diagnostic detail (upstream status, body excerpt, the
underlying transport error) lives on attributes and in the logs only.
"""
from __future__ import annotations

_BODY_EXCERPT_CHARS = 500


class RelayError(Exception):
    """Base class for all terminal pipeline failures."""

    status_code: int = 500
    public_message: str = "Internal server error"

    def __init__(self, detail: str | None = None) -> None:
        super().__init__(detail or self.public_message)
        self.detail = detail or self.public_message


class InvalidRequest(RelayError):
    status_code = 400
    public_message = "Missing code_or_id_or_url in request body"


class NoPlayableVariant(RelayError):
    status_code = 400
    public_message = "Failed to retrieve video URL from API response"


class UpstreamUnreachable(RelayError):
    public_message = "Media provider is unreachable, please try again later"


class UpstreamHTTPError(RelayError):
    """Raised when the provider answers with a non-200 status."""

    public_message = "Media provider returned an error, please try again later"

    def __init__(self, status: int, body: str) -> None:
        super().__init__(f"Provider responded with status {status}")
        self.status = status
        self.body_excerpt = body[:_BODY_EXCERPT_CHARS]


class UpstreamMalformedBody(RelayError):
    public_message = "Media provider returned an unexpected response"

    def __init__(self, detail: str, body: str = "") -> None:
        super().__init__(detail)
        self.body_excerpt = body[:_BODY_EXCERPT_CHARS]


class MediaFetchFailed(RelayError):
    public_message = "Failed to download video, please try again later"

    def __init__(self, detail: str, status: int | None = None) -> None:
        super().__init__(detail)
        self.status = status
