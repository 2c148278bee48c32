from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class MediaVariant(BaseModel):
    """One encoding of a video as advertised by the provider."""

    model_config = ConfigDict(extra="ignore")

    url: str
    width: int | None = None
    height: int | None = None
    type: int | None = None


class MediaItem(BaseModel):
    # Entries stay raw; only the variant actually relayed is validated.
    model_config = ConfigDict(extra="ignore")

    video_versions: list[Any] | None = None


class ProviderData(BaseModel):
    model_config = ConfigDict(extra="ignore")

    items: list[Any] = Field(default_factory=list)


class ProviderResponse(BaseModel):
    """Body of a ``/media_info`` lookup.

    Only ``status`` is checked up front. ``data`` is kept as sent because
    failed lookups put arbitrary values there (e.g. an error string); it is
    validated lazily by the selector once ``status == "ok"``.
    """

    model_config = ConfigDict(extra="ignore")

    status: str
    data: Any = None

    @property
    def is_ok(self) -> bool:
        return self.status == "ok"
