from __future__ import annotations

import re
from datetime import datetime, timezone

_UNSAFE = re.compile(r"[^A-Za-z0-9_-]+")


def download_filename(prefix: str, *, now: datetime | None = None) -> str:
    """Return ``<prefix>_<YYYYmmdd_HHMMSS_ffffff>.mp4`` for the attachment header.

    The name carries no meaning; it only has to be unique-ish and safe to
    drop inside a quoted ``Content-Disposition`` filename.
    """

    stamp = (now or datetime.now(timezone.utc)).strftime("%Y%m%d_%H%M%S_%f")
    safe_prefix = _UNSAFE.sub("_", prefix).strip("_") or "video"
    return f"{safe_prefix}_{stamp}.mp4"


def content_disposition(filename: str) -> str:
    return f'attachment; filename="{filename}"'
