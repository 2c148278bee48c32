from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class ResolutionRequest(BaseModel):
    """A validated, trimmed post reference (short code, numeric id or URL)."""

    reference: str = Field(..., min_length=1)


class ErrorBody(BaseModel):
    """JSON body returned for every failed download."""

    data: Literal[""] = ""
    status: Literal["error"] = "error"
    message: str
