"""Table of contents entry model."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class TocEntry(BaseModel):
    """One line of a table of contents."""

    model_config = ConfigDict(frozen=True)

    title: str
    anchor: str
    level: int = Field(..., ge=1, le=6)
