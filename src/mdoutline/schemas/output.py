"""Formatted outline output model."""

from __future__ import annotations

from pydantic import BaseModel


class OutlineResult(BaseModel):
    """Final formatted output."""

    summary: str
    sections_tree: str
    content: str
