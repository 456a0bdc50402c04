"""Structured link-check and validation results."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class BrokenAnchor(BaseModel):
    """An internal link whose target anchor does not exist.

    Attributes:
        anchor: The missing target, without the leading ``#``.
        section: Title of the section holding the link, or None when the
            link sits in the preamble.
        line: 1-based line of the block containing the link.
        text: The link text, when the link form has one.
    """

    model_config = ConfigDict(frozen=True)

    anchor: str
    section: str | None = None
    line: int = Field(..., ge=1)
    text: str | None = None


class DocumentIssue(BaseModel):
    """A single problem found while checking a document."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["malformed", "broken_anchor"]
    message: str
    line: int | None = None
    anchor: str | None = None


class DocumentReport(BaseModel):
    """Outcome of checking a document without raising."""

    model_config = ConfigDict(frozen=True)

    issues: tuple[DocumentIssue, ...] = ()
    section_count: int = 0

    @property
    def ok(self) -> bool:
        return not self.issues
