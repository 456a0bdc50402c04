"""Section tree models."""

from __future__ import annotations

from typing import Iterator

from pydantic import BaseModel, ConfigDict, Field

from mdoutline.schemas.blocks import ContentBlock


class Section(BaseModel):
    """A titled, hierarchical section node."""

    model_config = ConfigDict(frozen=True)

    title: str
    level: int = Field(..., ge=1, le=6)
    anchor: str
    line: int = Field(..., ge=1)
    blocks: tuple[ContentBlock, ...] = ()
    children: tuple["Section", ...] = ()

    def iter_sections(self) -> Iterator[Section]:
        """Yield this section and all descendants in document order."""
        yield self
        for child in self.children:
            yield from child.iter_sections()


class Document(BaseModel):
    """A parsed document: preamble blocks plus top-level sections."""

    model_config = ConfigDict(frozen=True)

    sections: tuple[Section, ...] = ()
    preamble: tuple[ContentBlock, ...] = ()

    def iter_sections(self) -> Iterator[Section]:
        """Yield every section in document order (pre-order)."""
        for section in self.sections:
            yield from section.iter_sections()

    def anchors(self) -> list[str]:
        return [section.anchor for section in self.iter_sections()]

    @property
    def section_count(self) -> int:
        return sum(1 for _ in self.iter_sections())

    def resolve_anchor(self, anchor: str) -> Section | None:
        """Return the section owning ``anchor`` (leading ``#`` allowed), or None."""
        target = anchor[1:] if anchor.startswith("#") else anchor
        for section in self.iter_sections():
            if section.anchor == target:
                return section
        return None
