"""Table of contents extraction."""

from __future__ import annotations

from typing import Iterator

from mdoutline.schemas import Document, Section, TocEntry


class TableOfContents:
    """Lazy, restartable view of a document's headings.

    Entries are produced on demand by walking the section tree; each call to
    ``iter()`` starts a fresh walk, so the same object can be consumed any
    number of times. The underlying document is immutable, so every walk
    yields the same entries.
    """

    def __init__(self, document: Document, *, max_level: int | None = None) -> None:
        self._document = document
        self._max_level = max_level

    def __iter__(self) -> Iterator[TocEntry]:
        for section in self._document.iter_sections():
            if self._max_level is not None and section.level > self._max_level:
                continue
            yield TocEntry(title=section.title, anchor=section.anchor, level=section.level)

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __repr__(self) -> str:
        return f"TableOfContents(entries={len(self)}, max_level={self._max_level})"


def table_of_contents(
    document: Document, *, max_level: int | None = None
) -> TableOfContents:
    """Return the (title, anchor, level) entries of ``document`` in source order."""
    return TableOfContents(document, max_level=max_level)


def resolve_anchor(document: Document, anchor: str) -> Section | None:
    """Look up the section owning ``anchor``; None when it does not exist."""
    return document.resolve_anchor(anchor)


def render_toc(
    document: Document, *, max_level: int | None = None, indent: str = "  "
) -> str:
    """Render a nested Markdown bullet list of links to every section."""
    entries = list(table_of_contents(document, max_level=max_level))
    if not entries:
        return ""
    base_level = min(entry.level for entry in entries)
    lines = [
        f"{indent * (entry.level - base_level)}- [{entry.title}](#{entry.anchor})"
        for entry in entries
    ]
    return "\n".join(lines)
