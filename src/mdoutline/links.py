"""Internal link extraction and anchor validation."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Iterable, Iterator
from urllib.parse import unquote

from mdoutline.schemas import BrokenAnchor, ContentBlock, Document, ParagraphBlock, TableBlock

try:
    from bs4 import BeautifulSoup
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML link parsing (pip install beautifulsoup4)."
    ) from exc

logger = logging.getLogger(__name__)

_CODE_SPAN_RE = re.compile(r"(`+)(?!`)(.+?)(?<!`)\1(?!`)", re.DOTALL)
_INLINE_LINK_RE = re.compile(
    r"(?<!!)\[(?P<text>[^\[\]]*)\]\(\s*<?(?P<href>[^)\s>]*)>?(?:\s+[\"'(][^)]*)?\s*\)"
)
_REFERENCE_DEF_RE = re.compile(
    r"^ {0,3}\[(?P<text>[^\]]+)\]:[ \t]*<?(?P<href>[^\s>]+)>?.*$", re.MULTILINE
)


@dataclass(frozen=True)
class InternalLink:
    """A same-document link reference found in a content block."""

    anchor: str
    line: int
    section: str | None
    text: str | None = None


def iter_internal_links(document: Document) -> Iterator[InternalLink]:
    """Yield every ``#anchor`` reference in document order.

    Paragraphs and tables are scanned for inline links, reference
    definitions and raw HTML ``<a href>`` tags. Code blocks and inline code
    spans are skipped. Links to other files or URLs are ignored.
    """
    for section_title, block in _iter_blocks(document):
        yield from _links_in_block(block, section_title)


def explicit_anchor_ids(document: Document) -> set[str]:
    """Collect HTML ``id``/``name`` attributes declared inside content blocks."""
    ids: set[str] = set()
    for _, block in _iter_blocks(document):
        text = _strip_code_spans(block.text)
        if "<" not in text:
            continue
        soup = BeautifulSoup(text, "lxml")
        for tag in soup.find_all(id=True):
            ids.add(tag["id"])
        for tag in soup.find_all("a", attrs={"name": True}):
            ids.add(tag["name"])
    return ids


def validate_links(document: Document) -> list[BrokenAnchor]:
    """Cross-check internal link references against the document's anchors.

    Returns:
        One BrokenAnchor per link whose target is neither a section anchor
        nor an explicit HTML id, in document order. Empty when all resolve.
    """
    known = set(document.anchors()) | explicit_anchor_ids(document)
    broken = [
        BrokenAnchor(
            anchor=link.anchor, section=link.section, line=link.line, text=link.text
        )
        for link in iter_internal_links(document)
        if link.anchor not in known
    ]
    for item in broken:
        logger.debug("Broken anchor #%s at line %d", item.anchor, item.line)
    return broken


def _iter_blocks(
    document: Document,
) -> Iterable[tuple[str | None, ParagraphBlock | TableBlock]]:
    for block in document.preamble:
        if _is_scannable(block):
            yield None, block
    for section in document.iter_sections():
        for block in section.blocks:
            if _is_scannable(block):
                yield section.title, block


def _is_scannable(block: ContentBlock) -> bool:
    return isinstance(block, (ParagraphBlock, TableBlock))


def _links_in_block(
    block: ParagraphBlock | TableBlock, section: str | None
) -> list[InternalLink]:
    text = _strip_code_spans(block.text)
    found: list[tuple[int, InternalLink]] = []

    for pattern in (_INLINE_LINK_RE, _REFERENCE_DEF_RE):
        for match in pattern.finditer(text):
            anchor = _internal_target(match.group("href"))
            if anchor is None:
                continue
            line = block.line + text.count("\n", 0, match.start())
            link = InternalLink(
                anchor=anchor, line=line, section=section, text=match.group("text")
            )
            found.append((match.start(), link))

    found.extend(_html_links(text, block.line, section))
    found.sort(key=lambda item: item[0])
    return [link for _, link in found]


def _html_links(
    text: str, line: int, section: str | None
) -> list[tuple[int, InternalLink]]:
    """Find raw ``<a href>`` links, keyed by their character offset in ``text``."""
    if "<a" not in text.lower():
        return []
    # html.parser records sourceline/sourcepos for each tag; lxml does not.
    soup = BeautifulSoup(text, "html.parser")
    line_starts = [0]
    for row in text.split("\n")[:-1]:
        line_starts.append(line_starts[-1] + len(row) + 1)

    links: list[tuple[int, InternalLink]] = []
    for tag in soup.find_all("a", href=True):
        anchor = _internal_target(tag["href"])
        if anchor is None:
            continue
        row = (tag.sourceline or 1) - 1
        offset = line_starts[row] + (tag.sourcepos or 0)
        label = tag.get_text(" ", strip=True) or None
        links.append(
            (offset, InternalLink(anchor=anchor, line=line + row, section=section, text=label))
        )
    return links


def _internal_target(href: str) -> str | None:
    """Return the anchor of a same-document href, or None for anything else."""
    href = href.strip()
    if not href.startswith("#") or len(href) == 1:
        return None
    return unquote(href[1:])


def _strip_code_spans(text: str) -> str:
    # Blank out rather than delete so offsets and line counts are preserved.
    return _CODE_SPAN_RE.sub(lambda m: re.sub(r"[^\n]", " ", m.group(0)), text)
