"""Render a parsed document back to Markdown, an outline, or HTML."""

from __future__ import annotations

import re

from mdoutline.schemas import (
    CodeBlock,
    ContentBlock,
    Document,
    ParagraphBlock,
    Section,
    TableBlock,
)

try:
    from bs4 import BeautifulSoup
    from bs4.element import Tag
except ImportError as exc:  # pragma: no cover - runtime dependency check
    raise RuntimeError(
        "BeautifulSoup4 is required for HTML rendering (pip install beautifulsoup4)."
    ) from exc


_LINK_RE = re.compile(r"(?<!!)\[(?P<text>[^\[\]]*)\]\((?P<href>[^)\s]+)\)")


def render_outline(document: Document) -> str:
    """Render heading lines only, one per section, in document order.

    Parsing the result yields the same titles and nesting as ``document``.
    """
    return "\n".join(
        f"{'#' * section.level} {section.title}".rstrip()
        for section in document.iter_sections()
    )


def render_markdown(document: Document) -> str:
    """Render headings and content blocks back to Markdown source."""
    blocks = [render_block(block) for block in document.preamble]
    for section in document.sections:
        blocks.extend(_render_section(section))
    return "\n\n".join(block for block in blocks if block).strip()


def render_block(block: ContentBlock) -> str:
    if isinstance(block, CodeBlock):
        return f"{block.fence}{block.language or ''}\n{block.code}{block.fence}"
    return block.text


def _render_section(section: Section) -> list[str]:
    blocks: list[str] = [f"{'#' * section.level} {section.title}".rstrip()]
    blocks.extend(render_block(block) for block in section.blocks)
    for child in section.children:
        blocks.extend(_render_section(child))
    return blocks


def render_html(document: Document) -> str:
    """Render the document as nested ``<section>`` elements.

    Each section gets ``id`` set to its anchor; code blocks become
    ``<pre><code class="language-...">`` and inline Markdown links in
    paragraphs become ``<a href>`` elements.
    """
    soup = BeautifulSoup("", "lxml")
    for block in document.preamble:
        soup.append(_html_block(soup, block))
    for section in document.sections:
        soup.append(_html_section(soup, section))
    return soup.decode()


def _html_section(soup: BeautifulSoup, section: Section) -> Tag:
    container = soup.new_tag("section", id=section.anchor)
    heading = soup.new_tag(f"h{section.level}")
    heading.string = section.title
    container.append(heading)
    for block in section.blocks:
        container.append(_html_block(soup, block))
    for child in section.children:
        container.append(_html_section(soup, child))
    return container


def _html_block(soup: BeautifulSoup, block: ContentBlock) -> Tag:
    if isinstance(block, CodeBlock):
        pre = soup.new_tag("pre")
        code = soup.new_tag("code")
        if block.language:
            code["class"] = f"language-{block.language}"
        code.string = block.code
        pre.append(code)
        return pre
    if isinstance(block, TableBlock):
        return _html_table(soup, block)
    return _html_paragraph(soup, block)


def _html_paragraph(soup: BeautifulSoup, block: ParagraphBlock) -> Tag:
    paragraph = soup.new_tag("p")
    position = 0
    for match in _LINK_RE.finditer(block.text):
        if match.start() > position:
            paragraph.append(block.text[position : match.start()])
        link = soup.new_tag("a", href=match.group("href"))
        link.string = match.group("text")
        paragraph.append(link)
        position = match.end()
    if position < len(block.text):
        paragraph.append(block.text[position:])
    return paragraph


def _html_table(soup: BeautifulSoup, block: TableBlock) -> Tag:
    table = soup.new_tag("table")
    thead = soup.new_tag("thead")
    header_row = soup.new_tag("tr")
    for value in block.header:
        cell = soup.new_tag("th")
        cell.string = value
        header_row.append(cell)
    thead.append(header_row)
    table.append(thead)

    if block.rows:
        tbody = soup.new_tag("tbody")
        for row in block.rows:
            tr = soup.new_tag("tr")
            for value in row:
                cell = soup.new_tag("td")
                cell.string = value
                tr.append(cell)
            tbody.append(tr)
        table.append(tbody)
    return table
