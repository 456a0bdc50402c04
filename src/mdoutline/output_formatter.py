"""Format a parsed document into summary, tree, and content outputs."""

from __future__ import annotations

from typing import Iterable

try:
    import tiktoken
except ImportError:  # pragma: no cover - optional dependency
    tiktoken = None

from mdoutline.config import TOKEN_ENCODING_NAME
from mdoutline.links import validate_links
from mdoutline.render import render_markdown
from mdoutline.schemas import CodeBlock, Document, OutlineResult, Section
from mdoutline.toc import render_toc


def format_document(
    document: Document,
    *,
    title: str | None = None,
    include_toc: bool = False,
) -> OutlineResult:
    """Create summary, section tree, and content."""
    tree = "Sections:\n" + _create_sections_tree(document.sections)
    content = _render_content(document, include_toc=include_toc)

    summary_lines = []
    if title:
        summary_lines.append(f"Title: {title}")
    summary_lines.append(f"Sections: {document.section_count}")
    summary_lines.append(f"Code blocks: {count_code_blocks(document)}")
    broken = validate_links(document)
    if broken:
        summary_lines.append(f"Broken anchors: {len(broken)}")

    token_estimate = _format_token_count(tree + "\n" + content)
    if token_estimate:
        summary_lines.append(f"Estimated tokens: {token_estimate}")

    summary = "\n".join(summary_lines)

    return OutlineResult(summary=summary, sections_tree=tree, content=content)


def count_code_blocks(document: Document) -> int:
    blocks = list(document.preamble)
    for section in document.iter_sections():
        blocks.extend(section.blocks)
    return sum(1 for block in blocks if isinstance(block, CodeBlock))


def _render_content(document: Document, *, include_toc: bool) -> str:
    blocks: list[str] = []
    if include_toc:
        toc = render_toc(document)
        if toc:
            blocks.append("## Contents\n" + toc)
    blocks.append(render_markdown(document))
    return "\n\n".join(block for block in blocks if block).strip()


def _create_sections_tree(sections: Iterable[Section], indent: int = 0) -> str:
    lines: list[str] = []
    for section in sections:
        lines.append(" " * (indent * 4) + section.title)
        if section.children:
            lines.append(_create_sections_tree(section.children, indent + 1))
    return "\n".join(lines)


def _format_token_count(text: str) -> str | None:
    if not tiktoken:
        return None
    try:
        encoding = tiktoken.get_encoding(TOKEN_ENCODING_NAME)
        total_tokens = len(encoding.encode(text, disallowed_special=()))
    except Exception:
        return None

    if total_tokens >= 1_000_000:
        return f"{total_tokens / 1_000_000:.1f}M"
    if total_tokens >= 1_000:
        return f"{total_tokens / 1_000:.1f}k"
    return str(total_tokens)
