"""Parse Markdown text into an immutable section tree."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from mdoutline.anchors import AnchorRegistry
from mdoutline.config import MAX_BLOCK_INDENT, MAX_HEADING_LEVEL, MIN_FENCE_LENGTH
from mdoutline.exceptions import MalformedDocumentError
from mdoutline.schemas import (
    CodeBlock,
    ContentBlock,
    Document,
    ParagraphBlock,
    Section,
    TableBlock,
)

logger = logging.getLogger(__name__)

_HEADING_RE = re.compile(
    rf"^ {{0,{MAX_BLOCK_INDENT}}}(?P<marks>#{{1,{MAX_HEADING_LEVEL}}})(?:[ \t]+(?P<title>.*?))?[ \t]*$"
)
_CLOSING_HASHES_RE = re.compile(r"(?:^|[ \t]+)#+[ \t]*$")
_FENCE_OPEN_RE = re.compile(
    rf"^(?P<indent> {{0,{MAX_BLOCK_INDENT}}})(?P<fence>`{{{MIN_FENCE_LENGTH},}}|~{{{MIN_FENCE_LENGTH},}})(?P<info>.*)$"
)
_FENCE_CLOSE_RE = re.compile(
    rf"^ {{0,{MAX_BLOCK_INDENT}}}(?P<fence>`{{{MIN_FENCE_LENGTH},}}|~{{{MIN_FENCE_LENGTH},}})[ \t]*$"
)
_TABLE_DELIMITER_RE = re.compile(
    rf"^ {{0,{MAX_BLOCK_INDENT}}}\|?[ \t]*:?-+:?[ \t]*(?:\|[ \t]*:?-+:?[ \t]*)*\|?[ \t]*$"
)
_CELL_SPLIT_RE = re.compile(r"(?<!\\)\|")


@dataclass
class ParseOptions:
    """Options for document parsing.

    Attributes:
        require_level_one_root: If True, every top-level heading must be
            level 1. By default the first heading of a branch may start at
            any level; only skips below an existing ancestor are rejected.
    """

    require_level_one_root: bool = False


@dataclass
class _SectionDraft:
    title: str
    level: int
    anchor: str
    line: int
    blocks: list[ContentBlock] = field(default_factory=list)
    children: list[_SectionDraft] = field(default_factory=list)

    def freeze(self) -> Section:
        return Section(
            title=self.title,
            level=self.level,
            anchor=self.anchor,
            line=self.line,
            blocks=tuple(self.blocks),
            children=tuple(child.freeze() for child in self.children),
        )


def parse_document(text: str, options: ParseOptions | None = None) -> Document:
    """Split Markdown into nested sections and their content blocks.

    Headings nest by level: each heading becomes a child of the nearest
    preceding heading with a lower level. Paragraphs, tables and fenced code
    blocks are attached to the nearest preceding heading, or to the document
    preamble before the first heading. Heading markers inside fenced code
    are ignored.

    Args:
        text: Markdown source.
        options: Parsing options. Uses defaults if None.

    Returns:
        The parsed, immutable Document.

    Raises:
        MalformedDocumentError: If a heading is more than one level deeper
            than its nearest ancestor.
    """
    opts = options or ParseOptions()
    lines = text.splitlines()
    registry = AnchorRegistry()

    preamble: list[ContentBlock] = []
    roots: list[_SectionDraft] = []
    stack: list[_SectionDraft] = []
    paragraph: list[str] = []
    paragraph_start = 0

    def target() -> list[ContentBlock]:
        return stack[-1].blocks if stack else preamble

    def flush_paragraph() -> None:
        if paragraph:
            target().append(
                ParagraphBlock(text="\n".join(paragraph), line=paragraph_start)
            )
            paragraph.clear()

    index = 0
    while index < len(lines):
        line = lines[index]
        line_no = index + 1

        fence = _match_fence_open(line)
        if fence:
            flush_paragraph()
            block, index = _consume_code_block(lines, index, fence)
            target().append(block)
            continue

        heading = _HEADING_RE.match(line)
        if heading:
            flush_paragraph()
            level = len(heading.group("marks"))
            title = _clean_heading_title(heading.group("title") or "")

            while stack and stack[-1].level >= level:
                stack.pop()
            parent = stack[-1] if stack else None
            _check_nesting(level, parent, title=title, line=line_no, options=opts)

            node = _SectionDraft(
                title=title, level=level, anchor=registry.claim(title), line=line_no
            )
            if parent is not None:
                parent.children.append(node)
            else:
                roots.append(node)
            stack.append(node)
            index += 1
            continue

        if not line.strip():
            flush_paragraph()
            index += 1
            continue

        if _starts_table(lines, index):
            flush_paragraph()
            block, index = _consume_table(lines, index)
            target().append(block)
            continue

        if not paragraph:
            paragraph_start = line_no
        paragraph.append(line.rstrip())
        index += 1

    flush_paragraph()

    document = Document(
        sections=tuple(node.freeze() for node in roots), preamble=tuple(preamble)
    )
    logger.debug(
        "Parsed document: %d top-level sections, %d total",
        len(document.sections),
        document.section_count,
    )
    return document


def _check_nesting(
    level: int,
    parent: _SectionDraft | None,
    *,
    title: str,
    line: int,
    options: ParseOptions,
) -> None:
    if parent is not None and level > parent.level + 1:
        raise MalformedDocumentError(
            f"Line {line}: heading {title!r} is level {level} but its parent "
            f"{parent.title!r} is level {parent.level}",
            line=line,
            level=level,
            parent_level=parent.level,
            title=title,
        )
    if parent is None and options.require_level_one_root and level != 1:
        raise MalformedDocumentError(
            f"Line {line}: top-level heading {title!r} is level {level}, expected 1",
            line=line,
            level=level,
            parent_level=None,
            title=title,
        )


def _clean_heading_title(raw: str) -> str:
    return _CLOSING_HASHES_RE.sub("", raw).strip()


def _match_fence_open(line: str) -> re.Match[str] | None:
    match = _FENCE_OPEN_RE.match(line)
    if not match:
        return None
    # Backtick fences may not carry backticks in their info string.
    if match.group("fence")[0] == "`" and "`" in match.group("info"):
        return None
    return match


def _consume_code_block(
    lines: list[str], start: int, opening: re.Match[str]
) -> tuple[CodeBlock, int]:
    fence = opening.group("fence")
    indent = len(opening.group("indent"))
    info = opening.group("info").strip()
    language = info.split()[0] if info else None

    body: list[str] = []
    index = start + 1
    while index < len(lines):
        closing = _FENCE_CLOSE_RE.match(lines[index])
        if (
            closing
            and closing.group("fence")[0] == fence[0]
            and len(closing.group("fence")) >= len(fence)
        ):
            index += 1
            break
        body.append(_strip_indent(lines[index], indent))
        index += 1

    block = CodeBlock(
        language=language,
        code="".join(f"{row}\n" for row in body),
        fence=fence,
        line=start + 1,
    )
    return block, index


def _strip_indent(line: str, indent: int) -> str:
    removable = len(line) - len(line.lstrip(" "))
    return line[min(indent, removable) :]


def _starts_table(lines: list[str], index: int) -> bool:
    if index + 1 >= len(lines):
        return False
    header, delimiter = lines[index], lines[index + 1]
    if "|" not in header or "|" not in delimiter:
        return False
    if not _TABLE_DELIMITER_RE.match(delimiter):
        return False
    return len(split_table_row(header)) == len(split_table_row(delimiter))


def _consume_table(lines: list[str], start: int) -> tuple[TableBlock, int]:
    header = tuple(split_table_row(lines[start]))
    rows: list[tuple[str, ...]] = []
    index = start + 2
    while index < len(lines):
        line = lines[index]
        if (
            not line.strip()
            or "|" not in line
            or _HEADING_RE.match(line)
            or _match_fence_open(line)
        ):
            break
        cells = split_table_row(line)
        cells = (cells + [""] * len(header))[: len(header)]
        rows.append(tuple(cells))
        index += 1

    text = "\n".join(line.rstrip() for line in lines[start:index])
    return TableBlock(header=header, rows=tuple(rows), text=text, line=start + 1), index


def split_table_row(line: str) -> list[str]:
    """Split a pipe-table row into stripped cell values."""
    content = line.strip()
    if content.startswith("|"):
        content = content[1:]
    if content.endswith("|") and not content.endswith("\\|"):
        content = content[:-1]
    return [cell.strip().replace("\\|", "|") for cell in _CELL_SPLIT_RE.split(content)]
