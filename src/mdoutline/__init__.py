"""mdoutline: parse Markdown into a navigable section tree."""

from mdoutline.anchors import AnchorRegistry, slugify
from mdoutline.exceptions import (
    DocumentLoadError,
    MalformedDocumentError,
    MdOutlineError,
    ParseError,
)
from mdoutline.links import validate_links
from mdoutline.loading import check_document, load_document, load_document_async
from mdoutline.output_formatter import format_document
from mdoutline.parser import ParseOptions, parse_document
from mdoutline.render import render_html, render_markdown, render_outline
from mdoutline.schemas import (
    BrokenAnchor,
    CodeBlock,
    Document,
    DocumentIssue,
    DocumentReport,
    OutlineResult,
    ParagraphBlock,
    Section,
    TableBlock,
    TocEntry,
)
from mdoutline.sections import filter_sections
from mdoutline.toc import TableOfContents, render_toc, resolve_anchor, table_of_contents

__all__ = [
    "AnchorRegistry",
    "BrokenAnchor",
    "CodeBlock",
    "Document",
    "DocumentIssue",
    "DocumentLoadError",
    "DocumentReport",
    "MalformedDocumentError",
    "MdOutlineError",
    "OutlineResult",
    "ParagraphBlock",
    "ParseError",
    "ParseOptions",
    "Section",
    "TableBlock",
    "TableOfContents",
    "TocEntry",
    "check_document",
    "filter_sections",
    "format_document",
    "load_document",
    "load_document_async",
    "parse_document",
    "render_html",
    "render_markdown",
    "render_outline",
    "render_toc",
    "resolve_anchor",
    "slugify",
    "table_of_contents",
    "validate_links",
]
