"""Read documents from disk and run non-raising checks."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from mdoutline.config import DEFAULT_ENCODING
from mdoutline.exceptions import DocumentLoadError, MalformedDocumentError
from mdoutline.links import validate_links
from mdoutline.parser import ParseOptions, parse_document
from mdoutline.schemas import Document, DocumentIssue, DocumentReport

logger = logging.getLogger(__name__)


def load_document(
    path: Path | str,
    options: ParseOptions | None = None,
    *,
    encoding: str = DEFAULT_ENCODING,
) -> Document:
    """Read a Markdown file and parse it.

    Raises:
        DocumentLoadError: If the file cannot be read or decoded.
        MalformedDocumentError: If its headings do not nest validly.
    """
    return parse_document(_read_text(Path(path), encoding), options)


async def load_document_async(
    path: Path | str,
    options: ParseOptions | None = None,
    *,
    encoding: str = DEFAULT_ENCODING,
) -> Document:
    """Read a Markdown file in a worker thread and parse it."""
    text = await asyncio.to_thread(_read_text, Path(path), encoding)
    return parse_document(text, options)


def check_document(text: str, options: ParseOptions | None = None) -> DocumentReport:
    """Parse and validate ``text``, reporting problems instead of raising.

    A malformed heading structure yields a single ``malformed`` issue, since
    no tree exists to check links against. Otherwise every broken internal
    link becomes a ``broken_anchor`` issue.
    """
    try:
        document = parse_document(text, options)
    except MalformedDocumentError as exc:
        logger.debug("Document check failed to parse: %s", exc)
        return DocumentReport(
            issues=(DocumentIssue(kind="malformed", message=str(exc), line=exc.line),)
        )

    issues = tuple(
        DocumentIssue(
            kind="broken_anchor",
            message=f"Line {broken.line}: link target #{broken.anchor} does not exist",
            line=broken.line,
            anchor=broken.anchor,
        )
        for broken in validate_links(document)
    )
    return DocumentReport(issues=issues, section_count=document.section_count)


def _read_text(path: Path, encoding: str) -> str:
    try:
        return path.read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError) as exc:
        raise DocumentLoadError(f"Failed to read {path}: {exc}") from exc
