"""Shared schemas for mdoutline."""

from mdoutline.schemas.blocks import CodeBlock, ContentBlock, ParagraphBlock, TableBlock
from mdoutline.schemas.output import OutlineResult
from mdoutline.schemas.report import BrokenAnchor, DocumentIssue, DocumentReport
from mdoutline.schemas.sections import Document, Section
from mdoutline.schemas.toc import TocEntry

__all__ = [
    "BrokenAnchor",
    "CodeBlock",
    "ContentBlock",
    "Document",
    "DocumentIssue",
    "DocumentReport",
    "OutlineResult",
    "ParagraphBlock",
    "Section",
    "TableBlock",
    "TocEntry",
]
