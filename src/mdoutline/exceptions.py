"""Custom exceptions for mdoutline."""

from __future__ import annotations


class MdOutlineError(Exception):
    """Base exception for mdoutline operations."""


class ParseError(MdOutlineError):
    """Error during document parsing."""


class MalformedDocumentError(ParseError):
    """Heading levels do not form a valid nesting.

    Raised when a heading is more than one level deeper than its nearest
    ancestor (``# A`` followed directly by ``### B``), or when a top-level
    heading is not level 1 while ``require_level_one_root`` is set.
    """

    def __init__(
        self,
        message: str,
        *,
        line: int,
        level: int,
        parent_level: int | None,
        title: str,
    ) -> None:
        super().__init__(message)
        self.line = line
        self.level = level
        self.parent_level = parent_level
        self.title = title


class DocumentLoadError(MdOutlineError):
    """The document source could not be read."""
