"""Local configuration for mdoutline."""

from __future__ import annotations

from typing import Final

MAX_HEADING_LEVEL: Final[int] = 6
# Leading spaces allowed before heading, fence and table delimiter markers.
MAX_BLOCK_INDENT: Final[int] = 3

# Anchor used when a heading slugifies to nothing (e.g. "## !!!").
FALLBACK_ANCHOR: Final[str] = "section"

MIN_FENCE_LENGTH: Final[int] = 3

DEFAULT_ENCODING: Final[str] = "utf-8"
TOKEN_ENCODING_NAME: Final[str] = "o200k_base"
