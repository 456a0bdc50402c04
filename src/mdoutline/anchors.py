"""Anchor slugs derived from section titles."""

from __future__ import annotations

import re

from mdoutline.config import FALLBACK_ANCHOR

_LINK_RE = re.compile(r"!?\[([^\]]*)\]\([^)]*\)")
_HTML_TAG_RE = re.compile(r"<[^>]+>")
_EMPHASIS_UNDERSCORE_RE = re.compile(r"(?<!\w)_+|_+(?!\w)")
_PUNCTUATION_RE = re.compile(r"[^\w\- ]", re.UNICODE)


def slugify(title: str) -> str:
    """Derive an anchor slug from a heading title.

    Inline markup is reduced to its text, the result is lowercased,
    punctuation other than ``-`` and ``_`` is dropped and every space becomes
    a hyphen. ``"Clean Code: Functions!"`` becomes ``"clean-code-functions"``.
    Titles with nothing left map to ``FALLBACK_ANCHOR``.
    """
    text = _LINK_RE.sub(r"\1", title)
    text = _HTML_TAG_RE.sub("", text)
    text = _EMPHASIS_UNDERSCORE_RE.sub("", text)
    text = text.strip().lower()
    text = _PUNCTUATION_RE.sub("", text)
    slug = text.replace(" ", "-")
    return slug or FALLBACK_ANCHOR


class AnchorRegistry:
    """Hand out anchors that are unique within one document.

    The first heading with a given slug keeps it; repeats receive ``-1``,
    ``-2`` and so on. A suffixed candidate that is already taken (a heading
    literally titled ``"Setup 1"`` before a second ``"Setup"``) is skipped.
    """

    def __init__(self) -> None:
        self._used: set[str] = set()
        self._counts: dict[str, int] = {}

    def claim(self, title: str) -> str:
        base = slugify(title)
        candidate = base
        count = self._counts.get(base, 0)
        while candidate in self._used:
            count += 1
            candidate = f"{base}-{count}"
        self._counts[base] = count
        self._used.add(candidate)
        return candidate

    def __contains__(self, anchor: object) -> bool:
        return anchor in self._used
