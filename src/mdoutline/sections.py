"""Section filtering and utilities."""

from __future__ import annotations

import re
from typing import Iterable, Literal

from mdoutline.schemas import Document, Section


def normalize_section_title(title: str) -> str:
    """Normalize section titles for comparison."""
    title = title.strip().lower()
    title = re.sub(r"^\d+(?:\.\d+)*\.?\s+", "", title)
    return re.sub(r"\s+", " ", title)


def filter_sections(
    document: Document,
    *,
    mode: Literal["include", "exclude"] = "exclude",
    selected: Iterable[str] | None = None,
) -> Document:
    """Return a copy of ``document`` keeping or dropping sections by title.

    In ``include`` mode a selected section is kept whole, and an unselected
    one survives only as the parent of a selected descendant. In ``exclude``
    mode selected sections are dropped along with their subtrees. Anchors
    keep the values assigned at parse time, so links into surviving
    sections stay valid.
    """
    selected_titles = {normalize_section_title(title) for title in (selected or []) if title.strip()}
    if not selected_titles:
        return document

    def _filter(nodes: Iterable[Section]) -> list[Section]:
        result: list[Section] = []
        for node in nodes:
            in_selected = normalize_section_title(node.title) in selected_titles
            if mode == "include":
                if in_selected:
                    result.append(node)
                else:
                    children = _filter(node.children)
                    if children:
                        result.append(node.model_copy(update={"children": tuple(children)}))
            else:
                if in_selected:
                    continue
                result.append(
                    node.model_copy(update={"children": tuple(_filter(node.children))})
                )
        return result

    return document.model_copy(update={"sections": tuple(_filter(document.sections))})
