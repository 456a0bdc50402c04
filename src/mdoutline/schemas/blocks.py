"""Content block models."""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class ParagraphBlock(BaseModel):
    """A run of non-blank prose lines (lists and quotes included)."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["paragraph"] = "paragraph"
    text: str
    line: int = Field(..., ge=1)


class CodeBlock(BaseModel):
    """A fenced code snippet.

    Attributes:
        language: Info-string language tag (``python`` in ```` ```python ````),
            or None when the fence is untagged.
        code: Body lines without the fences, each ending in a newline;
            empty for a fence with no body lines.
        fence: The opening fence marker, e.g. ```` ``` ```` or ``~~~~``.
        line: 1-based line of the opening fence.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["code"] = "code"
    language: str | None = None
    code: str
    fence: str = "```"
    line: int = Field(..., ge=1)


class TableBlock(BaseModel):
    """A pipe table with a header row and a delimiter row."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["table"] = "table"
    header: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...] = ()
    text: str
    line: int = Field(..., ge=1)


ContentBlock = Annotated[
    Union[ParagraphBlock, CodeBlock, TableBlock], Field(discriminator="kind")
]
