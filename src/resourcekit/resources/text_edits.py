"""Incremental text changes in the shape of LSP ``TextDocumentContentChangeEvent``."""

from __future__ import annotations

import re
from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


class Position(BaseModel):
    """Zero-based line and character offset."""

    model_config = ConfigDict(frozen=True)

    line: int = Field(ge=0)
    character: int = Field(ge=0)


class Range(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: Position
    end: Position

    @classmethod
    def create(cls, start_line: int, start_character: int, end_line: int, end_character: int) -> Range:
        return cls(
            start=Position(line=start_line, character=start_character),
            end=Position(line=end_line, character=end_character),
        )


class TextDocumentContentChangeEvent(BaseModel):
    """
    One edit. Without a ``range`` the ``text`` replaces the whole document.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    range: Range | None = None
    range_length: int | None = Field(default=None, alias="rangeLength")
    text: str

    def serialized_length(self) -> int:
        """Length of the compact JSON form sent over the wire."""
        return len(self.model_dump_json(by_alias=True, exclude_none=True))


def _line_offsets(content: str) -> list[int]:
    offsets = [0]
    for match in _LINE_BREAK.finditer(content):
        offsets.append(match.end())
    return offsets


def _offset_at(content: str, offsets: list[int], position: Position) -> int:
    if position.line >= len(offsets):
        return len(content)
    line_start = offsets[position.line]
    if position.line + 1 < len(offsets):
        # Strip the line break so characters past the end clamp before it
        next_start = offsets[position.line + 1]
        line_text = content[line_start:next_start]
        line_end = line_start + len(line_text.rstrip("\r\n"))
    else:
        line_end = len(content)
    return min(line_start + position.character, line_end)


def apply_content_changes(
    content: str, changes: Sequence[TextDocumentContentChangeEvent]
) -> str:
    """
    Apply ``changes`` to ``content`` in order and return the new text.

    Each range is interpreted against the text produced by the previous
    change. Positions past the end of a line clamp to the line end, lines past
    the end of the document clamp to the document end.
    """
    for change in changes:
        if change.range is None:
            content = change.text
            continue
        offsets = _line_offsets(content)
        start = _offset_at(content, offsets, change.range.start)
        end = _offset_at(content, offsets, change.range.end)
        if end < start:
            start, end = end, start
        content = content[:start] + change.text + content[end:]
    return content
