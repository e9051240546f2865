"""Document-level slide operations for an editor surface.

Every function takes the full markdown document and returns a new one;
slides are split and re-joined on the same separator the parser uses, so
slide indexes here line up with ``parse_presentation`` output.
"""

from __future__ import annotations

import logging

from .models import SLIDE_SEPARATOR, ParsedSlide

logger = logging.getLogger(__name__)

NEW_SLIDE_TEMPLATE = "\n# New Slide\n"


def slide_index_at_line(markdown: str, line_number: int) -> int:
    """Map a 1-based editor line to the 0-based index of its slide."""
    lines = markdown.split("\n")
    index = 0
    for line in lines[: max(0, min(line_number - 1, len(lines)))]:
        if line.strip() == "---":
            index += 1
    return index


def line_of_slide(markdown: str, index: int) -> int:
    """First 1-based editor line of slide *index* (1 when out of range)."""
    slide = 0
    for i, line in enumerate(markdown.split("\n")):
        if slide == index:
            return i + 1
        if line.strip() == "---":
            slide += 1
    return 1


def source_line_to_editor_line(slide: ParsedSlide, source_line: int) -> int:
    """Translate a ``data-source-line`` value into a 1-based editor line."""
    return slide.line_offset + source_line + 1


def _split(markdown: str) -> list[str]:
    return markdown.split(SLIDE_SEPARATOR)


def _join(parts: list[str]) -> str:
    return SLIDE_SEPARATOR.join(parts)


def move_slide(markdown: str, src: int, dst: int) -> str:
    parts = _split(markdown)
    if not (0 <= src < len(parts) and 0 <= dst < len(parts)):
        logger.debug("move_slide(%d, %d) out of range for %d slides", src, dst, len(parts))
        return markdown
    parts.insert(dst, parts.pop(src))
    return _join(parts)


def delete_slide(markdown: str, index: int) -> str:
    """Remove slide *index*; the last remaining slide is never deleted."""
    parts = _split(markdown)
    if len(parts) <= 1 or not 0 <= index < len(parts):
        return markdown
    del parts[index]
    return _join(parts)


def duplicate_slide(markdown: str, index: int) -> str:
    parts = _split(markdown)
    if not 0 <= index < len(parts):
        return markdown
    parts.insert(index + 1, parts[index])
    return _join(parts)


def insert_slide(
    markdown: str,
    index: int,
    position: str = "below",
    template: str = NEW_SLIDE_TEMPLATE,
) -> str:
    """Insert a new slide above or below slide *index*."""
    if position not in ("above", "below"):
        raise ValueError(f"position must be 'above' or 'below', got {position!r}")
    parts = _split(markdown)
    at = index if position == "above" else index + 1
    parts.insert(max(0, min(at, len(parts))), template)
    return _join(parts)
