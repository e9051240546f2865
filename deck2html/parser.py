"""Presentation parser — splits slides, extracts speaker notes, renders HTML."""

from __future__ import annotations

import logging

from .layout import apply_auto_layout_with_rules
from .legacy import apply_auto_layout
from .models import NOTES_RE, SLIDE_SEPARATOR, LayoutRule, ParsedPresentation, ParsedSlide
from .renderer import SlideRenderer, default_renderer
from .transforms import transform_card_lists, transform_image_captions

logger = logging.getLogger(__name__)


def extract_notes(markdown: str) -> tuple[str, str | None]:
    """Remove the first ``<!-- notes -->`` block from *markdown*.

    Returns ``(content, notes)``.  Without a complete notes block the text
    is returned as-is and notes is None.
    """
    match = NOTES_RE.search(markdown)
    if not match:
        return markdown, None
    notes = match.group(1).strip()
    content = (markdown[: match.start()] + markdown[match.end():]).strip()
    return content, notes


def split_slides(markdown: str) -> list[tuple[str, int]]:
    """Split a document into ``(raw_slide, line_offset)`` pairs.

    The offset is the 0-based document line where the slide's first
    non-blank line sits, so leading blank lines are accounted for.
    """
    parts = markdown.split(SLIDE_SEPARATOR)
    result: list[tuple[str, int]] = []
    running = 0
    for raw in parts:
        leading = raw[: len(raw) - len(raw.lstrip())]
        result.append((raw, running + leading.count("\n")))
        # Lines of this slide plus the separator line.
        running += raw.count("\n") + 2
    return result


def parse_presentation(
    markdown: str,
    layout_rules: list[LayoutRule] | None = None,
    *,
    renderer: SlideRenderer | None = None,
) -> ParsedPresentation:
    """Parse a markdown document into rendered slides.

    *layout_rules* must already be sorted by ascending priority.  When it is
    empty or omitted the built-in heuristics pick the layout instead.
    """
    renderer = renderer or default_renderer()
    slides: list[ParsedSlide] = []
    raw_slides = split_slides(markdown)
    logger.debug("Parsing presentation: %d slide block(s)", len(raw_slides))

    for i, (raw, line_offset) in enumerate(raw_slides):
        content, notes = extract_notes(raw.strip())
        html = renderer.render_slide(content)
        html = transform_card_lists(html)
        html = transform_image_captions(html)

        if layout_rules:
            result = apply_auto_layout_with_rules(html, layout_rules)
        else:
            result = apply_auto_layout(html)

        slides.append(
            ParsedSlide(
                content=content,
                html=result.html,
                notes=notes,
                line_offset=line_offset,
                applied_layout=result.applied_layout,
            )
        )
        notes_len = len(notes) if notes else 0
        logger.debug(
            "  Slide %d: line=%d, notes=%d chars, layout=%s",
            i + 1, line_offset, notes_len, result.applied_layout,
        )

    return ParsedPresentation(slides)
