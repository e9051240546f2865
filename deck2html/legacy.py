"""Hardcoded auto-layout used when no layout rules are configured.

The thresholds here predate configurable rules and are kept as they are so
that decks rendered without a rule set keep their look.
"""

from __future__ import annotations

import logging

from .analyzer import analyze_content
from .layout import (
    LayoutResult,
    group_by_heading,
    has_manual_columns,
    split_top_bottom,
    split_top_level,
    split_two,
    wrap,
)
from .models import (
    MANUAL_COLUMNS_LAYOUT,
    GroupByHeadingOptions,
    SplitTopBottomOptions,
    SplitTwoOptions,
    WrapOptions,
)
from .utils import parse_html

logger = logging.getLogger(__name__)

SECTIONS = GroupByHeadingOptions(
    heading_level=3,
    container_class_name="layout-sections",
    column_class_name="layout-section-col",
)
HERO = WrapOptions(class_name="layout-hero")
CARDS_IMAGE = SplitTwoOptions(
    class_name="layout-cards-image",
    left_selector="cards",
    left_class_name="layout-cards-side",
    right_class_name="layout-media-side",
)
IMAGE_GRID = SplitTopBottomOptions(class_name="layout-image-grid")
TEXT_IMAGE = SplitTwoOptions(
    class_name="layout-text-image",
    left_selector="text",
    left_class_name="layout-body",
    right_class_name="layout-media",
)


def apply_auto_layout(html: str) -> LayoutResult:
    """Detect common content patterns and wrap them in layout containers.

    Checked in order: sections by ``<h3>``, hero, cards + image, image grid,
    text + image.  A pattern whose container cannot be built falls through
    to the next one.
    """
    soup = parse_html(html)
    if has_manual_columns(soup):
        return LayoutResult(html, MANUAL_COLUMNS_LAYOUT)

    f = analyze_content(soup)

    if f.h3_count >= 2 and f.image_count == 0 and not f.has_cards:
        result = group_by_heading(split_top_level(soup), SECTIONS)
        if result is not None:
            return LayoutResult(result, "Sections")

    if (
        f.has_heading
        and f.image_count == 0
        and not f.has_cards
        and not f.has_list
        and not f.has_code_block
        and not f.has_blockquote
        and f.text_paragraph_count <= 1
    ):
        return LayoutResult(wrap(html, HERO), "Hero")

    if f.has_cards and f.image_count > 0:
        result = split_two(split_top_level(soup), CARDS_IMAGE)
        if result is not None:
            return LayoutResult(result, "Cards + Image")

    total_images = f.figure_count if f.figure_count > 0 else f.image_count
    if total_images >= 2 and f.has_heading:
        result = split_top_bottom(split_top_level(soup), IMAGE_GRID)
        if result is not None:
            return LayoutResult(result, "Image Grid")

    if f.has_heading and (f.image_count == 1 or f.figure_count == 1):
        result = split_two(split_top_level(soup), TEXT_IMAGE)
        if result is not None:
            return LayoutResult(result, "Text + Image")

    logger.debug("No legacy layout pattern matched")
    return LayoutResult(html)
