"""Shared data models and parsing constants."""

from __future__ import annotations

import re
from dataclasses import dataclass, field


@dataclass(frozen=True)
class ParsedSlide:
    content: str
    html: str
    notes: str | None
    # 0-based line in the full document where this slide starts.
    line_offset: int
    applied_layout: str | None = None


@dataclass(frozen=True)
class ParsedPresentation:
    slides: list[ParsedSlide] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.slides)

    def __iter__(self):
        return iter(self.slides)

    def __getitem__(self, index: int) -> ParsedSlide:
        return self.slides[index]


@dataclass(frozen=True)
class ContentFeatures:
    has_heading: bool = False
    image_count: int = 0
    figure_count: int = 0
    h3_count: int = 0
    text_paragraph_count: int = 0
    has_cards: bool = False
    has_list: bool = False
    has_code_block: bool = False
    has_blockquote: bool = False


@dataclass(frozen=True)
class NumericCondition:
    eq: int | None = None
    gte: int | None = None
    lte: int | None = None
    gt: int | None = None

    def matches(self, value: int) -> bool:
        if self.eq is not None and value != self.eq:
            return False
        if self.gte is not None and value < self.gte:
            return False
        if self.lte is not None and value > self.lte:
            return False
        if self.gt is not None and value <= self.gt:
            return False
        return True


@dataclass(frozen=True)
class LayoutConditions:
    """AND-combined predicates over ContentFeatures; ``None`` means "don't care"."""

    has_heading: bool | None = None
    image_count: NumericCondition | None = None
    figure_count: NumericCondition | None = None
    h3_count: NumericCondition | None = None
    text_paragraph_count: NumericCondition | None = None
    has_cards: bool | None = None
    has_list: bool | None = None
    has_code_block: bool | None = None
    has_blockquote: bool | None = None


@dataclass(frozen=True)
class WrapOptions:
    class_name: str


@dataclass(frozen=True)
class SplitTwoOptions:
    class_name: str
    left_selector: str  # "text" or "cards"
    left_class_name: str
    right_class_name: str
    right_selector: str = "media"


@dataclass(frozen=True)
class SplitTopBottomOptions:
    class_name: str
    bottom_selector: str = "media"


@dataclass(frozen=True)
class GroupByHeadingOptions:
    heading_level: int
    container_class_name: str
    column_class_name: str


TransformOptions = WrapOptions | SplitTwoOptions | SplitTopBottomOptions | GroupByHeadingOptions

TRANSFORM_TYPES = ("wrap", "split-two", "split-top-bottom", "group-by-heading")


@dataclass(frozen=True)
class LayoutTransform:
    type: str
    options: TransformOptions


@dataclass(frozen=True)
class LayoutRule:
    display_name: str
    conditions: LayoutConditions
    transform: LayoutTransform
    enabled: bool = True
    priority: int = 0
    css_content: str = ""
    name: str | None = None
    description: str | None = None


# Slides are separated by a standalone "---" line.
SLIDE_SEPARATOR = "\n---\n"

# Speaker notes: <!-- notes --> ... <!-- /notes --> (first block only).
NOTES_RE = re.compile(r"<!--\s*notes\s*-->(.*?)<!--\s*/notes\s*-->", re.IGNORECASE | re.DOTALL)

# Manual two-column directive; the closing tag is optional.
COLUMNS_RE = re.compile(
    r"<!--\s*columns\s*-->(.*?)<!--\s*split\s*-->(.*?)(?:<!--\s*/columns\s*-->|\Z)",
    re.IGNORECASE | re.DOTALL,
)

# Class names emitted by the pipeline itself.
COLUMNS_CLASS = "slide-columns"
CARD_GRID_CLASS = "slide-card-grid"
CARD_CLASS = "slide-card"

MANUAL_COLUMNS_LAYOUT = "Columns (manual)"
