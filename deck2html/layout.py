"""Rule-driven auto layout: feature matching and fragment transforms."""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields

from bs4 import BeautifulSoup, Tag

from .analyzer import analyze_content
from .models import (
    CARD_CLASS,
    COLUMNS_CLASS,
    MANUAL_COLUMNS_LAYOUT,
    ContentFeatures,
    GroupByHeadingOptions,
    LayoutConditions,
    LayoutRule,
    LayoutTransform,
    NumericCondition,
    SplitTopBottomOptions,
    SplitTwoOptions,
    WrapOptions,
)
from .utils import contains, contains_class, is_blank, parse_html, starts_with_image, to_html

logger = logging.getLogger(__name__)

# Block elements that count as top-level fragments.
FRAGMENT_TAGS = frozenset(
    ["h1", "h2", "h3", "h4", "h5", "h6", "p", "div", "ul", "ol", "blockquote", "pre", "figure", "table"]
)


@dataclass(frozen=True)
class LayoutResult:
    html: str
    applied_layout: str | None = None


@dataclass(frozen=True)
class Fragment:
    """One top-level block of a slide; ``tag`` is None for opaque residue."""

    html: str
    tag: Tag | None = None


def split_top_level(html: str | BeautifulSoup) -> list[Fragment]:
    """Split slide HTML into its top-level block fragments.

    Runs of anything outside the fixed block set (inline text, comments,
    rules) are kept together as one opaque fragment.
    """
    soup = parse_html(html) if isinstance(html, str) else html
    fragments: list[Fragment] = []
    residue: list = []

    def flush() -> None:
        markup = "".join(to_html(node) for node in residue).strip()
        if markup:
            fragments.append(Fragment(markup))
        residue.clear()

    for node in soup.contents:
        if isinstance(node, Tag) and node.name in FRAGMENT_TAGS:
            flush()
            fragments.append(Fragment(node.decode(), node))
        elif residue or not is_blank(node):
            residue.append(node)
    flush()

    if not fragments:
        return [Fragment(str(html).strip())]
    return fragments


def is_media(fragment: Fragment) -> bool:
    """A figure, or a paragraph that leads with an image."""
    tag = fragment.tag
    if tag is None:
        return False
    if contains(tag, "figure"):
        return True
    return starts_with_image(tag) or any(starts_with_image(p) for p in tag.find_all("p"))


def is_loose_media(fragment: Fragment) -> bool:
    """Media that sits next to a card grid rather than inside it."""
    tag = fragment.tag
    if tag is None:
        return False
    if contains(tag, "img") and not contains_class(tag, CARD_CLASS):
        return True
    return contains(tag, "figure")


def _join(fragments: list[Fragment]) -> str:
    return "\n".join(fragment.html for fragment in fragments)


def wrap(html: str, options: WrapOptions) -> str:
    return f'<div class="{options.class_name}">{html}</div>'


def split_two(fragments: list[Fragment], options: SplitTwoOptions) -> str | None:
    """Partition fragments into a left and a right column.

    With ``cards`` every standalone image or figure goes right; with
    ``text`` only the first media fragment does.  Returns None when either
    side would be empty.
    """
    left: list[Fragment] = []
    right: list[Fragment] = []
    for fragment in fragments:
        if options.left_selector == "cards":
            target = right if is_loose_media(fragment) else left
        else:
            target = right if is_media(fragment) and not right else left
        target.append(fragment)

    if not left or not right:
        return None
    return (
        f'<div class="{options.class_name}">'
        f'<div class="{options.left_class_name}">{_join(left)}</div>'
        f'<div class="{options.right_class_name}">{_join(right)}</div>'
        "</div>"
    )


def split_top_bottom(fragments: list[Fragment], options: SplitTopBottomOptions) -> str | None:
    """Keep text on top and move every media fragment into a grid below.

    A single image does not make a grid, so fewer than two media fragments
    returns None.
    """
    top = [fragment for fragment in fragments if not is_media(fragment)]
    grid = [fragment for fragment in fragments if is_media(fragment)]
    if len(grid) < 2:
        return None
    return f'{_join(top)}\n<div class="{options.class_name}">{_join(grid)}</div>'


def group_by_heading(fragments: list[Fragment], options: GroupByHeadingOptions) -> str | None:
    """Start a new column at every heading of the configured level.

    Fragments before the first heading form a shared header.  Returns None
    unless at least two sections result.
    """
    heading = f"h{options.heading_level}"
    header: list[Fragment] = []
    sections: list[list[Fragment]] = []
    for fragment in fragments:
        if fragment.tag is not None and contains(fragment.tag, heading):
            sections.append([fragment])
        elif sections:
            sections[-1].append(fragment)
        else:
            header.append(fragment)

    if len(sections) < 2:
        return None
    columns = "\n".join(
        f'<div class="{options.column_class_name}">{_join(section)}</div>' for section in sections
    )
    return f'{_join(header)}\n<div class="{options.container_class_name}">{columns}</div>'


def _transformed(html: str, soup: BeautifulSoup, transform: LayoutTransform) -> str | None:
    options = transform.options
    if transform.type == "wrap":
        return wrap(html, options)
    if transform.type == "split-two":
        return split_two(split_top_level(soup), options)
    if transform.type == "split-top-bottom":
        return split_top_bottom(split_top_level(soup), options)
    if transform.type == "group-by-heading":
        return group_by_heading(split_top_level(soup), options)
    logger.warning("Unknown transform type %r, leaving slide unchanged", transform.type)
    return None


def apply_transform(html: str, transform: LayoutTransform) -> str:
    """Apply one layout transform; returns *html* unchanged when it does not fit."""
    result = _transformed(html, parse_html(html), transform)
    return html if result is None else result


def matches_conditions(features: ContentFeatures, conditions: LayoutConditions) -> bool:
    """True when every predicate set in *conditions* holds for *features*."""
    for field in fields(conditions):
        expected = getattr(conditions, field.name)
        if expected is None:
            continue
        actual = getattr(features, field.name)
        if isinstance(expected, NumericCondition):
            if not expected.matches(actual):
                return False
        elif actual != expected:
            return False
    return True


def has_manual_columns(soup: BeautifulSoup) -> bool:
    return soup.find(class_=COLUMNS_CLASS) is not None


def apply_auto_layout_with_rules(html: str, rules: list[LayoutRule]) -> LayoutResult:
    """Apply the first enabled rule whose conditions match.

    *rules* must already be sorted by ascending priority.  A slide using the
    manual ``<!-- columns -->`` directive is never rearranged.  When the
    matching rule's transform does not fit the content, the HTML is returned
    unchanged but the rule is still reported.
    """
    soup = parse_html(html)
    if has_manual_columns(soup):
        return LayoutResult(html, MANUAL_COLUMNS_LAYOUT)

    features = analyze_content(soup)
    for rule in rules:
        if not rule.enabled:
            continue
        if matches_conditions(features, rule.conditions):
            logger.debug("Layout rule %r matched", rule.display_name)
            result = _transformed(html, soup, rule.transform)
            return LayoutResult(html if result is None else result, rule.display_name)

    return LayoutResult(html)
