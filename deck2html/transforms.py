"""Structural HTML transforms: card grids and captioned figures."""

from __future__ import annotations

import logging

from bs4 import Comment, NavigableString, Tag

from .models import CARD_CLASS, CARD_GRID_CLASS
from .utils import (
    is_blank,
    is_caption_paragraph,
    is_tag,
    is_text_only_em,
    meaningful_children,
    next_meaningful_sibling,
    parse_html,
    with_class,
)

logger = logging.getLogger(__name__)


def _item_nodes(li: Tag) -> list:
    """Content of a list item, unwrapping the ``<p>`` of loose lists."""
    nodes = meaningful_children(li)
    if nodes and is_tag(nodes[0], "p"):
        nodes = list(nodes[0].contents) + nodes[1:]
    return _strip_leading_blanks(nodes)


def _strip_leading_blanks(nodes: list) -> list:
    index = 0
    while index < len(nodes) and is_blank(nodes[index]):
        index += 1
    return nodes[index:]


def _is_card_item(nodes: list) -> bool:
    return bool(nodes) and is_tag(nodes[0], "strong") and not nodes[0].attrs and bool(nodes[0].get_text())


def _build_card(soup, li: Tag, nodes: list) -> Tag:
    strong, rest = nodes[0], nodes[1:]

    title = soup.new_tag("div", attrs={"class": "slide-card-title"})
    for child in list(strong.contents):
        title.append(child)
    last = title.contents[-1] if title.contents else None
    if isinstance(last, NavigableString) and last.endswith(":"):
        last.replace_with(NavigableString(last[:-1]))

    body = soup.new_tag("div", attrs={"class": "slide-card-body"})
    for i, child in enumerate(rest):
        if i == 0 and isinstance(child, NavigableString) and not isinstance(child, Comment):
            stripped = child.lstrip()
            child.extract()
            if stripped:
                body.append(NavigableString(stripped))
            continue
        body.append(child)

    card = soup.new_tag("div", attrs=with_class(CARD_CLASS, li.attrs))
    card.append(title)
    card.append(body)
    return card


def transform_card_lists(html: str) -> str:
    """Turn ``<ul>`` lists of "**Title:** text" items into a card grid.

    Conversion is all-or-nothing: a list with a single item not starting
    with ``<strong>`` is left untouched.
    """
    if "<ul" not in html:
        return html
    soup = parse_html(html)
    changed = False

    for ul in soup.find_all("ul"):
        if ul.parent is None:
            continue
        items = [child for child in ul.children if isinstance(child, Tag)]
        if not items or any(item.name != "li" for item in items):
            continue
        contents = [_item_nodes(li) for li in items]
        if not all(_is_card_item(nodes) for nodes in contents):
            continue

        grid = soup.new_tag("div", attrs=with_class(CARD_GRID_CLASS, ul.attrs))
        for i, (li, nodes) in enumerate(zip(items, contents)):
            if i:
                grid.append(NavigableString("\n"))
            grid.append(_build_card(soup, li, nodes))
        ul.replace_with(grid)
        changed = True
        logger.debug("Converted %d-item list into a card grid", len(items))

    return str(soup) if changed else html


def _figure(soup, paragraph: Tag, img: Tag, caption: str) -> Tag:
    figure = soup.new_tag("figure", attrs=dict(paragraph.attrs))
    figure.append(img)
    figcaption = soup.new_tag("figcaption")
    figcaption.string = caption
    figure.append(figcaption)
    return figure


def _inline_caption(paragraph: Tag):
    """Match ``<p><img>\\n<em>caption</em></p>``; return (img, em) or None."""
    contents = paragraph.contents
    if len(contents) != 3:
        return None
    img, gap, em = contents
    if not is_tag(img, "img") or not is_text_only_em(em):
        return None
    if not (is_blank(gap) and "\n" in gap):
        return None
    return img, em


def transform_image_captions(html: str) -> str:
    """Turn an image followed by an italic line into ``<figure>``/``<figcaption>``.

    The caption may be the next paragraph or the next line of the same
    paragraph.
    """
    if "<img" not in html:
        return html
    soup = parse_html(html)
    changed = False

    for paragraph in soup.find_all("p"):
        if paragraph.parent is None:
            continue

        inline = _inline_caption(paragraph)
        if inline:
            img, em = inline
            paragraph.replace_with(_figure(soup, paragraph, img, em.get_text()))
            changed = True
            continue

        children = meaningful_children(paragraph)
        if len(children) != 1 or not is_tag(children[0], "img"):
            continue
        following = next_meaningful_sibling(paragraph)
        if not is_caption_paragraph(following):
            continue
        caption = following.get_text()
        following.extract()
        paragraph.replace_with(_figure(soup, paragraph, children[0], caption))
        changed = True

    if changed:
        logger.debug("Captioned image(s) converted to figures")
    return str(soup) if changed else html
