"""Utility helpers: parsing rendered slide HTML and classifying its nodes."""

from __future__ import annotations

from bs4 import BeautifulSoup, Comment, NavigableString, Tag


def parse_html(html: str) -> BeautifulSoup:
    """Parse an HTML fragment with the stdlib-backed parser."""
    return BeautifulSoup(html, "html.parser")


def to_html(node) -> str:
    """Serialize a tag or string node back to markup."""
    if isinstance(node, Tag):
        return node.decode()
    return node.output_ready()


def is_blank(node) -> bool:
    """True for whitespace-only text nodes (comments are never blank)."""
    return (
        isinstance(node, NavigableString)
        and not isinstance(node, Comment)
        and not node.strip()
    )


def meaningful_children(tag: Tag) -> list:
    """Direct children of *tag* with whitespace-only text dropped."""
    return [child for child in tag.contents if not is_blank(child)]


def is_tag(node, *names: str) -> bool:
    return isinstance(node, Tag) and (not names or node.name in names)


def has_class(tag: Tag, class_name: str) -> bool:
    return class_name in (tag.get("class") or [])


def contains(node, name: str) -> bool:
    """True if *node* is, or has a descendant, element called *name*."""
    if not isinstance(node, Tag):
        return False
    return node.name == name or node.find(name) is not None


def contains_class(node, class_name: str) -> bool:
    if not isinstance(node, Tag):
        return False
    return has_class(node, class_name) or node.find(class_=class_name) is not None


def starts_with_image(node) -> bool:
    """A paragraph whose first non-blank child is an ``<img>``."""
    if not is_tag(node, "p"):
        return False
    children = meaningful_children(node)
    return bool(children) and is_tag(children[0], "img")


def is_text_only_em(node) -> bool:
    """An ``<em>`` holding nothing but (non-empty) text."""
    if not is_tag(node, "em") or node.attrs or not node.contents:
        return False
    return all(
        isinstance(child, NavigableString) and not isinstance(child, Comment)
        for child in node.contents
    ) and bool(node.get_text())


def is_caption_paragraph(node) -> bool:
    """``<p><em>caption</em></p>``: an italic line and nothing else."""
    if not is_tag(node, "p"):
        return False
    children = meaningful_children(node)
    return len(children) == 1 and is_text_only_em(children[0])


def with_class(class_name: str, attrs: dict) -> dict:
    """Build an attribute dict whose class list starts with *class_name*."""
    merged: dict = {"class": class_name}
    for key, value in attrs.items():
        if key == "class":
            existing = value if isinstance(value, list) else str(value).split()
            merged["class"] = " ".join([class_name, *existing])
        else:
            merged[key] = value
    return merged


def next_meaningful_sibling(node):
    sibling = node.next_sibling
    while sibling is not None and is_blank(sibling):
        sibling = sibling.next_sibling
    return sibling
