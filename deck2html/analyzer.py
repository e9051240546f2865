"""Content feature analysis for rendered slide HTML."""

from __future__ import annotations

import logging

from bs4 import BeautifulSoup

from .models import CARD_GRID_CLASS, ContentFeatures
from .utils import is_caption_paragraph, parse_html, starts_with_image

logger = logging.getLogger(__name__)


def analyze_content(html: str | BeautifulSoup) -> ContentFeatures:
    """Compute the structural features layout rules are evaluated against.

    Image and caption-only paragraphs are presentational and do not count
    as text paragraphs.  ``has_list`` is false whenever a card grid is
    present.
    """
    soup = parse_html(html) if isinstance(html, str) else html

    has_cards = soup.find(class_=CARD_GRID_CLASS) is not None
    text_paragraphs = [
        p for p in soup.find_all("p")
        if not starts_with_image(p) and not is_caption_paragraph(p)
    ]

    features = ContentFeatures(
        has_heading=soup.find(["h1", "h2", "h3"]) is not None,
        image_count=len(soup.find_all("img")),
        figure_count=len(soup.find_all("figure")),
        h3_count=len(soup.find_all("h3")),
        text_paragraph_count=len(text_paragraphs),
        has_cards=has_cards,
        has_list=soup.find(["ul", "ol"]) is not None and not has_cards,
        has_code_block=soup.find("pre") is not None,
        has_blockquote=soup.find("blockquote") is not None,
    )
    logger.debug("Content features: %s", features)
    return features
