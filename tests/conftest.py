"""Shared fixtures for deck2html tests."""

from __future__ import annotations

import json
import textwrap

import pytest
from bs4 import BeautifulSoup

from deck2html.rules import default_layout_rules


# ---------------------------------------------------------------------------
# Decks (strings) used across multiple test modules
# ---------------------------------------------------------------------------

MINIMAL_DECK = textwrap.dedent("""\
    # Slide One

    Welcome.

    <!-- notes -->
    Hello world.
    <!-- /notes -->
    ---
    # Slide Two
    """)

MIXED_DECK = textwrap.dedent("""\
    # Title

    Subtitle text
    ---

    # Features

    - **Fast:** renders quickly
    - **Simple:** plain markdown

    ![Diagram](diagram.png)
    ---
    # Gallery

    ![One](one.png)

    ![Two](two.png)
    ---
    Just a paragraph.
    """)

GRID_RULE = {
    "priority": 10,
    "enabled": True,
    "displayName": "Photo Grid",
    "conditions": {"imageCount": {"gte": 2}},
    "transform": {"type": "split-top-bottom", "options": {"className": "photo-grid"}},
}

WRAP_RULE = {
    "priority": 20,
    "enabled": True,
    "displayName": "Framed",
    "conditions": {"hasHeading": True},
    "transform": {"type": "wrap", "options": {"className": "layout-framed"}},
}


def soup(html: str) -> BeautifulSoup:
    return BeautifulSoup(html, "html.parser")


@pytest.fixture
def default_rules():
    return default_layout_rules()


@pytest.fixture
def tmp_deck(tmp_path):
    """Write MIXED_DECK to a temp file and return its path."""
    p = tmp_path / "deck.md"
    p.write_text(MIXED_DECK)
    return p


@pytest.fixture
def tmp_rules(tmp_path):
    """Write a small rules file (deliberately out of priority order)."""
    p = tmp_path / "rules.json"
    p.write_text(json.dumps([WRAP_RULE, GRID_RULE]))
    return p
