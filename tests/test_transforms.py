"""Tests for deck2html.transforms — card grids and image captions."""

from __future__ import annotations

from conftest import soup

from deck2html.renderer import default_renderer
from deck2html.transforms import transform_card_lists, transform_image_captions


def render(md: str) -> str:
    return default_renderer().render_slide(md)


# ---------------------------------------------------------------------------
# Card lists
# ---------------------------------------------------------------------------

class TestCardLists:
    def test_all_bold_items_become_cards(self):
        html = transform_card_lists(render("- **A:** x\n- **B:** y"))
        doc = soup(html)
        grid = doc.find(class_="slide-card-grid")
        assert grid is not None
        cards = grid.find_all(class_="slide-card")
        assert len(cards) == 2
        titles = [c.find(class_="slide-card-title").get_text() for c in cards]
        bodies = [c.find(class_="slide-card-body").get_text() for c in cards]
        assert titles == ["A", "B"]
        assert bodies == ["x", "y"]
        assert doc.find("ul") is None

    def test_one_plain_item_blocks_conversion(self):
        source = render("- **A:** x\n- plain item\n- **C:** z")
        html = transform_card_lists(source)
        assert html == source
        assert "slide-card" not in html

    def test_bold_in_middle_not_a_card(self):
        source = render("- text with **bold**\n- **B:** y")
        assert transform_card_lists(source) == source

    def test_title_without_colon(self):
        doc = soup(transform_card_lists(render("- **Speed** fast\n- **Size** small")))
        titles = [t.get_text() for t in doc.find_all(class_="slide-card-title")]
        assert titles == ["Speed", "Size"]

    def test_only_trailing_colon_removed(self):
        doc = soup(transform_card_lists(render("- **Ratio 1:2:** half")))
        assert doc.find(class_="slide-card-title").get_text() == "Ratio 1:2"

    def test_inline_markup_kept_in_body(self):
        doc = soup(transform_card_lists(render("- **A:** see `code` and *this*")))
        body = doc.find(class_="slide-card-body")
        assert body.find("code").get_text() == "code"
        assert body.find("em").get_text() == "this"

    def test_loose_list_paragraph_unwrapped(self):
        html = (
            "<ul>\n<li>\n<p><strong>A:</strong> first</p>\n</li>\n"
            "<li>\n<p><strong>B:</strong> second</p>\n</li>\n</ul>\n"
        )
        doc = soup(transform_card_lists(html))
        cards = doc.find_all(class_="slide-card")
        assert [c.find(class_="slide-card-body").get_text() for c in cards] == ["first", "second"]
        assert doc.find("p") is None

    def test_source_line_attributes_carried(self):
        doc = soup(transform_card_lists(render("Intro\n\n- **A:** x\n- **B:** y")))
        grid = doc.find(class_="slide-card-grid")
        assert grid["data-source-line"] == "2"
        assert [c["data-source-line"] for c in grid.find_all(class_="slide-card")] == ["2", "3"]

    def test_ordered_list_untouched(self):
        source = render("1. **A:** x\n2. **B:** y")
        assert transform_card_lists(source) == source

    def test_each_qualifying_list_converted(self):
        html = transform_card_lists(render("- **A:** x\n\n- **B:** y\n\n- plain"))
        doc = soup(html)
        assert len(doc.find_all(class_="slide-card-grid")) == 2
        assert len(doc.find_all("ul")) == 1

    def test_idempotent(self):
        once = transform_card_lists(render("- **A:** x\n- **B:** y"))
        assert transform_card_lists(once) == once

    def test_no_list_returns_input(self):
        html = "<p>nothing here</p>"
        assert transform_card_lists(html) is html


# ---------------------------------------------------------------------------
# Image captions
# ---------------------------------------------------------------------------

class TestImageCaptions:
    def test_caption_in_next_paragraph(self):
        doc = soup(transform_image_captions(render("![Cat](cat.png)\n\n*A cat*")))
        figure = doc.find("figure")
        assert figure is not None
        assert figure.find("img")["src"] == "cat.png"
        assert figure.find("figcaption").get_text() == "A cat"
        assert doc.find("em") is None
        assert doc.find("p") is None

    def test_caption_on_next_line(self):
        doc = soup(transform_image_captions(render("![Cat](cat.png)\n*A cat*")))
        assert doc.find("figure").find("figcaption").get_text() == "A cat"
        assert doc.find("p") is None

    def test_figure_keeps_paragraph_attributes(self):
        doc = soup(transform_image_captions(render("# T\n\n![Cat](cat.png)\n\n*A cat*")))
        assert doc.find("figure")["data-source-line"] == "2"

    def test_caption_with_other_text_ignored(self):
        source = render("![Cat](cat.png)\n\n*A cat* sleeping")
        assert transform_image_captions(source) == source

    def test_image_with_text_ignored(self):
        source = render("See ![Cat](cat.png)\n\n*A cat*")
        assert transform_image_captions(source) == source

    def test_image_without_caption_untouched(self):
        source = render("![Cat](cat.png)\n\nJust text")
        assert transform_image_captions(source) == source

    def test_multiple_figures(self):
        html = transform_image_captions(render("![A](a.png)\n*First*\n\n![B](b.png)\n\n*Second*"))
        captions = [f.get_text() for f in soup(html).find_all("figcaption")]
        assert captions == ["First", "Second"]

    def test_idempotent(self):
        once = transform_image_captions(render("![Cat](cat.png)\n*A cat*"))
        assert transform_image_captions(once) == once


# ---------------------------------------------------------------------------
# Interaction
# ---------------------------------------------------------------------------

class TestOrderIndependence:
    def test_either_order_same_result(self):
        html = render("- **A:** x\n- **B:** y\n\n![Cat](cat.png)\n*A cat*")
        one = transform_image_captions(transform_card_lists(html))
        two = transform_card_lists(transform_image_captions(html))
        assert soup(one).find_all(class_="slide-card") and soup(one).find("figure")
        assert str(soup(one)) == str(soup(two))
