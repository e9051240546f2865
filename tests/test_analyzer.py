"""Tests for deck2html.analyzer — content feature extraction."""

from __future__ import annotations

from deck2html.analyzer import analyze_content
from deck2html.models import ContentFeatures


class TestHeadings:
    def test_h1_to_h3_count_as_heading(self):
        for level in (1, 2, 3):
            assert analyze_content(f"<h{level}>T</h{level}>").has_heading

    def test_h4_not_a_heading(self):
        assert not analyze_content("<h4>T</h4>").has_heading

    def test_h3_count(self):
        f = analyze_content("<h2>A</h2><h3>B</h3><p>x</p><h3>C</h3>")
        assert f.h3_count == 2


class TestMedia:
    def test_image_and_figure_counts(self):
        html = (
            '<p><img src="a.png"></p>'
            '<figure><img src="b.png"><figcaption>B</figcaption></figure>'
        )
        f = analyze_content(html)
        assert f.image_count == 2
        assert f.figure_count == 1

    def test_images_nested_anywhere_counted(self):
        f = analyze_content('<div class="slide-card-grid"><div><img src="a.png"></div></div>')
        assert f.image_count == 1


class TestBlocks:
    def test_lists(self):
        assert analyze_content("<ul><li>a</li></ul>").has_list
        assert analyze_content("<ol><li>a</li></ol>").has_list

    def test_cards_suppress_list(self):
        html = '<div class="slide-card-grid"><div class="slide-card">x</div></div><ul><li>a</li></ul>'
        f = analyze_content(html)
        assert f.has_cards
        assert not f.has_list

    def test_code_and_blockquote(self):
        f = analyze_content("<pre><code>x</code></pre><blockquote><p>q</p></blockquote>")
        assert f.has_code_block
        assert f.has_blockquote

    def test_card_class_substring_not_a_grid(self):
        assert not analyze_content('<p class="slide-card-grid-like">x</p>').has_cards


class TestTextParagraphs:
    def test_image_and_caption_paragraphs_excluded(self):
        html = '<p>Real text</p><p><img src="a.png"></p><p><em>caption</em></p><p>More</p>'
        assert analyze_content(html).text_paragraph_count == 2

    def test_emphasis_with_text_counts(self):
        assert analyze_content("<p><em>italic</em> and plain</p>").text_paragraph_count == 1

    def test_nested_paragraphs_counted(self):
        assert analyze_content("<blockquote><p>quoted</p></blockquote>").text_paragraph_count == 1


class TestEmpty:
    def test_empty_html(self):
        assert analyze_content("") == ContentFeatures()

    def test_accepts_parsed_soup(self):
        from deck2html.utils import parse_html

        assert analyze_content(parse_html("<h1>T</h1>")).has_heading
