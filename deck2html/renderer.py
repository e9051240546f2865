"""Markdown block renderer — turns one slide's markdown into HTML."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache

from markdown_it import MarkdownIt
from markdown_it.common.utils import escapeHtml
from pygments import highlight
from pygments.formatters import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from .models import COLUMNS_CLASS, COLUMNS_RE

logger = logging.getLogger(__name__)

# Two list blocks separated only by blank lines.
_ADJACENT_LISTS_RE = re.compile(r"(^- .+)\n(\n+)(- )", re.MULTILINE)


@dataclass(frozen=True)
class RendererConfig:
    """Options for the shared markdown renderer."""

    typographer: bool = True
    linkify: bool = True
    highlight: bool = True
    source_lines: bool = True


def source_line_plugin(md: MarkdownIt) -> None:
    """Tag every opening block token with ``data-source-line`` (0-based)."""
    default_render_token = md.renderer.renderToken

    def render_token(tokens, idx, options, env):
        token = tokens[idx]
        if token.map and token.nesting == 1:
            token.attrSet("data-source-line", str(token.map[0]))
        return default_render_token(tokens, idx, options, env)

    md.renderer.renderToken = render_token


def highlight_code(code: str, lang: str, attrs: str = "") -> str:
    """Highlight a fenced code block.

    ``mermaid`` fences are left for the diagram renderer.  Unknown languages
    and highlighter failures fall back to escaped plain text.
    """
    if lang and lang != "mermaid":
        try:
            lexer = get_lexer_by_name(lang)
            body = highlight(code, lexer, HtmlFormatter(nowrap=True))
            return f'<pre class="hljs" data-lang="{escapeHtml(lang)}"><code>{body}</code></pre>'
        except ClassNotFound:
            logger.debug("No lexer for language %r, rendering as plain text", lang)
        except Exception:
            logger.warning("Highlighting failed for language %r", lang, exc_info=True)
    return plain_code(code, lang)


def plain_code(code: str, lang: str, attrs: str = "") -> str:
    """Render a fenced code block as escaped text."""
    if lang == "mermaid":
        return f'<pre class="mermaid">{escapeHtml(code)}</pre>'
    lang_attr = f' data-lang="{escapeHtml(lang)}"' if lang else ""
    return f'<pre class="hljs"{lang_attr}><code>{escapeHtml(code)}</code></pre>'


def separate_adjacent_lists(markdown: str) -> str:
    """Keep bullet lists separated by blank lines as distinct lists.

    markdown-it merges them into one loose list otherwise.  An empty HTML
    comment is inserted between each pair, repeatedly until nothing changes
    (three or more consecutive lists need several passes).
    """
    prev = None
    result = markdown
    while result != prev:
        prev = result
        result = _ADJACENT_LISTS_RE.sub(r"\1\n\2<!-- -->\n\n\3", result)
    return result


class SlideRenderer:
    """Markdown-to-HTML renderer for slide content.

    Build one per process and share it; the instance is never mutated after
    construction.
    """

    def __init__(self, config: RendererConfig | None = None) -> None:
        self.config = config or RendererConfig()
        options = {
            "html": True,
            "linkify": self.config.linkify,
            "typographer": self.config.typographer,
            "highlight": highlight_code if self.config.highlight else plain_code,
        }
        md = MarkdownIt("commonmark", options).enable(["table", "strikethrough"])
        if self.config.linkify:
            md.enable("linkify")
        if self.config.typographer:
            md.enable(["replacements", "smartquotes"])
        if self.config.source_lines:
            md.use(source_line_plugin)
        self._md = md

    def render(self, markdown: str) -> str:
        """Render a markdown chunk (no directive handling)."""
        return self._md.render(separate_adjacent_lists(markdown))

    def render_slide(self, content: str) -> str:
        """Render a whole slide, honouring the first ``<!-- columns -->`` directive."""
        match = COLUMNS_RE.search(content)
        if not match:
            return self.render(content)

        before = content[: match.start()].strip()
        left = match.group(1).strip()
        right = match.group(2).strip()
        after = content[match.end():].strip()
        logger.debug("Columns directive found (left=%d chars, right=%d chars)", len(left), len(right))

        html = ""
        if before:
            html += self.render(before)
        html += (
            f'<div class="{COLUMNS_CLASS}">'
            f'<div class="slide-col">{self.render(left)}</div>'
            f'<div class="slide-col">{self.render(right)}</div>'
            "</div>"
        )
        if after:
            html += self.render(after)
        return html


@lru_cache(maxsize=1)
def default_renderer() -> SlideRenderer:
    """Return the shared renderer with default options."""
    return SlideRenderer()
