"""deck2html — Render a markdown slide deck into laid-out HTML slides."""

from __future__ import annotations

import argparse
import html
import json
import logging
import sys
import time
from pathlib import Path

from .models import ParsedPresentation
from .parser import parse_presentation
from .renderer import RendererConfig, SlideRenderer
from .rules import collect_rule_css, default_layout_rules, load_layout_rules

logger = logging.getLogger(__name__)

_PAGE_TEMPLATE = """<!DOCTYPE html>
<html>
<head>
<meta charset="utf-8">
<title>{title}</title>
<style>
{css}
</style>
</head>
<body>
{slides}
</body>
</html>
"""


def presentation_to_json(presentation: ParsedPresentation) -> str:
    """Serialize parsed slides with the camelCase keys editors expect."""
    payload = {
        "slides": [
            {
                "content": slide.content,
                "html": slide.html,
                "notes": slide.notes,
                "lineOffset": slide.line_offset,
                "appliedLayout": slide.applied_layout,
            }
            for slide in presentation
        ]
    }
    return json.dumps(payload, indent=2, ensure_ascii=False) + "\n"


def presentation_to_html(presentation: ParsedPresentation, title: str, css: str = "") -> str:
    """Build a standalone page with one ``<section>`` per slide."""
    sections = "\n".join(
        f'<section class="slide" data-index="{i}"><div class="slide-content">{slide.html}</div></section>'
        for i, slide in enumerate(presentation)
    )
    return _PAGE_TEMPLATE.format(title=html.escape(title), css=css, slides=sections)


def _configure_logging(log_file: str | None, verbose: bool) -> None:
    package_logger = logging.getLogger("deck2html")
    formatter = logging.Formatter("%(asctime)s %(name)s %(levelname)s %(message)s")
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)
    if verbose:
        stream_handler = logging.StreamHandler(sys.stderr)
        stream_handler.setLevel(logging.DEBUG)
        stream_handler.setFormatter(formatter)
        package_logger.addHandler(stream_handler)
    if log_file or verbose:
        package_logger.setLevel(logging.DEBUG)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="deck2html",
        description="Render a markdown slide deck into laid-out HTML slides.",
    )
    parser.add_argument("input", help="Path to the markdown deck")
    parser.add_argument("--output", help="Output path (default: <input>.json or <input>.html)")
    parser.add_argument("--format", choices=["json", "html"], default="json",
                        help="Output format: json (slide records) or html (standalone page) (default: json)")
    parser.add_argument("--no-highlight", action="store_true",
                        help="Render fenced code as plain escaped text")
    parser.add_argument("--log-file", help="Write a debug log to this file")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Log per-slide decisions to stderr")

    rules_group = parser.add_mutually_exclusive_group()
    rules_group.add_argument("--rules",
                             help="Path to a JSON file of layout rules (default: built-in heuristics)")
    rules_group.add_argument("--default-rules", action="store_true",
                             help="Use the built-in layout rule set instead of the heuristics")

    args = parser.parse_args(argv)
    _configure_logging(args.log_file, args.verbose)
    logger.info("CLI arguments: %s", vars(args))

    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: {input_path} not found.", file=sys.stderr)
        sys.exit(1)

    rules = []
    if args.rules:
        rules_path = Path(args.rules)
        if not rules_path.exists():
            print(f"Error: rules file {rules_path} not found.", file=sys.stderr)
            sys.exit(1)
        try:
            rules = load_layout_rules(rules_path)
        except ValueError as exc:
            print(f"Error: invalid rules file {rules_path}: {exc}", file=sys.stderr)
            sys.exit(1)
        print(f"Loaded {len(rules)} layout rule(s)")
    elif args.default_rules:
        rules = default_layout_rules()

    suffix = ".html" if args.format == "html" else ".json"
    output_path = Path(args.output) if args.output else input_path.with_suffix(suffix)
    renderer = SlideRenderer(RendererConfig(highlight=not args.no_highlight))

    try:
        t0 = time.monotonic()
        markdown = input_path.read_text(encoding="utf-8")
        presentation = parse_presentation(markdown, rules, renderer=renderer)
        logger.info("Parse completed in %.2fs, %d slides", time.monotonic() - t0, len(presentation))

        if args.format == "html":
            css = collect_rule_css(rules or default_layout_rules())
            output = presentation_to_html(presentation, input_path.stem, css)
        else:
            output = presentation_to_json(presentation)
        output_path.write_text(output, encoding="utf-8")
    except Exception:
        logger.exception("Rendering failed")
        raise

    laid_out = sum(1 for slide in presentation if slide.applied_layout)
    with_notes = sum(1 for slide in presentation if slide.notes is not None)
    print(f"Done! {len(presentation)} slides ({laid_out} auto-laid-out, {with_notes} with notes).")
    print(f"Output: {output_path}")


if __name__ == "__main__":
    main()
