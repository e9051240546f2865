"""Layout rule configuration — JSON loading, validation and built-in defaults."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from .models import (
    TRANSFORM_TYPES,
    GroupByHeadingOptions,
    LayoutConditions,
    LayoutRule,
    LayoutTransform,
    NumericCondition,
    SplitTopBottomOptions,
    SplitTwoOptions,
    WrapOptions,
)

logger = logging.getLogger(__name__)

# Persisted condition keys and the ContentFeatures field each one constrains.
_BOOLEAN_CONDITIONS = {
    "hasHeading": "has_heading",
    "hasCards": "has_cards",
    "hasList": "has_list",
    "hasCodeBlock": "has_code_block",
    "hasBlockquote": "has_blockquote",
}
_NUMERIC_CONDITIONS = {
    "imageCount": "image_count",
    "figureCount": "figure_count",
    "h3Count": "h3_count",
    "textParagraphCount": "text_paragraph_count",
}
_NUMERIC_OPERATORS = ("eq", "gte", "lte", "gt")


def _decode(value, what: str):
    """Accept either an object or its JSON text (database columns store text)."""
    if isinstance(value, str):
        value = json.loads(value)
    if not isinstance(value, dict):
        raise ValueError(f"{what} must be a JSON object, got {type(value).__name__}")
    return value


def _require_int(value, what: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{what} must be an integer, got {value!r}")
    return value


def _numeric_condition(key: str, value) -> NumericCondition:
    if not isinstance(value, dict):
        raise ValueError(f"Condition {key!r} must be an object like {{\"gte\": 2}}, got {value!r}")
    unknown = set(value) - set(_NUMERIC_OPERATORS)
    if unknown:
        raise ValueError(
            f"Condition {key!r} has unknown operator(s) {sorted(unknown)}; "
            f"expected one of {', '.join(_NUMERIC_OPERATORS)}"
        )
    return NumericCondition(**{op: _require_int(n, f"{key}.{op}") for op, n in value.items()})


def conditions_from_dict(data) -> LayoutConditions:
    """Convert persisted ``conditions`` into LayoutConditions."""
    data = _decode(data, "conditions")
    kwargs = {}
    for key, value in data.items():
        if key in _BOOLEAN_CONDITIONS:
            if not isinstance(value, bool):
                raise ValueError(f"Condition {key!r} must be true or false, got {value!r}")
            kwargs[_BOOLEAN_CONDITIONS[key]] = value
        elif key in _NUMERIC_CONDITIONS:
            kwargs[_NUMERIC_CONDITIONS[key]] = _numeric_condition(key, value)
        else:
            raise ValueError(f"Unknown condition {key!r}")
    return LayoutConditions(**kwargs)


def _option(options: dict, key: str, transform_type: str) -> str:
    value = options.get(key)
    if not isinstance(value, str) or not value:
        raise ValueError(f"Transform {transform_type!r} requires option {key!r}")
    return value


def transform_from_dict(data) -> LayoutTransform:
    """Convert persisted ``transform`` into a LayoutTransform."""
    data = _decode(data, "transform")
    transform_type = data.get("type")
    if transform_type not in TRANSFORM_TYPES:
        raise ValueError(
            f"Unknown transform type {transform_type!r}; expected one of {', '.join(TRANSFORM_TYPES)}"
        )
    options = data.get("options") or {}
    if not isinstance(options, dict):
        raise ValueError(f"Transform options must be a JSON object, got {type(options).__name__}")

    if transform_type == "wrap":
        parsed = WrapOptions(class_name=_option(options, "className", transform_type))
    elif transform_type == "split-two":
        left_selector = options.get("leftSelector")
        if left_selector not in ("text", "cards"):
            raise ValueError(f"leftSelector must be 'text' or 'cards', got {left_selector!r}")
        parsed = SplitTwoOptions(
            class_name=_option(options, "className", transform_type),
            left_selector=left_selector,
            left_class_name=_option(options, "leftClassName", transform_type),
            right_class_name=_option(options, "rightClassName", transform_type),
            right_selector=options.get("rightSelector", "media"),
        )
    elif transform_type == "split-top-bottom":
        parsed = SplitTopBottomOptions(
            class_name=_option(options, "className", transform_type),
            bottom_selector=options.get("bottomSelector", "media"),
        )
    else:
        level = _require_int(options.get("headingLevel"), "headingLevel")
        if not 1 <= level <= 6:
            raise ValueError(f"headingLevel must be between 1 and 6, got {level}")
        parsed = GroupByHeadingOptions(
            heading_level=level,
            container_class_name=_option(options, "containerClassName", transform_type),
            column_class_name=_option(options, "columnClassName", transform_type),
        )
    return LayoutTransform(type=transform_type, options=parsed)


def rule_from_dict(data: dict) -> LayoutRule:
    """Convert one persisted rule object into a LayoutRule."""
    if not isinstance(data, dict):
        raise ValueError(f"Layout rule must be a JSON object, got {type(data).__name__}")
    display_name = data.get("displayName")
    if not isinstance(display_name, str) or not display_name:
        raise ValueError(f"Layout rule is missing 'displayName': {data!r}")
    enabled = data.get("enabled", True)
    if not isinstance(enabled, bool):
        raise ValueError(f"Rule {display_name!r}: 'enabled' must be true or false")
    try:
        return LayoutRule(
            display_name=display_name,
            conditions=conditions_from_dict(data.get("conditions", {})),
            transform=transform_from_dict(data.get("transform")),
            enabled=enabled,
            priority=_require_int(data.get("priority", 0), "priority"),
            css_content=data.get("cssContent") or "",
            name=data.get("name"),
            description=data.get("description"),
        )
    except ValueError as exc:
        raise ValueError(f"Rule {display_name!r}: {exc}") from exc


def load_layout_rules(path: Path) -> list[LayoutRule]:
    """Load layout rules from a JSON file, sorted by ascending priority.

    The file holds either an array of rule objects or an object with a
    ``rules`` array.
    """
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict) and "rules" in data:
        data = data["rules"]
    if not isinstance(data, list):
        raise ValueError(f"Layout rules file must hold a JSON array, got {type(data).__name__}")
    rules = sort_rules(rule_from_dict(entry) for entry in data)
    logger.info("Loaded %d layout rule(s) from %s", len(rules), path)
    return rules


def sort_rules(rules) -> list[LayoutRule]:
    """Order rules the way the layout engine expects them (stable)."""
    return sorted(rules, key=lambda rule: rule.priority)


def collect_rule_css(rules: list[LayoutRule]) -> str:
    """Concatenate the stylesheet snippets of the enabled rules."""
    return "\n".join(rule.css_content for rule in rules if rule.enabled)


_DEFAULT_RULES = [
    {
        "name": "sections",
        "displayName": "Sections",
        "description": "Groups content by h3 headings into equal columns",
        "priority": 10,
        "conditions": {"h3Count": {"gte": 2}, "imageCount": {"eq": 0}, "hasCards": False},
        "transform": {
            "type": "group-by-heading",
            "options": {
                "headingLevel": 3,
                "containerClassName": "layout-sections",
                "columnClassName": "layout-section-col",
            },
        },
        "cssContent": """
.slide-content .layout-sections {
  display: grid;
  grid-template-columns: repeat(auto-fit, minmax(0, 1fr));
  gap: 2rem;
  flex: 1;
  min-height: 0;
}
.slide-content .layout-section-col h3 {
  margin-top: 0;
}
.slide-content .layout-section-col ul,
.slide-content .layout-section-col ol {
  padding-left: 1.2em;
}
""",
    },
    {
        "name": "hero",
        "displayName": "Hero",
        "description": "Centered title slide with optional subtitle",
        "priority": 20,
        "conditions": {
            "hasHeading": True,
            "imageCount": {"eq": 0},
            "hasCards": False,
            "hasList": False,
            "hasCodeBlock": False,
            "hasBlockquote": False,
            "textParagraphCount": {"lte": 1},
        },
        "transform": {"type": "wrap", "options": {"className": "layout-hero"}},
        "cssContent": """
.slide-content .layout-hero {
  display: flex;
  flex-direction: column;
  align-items: center;
  justify-content: center;
  text-align: center;
  height: 100%;
}
.slide-content .layout-hero h1 { font-size: 3rem; }
.slide-content .layout-hero h2 { font-size: 2.2rem; }
""",
    },
    {
        "name": "cards-image",
        "displayName": "Cards + Image",
        "description": "Card grid on the left, image on the right",
        "priority": 30,
        "conditions": {"hasCards": True, "imageCount": {"gt": 0}},
        "transform": {
            "type": "split-two",
            "options": {
                "className": "layout-cards-image",
                "leftSelector": "cards",
                "rightSelector": "media",
                "leftClassName": "layout-cards-side",
                "rightClassName": "layout-media-side",
            },
        },
        "cssContent": """
.slide-content .layout-cards-image {
  display: grid;
  grid-template-columns: 1fr 1fr;
  gap: 2rem;
  align-items: start;
  height: 100%;
}
.slide-content .layout-media-side img,
.slide-content .layout-media-side figure img {
  width: 100%;
  height: auto;
  border-radius: 8px;
  display: block;
}
""",
    },
    {
        "name": "image-grid",
        "displayName": "Image Grid",
        "description": "Text on top, multiple images in a grid below",
        "priority": 40,
        "conditions": {"hasHeading": True, "imageCount": {"gte": 2}},
        "transform": {
            "type": "split-top-bottom",
            "options": {"className": "layout-image-grid", "bottomSelector": "media"},
        },
        "cssContent": """
.slide-content .layout-image-grid {
  display: grid;
  grid-template-columns: repeat(auto-fit, minmax(250px, 1fr));
  gap: 1.5rem;
  margin: 1rem 0;
}
.slide-content .layout-image-grid img {
  width: 100%;
  height: auto;
  border-radius: 8px;
  display: block;
}
.slide-content .layout-image-grid figure {
  margin: 0;
}
""",
    },
    {
        "name": "text-image",
        "displayName": "Text + Image",
        "description": "Text on the left, single image on the right",
        "priority": 50,
        "conditions": {"hasHeading": True, "imageCount": {"eq": 1}},
        "transform": {
            "type": "split-two",
            "options": {
                "className": "layout-text-image",
                "leftSelector": "text",
                "rightSelector": "media",
                "leftClassName": "layout-body",
                "rightClassName": "layout-media",
            },
        },
        "cssContent": """
.slide-content .layout-text-image {
  display: grid;
  grid-template-columns: 1fr 1fr;
  gap: 2rem;
  align-items: center;
  height: 100%;
}
.slide-content .layout-media img,
.slide-content .layout-media figure img {
  width: 100%;
  height: auto;
  border-radius: 8px;
  display: block;
}
""",
    },
]


def default_layout_rules() -> list[LayoutRule]:
    """The built-in rule set, already sorted by priority."""
    return sort_rules(rule_from_dict(entry) for entry in _DEFAULT_RULES)
