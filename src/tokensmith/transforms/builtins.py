"""
Built-in transforms and transform groups.

Idempotent: every ``name/*`` and ``attribute/*`` transform, and
``value/reference``. Not idempotent: ``size/px-to-rem`` and
``size/px-to-dp`` (guarded by the pipeline so they run once per token).
"""

from __future__ import annotations

import logging
import re
from typing import Any

from ..core.color import format_number, hex_to_rgb, round_half_up
from ..core.ir.tokens import TokenType, TransformedToken
from .pipeline import is_reference, reference_path
from .registry import TransformKind, TransformRegistry

logger = logging.getLogger(__name__)

DEFAULT_BASE_FONT_SIZE = 16

# Semantic name prefix per token type
TYPE_PREFIXES: dict[str, str] = {
    TokenType.COLOR: "color",
    TokenType.DIMENSION: "size",
    TokenType.FONT_FAMILY: "font",
    TokenType.FONT_SIZE: "font-size",
    TokenType.FONT_WEIGHT: "font-weight",
    TokenType.LINE_HEIGHT: "line-height",
    TokenType.SHADOW: "shadow",
    TokenType.NUMBER: "number",
}

# Top-level path segment -> category
CATEGORY_MAP: dict[str, str] = {
    "colors": "color",
    "spacing": "space",
    "typography": "typography",
    "effects": "effect",
    "shadows": "effect",
    "borderRadius": "radius",
}

STATES: frozenset[str] = frozenset({"hover", "active", "focus", "disabled", "selected", "pressed"})

_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_NON_WORD = re.compile(r"[^a-zA-Z0-9]+")
_NON_NAME = re.compile(r"[^a-z0-9-]")
_DASH_RUN = re.compile(r"-+")
_PX_VALUE = re.compile(r"^\s*(-?\d+(?:\.\d+)?|-?\.\d+)\s*px\s*$")

_SIZED_TYPES = (TokenType.DIMENSION, TokenType.FONT_SIZE)


# =============================================================================
# Helpers
# =============================================================================


def _words(parts: list[str]) -> list[str]:
    """Split path segments into lower-case words (camelCase aware)."""
    words: list[str] = []
    for part in parts:
        spaced = _CAMEL_BOUNDARY.sub(r"\1-\2", part)
        words.extend(w.lower() for w in _NON_WORD.split(spaced) if w)
    return words


def _name_parts(token: TransformedToken, options: dict[str, Any]) -> list[str]:
    prefix = options.get("prefix")
    return ([str(prefix)] if prefix else []) + list(token.path)


def _parse_px(value: str) -> float | None:
    match = _PX_VALUE.match(value)
    return float(match.group(1)) if match else None


def _is_px_size(token: TransformedToken) -> bool:
    return token.type in _SIZED_TYPES and str(token.value).endswith("px")


def _is_color(token: TransformedToken) -> bool:
    return token.type == TokenType.COLOR


# =============================================================================
# Name transforms
# =============================================================================


def semantic_name(token: TransformedToken, options: dict[str, Any]) -> str:
    """``color`` + ``("primary", "500")`` -> ``"color-primary-500"``."""
    parts = list(token.path)
    prefix = TYPE_PREFIXES.get(token.type, "")
    if prefix and parts[0] != prefix:
        parts.insert(0, prefix)
    name = "-".join(p for p in parts if p).lower()
    name = _NON_NAME.sub("-", name)
    return _DASH_RUN.sub("-", name).strip("-")


def category_prefix_name(token: TransformedToken, options: dict[str, Any]) -> str:
    category = token.path[0]
    rest = "-".join(token.path[1:])
    return f"{category}-{rest}".lower() if rest else category.lower()


def css_custom_name(token: TransformedToken, options: dict[str, Any]) -> str:
    prefix = options.get("prefix") or ""
    joined = "-".join(token.path).lower()
    return f"{prefix}-{joined}" if prefix else joined


def kebab_name(token: TransformedToken, options: dict[str, Any]) -> str:
    return "-".join(_words(_name_parts(token, options)))


def snake_name(token: TransformedToken, options: dict[str, Any]) -> str:
    return "_".join(_words(_name_parts(token, options)))


def camel_name(token: TransformedToken, options: dict[str, Any]) -> str:
    words = _words(_name_parts(token, options))
    if not words:
        return ""
    return words[0] + "".join(w.capitalize() for w in words[1:])


def pascal_name(token: TransformedToken, options: dict[str, Any]) -> str:
    return "".join(w.capitalize() for w in _words(_name_parts(token, options)))


# =============================================================================
# Attribute transforms
# =============================================================================


def category_attributes(token: TransformedToken, options: dict[str, Any]) -> dict[str, Any]:
    """Derive category, subcategory and interaction state from the path."""
    top = token.path[0]
    attributes: dict[str, Any] = {"category": CATEGORY_MAP.get(top, top)}
    if len(token.path) >= 2:
        attributes["subcategory"] = token.path[1]
    state = token.path[-1].lower()
    if state in STATES:
        attributes["state"] = state
    return attributes


def provenance_attributes(token: TransformedToken, options: dict[str, Any]) -> dict[str, Any]:
    source = token.token
    if not (source.source_key or source.source_name):
        return {}
    return {"provenance": {"key": source.source_key, "name": source.source_name}}


def comment_attributes(token: TransformedToken, options: dict[str, Any]) -> dict[str, Any]:
    comment = token.description or token.comment
    return {"comment": comment} if comment else {}


# =============================================================================
# Value transforms
# =============================================================================


def css_rgba(token: TransformedToken, options: dict[str, Any]) -> str:
    """``#FF0000`` with alpha 0.5 -> ``rgba(255, 0, 0, 0.5)``."""
    try:
        r, g, b = hex_to_rgb(token.value)
    except ValueError:
        logger.warning("Cannot render %s as rgba: %r", ".".join(token.path), token.value)
        return token.value
    alpha = token.alpha if token.alpha is not None else 1
    return f"rgba({r}, {g}, {b}, {format_number(alpha)})"


def px_to_rem(token: TransformedToken, options: dict[str, Any]) -> str:
    """``24px`` -> ``1.500rem`` against ``baseFontSize`` (default 16)."""
    pixels = _parse_px(token.value)
    if pixels is None:
        return token.value
    base = float(options.get("baseFontSize") or DEFAULT_BASE_FONT_SIZE)
    return f"{pixels / base:.3f}rem"


def px_to_dp(token: TransformedToken, options: dict[str, Any]) -> str:
    """Android density-independent units; font sizes become ``sp``."""
    pixels = _parse_px(token.value)
    if pixels is None:
        return token.value
    unit = "sp" if token.type == TokenType.FONT_SIZE else "dp"
    return f"{pixels:.2f}{unit}"


def hex8_android(token: TransformedToken, options: dict[str, Any]) -> str:
    """``#RRGGBB`` + alpha -> ``#AARRGGBB``."""
    try:
        r, g, b = hex_to_rgb(token.value)
    except ValueError:
        return token.value
    alpha = token.alpha if token.alpha is not None else 1.0
    return f"#{round_half_up(alpha * 255):02X}{r:02X}{g:02X}{b:02X}"


def uicolor_swift(token: TransformedToken, options: dict[str, Any]) -> str:
    try:
        r, g, b = hex_to_rgb(token.value)
    except ValueError:
        return token.value
    alpha = token.alpha if token.alpha is not None else 1
    return (
        f"UIColor(red: {r / 255:.3f}, green: {g / 255:.3f}, "
        f"blue: {b / 255:.3f}, alpha: {format_number(alpha)})"
    )


def reference_to_var(token: TransformedToken, options: dict[str, Any]) -> str:
    """``{colors.primary.500}`` -> ``var(--colors-primary-500)``."""
    return f"var(--{'-'.join(reference_path(token.value))})"


# =============================================================================
# Registration
# =============================================================================

BUILTIN_GROUPS: dict[str, list[str]] = {
    "css": ["attribute/category", "name/kebab", "color/css-rgba", "size/px-to-rem"],
    "scss": ["attribute/category", "name/kebab", "color/css-rgba", "size/px-to-rem"],
    "js": ["attribute/category", "name/pascal", "color/css-rgba", "size/px-to-rem"],
    "android": ["attribute/category", "name/snake", "color/hex8-android", "size/px-to-dp"],
    "ios-swift": ["attribute/category", "name/camel", "color/uicolor-swift"],
    "custom/web": ["name/semantic", "attribute/category", "size/px-to-rem"],
    "custom/css": ["name/css-custom", "attribute/category", "attribute/comment"],
    "custom/js": ["name/camel", "attribute/category", "attribute/provenance"],
}


def register_builtin_transforms(registry: TransformRegistry) -> TransformRegistry:
    """Register every built-in transform and group on ``registry``."""
    name = TransformKind.NAME
    value = TransformKind.VALUE
    attribute = TransformKind.ATTRIBUTE

    registry.register("name/semantic", name, semantic_name)
    registry.register("name/category-prefix", name, category_prefix_name)
    registry.register("name/css-custom", name, css_custom_name)
    registry.register("name/kebab", name, kebab_name)
    registry.register("name/snake", name, snake_name)
    registry.register("name/camel", name, camel_name)
    registry.register("name/pascal", name, pascal_name)

    registry.register("attribute/category", attribute, category_attributes)
    registry.register("attribute/provenance", attribute, provenance_attributes)
    registry.register("attribute/comment", attribute, comment_attributes)

    registry.register(
        "color/css-rgba",
        value,
        css_rgba,
        filter=lambda t: _is_color(t) and t.alpha is not None,
    )
    registry.register("color/hex8-android", value, hex8_android, filter=_is_color)
    registry.register("color/uicolor-swift", value, uicolor_swift, filter=_is_color)
    registry.register("size/px-to-rem", value, px_to_rem, filter=_is_px_size)
    registry.register("size/px-to-dp", value, px_to_dp, filter=_is_px_size)
    registry.register(
        "value/reference",
        value,
        reference_to_var,
        filter=lambda t: is_reference(t.value),
        transitive=True,
    )

    for group_name, members in BUILTIN_GROUPS.items():
        registry.register_group(group_name, members)
    return registry
