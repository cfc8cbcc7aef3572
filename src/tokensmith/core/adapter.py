"""
Source adapter: provider style payload -> canonical token tree.

Style names use a ``/`` hierarchy (``"primary/500"``, ``"fontSize/lg"``).
Colors arrive as [0, 1] channels and become ``#RRGGBB`` hex; text styles
fan out into one token per typography property; effect styles flatten
into a CSS shadow string.

Malformed or partial records degrade to fewer tokens and never abort
adaptation of the remaining records.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import Any

from .color import channel_to_byte, format_number, unit_rgb_to_hex
from .errors import PayloadError
from .ir.payload import (
    RGBA,
    ColorStyle,
    EffectLayer,
    EffectStyle,
    EffectType,
    StylePayload,
    TextStyle,
)
from .ir.tokens import Token, TokenTree, TokenType

logger = logging.getLogger(__name__)

NAME_SEPARATOR = "/"

# Top-level groups of the adapted tree
COLORS_GROUP = "colors"
TYPOGRAPHY_GROUP = "typography"
EFFECTS_GROUP = "effects"

_INVALID_SEGMENT_CHARS = re.compile(r"[^a-zA-Z0-9_-]")
_EDGE_DASHES = re.compile(r"^-+|-+$")

_SHADOW_LAYERS = (EffectType.DROP_SHADOW, EffectType.INNER_SHADOW)
_OPAQUE_BLACK = RGBA(r=0.0, g=0.0, b=0.0, a=1.0)


def parse_style_name(name: str, separator: str = NAME_SEPARATOR) -> tuple[str, ...]:
    """Split a provider style name into path segments.

    Segments are trimmed, characters outside ``[a-zA-Z0-9_-]`` become
    ``-``, edge dashes are dropped, and empty segments are discarded.
    """
    segments: list[str] = []
    for part in name.split(separator):
        segment = _INVALID_SEGMENT_CHARS.sub("-", part.strip())
        segment = _EDGE_DASHES.sub("", segment)
        if segment:
            segments.append(segment)
    return tuple(segments)


# =============================================================================
# Colors
# =============================================================================


def adapt_color(record: ColorStyle) -> Token | None:
    """Convert one color fill style into a color token."""
    path = parse_style_name(record.name)
    if not path:
        logger.warning("Skipping color style with unusable name %r", record.name)
        return None

    alpha: float | None = None
    if record.color is not None:
        value = unit_rgb_to_hex(record.color.r, record.color.g, record.color.b)
        if record.color.a is not None and record.color.a != 1:
            alpha = max(0.0, min(1.0, record.color.a))
    elif record.value:
        value = record.value
    else:
        logger.warning("Color style %r has no color; skipped", record.name)
        return None

    return Token(
        path=path,
        type=TokenType.COLOR,
        value=value,
        alpha=alpha,
        description=record.description or f"Color: {record.name}",
        source_key=record.key,
        source_name=record.name,
    )


def adapt_colors(records: Iterable[ColorStyle]) -> TokenTree:
    """Adapt color styles into a tree rooted at each style's parsed path."""
    tree = TokenTree()
    for record in records:
        token = adapt_color(record)
        if token is not None:
            tree.set(token.path, token)
    return tree


# =============================================================================
# Typography
# =============================================================================


def _typography_leaf(path: tuple[str, ...]) -> str:
    """``("fontSize", "lg")`` -> ``"lg"``; a single segment names itself."""
    return "-".join(path[1:]) or path[0]


def _line_height_value(record: TextStyle) -> str | None:
    """Unitless line height; a ratio when both pixel sizes are known."""
    pixels = record.line_height_px
    if pixels is None and isinstance(record.line_height, int | float):
        pixels = record.line_height
    if pixels is not None and record.font_size:
        return f"{pixels / record.font_size:.2f}"
    if pixels is not None:
        return format_number(pixels)
    if record.line_height is not None:
        return str(record.line_height)
    return None


def adapt_text_style(record: TextStyle) -> list[Token]:
    """Convert one text style into up to four sibling tokens.

    Paths are ``(<property>, <leaf>)`` where the property is one of
    fontFamily, fontSize, fontWeight, lineHeight.
    """
    path = parse_style_name(record.name)
    if not path:
        logger.warning("Skipping text style with unusable name %r", record.name)
        return []

    leaf = _typography_leaf(path)
    common: dict[str, Any] = {"source_key": record.key, "source_name": record.name}
    tokens: list[Token] = []

    if record.font_family:
        tokens.append(
            Token(
                path=("fontFamily", leaf),
                type=TokenType.FONT_FAMILY,
                value=record.font_family,
                description=record.description or f"Font family: {record.font_family}",
                **common,
            )
        )

    if record.font_size:
        size = f"{format_number(record.font_size)}px"
        tokens.append(
            Token(
                path=("fontSize", leaf),
                type=TokenType.FONT_SIZE,
                value=size,
                description=record.description or f"Font size: {size}",
                **common,
            )
        )

    if record.font_weight not in (None, ""):
        weight = (
            format_number(record.font_weight)
            if isinstance(record.font_weight, int | float)
            else str(record.font_weight)
        )
        tokens.append(
            Token(
                path=("fontWeight", leaf),
                type=TokenType.FONT_WEIGHT,
                value=weight,
                description=record.description or f"Font weight: {weight}",
                **common,
            )
        )

    line_height = _line_height_value(record)
    if line_height is not None:
        tokens.append(
            Token(
                path=("lineHeight", leaf),
                type=TokenType.LINE_HEIGHT,
                value=line_height,
                description=record.description or f"Line height: {line_height}",
                **common,
            )
        )

    if not tokens:
        logger.warning("Text style %r has no typography properties; skipped", record.name)
    return tokens


def adapt_text_styles(records: Iterable[TextStyle]) -> TokenTree:
    """Adapt text styles into ``<property>/<leaf>`` tokens."""
    tree = TokenTree()
    for record in records:
        for token in adapt_text_style(record):
            tree.set(token.path, token)
    return tree


# =============================================================================
# Effects
# =============================================================================


def shadow_layer_to_css(layer: EffectLayer) -> str:
    """Render one drop/inner shadow layer as a CSS shadow."""
    offset_x = layer.offset.x if layer.offset else 0
    offset_y = layer.offset.y if layer.offset else 0
    blur = layer.radius or 0
    spread = layer.spread or 0
    color = layer.color or _OPAQUE_BLACK
    alpha = color.a if color.a is not None else 1

    rgba = (
        f"rgba({channel_to_byte(color.r)}, {channel_to_byte(color.g)}, "
        f"{channel_to_byte(color.b)}, {format_number(alpha)})"
    )
    prefix = "inset " if layer.type == EffectType.INNER_SHADOW else ""
    return (
        f"{prefix}{format_number(offset_x)}px {format_number(offset_y)}px "
        f"{format_number(blur)}px {format_number(spread)}px {rgba}"
    )


def effect_layers_to_css(layers: Iterable[EffectLayer]) -> str:
    """Flatten shadow layers into one comma separated CSS value."""
    return ", ".join(shadow_layer_to_css(layer) for layer in layers if layer.type in _SHADOW_LAYERS)


def adapt_effect(record: EffectStyle) -> Token | None:
    """Convert one effect style into a shadow token."""
    path = parse_style_name(record.name)
    if not path:
        logger.warning("Skipping effect style with unusable name %r", record.name)
        return None

    value = effect_layers_to_css(record.effects)
    if not value:
        value = record.value or ""
    if not value:
        logger.warning("Effect style %r has no shadow layers; skipped", record.name)
        return None

    return Token(
        path=path,
        type=TokenType.SHADOW,
        value=value,
        description=record.description or f"Effect: {record.name}",
        source_key=record.key,
        source_name=record.name,
    )


def adapt_effects(records: Iterable[EffectStyle]) -> TokenTree:
    """Adapt effect styles into shadow tokens."""
    tree = TokenTree()
    for record in records:
        token = adapt_effect(record)
        if token is not None:
            tree.set(token.path, token)
    return tree


# =============================================================================
# Payload
# =============================================================================


def adapt_payload(payload: StylePayload | dict[str, Any]) -> TokenTree:
    """Adapt a whole provider payload into the canonical token tree.

    Colors land under ``colors``, text styles under ``typography`` and
    effects under ``effects``.

    Raises:
        PayloadError: If ``payload`` is neither a StylePayload nor a mapping.
    """
    if isinstance(payload, dict):
        payload = StylePayload.from_raw(payload)
    elif not isinstance(payload, StylePayload):
        raise PayloadError(f"Expected a style payload object, got {type(payload).__name__}")

    tree = TokenTree(
        metadata={
            "source": "provider",
            "extractedAt": datetime.now(UTC).isoformat(),
            "fileName": payload.name,
            "version": payload.version,
        }
    )

    colors = adapt_colors(payload.colors)
    typography = adapt_text_styles(payload.text)
    effects = adapt_effects(payload.effects)

    tree.graft((COLORS_GROUP,), colors)
    tree.graft((TYPOGRAPHY_GROUP,), typography)
    tree.graft((EFFECTS_GROUP,), effects)

    logger.info(
        "Adapted %d color, %d typography and %d effect token(s)%s",
        len(colors),
        len(typography),
        len(effects),
        f" ({payload.skipped} malformed record(s) skipped)" if payload.skipped else "",
    )
    return tree
