"""
Color channel helpers.

Provider payloads carry channel intensities in the [0, 1] range; tokens
store uppercase ``#RRGGBB`` hex with an optional separate alpha channel.
No external color libraries required.
"""

from __future__ import annotations

import math
import re

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{6})$")
_SHORT_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3})$")
_CSS_COLOR_RE = re.compile(r"^(#[0-9a-fA-F]{3,8}|rgba?\([^()<>\"']*\)|[a-zA-Z]+)$")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives."""
    return int(math.floor(value + 0.5))


def channel_to_byte(intensity: float) -> int:
    """Scale a [0, 1] channel intensity to a byte in [0, 255]."""
    return max(0, min(255, round_half_up(intensity * 255)))


def rgb_to_hex(r: float, g: float, b: float) -> str:
    """Encode byte channels (0-255) as an uppercase ``#RRGGBB`` string.

    Fractional channel values are rounded before encoding.
    """
    return "#" + "".join(f"{max(0, min(255, round_half_up(c))):02X}" for c in (r, g, b))


def hex_to_rgb(value: str) -> tuple[int, int, int]:
    """Decode ``#RRGGBB`` (or ``#RGB``) into byte channels.

    Raises:
        ValueError: If the value is not a 3 or 6 digit hex color.
    """
    match = _HEX_RE.match(value.strip())
    if match:
        digits = match.group(1)
    else:
        short = _SHORT_HEX_RE.match(value.strip())
        if not short:
            raise ValueError(f"Not a hex color: {value!r}")
        digits = "".join(ch * 2 for ch in short.group(1))
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def unit_rgb_to_hex(r: float, g: float, b: float) -> str:
    """Encode [0, 1] channel intensities as ``#RRGGBB``."""
    return rgb_to_hex(channel_to_byte(r), channel_to_byte(g), channel_to_byte(b))


def hex_to_unit_rgb(value: str) -> tuple[float, float, float]:
    """Decode ``#RRGGBB`` into [0, 1] channel intensities."""
    r, g, b = hex_to_rgb(value)
    return r / 255, g / 255, b / 255


def is_css_color(value: str) -> bool:
    """Whether a value is safe to drop into a ``background`` declaration."""
    return bool(_CSS_COLOR_RE.match(value.strip())) if value else False


def format_number(value: float) -> str:
    """Render a number the way JSON/CSS consumers expect (``24`` not ``24.0``)."""
    if isinstance(value, bool):
        return str(int(value))
    if float(value).is_integer():
        return str(int(value))
    return repr(float(value))
