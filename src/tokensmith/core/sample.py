"""
Offline stand-in for the design-tool provider.

Turns a hand-written sample token file (hex colors, typography groups,
CSS shadows) into the same payload shape the provider API returns, with
color channels re-expressed in the [0, 1] range. Used for demos and tests
where no provider access is available.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from .color import hex_to_unit_rgb
from .errors import PayloadError

logger = logging.getLogger(__name__)


def _is_token(node: Any) -> bool:
    return isinstance(node, dict) and "value" in node and "type" in node


def _sample_colors(node: dict[str, Any], prefix: str = "") -> list[dict[str, Any]]:
    colors: list[dict[str, Any]] = []
    for key, value in node.items():
        name = f"{prefix}/{key}" if prefix else key
        if _is_token(value) and value["type"] == "color":
            record: dict[str, Any] = {
                "key": f"color-{name.replace('/', '-')}",
                "name": name,
                "description": value.get("description", ""),
                "value": value["value"],
            }
            try:
                r, g, b = hex_to_unit_rgb(value["value"])
                record["color"] = {"r": r, "g": g, "b": b, "a": 1}
            except ValueError:
                logger.warning("Sample color %s is not hex; kept as literal", name)
            colors.append(record)
        elif isinstance(value, dict) and "type" not in value:
            colors.extend(_sample_colors(value, name))
    return colors


def _parse_px(value: Any) -> float | None:
    try:
        return float(str(value).strip().removesuffix("px"))
    except ValueError:
        return None


def _sample_text(node: dict[str, Any]) -> list[dict[str, Any]]:
    text: list[dict[str, Any]] = []
    for key, value in node.get("fontFamily", {}).items():
        if _is_token(value) and value["type"] == "fontFamily":
            text.append(
                {
                    "key": f"font-family-{key}",
                    "name": f"fontFamily/{key}",
                    "fontFamily": value["value"],
                    "description": value.get("description", ""),
                }
            )
    for key, value in node.get("fontSize", {}).items():
        if _is_token(value) and value["type"] in ("dimension", "fontSize"):
            size = _parse_px(value["value"])
            if size is None:
                logger.warning("Sample font size %s is not in px; skipped", key)
                continue
            text.append(
                {
                    "key": f"font-size-{key}",
                    "name": f"fontSize/{key}",
                    "fontSize": size,
                    "description": value.get("description", ""),
                }
            )
    for key, value in node.get("fontWeight", {}).items():
        if _is_token(value) and value["type"] == "fontWeight":
            text.append(
                {
                    "key": f"font-weight-{key}",
                    "name": f"fontWeight/{key}",
                    "fontWeight": value["value"],
                    "description": value.get("description", ""),
                }
            )
    return text


def _sample_effects(node: dict[str, Any]) -> list[dict[str, Any]]:
    return [
        {
            "key": f"shadow-{key}",
            "name": f"shadow/{key}",
            "value": value["value"],
            "description": value.get("description", ""),
        }
        for key, value in node.items()
        if _is_token(value) and value["type"] == "shadow"
    ]


def payload_from_sample_tokens(
    tokens: dict[str, Any], name: str = "Design System Tokens"
) -> dict[str, Any]:
    """Build a provider-shaped payload from a sample token document."""
    return {
        "name": name,
        "lastModified": datetime.now(UTC).isoformat(),
        "version": "1.0.0",
        "styles": {
            "colors": _sample_colors(tokens.get("colors", {})),
            "text": _sample_text(tokens.get("typography", {})),
            "effects": _sample_effects(tokens.get("shadows", {})),
        },
    }


def load_sample_payload(path: Path) -> dict[str, Any]:
    """Read a sample token file and convert it to a provider payload.

    Raises:
        PayloadError: If the file cannot be read or is not a JSON object.
    """
    try:
        tokens = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise PayloadError(f"Cannot load sample tokens from {path}: {e}") from e
    if not isinstance(tokens, dict):
        raise PayloadError(f"Sample tokens in {path} must be a JSON object")
    return payload_from_sample_tokens(tokens)


def load_payload(path: Path) -> dict[str, Any]:
    """Read a raw provider payload saved as JSON.

    Raises:
        PayloadError: If the file cannot be read or is not a JSON object.
    """
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise PayloadError(f"Cannot load payload from {path}: {e}") from e
    if not isinstance(data, dict):
        raise PayloadError(f"Payload in {path} must be a JSON object")
    return data
