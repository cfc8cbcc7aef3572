"""
Mobile platform formats: Android resource XML and a Swift color class.
"""

from __future__ import annotations

import json
import re
from xml.sax.saxutils import escape

from ..core.ir.tokens import TransformedToken
from .base import GENERATED_NOTICE, FormatContext

_SWIFT_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _android_resources(tag: str, tokens: list[TransformedToken]) -> str:
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        "",
        "<!--",
        f"  {GENERATED_NOTICE}",
        "-->",
        "<resources>",
    ]
    for token in tokens:
        name = escape(token.name, {'"': "&quot;"})
        lines.append(f'  <{tag} name="{name}">{escape(token.value)}</{tag}>')
    lines.append("</resources>")
    return "\n".join(lines) + "\n"


def android_colors(tokens: list[TransformedToken], context: FormatContext) -> str:
    """``<color name="...">#AARRGGBB</color>`` resources."""
    return _android_resources("color", tokens)


def android_dimens(tokens: list[TransformedToken], context: FormatContext) -> str:
    """``<dimen name="...">16.00dp</dimen>`` resources."""
    return _android_resources("dimen", tokens)


def ios_swift_class(tokens: list[TransformedToken], context: FormatContext) -> str:
    """
    A Swift class of ``public static let`` members.

    Options:
        className: Swift class name (default ``StyleDictionary``)
    """
    class_name = context.option("className") or "StyleDictionary"
    lines = [
        "//",
        f"// {context.destination or class_name + '.swift'}",
        "//",
        f"// {GENERATED_NOTICE}",
        "//",
        "",
        "import UIKit",
        "",
        f"public class {class_name} {{",
    ]
    for token in tokens:
        name = token.name if _SWIFT_IDENTIFIER.match(token.name) else f"`{token.name}`"
        value = token.value if token.value.startswith("UIColor(") else json.dumps(token.value)
        lines.append(f"    public static let {name} = {value}")
    lines.append("}")
    return "\n".join(lines) + "\n"
