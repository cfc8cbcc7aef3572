"""
Code and structured-data formats: ES6 constants, CommonJS module, JSON.
"""

from __future__ import annotations

import json

from ..core.ir.tokens import TransformedToken
from .base import GENERATED_NOTICE, FormatContext, comment_for, nest_values


def javascript_es6(tokens: list[TransformedToken], context: FormatContext) -> str:
    """One ``export const`` per token."""
    lines = ["/**", f" * {GENERATED_NOTICE}", " */", ""]
    for token in tokens:
        line = f"export const {token.name} = {json.dumps(token.value, ensure_ascii=False)};"
        comment = comment_for(token)
        if comment:
            line += f" // {comment}"
        lines.append(line)
    return "\n".join(lines) + "\n"


def javascript_module(tokens: list[TransformedToken], context: FormatContext) -> str:
    """``module.exports`` of the nested value tree."""
    body = json.dumps(nest_values(tokens), indent=2, ensure_ascii=False)
    return f"/**\n * {GENERATED_NOTICE}\n */\n\nmodule.exports = {body};\n"


def json_nested(tokens: list[TransformedToken], context: FormatContext) -> str:
    """Path hierarchy with final values at the leaves."""
    return json.dumps(nest_values(tokens), indent=2, ensure_ascii=False) + "\n"


def json_flat(tokens: list[TransformedToken], context: FormatContext) -> str:
    """Final name to final value."""
    flat = {token.name: token.value for token in tokens}
    return json.dumps(flat, indent=2, ensure_ascii=False) + "\n"
