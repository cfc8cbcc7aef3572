"""
Stylesheet formats: CSS custom properties and SCSS variables.
"""

from __future__ import annotations

from ..core.ir.tokens import TransformedToken
from .base import GENERATED_NOTICE, FormatContext, comment_for


def _css_comment(text: str) -> str:
    return text.replace("*/", "* /")


def _value_or_reference(
    token: TransformedToken, context: FormatContext, reference: str
) -> str:
    if context.option("outputReferences"):
        target = context.referenced_token(token)
        if target is not None:
            return reference.format(name=target.name)
    return token.value


def css_variables(tokens: list[TransformedToken], context: FormatContext) -> str:
    """
    ``:root { --name: value; }``.

    Options:
        selector: Rule selector (default ``:root``)
        outputReferences: Emit ``var(--target)`` for aliased tokens
    """
    selector = context.option("selector") or ":root"
    lines = ["/**", f" * {GENERATED_NOTICE}", " */", "", f"{selector} {{"]
    for token in tokens:
        value = _value_or_reference(token, context, "var(--{name})")
        line = f"  --{token.name}: {value};"
        comment = comment_for(token)
        if comment:
            line += f" /* {_css_comment(comment)} */"
        lines.append(line)
    lines.append("}")
    return "\n".join(lines) + "\n"


def scss_variables(tokens: list[TransformedToken], context: FormatContext) -> str:
    """
    ``$name: value;``.

    Options:
        outputReferences: Emit ``$target`` for aliased tokens
    """
    lines = [f"// {GENERATED_NOTICE}", ""]
    for token in tokens:
        value = _value_or_reference(token, context, "${name}")
        line = f"${token.name}: {value};"
        comment = comment_for(token)
        if comment:
            line += f" // {comment}"
        lines.append(line)
    return "\n".join(lines) + "\n"
