"""
Documentation formats.

All three group tokens by their top-level path segment in first-seen
order; within a group tokens keep input order. Missing or unparsable
values fall back to empty previews instead of raising.
"""

from __future__ import annotations

import json
from typing import Any

from ..core.color import format_number, is_css_color
from ..core.ir.tokens import TokenType, TransformedToken
from .base import FormatContext, capitalize, escape_html, group_by_top_level, leading_number

DOCUMENTATION_SCHEMA = "tokensmith/design-tokens/v1"
DEFAULT_TITLE = "Design Tokens"
MAX_PREVIEW_WIDTH = 100

CATEGORY_DESCRIPTIONS: dict[str, str] = {
    "colors": "Color tokens for brand colors, neutrals, and semantic colors",
    "typography": "Typography tokens including font families, sizes, and weights",
    "spacing": "Spacing tokens for margins, padding, and layout",
    "effects": "Effect tokens for shadows, blurs, and other visual effects",
    "shadows": "Shadow effect tokens",
    "borderRadius": "Border radius tokens for rounded corners",
}

_SIZED_TYPES = (TokenType.DIMENSION, TokenType.FONT_SIZE)


def category_description(category: str) -> str:
    return CATEGORY_DESCRIPTIONS.get(category, f"{category} tokens")


def _description(token: TransformedToken) -> str:
    return token.description or token.comment or ""


def _provenance(token: TransformedToken) -> dict[str, Any] | None:
    source = token.token
    if source.source_key or source.source_name:
        return {"key": source.source_key, "name": source.source_name}
    return token.attributes.get("provenance")


# =============================================================================
# JSON
# =============================================================================


def _documentation_record(token: TransformedToken, category: str) -> dict[str, Any]:
    record: dict[str, Any] = {
        "name": token.name,
        "value": token.value,
        "type": str(token.type),
        "path": ".".join(token.path),
        "description": _description(token),
        "category": token.attributes.get("category") or category,
    }
    subcategory = token.attributes.get("subcategory")
    if subcategory is not None:
        record["subcategory"] = subcategory
    provenance = _provenance(token)
    if provenance is not None:
        record["provenance"] = provenance
    record["original"] = {"value": token.original_value, "type": str(token.type)}
    return record


def json_documentation(tokens: list[TransformedToken], context: FormatContext) -> str:
    """
    One JSON document with metadata and tokens keyed by category.

    Options:
        version: Documented token set version (default ``1.0.0``)
    """
    categories: dict[str, Any] = {}
    for category, members in group_by_top_level(tokens).items():
        categories[category] = {
            "description": category_description(category),
            "tokens": [_documentation_record(token, category) for token in members],
        }

    document = {
        "$schema": DOCUMENTATION_SCHEMA,
        "$metadata": {
            "generatedAt": context.generated_at.isoformat(),
            "generatedBy": "tokensmith",
            "tokenCount": len(tokens),
            "version": str(context.option("version", "1.0.0")),
            "description": "Design token documentation with full metadata",
        },
        "tokens": categories,
    }
    return json.dumps(document, indent=2, ensure_ascii=False)


# =============================================================================
# Markdown
# =============================================================================


def _markdown_cell(text: str) -> str:
    return " ".join(text.split()).replace("|", "\\|")


def _markdown_value(token: TransformedToken) -> str:
    code = f"`{_markdown_cell(token.value)}`"
    if token.type == TokenType.COLOR and is_css_color(token.value):
        swatch = (
            '<span style="display:inline-block;width:20px;height:20px;'
            f"background:{token.value};border:1px solid #ddd;"
            'vertical-align:middle;margin-right:8px;"></span>'
        )
        return swatch + code
    return code


def markdown_documentation(tokens: list[TransformedToken], context: FormatContext) -> str:
    """
    One table per category.

    Options:
        title: Document heading (default ``Design Tokens``)
    """
    title = context.option("title") or DEFAULT_TITLE
    out = [
        f"# {title}\n\n",
        f"Generated on {context.generated_at.isoformat()}\n\n",
        f"Total tokens: {len(tokens)}\n\n",
    ]

    for category, members in group_by_top_level(tokens).items():
        out.append(f"## {capitalize(category)}\n\n")
        out.append("| Name | Value | Type | Description |\n")
        out.append("|------|-------|------|-------------|\n")
        for token in members:
            description = _markdown_cell(_description(token)) or "-"
            out.append(
                f"| `{token.name}` | {_markdown_value(token)} | {token.type} | {description} |\n"
            )
        out.append("\n")

    return "".join(out)


# =============================================================================
# HTML
# =============================================================================

_HTML_STYLE = """    * { margin: 0; padding: 0; box-sizing: border-box; }
    body {
      font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', sans-serif;
      padding: 2rem;
      background: #f5f5f5;
    }
    .container { max-width: 1200px; margin: 0 auto; }
    h1 { margin-bottom: 0.5rem; color: #333; }
    .meta { color: #666; margin-bottom: 2rem; }
    .category {
      background: white;
      border-radius: 8px;
      padding: 1.5rem;
      margin-bottom: 2rem;
      box-shadow: 0 2px 4px rgba(0,0,0,0.1);
    }
    .category h2 {
      margin-bottom: 1rem;
      color: #333;
      border-bottom: 2px solid #e0e0e0;
      padding-bottom: 0.5rem;
    }
    .token {
      display: grid;
      grid-template-columns: 200px 1fr 150px 100px;
      gap: 1rem;
      padding: 0.75rem;
      border-bottom: 1px solid #f0f0f0;
      align-items: center;
    }
    .token:last-child { border-bottom: none; }
    .token-name { font-family: 'Monaco', monospace; font-size: 0.9rem; color: #0066cc; }
    .token-value { font-family: 'Monaco', monospace; font-size: 0.85rem; color: #333; }
    .token-preview { display: flex; align-items: center; gap: 0.5rem; }
    .color-swatch { width: 40px; height: 40px; border-radius: 4px; border: 1px solid #ddd; }
    .size-preview { height: 8px; background: #0066cc; border-radius: 2px; }
    .token-type {
      font-size: 0.8rem;
      color: #666;
      background: #f0f0f0;
      padding: 0.25rem 0.5rem;
      border-radius: 4px;
      text-align: center;
    }
    .token-description {
      grid-column: 1 / -1;
      font-size: 0.85rem;
      color: #666;
      padding-left: 0.5rem;
      border-left: 2px solid #e0e0e0;
      margin-top: 0.5rem;
    }
"""


def preview_width(value: str) -> float:
    """Bar width for a size token: ``min(magnitude * 2, 100)``, 0 if unparsable."""
    magnitude = leading_number(value)
    if magnitude is None:
        return 0
    return max(0.0, min(magnitude * 2, MAX_PREVIEW_WIDTH))


def html_preview(token: TransformedToken) -> str:
    if token.type == TokenType.COLOR:
        if not is_css_color(token.value):
            return ""
        return f'<div class="color-swatch" style="background: {escape_html(token.value)};"></div>'
    if token.type in _SIZED_TYPES:
        width = format_number(preview_width(token.value))
        return f'<div class="size-preview" style="width: {width}px;"></div>'
    return ""


def html_documentation(tokens: list[TransformedToken], context: FormatContext) -> str:
    """
    Self-contained HTML page with a preview per token.

    Options:
        title: Page title (default ``Design Tokens``)
    """
    title = escape_html(context.option("title") or DEFAULT_TITLE)
    out = [
        "<!DOCTYPE html>\n",
        '<html lang="en">\n',
        "<head>\n",
        '  <meta charset="UTF-8">\n',
        '  <meta name="viewport" content="width=device-width, initial-scale=1.0">\n',
        f"  <title>{title}</title>\n",
        "  <style>\n",
        _HTML_STYLE,
        "  </style>\n",
        "</head>\n",
        "<body>\n",
        '  <div class="container">\n',
        f"    <h1>{title}</h1>\n",
        f'    <div class="meta">Generated on {context.generated_at.isoformat()}</div>\n',
    ]

    for category, members in group_by_top_level(tokens).items():
        out.append('    <div class="category">\n')
        out.append(f"      <h2>{escape_html(capitalize(category))}</h2>\n")
        for token in members:
            out.append('      <div class="token">\n')
            out.append(f'        <div class="token-name">{escape_html(token.name)}</div>\n')
            out.append(f'        <div class="token-value">{escape_html(token.value)}</div>\n')
            out.append(f'        <div class="token-preview">{html_preview(token)}</div>\n')
            out.append(f'        <div class="token-type">{escape_html(token.type)}</div>\n')
            description = _description(token)
            if description:
                out.append(
                    f'        <div class="token-description">{escape_html(description)}</div>\n'
                )
            out.append("      </div>\n")
        out.append("    </div>\n")

    out.append("  </div>\n</body>\n</html>")
    return "".join(out)
