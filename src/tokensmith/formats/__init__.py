"""
Formats: render a transformed token list into one text artifact.
"""

from .base import Format, FormatContext, FormatRegistry, filter_tokens, matches_filter
from .css import css_variables, scss_variables
from .docs import html_documentation, json_documentation, markdown_documentation
from .javascript import javascript_es6, javascript_module, json_flat, json_nested
from .mobile import android_colors, android_dimens, ios_swift_class


def register_builtin_formats(registry: FormatRegistry) -> FormatRegistry:
    """Register every built-in format on ``registry``."""
    registry.register("css/variables", css_variables, "CSS custom properties")
    registry.register("scss/variables", scss_variables, "SCSS variables")
    registry.register("javascript/es6", javascript_es6, "ES6 named exports")
    registry.register("javascript/module", javascript_module, "CommonJS nested module")
    registry.register("json/nested", json_nested, "Nested JSON values")
    registry.register("json/flat", json_flat, "Flat JSON name/value map")
    registry.register("android/colors", android_colors, "Android color resources")
    registry.register("android/dimens", android_dimens, "Android dimension resources")
    registry.register("ios-swift/class.swift", ios_swift_class, "Swift UIColor class")
    registry.register("json/documentation", json_documentation, "JSON documentation")
    registry.register("markdown/documentation", markdown_documentation, "Markdown tables")
    registry.register("html/documentation", html_documentation, "HTML preview page")
    return registry


__all__ = [
    "Format",
    "FormatContext",
    "FormatRegistry",
    "filter_tokens",
    "matches_filter",
    "register_builtin_formats",
]
