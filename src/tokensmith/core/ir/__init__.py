"""
Intermediate representation for tokensmith.

Canonical tokens, provider payload records, and build configuration.
"""

from .config import BuildConfig, FileConfig, PlatformConfig, TokenFilter
from .payload import (
    RGBA,
    ColorStyle,
    EffectLayer,
    EffectStyle,
    EffectType,
    Offset,
    StylePayload,
    TextStyle,
)
from .tokens import Token, TokenTree, TokenType, TransformedToken

__all__ = [
    # Tokens
    "Token",
    "TokenTree",
    "TokenType",
    "TransformedToken",
    # Payload
    "RGBA",
    "ColorStyle",
    "EffectLayer",
    "EffectStyle",
    "EffectType",
    "Offset",
    "StylePayload",
    "TextStyle",
    # Configuration
    "BuildConfig",
    "FileConfig",
    "PlatformConfig",
    "TokenFilter",
]
