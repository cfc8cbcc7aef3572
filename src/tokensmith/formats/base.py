"""
Format registry and shared rendering helpers.

A format turns the fully transformed token list of one platform into a
single text artifact. Formats are pure: the same tokens and options give
byte-identical output, except for the generation timestamp that some
documentation formats embed.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from ..core.errors import UnknownFormatError
from ..core.ir.config import TokenFilter
from ..core.ir.tokens import TransformedToken
from ..transforms.pipeline import is_reference, reference_path

logger = logging.getLogger(__name__)

GENERATED_NOTICE = "Do not edit directly, this file was auto-generated."

_LEADING_NUMBER = re.compile(r"^\s*([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)")

_HTML_ESCAPES = {
    "&": "&amp;",
    "<": "&lt;",
    ">": "&gt;",
    '"': "&quot;",
    "'": "&#039;",
}


@dataclass
class FormatContext:
    """
    Everything a format may read besides the token list.

    Attributes:
        options: Platform options overlaid with the file's options
        generated_at: Timestamp shared by every artifact of a build run
        all_tokens: The platform's unfiltered token list (for references)
        platform: Platform name
        destination: File being rendered
    """

    options: dict[str, Any] = field(default_factory=dict)
    generated_at: datetime = field(default_factory=lambda: datetime.now(UTC))
    all_tokens: list[TransformedToken] = field(default_factory=list)
    platform: str | None = None
    destination: str | None = None

    def option(self, key: str, default: Any = None) -> Any:
        return self.options.get(key, default)

    def referenced_token(self, token: TransformedToken) -> TransformedToken | None:
        """The token an alias pointed at before it was unwound, if any."""
        original = token.original_value
        if not is_reference(original):
            return None
        target = reference_path(original)
        for candidate in self.all_tokens:
            if candidate.path == target:
                return candidate
        return None


FormatFn = Callable[[list[TransformedToken], FormatContext], str]


@dataclass(frozen=True)
class Format:
    """A registered format."""

    name: str
    formatter: FormatFn
    description: str = ""

    def render(self, tokens: list[TransformedToken], context: FormatContext) -> str:
        return self.formatter(tokens, context)


class FormatRegistry:
    """
    Registry for formats.

    Last registration wins so built-in formats can be overridden.
    """

    def __init__(self) -> None:
        self._formats: dict[str, Format] = {}

    def register(self, name: str, formatter: FormatFn, description: str = "") -> Format:
        if name in self._formats:
            logger.debug("Format %s re-registered; previous definition replaced", name)
        entry = Format(name=name, formatter=formatter, description=description)
        self._formats[name] = entry
        return entry

    def get(self, name: str) -> Format:
        """
        Get a format by name.

        Raises:
            UnknownFormatError: If no format has that name
        """
        if name not in self._formats:
            raise UnknownFormatError(
                f"Format '{name}' is not registered. Available formats: {sorted(self._formats)}"
            )
        return self._formats[name]

    def has(self, name: str) -> bool:
        return name in self._formats

    def list_formats(self) -> list[str]:
        return list(self._formats)


# =============================================================================
# Helpers
# =============================================================================


def matches_filter(token: TransformedToken, token_filter: TokenFilter | None) -> bool:
    """Whether a token passes a platform or file filter."""
    if token_filter is None:
        return True
    if token_filter.type is not None and token.type not in token_filter.type:
        return False
    if token_filter.category is not None:
        return token.attributes.get("category") in token_filter.category
    return True


def filter_tokens(
    tokens: Iterable[TransformedToken], token_filter: TokenFilter | None
) -> list[TransformedToken]:
    return [t for t in tokens if matches_filter(t, token_filter)]


def group_by_top_level(
    tokens: Iterable[TransformedToken],
) -> dict[str, list[TransformedToken]]:
    """Group by first path segment, keeping first-seen group order."""
    groups: dict[str, list[TransformedToken]] = {}
    for token in tokens:
        key = token.path[0] if token.path else "other"
        groups.setdefault(key, []).append(token)
    return groups


def capitalize(text: str) -> str:
    """Upper-case only the first character (``borderRadius`` -> ``BorderRadius``)."""
    return text[:1].upper() + text[1:]


def escape_html(text: Any) -> str:
    """Escape ``& < > " '`` for element content and attribute values."""
    if text is None or text == "":
        return ""
    return "".join(_HTML_ESCAPES.get(ch, ch) for ch in str(text))


def leading_number(value: Any) -> float | None:
    """Leading numeric magnitude of a value (``"1.500rem"`` -> ``1.5``)."""
    match = _LEADING_NUMBER.match(str(value)) if value is not None else None
    if not match:
        return None
    try:
        return float(match.group(1))
    except ValueError:
        return None


def nest_values(tokens: Iterable[TransformedToken]) -> dict[str, Any]:
    """Rebuild the path hierarchy with final values at the leaves."""
    root: dict[str, Any] = {}
    for token in tokens:
        node = root
        for segment in token.path[:-1]:
            child = node.get(segment)
            if not isinstance(child, dict):
                child = {}
                node[segment] = child
            node = child
        node[token.path[-1]] = token.value
    return root


def comment_for(token: TransformedToken) -> str | None:
    """Comment text a platform format should attach, if any."""
    comment = token.comment
    if not comment:
        return None
    return " ".join(str(comment).split())
