"""
Canonical token model.

A ``TokenTree`` maps path segments to nested trees or terminal ``Token``
objects. The tree is built once per pipeline run by the source adapter and
is read-only while platforms render from it.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

logger = logging.getLogger(__name__)

# =============================================================================
# Enums
# =============================================================================


class TokenType(StrEnum):
    """Closed set of token types."""

    COLOR = "color"
    DIMENSION = "dimension"
    FONT_FAMILY = "fontFamily"
    FONT_SIZE = "fontSize"
    FONT_WEIGHT = "fontWeight"
    LINE_HEIGHT = "lineHeight"
    SHADOW = "shadow"
    NUMBER = "number"
    STRING = "string"
    UNKNOWN = "unknown"


# =============================================================================
# Token
# =============================================================================


class Token(BaseModel):
    """A single normalized design token."""

    model_config = ConfigDict(frozen=True)

    path: tuple[str, ...] = Field(description="Identifier segments from the tree root")
    type: TokenType = Field(default=TokenType.UNKNOWN)
    value: str = Field(description="Canonical value (hex color, '<n>px', CSS shadow, ...)")
    original_value: str | None = Field(
        default=None, description="Value before any transform, kept for documentation"
    )
    alpha: float | None = Field(
        default=None, ge=0.0, le=1.0, description="Separate alpha channel for colors"
    )
    description: str | None = None
    source_key: str | None = Field(default=None, description="Provider style key")
    source_name: str | None = Field(default=None, description="Provider style name")
    attributes: dict[str, Any] = Field(default_factory=dict)

    @field_validator("path")
    @classmethod
    def _non_empty_segments(cls, v: tuple[str, ...]) -> tuple[str, ...]:
        if not v:
            raise ValueError("token path must have at least one segment")
        if any(not segment for segment in v):
            raise ValueError(f"token path has an empty segment: {v!r}")
        return v

    @model_validator(mode="before")
    @classmethod
    def _default_original_value(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("original_value") is None and "value" in data:
            data = {**data, "original_value": data["value"]}
        return data

    @property
    def dotted_path(self) -> str:
        return ".".join(self.path)

    def rebased(self, prefix: tuple[str, ...]) -> Token:
        """Copy of this token with ``prefix`` prepended to its path."""
        return self.model_copy(update={"path": prefix + self.path})


# =============================================================================
# Tree
# =============================================================================

Node = Union["TokenTree", Token]


class TokenTree:
    """Ordered mapping of path segment to subtree or token.

    A node is either a container or a token, never both. Writing a token
    where a container (or a container where a token) already sits replaces
    the earlier node; last write wins and the collision is logged.
    """

    def __init__(self, metadata: dict[str, Any] | None = None) -> None:
        self._children: dict[str, Node] = {}
        self.metadata: dict[str, Any] = dict(metadata or {})

    # -- mapping protocol --------------------------------------------------

    def __contains__(self, key: object) -> bool:
        return key in self._children

    def __getitem__(self, key: str) -> Node:
        return self._children[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._children)

    def __len__(self) -> int:
        """Number of terminal tokens in the tree."""
        return sum(1 for _ in self.flatten())

    def __bool__(self) -> bool:
        return bool(self._children)

    def items(self) -> Iterator[tuple[str, Node]]:
        return iter(self._children.items())

    # -- path access -------------------------------------------------------

    def set(self, path: tuple[str, ...], token: Token) -> None:
        """Place ``token`` at ``path``; last write wins on collision."""
        if not path:
            raise ValueError("cannot set a token at an empty path")
        node = self
        for depth, segment in enumerate(path[:-1]):
            child = node._children.get(segment)
            if isinstance(child, Token):
                logger.warning(
                    "Token at %s replaced by group for %s",
                    ".".join(path[: depth + 1]),
                    ".".join(path),
                )
                child = None
            if child is None:
                child = TokenTree()
                node._children[segment] = child
            node = child

        leaf = path[-1]
        existing = node._children.get(leaf)
        if isinstance(existing, TokenTree):
            logger.warning("Group at %s replaced by token", ".".join(path))
        elif isinstance(existing, Token):
            logger.warning(
                "Duplicate token path %s: %r overwrites %r",
                ".".join(path),
                token.source_name or token.value,
                existing.source_name or existing.value,
            )
        node._children[leaf] = token

    def get(self, path: tuple[str, ...] | list[str]) -> Node | None:
        """Node at ``path`` or None."""
        node: Node = self
        for segment in path:
            if not isinstance(node, TokenTree) or segment not in node._children:
                return None
            node = node._children[segment]
        return node

    def get_token(self, path: tuple[str, ...] | list[str]) -> Token | None:
        node = self.get(path)
        return node if isinstance(node, Token) else None

    def graft(self, prefix: tuple[str, ...], subtree: TokenTree) -> None:
        """Insert every token of ``subtree`` beneath ``prefix``.

        Tokens are re-rooted so each terminal path equals the concatenation
        of its ancestor keys in this tree.
        """
        for token in subtree.flatten():
            rebased = token.rebased(prefix)
            self.set(rebased.path, rebased)

    # -- traversal ---------------------------------------------------------

    def flatten(self) -> Iterator[Token]:
        """Depth-first traversal in insertion order."""
        for child in self._children.values():
            if isinstance(child, Token):
                yield child
            else:
                yield from child.flatten()

    def to_dict(self) -> dict[str, Any]:
        """Nested JSON-ready representation."""
        out: dict[str, Any] = {}
        for key, child in self._children.items():
            if isinstance(child, Token):
                out[key] = child.model_dump(mode="json", exclude_none=True, exclude={"path"})
            else:
                out[key] = child.to_dict()
        return out

    def __repr__(self) -> str:
        return f"TokenTree({list(self._children)!r}, tokens={len(self)})"


# =============================================================================
# Transformed token
# =============================================================================


@dataclass
class TransformedToken:
    """Per-platform working copy of a token.

    Transforms rewrite ``name``, ``value`` and ``attributes``; the source
    ``Token`` is never touched.
    """

    token: Token
    name: str
    value: str
    attributes: dict[str, Any] = field(default_factory=dict)
    applied: list[str] = field(default_factory=list)

    @classmethod
    def from_token(cls, token: Token) -> TransformedToken:
        return cls(
            token=token,
            name="-".join(token.path),
            value=token.value,
            attributes=dict(token.attributes),
        )

    @property
    def path(self) -> tuple[str, ...]:
        return self.token.path

    @property
    def type(self) -> TokenType:
        return self.token.type

    @property
    def alpha(self) -> float | None:
        return self.token.alpha

    @property
    def original_value(self) -> str | None:
        return self.token.original_value

    @property
    def description(self) -> str | None:
        return self.token.description

    @property
    def comment(self) -> str | None:
        return self.attributes.get("comment")

    def copy(self) -> TransformedToken:
        return TransformedToken(
            token=self.token,
            name=self.name,
            value=self.value,
            attributes=dict(self.attributes),
            applied=list(self.applied),
        )
