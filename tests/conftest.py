"""Shared pytest fixtures for tokensmith tests."""

from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path
from typing import Any

import pytest

from tokensmith.core.adapter import adapt_payload
from tokensmith.core.ir import Token, TokenTree, TokenType
from tokensmith.formats import FormatContext
from tokensmith.registry import Registry, default_registry

GENERATED_AT = datetime(2024, 1, 15, 12, 0, tzinfo=UTC)


@pytest.fixture
def examples_dir() -> Path:
    """Return path to the repository examples directory."""
    return Path(__file__).parent.parent / "examples"


@pytest.fixture
def sample_tokens_path(examples_dir: Path) -> Path:
    return examples_dir / "sample-tokens.json"


@pytest.fixture
def raw_payload() -> dict[str, Any]:
    """A small provider payload covering every style kind."""
    return {
        "name": "Brand Library",
        "version": "42",
        "lastModified": "2024-01-10T09:00:00Z",
        "styles": {
            "colors": [
                {
                    "key": "c1",
                    "name": "primary/500",
                    "description": "Primary brand color",
                    "color": {"r": 1, "g": 0, "b": 0, "a": 1},
                },
                {
                    "key": "c2",
                    "name": "primary/overlay",
                    "color": {"r": 0, "g": 0, "b": 1, "a": 0.5},
                },
                {
                    "key": "c3",
                    "name": "button/hover",
                    "color": {"r": 0.2, "g": 0.4, "b": 0.6},
                },
            ],
            "text": [
                {
                    "key": "t1",
                    "name": "Heading/XL",
                    "fontFamily": "Inter",
                    "fontSize": 24,
                    "fontWeight": 700,
                    "lineHeightPx": 32,
                },
            ],
            "effects": [
                {
                    "key": "e1",
                    "name": "elevation/card",
                    "effects": [
                        {
                            "type": "DROP_SHADOW",
                            "offset": {"x": 0, "y": 2},
                            "radius": 4,
                            "spread": 0,
                            "color": {"r": 0, "g": 0, "b": 0, "a": 0.25},
                        }
                    ],
                },
            ],
        },
    }


@pytest.fixture
def token_tree(raw_payload: dict[str, Any]) -> TokenTree:
    """The adapted tree of ``raw_payload``."""
    return adapt_payload(raw_payload)


@pytest.fixture
def registry() -> Registry:
    """A fresh registry with every built-in transform and format."""
    return default_registry()


@pytest.fixture
def generated_at() -> datetime:
    return GENERATED_AT


@pytest.fixture
def format_context(generated_at: datetime) -> FormatContext:
    return FormatContext(generated_at=generated_at)


@pytest.fixture
def make_token():
    """Factory for canonical tokens."""

    def _make(
        *path: str,
        value: str = "#FF0000",
        type: TokenType = TokenType.COLOR,
        **kwargs: Any,
    ) -> Token:
        return Token(path=path, type=type, value=value, **kwargs)

    return _make
