"""
Token statistics for build summaries.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field

from .ir.tokens import TokenTree


@dataclass
class TokenStatistics:
    """Counts of tokens overall, per top-level group, and per type."""

    total: int = 0
    by_category: dict[str, int] = field(default_factory=dict)
    by_type: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, object]:
        return {"total": self.total, "byCategory": self.by_category, "byType": self.by_type}


def collect_statistics(tree: TokenTree) -> TokenStatistics:
    """Count tokens; categories and types are ordered most frequent first."""
    categories: Counter[str] = Counter()
    types: Counter[str] = Counter()
    total = 0
    for token in tree.flatten():
        total += 1
        categories[token.path[0] if len(token.path) > 1 else "other"] += 1
        types[str(token.type)] += 1

    return TokenStatistics(
        total=total,
        by_category=dict(categories.most_common()),
        by_type=dict(types.most_common()),
    )
