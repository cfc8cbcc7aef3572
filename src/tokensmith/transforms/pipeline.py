"""
Applying transforms to a token list.

Tokens are processed in the tree's depth-first insertion order, and each
token runs through the transforms in group order:

- name transforms replace the display name
- value transforms replace the rendered value
- attribute transforms merge shallowly into the attribute bag

Non-transitive value transforms skip values of the form ``{dot.path}``.
Once every token has been through the group, remaining aliases are unwound
by substituting the referenced token's final value and re-running the
transitive value transforms, so no alias reaches a format.

Naming and categorization transforms are idempotent. Unit conversions are
not; each token records the value transforms already applied to it and the
pipeline never applies the same one twice.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import Any

from ..core.errors import make_reference_error
from ..core.ir.tokens import Token, TransformedToken
from .registry import Transform, TransformKind

logger = logging.getLogger(__name__)

_REFERENCE_RE = re.compile(r"^\{([^{}\s]+)\}$")
_MAX_ALIAS_DEPTH = 32


def is_reference(value: Any) -> bool:
    """Whether ``value`` is an alias like ``{colors.primary.500}``."""
    return isinstance(value, str) and bool(_REFERENCE_RE.match(value))


def reference_path(value: str) -> tuple[str, ...]:
    """``"{colors.primary.500}"`` -> ``("colors", "primary", "500")``."""
    match = _REFERENCE_RE.match(value)
    if not match:
        raise ValueError(f"Not a token reference: {value!r}")
    return tuple(match.group(1).split("."))


def apply_transform(
    transform: Transform, token: TransformedToken, options: dict[str, Any]
) -> None:
    """Apply one transform to one token in place, honouring its filter."""
    if not transform.matches(token):
        return

    if transform.kind == TransformKind.NAME:
        token.name = str(transform.transform(token, options))
    elif transform.kind == TransformKind.VALUE:
        if transform.name in token.applied:
            return
        if is_reference(token.value) and not transform.transitive:
            return
        token.value = str(transform.transform(token, options))
        token.applied.append(transform.name)
    else:
        update = transform.transform(token, options) or {}
        token.attributes = {**token.attributes, **update}


def transform_tokens(
    tokens: Iterable[Token | TransformedToken],
    transforms: list[Transform],
    options: dict[str, Any] | None = None,
    *,
    platform: str | None = None,
) -> list[TransformedToken]:
    """
    Run a transform pipeline over a token list.

    Args:
        tokens: Canonical tokens (or an already transformed list)
        transforms: Resolved transforms in application order
        options: Platform options (``prefix``, ``baseFontSize``, ...)
        platform: Platform name, for error context

    Returns:
        New TransformedToken list in input order; inputs are not modified

    Raises:
        ReferenceResolutionError: If an alias is dangling or circular
    """
    opts = dict(options or {})
    working = [
        item.copy() if isinstance(item, TransformedToken) else TransformedToken.from_token(item)
        for item in tokens
    ]

    for token in working:
        for transform in transforms:
            apply_transform(transform, token, opts)

    _unwind_aliases(working, transforms, opts, platform)
    return working


def _unwind_aliases(
    tokens: list[TransformedToken],
    transforms: list[Transform],
    options: dict[str, Any],
    platform: str | None,
) -> None:
    """Replace every remaining alias with its target's final value."""
    by_path = {token.path: token for token in tokens}
    transitive = [t for t in transforms if t.transitive and t.kind == TransformKind.VALUE]

    def resolve(token: TransformedToken, chain: tuple[tuple[str, ...], ...]) -> str:
        if not is_reference(token.value):
            return token.value
        if len(chain) > _MAX_ALIAS_DEPTH:
            raise make_reference_error("Alias chain too deep", token.path, platform)
        target_path = reference_path(token.value)
        if target_path in chain or target_path == token.path:
            cycle = " -> ".join(".".join(p) for p in (*chain, token.path, target_path))
            raise make_reference_error(f"Circular reference: {cycle}", token.path, platform)
        target = by_path.get(target_path)
        if target is None:
            raise make_reference_error(
                f"Reference {token.value} does not point at a token", token.path, platform
            )
        return resolve(target, (*chain, token.path))

    for token in tokens:
        if not is_reference(token.value):
            continue
        logger.debug("Unwinding alias %s -> %s", ".".join(token.path), token.value)
        token.value = resolve(token, ())
        for transform in transitive:
            # Transitive transforms re-run on the substituted value
            if transform.matches(token):
                token.value = str(transform.transform(token, options))
