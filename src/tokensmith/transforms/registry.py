"""
Transform registry.

A transform is a named pure function scoped to one of a token's name,
value, or attributes. Transform groups are ordered lists of transform
names; later transforms see the output of earlier ones on the same token.

Registering a name twice replaces the earlier transform so built-ins can
be overridden.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from ..core.errors import UnknownTransformError
from ..core.ir.tokens import TransformedToken

logger = logging.getLogger(__name__)

TransformFn = Callable[[TransformedToken, dict[str, Any]], Any]
FilterFn = Callable[[TransformedToken], bool]


class TransformKind(StrEnum):
    """What part of a token a transform rewrites."""

    NAME = "name"
    VALUE = "value"
    ATTRIBUTE = "attribute"


@dataclass(frozen=True)
class Transform:
    """
    A registered transform.

    Attributes:
        name: Registry key, e.g. ``size/px-to-rem``
        kind: Which token field the result replaces (or merges into)
        transform: ``(token, options) -> str | dict``
        filter: Optional predicate; tokens failing it pass through unchanged
        transitive: Whether the transform also runs on alias values
    """

    name: str
    kind: TransformKind
    transform: TransformFn
    filter: FilterFn | None = None
    transitive: bool = False

    def matches(self, token: TransformedToken) -> bool:
        return self.filter is None or bool(self.filter(token))


class TransformRegistry:
    """
    Registry for transforms and transform groups.

    Supports:
    - Registration (last registration wins)
    - Named, ordered transform groups
    - Lookup by name, failing fast on unknown names
    """

    def __init__(self) -> None:
        self._transforms: dict[str, Transform] = {}
        self._groups: dict[str, list[str]] = {}

    def register(
        self,
        name: str,
        kind: TransformKind | str,
        transform: TransformFn,
        filter: FilterFn | None = None,
        transitive: bool = False,
    ) -> Transform:
        """
        Register a transform, replacing any earlier one with the same name.

        Args:
            name: Transform name used by groups and platform configs
            kind: name, value, or attribute
            transform: Function computing the new name/value/attributes
            filter: Optional predicate restricting which tokens it touches
            transitive: Also run on values that reference other tokens

        Returns:
            The registered Transform
        """
        if name in self._transforms:
            logger.debug("Transform %s re-registered; previous definition replaced", name)
        entry = Transform(
            name=name,
            kind=TransformKind(kind),
            transform=transform,
            filter=filter,
            transitive=transitive,
        )
        self._transforms[name] = entry
        return entry

    def register_group(self, name: str, transforms: Iterable[str]) -> None:
        """
        Register an ordered transform group.

        Member names are resolved lazily so a group may be declared before
        (or override) the transforms it lists.
        """
        if name in self._groups:
            logger.debug("Transform group %s re-registered", name)
        self._groups[name] = list(transforms)

    def get(self, name: str) -> Transform:
        """
        Get a transform by name.

        Raises:
            UnknownTransformError: If no transform has that name
        """
        if name not in self._transforms:
            raise UnknownTransformError(
                f"Transform '{name}' is not registered. "
                f"Available transforms: {sorted(self._transforms)}"
            )
        return self._transforms[name]

    def resolve(self, names: Iterable[str]) -> list[Transform]:
        """Resolve a list of transform names, in order."""
        return [self.get(name) for name in names]

    def group(self, name: str) -> list[str]:
        """
        Get a transform group's member names.

        Raises:
            UnknownTransformError: If no group has that name
        """
        if name not in self._groups:
            raise UnknownTransformError(
                f"Transform group '{name}' is not registered. "
                f"Available groups: {sorted(self._groups)}"
            )
        return list(self._groups[name])

    def resolve_group(self, name: str) -> list[Transform]:
        """Resolve every member of a group, failing on the first unknown name."""
        return self.resolve(self.group(name))

    def has(self, name: str) -> bool:
        return name in self._transforms

    def list_transforms(self) -> list[str]:
        return list(self._transforms)

    def list_groups(self) -> list[str]:
        return list(self._groups)
