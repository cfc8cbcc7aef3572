"""
Per-run registry of transforms, transform groups, and formats.

A ``Registry`` is an ordinary object: build one per pipeline run (or share
one explicitly) instead of mutating process-wide state.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .core.errors import UnknownTransformError
from .core.ir.config import PlatformConfig
from .formats import Format, FormatRegistry, register_builtin_formats
from .transforms import Transform, TransformRegistry, register_builtin_transforms


@dataclass
class ResolvedPlatform:
    """A platform with every name in its configuration looked up."""

    name: str
    config: PlatformConfig
    transforms: list[Transform]
    formats: list[Format]


@dataclass
class Registry:
    """Transforms, groups, and formats available to a build."""

    transforms: TransformRegistry = field(default_factory=TransformRegistry)
    formats: FormatRegistry = field(default_factory=FormatRegistry)

    def resolve_platform(self, name: str, config: PlatformConfig) -> ResolvedPlatform:
        """
        Look up every transform, group and format a platform names.

        Raises:
            UnknownTransformError: For an unregistered transform or group
            UnknownFormatError: For an unregistered format
        """
        names: list[str] = []
        if config.transform_group:
            names.extend(self.transforms.group(config.transform_group))
        names.extend(config.transforms or [])
        if not names:
            raise UnknownTransformError(f"Platform '{name}' resolves to no transforms")
        transforms = self.transforms.resolve(names)
        formats = [self.formats.get(file.format) for file in config.files]
        return ResolvedPlatform(name=name, config=config, transforms=transforms, formats=formats)


def default_registry() -> Registry:
    """A fresh registry holding every built-in transform, group, and format."""
    registry = Registry()
    register_builtin_transforms(registry.transforms)
    register_builtin_formats(registry.formats)
    return registry
