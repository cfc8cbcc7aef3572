"""
Transform registry, built-in transforms, and the transform pipeline.
"""

from .builtins import BUILTIN_GROUPS, register_builtin_transforms
from .pipeline import is_reference, reference_path, transform_tokens
from .registry import Transform, TransformKind, TransformRegistry

__all__ = [
    "BUILTIN_GROUPS",
    "Transform",
    "TransformKind",
    "TransformRegistry",
    "is_reference",
    "reference_path",
    "register_builtin_transforms",
    "transform_tokens",
]
