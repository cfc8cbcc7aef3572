"""
tokensmith - design token pipeline.

Adapts design-tool style payloads into a canonical token tree, runs
per-platform transform pipelines, and renders stylesheets, code, data,
documentation, and mobile resources.
"""

from ._version import get_version
from .build import BuildOrchestrator, BuildResult, BuildStatus, PlatformResult
from .core.adapter import adapt_payload
from .core.config_loader import default_build_config, load_build_config
from .core.errors import (
    BuildError,
    ConfigurationError,
    FormatError,
    PayloadError,
    ReferenceResolutionError,
    TokensmithError,
    UnknownFormatError,
    UnknownTransformError,
)
from .core.ir import BuildConfig, Token, TokenTree, TokenType, TransformedToken
from .core.statistics import collect_statistics
from .formats import FormatContext
from .registry import Registry, default_registry
from .transforms import TransformKind, transform_tokens

__version__ = get_version()

__all__ = [
    "__version__",
    # Tokens
    "Token",
    "TokenTree",
    "TokenType",
    "TransformedToken",
    "adapt_payload",
    "collect_statistics",
    # Pipeline
    "Registry",
    "default_registry",
    "TransformKind",
    "transform_tokens",
    "FormatContext",
    # Build
    "BuildConfig",
    "BuildOrchestrator",
    "BuildResult",
    "BuildStatus",
    "PlatformResult",
    "default_build_config",
    "load_build_config",
    # Errors
    "TokensmithError",
    "PayloadError",
    "ConfigurationError",
    "UnknownTransformError",
    "UnknownFormatError",
    "ReferenceResolutionError",
    "FormatError",
    "BuildError",
]
