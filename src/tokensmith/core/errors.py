"""
Error types for tokensmith adaptation, transformation, and rendering.
"""

from dataclasses import dataclass
from typing import Optional


class TokensmithError(Exception):
    """Base exception for all tokensmith errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}: {self.message}"
        return self.message


class PayloadError(TokensmithError):
    """
    Raised when a provider payload cannot be read at all.

    Individual malformed style records never raise; they are skipped.
    Examples:
    - Payload is not a JSON object
    - Payload file missing or unreadable
    """

    pass


class ConfigurationError(TokensmithError):
    """
    Raised when a build configuration is invalid.

    Examples:
    - Malformed YAML
    - Platform without transforms or files
    - Reference to an unregistered transform, group, or format
    """

    pass


class UnknownTransformError(ConfigurationError):
    """Raised when a transform or transform group name is not registered."""

    pass


class UnknownFormatError(ConfigurationError):
    """Raised when a format name is not registered."""

    pass


class ReferenceResolutionError(TokensmithError):
    """
    Raised when an alias value cannot be unwound.

    Examples:
    - Reference to a path that holds no token
    - Circular reference chain
    """

    pass


class FormatError(TokensmithError):
    """Raised when a format fails to produce an artifact."""

    pass


class BuildError(TokensmithError):
    """Raised when a platform build fails outright."""

    pass


@dataclass
class ErrorContext:
    """
    Where in a build an error occurred.

    Attributes:
        platform: Platform name from the build configuration
        destination: Output file the platform was rendering
        token_path: Path of the token being processed
    """

    platform: str | None = None
    destination: str | None = None
    token_path: tuple[str, ...] | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "platform css -> variables.css at colors.primary"
        """
        parts: list[str] = []
        if self.platform:
            parts.append(f"platform {self.platform}")
        if self.destination:
            parts.append(f"-> {self.destination}")
        if self.token_path:
            parts.append(f"at {'.'.join(self.token_path)}")
        return " ".join(parts) or "<unknown>"


def make_reference_error(
    message: str,
    token_path: tuple[str, ...],
    platform: str | None = None,
) -> ReferenceResolutionError:
    """
    Helper to create a ReferenceResolutionError with context.

    Args:
        message: Error description
        token_path: Path of the token holding the reference
        platform: Platform being built, if known

    Returns:
        ReferenceResolutionError with context
    """
    context = ErrorContext(platform=platform, token_path=token_path)
    return ReferenceResolutionError(message, context)
