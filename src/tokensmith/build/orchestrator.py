"""
Build orchestrator.

For each configured platform: transform the token list, apply the
platform filter, then render and persist every configured file. Platforms
are independent; a failing platform is recorded and the rest still build.

Every platform's configuration is resolved before any token is processed,
so unknown transform, group, or format names fail fast.

File options overlay platform options for transforms and formats alike.
Each distinct option set gets one transform pass, shared by its files.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import StrEnum
from pathlib import Path

from ..core.errors import BuildError, ErrorContext, FormatError, TokensmithError
from ..core.ir.config import BuildConfig
from ..core.ir.tokens import TokenTree
from ..formats import FormatContext, filter_tokens
from ..registry import Registry, ResolvedPlatform
from ..transforms import transform_tokens

logger = logging.getLogger(__name__)

ArtifactWriter = Callable[[Path, str], None]


def write_artifact(path: Path, content: str) -> None:
    """Write content to a file, creating parent directories if needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


class BuildStatus(StrEnum):
    """Overall outcome of a build run."""

    SUCCEEDED = "succeeded"
    PARTIAL = "partial"
    FAILED = "failed"


@dataclass
class PlatformResult:
    """
    Result from building one platform.

    Attributes:
        name: Platform name
        artifacts: Rendered text keyed by destination (relative to build path)
        files_created: Paths written to disk
        token_count: Tokens that reached the platform after filtering
        errors: Errors that stopped (part of) the platform
    """

    name: str
    artifacts: dict[str, str] = field(default_factory=dict)
    files_created: list[Path] = field(default_factory=list)
    token_count: int = 0
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """Whether the platform built without errors."""
        return len(self.errors) == 0

    def add_error(self, error: str) -> None:
        self.errors.append(error)


@dataclass
class BuildResult:
    """Combined result of a build run."""

    platforms: list[PlatformResult] = field(default_factory=list)
    generated_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def failures(self) -> int:
        return sum(1 for p in self.platforms if not p.success)

    @property
    def status(self) -> BuildStatus:
        if not self.platforms or self.failures == len(self.platforms):
            return BuildStatus.FAILED
        if self.failures:
            return BuildStatus.PARTIAL
        return BuildStatus.SUCCEEDED

    @property
    def success(self) -> bool:
        return self.status == BuildStatus.SUCCEEDED

    @property
    def files_created(self) -> list[Path]:
        return [path for p in self.platforms for path in p.files_created]

    def get(self, name: str) -> PlatformResult | None:
        for platform in self.platforms:
            if platform.name == name:
                return platform
        return None

    def summary(self) -> str:
        total = len(self.platforms)
        if self.status == BuildStatus.SUCCEEDED:
            return f"Built {total} platform(s)"
        if self.status == BuildStatus.PARTIAL:
            return f"Built {total - self.failures}/{total} platform(s), {self.failures} failed"
        return f"All {total} platform(s) failed" if total else "No platforms configured"


class BuildOrchestrator:
    """
    Builds every platform of a configuration from one token tree.

    Example:
        orchestrator = BuildOrchestrator(default_registry(), default_build_config())
        result = orchestrator.build(adapt_payload(payload), output_dir=Path("dist"))
        if not result.success:
            ...
    """

    def __init__(
        self,
        registry: Registry,
        config: BuildConfig,
        *,
        writer: ArtifactWriter | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self.registry = registry
        self.config = config
        self.writer = writer or write_artifact
        self.clock = clock or (lambda: datetime.now(UTC))

    def build(
        self,
        tree: TokenTree,
        output_dir: Path | None = None,
        platforms: list[str] | None = None,
    ) -> BuildResult:
        """
        Build the configured platforms.

        Args:
            tree: Adapted token tree (read-only)
            output_dir: Root for build paths; artifacts stay in memory when None
            platforms: Restrict the run to these platform names

        Returns:
            BuildResult with one PlatformResult per attempted platform
        """
        result = BuildResult(generated_at=self.clock())
        selected = self._select(platforms, result)

        resolved: list[tuple[ResolvedPlatform | None, PlatformResult]] = []
        for name in selected:
            platform_result = PlatformResult(name=name)
            try:
                platform = self.registry.resolve_platform(name, self.config.platforms[name])
                resolved.append((platform, platform_result))
            except TokensmithError as e:
                logger.error("Platform %s has an invalid configuration: %s", name, e)
                platform_result.add_error(str(e))
                resolved.append((None, platform_result))

        tokens = list(tree.flatten())
        for platform, platform_result in resolved:
            result.platforms.append(platform_result)
            if platform is None:
                continue
            try:
                self._build_platform(platform, tokens, platform_result, output_dir, result)
            except TokensmithError as e:
                logger.error("Platform %s failed: %s", platform.name, e)
                platform_result.add_error(str(e))
            except Exception as e:
                logger.exception("Platform %s failed", platform.name)
                error = BuildError(str(e), ErrorContext(platform=platform.name))
                platform_result.add_error(str(error))

        logger.info(result.summary())
        return result

    def _select(self, platforms: list[str] | None, result: BuildResult) -> list[str]:
        if platforms is None:
            return list(self.config.platforms)
        selected: list[str] = []
        for name in platforms:
            if name in self.config.platforms:
                selected.append(name)
            else:
                failed = PlatformResult(name=name)
                failed.add_error(f"Platform '{name}' is not configured")
                result.platforms.append(failed)
        return selected

    def _build_platform(
        self,
        platform: ResolvedPlatform,
        tokens: list,
        platform_result: PlatformResult,
        output_dir: Path | None,
        result: BuildResult,
    ) -> None:
        config = platform.config
        passes: list[tuple[dict, list]] = []

        def transformed_for(options: dict) -> list:
            for seen, transformed in passes:
                if seen == options:
                    return transformed
            transformed = transform_tokens(
                tokens, platform.transforms, options, platform=platform.name
            )
            passes.append((options, transformed))
            return transformed

        platform_result.token_count = len(
            filter_tokens(transformed_for(dict(config.options)), config.filter)
        )

        for file_config, fmt in zip(config.files, platform.formats, strict=True):
            options = {**config.options, **file_config.options}
            if file_config.class_name:
                options.setdefault("className", file_config.class_name)
            transformed = transformed_for(options)
            platform_tokens = filter_tokens(transformed, config.filter)
            file_tokens = filter_tokens(platform_tokens, file_config.filter)
            context = FormatContext(
                options=options,
                generated_at=result.generated_at,
                all_tokens=transformed,
                platform=platform.name,
                destination=file_config.destination,
            )
            try:
                content = fmt.render(file_tokens, context)
            except Exception as e:
                raise FormatError(
                    f"Format '{fmt.name}' failed: {e}",
                    ErrorContext(platform=platform.name, destination=file_config.destination),
                ) from e

            platform_result.artifacts[file_config.destination] = content
            if output_dir is not None:
                path = output_dir / config.build_path / file_config.destination
                self.writer(path, content)
                platform_result.files_created.append(path)
                logger.debug("Wrote %s (%d tokens)", path, len(file_tokens))
