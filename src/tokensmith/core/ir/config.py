"""
Build configuration IR types.

Mirrors the shape of a style-dictionary style configuration: a map of
platforms, each binding a transform group (or explicit transform list) to
one or more output files.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .tokens import TokenType


class TokenFilter(BaseModel):
    """Restricts which tokens reach a platform or file.

    Every set criterion must match. ``type`` and ``category`` accept a
    single value or a list of alternatives.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    type: list[TokenType] | None = None
    category: list[str] | None = Field(
        default=None, description="Matches attributes.category set by attribute/category"
    )

    @field_validator("type", "category", mode="before")
    @classmethod
    def _listify(cls, v: Any) -> Any:
        if v is None or isinstance(v, list):
            return v
        return [v]


class FileConfig(BaseModel):
    """One rendered artifact of a platform."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    destination: str = Field(description="Path relative to the platform build path")
    format: str = Field(description="Registered format name")
    options: dict[str, Any] = Field(default_factory=dict)
    filter: TokenFilter | None = None
    class_name: str | None = Field(default=None, alias="className")

    @field_validator("destination")
    @classmethod
    def _relative_destination(cls, v: str) -> str:
        if not v or v.startswith("/") or ".." in v.replace("\\", "/").split("/"):
            raise ValueError(f"destination must be a relative path inside the build path: {v!r}")
        return v


class PlatformConfig(BaseModel):
    """A target platform: one transform pipeline, many files."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    transform_group: str | None = Field(default=None, alias="transformGroup")
    transforms: list[str] | None = Field(
        default=None, description="Explicit transform names, applied after the group"
    )
    build_path: str = Field(default="", alias="buildPath")
    options: dict[str, Any] = Field(
        default_factory=dict, description="Options visible to transforms and formats"
    )
    filter: TokenFilter | None = None
    files: list[FileConfig] = Field(default_factory=list)

    @model_validator(mode="after")
    def _has_transforms(self) -> PlatformConfig:
        if not self.transform_group and not self.transforms:
            raise ValueError("platform needs a transformGroup or a transforms list")
        return self


class BuildConfig(BaseModel):
    """Top-level build configuration."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    source: list[str] = Field(default_factory=list, description="Payload files to adapt")
    platforms: dict[str, PlatformConfig] = Field(default_factory=dict)
