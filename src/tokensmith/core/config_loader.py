"""
Build configuration persistence.

Reads ``tokensmith.yaml`` build configurations and provides the default
platform set used when a project has none.

Default location: {project_root}/tokensmith.yaml
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from .errors import ConfigurationError
from .ir.config import BuildConfig

logger = logging.getLogger(__name__)

CONFIG_FILE = "tokensmith.yaml"


def get_config_path(project_root: Path) -> Path:
    """Get the tokensmith.yaml file path."""
    return project_root / CONFIG_FILE


def parse_build_config(data: dict[str, Any]) -> BuildConfig:
    """Validate raw configuration data.

    Raises:
        ConfigurationError: If the data does not describe a valid build.
    """
    if not isinstance(data, dict):
        raise ConfigurationError("Build configuration must be a mapping")
    try:
        return BuildConfig.model_validate(data)
    except ValidationError as e:
        problems = "; ".join(
            f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}" for err in e.errors()
        )
        raise ConfigurationError(f"Invalid build configuration: {problems}") from e


def load_build_config(path: Path) -> BuildConfig:
    """Load a build configuration from a YAML file.

    Args:
        path: Path to the YAML file.

    Returns:
        Validated BuildConfig.

    Raises:
        ConfigurationError: If the file is missing, unreadable, or invalid.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigurationError(f"Cannot read build configuration {path}: {e}") from e

    try:
        data = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {path}: {e}") from e

    config = parse_build_config(data)
    logger.debug("Loaded %d platform(s) from %s", len(config.platforms), path)
    return config


def load_project_config(project_root: Path) -> BuildConfig:
    """Load ``tokensmith.yaml`` from a project, or the default platforms."""
    path = get_config_path(project_root)
    if path.exists():
        return load_build_config(path)
    logger.info("No %s in %s; using default platforms", CONFIG_FILE, project_root)
    return default_build_config()


def default_build_config() -> BuildConfig:
    """The stock platform set: stylesheets, code, data, docs, mobile."""
    return parse_build_config(
        {
            "platforms": {
                "css": {
                    "transformGroup": "css",
                    "buildPath": "css/",
                    "files": [
                        {
                            "destination": "variables.css",
                            "format": "css/variables",
                            "options": {"outputReferences": True, "selector": ":root"},
                        }
                    ],
                },
                "css-custom": {
                    "transformGroup": "custom/css",
                    "buildPath": "css/",
                    "options": {"prefix": "token"},
                    "files": [
                        {
                            "destination": "tokens.css",
                            "format": "css/variables",
                            "options": {"outputReferences": True, "selector": ":root"},
                        }
                    ],
                },
                "js": {
                    "transformGroup": "js",
                    "buildPath": "js/",
                    "files": [
                        {"destination": "tokens.js", "format": "javascript/es6"},
                        {"destination": "tokens.module.js", "format": "javascript/module"},
                    ],
                },
                "scss": {
                    "transformGroup": "scss",
                    "buildPath": "scss/",
                    "files": [
                        {
                            "destination": "_variables.scss",
                            "format": "scss/variables",
                            "options": {"outputReferences": True},
                        }
                    ],
                },
                "json": {
                    "transformGroup": "js",
                    "buildPath": "json/",
                    "files": [
                        {"destination": "tokens.json", "format": "json/nested"},
                        {"destination": "tokens-flat.json", "format": "json/flat"},
                    ],
                },
                "docs": {
                    "transformGroup": "js",
                    "buildPath": "docs/",
                    "files": [
                        {
                            "destination": "tokens-documentation.json",
                            "format": "json/documentation",
                        },
                        {
                            "destination": "tokens-documentation.md",
                            "format": "markdown/documentation",
                            "options": {"title": "Design Tokens Documentation"},
                        },
                        {
                            "destination": "tokens-documentation.html",
                            "format": "html/documentation",
                            "options": {"title": "Design Tokens Documentation"},
                        },
                    ],
                },
                "android": {
                    "transformGroup": "android",
                    "buildPath": "android/",
                    "files": [
                        {
                            "destination": "colors.xml",
                            "format": "android/colors",
                            "filter": {"type": "color"},
                        },
                        {
                            "destination": "dimens.xml",
                            "format": "android/dimens",
                            "filter": {"type": ["dimension", "fontSize"]},
                        },
                    ],
                },
                "ios": {
                    "transformGroup": "ios-swift",
                    "buildPath": "ios/",
                    "files": [
                        {
                            "destination": "TokensmithColor.swift",
                            "format": "ios-swift/class.swift",
                            "className": "TokensmithColor",
                            "filter": {"type": "color"},
                        }
                    ],
                },
            }
        }
    )
