"""Tests for CLI commands."""

from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from tokensmith.cli import app


@pytest.fixture
def cli_runner():
    """Return a CLI test runner."""
    return CliRunner()


@pytest.fixture
def project(tmp_path: Path, monkeypatch) -> Path:
    """An empty project directory as the working directory."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


class TestBuild:
    def test_build_sample_with_defaults(self, cli_runner, project, sample_tokens_path):
        result = cli_runner.invoke(
            app, ["build", "--sample", str(sample_tokens_path), "-o", str(project / "dist")]
        )

        assert result.exit_code == 0, result.output
        assert "Built 8 platform(s)" in result.output
        css = (project / "dist" / "css" / "variables.css").read_text()
        assert "--colors-primary-500: #2196F3;" in css
        assert (project / "dist" / "ios" / "TokensmithColor.swift").exists()
        assert (project / "dist" / "docs" / "tokens-documentation.html").exists()

    def test_build_with_config_and_platform(
        self, cli_runner, project, sample_tokens_path, examples_dir
    ):
        result = cli_runner.invoke(
            app,
            [
                "build",
                "-s",
                str(sample_tokens_path),
                "-c",
                str(examples_dir / "tokensmith.yaml"),
                "-o",
                str(project / "out"),
                "--platform",
                "ios",
            ],
        )

        assert result.exit_code == 0, result.output
        swift = (project / "out" / "ios" / "BrandColor.swift").read_text()
        assert "public class BrandColor {" in swift
        assert not (project / "out" / "css").exists()

    def test_build_payload(self, cli_runner, project, raw_payload):
        payload = project / "figma.json"
        payload.write_text(json.dumps(raw_payload))

        result = cli_runner.invoke(app, ["build", "-p", str(payload)])

        assert result.exit_code == 0, result.output
        assert (project / "build" / "json" / "tokens-flat.json").exists()

    def test_build_sources_from_config(self, cli_runner, project, raw_payload):
        (project / "figma.json").write_text(json.dumps(raw_payload))
        (project / "tokensmith.yaml").write_text(
            "source: [figma.json]\n"
            "platforms:\n"
            "  css:\n"
            "    transformGroup: css\n"
            "    files:\n"
            "      - destination: variables.css\n"
            "        format: css/variables\n"
        )

        result = cli_runner.invoke(app, ["build"])

        assert result.exit_code == 0, result.output
        assert (project / "build" / "variables.css").exists()

    def test_no_source(self, cli_runner, project):
        result = cli_runner.invoke(app, ["build"])

        assert result.exit_code == 1
        assert "No token source given" in result.output

    def test_invalid_config(self, cli_runner, project, sample_tokens_path):
        (project / "tokensmith.yaml").write_text("platforms:\n  css:\n    files: []\n")

        result = cli_runner.invoke(app, ["build", "-s", str(sample_tokens_path)])

        assert result.exit_code == 1
        assert "Invalid build configuration" in result.output

    def test_failed_platform_exits_nonzero(self, cli_runner, project, sample_tokens_path):
        (project / "tokensmith.yaml").write_text(
            "platforms:\n"
            "  css:\n"
            "    transformGroup: css\n"
            "    files:\n"
            "      - destination: variables.css\n"
            "        format: css/variables\n"
            "  broken:\n"
            "    transformGroup: nope\n"
        )

        result = cli_runner.invoke(app, ["build", "-s", str(sample_tokens_path)])

        assert result.exit_code == 1
        assert (project / "build" / "variables.css").exists()


class TestStats:
    def test_stats_json(self, cli_runner, sample_tokens_path):
        result = cli_runner.invoke(app, ["stats", "--sample", str(sample_tokens_path), "--json"])

        assert result.exit_code == 0, result.output
        stats = json.loads(result.stdout)
        assert stats["total"] == 28
        assert stats["byCategory"] == {"colors": 15, "typography": 10, "effects": 3}

    def test_stats_table(self, cli_runner, sample_tokens_path):
        result = cli_runner.invoke(app, ["stats", "-s", str(sample_tokens_path)])

        assert result.exit_code == 0, result.output
        assert "Total tokens: 28" in result.output

    def test_stats_missing_file(self, cli_runner, tmp_path: Path):
        result = cli_runner.invoke(app, ["stats", "-p", str(tmp_path / "missing.json")])

        assert result.exit_code == 1


class TestSample:
    def test_sample_to_stdout(self, cli_runner, sample_tokens_path):
        result = cli_runner.invoke(app, ["sample", str(sample_tokens_path)])

        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["name"] == "Design System Tokens"
        assert len(payload["styles"]["colors"]) == 15

    def test_sample_to_file(self, cli_runner, tmp_path: Path, sample_tokens_path):
        output = tmp_path / "payload" / "figma.json"
        result = cli_runner.invoke(app, ["sample", str(sample_tokens_path), "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert json.loads(output.read_text())["styles"]["effects"]


def test_version(cli_runner):
    result = cli_runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert result.output.startswith("tokensmith ")
