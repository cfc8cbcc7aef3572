"""
tokensmith CLI.

Commands:
- build: Adapt a payload and render every configured platform
- stats: Count the tokens a payload adapts to
- sample: Convert a sample token file into a provider payload

Environment:
    LOG_LEVEL - Logging level (default: WARNING)
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ._version import get_version
from .build import BuildOrchestrator, BuildResult, BuildStatus
from .core.adapter import adapt_payload
from .core.config_loader import load_build_config, load_project_config
from .core.errors import ConfigurationError, TokensmithError
from .core.ir.config import BuildConfig
from .core.ir.tokens import TokenTree
from .core.sample import load_payload, load_sample_payload
from .core.statistics import collect_statistics
from .registry import default_registry

app = typer.Typer(
    help="Design token pipeline: provider styles to platform artifacts.",
    no_args_is_help=True,
)

console = Console()
err_console = Console(stderr=True)

_STATUS_STYLES = {
    BuildStatus.SUCCEEDED: "green",
    BuildStatus.PARTIAL: "yellow",
    BuildStatus.FAILED: "red",
}


def _configure_logging() -> None:
    log_level = os.getenv("LOG_LEVEL", "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.WARNING),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def version_callback(value: bool) -> None:
    if value:
        typer.echo(f"tokensmith {get_version()}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool | None = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """tokensmith CLI main callback for global options."""
    _configure_logging()


# =============================================================================
# Helpers
# =============================================================================


def _fail(message: str) -> typer.Exit:
    err_console.print(f"[red]Error:[/red] {escape(message)}")
    return typer.Exit(code=1)


def _load_config(config_path: Path | None) -> BuildConfig:
    if config_path is not None:
        return load_build_config(config_path)
    return load_project_config(Path.cwd())


def _load_tree(
    payloads: list[Path] | None,
    samples: list[Path] | None,
    config: BuildConfig | None = None,
) -> TokenTree:
    """Adapt every payload and sample file into one tree; later files win."""
    sources = [load_payload(path) for path in payloads or []]
    sources.extend(load_sample_payload(path) for path in samples or [])
    if not sources and config is not None:
        sources = [load_payload(Path(path)) for path in config.source]
    if not sources:
        raise ConfigurationError(
            "No token source given. Use --payload, --sample, or list files under 'source'."
        )

    if len(sources) == 1:
        return adapt_payload(sources[0])

    merged = TokenTree()
    for source in sources:
        tree = adapt_payload(source)
        merged.metadata.update(tree.metadata)
        for token in tree.flatten():
            merged.set(token.path, token)
    return merged


def _print_build_result(result: BuildResult) -> None:
    table = Table(title="Build")
    table.add_column("Platform", style="cyan")
    table.add_column("Tokens", justify="right")
    table.add_column("Files")
    table.add_column("Status")

    for platform in result.platforms:
        status = "[green]ok[/green]" if platform.success else "[red]failed[/red]"
        files = "\n".join(platform.artifacts) or "-"
        table.add_row(escape(platform.name), str(platform.token_count), files, status)

    console.print(table)
    for platform in result.platforms:
        for error in platform.errors:
            err_console.print(f"[red]{escape(platform.name)}:[/red] {escape(error)}")

    style = _STATUS_STYLES[result.status]
    console.print(f"[{style}]{result.summary()}[/{style}]")


# =============================================================================
# Commands
# =============================================================================


@app.command("build")
def build_command(
    payload: list[Path] | None = typer.Option(
        None, "--payload", "-p", help="Provider payload JSON file (repeatable)"
    ),
    sample: list[Path] | None = typer.Option(
        None, "--sample", "-s", help="Sample token JSON file used instead of a payload"
    ),
    config: Path | None = typer.Option(
        None, "--config", "-c", help="Build configuration (default: ./tokensmith.yaml)"
    ),
    output: Path = typer.Option(Path("build"), "--output", "-o", help="Output directory"),
    platform: list[str] | None = typer.Option(
        None, "--platform", help="Only build these platforms (repeatable)"
    ),
) -> None:
    """Render every configured platform from a payload.

    Examples:
        tokensmith build --sample examples/sample-tokens.json
        tokensmith build -p figma.json -c tokensmith.yaml -o dist
        tokensmith build -p figma.json --platform css --platform ios
    """
    try:
        build_config = _load_config(config)
        tree = _load_tree(payload, sample, build_config)
    except TokensmithError as e:
        raise _fail(str(e)) from e

    orchestrator = BuildOrchestrator(default_registry(), build_config)
    result = orchestrator.build(tree, output_dir=output, platforms=platform or None)
    _print_build_result(result)

    if not result.success:
        raise typer.Exit(code=1)


@app.command("stats")
def stats_command(
    payload: list[Path] | None = typer.Option(
        None, "--payload", "-p", help="Provider payload JSON file"
    ),
    sample: list[Path] | None = typer.Option(None, "--sample", "-s", help="Sample token JSON file"),
    as_json: bool = typer.Option(False, "--json", help="Print statistics as JSON"),
) -> None:
    """Show how many tokens a payload adapts to, by category and type."""
    try:
        tree = _load_tree(payload, sample)
    except TokensmithError as e:
        raise _fail(str(e)) from e

    stats = collect_statistics(tree)
    if as_json:
        typer.echo(json.dumps(stats.to_dict(), indent=2))
        return

    console.print(f"[bold]Total tokens:[/bold] {stats.total}")
    for title, counts in (("Category", stats.by_category), ("Type", stats.by_type)):
        table = Table(title=f"By {title.lower()}")
        table.add_column(title, style="cyan")
        table.add_column("Count", justify="right")
        for key, count in counts.items():
            table.add_row(key, str(count))
        console.print(table)


@app.command("sample")
def sample_command(
    source: Path = typer.Argument(..., help="Sample token JSON file"),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the payload here instead of stdout"
    ),
) -> None:
    """Convert a sample token file into a provider-shaped payload."""
    try:
        data = load_sample_payload(source)
    except TokensmithError as e:
        raise _fail(str(e)) from e

    text = json.dumps(data, indent=2)
    if output is None:
        typer.echo(text)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(text + "\n", encoding="utf-8")
    styles = data["styles"]
    counts = ", ".join(f"{len(styles[kind])} {kind}" for kind in ("colors", "text", "effects"))
    console.print(f"[green]Wrote[/green] {output} ({counts})")


def main() -> None:
    app(standalone_mode=True)


if __name__ == "__main__":
    main()
