#!/usr/bin/env python3
"""
Include tree analyzer

Prints the include tree of every source file under a directory that contains
a program entry point.

Usage:
    python -m inctree.cli path/to/project --format json
"""

import json
import logging
import sys
from pathlib import Path

import click
from pydantic import ValidationError
from rich.logging import RichHandler

from inctree.config import AnalyzerConfig
from inctree.console import Console
from inctree.discovery import analyze
from inctree.render import RunSummary, render_json, render_rich, render_text
from inctree.traversal import IncludeTraversal

STATUS_HELP = """\b
Appends a status to special nodes:
  (Ext) - external include
  (C)   - circular dependency
  (!)   - file not found
"""


def setup_logging(verbose: bool) -> None:
    handler = RichHandler(
        console=Console(color=False, stderr=True).rich,
        show_time=False,
        show_path=False,
    )
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[handler],
        force=True,
    )


def load_config(directory: Path, config_path: Path | None, overrides: dict) -> AnalyzerConfig:
    """Merge defaults, the config file and command line overrides."""
    try:
        if config_path is not None:
            base = AnalyzerConfig.load_from_file(config_path)
        else:
            base = AnalyzerConfig.find_project_config(directory) or AnalyzerConfig()

        data = base.model_dump()
        data.update({key: value for key, value in overrides.items() if value})
        # The analyzed directory is always the one given on the command line.
        data["root_dir"] = directory
        return AnalyzerConfig.model_validate(data)
    except (OSError, json.JSONDecodeError, ValidationError) as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e


@click.command(epilog=STATUS_HELP)
@click.argument(
    "directory",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
)
@click.option("--marker", default=None, help="Text marking an entry point (default: 'int main(')")
@click.option(
    "--ext",
    "extensions",
    multiple=True,
    help="Implementation file extension, in companion lookup order (repeatable)",
)
@click.option(
    "--exclude-dir",
    "exclude_dirs",
    multiple=True,
    help="Directory name to skip while looking for entry points (repeatable)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="JSON config file (default: nearest inctree.json)",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json"]),
    default="text",
    show_default=True,
    help="Output format",
)
@click.option("--color/--no-color", default=False, help="Style text output per status")
@click.option("--stats", is_flag=True, help="Print a run summary to stderr")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def cli(
    directory: Path,
    marker: str | None,
    extensions: tuple[str, ...],
    exclude_dirs: tuple[str, ...],
    config_path: Path | None,
    output_format: str,
    color: bool,
    stats: bool,
    verbose: bool,
):
    """Print the include tree for every source file in DIRECTORY containing main()."""
    setup_logging(verbose)

    config = load_config(
        directory,
        config_path,
        {
            "entry_marker": marker,
            "implementation_extensions": list(extensions),
            "exclude_dirs": list(exclude_dirs),
        },
    )

    traversal = IncludeTraversal(
        config.root_dir, implementation_extensions=config.implementation_extensions
    )
    summary = RunSummary()
    trees = summary.track(analyze(config, traversal))

    if output_format == "json":
        render_json(trees, sys.stdout)
    elif color:
        render_rich(trees, Console(file=sys.stdout, color=True))
    else:
        render_text(trees, sys.stdout)

    if stats:
        summary.update_from_cache(traversal.cache)
        summary.unreadable_files = len(traversal.diagnostics)
        err_console = Console(color=False, stderr=True)
        for line in summary.lines():
            err_console.print(line)


if __name__ == "__main__":
    cli()
