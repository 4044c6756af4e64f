"""treefind command line.

Thin wrapper around the walker: builds a SearchConfig from options (and an
optional YAML file), pulls matches and prints one path per line.

Example:
    $ treefind src --pattern 'test_*' --extensions py
    $ treefind . -e rs,toml -d 2 --show-hidden
    $ treefind --config treefind.yaml --relative
"""

import logging
from pathlib import Path

import typer
from rich.markup import escape

from treefind import __version__
from treefind.cli_utils import (
    EXIT_CONFIG_ERROR,
    EXIT_ERROR,
    EXIT_INTERRUPTED,
    EXIT_SUCCESS,
    _error,
    _setup_logging,
    _warning,
    console,
)
from treefind.config import build_search_config
from treefind.exceptions import ConfigError
from treefind.walker import search_files

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="treefind",
    help="Breadth-first file search that respects .gitignore",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        console.print(f"treefind {__version__}")
        raise typer.Exit(code=EXIT_SUCCESS)


def _report_error(path: Path, error: OSError) -> None:
    _warning(f"{escape(str(path))}: {escape(error.strerror or str(error))}")


@app.command()
def main(
    root: Path = typer.Argument(
        None,
        help="Root directory to start the search from (default: current directory)",
        show_default=False,
    ),
    pattern: str = typer.Option(
        None,
        "--pattern",
        "-p",
        help="File name pattern; a single '*' matches any substring (default: '*')",
    ),
    max_depth: int = typer.Option(
        None,
        "--max-depth",
        "-d",
        help="Maximum depth to search (unlimited if not provided)",
    ),
    extensions: str = typer.Option(
        None,
        "--extensions",
        "-e",
        help="Only match files with these extensions (comma-separated, case-insensitive)",
    ),
    show_hidden: bool = typer.Option(
        None,
        "--show-hidden/--no-show-hidden",
        "-H",
        help="Include hidden files and directories",
        show_default=False,
    ),
    include_gitignored: bool = typer.Option(
        None,
        "--include-gitignored/--respect-gitignore",
        help="Do not read .gitignore files; include ignored paths",
        show_default=False,
    ),
    follow_symlinks: bool = typer.Option(
        None,
        "--follow-symlinks/--no-follow-symlinks",
        "-L",
        help="Descend into symlinked directories",
        show_default=False,
    ),
    relative: bool = typer.Option(
        False,
        "--relative",
        "-r",
        help="Print paths relative to the search root",
    ),
    config_file: Path = typer.Option(
        None,
        "--config",
        "-c",
        help="YAML file with default search settings",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Suppress warnings about unreadable directories",
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Find files under ROOT, breadth-first.

    Exit codes:
        0 = success (including no matches or a closed output pipe)
        1 = error while searching
        2 = invalid configuration
        130 = interrupted

    """
    _setup_logging(verbose=verbose, quiet=quiet)

    try:
        config = build_search_config(
            config_file=config_file,
            root_path=root,
            pattern=pattern,
            max_depth=max_depth,
            extensions=extensions,
            show_hidden=show_hidden,
            include_gitignored=include_gitignored,
            follow_symlinks=follow_symlinks,
        )
    except ConfigError as e:
        _error(escape(str(e)))
        raise typer.Exit(code=EXIT_CONFIG_ERROR) from None

    logger.debug("Searching with %s", config)

    on_error = None if quiet else _report_error
    base = config.root_path if config.root_path.is_dir() else config.root_path.parent
    count = 0
    try:
        for path in search_files(config, on_error=on_error):
            shown = path.relative_to(base) if relative else path
            console.print(str(shown), markup=False, emoji=False, soft_wrap=True)
            count += 1
    except KeyboardInterrupt:
        raise typer.Exit(code=EXIT_INTERRUPTED) from None
    except BrokenPipeError:
        # Reader went away (e.g. piped into head); stop quietly
        logger.debug("Output pipe closed after %d matches", count)
        raise typer.Exit(code=EXIT_SUCCESS) from None
    except OSError as e:
        _error(escape(str(e)))
        raise typer.Exit(code=EXIT_ERROR) from None

    logger.debug("Found %d matching files", count)


if __name__ == "__main__":
    app()
