"""
Cookfetch CLI - Main application entry point.

This module sets up the Typer CLI application with all commands.
"""

import logging
import sys
from pathlib import Path

import typer
from rich.console import Console

from cookfetch import __version__
from cookfetch.cli import configure, fetch
from cookfetch.core.config.env import load_layered_env

app = typer.Typer(
    name="cookfetch",
    help="Fetch cookbook checkouts and assemble a combined chef-solo tree",
    no_args_is_help=True,
    context_settings={"help_option_names": ["--help", "-h"]},
)

console = Console()


def setup_logging(debug: bool = False) -> None:
    """
    Configure logging for cookfetch commands.

    Args:
        debug: If True, enable DEBUG level logging
    """
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


@app.callback()
def main(
    ctx: typer.Context,
    debug: bool = typer.Option(
        False,
        "--debug",
        help="Enable debug output with detailed logging",
    ),
    project_dir: Path | None = typer.Option(
        None,
        "--project-dir",
        "-C",
        help="Project directory holding checkouts/ and combined/ (defaults to cwd)",
        file_okay=False,
    ),
) -> None:
    """
    Cookfetch - cookbook checkout fetcher.

    Reads a remote manifest of cookbook repositories, keeps a checkout of
    each at its pinned branch, and links their roles, nodes, handlers and
    data bags into one combined tree for chef-solo.

    Configuration lives in .cookfetch.json (url, disable, verify_tls, ...)
    and can be overridden with COOKFETCH_URL and COOKFETCH_DISABLE.
    """
    setup_logging(debug)
    load_layered_env(project_dir=project_dir)

    ctx.obj = {"debug": debug, "project_dir": project_dir}


app.command(name="run")(fetch.run)
app.command(name="fetch")(fetch.fetch)
app.command(name="link")(fetch.link)
app.command(name="order")(fetch.order)
app.command(name="configure")(configure.configure)


@app.command()
def version() -> None:
    """Show cookfetch version and exit."""
    console.print(f"cookfetch version {__version__}")
    raise typer.Exit(0)


def cli_main() -> None:
    """Main CLI entry point."""
    app()


__all__ = ["app", "cli_main"]
