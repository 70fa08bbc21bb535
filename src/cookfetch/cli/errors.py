"""
Standardized error handling and exit codes for the cookfetch CLI.

Provides consistent error messaging with actionable guidance and maps
core exceptions to exit codes.
"""

from enum import IntEnum

from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from cookfetch.core.errors import (
    ConfigurationError,
    CookfetchError,
    LinkError,
    MalformedManifestLineError,
    TransportError,
    UnsupportedVcsError,
    VcsCommandError,
)

console = Console(stderr=True)


class ExitCode(IntEnum):
    """Standard exit codes for cookfetch operations."""

    SUCCESS = 0
    """Operation completed successfully."""

    GENERAL_ERROR = 1
    """Fetch, sync or link failure."""

    USER_ERROR = 2
    """Configuration or manifest error (actionable by user)."""


def print_error(
    problem: str,
    *,
    reason: str | None = None,
    solution: str | None = None,
) -> None:
    """
    Print a standardized error message with actionable guidance.

    Args:
        problem: Brief description of what went wrong
        reason: Optional explanation of why it happened
        solution: Optional command or action to fix it
    """
    console.print(f"[red]Error:[/red] {escape(problem)}", highlight=False)

    if reason:
        console.print(f"[dim]{escape(reason)}[/dim]", highlight=False)

    if solution:
        console.print(f"[cyan]→ Try:[/cyan] {escape(solution)}", highlight=False)


def print_missing_order_file_error(order_file: str) -> None:
    """Print error when no cookbook order has been recorded yet."""
    print_error(
        f"No {order_file} file found",
        reason="The cookbook order is recorded the first time checkouts are fetched",
        solution="cookfetch fetch  # with a manifest URL configured",
    )


def handle_error(error: Exception) -> ExitCode:
    """
    Print a core error and return the exit code to use.

    Args:
        error: Exception raised by a core operation

    Returns:
        The matching ExitCode
    """
    if isinstance(error, MalformedManifestLineError):
        print_error(
            str(error),
            reason="Manifest fields cannot contain commas; quoting is not supported",
        )
        return ExitCode.USER_ERROR

    if isinstance(error, UnsupportedVcsError):
        print_error(str(error), solution="Change the entry's VCS field to 'git'")
        return ExitCode.USER_ERROR

    if isinstance(error, ConfigurationError):
        print_error(str(error))
        return ExitCode.USER_ERROR

    if isinstance(error, ValidationError):
        print_error("Invalid cookfetch or chef-solo settings", reason=str(error))
        return ExitCode.USER_ERROR

    if isinstance(error, TransportError):
        print_error(str(error), solution=f"Check that {error.url} is reachable")
        return ExitCode.GENERAL_ERROR

    if isinstance(error, VcsCommandError):
        reason = error.stderr or None
        if error.cwd:
            reason = f"in {error.cwd}: {reason}" if reason else f"in {error.cwd}"
        print_error(str(error), reason=reason)
        return ExitCode.GENERAL_ERROR

    if isinstance(error, LinkError):
        print_error(str(error), reason="The combined tree may be partially rebuilt")
        return ExitCode.GENERAL_ERROR

    if isinstance(error, CookfetchError):
        print_error(str(error))
        return ExitCode.GENERAL_ERROR

    if isinstance(error, OSError):
        problem = f"Could not access {error.filename}" if error.filename else "File system error"
        print_error(
            problem,
            reason=error.strerror or str(error),
            solution="Check that the project directory is writable",
        )
        return ExitCode.GENERAL_ERROR

    raise error
