"""
Operator-facing message sinks.

Core code reports progress and soft failures through a ``Messages`` sink
rather than printing, so a host can route them to its own UI.
"""

from __future__ import annotations

from typing import Protocol

from rich.console import Console
from rich.markup import escape


class Messages(Protocol):
    """Severity-tagged operator messages."""

    def info(self, message: str) -> None: ...

    def warn(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class ConsoleMessages:
    """Messages rendered on a rich console."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def info(self, message: str) -> None:
        self.console.print(f"[blue]{escape(message)}[/blue]", highlight=False)

    def warn(self, message: str) -> None:
        self.console.print(f"[yellow]Warning:[/yellow] {escape(message)}", highlight=False)

    def error(self, message: str) -> None:
        self.console.print(f"[red]Error:[/red] {escape(message)}", highlight=False)


class NullMessages:
    """Discards all messages."""

    def info(self, message: str) -> None:
        pass

    def warn(self, message: str) -> None:
        pass

    def error(self, message: str) -> None:
        pass
