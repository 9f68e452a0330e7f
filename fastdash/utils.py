"""Shared console helpers for the Fast Dashboard manager.

All user-facing output goes through the module-level Rich ``console``. The
scaffolder components never print; they return report models which the CLI
renders with :func:`print_report`.
"""

from __future__ import annotations

import re
import stat
from pathlib import Path
from typing import Protocol

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# File-system helpers
# ---------------------------------------------------------------------------


def make_executable(path: str | Path) -> None:
    """Set the executable bit on a file for user, group and others."""
    file_path = Path(path)
    current = file_path.stat().st_mode
    file_path.chmod(current | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)


# ---------------------------------------------------------------------------
# Rich output helpers
# ---------------------------------------------------------------------------


class Report(Protocol):
    """Anything that can render itself as tagged report lines."""

    def messages(self) -> list[str]: ...


_TAG_STYLES: dict[str, str] = {
    "SUCCESS": "bold green",
    "INFO": "cyan",
    "WARNING": "bold yellow",
    "ERROR": "bold red",
    "ACTION REQUIRED": "bold magenta",
}

_TAG_RE = re.compile(r"^\[(?P<tag>[A-Z ]+)\](?P<rest>.*)$", re.DOTALL)


def style_message(message: str) -> str:
    """Colour the leading ``[TAG]`` of a report line with Rich markup."""
    match = _TAG_RE.match(message)
    if not match:
        return escape(message)
    tag = match.group("tag")
    style = _TAG_STYLES.get(tag)
    if style is None:
        return escape(message)
    return f"[{style}]\\[{tag}][/{style}]{escape(match.group('rest'))}"


def print_header(title: str) -> None:
    """Print a full-width rule with *title*."""
    console.print()
    console.print(Rule(f"[bold bright_cyan] {title} [/bold bright_cyan]", style="bright_cyan"))
    console.print()


def print_report(report: Report) -> None:
    """Print every line of a scaffolder report."""
    for line in report.messages():
        console.print(style_message(line), highlight=False)


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print a two-column key/value summary table."""
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")

    for key, value in data.items():
        table.add_row(key, str(value))

    console.print(table)
    console.print()


def print_success(message: str) -> None:
    """Print a green success message."""
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    """Print a red error message."""
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    """Print a yellow warning message."""
    console.print(f"[bold yellow]{message}[/bold yellow]")


def print_info(message: str) -> None:
    """Print a cyan informational message."""
    console.print(f"[cyan]{message}[/cyan]")
