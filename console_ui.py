#!/usr/bin/env python3
"""
Console UI Module using Rich

Provides styled output, a scan spinner and the yes/no confirmation prompt.
Regular output goes to stdout; errors go to a separate stderr console so
they can be told apart from the crate listing.
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.prompt import Confirm

from auxiliary import UNIT_STYLES, format_path_for_display, size_parts


class ConsoleUI:
    """Console UI handler using Rich"""

    def __init__(self, force_terminal: Optional[bool] = None):
        """Initialize consoles with optional terminal forcing"""
        self.console = Console(force_terminal=force_terminal, highlight=False)
        self.error_console = Console(force_terminal=force_terminal, highlight=False, stderr=True)

    # Basic styled output methods
    def print_success(self, message: str):
        """Print success message in green"""
        self.console.print(message, style="green")

    def print_error(self, message: str):
        """Print error message in red on stderr"""
        self.error_console.print(message, style="red bold", markup=False, soft_wrap=True)

    def print_warning(self, message: str):
        """Print warning message in yellow"""
        self.console.print(message, style="yellow")

    def print_info(self, message: str):
        """Print info message in cyan"""
        self.console.print(message, style="cyan")

    def print_progress(self, message: str):
        """Print progress message in dim white"""
        self.console.print(message, style="white dim")

    def print_plain(self, message: str):
        """Print message in plain white"""
        self.console.print(message, style="white")

    def print_separator(self, char: str = "-", length: int = 10):
        """Print a separator line"""
        self.console.print(char * length, style="dim")

    # Size listing
    def format_size_markup(self, size_bytes: int) -> str:
        """Right-aligned size with a colored unit, as rich markup"""
        value, unit = size_parts(size_bytes)
        style = UNIT_STYLES[unit]
        return f"{value:>6} [{style}]{unit:<2}[/{style}]"

    def print_sized_path(self, size_bytes: int, path):
        """Print one listing row: size followed by the path in blue"""
        display = escape(format_path_for_display(path))
        self.console.print(f"{self.format_size_markup(size_bytes)} [blue]{display}[/blue]", soft_wrap=True)

    def print_empty_path(self, path):
        """Print one listing row for a path without a size"""
        display = escape(format_path_for_display(path))
        self.console.print(f"  [dim]<empty>[/dim] [blue]{display}[/blue]", soft_wrap=True)

    def print_total(self, size_bytes: int):
        """Print the total size line"""
        self.console.print(self.format_size_markup(size_bytes))

    # Progress display
    def create_activity_progress(self, transient: bool = True):
        """Create a Rich progress context manager for activity-only display (no counts)"""
        return Progress(
            SpinnerColumn(),
            TextColumn("{task.description}"),
            TimeElapsedColumn(),
            console=self.console,
            transient=transient,
        )

    # Interactive prompts
    def confirm(self, question: str, default: bool = False) -> bool:
        """Ask for yes/no confirmation"""
        return Confirm.ask(question, default=default, console=self.console)
