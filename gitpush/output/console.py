# gitpush Console Output
# Rich-based console output for user-friendly display

from typing import Any, Optional

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.table import Table
from rich.text import Text


class Console:
    """
    Console output manager using Rich.

    Provides formatted output for push operations.
    """

    def __init__(self, *, verbose: bool = False, colored: bool = True, console: Optional[RichConsole] = None):
        """
        Initialize console.

        Args:
            verbose: Enable verbose output.
            colored: Enable colored output.
            console: Existing Rich console to write to.
        """
        self.verbose = verbose
        self._console = console or RichConsole(no_color=not colored, highlight=colored)

    @property
    def rich(self) -> RichConsole:
        """Underlying Rich console."""
        return self._console

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self._console.print(*args, **kwargs)

    def print_error(self, message: str) -> None:
        """Print error message."""
        self._console.print(f"[red]Error:[/red] {escape(message)}")

    def print_warning(self, message: str) -> None:
        """Print warning message."""
        self._console.print(f"[yellow]Warning:[/yellow] {escape(message)}")

    def print_success(self, message: str) -> None:
        """Print success message."""
        self._console.print(f"[green]{escape(message)}[/green]")

    def print_info(self, message: str) -> None:
        """Print info message."""
        self._console.print(f"[blue]{escape(message)}[/blue]")

    def print_debug(self, message: str) -> None:
        """Print message only in verbose mode."""
        if self.verbose:
            self._console.print(f"[dim]{escape(message)}[/dim]")

    def print_push_plan(self, inputs: dict[str, Any], *, dry_run: bool = False) -> None:
        """
        Print the resolved push inputs as a table.

        Args:
            inputs: Password-free task inputs.
            dry_run: Title the table as a preview.
        """
        title = "Planned Push (dry-run)" if dry_run else "Push"
        table = Table(title=title, show_header=True, header_style="bold")
        table.add_column("Setting", style="cyan")
        table.add_column("Value")

        for key, value in inputs.items():
            if isinstance(value, bool):
                shown = "[green]yes[/green]" if value else "[dim]no[/dim]"
            elif isinstance(value, (list, tuple)):
                shown = escape(" ".join(str(v) for v in value))
            elif value is None:
                shown = "[dim]-[/dim]"
            else:
                shown = escape(str(value))
            table.add_row(key.replace("_", " "), shown)

        self._console.print()
        self._console.print(table)
        self._console.print()

    def print_failure(self, error: BaseException) -> None:
        """
        Print a failed push with its underlying cause.

        Args:
            error: PushError or any exception carrying a cause.
        """
        self.print_error(str(error))
        cause = getattr(error, "cause", None) or error.__cause__
        if cause is None:
            return
        self._console.print(f"  [dim]Cause:[/dim] {escape(str(cause))}")
        stderr = getattr(cause, "stderr", "")
        if stderr:
            for line in stderr.splitlines():
                self._console.print(Text(f"  {line}", style="dim"))


def create_console(*, verbose: bool = False, colored: bool = True) -> Console:
    """
    Create a console instance.

    Args:
        verbose: Enable verbose output.
        colored: Enable colored output.

    Returns:
        Console instance.
    """
    return Console(verbose=verbose, colored=colored)
