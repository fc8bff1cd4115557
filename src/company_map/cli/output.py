"""
Console output for CLI commands, honouring the global --quiet and --verbose flags.
"""

from collections.abc import Iterable, Sequence
from enum import Enum

from rich.console import Console
from rich.table import Table


class OutputLevel(Enum):
    QUIET = "quiet"
    NORMAL = "normal"
    VERBOSE = "verbose"

    @classmethod
    def from_flags(cls, quiet: bool = False, verbose: bool = False) -> "OutputLevel":
        if quiet:
            return cls.QUIET
        return cls.VERBOSE if verbose else cls.NORMAL


class CLIOutputManager:
    """Routes command messages to stdout or stderr by kind.

    Results go to stdout and are muted in quiet mode, except the final summary,
    which moves to stderr there. Warnings and errors always go to stderr.
    """

    PREFIXES = {
        "success": "✓ ",
        "warning": "⚠️  ",
        "error": "❌ ",
        "debug": "🔍 ",
        "summary": "📊 ",
    }
    STYLES = {
        "success": "green",
        "warning": "yellow",
        "error": "red bold",
        "debug": "dim",
        "summary": "cyan bold",
    }

    def __init__(self, level: OutputLevel = OutputLevel.NORMAL, use_colors: bool = True):
        self.level = level
        self.stdout = Console(
            no_color=not use_colors, highlight=False, quiet=level == OutputLevel.QUIET
        )
        self.stderr = Console(stderr=True, no_color=not use_colors, highlight=False)

    def _print(self, console: Console, kind: str, message: str) -> None:
        console.print(f"{self.PREFIXES[kind]}{message}", style=self.STYLES[kind])

    def info(self, message: str) -> None:
        self.stdout.print(message)

    def success(self, message: str) -> None:
        self._print(self.stdout, "success", message)

    def warning(self, message: str) -> None:
        self._print(self.stderr, "warning", message)

    def error(self, message: str) -> None:
        self._print(self.stderr, "error", message)

    def debug(self, message: str) -> None:
        if self.level == OutputLevel.VERBOSE:
            self._print(self.stdout, "debug", message)

    def final_results(self, message: str) -> None:
        console = self.stderr if self.level == OutputLevel.QUIET else self.stdout
        self._print(console, "summary", message)

    def table(self, title: str, columns: Sequence[str], rows: Iterable[Sequence[str]]) -> None:
        """Print registry results as a table; long cells wrap instead of truncating."""
        table = Table(title=title, title_justify="left")
        for column in columns:
            table.add_column(column, overflow="fold")
        for row in rows:
            table.add_row(*row)
        self.stdout.print(table)


def create_output_manager(
    quiet: bool = False, verbose: bool = False, use_colors: bool = True
) -> CLIOutputManager:
    return CLIOutputManager(OutputLevel.from_flags(quiet, verbose), use_colors)
