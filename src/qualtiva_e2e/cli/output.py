"""Operator-facing status output for the CLI."""

from dataclasses import dataclass
from typing import Dict, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table


@dataclass
class Theme:
    """Color theme for status prefixes."""

    name: str
    info_color: str
    success_color: str
    warning_color: str
    error_color: str
    dim_color: str


THEMES: Dict[str, Theme] = {
    "default": Theme(
        name="default",
        info_color="blue",
        success_color="green",
        warning_color="yellow",
        error_color="red",
        dim_color="dim",
    ),
    "plain": Theme(
        name="plain",
        info_color="default",
        success_color="default",
        warning_color="default",
        error_color="default",
        dim_color="default",
    ),
}


def get_theme(name: str) -> Theme:
    """Get a theme by name, falling back to ``default``."""
    return THEMES.get(name.lower(), THEMES["default"])


class StatusPrinter:
    """
    Print ``[INFO]``/``[SUCCESS]``/``[WARNING]``/``[ERROR]`` status lines.

    Example:
        status = StatusPrinter()
        status.info("Running all browser tests...")
    """

    def __init__(self, console: Optional[Console] = None, theme: str = "default"):
        self.console = console or Console()
        self.theme = get_theme(theme)

    def _print(self, label: str, color: str, message: str) -> None:
        self.console.print(f"[{color}]\\[{label}][/{color}] {escape(message)}")

    def info(self, message: str) -> None:
        self._print("INFO", self.theme.info_color, message)

    def success(self, message: str) -> None:
        self._print("SUCCESS", self.theme.success_color, message)

    def warning(self, message: str) -> None:
        self._print("WARNING", self.theme.warning_color, message)

    def error(self, message: str) -> None:
        self._print("ERROR", self.theme.error_color, message)

    def render_counts(self, title: str, rows: Dict[str, Dict[str, int]]) -> None:
        """Render a per-profile or per-category counts table."""
        if not rows:
            self.console.print(f"[{self.theme.dim_color}]No results[/{self.theme.dim_color}]")
            return

        table = Table(title=title, show_header=True)
        columns = ["total", "passed", "failed", "skipped", "error"]
        table.add_column("Name")
        for col in columns:
            table.add_column(col.title(), justify="right")
        for name, counts in rows.items():
            table.add_row(escape(name), *[str(counts.get(col, 0)) for col in columns])
        self.console.print(table)
