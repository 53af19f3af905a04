"""Console output utilities using Rich."""

from typing import Optional
from rich.console import Console as RichConsole
from rich.panel import Panel
from rich.theme import Theme

# Custom theme for the fuel tracker
FUEL_THEME = Theme({
    "info": "cyan",
    "success": "green",
    "warning": "yellow",
    "error": "red bold",
    "highlight": "magenta",
    "amount": "green bold",
    "co2": "yellow",
    "trend.improving": "green bold",
    "trend.worsening": "red",
    "trend.declining": "red",
    "trend.stable": "cyan",
    "header": "bold blue",
    "subheader": "bold cyan",
})


class Console:
    """Enhanced console output for the fuel tracker."""

    def __init__(self, rich_console: Optional[RichConsole] = None):
        self._console = rich_console or RichConsole(theme=FUEL_THEME)

    @property
    def rich_console(self) -> RichConsole:
        """Get the underlying Rich console."""
        return self._console

    def print(self, *args, **kwargs) -> None:
        """Print to console."""
        self._console.print(*args, **kwargs)

    def info(self, message: str, prefix: str = "INFO") -> None:
        """Print info message."""
        self._console.print(f"[info][{prefix}][/info] {message}")

    def success(self, message: str, prefix: str = "OK") -> None:
        """Print success message."""
        self._console.print(f"[success][{prefix}][/success] {message}")

    def warning(self, message: str, prefix: str = "WARN") -> None:
        """Print warning message."""
        self._console.print(f"[warning][{prefix}][/warning] {message}")

    def error(self, message: str, prefix: str = "ERROR") -> None:
        """Print error message."""
        self._console.print(f"[error][{prefix}][/error] {message}")

    def header(self, title: str) -> None:
        """Print a section header."""
        self._console.print(f"\n[header]{title}[/header]\n")

    def subheader(self, title: str) -> None:
        """Print a subsection header."""
        self._console.print(f"\n[subheader]{title}[/subheader]")

    def status_panel(self, title: str, items: dict, style: str = "cyan") -> None:
        """Print a panel of label: value lines."""
        content = "\n".join(f"[bold]{key}:[/bold] {value}" for key, value in items.items())
        self._console.print(Panel(content, title=title, style=style, expand=False))

    def trend(self, label: str, value: str) -> None:
        """Print a trend value with its color."""
        self._console.print(f"  [bold]{label}:[/bold] [trend.{value}]{value}[/trend.{value}]")

    def bullet_list(self, items, marker: str = "-") -> None:
        for item in items:
            self._console.print(f"  {marker} {item}")

    def confirm(self, message: str, default: bool = False) -> bool:
        """Ask for confirmation."""
        default_str = "Y/n" if default else "y/N"
        response = self._console.input(f"{message} \\[{default_str}]: ").strip().lower()

        if not response:
            return default
        return response in ("y", "yes")


# Global console instance
console = Console()
