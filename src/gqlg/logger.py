"""Logging for gqlg with a few console helpers used by the CLI."""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler


class GqlgLogger(logging.Logger):
    """
    Logger that renders through Rich and adds plain console output helpers.

    Standard levels (debug, info, warning, error) go through the RichHandler; the helpers
    (success, hint, key_value, rule) print directly to the console.
    """

    def __init__(self, name: str, level: int = logging.INFO) -> None:
        """
        Initialize the gqlg logger.

        Args:
            name: Logger name
            level: Initial log level
        """
        super().__init__(name, level)
        self.console = Console()

        handler = RichHandler(
            console=self.console,
            rich_tracebacks=True,
            show_time=True,
            show_path=False,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        self.addHandler(handler)

    def print(self, message: str) -> None:
        """Print a plain message (with Rich markup support)."""
        self.console.print(message)

    def colored(self, message: str, style: str) -> None:
        """
        Print a message in a specific color/style.

        Args:
            message: Message to display
            style: Rich style string (e.g., "green", "red", "bold cyan", "dim")
        """
        self.print(f"[{style}]{message}[/{style}]")

    def success(self, message: str) -> None:
        """
        Print a success message in green with checkmark icon.

        Args:
            message: Message to display
        """
        self.print(f"[green]✓[/green] {message}")

    def hint(self, message: str) -> None:
        """
        Print a dimmed hint/secondary message.

        Args:
            message: Message to display
        """
        self.colored(message, "dim")

    def rule(self, title: str, style: str = "bold blue") -> None:
        """
        Print a horizontal rule with a title.

        Args:
            title: Title text for the rule
            style: Rich style string (default: "bold blue")
        """
        self.console.rule(f"[{style}]{title}")

    def key_value(self, key: str, value: Any, key_style: str = "dim") -> None:
        """
        Print a formatted key-value pair such as "Variable: type".

        Args:
            key: The key/label to display
            value: The value to display
            key_style: Style for the key (default: "dim")
        """
        self.print(f"[{key_style}]{key}:[/{key_style}] {value}")


def get_logger(name: str = "gqlg") -> GqlgLogger:
    """
    Get or create a gqlg logger instance.

    Args:
        name: Logger name (default: "gqlg")

    Returns:
        GqlgLogger instance
    """
    logging.setLoggerClass(GqlgLogger)
    logger = logging.getLogger(name)
    logging.setLoggerClass(logging.Logger)

    return logger  # type: ignore[return-value]
