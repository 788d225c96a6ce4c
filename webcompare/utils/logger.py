"""
Rich + Loguru logging utility for webcompare.
Terminal output for comparison runs, file logging for later inspection.
"""

import json
import sys
from pathlib import Path
from datetime import datetime
from typing import Any

from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table
from rich.text import Text

from webcompare.config.settings import settings


# Rich console on stderr so stdout stays clean for JSON results
console = Console(stderr=True)


class CompareLogger:
    """
    Custom logger that combines Loguru's sinks with Rich's terminal output.
    Shows what each comparison run loaded, evaluated and found.
    """

    def __init__(
        self,
        level: str = "INFO",
        log_to_file: bool = False,
        log_dir: Path = Path("logs"),
        app_name: str = "webcompare"
    ):
        self.app_name = app_name
        self.console = console
        self.log_dir = log_dir

        # Remove default logger
        logger.remove()

        logger.add(
            sys.stderr,
            format="<level>{level: <8}</level> | <cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>",
            level=level,
            colorize=True,
        )

        if log_to_file:
            log_dir.mkdir(parents=True, exist_ok=True)
            log_file = log_dir / f"{app_name}_{datetime.now().strftime('%Y%m%d_%H%M%S')}.log"
            logger.add(
                log_file,
                format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}",
                level="DEBUG",
                rotation="10 MB",
                retention="7 days",
            )

        self._logger = logger.opt(depth=1)

    def mismatch(self, report: Any):
        """Display one mismatch report side by side."""
        table = Table(
            title=f"[bold yellow]Changed: monitor {report.monitor_id}[/bold yellow]",
            border_style="yellow",
        )
        table.add_column("Field", style="cyan")
        table.add_column("Value", style="white")
        table.add_row("Selector", report.selector)
        table.add_row("Type", report.to_wire()["Type"])
        table.add_row("Expected", report.expected_value.canonical_encoding()[:100])
        table.add_row("Current", report.current_value.canonical_encoding()[:100])

        self.console.print(table)
        self._logger.info(f"[MISMATCH] monitor={report.monitor_id} selector={report.selector!r}")

    def error(self, message: str, exception: Exception = None):
        """Display an error with optional exception details."""
        error_text = Text(message, style="bold red")
        if exception:
            error_text.append(f"\n\nException: {type(exception).__name__}: {str(exception)}", style="red")

        panel = Panel(
            error_text,
            title="[bold red]Error[/bold red]",
            border_style="red",
            padding=(1, 2),
        )
        self.console.print(panel)
        self._logger.error(f"[ERROR] {message}")

    def success(self, message: str):
        """Display a success message."""
        panel = Panel(
            Text(message, style="bold green"),
            title="[bold green]Success[/bold green]",
            border_style="green",
        )
        self.console.print(panel)
        self._logger.info(f"[SUCCESS] {message}")

    def run_summary(self, url: str, evaluated: int, changed: int, failed: int, duration_ms: float):
        """Display a summary of one comparison run."""
        table = Table(title="[bold cyan]Run Summary[/bold cyan]", border_style="cyan")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="white")
        table.add_row("URL", url[:60])
        table.add_row("Evaluated", str(evaluated))
        table.add_row("Changed", str(changed))
        table.add_row("Failed", str(failed))
        table.add_row("Duration", f"{duration_ms:.0f}ms")
        self.console.print(table)
        self._logger.debug(
            f"[RUN] url={url} evaluated={evaluated} changed={changed} failed={failed} duration_ms={duration_ms:.0f}"
        )

    def show_json(self, data: Any, title: str = "JSON Data"):
        """Display JSON data with syntax highlighting."""
        json_str = json.dumps(data, indent=2, ensure_ascii=False)
        syntax = Syntax(json_str, "json", theme="monokai", line_numbers=False)
        panel = Panel(syntax, title=f"[bold]{title}[/bold]", border_style="white")
        self.console.print(panel)

    def info(self, message: str):
        """Standard info logging."""
        self._logger.info(message)

    def debug(self, message: str):
        """Debug logging."""
        self._logger.debug(message)

    def warning(self, message: str):
        """Warning logging."""
        self.console.print(f"[bold yellow]WARNING:[/bold yellow] {message}")
        self._logger.warning(message)

    def banner(self, text: str):
        """Display a banner/header."""
        self.console.print()
        self.console.rule(f"[bold magenta]{text}[/bold magenta]", style="magenta")
        self.console.print()


# Global logger instance
compare_logger = CompareLogger(
    level=settings.logging.level,
    log_to_file=settings.logging.log_to_file,
    log_dir=settings.logging.log_dir,
)
