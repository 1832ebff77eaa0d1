"""Central UI handler for imports-detector.

Single source of truth for Rich console styling. Import this instead of
instantiating Console() in every command file.

Usage:
    from imports_detector.ui import err_console, print_success, scan_progress

    print_success("Analyzed 12 files")
    with scan_progress(enabled=True) as progress:
        ...
"""

from collections.abc import Callable, Iterator
from contextlib import contextmanager

from rich.console import Console
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn
from rich.theme import Theme

DETECTOR_THEME = Theme({
    "success": "bold green",
})

# Status output goes to stderr so stdout stays clean for results
err_console = Console(theme=DETECTOR_THEME, stderr=True)


def print_success(msg: str) -> None:
    err_console.print(f"[success]OK:[/success] {msg}")


def progress_enabled(format: str, output: str | None, verbose: bool) -> bool:
    """Spinner only for text output to a terminal, and never in verbose mode."""
    return format == "text" and not output and not verbose and err_console.is_terminal


@contextmanager
def scan_progress(enabled: bool, description: str = "Scanning files...") -> Iterator[Callable[[int, int, str], None] | None]:
    """Yield a (current, total, message) callback driving a Rich progress bar.

    Yields None when disabled so callers can pass it straight through.
    """
    if not enabled:
        yield None
        return

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        BarColumn(),
        TaskProgressColumn(),
        console=err_console,
        transient=True,
    ) as progress:
        task = progress.add_task(description, total=None)

        def update(current: int, total: int, message: str) -> None:
            progress.update(task, completed=current, total=total, description=f"{message}... ({current}/{total})")

        yield update
