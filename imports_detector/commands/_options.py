"""Options and helpers shared by every scanning command."""

import os

import click

from imports_detector.config import DetectorOptions, load_runtime_config
from imports_detector.output import write_output
from imports_detector.utils.logging import set_log_level


def split_patterns(value: str | None) -> list[str] | None:
    """Split a comma-separated option value, dropping blanks."""
    if not value:
        return None
    patterns = [part.strip() for part in value.split(",") if part.strip()]
    return patterns or None


def scan_options(func):
    """Attach the flags every scanning command accepts."""
    options = [
        click.option("-p", "--path", "search_root", type=click.Path(), help="Root directory to search"),
        click.option("-o", "--output", type=click.Path(dir_okay=False), help="Output file path"),
        click.option(
            "-f",
            "--format",
            type=click.Choice(["json", "text"]),
            default="text",
            show_default=True,
            help="Output format",
        ),
        click.option("--base-url", help="Base URL for module resolution (overrides tsconfig)"),
        click.option("--tsconfig", type=click.Path(), help="Path to tsconfig.json for automatic baseUrl detection"),
        click.option("--include", help="File extensions to include (comma-separated, e.g. .ts,.tsx)"),
        click.option("--exclude", help="Glob patterns to exclude (comma-separated)"),
        click.option("--static/--no-static", "detect_static", default=True, help="Include static imports"),
        click.option("--dynamic/--no-dynamic", "detect_dynamic", default=True, help="Include dynamic import() calls"),
        click.option("--lazy/--no-lazy", "detect_lazy", default=True, help="Include lazy-wrapped imports"),
        click.option("--require/--no-require", "detect_require", default=True, help="Include require() calls"),
        click.option("-v", "--verbose", is_flag=True, help="Verbose output (debug logs, parse failures)"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def search_path_for(search_root: str | None, paths: tuple[str, ...]) -> str:
    """--path wins, then the first positional path, then the working directory."""
    return search_root or (paths[0] if paths else os.getcwd())


def build_options(
    *,
    detect_static: bool,
    detect_dynamic: bool,
    detect_lazy: bool,
    detect_require: bool,
    verbose: bool,
    base_url: str | None,
    tsconfig: str | None,
    include: str | None,
    exclude: str | None,
    module_path: str | None = None,
) -> DetectorOptions:
    if verbose:
        set_log_level("DEBUG")

    return DetectorOptions(
        detect_static=detect_static,
        detect_dynamic=detect_dynamic,
        detect_lazy=detect_lazy,
        detect_require=detect_require,
        verbose=verbose,
        module_path=module_path,
        base_url=base_url,
        tsconfig_path=tsconfig,
        include_extensions=split_patterns(include),
        exclude_patterns=split_patterns(exclude),
    )


def runtime_config(search_path: str) -> dict:
    root = search_path if os.path.isdir(search_path) else os.path.dirname(os.path.abspath(search_path))
    return load_runtime_config(root)


def report_failures(failures: dict[str, str], verbose: bool) -> None:
    """Per-file parse failures are only surfaced in verbose mode."""
    if not verbose:
        return
    for file_path, reason in failures.items():
        click.echo(f"Error parsing {file_path}: {reason}", err=True)


def emit(content: str, output: str | None, label: str = "Output") -> None:
    """Print results, or write them to ``output`` and say where they went."""
    if output:
        path = write_output(content, output)
        click.echo(f"{label} written to {path}")
    else:
        click.echo(content)
