"""Write a detailed import analysis report to a file.

Usage: imports-detector report ./src --output report.json -f json
"""

import asyncio

import click

from imports_detector.analyzer import ImportAnalyzer
from imports_detector.commands._options import (
    build_options,
    emit,
    report_failures,
    runtime_config,
    scan_options,
    search_path_for,
)
from imports_detector.output import format_report_json, format_report_text
from imports_detector.ui import err_console, print_success, scan_progress
from imports_detector.utils.error_handler import handle_exceptions


@click.command("report")
@click.argument("paths", nargs=-1, type=click.Path())
@scan_options
@handle_exceptions
def report(
    paths,
    search_root,
    output,
    format,
    base_url,
    tsconfig,
    include,
    exclude,
    detect_static,
    detect_dynamic,
    detect_lazy,
    detect_require,
    verbose,
):
    """Generate a detailed import analysis report (requires --output).

    The report combines the per-file import listing with import statistics:
    the most and least imported files, computed from a single scan.

    EXAMPLES:
      imports-detector report ./src --output imports-report.txt
      imports-detector report -p ./src -o report.json -f json
    """
    if not output:
        raise click.ClickException("--output is required for report command")

    search_path = search_path_for(search_root, paths)
    options = build_options(
        detect_static=detect_static,
        detect_dynamic=detect_dynamic,
        detect_lazy=detect_lazy,
        detect_require=detect_require,
        verbose=verbose,
        base_url=base_url,
        tsconfig=tsconfig,
        include=include,
        exclude=exclude,
    )
    analyzer = ImportAnalyzer(options, runtime_config(search_path))

    show_progress = not verbose and err_console.is_terminal
    with scan_progress(show_progress) as progress:
        project_report = asyncio.run(analyzer.build_report(search_path, progress))

    report_failures(analyzer.failures, verbose)

    if show_progress:
        total = project_report.analysis.total_files
        print_success(f"Analyzed {total} file{'' if total == 1 else 's'}")

    if format == "json":
        content = format_report_json(project_report)
    else:
        content = format_report_text(project_report)

    emit(content, output, label="Report")
