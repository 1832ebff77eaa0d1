"""Detect files that no other file imports.

Usage: imports-detector unused ./src
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
from imports_detector.output import format_unused_json, format_unused_text
from imports_detector.ui import progress_enabled, scan_progress
from imports_detector.utils.error_handler import handle_exceptions


@click.command("unused")
@click.argument("paths", nargs=-1, type=click.Path())
@click.option("--filter", "filter_pattern", help="Only report files whose path contains this text")
@click.option("--fail-on-unused", is_flag=True, help="Exit 1 if unused files are found")
@scan_options
@handle_exceptions
def unused(
    paths,
    filter_pattern,
    fail_on_unused,
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
    """Find files that are never imported.

    A file exported only through an index (barrel) file counts as used when
    that index file is itself imported. Entry points are reported too, since
    nothing imports them; use --filter to narrow the output.

    EXAMPLES:
      imports-detector unused ./src
      imports-detector unused ./src --filter components/ -f json
      imports-detector unused ./src --fail-on-unused
    """
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

    with scan_progress(progress_enabled(format, output, verbose), "Finding unused files...") as progress:
        files = asyncio.run(analyzer.find_unused_files(search_path, filter_pattern, progress))

    report_failures(analyzer.failures, verbose)

    if format == "json":
        emit(format_unused_json(files), output)
    else:
        emit(format_unused_text(files), output)

    if fail_on_unused and files:
        raise click.ClickException(f"Unused files detected: {len(files)} files")
