"""List all imports in each file.

Usage: imports-detector list ./src
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
from imports_detector.output import format_analysis_json, format_analysis_text
from imports_detector.ui import print_success, progress_enabled, scan_progress
from imports_detector.utils.error_handler import handle_exceptions


@click.command("list")
@click.argument("paths", nargs=-1, type=click.Path())
@scan_options
@handle_exceptions
def list_imports(
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
    """List all imports in each file, grouped by import style.

    EXAMPLES:
      imports-detector list ./src
      imports-detector list -p ./src -f json -o imports.json
      imports-detector list ./src --include .ts,.tsx --exclude "**/*.test.ts"
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

    show_progress = progress_enabled(format, output, verbose)
    with scan_progress(show_progress) as progress:
        analysis = asyncio.run(analyzer.analyze_project(search_path, progress))

    report_failures(analyzer.failures, verbose)

    if show_progress:
        print_success(
            f"Analyzed {analysis.total_files} file{'' if analysis.total_files == 1 else 's'}, "
            f"found {analysis.total_imports} import{'' if analysis.total_imports == 1 else 's'}"
        )

    if format == "json":
        emit(format_analysis_json(analysis), output)
    else:
        emit(format_analysis_text(analysis), output)
