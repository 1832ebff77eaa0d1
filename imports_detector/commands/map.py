"""Build the bidirectional import map.

Usage: imports-detector map ./src -f json -o import-map.json
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
from imports_detector.output import format_import_map_json, format_import_map_text
from imports_detector.ui import progress_enabled, scan_progress
from imports_detector.utils.error_handler import handle_exceptions


@click.command("map")
@click.argument("paths", nargs=-1, type=click.Path())
@click.option("--top", "top_n", type=int, help="How many most/least imported files to list")
@scan_options
@handle_exceptions
def import_map(
    paths,
    top_n,
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
    """Show what each file imports and which files import it.

    EXAMPLES:
      imports-detector map ./src
      imports-detector map ./src --top 5
      imports-detector map ./src -f json -o import-map.json
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
    config = runtime_config(search_path)
    if top_n is not None:
        config["report"]["top_n"] = max(0, top_n)
    analyzer = ImportAnalyzer(options, config)

    with scan_progress(progress_enabled(format, output, verbose), "Building import map...") as progress:
        result = asyncio.run(analyzer.build_import_map(search_path, progress))

    report_failures(analyzer.failures, verbose)

    if format == "json":
        emit(format_import_map_json(result), output)
    else:
        emit(format_import_map_text(result), output)
