"""Find the files that import a module.

Usage: imports-detector find Test ./src
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
from imports_detector.output import format_find_results_json, format_find_results_text
from imports_detector.ui import print_success, progress_enabled, scan_progress
from imports_detector.utils.error_handler import handle_exceptions
from imports_detector.utils.exit_codes import ExitCodes


@click.command("find")
@click.argument("module", required=False)
@click.argument("paths", nargs=-1, type=click.Path())
@click.option(
    "--module-path",
    type=click.Path(),
    help="Specific file to match (e.g. ./src/admin/Dashboard.tsx); relative to the working directory",
)
@scan_options
@click.pass_context
@handle_exceptions
def find(
    ctx,
    module,
    paths,
    module_path,
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
    """Find all files that import a specific module.

    MODULE is matched against import specifiers, bound names and file
    basenames. With --module-path, imports are resolved and matched against
    that exact file instead, including imports that reach it through barrel
    (index) files.

    EXAMPLES:
      # Every file importing anything named Test
      imports-detector find Test ./src

      # Importers of one specific Dashboard, not its namesakes
      imports-detector find --module-path src/admin/Dashboard.tsx ./src

      # Only lazy and dynamic imports, as JSON
      imports-detector find Chart ./src --no-static --no-require -f json

    EXIT CODES:
      0 = At least one importing file found
      1 = No importing files found, or an error occurred
    """
    if not module and not module_path:
        raise click.ClickException(
            "Either <module> name or --module-path must be provided\n"
            "Example: imports-detector find React ./src\n"
            "Example: imports-detector find --module-path src/components/Header.tsx ./src"
        )

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
        module_path=module_path,
    )
    analyzer = ImportAnalyzer(options, runtime_config(search_path))

    show_progress = progress_enabled(format, output, verbose)
    with scan_progress(show_progress, "Searching for files...") as progress:
        results = asyncio.run(analyzer.find_files_importing(module, search_path, progress))

    report_failures(analyzer.failures, verbose)

    display_module = module or module_path
    if show_progress:
        count = len(results)
        print_success(f"Found {count} file{'' if count == 1 else 's'} importing \"{display_module}\"")

    if format == "json":
        content = format_find_results_json(results, display_module)
    else:
        content = format_find_results_text(results, display_module)

    emit(content, output)
    ctx.exit(ExitCodes.for_matches(len(results)))
