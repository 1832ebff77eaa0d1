"""imports-detector CLI - Main entry point and command registration hub."""
# ruff: noqa: E402 - Intentional lazy loading: commands imported after cli group definition

import click

from imports_detector import __version__


@click.group()
@click.version_option(version=__version__, prog_name="imports-detector")
@click.help_option("-h", "--help")
def cli():
    """Detect and analyze imports in JavaScript/TypeScript applications

    \b
    QUICK START:
      imports-detector find Test ./src          # Who imports Test?
      imports-detector list ./src               # Every import, per file
      imports-detector report ./src -o out.txt  # Full report to a file

    \b
    For detailed options: imports-detector <command> --help"""
    pass


from imports_detector.commands.find import find
from imports_detector.commands.list import list_imports
from imports_detector.commands.map import import_map
from imports_detector.commands.report import report
from imports_detector.commands.unused import unused

cli.add_command(find)
cli.add_command(list_imports, name="list")
cli.add_command(report)
cli.add_command(unused)
cli.add_command(import_map, name="map")


def main():
    """Main entry point for console script."""
    cli()


if __name__ == "__main__":
    main()
