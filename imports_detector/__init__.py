"""imports-detector - find which files import a module, directly or through barrel files."""

import asyncio

__version__ = "0.2.11"

from imports_detector.analyzer import ImportAnalyzer
from imports_detector.config import DetectorOptions
from imports_detector.extractor import ImportExtractor
from imports_detector.file_discovery import FileDiscovery
from imports_detector.models import (
    FileImports,
    ImporterResult,
    ImportMap,
    ImportRecord,
    ImportType,
    ProjectAnalysis,
    UnusedFile,
)
from imports_detector.module_resolver import ModuleResolver
from imports_detector.parser import CodeParser


def find_files_importing(
    module_name: str | None,
    search_path: str,
    options: DetectorOptions | None = None,
) -> list[ImporterResult]:
    """Convenience function to find files importing a specific module."""
    return asyncio.run(ImportAnalyzer(options).find_files_importing(module_name, search_path))


def analyze_project(search_path: str, options: DetectorOptions | None = None) -> ProjectAnalysis:
    """Convenience function to analyze a project."""
    return asyncio.run(ImportAnalyzer(options).analyze_project(search_path))


def find_unused_files(
    search_path: str,
    filter_pattern: str | None = None,
    options: DetectorOptions | None = None,
) -> list[UnusedFile]:
    return asyncio.run(ImportAnalyzer(options).find_unused_files(search_path, filter_pattern))


def build_import_map(search_path: str, options: DetectorOptions | None = None) -> ImportMap:
    return asyncio.run(ImportAnalyzer(options).build_import_map(search_path))


__all__ = [
    "CodeParser",
    "DetectorOptions",
    "FileDiscovery",
    "FileImports",
    "ImportAnalyzer",
    "ImportExtractor",
    "ImportMap",
    "ImportRecord",
    "ImportType",
    "ImporterResult",
    "ModuleResolver",
    "ProjectAnalysis",
    "UnusedFile",
    "__version__",
    "analyze_project",
    "build_import_map",
    "find_files_importing",
    "find_unused_files",
]
