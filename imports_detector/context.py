"""Per-operation analysis context.

One context lives for exactly one top-level operation (find, analyze,
unused, map, report). It owns the resolver and the parse cache, so nothing
is shared between operations and concurrent operations in one process do
not interfere.
"""

import os
from dataclasses import dataclass, field

from imports_detector.exceptions import ParseError
from imports_detector.extractor import ImportExtractor
from imports_detector.models import FileCollection, ImportRecord
from imports_detector.module_resolver import ModuleResolver
from imports_detector.parser import CodeParser
from imports_detector.utils.logging import logger


@dataclass
class AnalysisContext:
    """Resolver plus a parse-once cache of per-file import/export records."""

    resolver: ModuleResolver
    parser: CodeParser = field(default_factory=CodeParser)
    extractor: ImportExtractor = field(default_factory=ImportExtractor)
    collections: dict[str, FileCollection] = field(default_factory=dict)
    failures: dict[str, str] = field(default_factory=dict)
    _resolutions: dict[tuple[str, str], str | None] = field(default_factory=dict, repr=False)

    def load(self, file_path: str) -> FileCollection | None:
        """Parse and extract a file at most once; None if it failed."""
        collection = self.collections.get(file_path)
        if collection is not None:
            return collection
        if file_path in self.failures:
            return None

        try:
            parsed = self.parser.parse_file(file_path)
            collection = self.extractor.extract_collection(parsed)
        except ParseError as e:
            self.failures[file_path] = str(e)
            logger.debug(f"Skipping {file_path}: {e}")
            return None

        self.collections[file_path] = collection
        return collection

    def resolve(self, record: ImportRecord, from_file: str) -> str | None:
        """Resolve an import record, caching the result on the record."""
        if record.resolved_path is None:
            record.resolved_path = self.resolve_specifier(record.module, from_file)
        return record.resolved_path

    def resolve_specifier(self, specifier: str, from_file: str) -> str | None:
        key = (specifier, os.path.dirname(from_file))
        if key not in self._resolutions:
            self._resolutions[key] = self.resolver.resolve(specifier, from_file)
        return self._resolutions[key]

    def resolves_to(self, record: ImportRecord, from_file: str, target: str) -> bool:
        resolved = self.resolve(record, from_file)
        return resolved is not None and self.resolver.paths_match(resolved, target)
