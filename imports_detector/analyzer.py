"""Import analyzer - orchestrates discovery, parsing, resolution and barrel tracing.

Every public operation builds a fresh AnalysisContext, scans the corpus in
fixed-size batches (yielding to the event loop after each batch) and reads
only from that context's parse cache afterwards.
"""

import asyncio
import copy
import os
from collections import Counter, deque
from collections.abc import Awaitable, Callable
from typing import Any

from imports_detector.barrel import BarrelTracer
from imports_detector.config import DEFAULTS, DetectorOptions
from imports_detector.consumers import ConsumerWalker, uses_forwarded_name
from imports_detector.context import AnalysisContext
from imports_detector.extractor import ImportExtractor
from imports_detector.file_discovery import FileDiscovery
from imports_detector.models import (
    IMPORT_TYPES,
    FileCollection,
    FileCount,
    FileImports,
    ImporterResult,
    ImportMap,
    ImportMapStats,
    ImportRecord,
    ProjectAnalysis,
    ProjectReport,
    UnusedFile,
)
from imports_detector.module_resolver import ModuleResolver, discover_base_url
from imports_detector.parser import CodeParser
from imports_detector.utils.logging import logger

ProgressCallback = Callable[[int, int, str], None]
YieldPoint = Callable[[], Awaitable[None]]

NOT_IMPORTED = "Not imported by any file"
UNUSED_BARREL = "Only re-exported through unused barrel {barrel}"


async def cooperative_yield() -> None:
    await asyncio.sleep(0)


class ImportAnalyzer:
    """Main analyzer: find importers, analyze projects, detect unused files."""

    def __init__(
        self,
        options: DetectorOptions | None = None,
        config: dict[str, Any] | None = None,
        yield_point: YieldPoint | None = None,
    ):
        self.options = options or DetectorOptions()
        self.config = config or copy.deepcopy(DEFAULTS)
        self.yield_point = yield_point or cooperative_yield

        scan = self.config["scan"]
        self.batch_size = max(1, self.options.batch_size or scan["batch_size"])
        self.extensions = self.options.extensions or scan["extensions"]
        self.top_n = self.config["report"]["top_n"]

        self.discovery = FileDiscovery(
            include_patterns=self.options.include_patterns() or scan["include"],
            exclude_patterns=self.options.exclude_patterns or scan["exclude"],
        )
        self.parser = CodeParser()
        self.extractor = ImportExtractor()
        self._failures: dict[str, str] = {}

    @property
    def failures(self) -> dict[str, str]:
        """Files that failed to parse during the last operation, with reasons."""
        return dict(self._failures)

    def _new_context(self, search_path: str) -> AnalysisContext:
        base_url = discover_base_url(search_path, self.options.tsconfig_path, self.options.base_url)
        resolver = ModuleResolver(self.extensions, base_url)
        context = AnalysisContext(resolver=resolver, parser=self.parser, extractor=self.extractor)
        self._failures = context.failures
        return context

    def _style_enabled(self, record: ImportRecord) -> bool:
        return self.options.style_flags()[record.type.value]

    async def _scan(
        self,
        search_path: str,
        progress: ProgressCallback | None,
        message: str,
    ) -> tuple[AnalysisContext, dict[str, FileCollection]]:
        """Discover, parse and extract every file once, in batches.

        Raises:
            DiscoveryError: if the search path cannot be enumerated
        """
        files = self.discovery.find_files(search_path)
        context = self._new_context(search_path)
        total = len(files)
        logger.debug(f"Found {total} files to analyze in {search_path}")

        corpus: dict[str, FileCollection] = {}
        for start in range(0, total, self.batch_size):
            batch = files[start : start + self.batch_size]
            for file_path in batch:
                collection = context.load(file_path)
                if collection is not None:
                    corpus[file_path] = collection

            done = start + len(batch)
            logger.debug(f"Processed {done}/{total} files")
            if progress:
                progress(done, total, message)
            await self.yield_point()

        if context.failures:
            logger.debug(f"{len(context.failures)} files failed to parse")
        return context, corpus

    def _group(self, collection: FileCollection) -> FileImports:
        """Per-style view of a cached collection, honoring the style toggles."""
        file_imports = FileImports(file=collection.file)
        for record in collection.imports:
            if self._style_enabled(record):
                file_imports.by_type(record.type).append(record)
        return file_imports

    def _resolve_target(self, resolver: ModuleResolver, module_path: str) -> str:
        """Absolute identity of the --module-path target.

        Relative paths are taken against the working directory, not the
        search root. A path that already carries an extension is used as is.
        """
        target = os.path.normpath(os.path.abspath(module_path))
        if os.path.splitext(target)[1] in resolver.extensions:
            return target
        return resolver.probe(target) or target

    def _matches_name(
        self, context: AnalysisContext, record: ImportRecord, file_path: str, module_name: str
    ) -> bool:
        if record.module == module_name or module_name in record.specifiers:
            return True

        resolver = context.resolver
        if resolver.strip_extension(os.path.basename(record.module)) == module_name:
            return True

        resolved = context.resolve(record, file_path)
        return resolved is not None and resolver.strip_extension(os.path.basename(resolved)) == module_name

    def _lands_on_sibling_barrel(
        self,
        context: AnalysisContext,
        tracer: BarrelTracer,
        record: ImportRecord,
        file_path: str,
        target: str,
        sibling_checks: dict[str, frozenset[str]],
    ) -> bool:
        """Import of the ``index.*`` beside the target that forwards it."""
        resolver = context.resolver
        resolved = context.resolve(record, file_path)
        if resolved is None or not os.path.isabs(resolved) or not resolver.is_index_file(resolved):
            return False
        if not resolver.paths_match(os.path.dirname(resolved), os.path.dirname(target)):
            return False

        key = resolver.identity_key(resolved)
        if key not in sibling_checks:
            index = context.load(resolved)
            names: frozenset[str] = frozenset()
            if index is not None:
                names = tracer.is_barrel_for(index, target).re_exported_names
            sibling_checks[key] = names

        names = sibling_checks[key]
        return bool(names) and uses_forwarded_name(record, names)

    @staticmethod
    def _merge(
        results: dict[str, ImporterResult],
        context: AnalysisContext,
        file_path: str,
        imports: list[ImportRecord],
    ) -> None:
        """Add imports under their file identity, skipping (module, line, type) repeats."""
        key = context.resolver.identity_key(file_path)
        existing = results.get(key)
        if existing is None:
            results[key] = ImporterResult(file=file_path, imports=list(imports))
            return

        seen = {imp.dedupe_key for imp in existing.imports}
        for imp in imports:
            if imp.dedupe_key not in seen:
                seen.add(imp.dedupe_key)
                existing.imports.append(imp)

    async def find_files_importing(
        self,
        module_name: str | None,
        search_path: str,
        progress: ProgressCallback | None = None,
    ) -> list[ImporterResult]:
        """Find all files that import a module.

        Args:
            module_name: Name to search for (e.g. 'Test', 'react'); ignored
                when ``options.module_path`` is set
            search_path: Root directory to search
            progress: Optional callback receiving (current, total, message)

        Returns:
            Direct matches in file order, followed by files that reach the
            target through barrel files.
        """
        context, corpus = await self._scan(search_path, progress, "Scanning imports")
        resolver = context.resolver
        tracer = BarrelTracer(context)

        target = None
        if self.options.module_path:
            target = self._resolve_target(resolver, self.options.module_path)
            logger.debug(f"Resolved module path {self.options.module_path} to {target}")

        sibling_checks: dict[str, frozenset[str]] = {}
        results: dict[str, ImporterResult] = {}

        for file_path, collection in corpus.items():
            matching = []
            for record in collection.imports:
                if not self._style_enabled(record):
                    continue
                if target is not None:
                    if not (
                        context.resolves_to(record, file_path, target)
                        or self._lands_on_sibling_barrel(
                            context, tracer, record, file_path, target, sibling_checks
                        )
                    ):
                        continue
                elif module_name and not self._matches_name(context, record, file_path, module_name):
                    continue
                # every reported record carries its resolved path
                context.resolve(record, file_path)
                matching.append(record)

            if matching:
                self._merge(results, context, file_path, matching)

        if target is not None:
            self._expand_barrels(context, tracer, corpus, target, results)

        return list(results.values())

    def _expand_barrels(
        self,
        context: AnalysisContext,
        tracer: BarrelTracer,
        corpus: dict[str, FileCollection],
        target: str,
        results: dict[str, ImporterResult],
    ) -> None:
        """Follow barrel chains outward from the direct matches.

        Each worklist entry is (file, module it was reached through, names
        that module forwards). A consumer of a barrel is itself re-examined
        as a barrel for that barrel, so chains of any depth are closed;
        ``visited`` keeps circular chains from looping.
        """
        walker = ConsumerWalker(context)
        visited: set[str] = set()
        worklist: deque[tuple[str, str, frozenset[str] | None]] = deque(
            (result.file, target, None) for result in list(results.values())
        )

        while worklist:
            file_path, through, forwarded = worklist.popleft()
            collection = corpus.get(file_path) or context.load(file_path)
            if collection is None:
                continue

            check = tracer.is_barrel_for(collection, through, forwarded)
            if not check.is_barrel:
                continue
            logger.debug(f"{file_path} re-exports {through} as {sorted(check.re_exported_names)}")

            for consumer in walker.find_consumers(file_path, check.re_exported_names, corpus, visited):
                imports = [imp for imp in consumer.imports if self._style_enabled(imp)]
                if imports:
                    self._merge(results, context, consumer.file, imports)
                worklist.append((consumer.file, file_path, check.re_exported_names))

    def _analysis(self, corpus: dict[str, FileCollection]) -> ProjectAnalysis:
        files: dict[str, FileImports] = {}
        summary = {import_type.value: 0 for import_type in IMPORT_TYPES}

        for file_path, collection in corpus.items():
            file_imports = self._group(collection)
            files[file_path] = file_imports
            for import_type in IMPORT_TYPES:
                summary[import_type.value] += len(file_imports.by_type(import_type))

        return ProjectAnalysis(
            total_files=len(files),
            total_imports=sum(summary.values()),
            files=files,
            summary=summary,
        )

    async def analyze_project(
        self, search_path: str, progress: ProgressCallback | None = None
    ) -> ProjectAnalysis:
        """Analyze all imports in a project."""
        _, corpus = await self._scan(search_path, progress, "Analyzing imports")
        return self._analysis(corpus)

    def analyze_file(self, file_path: str) -> FileImports:
        """Get all imports from a single file.

        Raises:
            ParseError: if the file cannot be read or parsed
        """
        parsed = self.parser.parse_file(os.path.abspath(file_path))
        return self.extractor.extract_all(
            parsed,
            static=self.options.detect_static,
            dynamic=self.options.detect_dynamic,
            lazy=self.options.detect_lazy,
            require=self.options.detect_require,
        )

    @staticmethod
    def _exported_locals(collection: FileCollection) -> set[str]:
        return {exp.local_name for exp in collection.exports if exp.source is None}

    @staticmethod
    def _is_forwarded(record: ImportRecord, exported_locals: set[str]) -> bool:
        """Whether an import only exists to be exported again."""
        return record.reexport or any(b.local in exported_locals for b in record.bindings)

    def _reexported_targets(
        self, context: AnalysisContext, collection: FileCollection
    ) -> set[str]:
        """Identity keys of the files an aggregator forwards."""
        exported_locals = self._exported_locals(collection)
        targets = set()
        for record in collection.imports:
            if not self._style_enabled(record):
                continue
            if not self._is_forwarded(record, exported_locals):
                continue
            resolved = context.resolve(record, collection.file)
            if resolved is not None and os.path.isabs(resolved):
                targets.add(context.resolver.identity_key(resolved))
        return targets

    async def find_unused_files(
        self,
        search_path: str,
        filter_pattern: str | None = None,
        progress: ProgressCallback | None = None,
    ) -> list[UnusedFile]:
        """Find files that no other file imports.

        A file re-exported by an ``index.*`` aggregator counts as used only
        when that aggregator is itself used; aggregators chain.

        Args:
            search_path: Root directory to analyze
            filter_pattern: Only report files whose path contains this text
        """
        context, corpus = await self._scan(search_path, progress, "Finding unused files")
        resolver = context.resolver

        imported: set[str] = set()
        aggregators: dict[str, tuple[str, set[str]]] = {}

        for file_path, collection in corpus.items():
            is_aggregator = resolver.is_index_file(file_path)
            exported_locals = self._exported_locals(collection) if is_aggregator else set()
            for record in collection.imports:
                if not self._style_enabled(record):
                    continue
                # forwarded targets are only used if the aggregator is
                if is_aggregator and self._is_forwarded(record, exported_locals):
                    continue
                resolved = context.resolve(record, file_path)
                if resolved is not None and os.path.isabs(resolved):
                    key = resolver.identity_key(resolved)
                    if key != resolver.identity_key(file_path):
                        imported.add(key)
            if is_aggregator:
                aggregators[resolver.identity_key(file_path)] = (
                    file_path,
                    self._reexported_targets(context, collection),
                )

        used = set(imported)
        changed = True
        while changed:
            changed = False
            for key, (_, targets) in aggregators.items():
                if key in used and not targets <= used:
                    used |= targets
                    changed = True

        unused = []
        for file_path in corpus:
            if filter_pattern and filter_pattern not in file_path:
                continue
            key = resolver.identity_key(file_path)
            if key in used:
                continue

            barrel = next(
                (path for agg_key, (path, targets) in aggregators.items() if key in targets and agg_key != key),
                None,
            )
            if barrel is not None:
                reason = UNUSED_BARREL.format(barrel=barrel)
            else:
                reason = NOT_IMPORTED
            unused.append(UnusedFile(file=file_path, reason=reason))

        return unused

    def _import_map(self, context: AnalysisContext, corpus: dict[str, FileCollection]) -> ImportMap:
        imports: dict[str, FileImports] = {}
        imported_by: dict[str, list[str]] = {}
        counts: Counter[str] = Counter()
        total_imports = 0

        for file_path, collection in corpus.items():
            file_imports = self._group(collection)
            imports[file_path] = file_imports
            total_imports += len(file_imports)

            for record in file_imports.all():
                resolved = context.resolve(record, file_path)
                # bare package specifiers resolve to themselves; not files
                if resolved is None or not os.path.isabs(resolved):
                    continue
                consumers = imported_by.setdefault(resolved, [])
                if file_path not in consumers:
                    consumers.append(file_path)
                counts[resolved] += 1

        ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        least = sorted(counts.items(), key=lambda item: (item[1], item[0]))

        stats = ImportMapStats(
            total_files=len(imports),
            total_imports=total_imports,
            most_imported_files=[FileCount(path, count) for path, count in ranked[: self.top_n]],
            least_imported_files=[FileCount(path, count) for path, count in least[: self.top_n]],
        )
        return ImportMap(imports=imports, imported_by=imported_by, stats=stats)

    async def build_import_map(
        self, search_path: str, progress: ProgressCallback | None = None
    ) -> ImportMap:
        """Build forward and reverse import edges for every file."""
        context, corpus = await self._scan(search_path, progress, "Building import map")
        return self._import_map(context, corpus)

    async def build_report(
        self, search_path: str, progress: ProgressCallback | None = None
    ) -> ProjectReport:
        """Analysis plus import map, from a single scan."""
        context, corpus = await self._scan(search_path, progress, "Building report")
        return ProjectReport(analysis=self._analysis(corpus), import_map=self._import_map(context, corpus))
