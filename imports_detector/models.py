"""Record types shared by the extractor, resolver and analyzer."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ImportType(str, Enum):
    """Import styles that can be detected."""

    STATIC = "static"
    DYNAMIC = "dynamic"
    LAZY = "lazy"
    REQUIRE = "require"


IMPORT_TYPES: tuple[ImportType, ...] = (
    ImportType.STATIC,
    ImportType.DYNAMIC,
    ImportType.LAZY,
    ImportType.REQUIRE,
)

DEFAULT_BINDING = "default"
NAMESPACE_BINDING = "*"


@dataclass(frozen=True)
class ImportBinding:
    """A single name bound by an import.

    ``imported`` is the name in the source module: ``"default"`` for a
    default import and ``"*"`` for a namespace or whole-module binding.
    """

    imported: str
    local: str


@dataclass
class ImportRecord:
    """Represents a single import statement."""

    module: str
    type: ImportType
    line: int
    column: int
    specifiers: list[str] = field(default_factory=list)
    kind: str = "default"  # named | default | namespace
    raw: str = ""
    bindings: tuple[ImportBinding, ...] = ()
    reexport: bool = False
    resolved_path: str | None = None

    @property
    def dedupe_key(self) -> tuple[str, int, str]:
        return (self.module, self.line, self.type.value)

    def to_dict(self) -> dict[str, Any]:
        data = {
            "module": self.module,
            "type": self.type.value,
            "line": self.line,
            "column": self.column,
            "specifiers": list(self.specifiers),
            "kind": self.kind,
            "raw": self.raw,
        }
        if self.reexport:
            data["reexport"] = True
        if self.resolved_path is not None:
            data["resolvedPath"] = self.resolved_path
        return data


@dataclass(frozen=True)
class ExportRecord:
    """Represents one exported name.

    ``source`` is set only for ``export ... from '...'`` re-exports.
    """

    name: str
    local_name: str
    kind: str = "named"  # named | default
    source: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data = {"name": self.name, "localName": self.local_name, "kind": self.kind}
        if self.source is not None:
            data["source"] = self.source
        return data


@dataclass
class FileImports:
    """All imports found in a single file, grouped by style."""

    file: str
    static: list[ImportRecord] = field(default_factory=list)
    dynamic: list[ImportRecord] = field(default_factory=list)
    lazy: list[ImportRecord] = field(default_factory=list)
    require: list[ImportRecord] = field(default_factory=list)

    def by_type(self, import_type: ImportType) -> list[ImportRecord]:
        return getattr(self, import_type.value)

    def all(self) -> list[ImportRecord]:
        return [*self.static, *self.dynamic, *self.lazy, *self.require]

    def __len__(self) -> int:
        return len(self.static) + len(self.dynamic) + len(self.lazy) + len(self.require)

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "static": [imp.to_dict() for imp in self.static],
            "dynamic": [imp.to_dict() for imp in self.dynamic],
            "lazy": [imp.to_dict() for imp in self.lazy],
            "require": [imp.to_dict() for imp in self.require],
        }


@dataclass
class FileCollection:
    """Imports and exports of one parsed file; the unit of the parse cache."""

    file: str
    imports: list[ImportRecord] = field(default_factory=list)
    exports: list[ExportRecord] = field(default_factory=list)

    @property
    def reexport_sources(self) -> list[str]:
        return [exp.source for exp in self.exports if exp.source is not None]


@dataclass
class ImporterResult:
    """A file that imports the searched module, with the matching imports."""

    file: str
    imports: list[ImportRecord] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file,
            "imports": [imp.to_dict() for imp in self.imports],
        }


@dataclass
class ProjectAnalysis:
    """Analysis results for a project."""

    total_files: int
    total_imports: int
    files: dict[str, FileImports]
    summary: dict[str, int]

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": {
                "totalFiles": self.total_files,
                "totalImports": self.total_imports,
                "breakdown": dict(self.summary),
            },
            "files": {path: imports.to_dict() for path, imports in self.files.items()},
        }


@dataclass
class FileCount:
    file_path: str
    import_count: int

    def to_dict(self) -> dict[str, Any]:
        return {"filePath": self.file_path, "importCount": self.import_count}


@dataclass
class ImportMapStats:
    total_files: int
    total_imports: int
    most_imported_files: list[FileCount] = field(default_factory=list)
    least_imported_files: list[FileCount] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalFiles": self.total_files,
            "totalImports": self.total_imports,
            "mostImportedFiles": [fc.to_dict() for fc in self.most_imported_files],
            "leastImportedFiles": [fc.to_dict() for fc in self.least_imported_files],
        }


@dataclass
class ImportMap:
    """Bidirectional import relationships.

    ``imports`` is the forward lookup (what each file imports) and
    ``imported_by`` the reverse lookup (which files import each target).
    """

    imports: dict[str, FileImports]
    imported_by: dict[str, list[str]]
    stats: ImportMapStats

    def to_dict(self) -> dict[str, Any]:
        return {
            "imports": {
                path: {k: v for k, v in fi.to_dict().items() if k != "file"}
                for path, fi in self.imports.items()
            },
            "importedBy": {path: list(files) for path, files in self.imported_by.items()},
            "stats": self.stats.to_dict(),
        }


@dataclass
class UnusedFile:
    file: str
    reason: str

    def to_dict(self) -> dict[str, Any]:
        return {"file": self.file, "reason": self.reason}


@dataclass(frozen=True)
class BarrelCheck:
    """Outcome of checking whether a file re-exports a target."""

    is_barrel: bool
    re_exported_names: frozenset[str] = frozenset()


@dataclass
class ProjectReport:
    """Full report: per-file analysis plus the import map, from one scan."""

    analysis: ProjectAnalysis
    import_map: ImportMap

    def to_dict(self) -> dict[str, Any]:
        data = self.analysis.to_dict()
        data["importedBy"] = self.import_map.to_dict()["importedBy"]
        data["stats"] = self.import_map.stats.to_dict()
        return data
