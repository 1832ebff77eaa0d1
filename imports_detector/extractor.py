"""Import/export record extraction from parsed sources."""

from imports_detector.models import (
    DEFAULT_BINDING,
    NAMESPACE_BINDING,
    ExportRecord,
    FileCollection,
    FileImports,
    ImportBinding,
    ImportRecord,
    ImportType,
)
from imports_detector.parser import ParsedSource
from imports_detector.syntax import (
    DeclarationExport,
    DefaultExport,
    DynamicImport,
    ExportAll,
    LazyImport,
    LocalExport,
    ReExport,
    RequireCall,
    StaticImport,
)


def _binding_kind(binding: ImportBinding) -> str:
    if binding.imported == NAMESPACE_BINDING:
        return "namespace"
    if binding.imported == DEFAULT_BINDING:
        return "default"
    return "named"


def _specifiers_and_kind(bindings: tuple[ImportBinding, ...]) -> tuple[list[str], str]:
    """Bound names plus the kind of the last binding ('default' when none)."""
    specifiers = []
    kind = "default"
    for binding in bindings:
        kind = _binding_kind(binding)
        specifiers.append(binding.imported if kind == "named" else binding.local)
    return specifiers, kind


def _record(
    source: str,
    import_type: ImportType,
    line: int,
    column: int,
    raw: str,
    bindings: tuple[ImportBinding, ...] = (),
    reexport: bool = False,
) -> ImportRecord:
    specifiers, kind = _specifiers_and_kind(bindings)
    return ImportRecord(
        module=source,
        type=import_type,
        line=line,
        column=column,
        specifiers=specifiers,
        kind=kind,
        raw=raw,
        bindings=bindings,
        reexport=reexport,
    )


class ImportExtractor:
    """Turns syntax variants into import and export records."""

    def _imports_by_type(self, parsed: ParsedSource) -> FileImports:
        file_imports = FileImports(file=parsed.path)

        for node in parsed.nodes:
            if isinstance(node, StaticImport):
                file_imports.static.append(
                    _record(node.source, ImportType.STATIC, node.line, node.column, node.text, node.bindings)
                )
            elif isinstance(node, ReExport):
                bindings = tuple(ImportBinding(local, exported) for local, exported in node.specifiers)
                file_imports.static.append(
                    _record(node.source, ImportType.STATIC, node.line, node.column, node.text, bindings, reexport=True)
                )
            elif isinstance(node, ExportAll):
                bindings = (ImportBinding(NAMESPACE_BINDING, node.alias or NAMESPACE_BINDING),)
                file_imports.static.append(
                    _record(node.source, ImportType.STATIC, node.line, node.column, node.text, bindings, reexport=True)
                )
            elif isinstance(node, DynamicImport):
                file_imports.dynamic.append(
                    _record(node.source, ImportType.DYNAMIC, node.line, node.column, node.text)
                )
            elif isinstance(node, LazyImport):
                file_imports.lazy.append(
                    _record(node.source, ImportType.LAZY, node.line, node.column, node.text)
                )
            elif isinstance(node, RequireCall):
                file_imports.require.append(
                    _record(node.source, ImportType.REQUIRE, node.line, node.column, node.text, node.bindings)
                )

        return file_imports

    def extract_all(
        self,
        parsed: ParsedSource,
        static: bool = True,
        dynamic: bool = True,
        lazy: bool = True,
        require: bool = True,
    ) -> FileImports:
        """Extract all imports from a parsed file, grouped by style.

        Disabled styles come back as empty lists.
        """
        file_imports = self._imports_by_type(parsed)
        if not static:
            file_imports.static = []
        if not dynamic:
            file_imports.dynamic = []
        if not lazy:
            file_imports.lazy = []
        if not require:
            file_imports.require = []
        return file_imports

    def get_all_imports(self, parsed: ParsedSource) -> list[ImportRecord]:
        """All imports of a file, flattened: static, dynamic, lazy, require."""
        return self._imports_by_type(parsed).all()

    def extract_exports(self, parsed: ParsedSource) -> list[ExportRecord]:
        """Extract all exports from a file (used for barrel file detection)."""
        exports: list[ExportRecord] = []

        for node in parsed.nodes:
            if isinstance(node, ReExport):
                for local, exported in node.specifiers:
                    kind = "default" if exported == DEFAULT_BINDING else "named"
                    exports.append(ExportRecord(exported, local, kind, node.source))
            elif isinstance(node, ExportAll):
                name = node.alias or NAMESPACE_BINDING
                exports.append(ExportRecord(name, NAMESPACE_BINDING, "named", node.source))
            elif isinstance(node, LocalExport):
                for local, exported in node.specifiers:
                    kind = "default" if exported == DEFAULT_BINDING else "named"
                    exports.append(ExportRecord(exported, local, kind))
            elif isinstance(node, DeclarationExport):
                exports.extend(ExportRecord(name, name) for name in node.names)
            elif isinstance(node, DefaultExport):
                exports.append(ExportRecord(DEFAULT_BINDING, node.local_name, "default"))

        return exports

    def extract_collection(self, parsed: ParsedSource) -> FileCollection:
        return FileCollection(
            file=parsed.path,
            imports=self.get_all_imports(parsed),
            exports=self.extract_exports(parsed),
        )
