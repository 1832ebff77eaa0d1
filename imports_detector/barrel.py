"""Barrel file tracing: does an aggregator module forward a target module?"""

from imports_detector.context import AnalysisContext
from imports_detector.models import (
    DEFAULT_BINDING,
    NAMESPACE_BINDING,
    BarrelCheck,
    FileCollection,
)


def forwarded_names(imported: str, exported: str, forwarded: frozenset[str] | None) -> set[str]:
    """Names a single export makes available, given what reaches it.

    Args:
        imported: Name in the target module (``*`` for namespace/star)
        exported: Name the barrel exports it under (``*`` for ``export *``)
        forwarded: Names the target itself forwards, or None for all names
    """
    if imported == NAMESPACE_BINDING:
        if exported != NAMESPACE_BINDING:
            return {exported}
        if forwarded is None:
            return {NAMESPACE_BINDING}
        # export * never forwards the default export
        return set(forwarded) - {DEFAULT_BINDING}

    if (
        forwarded is None
        or imported in forwarded
        or (NAMESPACE_BINDING in forwarded and imported != DEFAULT_BINDING)
    ):
        return {exported}
    return set()


class BarrelTracer:
    """Decides whether a file re-exports a target, and under which names."""

    def __init__(self, context: AnalysisContext):
        self.context = context

    def is_barrel_for(
        self,
        collection: FileCollection,
        target: str,
        forwarded: frozenset[str] | None = None,
    ) -> BarrelCheck:
        """Check whether ``collection`` re-exports ``target``.

        A file that imports the target but never exports what it imported
        (side-effect or local use only) is not a barrel for it.
        """
        context = self.context
        resolver = context.resolver

        # local name -> name in the target module
        local_bindings: dict[str, str] = {}
        for record in collection.imports:
            if record.reexport:
                continue
            if not context.resolves_to(record, collection.file, target):
                continue
            for binding in record.bindings:
                local_bindings[binding.local] = binding.imported

        names: set[str] = set()
        for export in collection.exports:
            if export.source is not None:
                resolved = context.resolve_specifier(export.source, collection.file)
                if resolved is None or not resolver.paths_match(resolved, target):
                    continue
                names |= forwarded_names(export.local_name, export.name, forwarded)
            elif export.local_name in local_bindings:
                names |= forwarded_names(local_bindings[export.local_name], export.name, forwarded)

        return BarrelCheck(is_barrel=bool(names), re_exported_names=frozenset(names))
