"""Consumer graph walker: who imports a barrel, and uses what it forwards?"""

from imports_detector.context import AnalysisContext
from imports_detector.models import (
    DEFAULT_BINDING,
    NAMESPACE_BINDING,
    FileCollection,
    ImporterResult,
    ImportRecord,
)


def uses_forwarded_name(record: ImportRecord, names: frozenset[str]) -> bool:
    """Whether an import of a barrel can reach one of ``names``.

    Imports without bindings, and namespace or whole-module bindings, match
    conservatively because their downstream usage is unknown.
    """
    if not record.bindings:
        return True

    for binding in record.bindings:
        if binding.imported == NAMESPACE_BINDING:
            return True
        if binding.imported == DEFAULT_BINDING:
            if DEFAULT_BINDING in names:
                return True
        elif binding.imported in names or NAMESPACE_BINDING in names:
            return True
    return False


class ConsumerWalker:
    """Finds the files that consume a barrel, using the already-parsed corpus."""

    def __init__(self, context: AnalysisContext):
        self.context = context

    def find_consumers(
        self,
        barrel_file: str,
        re_exported_names: frozenset[str],
        corpus: dict[str, FileCollection],
        visited: set[str],
    ) -> list[ImporterResult]:
        """Files importing ``barrel_file`` through one of its forwarded names.

        ``visited`` holds identity keys of barrels already expanded in this
        operation; expanding one twice returns nothing, which is what stops
        circular barrel chains.
        """
        resolver = self.context.resolver
        key = resolver.identity_key(barrel_file)
        if key in visited:
            return []
        visited.add(key)

        results = []
        for file_path, collection in corpus.items():
            if resolver.paths_match(file_path, barrel_file):
                continue
            matching = [
                record
                for record in collection.imports
                if self.context.resolves_to(record, file_path, barrel_file)
                and uses_forwarded_name(record, re_exported_names)
            ]
            if matching:
                results.append(ImporterResult(file=file_path, imports=matching))
        return results
