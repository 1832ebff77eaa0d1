"""Module resolution for TypeScript/JavaScript projects with tsconfig.json support.

Maps an import specifier to the file an editor's "go to definition" would
open. Resolution never raises: anything that cannot be mapped to an
existing file resolves to None.
"""

import os
import platform
import re
from pathlib import Path

import json5

from imports_detector.config import DEFAULT_EXTENSIONS
from imports_detector.utils.logging import logger

IS_WINDOWS = platform.system() == "Windows"

MANIFEST_NAMES = ("tsconfig.json", "jsconfig.json")


class ModuleResolver:
    """Resolves module imports for TypeScript/JavaScript projects."""

    def __init__(self, extensions: list[str] | None = None, base_url: str | None = None):
        self.extensions: list[str] = list(extensions or DEFAULT_EXTENSIONS)
        self.base_url = os.path.abspath(base_url) if base_url else None
        # Longest first so ".d.ts"-style compound extensions strip whole
        self._strip_order = sorted(self.extensions, key=len, reverse=True)

    def resolve(self, specifier: str, from_file: str) -> str | None:
        """Resolve an import specifier to an absolute file path.

        Args:
            specifier: The import specifier (e.g., './components/Test')
            from_file: Absolute path of the file containing the import

        Returns:
            Resolved absolute path, the specifier itself for bare package
            imports, or None if nothing on disk matches.
        """
        if not specifier:
            return None

        try:
            normalized = re.sub(r"/+", "/", specifier.replace("\\", "/"))

            if self._is_relative(normalized):
                return self._resolve_relative(normalized, from_file)

            if os.path.isabs(normalized):
                return self.probe(normalized)

            if "/" not in normalized and not normalized.startswith("."):
                return specifier

            if self.base_url:
                resolved = self.probe(os.path.join(self.base_url, normalized))
                if resolved:
                    return resolved

            return self._resolve_relative(normalized, from_file)
        except (OSError, ValueError) as e:
            logger.debug(f"Could not resolve '{specifier}' from {from_file}: {e}")
            return None

    @staticmethod
    def _is_relative(specifier: str) -> bool:
        return specifier.startswith(("./", "../")) or specifier in (".", "..")

    def _resolve_relative(self, specifier: str, from_file: str) -> str | None:
        from_dir = os.path.dirname(os.path.abspath(from_file))
        return self.probe(os.path.join(from_dir, specifier))

    def probe(self, path: str) -> str | None:
        """Find the concrete file a path denotes.

        Tries, in order: the path as given when it already carries a known
        extension, the path with each extension appended, then
        ``index.<ext>`` inside the path treated as a directory.
        """
        path = os.path.normpath(os.path.abspath(path))

        ext = os.path.splitext(path)[1]
        if ext in self.extensions and self._is_file(path):
            return path

        for ext in self.extensions:
            candidate = path + ext
            if self._is_file(candidate):
                return candidate

        for ext in self.extensions:
            candidate = os.path.join(path, f"index{ext}")
            if self._is_file(candidate):
                return candidate

        return None

    @staticmethod
    def _is_file(path: str) -> bool:
        try:
            return os.path.isfile(path)
        except (OSError, ValueError):
            return False

    @staticmethod
    def normalize_path(file_path: str) -> str:
        """Unify separators, collapse duplicate slashes and drop a leading ./"""
        normalized = re.sub(r"/+", "/", file_path.replace("\\", "/"))
        if normalized.startswith("./"):
            normalized = normalized[2:]
        return normalized

    def strip_extension(self, file_path: str) -> str:
        for ext in self._strip_order:
            if file_path.endswith(ext):
                return file_path[: -len(ext)]
        return file_path

    def identity_key(self, file_path: str) -> str:
        """Normalized form under which two paths denote the same file."""
        key = self.normalize_path(file_path)
        if IS_WINDOWS:
            key = key.lower()
        return self.strip_extension(key)

    def paths_match(self, path1: str, path2: str) -> bool:
        """Compare two paths for equality, handling:
        - Different separators (\\ vs /)
        - Extension variations (.ts vs .tsx)
        - Case sensitivity (case folded on Windows only)
        """
        return self.identity_key(path1) == self.identity_key(path2)

    def is_index_file(self, file_path: str) -> bool:
        """True for aggregator-convention files (``index.<ext>``)."""
        return self.identity_key(os.path.basename(file_path)) == "index"


def _read_manifest_base_url(manifest: Path) -> str | None:
    """Return the absolute baseUrl a manifest declares, or None."""
    try:
        config = json5.loads(manifest.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.debug(f"Ignoring unreadable manifest {manifest}: {e}")
        return None

    if not isinstance(config, dict):
        return None
    compiler_opts = config.get("compilerOptions")
    if not isinstance(compiler_opts, dict):
        return None
    base_url = compiler_opts.get("baseUrl")
    if not isinstance(base_url, str) or not base_url:
        return None

    return os.path.normpath(os.path.join(str(manifest.parent.resolve()), base_url))


def discover_base_url(
    search_root: str,
    tsconfig_path: str | None = None,
    base_url: str | None = None,
) -> str | None:
    """Work out the base directory for non-relative specifiers.

    An explicit ``base_url`` wins (relative to the working directory). An
    explicit ``tsconfig_path`` is read next. Otherwise the search walks up
    from ``search_root`` to the first tsconfig.json/jsconfig.json that
    declares ``compilerOptions.baseUrl``.
    """
    if base_url:
        return os.path.abspath(base_url)

    if tsconfig_path:
        manifest = Path(tsconfig_path)
        if manifest.is_dir():
            manifest = manifest / MANIFEST_NAMES[0]
        if manifest.is_file():
            return _read_manifest_base_url(manifest)
        logger.debug(f"tsconfig not found at {tsconfig_path}")
        return None

    current = Path(search_root).resolve()
    if current.is_file():
        current = current.parent

    while True:
        for name in MANIFEST_NAMES:
            manifest = current / name
            if manifest.is_file():
                resolved = _read_manifest_base_url(manifest)
                if resolved:
                    logger.debug(f"Using baseUrl {resolved} from {manifest}")
                    return resolved
        if current == current.parent:
            return None
        current = current.parent
