"""File discovery - walks a directory tree and returns candidate source files."""

import fnmatch
import os
import re

from imports_detector.config import DEFAULT_EXCLUDE_PATTERNS, DEFAULT_INCLUDE_PATTERNS
from imports_detector.exceptions import DiscoveryError
from imports_detector.utils.logging import logger


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` alternatives: ``*.{js,ts}`` -> ``*.js``, ``*.ts``."""
    match = re.search(r"\{([^{}]*)\}", pattern)
    if not match:
        return [pattern]
    expanded = []
    for option in match.group(1).split(","):
        expanded.extend(expand_braces(pattern[: match.start()] + option + pattern[match.end() :]))
    return expanded


def glob_match(rel_path: str, pattern: str) -> bool:
    """fnmatch with a leading ``**/`` also matching zero directories."""
    if fnmatch.fnmatch(rel_path, pattern):
        return True
    if pattern.startswith("**/"):
        return glob_match(rel_path, pattern[3:])
    return False


class FileDiscovery:
    """Finds all relevant files in a directory."""

    def __init__(
        self,
        include_patterns: list[str] | None = None,
        exclude_patterns: list[str] | None = None,
        follow_symlinks: bool = False,
    ):
        include = include_patterns or DEFAULT_INCLUDE_PATTERNS
        exclude = exclude_patterns or DEFAULT_EXCLUDE_PATTERNS

        self.include_patterns = [p for pattern in include for p in expand_braces(pattern.strip())]
        self.exclude_patterns = [p for pattern in exclude for p in expand_braces(pattern.strip())]
        self.follow_symlinks = follow_symlinks

        # Patterns like "**/node_modules/**" prune whole directories during the walk
        self.dir_patterns = [p[:-3] for p in self.exclude_patterns if p.endswith("/**")]

    def _skip_dir(self, rel_dir: str) -> bool:
        return any(glob_match(rel_dir, pattern) for pattern in self.dir_patterns)

    def _included(self, rel_path: str) -> bool:
        if not any(glob_match(rel_path, pattern) for pattern in self.include_patterns):
            return False
        name = rel_path.rsplit("/", 1)[-1]
        for pattern in self.exclude_patterns:
            if glob_match(rel_path, pattern) or fnmatch.fnmatch(name, pattern):
                return False
        return True

    def find_files(self, search_path: str) -> list[str]:
        """Find all files matching the patterns, as sorted absolute paths.

        Raises:
            DiscoveryError: if the search path does not exist or cannot be read
        """
        root = os.path.abspath(search_path)

        if not os.path.exists(root):
            raise DiscoveryError(f"Path does not exist: {search_path}", root)

        if os.path.isfile(root):
            return [root]

        if not os.access(root, os.R_OK | os.X_OK):
            raise DiscoveryError(f"Path is not readable: {search_path}", root)

        def on_error(error: OSError) -> None:
            if os.path.abspath(error.filename or "") == root:
                raise DiscoveryError(f"Failed to find files: {error}", root) from error
            logger.debug(f"Skipping unreadable directory {error.filename}: {error}")

        files = []
        for dirpath, dirnames, filenames in os.walk(root, onerror=on_error, followlinks=self.follow_symlinks):
            rel_dir = os.path.relpath(dirpath, root).replace("\\", "/")
            prefix = "" if rel_dir == "." else rel_dir + "/"

            dirnames[:] = [d for d in dirnames if not self._skip_dir(prefix + d)]

            for filename in filenames:
                rel_path = prefix + filename
                if not self._included(rel_path):
                    continue
                file_path = os.path.join(dirpath, filename)
                if not self.follow_symlinks and os.path.islink(file_path):
                    continue
                files.append(file_path)

        return sorted(files)

