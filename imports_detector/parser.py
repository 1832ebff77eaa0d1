"""Tree-sitter based parser for JavaScript/TypeScript sources."""

import os
from dataclasses import dataclass
from functools import cached_property
from typing import Any

from tree_sitter_language_pack import get_parser

from imports_detector.exceptions import ParseError
from imports_detector.syntax import collect_syntax_nodes

DIALECTS = {
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "tsx",
    ".js": "javascript",
    ".jsx": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
}


@dataclass
class ParsedSource:
    """A parsed file: raw bytes, the tree-sitter tree and its dialect."""

    path: str
    source: bytes
    tree: Any
    dialect: str

    @cached_property
    def nodes(self) -> list:
        """Import/export syntax variants, collected once per parse."""
        return collect_syntax_nodes(self.tree)


class CodeParser:
    """Parses source code into a tree-sitter syntax tree."""

    def __init__(self):
        self.parsers: dict[str, Any] = {}

    def _get_parser(self, dialect: str) -> Any:
        parser = self.parsers.get(dialect)
        if parser is None:
            try:
                parser = get_parser(dialect)
            except Exception as e:
                raise RuntimeError(
                    f"Failed to load tree-sitter grammar for {dialect}: {e}\n"
                    "Please try: pip install --force-reinstall tree-sitter-language-pack"
                ) from e
            self.parsers[dialect] = parser
        return parser

    @staticmethod
    def detect_dialect(file_path: str) -> str:
        """Grammar dialect for a file, chosen by extension."""
        ext = os.path.splitext(file_path)[1].lower()
        return DIALECTS.get(ext, "javascript")

    @staticmethod
    def can_parse(file_path: str) -> bool:
        return os.path.splitext(file_path)[1].lower() in DIALECTS

    def parse_file(self, file_path: str) -> ParsedSource:
        """Parse a file to a syntax tree."""
        try:
            with open(file_path, "rb") as f:
                content = f.read()
        except OSError as e:
            raise ParseError(f"Failed to read file {file_path}: {e}", file_path) from e

        return self.parse_source(content, file_path)

    def parse_source(self, source: str | bytes, file_path: str) -> ParsedSource:
        """Parse source code to a syntax tree.

        Raises:
            ParseError: if the tree contains syntax errors
        """
        if isinstance(source, str):
            source = source.encode("utf-8")

        dialect = self.detect_dialect(file_path)
        tree = self._get_parser(dialect).parse(source)

        root = tree.root_node
        if root.has_error:
            bad = _first_error_node(root)
            line = bad.start_point[0] + 1 if bad is not None else None
            where = f" at line {line}" if line else ""
            raise ParseError(
                f"Failed to parse source code in {file_path}: syntax error{where}",
                file_path,
                line,
            )

        return ParsedSource(path=file_path, source=source, tree=tree, dialect=dialect)


def _first_error_node(root: Any) -> Any | None:
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == "ERROR" or node.is_missing:
            return node
        if node.has_error:
            stack.extend(reversed(node.children))
    return None
