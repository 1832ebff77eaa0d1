"""Pytest configuration and fixtures."""

import asyncio
import textwrap
from pathlib import Path

import pytest

from imports_detector.analyzer import ImportAnalyzer
from imports_detector.config import DetectorOptions

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_project():
    """Checked-in sample project (React components and pages)."""
    return FIXTURES_DIR / "sample-project"


@pytest.fixture
def make_project(tmp_path):
    """Create a throwaway project from a {relative path: source} mapping.

    Sources are dedented, so tests can write them as indented literals.
    Returns the project root.
    """

    def _make(files: dict[str, str]) -> Path:
        for rel_path, source in files.items():
            path = tmp_path / rel_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(source).lstrip("\n"), encoding="utf-8")
        return tmp_path

    return _make


@pytest.fixture
def run():
    """Run an analyzer coroutine to completion."""
    return asyncio.run


@pytest.fixture
def analyzer_for():
    """Build an ImportAnalyzer from DetectorOptions keyword arguments."""

    def _build(**options) -> ImportAnalyzer:
        return ImportAnalyzer(DetectorOptions(**options))

    return _build


def files_of(results) -> list[str]:
    """Basenames of the files in a find result, in result order."""
    return [Path(result.file).name for result in results]
