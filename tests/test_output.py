"""Tests for the text and JSON formatters."""

import json

from imports_detector.models import (
    FileCount,
    FileImports,
    ImporterResult,
    ImportMap,
    ImportMapStats,
    ImportRecord,
    ImportType,
    ProjectAnalysis,
    UnusedFile,
)
from imports_detector.output import (
    format_analysis_text,
    format_find_results_json,
    format_find_results_text,
    format_import_map_text,
    format_unused_json,
    format_unused_text,
    write_output,
)


def _record(module="./components/Test", import_type=ImportType.STATIC, line=2, **kwargs):
    return ImportRecord(module=module, type=import_type, line=line, column=0, **kwargs)


class TestFindResults:
    def test_text(self):
        results = [
            ImporterResult(
                file="/app/src/App.tsx",
                imports=[_record(specifiers=["Test", "Other"], kind="named")],
            )
        ]

        text = format_find_results_text(results, "Test")

        assert text.startswith('Found 1 file importing "Test"')
        assert "/app/src/App.tsx" in text
        assert "  [STATIC] ./components/Test (named): Test, Other (line 2)" in text

    def test_text_empty(self):
        assert format_find_results_text([], "Nope") == 'No files found importing "Nope"\n'

    def test_json(self):
        results = [ImporterResult(file="/a.ts", imports=[_record(import_type=ImportType.LAZY)])]

        data = json.loads(format_find_results_json(results, "Test"))

        assert data["query"] == "Test"
        assert data["totalFiles"] == 1
        assert data["files"][0]["imports"][0]["type"] == "lazy"


class TestAnalysisText:
    def test_summary_and_empty_file(self):
        analysis = ProjectAnalysis(
            total_files=2,
            total_imports=1,
            files={
                "/a.ts": FileImports(file="/a.ts", require=[_record("fs", ImportType.REQUIRE, 1)]),
                "/b.ts": FileImports(file="/b.ts"),
            },
            summary={"static": 0, "dynamic": 0, "lazy": 0, "require": 1},
        )

        text = format_analysis_text(analysis)

        assert "Static: 0 | Dynamic: 0 | Lazy: 0 | Require: 1" in text
        assert "[REQUIRE] fs" in text
        assert "  No imports found" in text


class TestUnused:
    def test_text(self):
        text = format_unused_text([UnusedFile("/src/Old.tsx", "Not imported by any file")])

        assert "Total unused files: 1" in text
        assert "[UNUSED] /src/Old.tsx" in text
        assert "   Reason: Not imported by any file" in text

    def test_text_none_unused(self):
        assert "[OK] Every file is imported somewhere" in format_unused_text([])

    def test_json(self):
        data = json.loads(format_unused_json([UnusedFile("/x.ts", "Not imported by any file")]))
        assert data == {"totalUnused": 1, "files": [{"file": "/x.ts", "reason": "Not imported by any file"}]}


class TestImportMapText:
    def test_lists_consumers(self):
        import_map = ImportMap(
            imports={},
            imported_by={"/src/util.ts": ["/src/a.ts", "/src/b.ts"]},
            stats=ImportMapStats(
                total_files=3,
                total_imports=2,
                most_imported_files=[FileCount("/src/util.ts", 2)],
                least_imported_files=[FileCount("/src/util.ts", 2)],
            ),
        )

        text = format_import_map_text(import_map)

        assert "/src/util.ts <- 2 files" in text
        assert "Most imported files:" in text
        assert "      2  /src/util.ts" in text


class TestWriteOutput:
    def test_creates_parents_and_newline(self, tmp_path):
        path = write_output("content", str(tmp_path / "nested" / "out.txt"))

        assert path.read_text(encoding="utf-8") == "content\n"
