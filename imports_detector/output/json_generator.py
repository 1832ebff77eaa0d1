"""JSON output - structures mirror the record types field for field."""

import json
from pathlib import Path

from imports_detector.models import (
    ImporterResult,
    ImportMap,
    ProjectAnalysis,
    ProjectReport,
    UnusedFile,
)


def format_find_results_json(results: list[ImporterResult], query: str | None) -> str:
    data = {
        "query": query,
        "totalFiles": len(results),
        "files": [result.to_dict() for result in results],
    }
    return json.dumps(data, indent=2)


def format_analysis_json(analysis: ProjectAnalysis) -> str:
    return json.dumps(analysis.to_dict(), indent=2)


def format_unused_json(unused: list[UnusedFile]) -> str:
    data = {
        "totalUnused": len(unused),
        "files": [item.to_dict() for item in unused],
    }
    return json.dumps(data, indent=2)


def format_import_map_json(import_map: ImportMap) -> str:
    return json.dumps(import_map.to_dict(), indent=2)


def format_report_json(report: ProjectReport) -> str:
    return json.dumps(report.to_dict(), indent=2)


def write_output(content: str, output_path: str) -> Path:
    """Write formatted output to a file, creating parent directories."""
    path = Path(output_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(content)
        if not content.endswith("\n"):
            f.write("\n")
    return path
