"""Output formatters for find, analysis, unused-file and import-map results."""

from imports_detector.output.json_generator import (
    format_analysis_json,
    format_find_results_json,
    format_import_map_json,
    format_report_json,
    format_unused_json,
    write_output,
)
from imports_detector.output.text_generator import (
    format_analysis_text,
    format_find_results_text,
    format_import_map_text,
    format_report_text,
    format_unused_text,
)

__all__ = [
    "format_analysis_json",
    "format_analysis_text",
    "format_find_results_json",
    "format_find_results_text",
    "format_import_map_json",
    "format_import_map_text",
    "format_report_json",
    "format_report_text",
    "format_unused_json",
    "format_unused_text",
    "write_output",
]
