"""Human-readable text output (NO EMOJIS for Windows CP1252)."""

from imports_detector.models import (
    IMPORT_TYPES,
    ImporterResult,
    ImportMap,
    ImportRecord,
    ProjectAnalysis,
    ProjectReport,
    UnusedFile,
)

RULE_WIDTH = 50


def _format_import(imp: ImportRecord, width: int = 0) -> str:
    label = f"[{imp.type.value.upper()}]".ljust(width)
    line = f"  {label} {imp.module}"
    if imp.specifiers:
        line += f" ({imp.kind or 'named'}): {', '.join(imp.specifiers)}"
    return line + f" (line {imp.line})"


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def format_find_results_text(results: list[ImporterResult], query: str | None) -> str:
    if not results:
        return f'No files found importing "{query}"\n'

    lines = [f'Found {_plural(len(results), "file")} importing "{query}"', ""]
    for result in results:
        lines.append(result.file)
        lines.extend(_format_import(imp) for imp in result.imports)
        lines.append("")
    return "\n".join(lines)


def _summary_lines(analysis: ProjectAnalysis) -> list[str]:
    summary = analysis.summary
    return [
        "Summary:",
        f"  Total Files: {analysis.total_files}",
        f"  Total Imports: {analysis.total_imports}",
        "  " + " | ".join(f"{t.value.capitalize()}: {summary.get(t.value, 0)}" for t in IMPORT_TYPES),
    ]


def format_analysis_text(analysis: ProjectAnalysis) -> str:
    lines = ["Import Analysis Report", "=" * RULE_WIDTH, ""]
    lines.extend(_summary_lines(analysis))
    lines.extend(["", "-" * RULE_WIDTH, ""])

    for file_path, file_imports in analysis.files.items():
        lines.append(file_path)
        imports = file_imports.all()
        if not imports:
            lines.append("  No imports found")
        else:
            lines.extend(_format_import(imp, width=9) for imp in imports)
        lines.append("")

    return "\n".join(lines)


def format_unused_text(unused: list[UnusedFile]) -> str:
    lines = ["Unused Files Report", "=" * RULE_WIDTH, f"Total unused files: {len(unused)}", ""]

    if not unused:
        lines.append("[OK] Every file is imported somewhere")
        return "\n".join(lines) + "\n"

    for item in unused:
        lines.append(f"[UNUSED] {item.file}")
        lines.append(f"   Reason: {item.reason}")
    lines.append("")
    return "\n".join(lines)


def _stats_lines(import_map: ImportMap) -> list[str]:
    stats = import_map.stats
    lines = [
        f"  Total Files: {stats.total_files}",
        f"  Total Imports: {stats.total_imports}",
    ]
    if stats.most_imported_files:
        lines.extend(["", "Most imported files:"])
        lines.extend(f"  {fc.import_count:>5}  {fc.file_path}" for fc in stats.most_imported_files)
    if stats.least_imported_files:
        lines.extend(["", "Least imported files:"])
        lines.extend(f"  {fc.import_count:>5}  {fc.file_path}" for fc in stats.least_imported_files)
    return lines


def format_import_map_text(import_map: ImportMap) -> str:
    lines = ["Import Map", "=" * RULE_WIDTH, ""]
    lines.extend(_stats_lines(import_map))
    lines.extend(["", "-" * RULE_WIDTH, ""])

    for target, consumers in sorted(import_map.imported_by.items()):
        lines.append(f"{target} <- {_plural(len(consumers), 'file')}")
        lines.extend(f"  {consumer}" for consumer in consumers)
        lines.append("")

    return "\n".join(lines)


def format_report_text(report: ProjectReport) -> str:
    lines = [format_analysis_text(report.analysis).rstrip("\n"), "", "-" * RULE_WIDTH, "", "Import Statistics:"]
    lines.extend(_stats_lines(report.import_map))
    lines.append("")
    return "\n".join(lines)
