"""Validation result reporting and formatting.

Converts structural validation results into formats for the console,
logs, and machine-readable output.
"""

import json
from datetime import datetime
from pathlib import Path

from rich.console import Console
from rich.table import Table

from orgaudit.validation.findings import Finding, ValidationResult

type ReportFormat = str  # "table" | "json" | "summary"

console = Console()


def finding_to_dict(finding: Finding) -> dict[str, str | list[str] | None]:
    return {
        "kind": finding.kind.value,
        "severity": finding.severity.value,
        "message": finding.message,
        "employee_ids": list(finding.employee_ids),
        "related_id": finding.related_id,
    }


def format_validation_result(
    result: ValidationResult,
    output_format: ReportFormat = "table",
) -> str:
    match output_format:
        case "json":
            return _to_json(result)
        case "summary":
            return _to_summary(result)
        case "table" | _:
            return _to_table(result)


def _to_json(result: ValidationResult) -> str:
    report = {
        "timestamp": datetime.now().isoformat(),
        "valid": result.is_valid,
        "error_count": result.error_count,
        "warning_count": result.warning_count,
        "errors": [finding_to_dict(f) for f in result.errors],
        "warnings": [finding_to_dict(f) for f in result.warnings],
    }
    return json.dumps(report, indent=2)


def _to_summary(result: ValidationResult) -> str:
    status = "PASSED" if result.is_valid else "FAILED"
    lines = [
        f"Validation {status}: {result.error_count} error(s), "
        f"{result.warning_count} warning(s)"
    ]
    for f in result.errors:
        lines.append(f"  ERROR: {f.message}")
    for f in result.warnings:
        lines.append(f"  WARNING: {f.message}")
    return "\n".join(lines)


def _to_table(result: ValidationResult) -> str:
    table = Table(title="Organization Data Validation")
    table.add_column("Severity", style="bold")
    table.add_column("Kind", style="cyan")
    table.add_column("Message")

    for f in result.errors:
        table.add_row("[red]ERROR[/red]", f.kind.value, f.message)
    for f in result.warnings:
        table.add_row("[yellow]WARNING[/yellow]", f.kind.value, f.message)

    buf = Console(file=None, force_terminal=False)
    with buf.capture() as capture:
        buf.print(table)
    return capture.get()


def save_report(
    report: str,
    output_dir: Path,
    name: str = "validation",
    fmt: ReportFormat = "json",
) -> Path:
    """Persist a formatted validation report to disk."""
    output_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    match fmt:
        case "json":
            path = output_dir / f"{name}_{timestamp}.json"
        case _:
            path = output_dir / f"{name}_{timestamp}.txt"

    path.write_text(report)
    console.print(f"  Report saved: {path}")
    return path
