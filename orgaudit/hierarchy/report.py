"""Generate the audit report from analyzer results."""

import pandas as pd
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from orgaudit.config import PolicyConfig
from orgaudit.hierarchy.analyzer import AnalysisStatistics, OrganizationAnalyzer
from orgaudit.hierarchy.compensation import SalaryAnalysisResult
from orgaudit.hierarchy.org_structure import ReportingLineResult

type ResultFrames = dict[str, pd.DataFrame]

NAME_WIDTH = 25

_SALARY_COLUMNS = [
    "employee_id", "name", "actual_salary", "average_subordinate_salary",
    "min_expected_salary", "max_expected_salary", "status", "deviation",
]
_LINE_COLUMNS = ["employee_id", "name", "reporting_line_length", "max_allowed_length", "excess_length"]


def _truncate(text: str, width: int = NAME_WIDTH) -> str:
    return text if len(text) <= width else text[: width - 3] + "..."


def _salary_frame(results: list[SalaryAnalysisResult]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "employee_id": r.manager.employee_id,
                "name": r.manager.full_name,
                "actual_salary": r.actual_salary,
                "average_subordinate_salary": r.average_subordinate_salary,
                "min_expected_salary": r.min_expected_salary,
                "max_expected_salary": r.max_expected_salary,
                "status": r.status.value,
                "deviation": r.deviation,
            }
            for r in results
        ],
        columns=_SALARY_COLUMNS,
    )


def _reporting_frame(results: list[ReportingLineResult]) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "employee_id": r.employee.employee_id,
                "name": r.employee.full_name,
                "reporting_line_length": r.reporting_line_length,
                "max_allowed_length": r.max_allowed_length,
                "excess_length": r.excess_length,
            }
            for r in results
        ],
        columns=_LINE_COLUMNS,
    )


def build_result_frames(analyzer: OrganizationAnalyzer) -> ResultFrames:
    """Tabular views of every violation, keyed by report section."""
    return {
        "underpaid_managers": _salary_frame(analyzer.underpaid_managers()),
        "overpaid_managers": _salary_frame(analyzer.overpaid_managers()),
        "long_reporting_lines": _reporting_frame(analyzer.long_reporting_lines()),
    }


def _config_section(config: PolicyConfig) -> Panel:
    body = (
        f"Minimum manager salary: {config.min_above_pct:.0%} above subordinate average\n"
        f"Maximum manager salary: {config.max_above_pct:.0%} above subordinate average\n"
        f"Maximum reporting line depth: {config.max_reporting_depth} managers to CEO"
    )
    return Panel(body, title="Configuration", expand=False)


def _salary_table(title: str, results: list[SalaryAnalysisResult], limit_label: str) -> Table | str:
    if not results:
        return f"[green]✓ {title}: no issues found.[/green]"

    table = Table(title=title)
    table.add_column("Manager Name", style="cyan")
    table.add_column("Current Salary", justify="right")
    table.add_column(limit_label, justify="right")
    table.add_column("Deviation", justify="right", style="bold")

    for r in results:
        limit = r.min_expected_salary if limit_label == "Min Required" else r.max_expected_salary
        table.add_row(
            _truncate(r.manager.full_name),
            f"{r.actual_salary:,.2f}",
            f"{limit:,.2f}",
            f"{r.deviation:,.2f}",
        )
    return table


def _reporting_table(results: list[ReportingLineResult]) -> Table | str:
    title = "Employees With Reporting Line Too Long"
    if not results:
        return f"[green]✓ {title}: no issues found.[/green]"

    table = Table(title=title)
    table.add_column("Employee Name", style="cyan")
    table.add_column("Line Length", justify="right")
    table.add_column("Excess", justify="right", style="bold")
    for r in results:
        table.add_row(
            _truncate(r.employee.full_name, 30),
            str(r.reporting_line_length),
            str(r.excess_length),
        )
    return table


def _statistics_table(stats: AnalysisStatistics) -> Table:
    table = Table(title="Summary Statistics", show_header=False)
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_row("Total Employees", str(stats.total_employees))
    table.add_row("Total Managers", str(stats.total_managers))
    table.add_row("Underpaid Managers", str(stats.underpaid_manager_count))
    table.add_row("Overpaid Managers", str(stats.overpaid_manager_count))
    table.add_row("Long Reporting Lines", str(stats.long_reporting_line_count))
    table.add_row("Max Reporting Depth", str(stats.max_reporting_line_depth))
    table.add_row("Salary Compliance Rate", f"{stats.compliance_rate:.1f}%")
    table.add_row("Total Issues Found", str(stats.total_issues))
    table.add_row(
        "Execution Time", f"{stats.execution_time.total_seconds() * 1000:.0f} ms"
    )
    return table


def render_report(analyzer: OrganizationAnalyzer, console: Console | None = None) -> AnalysisStatistics:
    """Print the full audit report and return the statistics it was built from."""
    console = console or Console()
    stats = analyzer.run_analysis()

    console.rule("[bold]Organization Structure Analysis Report[/bold]")
    console.print(f"  Analysis Date: {stats.analyzed_at:%Y-%m-%d %H:%M:%S}")
    console.print(f"  Total Employees: {stats.total_employees}\n")
    console.print(_config_section(analyzer.config))
    console.print(
        _salary_table("Managers Earning Less Than Required", analyzer.underpaid_managers(), "Min Required")
    )
    console.print(
        _salary_table("Managers Earning More Than Allowed", analyzer.overpaid_managers(), "Max Allowed")
    )
    console.print(_reporting_table(analyzer.long_reporting_lines()))
    console.print(_statistics_table(stats))

    if stats.has_issues:
        console.rule(f"[bold yellow]⚠ Analysis complete - {stats.total_issues} issue(s) found[/bold yellow]")
    else:
        console.rule("[bold green]✓ Analysis complete - no issues found[/bold green]")
    return stats
