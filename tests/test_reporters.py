"""Tests for validation and analysis report output."""
from __future__ import annotations

import json

import pytest
from rich.console import Console

from conftest import emp
from orgaudit.hierarchy.analyzer import OrganizationAnalyzer
from orgaudit.hierarchy.models import employee_set
from orgaudit.hierarchy.report import build_result_frames, render_report
from orgaudit.validation.reporters import format_validation_result, save_report
from orgaudit.validation.structure import validate_organization


def _broken_result():
    return validate_organization(
        employee_set([emp("1"), emp("2", 0, "1"), emp("3", manager_id="404")])
    )


def test_json_report_carries_structured_findings() -> None:
    report = json.loads(format_validation_result(_broken_result(), "json"))

    assert report["valid"] is False
    assert report["error_count"] == 1
    assert report["errors"][0]["kind"] == "missing_manager"
    assert report["errors"][0]["employee_ids"] == ["3"]
    assert report["errors"][0]["related_id"] == "404"
    assert [w["kind"] for w in report["warnings"]] == ["disconnected_employee", "zero_salary"]


def test_summary_report_lists_every_finding() -> None:
    summary = format_validation_result(_broken_result(), "summary")

    assert summary.splitlines()[0] == "Validation FAILED: 1 error(s), 2 warning(s)"
    assert "ERROR: Employee 3 (First3 Last3) references non-existent manager: 404" in summary
    assert "WARNING: Employee 2 (First2 Last2) has zero salary" in summary


def test_table_report_renders() -> None:
    table = format_validation_result(_broken_result())

    assert "missing_manager" in table
    assert "zero_salary" in table


def test_save_report(tmp_path) -> None:
    path = save_report("{}", tmp_path / "reports", fmt="json")

    assert path.suffix == ".json"
    assert path.read_text() == "{}"


def test_result_frames(small_org) -> None:
    frames = build_result_frames(OrganizationAnalyzer(small_org))

    underpaid = frames["underpaid_managers"]
    assert underpaid["employee_id"].tolist() == ["124"]
    assert underpaid["deviation"].tolist() == [pytest.approx(15_000.0)]
    assert frames["overpaid_managers"].empty
    assert list(frames["long_reporting_lines"].columns) == [
        "employee_id", "name", "reporting_line_length", "max_allowed_length", "excess_length",
    ]


def test_render_report(small_org) -> None:
    console = Console(width=120, record=True, force_terminal=False)

    stats = render_report(OrganizationAnalyzer(small_org), console)

    text = console.export_text()
    assert stats.total_issues == 1
    assert "Martin Chekov" in text
    assert "15,000.00" in text
    assert "1 issue(s) found" in text
