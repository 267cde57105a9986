"""Command-line runner — validates an employee export and prints the audit report."""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

from orgaudit import __version__
from orgaudit.audit import audit_organization
from orgaudit.config import load_policy_config
from orgaudit.exceptions import EmployeeParseError, StructuralInvariantError
from orgaudit.hierarchy.ingest import load_employees
from orgaudit.hierarchy.report import build_result_frames, render_report
from orgaudit.utils.io import write_output
from orgaudit.validation.reporters import format_validation_result, save_report
from orgaudit.validation.structure import validate_organization

logger = logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_ISSUES_FOUND = 1
EXIT_INVALID_ARGS = 2
EXIT_PARSE_ERROR = 3
EXIT_VALIDATION_ERROR = 4
EXIT_INTERNAL_ERROR = 5

console = Console()
err_console = Console(stderr=True)


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="orgaudit",
        description=(
            "Analyze an employee hierarchy for manager salary compliance "
            "and reporting line depth."
        ),
        epilog=(
            "Exit codes: 0 no issues, 1 issues found, 2 invalid arguments, "
            "3 parse error, 4 validation failed, 5 internal error. "
            "Policy settings come from --config (TOML/YAML) and the "
            "ORGAUDIT_SALARY_MIN_PCT, ORGAUDIT_SALARY_MAX_PCT and "
            "ORGAUDIT_MAX_REPORTING_DEPTH environment variables."
        ),
    )
    parser.add_argument("csv_file", type=Path, help="CSV file containing employee data")
    parser.add_argument("--config", type=Path, help="TOML or YAML policy settings file")
    parser.add_argument("--validate-only", action="store_true", help="Only validate, don't analyze")
    parser.add_argument("--strict", action="store_true", help="Fail on validation warnings")
    parser.add_argument("--export", type=Path, metavar="DIR", help="Write violation tables to DIR")
    parser.add_argument("--format", choices=["csv", "json"], default="csv", help="Export format")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def _run(args: argparse.Namespace) -> int:
    if not args.csv_file.is_file():
        err_console.print(f"[red]Error: File not found: {args.csv_file}[/red]")
        return EXIT_INVALID_ARGS

    try:
        config = load_policy_config(args.config)
    except (FileNotFoundError, ValueError) as exc:
        err_console.print(f"[red]Error: Invalid configuration: {exc}[/red]")
        return EXIT_INVALID_ARGS
    logger.info("Using configuration: %s", config)

    try:
        employees = load_employees(args.csv_file)
    except EmployeeParseError as exc:
        err_console.print(f"[red]Error parsing CSV file: {exc}[/red]")
        return EXIT_PARSE_ERROR

    validation = validate_organization(employees)
    match (validation.is_valid, validation.has_warnings):
        case (False, _):
            err_console.print("[red]Data validation failed:[/red]")
            err_console.print(format_validation_result(validation, "summary"))
            return EXIT_VALIDATION_ERROR
        case (True, True):
            err_console.print("[yellow]Data validation warnings:[/yellow]")
            err_console.print(format_validation_result(validation, "summary"))
            if args.strict:
                err_console.print("[red]Strict mode enabled - failing due to warnings[/red]")
                return EXIT_VALIDATION_ERROR
        case _:
            pass

    if args.validate_only:
        console.print(f"Validation passed. {len(employees)} employees loaded.")
        return EXIT_SUCCESS

    try:
        outcome = audit_organization(employees, config, validation=validation)
    except StructuralInvariantError as exc:
        err_console.print(f"[red]Error analyzing organization structure: {exc}[/red]")
        return EXIT_VALIDATION_ERROR
    stats = render_report(outcome.analyzer, console)

    if args.export:
        for name, frame in build_result_frames(outcome.analyzer).items():
            write_output(frame, args.export / f"{name}.{args.format}", fmt=args.format)
        save_report(format_validation_result(validation, "json"), args.export)

    return EXIT_ISSUES_FOUND if stats.has_issues else EXIT_SUCCESS


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    try:
        return _run(args)
    except Exception as exc:
        logger.exception("Unexpected error")
        err_console.print(f"[red]Internal error: {exc}[/red]")
        return EXIT_INTERNAL_ERROR


if __name__ == "__main__":
    sys.exit(main())
