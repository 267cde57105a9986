"""Ingest employee records from an HRIS CSV export.

Expected layout, positional, with a header row::

    Id,firstName,lastName,salary,managerId
    123,Joe,Doe,60000,
    124,Martin,Chekov,45000,123

An empty manager id marks the CEO. Blank lines are skipped and every value is
trimmed. Each row needs at least five fields; anything after the fifth is
ignored, so trailing commas are harmless.
"""

import logging
from pathlib import Path

import pandas as pd

from orgaudit.exceptions import EmployeeParseError
from orgaudit.hierarchy.models import Employee, EmployeeID, employee_schema
from orgaudit.utils.io import FilePath, read_csv_file
from orgaudit.utils.transforms import drop_blank_rows, strip_values
from orgaudit.utils.validators import find_duplicates, validate_dataframe

logger = logging.getLogger(__name__)

EMPLOYEE_COLUMNS = ["employee_id", "first_name", "last_name", "salary", "manager_id"]

_FIELD_ERRORS = {
    "employee_id": "Employee ID cannot be empty",
    "first_name": "First name cannot be empty",
    "last_name": "Last name cannot be empty",
}


def _line_number(index: object) -> int | None:
    # Header is line 1 and blank lines keep their slot in the index
    if index is None or pd.isna(index):
        return None
    return int(index) + 2


def _load_frame(path: Path) -> pd.DataFrame:
    width = len(EMPLOYEE_COLUMNS)
    try:
        header = read_csv_file(path, nrows=0)
        if len(header.columns) < width:
            raise EmployeeParseError(f"Invalid header: expected at least {width} columns")
        # Fields past the fifth are ignored; a trailing comma must not become the index
        raw = read_csv_file(
            path, skip_blank_lines=False, index_col=False, usecols=range(width)
        )
    except pd.errors.EmptyDataError as exc:
        raise EmployeeParseError("CSV file is empty") from exc
    except pd.errors.ParserError as exc:
        raise EmployeeParseError(f"Malformed CSV: {exc}") from exc
    except (OSError, ValueError) as exc:
        raise EmployeeParseError(f"Failed to read CSV file: {path}") from exc

    frame = raw.set_axis(EMPLOYEE_COLUMNS, axis=1)
    # Short rows come back padded with NaN; explicit empty fields stay ""
    present = frame.notna().sum(axis=1)
    cleaned = strip_values(frame)
    blank = (cleaned == "").all(axis=1)
    short = present[(present < width) & ~blank]
    if not short.empty:
        index = short.index[0]
        raise EmployeeParseError(
            f"Expected {width} columns but found {short[index]}",
            line_number=_line_number(index),
        )
    return drop_blank_rows(cleaned)


def parse_employee_frame(frame: pd.DataFrame) -> dict[EmployeeID, Employee]:
    """Validate a normalised employee frame and key its rows by employee id."""
    dupes = find_duplicates(frame, ["employee_id"])
    # Empty ids are reported by the schema, not as duplicates
    dupes = dupes[dupes["employee_id"] != ""]
    if not dupes.empty:
        index = dupes.index[0]
        raise EmployeeParseError(
            f"Duplicate employee ID: {dupes.loc[index, 'employee_id']}",
            line_number=_line_number(index),
        )

    outcome = validate_dataframe(frame, employee_schema)
    if not outcome["valid"]:
        first = outcome["failures"][0] if outcome["failures"] else {}
        column = first.get("column")
        message = _FIELD_ERRORS.get(column)
        if message is None:
            match column:
                case "salary":
                    message = f"Invalid salary value: {first.get('failure_case')}"
                case _:
                    message = "; ".join(outcome["errors"]) or "Invalid employee data"
        raise EmployeeParseError(message, line_number=_line_number(first.get("index")))

    employees: dict[EmployeeID, Employee] = {}
    for index, row in outcome["data"].iterrows():
        try:
            employees[row["employee_id"]] = Employee(
                employee_id=row["employee_id"],
                first_name=row["first_name"],
                last_name=row["last_name"],
                salary=float(row["salary"]),
                manager_id=row["manager_id"] or None,
            )
        except ValueError as exc:
            raise EmployeeParseError(str(exc), line_number=_line_number(index)) from exc
    return employees


def load_employees(path: FilePath) -> dict[EmployeeID, Employee]:
    """Read an employee CSV export into an employee set."""
    path = Path(path)
    logger.info("Reading employee export: %s", path.name)
    frame = _load_frame(path)
    employees = parse_employee_frame(frame)
    logger.info("Loaded %d employees from %s", len(employees), path.name)
    return employees
