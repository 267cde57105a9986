"""Shared utilities for the org audit pipeline."""

from orgaudit.utils.io import read_csv_file, write_output
from orgaudit.utils.transforms import strip_values, drop_blank_rows
from orgaudit.utils.validators import validate_dataframe, find_duplicates
