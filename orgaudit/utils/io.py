"""File I/O utilities for reading exports and writing audit outputs."""

from pathlib import Path

import pandas as pd
from rich.console import Console

type FilePath = str | Path

console = Console()

_ENCODINGS = ("utf-8", "latin-1", "cp1252")


def read_csv_file(path: FilePath, **kwargs) -> pd.DataFrame:
    """Read a CSV export as strings, trying the encodings HRIS tools tend to emit."""
    path = Path(path)
    options = {"dtype": str, "keep_default_na": False} | kwargs
    for encoding in _ENCODINGS:
        try:
            return pd.read_csv(path, encoding=encoding, **options)
        except UnicodeDecodeError:
            continue
    raise ValueError(f"Could not decode {path}")


def write_output(df: pd.DataFrame, path: FilePath, fmt: str = "csv") -> Path:
    """Write a DataFrame to the specified format."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    match fmt:
        case "csv":
            df.to_csv(path, index=False)
        case "json":
            df.to_json(path, orient="records", indent=2)
        case other:
            raise ValueError(f"Unsupported output format: {other}")

    console.print(f"  Wrote {len(df)} rows to {path}")
    return path
