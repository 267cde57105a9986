"""Common data transformation utilities."""

import pandas as pd


def strip_values(df: pd.DataFrame) -> pd.DataFrame:
    """Fill missing cells with empty strings and trim surrounding whitespace."""
    df = df.fillna("").astype(str)
    for col in df.columns:
        df[col] = df[col].str.strip()
    return df


def drop_blank_rows(df: pd.DataFrame) -> pd.DataFrame:
    """Drop rows where every cell is an empty string, keeping the original index."""
    return df[~(df == "").all(axis=1)]
