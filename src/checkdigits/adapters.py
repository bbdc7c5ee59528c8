"""Input adapters for converting various data formats to Polars LazyFrame."""

from pathlib import Path
from typing import Any

import polars as pl


def to_lazyframe(data: Any) -> pl.LazyFrame:
    """Convert various input formats to a Polars LazyFrame.

    Supports:
        - str or Path: File path (CSV, JSON, Parquet, NDJSON)
        - pl.DataFrame: Polars DataFrame
        - pl.LazyFrame: Polars LazyFrame (passthrough)
        - dict: Python dictionary
        - pd.DataFrame: pandas DataFrame

    CSV columns are all read as strings: identifiers such as ISBNs or
    VAT numbers lose their leading zeros when parsed as integers.

    Args:
        data: Input data in any supported format.

    Returns:
        Polars LazyFrame for lazy evaluation.

    Raises:
        ValueError: If the input format is not supported.
        FileNotFoundError: If a file path is provided but doesn't exist.
    """
    if isinstance(data, pl.LazyFrame):
        return data

    if isinstance(data, pl.DataFrame):
        return data.lazy()

    if isinstance(data, dict):
        return pl.DataFrame(data).lazy()

    if isinstance(data, (str, Path)):
        return _load_file(str(data))

    if _is_pandas_dataframe(data):
        return pl.from_pandas(data).lazy()

    raise ValueError(
        f"Unsupported input type: {type(data).__name__}. "
        "Supported types: str (file path), pl.DataFrame, pl.LazyFrame, dict, pd.DataFrame"
    )


def describe_source(data: Any) -> str:
    """Return a short label for the input, used in reports."""
    if isinstance(data, (str, Path)):
        return str(data)
    return type(data).__name__


def _load_file(path: str) -> pl.LazyFrame:
    """Load a file into a Polars LazyFrame based on extension.

    Args:
        path: Path to the file.

    Returns:
        Polars LazyFrame.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file extension is not supported.
    """
    file_path = Path(path)

    if not file_path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    suffix = file_path.suffix.lower()

    if suffix == ".csv":
        return pl.scan_csv(path, infer_schema_length=0)
    elif suffix == ".json":
        # JSON doesn't have a scan_ method, read eagerly then convert to lazy
        return pl.read_json(path).lazy()
    elif suffix == ".parquet":
        return pl.scan_parquet(path)
    elif suffix == ".ndjson" or suffix == ".jsonl":
        return pl.scan_ndjson(path)
    else:
        raise ValueError(
            f"Unsupported file extension: {suffix}. "
            "Supported extensions: .csv, .json, .parquet, .ndjson, .jsonl"
        )


def _is_pandas_dataframe(obj: Any) -> bool:
    """Check if an object is a pandas DataFrame without importing pandas."""
    return type(obj).__name__ == "DataFrame" and type(obj).__module__.startswith("pandas")
