"""File I/O utilities for reading PO exports and writing report tables."""

from pathlib import Path

import pandas as pd
from rich.console import Console

type FilePath = str | Path

OUTPUT_FORMATS = ["csv", "excel", "json", "parquet"]

console = Console(stderr=True)


def _csv_options(max_columns: int | None) -> dict:
    if max_columns is None:
        return {}
    # Fixed width: longer rows are cut, shorter rows are padded with NA
    return {
        "names": list(range(max_columns)),
        "index_col": False,
        "engine": "python",
        "on_bad_lines": lambda bad: bad[:max_columns],
    }


def read_table_file(path: FilePath, max_columns: int | None = None) -> pd.DataFrame:
    """Read a spreadsheet export as raw cells, without header inference.

    Every cell is kept as the reader returns it; blank rows are dropped.
    With ``max_columns`` set, CSV rows are cut or padded to that width
    instead of failing on a ragged line.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"PO export not found: {path}")

    match path.suffix.lower():
        case ".csv":
            df = pd.read_csv(
                path,
                header=None,
                dtype=str,
                keep_default_na=False,
                **_csv_options(max_columns),
            )
            df = df.replace("", pd.NA)
        case ".xlsx":
            df = pd.read_excel(path, header=None, dtype=object, engine="openpyxl")
        case ext:
            raise ValueError(f"Unsupported export format: {ext}")

    before = len(df)
    df = df.dropna(how="all")
    console.print(f"  Read {len(df):,} rows from {path.name} ({before - len(df)} blank)")
    return df


def write_output(df: pd.DataFrame, path: FilePath, fmt: str = "csv") -> None:
    """Write a DataFrame to the specified format."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    match fmt:
        case "csv":
            df.to_csv(path, index=False)
        case "excel":
            df.to_excel(path, index=False)
        case "json":
            df.to_json(path, orient="records", indent=2)
        case "parquet":
            df.to_parquet(path, index=False)
        case other:
            raise ValueError(f"Unsupported output format: {other}")

    console.print(f"  Wrote {len(df)} rows to {path}")
