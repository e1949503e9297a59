from __future__ import annotations

"""Report export: NDJSON for quick inspection, Parquet for analysis."""

from pathlib import Path

import pandas as pd


def export_ndjson(df: pd.DataFrame, out_path: Path) -> None:
    """Export a DataFrame to line-delimited JSON (NDJSON)."""
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    df.to_json(out_path, orient="records", lines=True)


def export_parquet(df: pd.DataFrame, out_path: Path) -> None:
    """Write a DataFrame as zstd-compressed Parquet via pyarrow."""
    Path(out_path).parent.mkdir(parents=True, exist_ok=True)
    df.to_parquet(out_path, engine="pyarrow", compression="zstd", index=False)
