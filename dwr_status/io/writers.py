# dwr_status/io/writers.py
"""
Writers (Deterministic Artifacts I/O)

Intent
- Provide a single, deterministic way to write batch outputs to disk:
  - the DWR table with the inferred status column appended (csv / tsv / psv)
  - the run summary (JSON, readable)

External calls
- json.dumps
- pandas.DataFrame.to_csv
- pathlib.Path
- dwr_status.utils.logging.get_logger

Primary functions
- ensure_parent_dir(path) -> None
- append_status_column(df, assignments, column="iStatus") -> pandas.DataFrame
- write_json(path, obj) -> None
- write_delimited(path, df, sep=",") -> None

Key behaviors / guarantees
- **Column order**: original columns untouched, status column appended last.
- **Deterministic output**
  - JSON: UTF-8, sort_keys=True, ensure_ascii=False, pretty indent
  - DELIMITED: UTF-8, index=False, lineterminator='\\n', minimal quoting, embedded quotes doubled
- **Filesystem safety**: parent directories are created recursively and idempotently.
- **Observability**: every write emits an INFO log with path + size/shape.
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Any, Mapping

import pandas as pd

from dwr_status.utils.logging import get_logger


def ensure_parent_dir(path: str | Path) -> None:
    """
    Ensure parent directory exists for the given file path.
    Idempotent and safe.
    """
    p = Path(path)
    parent = p.parent
    if parent and not parent.exists():
        parent.mkdir(parents=True, exist_ok=True)


def append_status_column(
    df: pd.DataFrame,
    assignments: Mapping[int, str],
    column: str = "iStatus",
) -> pd.DataFrame:
    """
    Copy of df with `column` appended last; row i gets assignments[i] ("" when missing).

    Positions are 0-based input order, independent of df.index labels.
    If df already has `column`, it is replaced and moved to the end.
    """
    out = df.copy()
    if column in out.columns:
        out = out.drop(columns=[column])
    out[column] = [assignments.get(i, "") for i in range(len(out))]
    return out


def write_json(
    path: str | Path,
    obj: Any,
    *,
    indent: int = 2,
    sort_keys: bool = True,
) -> None:
    """
    Write an object to JSON deterministically.
    """
    logger = get_logger(__name__)
    ensure_parent_dir(path)

    p = Path(path)
    text = json.dumps(obj, ensure_ascii=False, sort_keys=sort_keys, indent=indent)
    p.write_text(text + "\n", encoding="utf-8")

    try:
        size = p.stat().st_size
    except OSError:
        size = len((text + "\n").encode("utf-8"))

    logger.info("Wrote JSON: %s (bytes=%d)", str(p), int(size))


def write_delimited(path: str | Path, df: pd.DataFrame, *, sep: str = ",") -> None:
    """
    Write DataFrame to a delimited text file deterministically:
    - UTF-8
    - index=False
    - stable column order as df.columns
    - QUOTE_MINIMAL with doubled quotes, so values with separators/quotes/newlines
      round-trip through any CSV reader
    """
    logger = get_logger(__name__)
    ensure_parent_dir(path)

    p = Path(path)

    df.to_csv(
        p,
        index=False,
        encoding="utf-8",
        sep=sep,
        lineterminator="\n",
        quoting=csv.QUOTE_MINIMAL,
        doublequote=True,
    )

    logger.info(
        "Wrote DELIMITED: %s (sep=%s rows=%d, cols=%d)",
        str(p),
        repr(sep),
        int(df.shape[0]),
        int(df.shape[1]),
    )


__all__ = [
    "ensure_parent_dir",
    "append_status_column",
    "write_json",
    "write_delimited",
]
