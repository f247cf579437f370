# dwr_status/io/readers.py
"""
Readers (CSV/TSV/PSV DWR exports + canonical status order)

Intent
- Provide a unified reader for the DWR export tables, driven by parameters.yaml:
  - csv / tsv / psv
- Load the canonical status order (data/job_status_order.csv, `job_status` column).
- Hand the inference core plain row mappings (field -> str).

External calls
- pandas.read_csv (header=None: the first line is taken as the header row)
- functions in dwr_status.utils.text (header trimming, cell -> str)

Primary functions
- read_input_table(path, fmt, encoding="utf-8") -> pandas.DataFrame
- delimiter_for(fmt) -> str
- dataframe_to_rows(df) -> list[dict[str, str]]
- read_status_order(path, column="job_status", encoding="utf-8") -> list[str]

Key behaviors / guarantees
- **File existence check**: raises FileNotFoundError if the file path does not exist.
- **Strings only**: dtype=str, keep_default_na=False (blanks stay "", never NaN).
- **Lenient parsing**: engine="python" handles quoted multi-line fields; blank lines are kept
  as empty rows (they get an empty status downstream); rows with more fields than the
  header are cut to the header width (logged), never dropped, so every input line keeps
  its position.
- **Headers written back verbatim**: duplicate header names are kept as-is (no pandas
  ".1" suffixes); in the row mappings the last duplicate column wins.
- **No cell-value trimming** on the DWR table (traceability); only headers are trimmed.
- **Status order**: names trimmed, blank rows skipped; a missing column raises
  ConfigurationError (fatal, before any row is processed).
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, List, Literal

import pandas as pd

from dwr_status.utils.config import ConfigurationError
from dwr_status.utils.logging import get_logger
from dwr_status.utils.text import to_cell_str, trim_lr

InputFormat = Literal["csv", "tsv", "psv"]


_DELIMS = {
    "csv": ",",
    "tsv": "\t",
    "psv": "|",
}


def delimiter_for(fmt: str) -> str:
    fmt_norm = str(fmt).lower().strip()
    if fmt_norm not in _DELIMS:
        raise ValueError(f"Unsupported input format: {fmt}. Expected one of: csv|tsv|psv")
    return _DELIMS[fmt_norm]


def _trim_column_names(df: pd.DataFrame) -> pd.DataFrame:
    """
    Defensive: strip whitespace (and a stray BOM) around column names only.
    """
    df = df.copy()
    df.columns = [trim_lr(str(c)).lstrip("\ufeff") for c in df.columns]
    return df


def _header_width(p: Path, sep: str, encoding: str) -> int:
    head = pd.read_csv(
        p,
        sep=sep,
        encoding=encoding,
        header=None,
        nrows=1,
        dtype=str,
        keep_default_na=False,
        engine="python",
    )
    return int(head.shape[1])


def read_input_table(
    path: str | Path,
    fmt: InputFormat = "csv",
    encoding: str = "utf-8",
) -> pd.DataFrame:
    """
    Read a DWR table from csv/tsv/psv as strings.

    The header line is read as data (header=None) so duplicate names survive unmangled
    and pandas never infers an index column from rows that are wider than the header.
    Rows with extra fields are cut to the header width; short rows are padded with "".
    """
    logger = get_logger(__name__)

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Input file not found: {str(p)}")

    sep = delimiter_for(fmt)
    width = _header_width(p, sep, encoding)
    cut: List[int] = []

    def _fit_to_header(fields: List[str]) -> List[str]:
        cut.append(len(fields))
        return fields[:width]

    raw = pd.read_csv(
        p,
        sep=sep,
        encoding=encoding,
        header=None,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=False,
        engine="python",
        on_bad_lines=_fit_to_header,
    )
    # blank lines and short rows come back as NaN
    raw = raw.fillna("")

    if cut:
        logger.warning("Rows wider than the header cut to %d fields: %d row(s) in %s", width, len(cut), str(p))

    df = raw.iloc[1:].reset_index(drop=True)
    df.columns = [to_cell_str(v) for v in raw.iloc[0].tolist()]
    return _trim_column_names(df)


def dataframe_to_rows(df: pd.DataFrame) -> List[Dict[str, str]]:
    """
    Rows as ordered mappings field -> str, in input order (position == list index).
    """
    cols = list(df.columns)
    return [
        {col: to_cell_str(val) for col, val in zip(cols, values)}
        for values in df.itertuples(index=False, name=None)
    ]


def read_status_order(path: str | Path, column: str = "job_status", encoding: str = "utf-8") -> List[str]:
    """
    Load the canonical status order (earliest stage first).
    Values trimmed; blank rows skipped. Duplicates are left to validate_status_order().
    """
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Status order file not found: {str(p)}")

    try:
        df = read_input_table(p, "csv", encoding=encoding)
    except pd.errors.EmptyDataError as e:
        raise ConfigurationError(f"Status order file is empty: {str(p)}") from e
    if column not in df.columns:
        raise ConfigurationError(f"{column} column not found in {p.name}. Found columns: {list(df.columns)}")

    return [s for s in (trim_lr(to_cell_str(v)) for v in df[column].tolist()) if s]


__all__ = [
    "InputFormat",
    "delimiter_for",
    "read_input_table",
    "dataframe_to_rows",
    "read_status_order",
]
