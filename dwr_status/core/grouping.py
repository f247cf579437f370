# dwr_status/core/grouping.py
"""
Row Grouping & Ordering

Intent
- Partition rows by job identifier (insertion ordered; a missing identifier groups under "").
- Establish the canonical intra-job processing order the progression tracker relies on.

Canonical order (comparator)
1) date ascending, ONLY when both dates parse and differ
   (an unparseable date contributes no ordering from this key)
2) sequence / DWR number, lexicographic by codepoint (locale independent)
3) original input position, ascending

Notes
- Dates are parsed once per row with pandas.to_datetime(errors="coerce"); clock-relative
  words ("now", "today", ...) count as unparseable.
- tz-aware timestamps are converted to UTC and made naive so every pair is comparable.
"""

from __future__ import annotations

import warnings
from functools import cmp_to_key
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

import pandas as pd

from dwr_status.core.rows import IndexedRow, RowFields
from dwr_status.utils.text import field_value, trim_lr


# pandas resolves these against the current clock
_RELATIVE_DATE_WORDS = frozenset({"now", "today", "tomorrow", "yesterday"})


def parse_date(value: Any) -> Optional[pd.Timestamp]:
    s = trim_lr(value) if value is not None else ""
    if not s or s.lower() in _RELATIVE_DATE_WORDS:
        return None
    with warnings.catch_warnings():
        warnings.simplefilter("ignore", UserWarning)
        try:
            ts = pd.to_datetime(s, errors="coerce")
        except (ValueError, TypeError, OverflowError):
            return None
    if ts is None or pd.isna(ts):
        return None
    if ts.tzinfo is not None:
        ts = ts.tz_convert("UTC").tz_localize(None)
    return ts


def group_rows(rows: Iterable[Mapping[str, Any]], job_field: str) -> Dict[str, List[IndexedRow]]:
    groups: Dict[str, List[IndexedRow]] = {}
    for i, row in enumerate(rows):
        key = field_value(row, job_field)
        groups.setdefault(key, []).append(IndexedRow(index=i, row=row))
    return groups


_SortItem = Tuple[IndexedRow, Optional[pd.Timestamp], str]


def _compare(a: _SortItem, b: _SortItem) -> int:
    entry_a, date_a, seq_a = a
    entry_b, date_b, seq_b = b

    if date_a is not None and date_b is not None and date_a != date_b:
        return -1 if date_a < date_b else 1
    # plain str ordering (codepoint, case-sensitive, not numeric): "DWR-10" < "DWR-2" < "dwr-1"
    if seq_a != seq_b:
        return -1 if seq_a < seq_b else 1
    return entry_a.index - entry_b.index


def compare_entries(a: IndexedRow, b: IndexedRow, fields: RowFields = RowFields()) -> int:
    return _compare(
        (a, parse_date(a.get(fields.date)), a.get(fields.sequence)),
        (b, parse_date(b.get(fields.date)), b.get(fields.sequence)),
    )


def sort_group(entries: Iterable[IndexedRow], fields: RowFields = RowFields()) -> List[IndexedRow]:
    items = [(e, parse_date(e.get(fields.date)), e.get(fields.sequence)) for e in entries]
    items.sort(key=cmp_to_key(_compare))
    return [item[0] for item in items]


__all__ = ["parse_date", "group_rows", "compare_entries", "sort_group"]
