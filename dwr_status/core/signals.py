# dwr_status/core/signals.py
"""
Signal Scorer — keyword / role scoring and role caps for one row

Intent
- Turn the free text and role of a single DWR row into:
  - a score per status (keywords: 1 point per matching pattern, role affinity: entry weight)
  - a role-based cap: the furthest rank this row may push its job to
- Pick the best status inside a [floor, cap] rank window.

Row text
- explicit status, role, description, supplementary text (in that order)
- each part whitespace-normalized, empty parts skipped, space-joined, lower-cased

Rules
- Statuses absent from the order are never scored and never selected.
- Role patterns run against the RAW role field (they carry re.IGNORECASE).
- A cap never drops below the floor: caps bound advancement, they never force regression.
- Selection tie-break: highest score, then highest rank (prefer forward progress).
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from dwr_status.core.rows import RowFields
from dwr_status.core.signal_tables import DEFAULT_SIGNAL_TABLES, SignalTables
from dwr_status.core.status_order import StatusIndex
from dwr_status.utils.text import field_value, normalize_ws


def build_row_text(row: Mapping[str, Any], fields: RowFields = RowFields()) -> str:
    parts = [normalize_ws(field_value(row, name)) for name in fields.text_fields()]
    return " ".join(p for p in parts if p).lower()


def score_statuses(
    row: Mapping[str, Any],
    index: StatusIndex,
    *,
    fields: RowFields = RowFields(),
    tables: SignalTables = DEFAULT_SIGNAL_TABLES,
) -> Dict[str, float]:
    scores: Dict[str, float] = {status: 0.0 for status in index.order}

    text = build_row_text(row, fields)
    if text:
        for status, patterns in tables.keywords.items():
            if status not in scores:
                continue
            for pattern in patterns:
                if pattern.search(text):
                    scores[status] += 1.0

    role = field_value(row, fields.role)
    if role:
        for entry in tables.role_affinity:
            if not entry.pattern.search(role):
                continue
            for status in entry.statuses:
                if status in scores:
                    scores[status] += entry.weight

    return scores


def cap_rank(
    row: Mapping[str, Any],
    index: StatusIndex,
    floor_rank: int,
    *,
    fields: RowFields = RowFields(),
    tables: SignalTables = DEFAULT_SIGNAL_TABLES,
) -> int:
    cap = index.last_rank
    role = field_value(row, fields.role)
    if role:
        for entry in tables.role_caps:
            if not entry.pattern.search(role):
                continue
            target = index.rank(entry.max_status)
            if target is not None and target < cap:
                cap = target
    return max(cap, floor_rank)


def pick_status_from_signals(
    scores: Mapping[str, float],
    index: StatusIndex,
    floor_rank: int,
    cap: int,
) -> Optional[int]:
    """
    Rank of the best-scoring status within [floor_rank, cap], or None.
    """
    best: Optional[tuple] = None
    for status, score in scores.items():
        if score <= 0:
            continue
        rank = index.rank(status)
        if rank is None or rank < floor_rank or rank > cap:
            continue
        candidate = (score, rank)
        if best is None or candidate > best:
            best = candidate
    return None if best is None else best[1]


__all__ = ["build_row_text", "score_statuses", "cap_rank", "pick_status_from_signals"]
