# dwr_status/core/progression.py
"""
Progression Tracker — monotone status fold over one job's ordered rows

Intent
- Carry a single "current rank" cursor across a job's rows in canonical order and commit
  one status per row.
- The cursor never moves backwards: explicit statuses and scored signals can only push it
  forward, and role caps only bound how far one row may push it.

Per row (in this exact sequence)
1) empty row             -> commit "", cursor unchanged
2) cap = cap_rank(row, floor=current rank)
3) recognized explicit status -> rank = min(max(rank, explicit), cap)
4) best signal in [rank, cap] -> rank = min(max(rank, signal), cap)
5) commit order[rank]

Design
- ProgressionState is an immutable accumulator; advance() returns the next state plus the
  committed value, so a group is a plain fold (track_group) with no hidden module state.
- Nothing here raises on row-level anomalies; misses degrade to "no effect".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from dwr_status.core.rows import IndexedRow, RowFields, is_empty_row
from dwr_status.core.signal_tables import DEFAULT_SIGNAL_TABLES, SignalTables
from dwr_status.core.signals import cap_rank, pick_status_from_signals, score_statuses
from dwr_status.core.status_order import DEFAULT_FALLBACK_STATUS, StatusIndex, fallback_status
from dwr_status.utils.text import field_value


@dataclass(frozen=True)
class ProgressionState:
    rank: int
    status: str


def initial_state(index: StatusIndex, fallback: str = DEFAULT_FALLBACK_STATUS) -> ProgressionState:
    resolved = fallback_status(index.order, fallback)
    rank = index.rank(resolved) if resolved is not None else None
    if rank is None:
        rank = 0
    return ProgressionState(rank=rank, status=index.status_at(rank) or "")


def _clamp(rank: int, floor_rank: int, cap: int) -> int:
    return min(max(floor_rank, rank), cap)


def advance(
    state: ProgressionState,
    row: Mapping[str, Any],
    index: StatusIndex,
    *,
    fields: RowFields = RowFields(),
    tables: SignalTables = DEFAULT_SIGNAL_TABLES,
) -> Tuple[ProgressionState, str]:
    """
    Apply one row to the state. Returns (next_state, committed value for this row).
    """
    if is_empty_row(row):
        return state, ""

    rank = state.rank
    cap = cap_rank(row, index, rank, fields=fields, tables=tables)

    explicit = index.rank(field_value(row, fields.status).strip())
    if explicit is not None:
        rank = _clamp(explicit, rank, cap)

    scores = score_statuses(row, index, fields=fields, tables=tables)
    signal = pick_status_from_signals(scores, index, rank, cap)
    if signal is not None:
        rank = _clamp(signal, rank, cap)

    status = index.status_at(rank)
    if status is None:
        return state, state.status
    return ProgressionState(rank=rank, status=status), status


def track_group(
    entries: Iterable[IndexedRow],
    index: StatusIndex,
    *,
    fields: RowFields = RowFields(),
    tables: SignalTables = DEFAULT_SIGNAL_TABLES,
    fallback: str = DEFAULT_FALLBACK_STATUS,
    state: Optional[ProgressionState] = None,
) -> Dict[int, str]:
    """
    Fold one job group (already in canonical order) into {row position: status}.
    """
    current = state if state is not None else initial_state(index, fallback)
    assignments: Dict[int, str] = {}
    for entry in entries:
        current, value = advance(current, entry.row, index, fields=fields, tables=tables)
        assignments[entry.index] = value
    return assignments


__all__ = ["ProgressionState", "initial_state", "advance", "track_group"]
