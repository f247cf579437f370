# dwr_status/core/inference.py
"""
Status Inference — core entrypoint used by the batch

Intent
- Validate the status order, group rows by job, sort each group canonically and fold it
  through the progression tracker.
- Produce the assignment map: original row position -> status ("" for empty rows).
- Summarize a run for the JSON report artifact.

Guarantees
- Exactly one assignment per input row.
- Deterministic: identical input -> identical assignments.
- Groups are independent (disjoint row positions); processed in first-seen order.

Non-goals
- No file IO here (handled by dwr_status.batch.infer_status).
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from dwr_status.core.grouping import group_rows, sort_group
from dwr_status.core.progression import track_group
from dwr_status.core.rows import RowFields, is_empty_row
from dwr_status.core.signal_tables import DEFAULT_SIGNAL_TABLES, SignalTables, unknown_statuses
from dwr_status.core.status_order import (
    DEFAULT_FALLBACK_STATUS,
    build_index,
    build_status_set,
    fallback_status,
    validate_status_order,
)
from dwr_status.utils.logging import get_logger
from dwr_status.utils.text import field_value


def infer_statuses(
    rows: Sequence[Mapping[str, Any]],
    order: Iterable[str],
    *,
    fields: RowFields = RowFields(),
    tables: SignalTables = DEFAULT_SIGNAL_TABLES,
    fallback: str = DEFAULT_FALLBACK_STATUS,
) -> Dict[int, str]:
    logger = get_logger(__name__)

    statuses = validate_status_order(order)
    index = build_index(statuses)

    unknown = unknown_statuses(tables, statuses)
    if unknown:
        logger.warning("Signal tables reference statuses missing from the order (ignored): %s", unknown)

    groups = group_rows(rows, fields.job_id)
    logger.info(
        "Inferring statuses: rows=%d jobs=%d statuses=%d fallback=%s",
        len(rows),
        len(groups),
        len(statuses),
        fallback_status(statuses, fallback),
    )

    assignments: Dict[int, str] = {}
    for job_id, entries in groups.items():
        ordered = sort_group(entries, fields)
        assignments.update(track_group(ordered, index, fields=fields, tables=tables, fallback=fallback))
        logger.debug("Job %r: rows=%d", job_id, len(entries))

    return assignments


def summarize_assignments(
    rows: Sequence[Mapping[str, Any]],
    assignments: Mapping[int, str],
    order: Iterable[str],
    *,
    fields: RowFields = RowFields(),
) -> Dict[str, Any]:
    """
    Run summary (JSON-serializable):
      meta: n_rows, n_jobs, n_empty_rows, n_explicit_recognized, n_changed_from_explicit
      status_counts: canonical order, zero counts kept
      job_final_status: job_id -> status committed for the job's last non-empty row
    """
    statuses = list(order)
    counts: Dict[str, int] = {s: 0 for s in statuses}
    known = build_status_set(statuses)

    n_empty = 0
    n_explicit = 0
    n_changed = 0
    last_pos: Dict[str, List[int]] = {}

    for i, row in enumerate(rows):
        value = assignments.get(i, "")
        if is_empty_row(row):
            n_empty += 1
            continue
        if value in counts:
            counts[value] += 1

        explicit = field_value(row, fields.status).strip()
        if explicit in known:
            n_explicit += 1
            if explicit != value:
                n_changed += 1

        last_pos.setdefault(field_value(row, fields.job_id), []).append(i)

    job_final: Dict[str, str] = {}
    for job_id, positions in last_pos.items():
        job_final[job_id] = _final_status(positions, assignments, statuses)

    return {
        "meta": {
            "n_rows": len(rows),
            "n_jobs": len(last_pos),
            "n_empty_rows": n_empty,
            "n_explicit_recognized": n_explicit,
            "n_changed_from_explicit": n_changed,
        },
        "status_order": statuses,
        "status_counts": counts,
        "job_final_status": job_final,
    }


def _final_status(positions: List[int], assignments: Mapping[int, str], order: List[str]) -> str:
    # Ranks are monotone per job, so the furthest committed status is the final one.
    ranks = {s: i for i, s in enumerate(order)}
    best: Optional[str] = None
    for pos in positions:
        value = assignments.get(pos, "")
        if value not in ranks:
            continue
        if best is None or ranks[value] > ranks[best]:
            best = value
    return best or ""


__all__ = ["infer_statuses", "summarize_assignments"]
