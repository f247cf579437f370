# dwr_status/core/status_order.py
"""
Status Order Model

Intent
- Wrap the canonical ordered list of job statuses (earliest lifecycle stage first,
  terminal stage last) into:
  - a bidirectional index (status -> rank, rank -> status)
  - a membership set that always contains the fallback status
- Resolve the fallback status ("Estimating", or the first status when absent).

Contract
- `rank(order[i]) == i` for every i.
- Lookups never raise on a miss; they return None.
- An empty order is a configuration error (validate_status_order raises).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Optional, Tuple

from dwr_status.utils.config import ConfigurationError
from dwr_status.utils.logging import get_logger

DEFAULT_FALLBACK_STATUS = "Estimating"


@dataclass(frozen=True)
class StatusIndex:
    order: Tuple[str, ...]
    _ranks: Dict[str, int] = field(repr=False, compare=False)

    def rank(self, status: str) -> Optional[int]:
        return self._ranks.get(status)

    def status_at(self, rank: int) -> Optional[str]:
        if 0 <= rank < len(self.order):
            return self.order[rank]
        return None

    def __contains__(self, status: object) -> bool:
        return status in self._ranks

    def __len__(self) -> int:
        return len(self.order)

    @property
    def last_rank(self) -> int:
        return len(self.order) - 1


def validate_status_order(order: Iterable[str]) -> Tuple[str, ...]:
    """
    Normalize a raw status list into a valid StatusOrder.

    - strips names, drops blanks
    - drops duplicates (first occurrence wins) with a warning
    - raises ConfigurationError when nothing is left
    """
    logger = get_logger(__name__)

    out = []
    seen = set()
    for raw in order:
        name = str(raw).strip() if raw is not None else ""
        if not name:
            continue
        if name in seen:
            logger.warning("Duplicate status in status order ignored: %s", name)
            continue
        seen.add(name)
        out.append(name)

    if not out:
        raise ConfigurationError("Status order is empty; at least one status is required")
    return tuple(out)


def build_index(order: Iterable[str]) -> StatusIndex:
    statuses = tuple(order)
    return StatusIndex(order=statuses, _ranks={s: i for i, s in enumerate(statuses)})


def fallback_status(order: Iterable[str], preferred: str = DEFAULT_FALLBACK_STATUS) -> Optional[str]:
    """
    The preferred fallback when it belongs to the order, else the first status.
    None only for an empty order.
    """
    statuses = tuple(order)
    if preferred in statuses:
        return preferred
    return statuses[0] if statuses else None


def build_status_set(order: Iterable[str], fallback: str = DEFAULT_FALLBACK_STATUS) -> FrozenSet[str]:
    """
    Membership set of the order, guaranteed to contain the resolved fallback status.
    """
    statuses = tuple(order)
    members = set(statuses)
    resolved = fallback_status(statuses, fallback)
    if resolved is not None:
        members.add(resolved)
    return frozenset(members)


__all__ = [
    "DEFAULT_FALLBACK_STATUS",
    "StatusIndex",
    "validate_status_order",
    "build_index",
    "fallback_status",
    "build_status_set",
]
