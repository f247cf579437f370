# dwr_status/core/signal_tables.py
"""
Signal Tables — static keyword / role data used by the signal scorer

Intent
- Keep every heuristic knob of the scorer in one place as immutable data:
  - KEYWORD_TABLE: status -> patterns matched against the lower-cased row text (1 point each)
  - ROLE_AFFINITY: role pattern -> candidate statuses + weight (2.5–3 points)
  - ROLE_CAPS: role pattern -> furthest status a row with that role may reach
- Tables are built once at import time; nothing here carries behavior beyond lookups.

Notes
- Status names must match the canonical order (data/job_status_order.csv) to have any effect.
  Names missing from the order are ignored by the scorer; `unknown_statuses()` reports them.
- Role patterns are matched against the raw role field and carry re.IGNORECASE themselves.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Iterable, List, Mapping, Pattern, Tuple


@dataclass(frozen=True)
class RoleAffinity:
    pattern: Pattern[str]
    statuses: Tuple[str, ...]
    weight: float


@dataclass(frozen=True)
class RoleCap:
    pattern: Pattern[str]
    max_status: str


@dataclass(frozen=True)
class SignalTables:
    keywords: Mapping[str, Tuple[Pattern[str], ...]] = field(default_factory=dict)
    role_affinity: Tuple[RoleAffinity, ...] = ()
    role_caps: Tuple[RoleCap, ...] = ()


def _ci(pattern: str) -> Pattern[str]:
    return re.compile(pattern, re.IGNORECASE)


def build_keyword_table(raw: Mapping[str, Iterable[str]]) -> Mapping[str, Tuple[Pattern[str], ...]]:
    return MappingProxyType({status: tuple(_ci(p) for p in patterns) for status, patterns in raw.items()})


# ---------------------------------------------------------------------
# Default tables
# ---------------------------------------------------------------------

_RAW_KEYWORDS = {
    "Estimating": (
        r"\bestimat",
        r"\bquot(e|es|ed|ing)\b",
        r"\bbid(s|ding)?\b",
        r"\bproposal\b",
    ),
    "Proposal Sent": (
        r"\bproposal (sent|submitted|delivered)\b",
        r"\bsent (the )?(proposal|quote)\b",
    ),
    "Job Setup": (
        r"\bjob set ?up\b",
        r"\bkick ?off\b",
        r"\bpo received\b",
        r"\bcontract signed\b",
    ),
    "Scheduled": (
        r"\bschedul(e|ed|ing)\b",
        r"\bmobiliz",
    ),
    "Field Work in Progress": (
        r"\bsite survey\b",
        r"\bfield (scan|crew|survey|visit|work)\b",
        r"\bscan(s|ning|ned)?\b",
        r"\bon[- ]?site\b",
    ),
    "Field Work Complete": (
        r"\bfield ?work (is )?(complete|completed|done|finished)\b",
        r"\bdemobiliz",
        r"\bleft site\b",
    ),
    "Processing": (
        r"\bprocess(ing|ed)\b",
        r"\bregistration\b",
        r"\bpoint cloud\b",
    ),
    "Drafting": (
        r"\bdraft(ing|ed)?\b",
        r"\bcad\b",
        r"\bmodel(l)?ing\b",
        r"\brevit\b",
    ),
    "QA/QC Review": (
        r"\bqa\b",
        r"\bqc\b",
        r"\breview(ed|ing)?\b",
    ),
    "Deliverables Sent": (
        r"\bfinal package\b",
        r"\bdeliver(ed|ables?)\b",
        r"\bissued\b",
        r"\bsubmittal\b",
    ),
    "Invoiced": (
        r"\binvoic",
        r"\bbill(ed|ing)\b",
    ),
    "Complete": (
        r"\b(project|job) (is )?(complete|completed|closed)\b",
        r"\bclose ?out\b",
    ),
}

_ESTIMATOR_ROLE = r"estimat|sales|business dev"
_FIELD_ROLE = r"\bfield\b|surveyor|crew chief|party chief"
_PROCESSING_ROLE = r"process"
_DRAFTING_ROLE = r"draft|cad|designer|modeler"

KEYWORD_TABLE = build_keyword_table(_RAW_KEYWORDS)

ROLE_AFFINITY: Tuple[RoleAffinity, ...] = (
    RoleAffinity(_ci(_ESTIMATOR_ROLE), ("Estimating",), 2.5),
    RoleAffinity(_ci(r"project manager|\bpm\b"), ("Job Setup", "Scheduled"), 2.5),
    RoleAffinity(_ci(_FIELD_ROLE), ("Field Work in Progress",), 3.0),
    RoleAffinity(_ci(_PROCESSING_ROLE), ("Processing",), 3.0),
    RoleAffinity(_ci(_DRAFTING_ROLE), ("Drafting",), 3.0),
    RoleAffinity(_ci(r"\bqa\b|\bqc\b|quality"), ("QA/QC Review",), 2.5),
    RoleAffinity(_ci(r"account|billing|bookkeep"), ("Invoiced",), 2.5),
)

ROLE_CAPS: Tuple[RoleCap, ...] = (
    RoleCap(_ci(_FIELD_ROLE), "Field Work in Progress"),
    RoleCap(_ci(_PROCESSING_ROLE), "Processing"),
    RoleCap(_ci(_DRAFTING_ROLE), "Drafting"),
    RoleCap(_ci(_ESTIMATOR_ROLE), "Job Setup"),
)

DEFAULT_SIGNAL_TABLES = SignalTables(
    keywords=KEYWORD_TABLE,
    role_affinity=ROLE_AFFINITY,
    role_caps=ROLE_CAPS,
)


def unknown_statuses(tables: SignalTables, order: Iterable[str]) -> List[str]:
    """
    Status names referenced by the tables but absent from the order (sorted, unique).
    """
    known = set(order)
    referenced = set(tables.keywords)
    for entry in tables.role_affinity:
        referenced.update(entry.statuses)
    for cap in tables.role_caps:
        referenced.add(cap.max_status)
    return sorted(s for s in referenced if s not in known)


__all__ = [
    "RoleAffinity",
    "RoleCap",
    "SignalTables",
    "build_keyword_table",
    "KEYWORD_TABLE",
    "ROLE_AFFINITY",
    "ROLE_CAPS",
    "DEFAULT_SIGNAL_TABLES",
    "unknown_statuses",
]
