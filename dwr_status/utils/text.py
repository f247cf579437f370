"""
Text utilities (small, dependency-free)

Intent
- Keep tiny helpers shared by the readers, the signal scorer and the grouping code.
- Never trim source cell values in place (traceability); only derived strings
  (row text, lookup keys, headers) go through these helpers.
- Deterministic behavior only (no randomness, no environment-dependent logic).
"""

from __future__ import annotations

import math
from typing import Any, Mapping


# ---------------------------------------------------------------------
# Basic whitespace helpers
# ---------------------------------------------------------------------


def trim_lr(s: str) -> str:
    """
    Trim leading/trailing whitespace (left+right).
    Keep internal whitespace unchanged.
    """
    return str(s).strip()


def normalize_ws(s: str) -> str:
    """
    Normalize whitespace deterministically:
    - Trim ends
    - Collapse internal whitespace (spaces/newlines/tabs) into single spaces

    Use ONLY for derived strings (row text for keyword matching), not for mutating source cells.
    """
    return " ".join(str(s).split()).strip()


# ---------------------------------------------------------------------
# Safe conversions
# ---------------------------------------------------------------------


def to_cell_str(val: Any) -> str:
    """
    Convert arbitrary cell values into a string:
    - None -> ""
    - float NaN -> ""
    - everything else -> str(val)
    """
    if val is None:
        return ""
    if isinstance(val, float) and math.isnan(val):
        return ""
    return str(val)


def field_value(row: Mapping[str, Any], name: str) -> str:
    """
    Read one field of a row as a string; absent fields read as "".
    """
    return to_cell_str(row.get(name))


def is_blank(val: Any) -> bool:
    return to_cell_str(val).strip() == ""


__all__ = ["trim_lr", "normalize_ws", "to_cell_str", "field_value", "is_blank"]
