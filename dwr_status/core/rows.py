# dwr_status/core/rows.py
"""
Row types shared by the inference core.

- RowFields: names of the columns the core reads (values come from parameters.yaml `columns:`).
- IndexedRow: one input row plus its original 0-based position.
- is_empty_row(): a row whose every field is blank.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple

from dwr_status.utils.text import field_value, is_blank


@dataclass(frozen=True)
class RowFields:
    job_id: str = "job_number"
    status: str = "job_status_at_dwr_create"
    date: str = "date"
    sequence: str = "dwrNumber"
    role: str = "role"
    description: str = "description"
    supplementary: Optional[str] = "notes"

    @classmethod
    def from_config(cls, columns: Any) -> "RowFields":
        return cls(
            job_id=columns.job_id,
            status=columns.status,
            date=columns.date,
            sequence=columns.sequence,
            role=columns.role,
            description=columns.description,
            supplementary=columns.supplementary,
        )

    def text_fields(self) -> Tuple[str, ...]:
        """Fields concatenated into the row text, in matching order."""
        names = (self.status, self.role, self.description)
        if self.supplementary:
            names = names + (self.supplementary,)
        return names

    def all_fields(self) -> Tuple[str, ...]:
        names = (self.job_id, self.status, self.date, self.sequence, self.role, self.description)
        if self.supplementary:
            names = names + (self.supplementary,)
        return names


@dataclass(frozen=True)
class IndexedRow:
    index: int
    row: Mapping[str, Any]

    def get(self, name: str) -> str:
        return field_value(self.row, name)


def is_empty_row(row: Mapping[str, Any]) -> bool:
    return all(is_blank(v) for v in row.values())


__all__ = ["RowFields", "IndexedRow", "is_empty_row"]
