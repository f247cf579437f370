# dwr_status/utils/config.py
"""
Config Loader — DWR Status Inference (Typed YAML Configs)

Intent
- Load + validate configs/parameters.yaml for the status inference batch.
- Return a **typed** configuration object (Pydantic) aligned with this repo.
- Provide backward-compatible parsing for a small set of legacy keys.

What this module guarantees
- **Strict validation:** invalid configs fail fast with actionable Pydantic errors.
- **Unicode whitespace hardening:** NBSP/BOM/narrow NBSP are normalized before YAML parsing.
- **Backwards compatibility (limited, intentional):**
  - top-level `status_order_file` -> `status_order.path`
  - `input` may be given as `inputs` (plural)
- **Deterministic defaults:** if a key is omitted, model defaults apply. The defaults
  reproduce the field names of the DWR export (job_number, job_status_at_dwr_create, ...).

Config models (high level)
- ProjectConfig: name
- InputConfig: format (csv|tsv|psv), encoding
- StatusOrderConfig: path, column, fallback_status
- ColumnsConfig: job_id, status, date, sequence, role, description, supplementary
- OutputConfig: dir, column, write_summary, summary_suffix
- LoggingConfig: level, log_file
- ParametersConfig: groups above

Primary functions
- load_parameters(path="configs/parameters.yaml") -> ParametersConfig

Errors
- ConfigurationError (ValueError subclass): fatal configuration problems raised before any
  row is processed (empty status order, missing status column, ...).

External dependencies
- PyYAML: yaml.safe_load
- Pydantic v2: BaseModel, validators, model_validate
- Local: dwr_status.utils.logging.get_logger
"""


from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from dwr_status.utils.logging import get_logger


class ConfigurationError(ValueError):
    """Fatal configuration problem; raised before any row is processed."""


# -----------------------------
# Parameter models (THIS project)
# -----------------------------
class ProjectConfig(BaseModel):
    name: str = "dwr_status_inference"


class InputConfig(BaseModel):
    format: Literal["csv", "tsv", "psv"] = "csv"
    encoding: str = "utf-8"

    @field_validator("format", mode="before")
    @classmethod
    def _normalize_format(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().lower()
        return v


class StatusOrderConfig(BaseModel):
    path: str = "data/job_status_order.csv"
    column: str = "job_status"
    fallback_status: str = "Estimating"

    @field_validator("path", "column", "fallback_status")
    @classmethod
    def _validate_non_blank(cls, v: str, info) -> str:
        if not str(v).strip():
            raise ValueError(f"status_order.{info.field_name} must be a non-empty string")
        return str(v).strip()


class ColumnsConfig(BaseModel):
    job_id: str = "job_number"
    status: str = "job_status_at_dwr_create"
    date: str = "date"
    sequence: str = "dwrNumber"
    role: str = "role"
    description: str = "description"
    supplementary: Optional[str] = "notes"

    @field_validator("job_id", "status", "date", "sequence", "role", "description")
    @classmethod
    def _validate_field_name(cls, v: str, info) -> str:
        if not str(v).strip():
            raise ValueError(f"columns.{info.field_name} must be a non-empty column name")
        return str(v).strip()

    @field_validator("supplementary", mode="before")
    @classmethod
    def _blank_supplementary_is_none(cls, v: Any) -> Optional[str]:
        if v is None:
            return None
        s = str(v).strip()
        return s or None


class OutputConfig(BaseModel):
    dir: str = "output"
    column: str = "iStatus"
    write_summary: bool = True
    summary_suffix: str = "_status_summary.json"

    @field_validator("column")
    @classmethod
    def _validate_column(cls, v: str) -> str:
        if not str(v).strip():
            raise ValueError("output.column must be a non-empty column name")
        return str(v).strip()


class LoggingConfig(BaseModel):
    level: str = "INFO"
    log_file: Optional[str] = None

    @field_validator("level", mode="before")
    @classmethod
    def _validate_level(cls, v: Any) -> str:
        if v is None:
            return "INFO"
        s = str(v).strip().upper()
        if not isinstance(getattr(logging, s, None), int):
            raise ValueError(f"logging.level must be a valid level name; got {v!r}")
        return s


class ParametersConfig(BaseModel):
    project: ProjectConfig = Field(default_factory=ProjectConfig)
    input: InputConfig = Field(default_factory=InputConfig)
    status_order: StatusOrderConfig = Field(default_factory=StatusOrderConfig)
    columns: ColumnsConfig = Field(default_factory=ColumnsConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="before")
    @classmethod
    def _backward_compat_keys(cls, data: Any) -> Any:
        """
        Backward compatibility:
        - allow `inputs` (plural) instead of `input`
        - allow a flat `status_order_file` key instead of status_order.path
        """
        if not isinstance(data, dict):
            return data

        if "input" not in data and "inputs" in data and isinstance(data["inputs"], dict):
            data["input"] = data.pop("inputs")

        legacy = data.pop("status_order_file", None)
        if legacy is not None:
            so = data.get("status_order")
            if not isinstance(so, dict):
                so = {}
            so.setdefault("path", legacy)
            data["status_order"] = so

        return data


# -----------------------------
# YAML helpers
# -----------------------------
def _load_yaml(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")

    with p.open("r", encoding="utf-8") as f:
        text = f.read()

    # sanitize BEFORE YAML parse (fix NBSP / BOM / narrow NBSP)
    for ch in ["\u00A0", "\u2007", "\u202F", "\uFEFF"]:
        text = text.replace(ch, " ")

    data = yaml.safe_load(text) or {}
    if not isinstance(data, dict):
        raise ValueError(f"YAML root must be a mapping/object: {path}")
    return data


def load_parameters(path: str | Path = "configs/parameters.yaml") -> ParametersConfig:
    """
    Load and validate parameters.yaml into a typed ParametersConfig.
    """
    logger = get_logger(__name__)
    raw = _load_yaml(path)
    try:
        params = ParametersConfig.model_validate(raw)
    except ValidationError as e:
        logger.error("Invalid parameters.yaml: %s", e)
        raise
    return params


__all__ = [
    "ConfigurationError",
    "ParametersConfig",
    "ColumnsConfig",
    "load_parameters",
]
