"""
Path helpers

Intent
- Make the batch behavior independent of CWD for repo-owned files.
- Standardize: configs/parameters.yaml => repo root.

Used to resolve the status order file and the default output directory.
"""
from __future__ import annotations

from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[2]
DEFAULT_PARAMETERS_PATH = REPO_ROOT / "configs" / "parameters.yaml"


def repo_root_from_parameters_path(parameters_path: str | Path) -> Path:
    """
    Given configs/parameters.yaml, return repo root.
    Works for absolute or relative paths.
    """
    p = Path(parameters_path).resolve()
    # .../repo/configs/parameters.yaml -> .../repo
    return p.parents[1]


def resolve_path(path_like: str | Path, *, base_dir: str | Path) -> Path:
    """
    Resolve a path relative to base_dir unless already absolute.
    """
    p = Path(path_like)
    if p.is_absolute():
        return p
    return (Path(base_dir) / p).resolve()


__all__ = [
    "REPO_ROOT",
    "DEFAULT_PARAMETERS_PATH",
    "repo_root_from_parameters_path",
    "resolve_path",
]
