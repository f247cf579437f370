# dwr_status/batch/infer_status.py
"""
Batch — Infer iStatus for a DWR export and write it back as a new column

Intent
- Read one DWR table (csv/tsv/psv), infer a monotone per-job status for every row and write
  the same table with an `iStatus` column appended last.
- Keep this module orchestration-only (paths + config + IO); the inference lives in
  dwr_status.core.inference.

Inputs
- --input: DWR export (required)
- configs/parameters.yaml (optional; defaults apply when the default file is absent)
- data/job_status_order.csv: canonical status order (`job_status` column)

Outputs
- {output_dir}/{input file name}: original rows + iStatus
- {output_dir}/{input stem}_status_summary.json: run summary (when output.write_summary)

Failure modes
- Status order missing / empty / without its column -> ConfigurationError before any row is read.
- Input file missing -> error logged, exit code 1.

CLI Usage
    python -m dwr_status.batch.infer_status --input data/dwr_export.csv
    python -m dwr_status.batch.infer_status -i data/dwr_export.csv -o output/
    python -m dwr_status.batch.infer_status -i export.psv --format psv --no-summary
"""

from __future__ import annotations

import argparse
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from dwr_status.core.inference import infer_statuses, summarize_assignments
from dwr_status.core.rows import RowFields
from dwr_status.core.status_order import validate_status_order
from dwr_status.io.readers import dataframe_to_rows, delimiter_for, read_input_table, read_status_order
from dwr_status.io.writers import append_status_column, write_delimited, write_json
from dwr_status.utils.config import ConfigurationError, ParametersConfig, load_parameters
from dwr_status.utils.logging import configure_logging_from_params, get_logger
from dwr_status.utils.paths import (
    DEFAULT_PARAMETERS_PATH,
    REPO_ROOT,
    repo_root_from_parameters_path,
    resolve_path,
)


def _load_params(parameters_path: Optional[str | Path]) -> tuple[ParametersConfig, Path]:
    """
    Explicit path: must exist. No path: the repo default if present, else model defaults.
    Returns (params, base_dir used to resolve relative config paths).
    """
    if parameters_path is not None:
        return load_parameters(parameters_path), repo_root_from_parameters_path(parameters_path)
    if DEFAULT_PARAMETERS_PATH.exists():
        return load_parameters(DEFAULT_PARAMETERS_PATH), REPO_ROOT
    return ParametersConfig(), REPO_ROOT


def run(
    input_path: str | Path,
    *,
    output_dir: Optional[str | Path] = None,
    parameters_path: Optional[str | Path] = None,
    status_order_path: Optional[str | Path] = None,
    fmt: Optional[str] = None,
    write_summary: Optional[bool] = None,
    log_level: Optional[str] = None,
) -> Path:
    """
    Run the inference for one input table. Returns the output file path.
    """
    params, base_dir = _load_params(parameters_path)
    configure_logging_from_params(params, level=log_level)

    run_id = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    logger = get_logger(__name__, run_id=run_id)

    in_path = Path(input_path).resolve()

    # ------------------------------------------------------------------
    # Status order (fatal config errors surface before any row is read)
    # ------------------------------------------------------------------
    order_path = (
        Path(status_order_path).resolve()
        if status_order_path is not None
        else resolve_path(params.status_order.path, base_dir=base_dir)
    )
    order = validate_status_order(read_status_order(order_path, params.status_order.column))
    logger.info("Loaded status order: %s (statuses=%d)", str(order_path), len(order))

    # ------------------------------------------------------------------
    # Output location
    # ------------------------------------------------------------------
    out_dir = Path(output_dir).resolve() if output_dir is not None else resolve_path(params.output.dir, base_dir=base_dir)
    out_path = out_dir / in_path.name
    if out_path == in_path:
        raise ConfigurationError(f"Output path equals input path; refusing to overwrite: {out_path}")

    # ------------------------------------------------------------------
    # Read + infer
    # ------------------------------------------------------------------
    in_fmt = fmt or params.input.format
    df = read_input_table(in_path, in_fmt, encoding=params.input.encoding)
    logger.info("Read input: %s (rows=%d, cols=%d)", str(in_path), int(df.shape[0]), int(df.shape[1]))

    fields = RowFields.from_config(params.columns)
    missing = [c for c in fields.all_fields() if c not in df.columns]
    if missing:
        logger.warning("Configured columns missing from input (read as empty): %s", missing)

    rows = dataframe_to_rows(df)
    assignments = infer_statuses(
        rows,
        order,
        fields=fields,
        fallback=params.status_order.fallback_status,
    )

    # ------------------------------------------------------------------
    # Write outputs
    # ------------------------------------------------------------------
    out_df = append_status_column(df, assignments, params.output.column)
    write_delimited(out_path, out_df, sep=delimiter_for(in_fmt))

    do_summary = params.output.write_summary if write_summary is None else bool(write_summary)
    if do_summary:
        summary = summarize_assignments(rows, assignments, order, fields=fields)
        summary["meta"]["input_path"] = str(in_path)
        summary["meta"]["output_path"] = str(out_path)
        write_json(out_dir / f"{in_path.stem}{params.output.summary_suffix}", summary)

    logger.info("Wrote inferred statuses to %s", str(out_path))
    return out_path


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Infer a monotone per-job iStatus column for a DWR export.")
    parser.add_argument("-i", "--input", required=True, help="Path to the DWR export (csv/tsv/psv).")
    parser.add_argument("-o", "--output-dir", default=None, help="Output directory (default: output.dir in parameters.yaml).")
    parser.add_argument("--parameters-path", default=None)
    parser.add_argument("--status-order", default=None, help="Override the status order CSV.")
    parser.add_argument("--format", default=None, choices=["csv", "tsv", "psv"])
    parser.add_argument("--log-level", default=None)
    parser.add_argument("--no-summary", action="store_true", help="Skip the JSON run summary.")

    args = parser.parse_args(argv)

    input_path = Path(args.input).resolve()
    if not input_path.exists():
        get_logger(__name__).error("Input file not found: %s", str(input_path))
        return 1

    run(
        input_path,
        output_dir=args.output_dir,
        parameters_path=args.parameters_path,
        status_order_path=args.status_order,
        fmt=args.format,
        write_summary=False if args.no_summary else None,
        log_level=args.log_level,
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())


__all__ = ["run", "main"]
