"""
Manual runner — DWR status inference (REAL execution)

This script:
- Ensures repo root is on PYTHONPATH
- Uses the real configs/parameters.yaml and data/job_status_order.csv
- Forwards its arguments to dwr_status.batch.infer_status.main()
- Does NOT clean up files (inspect outputs freely)

Usage:
    python scripts/run_infer_status.py --input path/to/dwr_export.csv [--output-dir output/]
"""

from __future__ import annotations

import sys
from pathlib import Path

# ---------------------------------------------------------------------
# Ensure repo root is on PYTHONPATH so `import dwr_status.*` works
# ---------------------------------------------------------------------
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

# ---------------------------------------------------------------------
# Imports AFTER path fix
# ---------------------------------------------------------------------
from dwr_status.batch.infer_status import main as infer_status_main
from dwr_status.utils.config import load_parameters
from dwr_status.utils.logging import get_logger


def main() -> int:
    logger = get_logger(__name__)

    logger.info("=" * 80)
    logger.info("RUNNING DWR STATUS INFERENCE — REAL EXECUTION")
    logger.info("Repo root: %s", REPO_ROOT)
    logger.info("Working directory: %s", Path.cwd())
    logger.info("=" * 80)

    # -----------------------------------------------------------------
    # Preconditions (explicit, fail fast)
    # -----------------------------------------------------------------
    params_path = REPO_ROOT / "configs/parameters.yaml"
    if not params_path.exists():
        raise FileNotFoundError(f"Required file missing: {params_path}")

    params = load_parameters(params_path)
    order_path = REPO_ROOT / params.status_order.path
    if not order_path.exists():
        raise FileNotFoundError(f"Status order file missing: {order_path}")

    logger.info("Invoking infer_status.main()")
    rc = infer_status_main(sys.argv[1:])

    logger.info("Status inference finished with return code: %s", rc)
    logger.info("=" * 80)
    return rc


if __name__ == "__main__":
    raise SystemExit(main())
