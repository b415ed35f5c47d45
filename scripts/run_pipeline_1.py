# scripts/run_pipeline_1.py
"""
Manual runner — Pipeline 1 (REAL execution)

This script:
- Ensures repo root is on PYTHONPATH
- Uses configs/parameters.yaml and the inputs it lists
- Runs pipeline_1_hash_inputs.main()
- Does NOT clean up artifacts (inspect outputs freely)

Usage:
    python scripts/run_pipeline_1.py [extra input files ...]
"""

from __future__ import annotations

import sys
from pathlib import Path

# ---------------------------------------------------------------------
# Ensure repo root is on PYTHONPATH so `import seqhash.*` works
# ---------------------------------------------------------------------
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

# ---------------------------------------------------------------------
# Imports AFTER path fix
# ---------------------------------------------------------------------
from seqhash.batch.pipeline_1_hash_inputs import main as pipeline_1_main
from seqhash.utils.logging import get_logger


def main(argv: list[str]) -> int:
    logger = get_logger(__name__)

    logger.info("=" * 80)
    logger.info("RUNNING PIPELINE 1 — REAL EXECUTION")
    logger.info("Repo root: %s", REPO_ROOT)
    logger.info("Working directory: %s", Path.cwd())
    logger.info("=" * 80)

    parameters_path = REPO_ROOT / "configs/parameters.yaml"
    if not parameters_path.exists():
        raise FileNotFoundError(f"Required file missing for Pipeline 1:\n  {parameters_path}")

    logger.info("Invoking pipeline_1_hash_inputs.main()")
    rc = pipeline_1_main(parameters_path=parameters_path, inputs=argv or None)

    logger.info("Pipeline 1 finished with return code: %s", rc)
    logger.info("=" * 80)
    return rc


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
