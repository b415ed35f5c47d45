#!/usr/bin/env python3
"""
Clear run artifacts:

- artifacts/records.jsonl, artifacts/duplicates.psv, artifacts/report.json
- artifacts/logs/

Safe:
- Resolves repo root from this script location
- Only touches paths under <repo>/artifacts
- Prints summary
"""

from __future__ import annotations

import shutil
import sys
from pathlib import Path


def _repo_root() -> Path:
    # scripts/clear_artifacts.py → repo root = parent of scripts
    return Path(__file__).resolve().parents[1]


def _remove(p: Path) -> int:
    if not p.exists():
        print(f"[SKIP] {p} (not found)")
        return 0

    if p.is_dir():
        shutil.rmtree(p)
    else:
        p.unlink()
    print(f"[OK] Removed: {p}")
    return 0


def main() -> int:
    artifacts = _repo_root() / "artifacts"

    targets = [
        artifacts / "records.jsonl",
        artifacts / "duplicates.psv",
        artifacts / "report.json",
        artifacts / "logs",
    ]

    rc = 0
    for t in targets:
        rc |= _remove(t)

    print("Done.")
    return rc


if __name__ == "__main__":
    sys.exit(main())
