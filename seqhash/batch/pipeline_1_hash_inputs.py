# seqhash/batch/pipeline_1_hash_inputs.py
"""
Pipeline 1 — Hash configured inputs and write run artifacts.

Intent
- Config-driven (configs/parameters.yaml) counterpart of the `seqhash` CLI, for
  scheduled or scripted runs that need artifacts on disk rather than stdout tables.

Steps
- Load config + configure logging
- Resolve input paths against the repo root (CWD independent; "-" stays stdin)
- run_hash(): per-record digests, duplicates, final digest
- Write artifacts:
  - output.records_jsonl   per-record digests, input order
  - output.duplicates_psv  records sharing a digest with an earlier record
  - output.report_json     final digest, settings, inputs (+ SHA1), duplicate groups

Returns 0 on success; errors propagate to the caller.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Sequence
from uuid import uuid4

from seqhash.core.hash_run import HashRunResult, run_hash
from seqhash.core.reporting import duplicates_frame, records_payload
from seqhash.io.writers import write_json, write_jsonl, write_psv
from seqhash.utils.config import ParametersConfig, ensure_dirs, load_parameters
from seqhash.utils.logging import configure_logging_from_params, get_logger
from seqhash.utils.paths import repo_root_from_parameters_path, resolve_input_path, resolve_path


def write_artifacts(run: HashRunResult, params: ParametersConfig, *, base_dir: str | Path) -> None:
    out = params.output
    write_jsonl(resolve_path(out.records_jsonl, base_dir=base_dir), records_payload(run.results))
    write_psv(resolve_path(out.duplicates_psv, base_dir=base_dir), duplicates_frame(run.duplicates))
    write_json(resolve_path(out.report_json, base_dir=base_dir), run.to_report())


def main(
    *,
    parameters_path: str | Path = "configs/parameters.yaml",
    inputs: Optional[Sequence[str]] = None,
) -> int:
    params = load_parameters(parameters_path)
    configure_logging_from_params(params)

    run_id = uuid4().hex[:8]
    logger = get_logger(__name__, run_id=run_id)

    repo_root = repo_root_from_parameters_path(parameters_path)
    raw_paths = list(inputs) if inputs else list(params.input.paths)
    paths = [resolve_input_path(p, base_dir=repo_root) for p in raw_paths]

    run = run_hash(
        paths,
        record_algorithm=params.hashing.record_algorithm,
        final_algorithm=params.hashing.final_algorithm,
        canonical=params.hashing.canonical,
        file_type=params.input.file_type,
        sniff_lines=params.input.sniff_lines,
        run_id=run_id,
    )

    ensure_dirs(params, base_dir=repo_root)
    write_artifacts(run, params, base_dir=repo_root)

    logger.info("Pipeline 1 completed: final hash %s (records=%d)", run.final_hash, len(run.results))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
