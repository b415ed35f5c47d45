# seqhash/utils/config.py
"""
Config Loader — seqhash (Typed YAML Configs)

Intent
- Load + validate `configs/parameters.yaml` into a **typed** configuration object (Pydantic).
- Provide backward-compatible parsing for a small set of legacy keys.
- Ensure the artifacts directory exists.

What this module guarantees
- **Strict validation:** invalid configs fail fast with actionable Pydantic errors.
- **Unicode whitespace hardening:** NBSP/BOM/narrow NBSP are normalized before YAML parsing.
- **Backwards compatibility (limited, intentional):**
  - top-level `hash` -> `hashing`
  - algorithm aliases: `sha256` -> `sha2`, `highway`/`fast` -> `xxhash`
- **Deterministic defaults:** if a key is omitted, model defaults apply.

Config models (high level)
- InputConfig: paths, file_type (auto|fasta|fastq), sniff_lines (>0)
- HashingConfig: record_algorithm, final_algorithm, canonical
- OutputConfig: individual, show_duplicates, write_artifacts + artifact paths
- LoggingConfig: level, log_file

Primary functions
- load_parameters(path="configs/parameters.yaml") -> ParametersConfig
- ensure_dirs(params) -> None

External dependencies
- PyYAML: yaml.safe_load
- Pydantic v2: BaseModel, validators, model_validate
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from seqhash.core.hashers import HashAlgorithm
from seqhash.utils.logging import get_logger


# -----------------------------
# Parameter models
# -----------------------------
class InputConfig(BaseModel):
    paths: List[str] = Field(default_factory=list)
    file_type: Literal["auto", "fasta", "fastq"] = "auto"
    sniff_lines: int = 100

    @field_validator("file_type", mode="before")
    @classmethod
    def _lower_file_type(cls, v: Any) -> Any:
        return v.strip().lower() if isinstance(v, str) else v

    @field_validator("sniff_lines")
    @classmethod
    def _validate_sniff_lines(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("input.sniff_lines must be > 0")
        return v


class HashingConfig(BaseModel):
    record_algorithm: HashAlgorithm = HashAlgorithm.MD5
    final_algorithm: HashAlgorithm = HashAlgorithm.MD5
    canonical: bool = False

    @field_validator("record_algorithm", "final_algorithm", mode="before")
    @classmethod
    def _parse_algorithm(cls, v: Any) -> HashAlgorithm:
        if v is None:
            return HashAlgorithm.MD5
        return HashAlgorithm.parse(v)


class OutputConfig(BaseModel):
    individual: bool = False
    show_duplicates: bool = False

    write_artifacts: bool = False
    artifacts_dir: str = "artifacts"
    records_jsonl: str = "artifacts/records.jsonl"
    duplicates_psv: str = "artifacts/duplicates.psv"
    report_json: str = "artifacts/report.json"


class LoggingConfig(BaseModel):
    level: str = "INFO"
    log_file: Optional[str] = None

    @field_validator("level")
    @classmethod
    def _validate_level(cls, v: str) -> str:
        s = str(v).strip().upper()
        if s not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"logging.level must be one of DEBUG|INFO|WARNING|ERROR|CRITICAL, got {v!r}")
        return s


class ParametersConfig(BaseModel):
    input: InputConfig = Field(default_factory=InputConfig)
    hashing: HashingConfig = Field(default_factory=HashingConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="before")
    @classmethod
    def _backward_compat_keys(cls, data: Any) -> Any:
        """
        Backward compatibility:
        - allow top-level 'hash' instead of 'hashing'
        """
        if not isinstance(data, dict):
            return data

        if "hashing" not in data and isinstance(data.get("hash"), dict):
            data["hashing"] = data.pop("hash")

        return data


# -----------------------------
# YAML helpers
# -----------------------------
def _load_yaml(path: str | Path) -> Dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"YAML file not found: {path}")

    text = p.read_text(encoding="utf-8")

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


def ensure_dirs(params: ParametersConfig, *, base_dir: Optional[str | Path] = None) -> None:
    """
    Ensure the configured artifacts directory exists (only when artifacts are written).
    Relative paths resolve against base_dir (default: CWD).
    """
    if not params.output.write_artifacts:
        return
    d = Path(params.output.artifacts_dir)
    if base_dir is not None and not d.is_absolute():
        d = Path(base_dir) / d
    d.mkdir(parents=True, exist_ok=True)


__all__ = [
    "InputConfig",
    "HashingConfig",
    "OutputConfig",
    "LoggingConfig",
    "ParametersConfig",
    "load_parameters",
    "ensure_dirs",
]
