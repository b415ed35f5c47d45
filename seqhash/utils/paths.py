# seqhash/utils/paths.py
"""
Path helpers

Intent
- Make config-driven runs independent of CWD: relative paths in
  configs/parameters.yaml resolve against the repo root (parent of configs/).
"""
from __future__ import annotations

from pathlib import Path

STDIN_PATH = "-"


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


def resolve_input_path(path_like: str, *, base_dir: str | Path) -> str:
    """
    Like resolve_path(), but keeps "-" (stdin) untouched.
    """
    if path_like == STDIN_PATH:
        return path_like
    return str(resolve_path(path_like, base_dir=base_dir))


__all__ = ["STDIN_PATH", "repo_root_from_parameters_path", "resolve_path", "resolve_input_path"]
