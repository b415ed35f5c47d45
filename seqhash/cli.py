# seqhash/cli.py
"""
seqhash command line

Usage
    seqhash [options] FASTA/FASTQ [FASTA/FASTQ ...]
    cat reads.fq.gz | seqhash -

Prints the per-record table (-i), the duplicate table (-d) and always the
final aggregate hash. Logs go to stderr; stdout only carries the tables.
Command-line flags override values loaded from --config. Relative paths in the
config (inputs, artifacts) resolve against its repo root (parent of configs/);
positional inputs stay relative to the current directory.
"""

from __future__ import annotations

import argparse
import sys
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
from typing import List, Optional, Sequence

from rich.console import Console
from rich.text import Text

from seqhash.batch.pipeline_1_hash_inputs import write_artifacts
from seqhash.core.errors import SeqHashError
from seqhash.core.hash_run import run_hash
from seqhash.core.hashers import HashAlgorithm
from seqhash.core.reporting import TABLE_HEADER, format_final_hash, format_hash_table
from seqhash.utils.config import ParametersConfig, ensure_dirs, load_parameters
from seqhash.utils.logging import configure_logging_from_params, get_logger
from seqhash.utils.paths import STDIN_PATH, repo_root_from_parameters_path, resolve_input_path

_ALGORITHMS = [a.value for a in HashAlgorithm]


def _version() -> str:
    try:
        return version("seqhash")
    except PackageNotFoundError:
        return "unknown"


def _existing_input(s: str) -> str:
    if s == STDIN_PATH or Path(s).exists():
        return s
    raise argparse.ArgumentTypeError(f"File does not exist: {s}")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="seqhash",
        description="Order- and strand-independent fingerprints for FASTA/FASTQ files",
    )
    p.add_argument("inputs", nargs="*", metavar="FASTA(s)", type=_existing_input,
                   help="Input files (plain, gzip, bzip2 or xz); '-' reads stdin")
    p.add_argument("-i", "--individual", action="store_true", default=None,
                   help="Print the hash of every record")
    p.add_argument("-c", "--canonical", action="store_true", default=None,
                   help="Hash the smaller of each sequence and its reverse complement")
    p.add_argument("-d", "--show-duplicates", action="store_true", default=None,
                   help="Print records whose hash was already seen")
    p.add_argument("--seqhash", type=HashAlgorithm.parse, choices=list(HashAlgorithm), metavar="{" + ",".join(_ALGORITHMS) + "}",
                   default=None, help="Per-record hash algorithm")
    p.add_argument("--finalhash", type=HashAlgorithm.parse, choices=list(HashAlgorithm), metavar="{" + ",".join(_ALGORITHMS) + "}",
                   default=None, help="Final (aggregate) hash algorithm")

    fmt = p.add_mutually_exclusive_group()
    fmt.add_argument("--fasta", action="store_const", const="fasta", dest="file_type", help="Input is FASTA")
    fmt.add_argument("--fastq", action="store_const", const="fastq", dest="file_type", help="Input is FASTQ")

    p.add_argument("--config", type=Path, default=None, help="Path to parameters.yaml")
    p.add_argument("--artifacts", action="store_true", default=None,
                   help="Also write records/duplicates/report artifacts")
    p.add_argument("--log-level", default=None, help="DEBUG|INFO|WARNING|ERROR")
    p.add_argument("--version", action="version", version=f"%(prog)s {_version()}")
    return p


def _base_dir(args: argparse.Namespace) -> Path:
    """
    Relative paths from --config resolve against its repo root, like pipeline 1.
    """
    return repo_root_from_parameters_path(args.config) if args.config else Path.cwd()


def params_from_args(args: argparse.Namespace) -> ParametersConfig:
    params = load_parameters(args.config) if args.config else ParametersConfig()

    inp = params.input
    if args.inputs:
        inp = inp.model_copy(update={"paths": list(args.inputs)})
    elif args.config:
        base_dir = _base_dir(args)
        inp = inp.model_copy(update={"paths": [resolve_input_path(p, base_dir=base_dir) for p in inp.paths]})
    if args.file_type:
        inp = inp.model_copy(update={"file_type": args.file_type})

    hashing = params.hashing
    if args.seqhash:
        hashing = hashing.model_copy(update={"record_algorithm": HashAlgorithm.parse(args.seqhash)})
    if args.finalhash:
        hashing = hashing.model_copy(update={"final_algorithm": HashAlgorithm.parse(args.finalhash)})
    if args.canonical:
        hashing = hashing.model_copy(update={"canonical": True})

    out = params.output
    for flag, key in ((args.individual, "individual"), (args.show_duplicates, "show_duplicates"),
                      (args.artifacts, "write_artifacts")):
        if flag:
            out = out.model_copy(update={key: True})

    log_cfg = params.logging
    if args.log_level:
        log_cfg = log_cfg.model_copy(update={"level": str(args.log_level).upper()})

    return params.model_copy(update={"input": inp, "hashing": hashing, "output": out, "logging": log_cfg})


def _styled(line: str) -> Text:
    if line == TABLE_HEADER:
        return Text(line, style="bold")
    label, _, digest = line.rpartition("\t")
    label_style = "bold" if line.startswith("Final hash\t") else "cyan"
    return Text.assemble((label, label_style), "\t", (digest, "green"))


def _print_lines(lines: List[str], console: Console) -> None:
    """
    Colour names and digests on a terminal; pipes and files get the plain TSV lines.
    """
    for line in lines:
        if console.is_terminal:
            console.print(_styled(line), soft_wrap=True)
        else:
            print(line, file=console.file)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        params = params_from_args(args)
        configure_logging_from_params(params)
        logger = get_logger(__name__)

        if not params.input.paths:
            logger.error("No input files given")
            return 1

        run = run_hash(
            params.input.paths,
            record_algorithm=params.hashing.record_algorithm,
            final_algorithm=params.hashing.final_algorithm,
            canonical=params.hashing.canonical,
            file_type=params.input.file_type,
            sniff_lines=params.input.sniff_lines,
        )

        console = Console(highlight=False)
        if params.output.individual:
            _print_lines(format_hash_table(run.results), console)

        if run.duplicates and params.output.show_duplicates:
            _print_lines(format_hash_table(run.duplicates), console)

        _print_lines([format_final_hash(run.final_hash)], console)

        if params.output.write_artifacts:
            base_dir = _base_dir(args)
            ensure_dirs(params, base_dir=base_dir)
            write_artifacts(run, params, base_dir=base_dir)
    except (SeqHashError, OSError, ValueError) as e:
        get_logger(__name__).error("%s", e)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
