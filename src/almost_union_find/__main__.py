"""Command line entry point for the Almost Union-Find engine."""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from .formatting import OutputConfig
from .parsing import FORMATS
from .pipeline import ProcessorConfig
from .runner import process_file


def parse_args(argv: list[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run union, move and set queries over a fixed universe.")
    parser.add_argument("input", type=Path, help="Path to the operation stream")
    parser.add_argument(
        "output",
        type=Path,
        nargs="?",
        help="Where answers are written (.txt, .csv or .xlsx); prints to stdout when omitted",
    )
    parser.add_argument(
        "--format",
        dest="input_format",
        choices=("auto",) + FORMATS,
        default=os.getenv("AUF_FORMAT", "auto"),
        help="Input format (default: auto)",
    )
    parser.add_argument("--values", type=Path, help="CSV or Excel table with one value per element")
    parser.add_argument("--value-column", default="value", help="Column holding element values (default: value)")
    parser.add_argument("--yes", default=os.getenv("AUF_YES", "yes"), help="Text written for a true same-set answer")
    parser.add_argument("--no", default=os.getenv("AUF_NO", "no"), help="Text written for a false same-set answer")
    parser.add_argument(
        "--compact-every",
        type=int,
        default=0,
        help="Rebuild the forest after this many moves (0 disables compaction)",
    )
    parser.add_argument(
        "--check-invariants",
        action="store_true",
        help="Verify set aggregates after every operation (slow)",
    )
    parser.add_argument(
        "--disable-tqdm",
        action="store_true",
        help="Disable progress bars even if tqdm is installed",
    )
    parser.add_argument("--verbose", action="store_true", help="Print progress and a summary of the largest sets")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else argv)

    config = ProcessorConfig(
        use_tqdm=not args.disable_tqdm,
        verbose=args.verbose,
        check_invariants=args.check_invariants,
        compact_every=max(0, args.compact_every),
        output=OutputConfig(yes=args.yes, no=args.no),
    )

    outcomes = process_file(
        args.input,
        args.output,
        config,
        input_format=args.input_format,
        values_path=args.values,
        value_column=args.value_column,
    )
    return 0 if outcomes is not None else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
