"""
Command-Line Interface for the LU decomposition core.

Usage:
    python run_lu.py [OPTIONS]

Options:
    --size N            Matrix dimension (prompted for when omitted)
    --input PATH        Text file with n*n whitespace-separated entries
    --json PATH         Matrix configuration JSON file
    --example NAME      Use one of the bundled reference matrices
    --tolerance TOL     Row magnitude threshold (negative selects 1/1024)
    --combined          Also print the combined L\\U grid
    --check             Print the reconstruction error of P*A against L*U
    --excel PATH        Write an Excel report of the factors
    --verbose           Print detailed progress
"""

import argparse
import logging
import sys
from typing import IO, List, Optional

from .comparator import compare_reconstruction
from .config import MatrixConfiguration
from .decomposition import try_decompose
from .errors import BadInput, LUMatrixError
from .examples import EXAMPLES
from .export import LUExcelExporter
from .presenter import render_combined, render_display
from .reader import read_matrix, read_size
from .store import MatrixStore

DEFAULT_CLI_TOLERANCE = 1e-6
MAX_SIZE = 1_000_000


def prompt_size(
    stream: IO[str],
    prompt: IO[str],
    min_size: int = 1,
    max_size: int = MAX_SIZE,
) -> int:
    """Ask for ``n`` until an integer in ``[min_size, max_size]`` is entered."""
    while True:
        prompt.write("n = ")
        prompt.flush()
        line = stream.readline()
        if not line:
            raise BadInput("no matrix size given")
        try:
            n = read_size(line)
        except BadInput as exc:
            prompt.write(f"{exc}\n")
            continue
        if min_size <= n <= max_size:
            return n
        prompt.write(f"size must be between {min_size} and {max_size}\n")


def _load_configuration(args) -> Optional[MatrixConfiguration]:
    if args.json:
        return MatrixConfiguration.from_json(args.json)
    if args.example:
        return EXAMPLES[args.example]()
    return None


def _read_store(args) -> MatrixStore:
    interactive = sys.stdin.isatty()
    if args.size is not None:
        n = args.size
        if not args.min_size <= n <= args.max_size:
            raise BadInput(f"size must be between {args.min_size} and {args.max_size}, got {n}")
    else:
        n = prompt_size(sys.stdin, sys.stdout, args.min_size, args.max_size)
    store = MatrixStore(n)

    if args.input and args.input != "-":
        with open(args.input, "r", encoding="utf-8") as handle:
            read_matrix(store, handle)
    else:
        read_matrix(store, sys.stdin, prompt=sys.stdout if interactive else None)
        if interactive:
            print()
    return store


def run(args) -> int:
    config = _load_configuration(args)
    if config is not None:
        store = config.build_store()
        label = config.label
        tolerance = args.tolerance
    else:
        store = _read_store(args)
        label = "stdin" if not args.input or args.input == "-" else args.input
        tolerance = DEFAULT_CLI_TOLERANCE if args.tolerance is None else args.tolerance

    if args.verbose:
        print(f"Decomposing {store.n}x{store.n} matrix ({label})")

    original = store.to_rows()
    outcome = try_decompose(store, tolerance)
    if not outcome.success:
        print(f"Decomposition failed: {outcome.error_message}", file=sys.stderr)
        return 1

    decomposition = outcome.decomposition
    sys.stdout.write(render_display(decomposition))

    if args.combined:
        sys.stdout.write(render_combined(decomposition))

    if args.check:
        check = compare_reconstruction(original, decomposition)
        status = "PASS" if check.within_tolerance else "FAIL"
        print(f"max |PA - LU| = {check.max_abs:g} (relative {check.max_rel:g}): {status}")

    if args.excel:
        exporter = LUExcelExporter()
        exporter.add_decomposition(decomposition, label=label, original=original)
        path = exporter.save(args.excel)
        print(f"\nReport saved to: {path}")

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lupivot",
        description="LU decomposition with relative (row-scaled) partial pivoting",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run_lu.py                          # Prompt for n, then each entry
  python run_lu.py -n 3 --input matrix.txt  # Read 9 entries from a file
  python run_lu.py --example permuted       # Decompose a bundled matrix
  python run_lu.py --json case.json --excel reports/lu.xlsx
        """
    )

    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--json", "-j",
        help="Matrix configuration JSON file"
    )
    source.add_argument(
        "--example", "-e",
        choices=sorted(EXAMPLES),
        help="Bundled reference matrix"
    )
    source.add_argument(
        "--input", "-i",
        help="Text file with n*n entries in row-major order ('-' for stdin)"
    )
    parser.add_argument(
        "--size", "-n",
        type=int,
        help="Matrix dimension (prompted for when omitted)"
    )
    parser.add_argument(
        "--min-size",
        type=int,
        default=1,
        help="Smallest size accepted for --size or at the prompt (default: 1)"
    )
    parser.add_argument(
        "--max-size",
        type=int,
        default=MAX_SIZE,
        help=f"Largest size accepted for --size or at the prompt (default: {MAX_SIZE})"
    )
    parser.add_argument(
        "--tolerance", "-t",
        type=float,
        help=f"Row magnitude threshold (default: {DEFAULT_CLI_TOLERANCE:g}; negative selects 1/1024)"
    )
    parser.add_argument(
        "--combined",
        action="store_true",
        help="Also print the combined L\\U grid"
    )
    parser.add_argument(
        "--check",
        action="store_true",
        help="Print the reconstruction error of P*A against L*U"
    )
    parser.add_argument(
        "--excel", "-o",
        metavar="PATH",
        help="Write an Excel report of the factors"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print detailed progress"
    )
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.size is not None and (args.json or args.example):
        parser.error("--size cannot be combined with --json or --example")

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        return run(args)
    except (LUMatrixError, ValueError, OSError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
