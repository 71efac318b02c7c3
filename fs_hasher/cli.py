"""Command-line front door for fs-hasher.

Builds a hash tree for one path (or a batch of paths), prints the root
digest, and optionally writes the CSV report and a duplicates listing.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import time
from pathlib import Path

from fs_hasher.config import AdmissionConfig, HasherConfig
from fs_hasher.core.types import DEFAULT_ALGORITHM, HASH_ALGORITHMS
from fs_hasher.hasher import FsHasher
from fs_hasher.report import format_duplicates_csv


def _positive_float(value: str) -> float:
    """argparse type for positive float values."""
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid number: {value!r}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("value must be > 0")
    return parsed


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fs-hasher",
        description="Compute order-independent digests of files, folders, or batches of paths.",
    )
    parser.add_argument("paths", nargs="+", help="File or directory. Several paths form a batch.")
    parser.add_argument(
        "-a",
        "--algorithm",
        default=DEFAULT_ALGORITHM,
        help=f"Hash algorithm ({', '.join(HASH_ALGORITHMS.values())}).",
    )
    parser.add_argument("--report", metavar="FILE", type=Path, help="Write the CSV report to FILE.")
    parser.add_argument("--duplicates", metavar="FILE", type=Path, help="Write duplicate digests to FILE.")
    parser.add_argument(
        "--retry-delay",
        type=_positive_float,
        default=AdmissionConfig.retry_delay_seconds,
        help="Seconds between open attempts when file descriptors run out.",
    )
    parser.add_argument("-v", "--verbose", action="count", default=0, help="More logging (-vv for debug).")
    return parser


def _elapsed(start: float) -> str:
    return f"{time.monotonic() - start:.3f}s"


async def run(args: argparse.Namespace) -> int:
    source = args.paths[0] if len(args.paths) == 1 else list(args.paths)
    config = HasherConfig(admission=AdmissionConfig(retry_delay_seconds=args.retry_delay))
    hasher = FsHasher(config)
    try:
        start = time.monotonic()
        built = await hasher.build(source)
        print(f"Build result of file system \"{hasher.source}\" is {built}. Elapsed time: {_elapsed(start)}")
        if not built:
            return 1

        start = time.monotonic()
        digest = await hasher.compute(args.algorithm)
        print(f"Compute result ({hasher.algorithm}): {digest} Elapsed time: {_elapsed(start)}")

        if args.report is not None:
            args.report.write_text(await hasher.report(), encoding="utf-8")
            print(f"Report written to {args.report}")

        duplicates = await hasher.find_duplicates()
        if duplicates:
            print(f"{len(duplicates)} duplicated digest(s) found.")
            if args.duplicates is not None:
                args.duplicates.write_text(format_duplicates_csv(duplicates), encoding="utf-8")
                print(f"Duplicates written to {args.duplicates}")
        else:
            print("All items are unique.")
        return 0
    finally:
        hasher.destroy()


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    level = logging.WARNING
    if args.verbose == 1:
        level = logging.INFO
    elif args.verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    return asyncio.run(run(args))


if __name__ == "__main__":
    sys.exit(main())
