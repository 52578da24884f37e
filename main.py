"""CLI entrypoint: lay out a word table and place words on its grid."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List

from wordtable.core.exceptions import WordTableError
from wordtable.engine.setup import SetupConfig, SetupSession
from wordtable.utils.logger import configure_logging
from wordtable.utils.pretty import pretty_print_table, print_setup_summary


def parse_words_file(path: Path) -> List[str]:
    """Read words from a file, one per line. Blank lines and # comments are skipped."""
    entries: List[str] = []
    for line in path.read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        entries.append(line)
    return entries


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Place hidden words on a word table grid",
    )
    parser.add_argument("--grid-size", type=int, required=True, help="Grid side length in cells")
    parser.add_argument(
        "--words",
        nargs="+",
        metavar="WORD",
        help="Words to place (letters A-Z, at most grid-size long)",
    )
    parser.add_argument(
        "--words-file",
        type=Path,
        metavar="FILE",
        help="File with one word per line (# comments and blank lines ignored)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducibility")
    parser.add_argument(
        "--no-solver-fallback",
        action="store_true",
        help="Do not retry with the CP-SAT joint placement when random placement fails",
    )
    parser.add_argument(
        "--solver-timeout",
        type=float,
        default=10.0,
        help="CP-SAT time limit in seconds (default 10)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    words: List[str] = []
    if args.words:
        words.extend(args.words)
    if args.words_file:
        words.extend(parse_words_file(args.words_file))
    if not words:
        parser.error("provide --words or --words-file")

    config = SetupConfig(
        grid_size=args.grid_size,
        word_count=len(words),
        words=words,
        seed=args.seed,
        solver_fallback=not args.no_solver_fallback,
        solver_timeout=args.solver_timeout,
    )

    try:
        session = SetupSession(config)
        session.place_all_randomly()
        result = session.finalize()
    except WordTableError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 1

    pretty_print_table(session.model)
    print_setup_summary(result)
    if args.seed is not None:
        print()
        print(f"Seed: {args.seed}")
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
