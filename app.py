import argparse
import sys
import time
from typing import List, Optional

import matplotlib.pyplot as plt
from loguru import logger

from board import Board, SanityCheckError, check_solution
from constants import BOARD_SIZE, LOG_LEVEL, LOG_LEVELS, WORKERS
from logging_utils import configure_logging
from search import search, solve
import view


class SearchResult:
    def __init__(self, board_size: int, solutions: List[Board], duration: float) -> None:
        self.board_size = board_size
        self.solutions = solutions
        self.duration = duration


def run(
    board_size: int,
    workers: Optional[int] = None,
    start_column: Optional[int] = None,
    log_level: Optional[str] = None,
) -> SearchResult:
    """Search one partition (start_column given) or the whole board, timed."""
    start = time.perf_counter()
    try:
        if start_column is None:
            solutions = solve(board_size, workers=workers, log_level=log_level)
        else:
            solutions = search(board_size, start_column)
    finally:
        duration = time.perf_counter() - start
        logger.info("completed in {:.3f}s", duration)
    return SearchResult(board_size=board_size, solutions=solutions, duration=duration)


def _parse_size(text: str) -> Optional[int]:
    try:
        n = int(text)
    except ValueError:
        return None
    return n if n >= 1 else None


# ---------------------------
# Entry point and CLI
# ---------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nqueens",
        description="Enumerate N-Queens placements where no three queens share any straight line",
    )
    parser.add_argument("board_size", nargs="?", default=str(BOARD_SIZE),
                        help=f"Rows (and columns) of the board (default: {BOARD_SIZE})")
    parser.add_argument("--workers", type=int, default=WORKERS,
                        help="Parallel workers over the row-0 starting columns (1 = sequential)")
    parser.add_argument("--start-column", type=int, default=None,
                        help="Only search boards whose row-0 queen is in this column")
    parser.add_argument("--verify", action="store_true",
                        help="Re-check every solution independently before printing")
    parser.add_argument("--quiet", action="store_true", help="Only print the number of solutions")
    parser.add_argument("--plot", action="store_true", help="Show the solutions with matplotlib")
    parser.add_argument("--log-level", type=str.upper, choices=LOG_LEVELS, default=LOG_LEVEL)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    n = _parse_size(args.board_size)
    if n is None:
        logger.error("invalid \"board_size\" parameter {!r}, please enter a positive integer",
                     args.board_size)
        parser.print_usage()
        return 1
    if args.start_column is not None and not 0 <= args.start_column < n:
        logger.error("--start-column must be between 0 and {}", n - 1)
        parser.print_usage()
        return 1

    workers = max(1, int(args.workers or 1))
    logger.info("Config | n={} | workers={} | start_column={}",
                n, workers, "all" if args.start_column is None else args.start_column)

    try:
        result = run(n, workers=workers, start_column=args.start_column,
                     log_level=args.log_level)
    except SanityCheckError:
        logger.exception("Search aborted")
        return 1

    if args.verify:
        bad = [b for b in result.solutions if not check_solution(b.placement)]
        if bad:
            for b in bad:
                logger.error("Invalid solution {}\n{}", list(b.placement), b)
            return 1
        logger.success("Verified {} solution(s)", len(result.solutions))

    if args.quiet:
        print(f"Results ({len(result.solutions)})")
    else:
        view.print_results(result.solutions)

    if args.plot:
        view.plot_solutions(result.solutions)
        plt.show()
    return 0


if __name__ == "__main__":
    sys.exit(main())
