import concurrent.futures as cf
from concurrent.futures.process import BrokenProcessPool
from itertools import repeat
from typing import List, Optional

from loguru import logger

from board import Board
from constants import PARALLEL_MIN_SIZE
from logging_utils import configure_logging

logger.disable(__name__)


def search(size: int, start_column: int) -> List[Board]:
    """Find every solution whose row-0 queen sits in start_column.

    Args:
        size: Board size N.
        start_column: Column of the queen in row 0.

    Returns:
        Independent copies of each completed board, in discovery order.
    """
    if not 0 <= start_column < size:
        raise ValueError(f"start column {start_column} is outside a {size}x{size} board")

    board = Board(size)
    # first queen on an empty board is always legal
    board.place_queen(0, start_column)
    if board.placed_count == size:
        return [board.copy()]

    return _extend(board, 1)


def _extend(board: Board, row: int) -> List[Board]:
    """Try each column of row, recursing into the next row after a placement."""
    solutions: List[Board] = []

    if row >= board.size:
        return solutions

    for col in range(board.size):
        if not board.place_queen(row, col):
            continue

        try:
            if board.placed_count == board.size:
                solutions.append(board.copy())
            else:
                solutions.extend(_extend(board, row + 1))
        finally:
            board.remove_queen(row, col)

    return solutions


def _search_sequential(size: int) -> List[Board]:
    solutions: List[Board] = []
    for col in range(size):
        solutions.extend(search(size, col))
    return solutions


def solve(
    size: int,
    workers: Optional[int] = None,
    log_level: Optional[str] = None,
    mp_context=None,
) -> List[Board]:
    """All solutions for a size x size board.

    Exactly one queen sits in row 0, so its N columns split the search into
    independent partitions. With more than one worker (and a board large
    enough to be worth it) the partitions run in a process pool. Results are
    concatenated in start-column order either way.

    log_level, when given, configures logging in each worker process the same
    way the caller configured it; otherwise freshly started workers stay silent.
    """
    if size < 1:
        raise ValueError(f"board size must be a positive integer, got {size}")

    workers = max(1, min(int(workers or 1), size))
    if workers == 1 or size < PARALLEL_MIN_SIZE:
        return _search_sequential(size)

    try:
        pool_kwargs = {}
        if log_level is not None:
            pool_kwargs = {"initializer": configure_logging, "initargs": (log_level,)}
        with cf.ProcessPoolExecutor(max_workers=workers, mp_context=mp_context, **pool_kwargs) as ex:
            partitions = list(ex.map(search, repeat(size), range(size)))
    except (OSError, BrokenProcessPool) as e:
        logger.warning("Process pool unavailable; falling back to sequential search ({})", e)
        return _search_sequential(size)

    logger.debug("Merged {} partitions from {} workers", len(partitions), workers)
    solutions: List[Board] = []
    for part in partitions:
        solutions.extend(part)
    return solutions
