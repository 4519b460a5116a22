from functools import lru_cache
from itertools import combinations
from typing import Iterator, List, Sequence, Tuple

import numpy as np
from loguru import logger

from constants import ATTACKED_GLYPH, ATTACK_LINES_CACHE_SIZE, FREE_GLYPH, QUEEN_GLYPH

logger.disable(__name__)

# (row step, col step) for the four diagonal rays
DIAGONAL_STEPS = ((-1, -1), (-1, 1), (1, -1), (1, 1))


class SanityCheckError(RuntimeError):
    """A queen was removed from a square it does not hold exclusively."""

    def __init__(self, row: int, col: int, value: int, board: str):
        super().__init__(row, col, value, board)
        self.row = row
        self.col = col
        self.value = value
        self.board = board

    def __str__(self) -> str:
        return (
            f"sanity check failed: remove_queen({self.row}, {self.col}) "
            f"found attack count {self.value}\n{self.board}"
        )


def collinear(x1: int, y1: int, x2: int, y2: int, x3: int, y3: int) -> bool:
    """True if the three points lie on one straight line.

    Compares the two slopes as a cross product so it stays in integers.
    """
    return (y1 - y2) * (x1 - x3) == (y1 - y3) * (x1 - x2)


@lru_cache(maxsize=ATTACK_LINES_CACHE_SIZE)
def attack_lines(size: int, row: int, col: int) -> Tuple[np.ndarray, np.ndarray]:
    """Index arrays of every square a queen at (row, col) covers.

    The queen's own square appears exactly once; nothing else repeats.
    The arrays are shared through the cache, so they are read-only.
    """
    squares = [(row, col)]
    squares.extend((row, c) for c in range(size) if c != col)
    squares.extend((r, col) for r in range(size) if r != row)
    for dr, dc in DIAGONAL_STEPS:
        r, c = row + dr, col + dc
        while 0 <= r < size and 0 <= c < size:
            squares.append((r, c))
            r += dr
            c += dc
    rows, cols = zip(*squares)
    rows, cols = np.array(rows), np.array(cols)
    rows.setflags(write=False)
    cols.setflags(write=False)
    return rows, cols


class Board:
    def __init__(self, size: int):
        if size < 1:
            raise ValueError(f"board size must be a positive integer, got {size}")
        self.size = size
        # column of the queen in each row, -1 if the row is empty
        self.queen_column: List[int] = [-1] * size
        # how many placed queens cover each square
        self.attack_count = np.zeros((size, size), dtype=int)
        self.placed_count = 0

    @property
    def placement(self) -> Tuple[int, ...]:
        return tuple(self.queen_column)

    def queens(self) -> Iterator[Tuple[int, int]]:
        for row, col in enumerate(self.queen_column):
            if col != -1:
                yield row, col

    def copy(self) -> "Board":
        other = Board.__new__(Board)
        other.size = self.size
        other.queen_column = self.queen_column[:]
        other.attack_count = self.attack_count.copy()
        other.placed_count = self.placed_count
        return other

    def is_covered(self, row: int, col: int) -> bool:
        return self.attack_count[row, col] > 0

    def forms_line(self, row: int, col: int) -> bool:
        """Check whether (row, col) would line up with two placed queens."""
        if self.placed_count < 2:
            return False

        for (row1, col1), (row2, col2) in combinations(self.queens(), 2):
            if collinear(row, col, row1, col1, row2, col2):
                logger.opt(lazy=True).debug(
                    "line detected placing queen at {}",
                    lambda: f"{row}/{col}: {row2}/{col2} <-> {row1}/{col1} "
                            f"<-> {row}/{col}\n{self}",
                )
                return True
        return False

    def place_queen(self, row: int, col: int) -> bool:
        """Try to put a queen at (row, col).

        Args:
            row: Row of the square. Must not already hold a queen.
            col: Column of the square.

        Returns:
            True if the queen was placed, False if the square is attacked or
            the queen would be collinear with two others. A rejected attempt
            leaves the board untouched.
        """
        if self.is_covered(row, col) or self.forms_line(row, col):
            return False

        self.attack_count[attack_lines(self.size, row, col)] += 1
        self.queen_column[row] = col
        self.placed_count += 1
        return True

    def remove_queen(self, row: int, col: int) -> None:
        """Undo a successful place_queen(row, col).

        Raises:
            SanityCheckError: The square is not covered by exactly this queen,
                meaning place/remove calls were paired out of order.
        """
        value = int(self.attack_count[row, col])
        if value != 1:
            rendered = str(self)
            logger.error("Sanity check failed: remove_queen({}, {}) = {}", row, col, value)
            logger.error("\n{}", rendered)
            raise SanityCheckError(row, col, value, rendered)

        self.attack_count[attack_lines(self.size, row, col)] -= 1
        self.queen_column[row] = -1
        self.placed_count -= 1

    def __str__(self) -> str:
        width = len(str(self.size - 1))
        header = " " * (width + 1) + " ".join(f"{c:<{width}}" for c in range(self.size))
        lines = [header.rstrip()]
        for row in range(self.size):
            cells = []
            for col in range(self.size):
                if self.queen_column[row] == col:
                    cells.append(QUEEN_GLYPH)
                elif self.attack_count[row, col] > 0:
                    cells.append(ATTACKED_GLYPH)
                else:
                    cells.append(FREE_GLYPH)
            line = f"{row:<{width}} " + " ".join(f"{cell:<{width}}" for cell in cells)
            lines.append(line.rstrip())
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"Board(size={self.size}, placement={self.placement})"


def check_solution(placement: Sequence[int]) -> bool:
    """Verify a full placement from scratch, without using a Board.

    Every row holds one queen, no two queens share a column or diagonal and
    no three queens lie on a common line.
    """
    n = len(placement)
    if n == 0 or any(not 0 <= col < n for col in placement):
        return False

    points = list(enumerate(placement))
    for (r1, c1), (r2, c2) in combinations(points, 2):
        if c1 == c2 or abs(r1 - r2) == abs(c1 - c2):
            return False
    for (r1, c1), (r2, c2), (r3, c3) in combinations(points, 3):
        if collinear(r1, c1, r2, c2, r3, c3):
            return False
    return True
