import math
from typing import Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

from board import Board
from constants import PLOT_CELL_INCHES, PLOT_COLUMNS


def print_board_box(board: Board, title: Optional[str] = None) -> None:
    if title:
        print(title)
    print(board)


def print_results(solutions: Sequence[Board]) -> None:
    print(f"Results ({len(solutions)}):\n")
    for k, b in enumerate(solutions, start=1):
        print_board_box(b, title=f"Solution {k}:")
        print()


#####################################################################################
## matplotlib
## Grey background, alternating tiles, attacked squares tinted, a Q on every queen
def plot_board(board: Board, ax=None):
    """Draw one board on a matplotlib axis.

    Args:
        board: The board to draw.
        ax: Axis to draw on. A new figure is created when omitted.

    Returns:
        The axis that was drawn on.
    """
    n = board.size
    if ax is None:
        side = max(3, n * PLOT_CELL_INCHES * 2)
        _, ax = plt.subplots(figsize=(side, side))
    ax.set_facecolor('grey')

    ##Create alternating pattern (like a chessboard)
    rows, cols = np.indices((n, n))
    chessboard = ((rows + cols) % 2 == 0).astype(float)
    ##Attacked squares sit between the two tile shades
    attacked = board.attack_count > 0
    for row, col in board.queens():
        attacked[row, col] = False
    chessboard[attacked] = 0.5
    ax.imshow(chessboard, cmap='binary', interpolation='nearest', vmin=0, vmax=1)

    for row, col in board.queens():
        ##White glyph on dark tiles, black on light ones
        color = 'white' if (row + col) % 2 == 0 else 'black'
        ax.text(col, row, 'Q', fontsize=max(6, 120 / n), ha='center', va='center',
                color=color, weight='bold')

    ax.set_xticks(range(n))
    ax.set_yticks(range(n))
    ax.set_title(f'{n}-Queens solution {list(board.placement)}', fontsize=8)
    return ax


def plot_solutions(solutions: Sequence[Board], columns: int = PLOT_COLUMNS):
    """Lay out every solution as a grid of subplots and return the figure."""
    count = max(1, len(solutions))
    columns = max(1, min(columns, count))
    grid_rows = math.ceil(count / columns)
    size = solutions[0].size if solutions else 1
    cell = max(2.5, size * PLOT_CELL_INCHES)

    fig, axes = plt.subplots(grid_rows, columns, figsize=(columns * cell, grid_rows * cell),
                             squeeze=False)
    fig.patch.set_facecolor('grey')
    for ax in axes.flat:
        ax.axis('off')
    for ax, b in zip(axes.flat, solutions):
        ax.axis('on')
        plot_board(b, ax=ax)

    if not solutions:
        axes[0][0].text(0.5, 0.5, 'No solutions', ha='center', va='center',
                        transform=axes[0][0].transAxes)
    fig.suptitle(f'{len(solutions)} solution(s)', color='white', fontsize=14)
    fig.tight_layout()
    return fig
