"""
Central defaults for the N-Queens search.

This module provides:
 - BOARD_SIZE: default board size when none is given on the command line
 - WORKERS / PARALLEL_MIN_SIZE: when the row-0 fan-out uses a process pool
 - logging defaults for the loguru stderr sink
 - glyphs used when a board is rendered as text
"""

from __future__ import annotations

import os

# Problem constant: default board size
BOARD_SIZE = 8  # Try 4, 6, 8, 10, ...

# Parallel fan-out over the starting column of row 0.
# Small boards finish faster than a process pool starts, so they stay sequential.
WORKERS = os.cpu_count() or 1
PARALLEL_MIN_SIZE = 8

# Logging
LOG_LEVEL = "INFO"
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")
LOG_FORMAT = "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | {name}:{line} - {message}"

# Text rendering
QUEEN_GLYPH = "Q"
ATTACKED_GLYPH = "*"
FREE_GLYPH = "."

# Plotting
PLOT_COLUMNS = 4
PLOT_CELL_INCHES = 0.45

# Cached covered-square index arrays, one entry per (size, row, col)
ATTACK_LINES_CACHE_SIZE = 1024
