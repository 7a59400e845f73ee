# tictac3d/core/geometry.py
"""
Board geometry and the win-line table.

Board lay-out (cell indices):
     0   1   2       9  12  15      18  19  20
     3   4   5      10  13  16      21  22  23
     6   7   8      11  14  17      24  25  26
    Bottom layer    Middle layer    Top layer
"""
from typing import List, Tuple
from .constants import SIZE, COLUMNS, CELLS

# All 26 non-zero steps through the cube
DIRECTIONS = [
    (di, dj, dk)
    for di in (-1, 0, 1)
    for dj in (-1, 0, 1)
    for dk in (-1, 0, 1)
    if di or dj or dk
]


def cell_index(i: int, j: int, k: int) -> int:
    return SIZE * i + j + COLUMNS * k


def cell_coords(cell: int) -> Tuple[int, int, int]:
    """Inverse of cell_index: returns (row, col, level)."""
    k, rest = divmod(cell, COLUMNS)
    i, j = divmod(rest, SIZE)
    return i, j, k


def column_index(i: int, j: int) -> int:
    return SIZE * i + j


def _in_cube(i: int, j: int, k: int) -> bool:
    return 0 <= i < SIZE and 0 <= j < SIZE and 0 <= k < SIZE


def build_win_lines() -> Tuple[Tuple[int, ...], ...]:
    """
    For every cell, collects the masks of all 3-cell lines passing through it.
    A line is found once per direction and once more for its reverse, so the
    per-cell list is deduplicated before it is frozen.
    """
    table: List[Tuple[int, ...]] = []
    for cell in range(CELLS):
        i, j, k = cell_coords(cell)
        lines = []
        for di, dj, dk in DIRECTIONS:
            line = 1 << cell
            bits = 1
            for n in (-2, -1, 1, 2):
                ni, nj, nk = i + n * di, j + n * dj, k + n * dk
                if _in_cube(ni, nj, nk):
                    line |= 1 << cell_index(ni, nj, nk)
                    bits += 1
            if bits == SIZE:
                lines.append(line)
        table.append(tuple(sorted(set(lines))))
    return tuple(table)


# Built once at import, read-only afterwards
WIN_LINES = build_win_lines()
ALL_WIN_LINES = tuple(sorted({line for lines in WIN_LINES for line in lines}))


def lines_through(cell: int) -> Tuple[int, ...]:
    return WIN_LINES[cell]


def completes_line(mask: int, cell: int) -> bool:
    """True if 'mask' (which should include 'cell') fills a line through 'cell'."""
    for line in WIN_LINES[cell]:
        if mask & line == line:
            return True
    return False


def has_line(mask: int) -> bool:
    return any(mask & line == line for line in ALL_WIN_LINES)
