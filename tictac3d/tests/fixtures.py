import random
from typing import List, Tuple

from tictac3d.core.bitboard import Position
from tictac3d.core.constants import COLUMNS, SIZE, MAX_PLIES, MAX_SCORE, DRAW_SCORE
from tictac3d.core.geometry import completes_line


def quiet_game(plies: int, seed: int = 0, max_attempts: int = 10_000) -> Tuple[Position, List[int]]:
    """
    Random game of 'plies' moves in which nobody ever completes a line.
    Dead ends (every open column wins for the mover) restart with the next seed.
    """
    for attempt in range(max_attempts):
        rng = random.Random(seed * max_attempts + attempt)
        position = Position()
        moves: List[int] = []
        while position.ply < plies:
            quiet = [c for c in position.valid_moves() if not position.is_winning_move(c)]
            if not quiet:
                break
            col = rng.choice(quiet)
            position.play(col)
            moves.append(col)
        else:
            return position, moves
    raise AssertionError(f"No quiet game of {plies} plies found")


def reference_value(x: int, o: int, heights: List[int], ply: int) -> int:
    """Plain negamax with the same scoring rules and no cache."""
    if ply == MAX_PLIES:
        return DRAW_SCORE
    for col in range(COLUMNS):
        if heights[col] < SIZE:
            cell = col + COLUMNS * heights[col]
            if completes_line(x | (1 << cell), cell):
                return MAX_SCORE
    best = None
    for col in range(COLUMNS):
        if heights[col] < SIZE:
            cell = col + COLUMNS * heights[col]
            child = list(heights)
            child[col] += 1
            score = -reference_value(o, x | (1 << cell), child, ply + 1)
            best = score if best is None else max(best, score)
    if best < 0:
        return best + 1
    if best > 0:
        return best - 1
    return best
