# tictac3d/core/solver.py
import logging
import time
from typing import List, Optional
from .constants import SIZE, COLUMNS, MAX_PLIES, MAX_SCORE, DRAW_SCORE
from .geometry import WIN_LINES
from .bitboard import Position
from .config import SolverConfig
from .transposition import TranspositionTable

logger = logging.getLogger(__name__)


class Solver:
    """
    Exhaustive negamax over the full game tree. No pruning: the only thing
    keeping the search tractable is the transposition table, which lives as
    long as the Solver does.
    """

    def __init__(self, tt: Optional[TranspositionTable] = None, config: Optional[SolverConfig] = None):
        if tt is None:
            config = config or SolverConfig()
            tt = TranspositionTable(config.table_size, config.cache_capacity)
        self.tt = tt
        self.nodes = 0

    def solve_position(self, position: Position) -> int:
        """Exact value of 'position' for the player to move. The position must not be decided yet."""
        start_nodes, start = self.nodes, time.perf_counter()
        value = self.solve(position.mover_mask, position.opponent_mask, position.heights, position.ply)
        logger.debug(
            "Solved ply %d: value=%d nodes=%d cached=%d (%.3fs)",
            position.ply, value, self.nodes - start_nodes, len(self.tt), time.perf_counter() - start,
        )
        return value

    def solve(self, x: int, o: int, heights: List[int], ply: int) -> int:
        """
        Negamax value for mover 'x' against 'o'.

        +27 means the mover wins with the next piece; each ply further from
        the end of the game moves the score one step toward 0. 'heights' is
        modified during the search and restored before returning.
        """
        self.nodes += 1

        # 1. Transposition Table (ply is implied by the masks)
        if (cached := self.tt.get(x, o)) is not None:
            return cached

        # 2. Full board
        if ply == MAX_PLIES:
            value = DRAW_SCORE

        # 3. Immediate win
        elif self._has_winning_move(x, heights):
            value = MAX_SCORE

        # 4. Recursive Search
        else:
            value = None
            for col in range(COLUMNS):
                level = heights[col]
                if level == SIZE:
                    continue
                bit = 1 << (col + COLUMNS * level)
                heights[col] = level + 1
                try:
                    score = -self.solve(o, x | bit, heights, ply + 1)
                finally:
                    heights[col] = level
                if value is None or score > value:
                    value = score

            if value is None:
                raise RuntimeError(f"No legal column at ply {ply} before the board is full")

            # 5. Distance to terminal: faster wins and slower losses score higher
            if value < 0:
                value += 1
            elif value > 0:
                value -= 1

        self.tt.put(x, o, value)
        return value

    @staticmethod
    def _has_winning_move(x: int, heights: List[int]) -> bool:
        for col in range(COLUMNS):
            level = heights[col]
            if level < SIZE:
                cell = col + COLUMNS * level
                nx = x | (1 << cell)
                for line in WIN_LINES[cell]:
                    if nx & line == line:
                        return True
        return False
