import logging
from typing import List, Optional, Dict, Any

from tictac3d.core.constants import SIZE, MAX_PLIES
from tictac3d.core.geometry import cell_index, column_index
from tictac3d.core.bitboard import Position

# Logger setup
logger = logging.getLogger(__name__)


class CubeGame:
    def __init__(self):
        """
        Wraps a Position with turn and winner bookkeeping.
        Columns are addressed as (row, col) pairs, column = 3*row + col.
        Players are 1 (moves first, 'x') and 2 ('o').
        """
        self.position = Position()
        self.winner: Optional[int] = None
        self.history: List[Dict[str, Any]] = []

    @property
    def current_turn(self) -> int:
        return self.position.current_player

    def get_valid_moves(self) -> List[int]:
        """Returns the column indices (0-8) that are not full."""
        return self.position.valid_moves()

    def is_valid_move(self, row: int, col: int) -> bool:
        if not (0 <= row < SIZE and 0 <= col < SIZE):
            return False
        return self.position.is_valid_move(column_index(row, col))

    def drop_piece(self, column: int) -> bool:
        """
        Drops a piece into the column.
        Returns True if successful, False if invalid or game over.
        """
        if self.is_over() or not self.position.is_valid_move(column):
            return False

        player = self.current_turn
        won = self.position.is_winning_move(column)
        self.position.play(column)
        self.history.append({
            "player": player,
            "column": column,
        })

        if won:
            self.winner = player
            logger.info("Player %d wins after %d plies", player, self.position.ply)
        return True

    def is_draw(self) -> bool:
        """Returns True if board is full and no winner."""
        return self.winner is None and self.position.ply == MAX_PLIES

    def is_over(self) -> bool:
        return self.winner is not None or self.is_draw()

    # --- Formatting ---

    def get_visual_board(self) -> str:
        """
        Three layers side by side, bottom layer first:
            board after 2 moves (heights: 100 010 000)
            x . .  . . .  . . .
            . o .  . . .  . . .
            . . .  . . .  . . .
        """
        snap = self.position.snapshot()
        heights = " ".join(
            "".join(str(h) for h in snap.heights[r * SIZE:(r + 1) * SIZE]) for r in range(SIZE)
        )
        plural = "" if snap.ply == 1 else "s"
        lines = [f"board after {snap.ply} move{plural} (heights: {heights})"]
        for i in range(SIZE):
            layers = []
            for k in range(SIZE):
                cells = []
                for j in range(SIZE):
                    bit = 1 << cell_index(i, j, k)
                    cells.append("x" if snap.x & bit else "o" if snap.o & bit else ".")
                layers.append(" ".join(cells))
            lines.append("  ".join(layers))
        return "\n".join(lines)
