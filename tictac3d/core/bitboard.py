# tictac3d/core/bitboard.py
from typing import Iterable, List, Optional
from .constants import SIZE, COLUMNS, MAX_PLIES
from .geometry import completes_line, has_line
from tictac3d.schemas.move_schema import PositionSnapshot


class InvalidMoveError(ValueError):
    """A column was played or undone in violation of the board rules."""


class Position:
    """
    Bitboard game state.

    x / o are the cells of player 1 / player 2. heights[col] is the number of
    pieces in a column, which is also the level the next piece lands on.
    The player to move owns x when ply is even and o when ply is odd.
    """

    def __init__(self, x: int = 0, o: int = 0, heights: Optional[List[int]] = None, ply: int = 0):
        self.x = x
        self.o = o
        self.heights = list(heights) if heights is not None else [0] * COLUMNS
        self.ply = ply

    @classmethod
    def from_moves(cls, columns: Iterable[int]) -> 'Position':
        """Replays a sequence of columns from the empty board."""
        position = cls()
        for col in columns:
            position.play(col)
        return position

    # --- Perspective ---

    @property
    def current_player(self) -> int:
        return 1 if self.ply % 2 == 0 else 2

    @property
    def mover_mask(self) -> int:
        return self.o if self.ply & 1 else self.x

    @property
    def opponent_mask(self) -> int:
        return self.x if self.ply & 1 else self.o

    # --- Legality ---

    def is_valid_move(self, col: int) -> bool:
        return 0 <= col < COLUMNS and self.heights[col] < SIZE

    def valid_moves(self) -> List[int]:
        return [c for c in range(COLUMNS) if self.heights[c] < SIZE]

    def is_full(self) -> bool:
        return self.ply == MAX_PLIES

    def landing_cell(self, col: int) -> int:
        if not self.is_valid_move(col):
            raise InvalidMoveError(f"Invalid move: column {col}")
        return col + COLUMNS * self.heights[col]

    # --- Mutation (stack discipline: undo must mirror the latest play) ---

    def play(self, col: int) -> None:
        bit = 1 << self.landing_cell(col)
        if self.ply & 1:
            self.o |= bit
        else:
            self.x |= bit
        self.heights[col] += 1
        self.ply += 1

    def undo(self, col: int) -> None:
        if not 0 <= col < COLUMNS or self.heights[col] == 0 or self.ply == 0:
            raise InvalidMoveError(f"Cannot undo column {col}: nothing to take back")
        bit = 1 << (col + COLUMNS * (self.heights[col] - 1))
        mover_is_o = (self.ply - 1) & 1
        if not (self.o if mover_is_o else self.x) & bit:
            raise InvalidMoveError(f"Cannot undo column {col}: it was not the last move")
        self.ply -= 1
        self.heights[col] -= 1
        if mover_is_o:
            self.o &= ~bit
        else:
            self.x &= ~bit

    def is_winning_move(self, col: int) -> bool:
        cell = self.landing_cell(col)
        return completes_line(self.mover_mask | (1 << cell), cell)

    def winner(self) -> Optional[int]:
        """Player (1 or 2) owning a completed line, if any."""
        if has_line(self.x):
            return 1
        if has_line(self.o):
            return 2
        return None

    # --- Views ---

    def snapshot(self) -> PositionSnapshot:
        return PositionSnapshot(
            x=self.x,
            o=self.o,
            heights=tuple(self.heights),
            ply=self.ply,
            to_move=self.current_player,
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return (self.x, self.o, self.heights, self.ply) == (other.x, other.o, other.heights, other.ply)

    def __repr__(self) -> str:
        return f"Position(x={self.x:#x}, o={self.o:#x}, heights={self.heights}, ply={self.ply})"
