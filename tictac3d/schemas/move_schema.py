from pydantic import BaseModel, ConfigDict, Field, computed_field
from typing import Dict, List, Optional, Tuple

from tictac3d.schemas.enums import Outcome


class PositionSnapshot(BaseModel):
    """Read-only view of a Position for renderers and the console driver."""
    model_config = ConfigDict(frozen=True)

    x: int = Field(description="Cells of the player who moved first.")
    o: int = Field(description="Cells of the second player.")
    heights: Tuple[int, ...]
    ply: int
    to_move: int = Field(description="1 or 2.")


class MoveChoice(BaseModel):
    column: int = Field(description="Column index (0-8), column = 3*row + col.")
    value: int = Field(description="Exact score of the chosen move, in [-27, 27].")
    outcome: Outcome
    plies_to_outcome: int = Field(
        description="Plies until the game ends, counting the chosen move: "
                    "1 for value 27, 29 - value for other wins, 29 + value for losses."
    )
    # Every column that scored 'value'; 'column' was drawn from these
    candidates: List[int]

    @computed_field
    @property
    def moves_to_outcome(self) -> int:
        """Number of moves the deciding player still makes ('win in N moves')."""
        if self.outcome == Outcome.LOSS:
            return self.plies_to_outcome // 2
        return (self.plies_to_outcome + 1) // 2


class CacheStats(BaseModel):
    capacity: int
    population: int
    buckets: int
    hits: int = 0
    misses: int = 0
    # bucket size -> number of buckets; key 10 counts buckets with 10+ entries
    bucket_sizes: Dict[int, int]
    load_factor: Optional[float] = None
