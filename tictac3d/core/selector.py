# tictac3d/core/selector.py
import logging
import random
from typing import Dict, Optional, Tuple
from .constants import MAX_PLIES, MAX_SCORE, MIN_SCORE
from .bitboard import Position
from .solver import Solver
from tictac3d.schemas.enums import Outcome
from tictac3d.schemas.move_schema import MoveChoice

logger = logging.getLogger(__name__)


class MoveSelector:
    def __init__(self, solver: Optional[Solver] = None, rng: Optional[random.Random] = None):
        self.solver = solver or Solver()
        self.rng = rng or random.Random()

    def score_moves(self, position: Position) -> Dict[int, int]:
        """
        Exact score of every legal column from the mover's point of view.
        The position is restored after each trial move.
        """
        scores = {}
        for col in position.valid_moves():
            # Winning now needs no search
            if position.is_winning_move(col):
                scores[col] = MAX_SCORE
                continue
            position.play(col)
            try:
                scores[col] = -self.solver.solve_position(position)
            finally:
                position.undo(col)
        return scores

    def pick_move(self, position: Position) -> Optional[MoveChoice]:
        """
        Best column for the player to move, drawn uniformly from all columns
        sharing the best score. Returns None when the board is full.
        """
        best_score = MIN_SCORE - 1
        candidates = []
        for col, score in self.score_moves(position).items():
            if score > best_score:
                best_score = score
                candidates = []
            if score == best_score:
                candidates.append(col)

        if not candidates:
            logger.warning("No move available: board is full after %d plies", position.ply)
            return None

        column = candidates[self.rng.randrange(len(candidates))]
        outcome, distance = self._analyze_score(best_score, position.ply)
        choice = MoveChoice(
            column=column,
            value=best_score,
            outcome=outcome,
            plies_to_outcome=distance,
            candidates=candidates,
        )
        logger.info(
            "Player %d plays column %d: %s in %d moves (candidates %s)",
            position.current_player, column, outcome, choice.moves_to_outcome, candidates,
        )
        return choice

    def _analyze_score(self, score: int, ply: int) -> Tuple[Outcome, int]:
        # Move scores are not shifted toward 0: only an immediate win scores 27,
        # a win on the mover's next turn scores 26 and a loss on the reply -27
        if score == MAX_SCORE: return Outcome.WIN, 1
        if score > 0: return Outcome.WIN, (MAX_SCORE + 2 - score)
        if score < 0: return Outcome.LOSS, (MAX_SCORE + 2 + score)
        return Outcome.DRAW, (MAX_PLIES - ply)
