import sys
import os
import random

# Ensure the tictac3d package is importable when run from a checkout
sys.path.append(os.path.dirname(os.path.abspath(__file__)))

from tictac3d.core.config import load_config, configure_logging
from tictac3d.core.geometry import column_index
from tictac3d.core.selector import MoveSelector
from tictac3d.core.solver import Solver
from tictac3d.engine.game import CubeGame


def parse_move(line: str):
    """'i j' -> (row, col), or None if the line is not two integers."""
    parts = line.split()
    if len(parts) != 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


def main():
    if len(sys.argv) != 2:
        print("usage: console_play.py <ai>   (1 or 2 = engine plays that side, 0 = two humans)")
        sys.exit(1)
    try:
        ai_player = int(sys.argv[1])
    except ValueError:
        print("usage: console_play.py <ai>   (1 or 2 = engine plays that side, 0 = two humans)")
        sys.exit(1)

    config = load_config()
    configure_logging(config)
    selector = MoveSelector(Solver(config=config), random.Random(config.seed))

    print("=======================================")
    print("   3x3x3 GRAVITY TIC-TAC-TOE")
    print("=======================================")
    print("Enter moves as 'row col' (0-2 each).")

    game = CubeGame()
    print(game.get_visual_board())

    while not game.is_over():

        # --- Engine Turn ---
        if game.current_turn == ai_player:
            print("\nAI is thinking...")
            choice = selector.pick_move(game.position)
            if choice is None:
                print("no move found!")
                break
            if choice.outcome == "WIN":
                print(f"AI: win in {choice.moves_to_outcome} moves :-)")
            elif choice.outcome == "LOSS":
                print(f"AI: loss in {choice.moves_to_outcome} moves :-(")
            else:
                print("AI: draw :-/")
            print(f"AI plays {choice.column // 3} {choice.column % 3}")
            game.drop_piece(choice.column)

        # --- Human Turn ---
        else:
            try:
                line = input(f"\nPlayer {game.current_turn} > ")
            except EOFError:
                print("end of input!")
                break
            move = parse_move(line)
            if move is None:
                print("invalid input!")
                continue
            row, col = move
            if not game.is_valid_move(row, col):
                print("invalid move!")
                continue
            game.drop_piece(column_index(row, col))

        # Show Board
        print("\n" + game.get_visual_board())

    # --- End Game ---
    if game.winner:
        print(f"\nplayer {game.winner} has won!")
    elif game.is_draw():
        print("\nGame Over! It's a Draw.")


if __name__ == "__main__":
    main()
