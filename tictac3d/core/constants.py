# tictac3d/core/constants.py

# --- Board Dimensions ---
SIZE = 3
COLUMNS = SIZE * SIZE        # 9 stacks in a 3x3 grid
CELLS = COLUMNS * SIZE       # 27 cells, index = 3*i + j + 9*k
MAX_PLIES = CELLS

# --- Scoring System ---
# Logic: |Score| = MAX_SCORE - plies after the scored move until the game ends
# Win with this move        = +27
# Opponent wins on reply    = -27
# Draw                      = 0
MAX_SCORE = CELLS
MIN_SCORE = -CELLS
DRAW_SCORE = 0

# --- Transposition Cache ---
HASH_MULTIPLIER = 46351
DEFAULT_TABLE_SIZE = 1_000_003
# Upper bound on distinct positions visited by a full solve from the empty board
DEFAULT_CACHE_CAPACITY = 10_000_007
