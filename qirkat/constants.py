"""
Engine constants: board geometry, adjacency tables, and search parameters.

All numeric constants used throughout the engine are defined here so that
the board and search modules never need to introduce new magic numbers.

The Qirkat lattice is a 5x5 grid of points. Every point connects to its
orthogonal neighbours, but only points whose linear index is even also
connect along the diagonals. The direction tables below are keyed by that
parity and are expanded into per-square neighbour tables at import time, so
move generation never has to re-check the column-wrap condition.
"""

# ---------------------------------------------------------------------------
# Board geometry
# ---------------------------------------------------------------------------

SIDE: int = 5
NUM_SQUARES: int = SIDE * SIDE
MAX_INDEX: int = NUM_SQUARES - 1

COLUMN_NAMES: str = "abcde"
ROW_NAMES: str = "12345"

# Directions are (dcol, drow) pairs. As a linear offset each one is
# drow * SIDE + dcol, i.e. -1, +1, -5, +5 orthogonally and -6, -4, +4, +6
# diagonally.
LEFT: tuple[int, int] = (-1, 0)
RIGHT: tuple[int, int] = (1, 0)
UP: tuple[int, int] = (0, 1)
DOWN: tuple[int, int] = (0, -1)
UP_LEFT: tuple[int, int] = (-1, 1)
UP_RIGHT: tuple[int, int] = (1, 1)
DOWN_LEFT: tuple[int, int] = (-1, -1)
DOWN_RIGHT: tuple[int, int] = (1, -1)

# Ordered by increasing linear offset so enumeration follows square order.
ORTHOGONAL_DIRS: tuple[tuple[int, int], ...] = (DOWN, LEFT, RIGHT, UP)
ALL_DIRS: tuple[tuple[int, int], ...] = (
    DOWN_LEFT, DOWN, DOWN_RIGHT, LEFT, RIGHT, UP_LEFT, UP, UP_RIGHT,
)

# Slides never go backward. White advances toward row 5, black toward row 1.
WHITE_SLIDE_DIRS_EVEN: tuple[tuple[int, int], ...] = (LEFT, RIGHT, UP_LEFT, UP, UP_RIGHT)
WHITE_SLIDE_DIRS_ODD: tuple[tuple[int, int], ...] = (LEFT, RIGHT, UP)
BLACK_SLIDE_DIRS_EVEN: tuple[tuple[int, int], ...] = (DOWN_LEFT, DOWN, DOWN_RIGHT, LEFT, RIGHT)
BLACK_SLIDE_DIRS_ODD: tuple[tuple[int, int], ...] = (DOWN, LEFT, RIGHT)


def col(k: int) -> int:
    """Column (0-4) of the square with linear index k."""
    return k % SIDE


def row(k: int) -> int:
    """Row (0-4, bottom first) of the square with linear index k."""
    return k // SIDE


def index(c: int, r: int) -> int:
    """Linear index of the square at column c, row r."""
    return r * SIDE + c


def valid_square(k: int) -> bool:
    """True iff k is a linear index on the board."""
    return 0 <= k <= MAX_INDEX


def square_name(k: int) -> str:
    """Textual name of square k, e.g. 0 -> 'a1', 24 -> 'e5'."""
    return COLUMN_NAMES[col(k)] + ROW_NAMES[row(k)]


def _build_steps(
    dirs_even: tuple[tuple[int, int], ...],
    dirs_odd: tuple[tuple[int, int], ...],
    distance: int,
) -> tuple[tuple[tuple[int, ...], ...], ...]:
    """
    Expand parity-keyed direction sets into a per-square table of rays.

    Entry k holds one tuple per direction that stays on the board for
    `distance` steps; each tuple lists the squares visited along that ray
    (so a jump entry is (jumped, landing)). Directions that would cross the
    board edge, including a column wrap, are simply absent.
    """
    table = []
    for k in range(NUM_SQUARES):
        c, r = col(k), row(k)
        rays = []
        for dc, dr in dirs_even if k % 2 == 0 else dirs_odd:
            ray = []
            for step in range(1, distance + 1):
                nc, nr = c + dc * step, r + dr * step
                if not (0 <= nc < SIDE and 0 <= nr < SIDE):
                    break
                ray.append(index(nc, nr))
            if len(ray) == distance:
                rays.append(tuple(ray))
        table.append(tuple(rays))
    return tuple(table)


# JUMP_RAYS[k] -> ((jumped, landing), ...) for every straight-line jump from k.
JUMP_RAYS = _build_steps(ALL_DIRS, ORTHOGONAL_DIRS, 2)

# WHITE_SLIDES[k] / BLACK_SLIDES[k] -> ((target,), ...) for forward and lateral slides.
WHITE_SLIDES = _build_steps(WHITE_SLIDE_DIRS_EVEN, WHITE_SLIDE_DIRS_ODD, 1)
BLACK_SLIDES = _build_steps(BLACK_SLIDE_DIRS_EVEN, BLACK_SLIDE_DIRS_ODD, 1)

# Starting layout in row-major order from a1.
INITIAL_LAYOUT: str = (
    "wwwww"
    "wwwww"
    "bb-ww"
    "bbbbb"
    "bbbbb"
)

# ---------------------------------------------------------------------------
# Special scores
# ---------------------------------------------------------------------------
# Integers (never floats) so they compare cleanly in alpha-beta. A material
# score can never exceed NUM_SQUARES in magnitude, so these stay well clear.

WINNING_VALUE: int = 99_999  # Static score of a won (or, negated, lost) position
INFINITY: int = 100_000      # Initial alpha-beta window bound

# ---------------------------------------------------------------------------
# Search parameters
# ---------------------------------------------------------------------------

MAX_DEPTH: int = 8
