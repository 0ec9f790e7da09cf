"""Directional pattern extraction and scoring for a hypothetical placement.

A candidate cell is looked at along four axes. For each axis a nine-cell
window is cut out around the candidate with the candidate itself forced to
the player being evaluated. The window is split into runs of that player's
stones, each run is classified by how many of its ends are empty, and the
runs are scored from a fixed table.
"""

from __future__ import annotations

from typing import NamedTuple, Sequence

from heurigomoku.game.board import AXES, WIN_LENGTH, Board
from heurigomoku.game.types import Cell, CellState, InvalidCoordinateError, Player, Point

# ---------------------------------------------------------------------------
# Pattern scoring table: (run_length, open_ends) -> score
# ---------------------------------------------------------------------------

FIVE_SCORE = 100_000

PATTERN_SCORES: dict[tuple[int, int], int] = {
    (4, 2): 10_000,   # open four
    (4, 1): 1_000,    # blocked four
    (3, 2): 1_000,    # open three
    (3, 1): 100,      # blocked three
    (2, 2): 100,      # open two
    (2, 1): 10,       # blocked two
    (1, 2): 10,       # open one
}

# Four direction axes for scanning patterns
DIRECTIONS = AXES

# Cells on each side of the candidate in a window
LINE_REACH = WIN_LENGTH - 1
WINDOW_SIZE = 2 * LINE_REACH + 1


class Segment(NamedTuple):
    run_length: int
    open_ends: int


# ---------------------------------------------------------------------------
# Line extraction
# ---------------------------------------------------------------------------

def extract_line(
    board: Board,
    point: Point,
    direction: tuple[int, int],
    player: Player,
) -> list[CellState]:
    """Return the window along `direction` centred on `point`.

    The centre holds `player` whatever the board says; positions past the
    edge are Cell.BOUNDARY.
    """
    if not board.is_on_grid(point):
        raise InvalidCoordinateError(point, board.size)
    dr, dc = direction
    line: list[CellState] = []
    for step in range(-LINE_REACH, LINE_REACH + 1):
        if step == 0:
            line.append(player)
        else:
            line.append(board.cell_state(Point(point.row + dr * step, point.col + dc * step)))
    return line


# ---------------------------------------------------------------------------
# Pattern recognition
# ---------------------------------------------------------------------------

def find_patterns(line: Sequence[CellState], player: Player) -> list[Segment]:
    """Split a window into maximal runs of `player`, left to right.

    An end is open only when the neighbouring cell inside the window is
    Cell.EMPTY. A run touching either end of the window is closed on that side.
    """
    segments: list[Segment] = []
    count = 0
    open_ends = 0

    for i, cell in enumerate(line):
        if cell is player:
            if count == 0:
                open_ends = 1 if i > 0 and line[i - 1] is Cell.EMPTY else 0
            count += 1
        elif count:
            if cell is Cell.EMPTY:
                open_ends += 1
            segments.append(Segment(count, open_ends))
            count = 0

    if count:
        segments.append(Segment(count, open_ends))
    return segments


# ---------------------------------------------------------------------------
# Scoring
# ---------------------------------------------------------------------------

def pattern_score(run_length: int, open_ends: int) -> int:
    """Look up score for a run with given open ends."""
    if run_length >= WIN_LENGTH:
        return FIVE_SCORE
    return PATTERN_SCORES.get((run_length, open_ends), 0)


def score_patterns(segments: Sequence[Segment]) -> int:
    return sum(pattern_score(s.run_length, s.open_ends) for s in segments)


def score_for_player(board: Board, point: Point, player: Player) -> int:
    """Score `point` as if `player` placed a stone there, summed over all axes."""
    total = 0
    for direction in DIRECTIONS:
        line = extract_line(board, point, direction, player)
        total += score_patterns(find_patterns(line, player))
    return total
