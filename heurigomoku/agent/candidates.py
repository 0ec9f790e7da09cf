from __future__ import annotations

from typing import Optional

from heurigomoku.game.board import Board
from heurigomoku.game.types import Point

# Chebyshev distance from a stone within which empty cells are considered
CANDIDATE_RADIUS = 2


def generate_candidates(
    board: Board,
    last_move: Optional[Point] = None,
    radius: int = CANDIDATE_RADIUS,
) -> list[Point]:
    """Return every empty cell within `radius` of an existing stone.

    The neighbourhood of `last_move` is visited first when it holds a stone;
    the resulting set is the same either way. An empty board yields no
    candidates, leaving the centre opening to the caller.
    """
    seen: set[Point] = set()
    candidates: list[Point] = []

    def visit(center: Point) -> None:
        for dr in range(-radius, radius + 1):
            for dc in range(-radius, radius + 1):
                np = Point(center.row + dr, center.col + dc)
                if np in seen:
                    continue
                if board.is_on_grid(np) and board.is_empty(np):
                    seen.add(np)
                    candidates.append(np)

    if last_move is not None and board.get(last_move) is not None:
        visit(last_move)

    for pt in board.occupied_points():
        visit(pt)

    return candidates
