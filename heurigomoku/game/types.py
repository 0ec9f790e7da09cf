from __future__ import annotations

import enum
from typing import NamedTuple, Union


class Player(enum.Enum):
    BLACK = 1
    WHITE = 2

    @property
    def other(self) -> Player:
        return Player.WHITE if self is Player.BLACK else Player.BLACK

    def __str__(self) -> str:
        return self.name.capitalize()


class Cell(enum.Enum):
    """Non-stone cell states. BOUNDARY marks positions past the grid edge."""

    EMPTY = 0
    BOUNDARY = -1


CellState = Union[Player, Cell]


class Point(NamedTuple):
    row: int  # 0-indexed, 0 = bottom
    col: int  # 0-indexed, 0 = left


class InvalidCoordinateError(ValueError):
    """A coordinate handed to the engine lies outside the board."""

    def __init__(self, point: Point, size: int) -> None:
        super().__init__(f"{tuple(point)} is outside the {size}x{size} board")
        self.point = point
        self.size = size
