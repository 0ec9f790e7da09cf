from __future__ import annotations

import string
from dataclasses import dataclass
from typing import Optional, Sequence

from .types import Cell, CellState, InvalidCoordinateError, Player, Point

BOARD_SIZE = 15
WIN_LENGTH = 5

# Column labels: A-O on the standard board, up to Z on larger ones
COL_LABELS = string.ascii_uppercase

# Four direction axes; the opposite vector is walked in the same pass
AXES = [(0, 1), (1, 0), (1, 1), (1, -1)]


def parse_coordinate(text: str, size: int = BOARD_SIZE) -> Optional[Point]:
    """Parse a coordinate string like 'E5' or 'H12' into a Point.

    Column is a letter, row is a 1-based number. Returns None if the string
    is invalid or falls outside a board of the given size.
    """
    text = text.strip().upper()
    if len(text) < 2 or len(text) > 3:
        return None
    col_char = text[0]
    row_str = text[1:]
    if col_char not in COL_LABELS[:size]:
        return None
    try:
        row = int(row_str)
    except ValueError:
        return None
    if not (1 <= row <= size):
        return None
    return Point(row - 1, COL_LABELS.index(col_char))


def format_point(point: Point) -> str:
    """Format a Point as a coordinate string like 'E5'."""
    return f"{COL_LABELS[point.col]}{point.row + 1}"


@dataclass
class Move:
    point: Point
    player: Player
    elapsed: Optional[float] = None  # seconds spent choosing the move

    def __str__(self) -> str:
        return f"{self.player}: {format_point(self.point)}"


class Board:
    """Square Gomoku board. Tracks stone placement."""

    def __init__(self, size: int = BOARD_SIZE) -> None:
        if size < 1:
            raise ValueError(f"Board size must be positive, got {size}")
        self.size = size
        self._grid: dict[Point, Player] = {}

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> Board:
        """Build a board from a square grid of ints (0 empty, 1 black, 2 white)."""
        size = len(rows)
        board = cls(size)
        for r, row in enumerate(rows):
            if len(row) != size:
                raise ValueError(f"Row {r} has {len(row)} cells, expected {size}")
            for c, value in enumerate(row):
                if value == Cell.EMPTY.value:
                    continue
                try:
                    board._grid[Point(r, c)] = Player(value)
                except ValueError:
                    raise ValueError(f"Unknown cell value {value!r} at {(r, c)}") from None
        return board

    def to_rows(self) -> list[list[int]]:
        rows = [[Cell.EMPTY.value] * self.size for _ in range(self.size)]
        for pt, player in self._grid.items():
            rows[pt.row][pt.col] = player.value
        return rows

    def place(self, point: Point, player: Player) -> None:
        assert self.is_on_grid(point), f"Point {point} is off the grid"
        assert self.is_empty(point), f"{format_point(point)} is occupied"
        self._grid[point] = player

    def remove(self, point: Point) -> None:
        del self._grid[point]

    def get(self, point: Point) -> Optional[Player]:
        return self._grid.get(point)

    def cell_state(self, point: Point) -> CellState:
        """Return the stone at `point`, Cell.EMPTY, or Cell.BOUNDARY if off-grid."""
        if not self.is_on_grid(point):
            return Cell.BOUNDARY
        return self._grid.get(point, Cell.EMPTY)

    def is_empty(self, point: Point) -> bool:
        return point not in self._grid

    def is_on_grid(self, point: Point) -> bool:
        return 0 <= point.row < self.size and 0 <= point.col < self.size

    def occupied_points(self) -> list[Point]:
        return list(self._grid)

    @property
    def occupied_count(self) -> int:
        return len(self._grid)

    @property
    def is_full(self) -> bool:
        return len(self._grid) == self.size * self.size

    @property
    def center(self) -> Point:
        return Point(self.size // 2, self.size // 2)


def detect_win(board: Board, point: Point) -> bool:
    """Check whether the stone just placed at `point` completes five in a row.

    Walks each of the four axes in both signs from `point`, counting stones of
    the same colour, at most WIN_LENGTH - 1 steps each way.

    Raises InvalidCoordinateError for an off-grid point and ValueError if the
    point holds no stone.
    """
    if not board.is_on_grid(point):
        raise InvalidCoordinateError(point, board.size)
    player = board.get(point)
    if player is None:
        raise ValueError(f"No stone at {format_point(point)}")

    for dr, dc in AXES:
        count = 1
        for sign in (1, -1):
            for step in range(1, WIN_LENGTH):
                p = Point(point.row + sign * dr * step, point.col + sign * dc * step)
                if board.cell_state(p) is not player:
                    break
                count += 1
        if count >= WIN_LENGTH:
            return True
    return False


class GomokuGameState:
    """Full game state for Gomoku (square board, 5-in-a-row)."""

    def __init__(self, size: int = BOARD_SIZE) -> None:
        self.board = Board(size)
        self.current_player = Player.BLACK
        self.moves: list[Move] = []
        self._winner: Optional[Player] = None
        self._is_over = False

    @property
    def size(self) -> int:
        return self.board.size

    @property
    def is_over(self) -> bool:
        return self._is_over

    @property
    def winner(self) -> Optional[Player]:
        return self._winner

    @property
    def is_draw(self) -> bool:
        return self._is_over and self._winner is None

    @property
    def last_move(self) -> Optional[Point]:
        return self.moves[-1].point if self.moves else None

    def legal_moves(self) -> list[Point]:
        if self._is_over:
            return []
        return [
            Point(r, c)
            for r in range(self.size)
            for c in range(self.size)
            if self.board.is_empty(Point(r, c))
        ]

    def apply_move(self, point: Point, elapsed: Optional[float] = None) -> None:
        """Place a stone for the current player and advance the turn."""
        assert not self._is_over, "Game is already over"
        assert self.board.is_on_grid(point), f"Point {point} is off the grid"
        assert self.board.is_empty(point), f"Point {format_point(point)} is occupied"

        player = self.current_player
        self.board.place(point, player)
        self.moves.append(Move(point=point, player=player, elapsed=elapsed))

        if detect_win(self.board, point):
            self._winner = player
            self._is_over = True
        elif self.board.is_full:
            self._is_over = True

        self.current_player = self.current_player.other

    def undo_move(self) -> Optional[Move]:
        """Undo the last move. Returns the undone Move, or None if no moves."""
        if not self.moves:
            return None
        move = self.moves.pop()
        self.board.remove(move.point)
        self.current_player = move.player
        self._winner = None
        self._is_over = False
        return move

    def resign(self, player: Player) -> None:
        """End the game with `player` conceding to the opponent."""
        assert not self._is_over, "Game is already over"
        self._winner = player.other
        self._is_over = True
