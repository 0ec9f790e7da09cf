from __future__ import annotations

import abc

from heurigomoku.game.board import GomokuGameState
from heurigomoku.game.types import Point


class Agent(abc.ABC):
    @abc.abstractmethod
    def select_move(self, game_state: GomokuGameState) -> Point:
        """Return the point where this agent wants to play next."""

    @property
    def name(self) -> str:
        return self.__class__.__name__
