from __future__ import annotations

import random
from typing import Optional

from heurigomoku.game.board import GomokuGameState
from heurigomoku.game.types import Point

from .base import Agent


class RandomAgent(Agent):
    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def select_move(self, game_state: GomokuGameState) -> Point:
        moves = game_state.legal_moves()
        assert moves, "No legal moves available"
        return self._rng.choice(moves)
