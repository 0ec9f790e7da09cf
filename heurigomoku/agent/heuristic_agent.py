"""Heuristic agent: single-ply attack/defence scoring with random tie-break.

Each candidate cell is scored twice, once with our own stone placed there
(attack) and once with the opponent's (defence). The move score is
max(attack * ATTACK_BIAS, defence), so an equal chance to attack wins over
blocking while a stronger block still takes priority. No search beyond that
single hypothetical placement is performed.
"""

from __future__ import annotations

import logging
import math
import random
from typing import Optional

from heurigomoku.agent.base import Agent
from heurigomoku.agent.candidates import generate_candidates
from heurigomoku.agent.patterns import score_for_player
from heurigomoku.game.board import Board, GomokuGameState, format_point
from heurigomoku.game.types import InvalidCoordinateError, Player, Point

logger = logging.getLogger(__name__)

# Multiplier on the attack score; favours attacking over an equal block
ATTACK_BIAS = 1.1


def evaluate_move(board: Board, point: Point, player: Player) -> float:
    """Combined score for `player` placing at `point`."""
    attack = score_for_player(board, point, player)
    defense = score_for_player(board, point, player.other)
    return max(attack * ATTACK_BIAS, defense)


def best_moves(
    board: Board,
    player: Player,
    last_move: Optional[Point] = None,
) -> list[Point]:
    """Return every candidate reaching the maximum score, sorted by (row, col).

    Empty if there are no candidates (empty or full board).
    """
    if last_move is not None and not board.is_on_grid(last_move):
        raise InvalidCoordinateError(last_move, board.size)

    candidates = generate_candidates(board, last_move)
    best_score = -math.inf
    best: list[Point] = []

    for pt in candidates:
        score = evaluate_move(board, pt, player)
        if score > best_score:
            best_score = score
            best = [pt]
        elif score == best_score:
            best.append(pt)

    logger.debug(
        "%d candidates for %s, best score %s shared by %d",
        len(candidates), player, best_score, len(best),
    )
    return sorted(best)


def select_move(
    board: Board,
    player: Player,
    last_move: Optional[Point] = None,
    rng: Optional[random.Random] = None,
) -> Optional[Point]:
    """Pick the next move for `player`.

    Returns the centre on an empty board and None on a full one. Ties among
    the best-scoring cells are broken by `rng` (the module-level generator
    when omitted).
    """
    if last_move is not None and not board.is_on_grid(last_move):
        raise InvalidCoordinateError(last_move, board.size)
    if board.occupied_count == 0:
        return board.center

    best = best_moves(board, player, last_move)
    if not best:
        logger.warning("select_move called on a full %dx%d board", board.size, board.size)
        return None

    chooser = rng if rng is not None else random
    move = chooser.choice(best)
    logger.debug("%s plays %s", player, format_point(move))
    return move


class HeuristicAgent(Agent):
    """Pattern-scoring agent without lookahead."""

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def select_move(self, game_state: GomokuGameState) -> Point:
        move = select_move(
            game_state.board,
            game_state.current_player,
            last_move=game_state.last_move,
            rng=self._rng,
        )
        assert move is not None, "No legal moves available"
        return move
