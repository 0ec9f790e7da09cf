"""Play tab: Human vs AI, or two humans on one board, with interactive SVG board."""

from __future__ import annotations

import random as _random
import time as _time
from dataclasses import dataclass, field
from typing import Optional

import gradio as gr

from heurigomoku.agent.base import Agent
from heurigomoku.agent.heuristic_agent import HeuristicAgent
from heurigomoku.agent.random_agent import RandomAgent
from heurigomoku.game.board import (
    GomokuGameState,
    format_point,
    parse_coordinate,
)
from heurigomoku.game.record import MODE_AI, MODE_LOCAL, save_game
from heurigomoku.game.types import Player
from heurigomoku.ui.board_component import render_board_svg

AGENT_CHOICES: dict[str, Agent] = {
    "HeuristicAgent": HeuristicAgent(),
    "RandomAgent": RandomAgent(),
}
DEFAULT_AGENT = "HeuristicAgent"
# Opponent choice for two people sharing the board; no agent plays
HUMAN_OPPONENT = "Human (local)"
OPPONENT_CHOICES = list(AGENT_CHOICES) + [HUMAN_OPPONENT]


@dataclass
class GameSession:
    """Per-tab game state held in gr.State."""

    game: GomokuGameState = field(default_factory=GomokuGameState)
    agent: Optional[Agent] = field(default_factory=HeuristicAgent)
    human_player: Player = field(default=Player.BLACK)
    _turn_start: float = field(default_factory=_time.time)

    def reset(self, human_player: Optional[Player] = None) -> None:
        self.game = GomokuGameState()
        self._turn_start = _time.time()
        if human_player is not None:
            self.human_player = human_player

    def mark_turn_start(self) -> None:
        """Record the moment the current player's clock starts."""
        self._turn_start = _time.time()

    def elapsed_since_turn_start(self) -> float:
        return _time.time() - self._turn_start

    @property
    def is_local(self) -> bool:
        """Both colours are played by people at this board."""
        return self.agent is None

    @property
    def game_over_banner(self) -> str:
        """Short text for the SVG overlay banner. Empty if game is not over."""
        g = self.game
        if not g.is_over:
            return ""
        if g.winner is not None:
            if self.is_local:
                return f"{g.winner} wins!"
            if g.winner == self.human_player:
                return "You win!"
            return "AI wins!"
        return "Draw!"

    @property
    def status_text(self) -> str:
        g = self.game
        if g.is_over:
            if g.winner is not None and self.is_local:
                return f"Game over: {g.winner} wins"
            if g.winner is not None:
                who = "You win!" if g.winner == self.human_player else "AI wins!"
                return f"Game over: {who} ({g.winner})"
            return "Game over: board full, draw."
        if self.is_local:
            return f"{g.current_player} to move"
        if g.current_player == self.human_player:
            return f"Your turn ({g.current_player})"
        return f"AI to move ({g.current_player})"

    @property
    def move_history_table(self) -> list[list[str]]:
        rows: list[list[str]] = []
        for i, move in enumerate(self.game.moves):
            t = f"{move.elapsed:.2f}" if move.elapsed is not None else "-"
            rows.append([str(i + 1), str(move.player), format_point(move.point), t])
        return rows


def _make_board_html(session: GameSession) -> str:
    clickable = (
        not session.game.is_over
        and (session.is_local or session.game.current_player == session.human_player)
    )
    return render_board_svg(
        session.game,
        clickable=clickable,
        game_over_message=session.game_over_banner,
    )


def _play_ai_turn(session: GameSession) -> None:
    t0 = _time.time()
    ai_move = session.agent.select_move(session.game)
    session.game.apply_move(ai_move, elapsed=_time.time() - t0)
    session.mark_turn_start()  # human's clock starts now


def _ai_opening_move(session: GameSession) -> None:
    """If AI goes first (human is White), let the AI play the opening move."""
    if (
        not session.is_local
        and session.human_player == Player.WHITE
        and not session.game.moves
        and not session.game.is_over
    ):
        _play_ai_turn(session)


def _board_outputs(session: GameSession, status: Optional[str] = None):
    return (
        _make_board_html(session),
        status if status is not None else session.status_text,
        session.move_history_table,
        session,
    )


def _apply_human_move(coord_text: str, session: GameSession):
    """Process a human move, then let the AI respond unless two people are playing."""
    if session.game.is_over:
        return _board_outputs(session) + ("",)

    if not session.is_local and session.game.current_player != session.human_player:
        return _board_outputs(session, "Wait, it's the AI's turn.") + ("",)

    point = parse_coordinate(coord_text, session.game.size)
    if point is None:
        return _board_outputs(
            session, f"Invalid coordinate: '{coord_text}'. Use format like H8."
        ) + ("",)

    if not session.game.board.is_empty(point):
        return _board_outputs(session, f"{format_point(point)} is already occupied.") + ("",)

    session.game.apply_move(point, elapsed=session.elapsed_since_turn_start())

    if session.is_local:
        session.mark_turn_start()  # next player's clock
    elif not session.game.is_over:
        _play_ai_turn(session)

    return _board_outputs(session) + ("",)


def _new_game_with_color(
    color_choice: str,
    agent_choice: str,
    session: GameSession,
):
    """Start a new game. color_choice is 'Black', 'White', or 'Random'."""
    if color_choice == "Random":
        human = _random.choice([Player.BLACK, Player.WHITE])
    elif color_choice == "White":
        human = Player.WHITE
    else:
        human = Player.BLACK

    if agent_choice == HUMAN_OPPONENT:
        session.agent = None
        session.reset(human_player=Player.BLACK)
        return _board_outputs(session) + ("Two players: Black moves first.",)

    session.agent = AGENT_CHOICES.get(agent_choice, AGENT_CHOICES[DEFAULT_AGENT])
    session.reset(human_player=human)
    _ai_opening_move(session)

    return _board_outputs(session) + (f"You are {human}.",)


def _undo_move(session: GameSession):
    """Undo the last move pair (AI + human), or a single move between two players."""
    if not session.game.moves:
        return _board_outputs(session, "Nothing to undo.")

    if session.is_local:
        session.game.undo_move()
        session.mark_turn_start()
        return _board_outputs(session)

    # If the last move was AI's, undo both AI and human
    last = session.game.moves[-1]
    if last.player != session.human_player:
        session.game.undo_move()
    if session.game.moves:
        session.game.undo_move()
    # Human playing White keeps the AI's opening stone
    _ai_opening_move(session)
    session.mark_turn_start()

    return _board_outputs(session)


def _resign(session: GameSession):
    if not session.game.is_over:
        # Between two players the side to move resigns
        loser = session.game.current_player if session.is_local else session.human_player
        session.game.resign(loser)
    return _board_outputs(session)


def _save_game(session: GameSession) -> str:
    """Save the current game to disk."""
    if not session.game.moves:
        return "No moves to save."
    if session.is_local:
        filename = save_game(
            session.game, f"Human_{Player.BLACK}", f"Human_{Player.WHITE}", mode=MODE_LOCAL
        )
        return f"Saved: {filename}"
    human_name = f"Human_{session.human_player}"
    if session.human_player is Player.BLACK:
        black_name, white_name = human_name, session.agent.name
    else:
        black_name, white_name = session.agent.name, human_name
    filename = save_game(session.game, black_name, white_name, mode=MODE_AI)
    return f"Saved: {filename}"


def build_play_tab() -> None:
    """Construct the Play tab UI inside a gr.Blocks context."""

    session_state = gr.State(GameSession())

    with gr.Row():
        # Left: board
        with gr.Column(scale=3):
            board_html = gr.HTML(
                value=render_board_svg(GomokuGameState()),
                label="Board",
            )
        # Right: controls
        with gr.Column(scale=1):
            status_text = gr.Textbox(
                value="Your turn (Black)",
                label="Status",
                interactive=False,
                lines=2,
            )
            color_info = gr.Textbox(
                value="You are Black.",
                label="Color",
                interactive=False,
                lines=1,
            )

            gr.Markdown("### New Game")
            color_choice = gr.Radio(
                choices=["Random", "Black", "White"],
                value="Black",
                label="Play as",
            )
            agent_choice = gr.Dropdown(
                choices=OPPONENT_CHOICES,
                value=DEFAULT_AGENT,
                label="Opponent",
            )
            new_game_btn = gr.Button("New Game", variant="primary")

            with gr.Row():
                undo_btn = gr.Button("Undo")
                resign_btn = gr.Button("Resign", variant="stop")
            save_btn = gr.Button("Save Game")
            save_status = gr.Textbox(label="Save", interactive=False, lines=1)

            gr.Markdown("### Enter Move")
            coord_input = gr.Textbox(
                label="Coordinate (e.g. H8)",
                placeholder="H8",
                elem_id="coord-input",
                lines=1,
            )
            coord_submit = gr.Button(
                "Submit Move",
                elem_id="coord-submit",
            )

            gr.Markdown("### Move History")
            move_table = gr.Dataframe(
                headers=["#", "Player", "Move", "Time (s)"],
                datatype=["number", "str", "str", "str"],
                interactive=False,
            )

    # Outputs shared by most callbacks
    board_outputs = [board_html, status_text, move_table, session_state]

    coord_submit.click(
        fn=_apply_human_move,
        inputs=[coord_input, session_state],
        outputs=board_outputs + [coord_input],
    )

    new_game_btn.click(
        fn=_new_game_with_color,
        inputs=[color_choice, agent_choice, session_state],
        outputs=board_outputs + [color_info],
    )

    undo_btn.click(
        fn=_undo_move,
        inputs=[session_state],
        outputs=board_outputs,
    )

    resign_btn.click(
        fn=_resign,
        inputs=[session_state],
        outputs=board_outputs,
    )

    save_btn.click(
        fn=_save_game,
        inputs=[session_state],
        outputs=[save_status],
    )
