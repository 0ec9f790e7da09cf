"""Replay tab: step through saved games."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

import gradio as gr

from heurigomoku.agent.heuristic_agent import best_moves
from heurigomoku.game.board import GomokuGameState, format_point
from heurigomoku.game.record import (
    SAVED_GAMES_DIR,
    delete_game,
    format_as_text,
    import_game,
    list_saved_games,
    load_game,
    replay_to_move,
)
from heurigomoku.ui.board_component import render_board_svg


@dataclass
class ReplayState:
    """Per-tab replay state held in gr.State."""

    record: dict = field(default_factory=dict)
    move_index: int = -1  # -1 = empty board

    @property
    def total_moves(self) -> int:
        return len(self.record.get("moves", []))

    @property
    def status_text(self) -> str:
        if not self.record:
            return "Load a game to begin."
        info = f"{self.record.get('black', '?')} (Black) vs {self.record.get('white', '?')} (White)"
        result = self.record.get("result", "")
        pos = f"Move {self.move_index + 1}/{self.total_moves}" if self.move_index >= 0 else "Start"
        return " | ".join([info, f"Result: {result}", pos])

    @property
    def move_table(self) -> list[list[str]]:
        """Rows for the moves actually on the board; unplayable entries are left out."""
        if not self.record:
            return []
        game = replay_to_move(self.record, self.move_index)
        return [
            [str(i + 1), str(move.player), format_point(move.point)]
            for i, move in enumerate(game.moves)
        ]


def _suggestion_text(game: GomokuGameState) -> str:
    """Cells the heuristic agent rates highest for the side to move."""
    if game.is_over:
        return "Game over."
    if not game.moves:
        return f"Suggested: {format_point(game.board.center)}"
    best = best_moves(game.board, game.current_player, game.last_move)
    if not best:
        return "No moves left."
    return "Suggested: " + ", ".join(format_point(pt) for pt in best)


def _replay_outputs(state: ReplayState):
    if not state.record:
        board = render_board_svg(GomokuGameState(), clickable=False)
        return board, state.status_text, state.move_table, "", state
    game = replay_to_move(state.record, state.move_index)
    game_over_msg = ""
    if state.move_index + 1 >= state.total_moves and game.is_over:
        game_over_msg = state.record.get("result", "")
    board = render_board_svg(game, clickable=False, game_over_message=game_over_msg)
    return board, state.status_text, state.move_table, _suggestion_text(game), state


def _load_game(filename: str, state: ReplayState):
    """Load a saved game file."""
    if not filename:
        board, _, _, _, state = _replay_outputs(state)
        return board, "Select a game file.", [], "", state
    state.record = load_game(filename)
    state.move_index = -1
    return _replay_outputs(state)


def _step_forward(state: ReplayState):
    if state.record and state.move_index < state.total_moves - 1:
        state.move_index += 1
    return _replay_outputs(state)


def _step_backward(state: ReplayState):
    if state.record and state.move_index >= 0:
        state.move_index -= 1
    return _replay_outputs(state)


def _jump_start(state: ReplayState):
    if state.record:
        state.move_index = -1
    return _replay_outputs(state)


def _jump_end(state: ReplayState):
    if state.record:
        state.move_index = state.total_moves - 1
    return _replay_outputs(state)


def _refresh_file_list(directory: Path = SAVED_GAMES_DIR):
    files = list_saved_games(directory)
    return gr.update(choices=files, value=files[0] if files else None)


def _delete_game(filename: str, directory: Path = SAVED_GAMES_DIR):
    """Delete the selected record. Returns (dropdown update, message)."""
    if not filename:
        return _refresh_file_list(directory), "Select a game file."
    try:
        delete_game(filename, directory)
    except FileNotFoundError:
        return _refresh_file_list(directory), f"{filename} no longer exists."
    return _refresh_file_list(directory), f"Deleted: {filename}"


def _import_game(text: str, directory: Path = SAVED_GAMES_DIR):
    """Store pasted record JSON. Returns (dropdown update, message)."""
    if not text or not text.strip():
        return _refresh_file_list(directory), "Paste a game record to import."
    try:
        filename = import_game(text, directory)
    except ValueError as e:
        return _refresh_file_list(directory), f"Import failed: {e}"
    files = list_saved_games(directory)
    return gr.update(choices=files, value=filename), f"Imported: {filename}"


def _export_text(state: ReplayState) -> str:
    if not state.record:
        return ""
    return format_as_text(state.record)


def build_replay_tab() -> None:
    """Construct the Replay tab UI inside a gr.Blocks context."""

    replay_state = gr.State(ReplayState())

    with gr.Row():
        with gr.Column(scale=3):
            board_html = gr.HTML(
                value=render_board_svg(GomokuGameState(), clickable=False),
                label="Board",
            )
        with gr.Column(scale=1):
            status_text = gr.Textbox(
                value="Load a game to begin.",
                label="Status",
                interactive=False,
                lines=2,
            )
            suggestion = gr.Textbox(
                label="Heuristic suggestion",
                interactive=False,
                lines=1,
            )

            gr.Markdown("### Load Game")
            file_dropdown = gr.Dropdown(
                choices=list_saved_games(),
                label="Saved Games",
            )
            with gr.Row():
                refresh_btn = gr.Button("Refresh")
                load_btn = gr.Button("Load", variant="primary")
                delete_btn = gr.Button("Delete", variant="stop")
            manage_status = gr.Textbox(label="Records", interactive=False, lines=1)

            gr.Markdown("### Controls")
            with gr.Row():
                start_btn = gr.Button("<<")
                back_btn = gr.Button("<")
                fwd_btn = gr.Button(">")
                end_btn = gr.Button(">>")

            gr.Markdown("### Move History")
            move_table = gr.Dataframe(
                headers=["#", "Player", "Move"],
                datatype=["number", "str", "str"],
                interactive=False,
            )

            gr.Markdown("### Import / Export")
            import_text = gr.Textbox(
                label="Record JSON",
                placeholder='{"moves": ["H8", "I8"]}',
                lines=4,
            )
            with gr.Row():
                import_btn = gr.Button("Import")
                export_btn = gr.Button("Export as text")
            export_box = gr.Textbox(label="Game record", interactive=False, lines=8)

    outputs =[board_html, status_text, move_table, suggestion, replay_state]

    load_btn.click(
        fn=_load_game,
        inputs=[file_dropdown, replay_state],
        outputs=outputs,
    )

    refresh_btn.click(
        fn=_refresh_file_list,
        outputs=[file_dropdown],
    )

    delete_btn.click(
        fn=_delete_game,
        inputs=[file_dropdown],
        outputs=[file_dropdown, manage_status],
    )

    import_btn.click(
        fn=_import_game,
        inputs=[import_text],
        outputs=[file_dropdown, manage_status],
    )

    export_btn.click(fn=_export_text, inputs=[replay_state], outputs=[export_box])

    fwd_btn.click(fn=_step_forward, inputs=[replay_state], outputs=outputs)
    back_btn.click(fn=_step_backward, inputs=[replay_state], outputs=outputs)
    start_btn.click(fn=_jump_start, inputs=[replay_state], outputs=outputs)
    end_btn.click(fn=_jump_end, inputs=[replay_state], outputs=outputs)
