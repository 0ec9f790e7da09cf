"""HeuriGomoku: Gradio web app entry point."""

import logging

import gradio as gr

from heurigomoku.ui.board_component import BOARD_CLICK_JS
from heurigomoku.ui.play_tab import build_play_tab
from heurigomoku.ui.replay_tab import build_replay_tab

with gr.Blocks(title="HeuriGomoku") as demo:
    gr.Markdown("# HeuriGomoku")
    gr.Markdown("Gomoku against a pattern-scoring AI: 15x15 board, 5 in a row to win.")

    with gr.Tab("Play"):
        build_play_tab()

    with gr.Tab("Replay"):
        build_replay_tab()

    # Bind board click handler JS on page load
    demo.load(fn=None, js=BOARD_CLICK_JS)

if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    demo.launch(theme=gr.themes.Soft())
