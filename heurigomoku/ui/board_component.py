"""SVG board renderer + JavaScript click handler for Gradio."""

from __future__ import annotations

from typing import Optional

from heurigomoku.game.board import COL_LABELS, GomokuGameState, format_point
from heurigomoku.game.types import Player, Point

# Layout constants
CELL_SIZE = 40
MARGIN = 40
STONE_RADIUS = 17
CLICK_RADIUS = 18  # Invisible click target radius

# Colors
BG_COLOR = "#DCB35C"
LINE_COLOR = "#4A3728"
BLACK_STONE = "#1A1A1A"
WHITE_STONE = "#F5F5F5"
WHITE_STROKE = "#888"

# Game-over banner text colors
WIN_COLOR = "#4ADE80"
LOSS_COLOR = "#F87171"
NEUTRAL_COLOR = "#FFFFFF"


def _board_px(size: int) -> int:
    return MARGIN * 2 + CELL_SIZE * (size - 1)


def _coord(point: Point, size: int) -> tuple[int, int]:
    """Convert 0-indexed board coordinates to SVG pixel coordinates."""
    x = MARGIN + point.col * CELL_SIZE
    y = MARGIN + (size - 1 - point.row) * CELL_SIZE  # row 0 at bottom
    return x, y


def _banner(message: str, board_px: int) -> list[str]:
    if "You win" in message:
        color = WIN_COLOR
    elif "AI wins" in message:
        color = LOSS_COLOR
    else:
        color = NEUTRAL_COLOR
    mid = board_px // 2
    return [
        f'<rect x="0" y="{mid - 35}" width="{board_px}" height="70" '
        f'fill="rgba(0, 0, 0, 0.6)"/>',
        f'<text x="{mid}" y="{mid + 12}" text-anchor="middle" '
        f'font-size="36" font-weight="bold" font-family="sans-serif" '
        f'fill="{color}">{message}</text>',
    ]


def render_board_svg(
    game_state: GomokuGameState,
    clickable: bool = True,
    highlight_last: bool = True,
    game_over_message: str = "",
) -> str:
    """Render the board as an SVG string."""
    size = game_state.size
    board_px = _board_px(size)
    parts: list[str] = []

    # SVG header
    parts.append(
        f'<svg xmlns="http://www.w3.org/2000/svg" '
        f'width="{board_px}" height="{board_px}" '
        f'viewBox="0 0 {board_px} {board_px}" '
        f'id="gomoku-board">'
    )

    # Background
    parts.append(
        f'<rect width="{board_px}" height="{board_px}" fill="{BG_COLOR}" rx="4"/>'
    )

    # Grid lines
    far = MARGIN + (size - 1) * CELL_SIZE
    for i in range(size):
        offset = MARGIN + i * CELL_SIZE
        parts.append(
            f'<line x1="{offset}" y1="{MARGIN}" x2="{offset}" y2="{far}" '
            f'stroke="{LINE_COLOR}" stroke-width="1"/>'
        )
        parts.append(
            f'<line x1="{MARGIN}" y1="{offset}" x2="{far}" y2="{offset}" '
            f'stroke="{LINE_COLOR}" stroke-width="1"/>'
        )

    # Center star point
    cx, cy = _coord(game_state.board.center, size)
    parts.append(f'<circle cx="{cx}" cy="{cy}" r="4" fill="{LINE_COLOR}"/>')

    # Column labels (top and bottom)
    for c in range(size):
        x, _ = _coord(Point(0, c), size)
        for y in (MARGIN - 15, board_px - 10):
            parts.append(
                f'<text x="{x}" y="{y}" text-anchor="middle" '
                f'font-size="14" font-family="monospace" fill="{LINE_COLOR}">'
                f'{COL_LABELS[c]}</text>'
            )

    # Row labels (left and right)
    for r in range(size):
        _, y = _coord(Point(r, 0), size)
        for x in (MARGIN - 22, board_px - MARGIN + 22):
            parts.append(
                f'<text x="{x}" y="{y + 5}" text-anchor="middle" '
                f'font-size="14" font-family="monospace" fill="{LINE_COLOR}">'
                f'{r + 1}</text>'
            )

    # Stones
    last_point: Optional[Point] = game_state.last_move

    for pt in game_state.board.occupied_points():
        player = game_state.board.get(pt)
        x, y = _coord(pt, size)
        fill = BLACK_STONE if player is Player.BLACK else WHITE_STONE
        stroke = "none" if player is Player.BLACK else WHITE_STROKE
        parts.append(
            f'<circle cx="{x}" cy="{y}" r="{STONE_RADIUS}" '
            f'fill="{fill}" stroke="{stroke}" stroke-width="1.5"/>'
        )
        # Last move marker
        if highlight_last and pt == last_point:
            marker_color = WHITE_STONE if player is Player.BLACK else BLACK_STONE
            parts.append(
                f'<circle cx="{x}" cy="{y}" r="5" '
                f'fill="{marker_color}" opacity="0.7"/>'
            )

    # Clickable intersection targets (invisible circles)
    if clickable and not game_state.is_over:
        for pt in game_state.legal_moves():
            x, y = _coord(pt, size)
            coord_str = format_point(pt)
            parts.append(
                f'<circle cx="{x}" cy="{y}" r="{CLICK_RADIUS}" '
                f'fill="transparent" class="board-click" '
                f'data-coord="{coord_str}" style="cursor:pointer">'
                f'<title>{coord_str}</title></circle>'
            )

    if game_over_message:
        parts.extend(_banner(game_over_message, board_px))

    parts.append("</svg>")
    return "\n".join(parts)


# JavaScript that handles clicks on the SVG and writes the coordinate to
# a hidden Gradio Textbox, then triggers the submit button.
BOARD_CLICK_JS = """
() => {
    if (window._gomokuClickBound) return;
    window._gomokuClickBound = true;

    document.addEventListener('click', function(e) {
        const circle = e.target.closest('.board-click');
        if (!circle) return;
        const coord = circle.getAttribute('data-coord');
        if (!coord) return;

        const container = document.querySelector('#coord-input textarea, #coord-input input');
        if (!container) return;
        // Native setter so Gradio's change detection fires
        const proto = container.tagName === 'TEXTAREA'
            ? window.HTMLTextAreaElement.prototype
            : window.HTMLInputElement.prototype;
        const nativeSetter = Object.getOwnPropertyDescriptor(proto, 'value')?.set;
        if (nativeSetter) {
            nativeSetter.call(container, coord);
        } else {
            container.value = coord;
        }
        container.dispatchEvent(new Event('input', { bubbles: true }));
        const btn = document.querySelector('#coord-submit');
        if (btn) btn.click();
    });
}
"""
