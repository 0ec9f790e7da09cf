"""Save, load and manage game records as JSON files."""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime
from pathlib import Path

from .board import BOARD_SIZE, GomokuGameState, format_point, parse_coordinate

logger = logging.getLogger(__name__)

SAVED_GAMES_DIR = Path(__file__).resolve().parents[2] / "saved_games"

# Game modes stored in a record's "mode" field
MODE_AI = "ai"
MODE_LOCAL = "pvp"
MODE_LABELS = {MODE_AI: "Human vs AI", MODE_LOCAL: "Two players"}


def _ensure_dir(directory: Path) -> None:
    directory.mkdir(parents=True, exist_ok=True)


def _result_text(game: GomokuGameState) -> str:
    if not game.is_over:
        return "In progress"
    if game.winner is not None:
        return f"{game.winner} wins"
    return "Draw"


def _record_filename(now: datetime, black_name: str, white_name: str) -> str:
    filename = f"{now.strftime('%Y%m%d_%H%M%S')}_{black_name}_vs_{white_name}.json"
    # Sanitize filename
    return filename.replace(" ", "_").replace("(", "").replace(")", "").replace("/", "_")


def _record_path(filename: str, directory: Path) -> Path:
    if Path(filename).name != filename:
        raise ValueError(f"Not a plain record filename: {filename!r}")
    return directory / filename


def _write_record(record: dict, filename: str, directory: Path) -> None:
    _ensure_dir(directory)
    with open(directory / filename, "w") as f:
        json.dump(record, f, indent=2)


def save_game(
    game: GomokuGameState,
    black_name: str,
    white_name: str,
    result: str = "",
    mode: str = MODE_AI,
    directory: Path = SAVED_GAMES_DIR,
) -> str:
    """Save a game to a JSON file. Returns the filename."""
    if not result:
        result = _result_text(game)

    moves = [format_point(m.point) for m in game.moves]
    now = datetime.now()
    filename = _record_filename(now, black_name, white_name)

    record = {
        "date": now.isoformat(),
        "mode": mode,
        "black": black_name,
        "white": white_name,
        "result": result,
        "size": game.size,
        "move_count": len(moves),
        "moves": moves,
    }
    _write_record(record, filename, directory)

    logger.info("Saved %d-move game to %s", len(moves), filename)
    return filename


def load_game(filename: str, directory: Path = SAVED_GAMES_DIR) -> dict:
    """Load a game record from a JSON file. Returns the parsed dict."""
    with open(_record_path(filename, directory)) as f:
        return json.load(f)


def export_game(filename: str, directory: Path = SAVED_GAMES_DIR) -> str:
    """Return a saved record as indented JSON text."""
    return json.dumps(load_game(filename, directory), indent=2)


def import_game(text: str, directory: Path = SAVED_GAMES_DIR) -> str:
    """Store a record given as JSON text. Returns the new filename.

    Raises ValueError if the text is not JSON or has no list of moves.
    """
    record = json.loads(text)
    if not isinstance(record, dict) or not isinstance(record.get("moves"), list):
        raise ValueError("Invalid game record: expected an object with a 'moves' list")

    now = datetime.now()
    record["date"] = now.isoformat()
    record.setdefault("black", "Black")
    record.setdefault("white", "White")
    record["move_count"] = len(record["moves"])
    filename = "imported_" + _record_filename(now, str(record["black"]), str(record["white"]))
    _write_record(record, filename, directory)

    logger.info("Imported %d-move game as %s", record["move_count"], filename)
    return filename


def delete_game(filename: str, directory: Path = SAVED_GAMES_DIR) -> None:
    """Remove one saved record. Raises FileNotFoundError if it does not exist."""
    os.remove(_record_path(filename, directory))
    logger.info("Deleted %s", filename)


def clear_saved_games(directory: Path = SAVED_GAMES_DIR) -> int:
    """Remove every saved record. Returns how many were deleted."""
    files = list_saved_games(directory)
    for name in files:
        os.remove(directory / name)
    logger.info("Cleared %d saved games", len(files))
    return len(files)


def list_saved_games(directory: Path = SAVED_GAMES_DIR) -> list[str]:
    """Return sorted list of saved game filenames (newest first)."""
    _ensure_dir(directory)
    files = [f for f in os.listdir(directory) if f.endswith(".json")]
    files.sort(reverse=True)
    return files


def replay_to_move(record: dict, move_index: int) -> GomokuGameState:
    """Rebuild a GomokuGameState with moves replayed up to move_index (inclusive).

    move_index = -1 means empty board, 0 means first move, etc.
    """
    size = record.get("size", BOARD_SIZE)
    game = GomokuGameState(size)
    moves = record.get("moves", [])
    for i in range(min(move_index + 1, len(moves))):
        point = parse_coordinate(moves[i], size)
        if point is None or game.is_over or not game.board.is_empty(point):
            logger.warning("Skipping unplayable move %r at index %d", moves[i], i)
            continue
        game.apply_move(point)
    return game


def format_as_text(record: dict) -> str:
    """Plain-text summary of a record: header lines, then one line per move."""
    game = replay_to_move(record, len(record.get("moves", [])) - 1)
    lines = [
        "Gomoku game record",
        f"Date: {record.get('date', '?')}",
        f"Mode: {MODE_LABELS.get(record.get('mode', MODE_AI), record.get('mode'))}",
        f"Black: {record.get('black', '?')}",
        f"White: {record.get('white', '?')}",
        f"Result: {record.get('result', '?')}",
        f"Moves: {len(game.moves)}",
        "",
    ]
    lines.extend(
        f"{i + 1}. {move.player} {format_point(move.point)}"
        for i, move in enumerate(game.moves)
    )
    return "\n".join(lines) + "\n"
