"""
Sokobot: Flask JSON API for the box path planner and the LURD verifier.

Every request carries the board as XSB text in the "level" field.
Cells are addressed as [row, col] pairs.

Endpoints:
    GET  /api/levels       built-in boards
    POST /api/box-path     best push path for one box
    POST /api/reachable    all positions one box can be pushed to
    POST /api/verify       verify a LURD string and compute its metrics
"""

import logging
import os
import threading
from dataclasses import asdict

from flask import Flask, jsonify, request

from board import Board, parse_board
from box_path_finding import BoxPathFinding, moves_pushes, pushes_moves
from lurd_verifier import LURDVerifier
from player_path_finding import lurd_for_box_path
from puzzles import PUZZLES, get_puzzle_names

LOG_LEVEL = os.environ.get("SOKOBOT_LOG_LEVEL", "INFO")

logging.basicConfig(
    level=LOG_LEVEL,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
)
logger = logging.getLogger(__name__)

app = Flask(__name__)

SEARCH_TIMEOUT = 30  # seconds

ORDERS = {"pushes": pushes_moves, "moves": moves_pushes}


class RequestError(Exception):
    """Invalid request; reported to the client with a 4xx status."""

    def __init__(self, message: str, status: int = 400) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


@app.errorhandler(RequestError)
def handle_request_error(error: RequestError):
    return jsonify(status="error", message=error.message), error.status


# ---------------------------------------------------------------------------
# API endpoints
# ---------------------------------------------------------------------------

@app.route("/api/levels", methods=["GET"])
def get_levels():
    """Return the built-in board catalog."""
    levels = []
    for name in get_puzzle_names():
        text = PUZZLES[name]
        board = parse_board(text)
        levels.append({
            "name": name,
            "text": text,
            "boxes": board.box_count,
        })
    return jsonify(levels)


@app.route("/api/box-path", methods=["POST"])
def box_path():
    """Find the best path for the selected box to the target cell."""
    data = _json_body()
    board = _board_from(data)
    start = _position_from(data, "box", board)
    target = _position_from(data, "target", board)

    optimize = data.get("optimize", "pushes")
    if optimize not in ORDERS:
        raise RequestError("'optimize' must be 'pushes' or 'moves'.")

    path_finding = BoxPathFinding(board)
    path = _run_with_timeout(
        lambda: path_finding.find_box_path(start, target, ORDERS[optimize]))

    if path is None:
        return jsonify(status="not_found",
                       message="The box can't reach the target without moving other boxes.")

    return jsonify(
        status="found",
        path=[list(board.coordinates(pos)) for pos in path.positions],
        moves=path.move_count,
        pushes=path.push_count,
        lurd=lurd_for_box_path(board, start, path.positions),
    )


@app.route("/api/reachable", methods=["POST"])
def reachable():
    """Return every position the selected box can be pushed to."""
    data = _json_body()
    board = _board_from(data)
    start = _position_from(data, "box", board)

    path_finding = BoxPathFinding(board)
    positions = _run_with_timeout(
        lambda: path_finding.get_reachable_box_positions(start))

    return jsonify(status="ok",
                   positions=[list(board.coordinates(pos)) for pos in sorted(positions)])


@app.route("/api/verify", methods=["POST"])
def verify():
    """Verify a LURD string against the board."""
    data = _json_body()
    board = _board_from(data)

    lurd = data.get("lurd")
    if not isinstance(lurd, str) or not lurd.strip():
        raise RequestError("Missing 'lurd' field.")

    result = LURDVerifier(board).verify_lurd(lurd.strip())
    if result is None:
        raise RequestError("The LURD string is not valid for this board.")

    return jsonify(
        status="solution" if result.is_solution else "snapshot",
        lurd=result.lurd,
        metrics=asdict(result.metrics),
    )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict) or not data:
        raise RequestError("Request body must be a JSON object.")
    return data


def _board_from(data: dict) -> Board:
    level_text = data.get("level")
    if not isinstance(level_text, str) or not level_text.strip():
        raise RequestError("Missing 'level' field.")
    try:
        return parse_board(level_text)
    except ValueError as e:
        raise RequestError(str(e)) from e


def _position_from(data: dict, key: str, board: Board) -> int:
    value = data.get(key)
    if (not isinstance(value, list) or len(value) != 2
            or not all(isinstance(v, int) and not isinstance(v, bool) for v in value)):
        raise RequestError(f"'{key}' must be a [row, col] pair.")
    row, col = value
    if not (0 <= row < board.height and 0 <= col < board.width):
        raise RequestError(f"'{key}' is outside the board.")
    position = board.position(row, col)
    if key == "box" and not board.is_box(position):
        raise RequestError(f"There is no box at {value}.")
    return position


def _run_with_timeout(search):
    """Run a search in a worker thread; give up after SEARCH_TIMEOUT seconds.

    A search that times out keeps running on its own private board until it
    ends, its result is discarded.
    """
    result_holder = [None]
    error_holder = [None]

    def do_search():
        try:
            result_holder[0] = search()
        except Exception as e:
            error_holder[0] = e

    thread = threading.Thread(target=do_search, daemon=True)
    thread.start()
    thread.join(timeout=SEARCH_TIMEOUT)

    if thread.is_alive():
        logger.warning(f"Search timed out after {SEARCH_TIMEOUT}s")
        raise RequestError("Search timed out.", status=504)
    if error_holder[0] is not None:
        raise error_holder[0]
    return result_holder[0]


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    app.run(debug=True, use_reloader=False, port=5000)
