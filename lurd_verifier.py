"""
LURD verification.

Replays a move string on a copy of a board and returns the resulting
snapshot, or None if the string is not valid for the board::

    result = LURDVerifier(board).verify_lurd("ldurldurld")
    if result is None:
        ...                       # invalid for this board
    elif result.is_solution:
        ...                       # solves the puzzle
    else:
        ...                       # a snapshot

The returned LURD string is corrected: moves are lowercase, pushes are
uppercase, whatever the case of the input.  For a solution, all moves
after the solving push are dropped.
"""

from __future__ import annotations

import logging

from board import (
    LURD_CHARS,
    NONE,
    SNAPSHOT_MARKER,
    Board,
    Dir,
    direction_from_lurd_char,
    move_char,
    push_char,
)
from snapshot import Metrics, Snapshot, Solution

logger = logging.getLogger(__name__)

_VALID_CHARS = frozenset(LURD_CHARS + SNAPSHOT_MARKER)


class LURDVerifier:
    """Verifies move strings against a private copy of ``board``."""

    def __init__(self, board: Board) -> None:
        self.original_board = board.clone()

    def verify_lurd(self, lurd: str) -> Snapshot | None:
        """Return the Snapshot or Solution for ``lurd``, None if it is invalid.

        ``lurd`` may only contain l, u, r, d in either case and "*".
        It is invalid if it is empty, contains any other character, or
        any of its steps can't be performed (e.g. walking into a wall or
        pushing a box against another box).

        The metrics (moves, pushes, box lines, box changes, pushing
        sessions and player lines) are computed while replaying.
        """
        if not lurd or not set(lurd) <= _VALID_CHARS:
            logger.debug(f"Rejected LURD string with invalid characters: {lurd!r}")
            return None
        return _Replay(self.original_board.clone()).run(lurd)


class _Replay:
    """State of one verification run."""

    def __init__(self, board: Board) -> None:
        self.board = board
        self.metrics = Metrics()
        self.metrics_done_moves = self.metrics     # metrics up to the last "*"
        self.last_pushed_box_position = NONE
        self.last_direction: Dir | None = None
        self.last_was_move = True
        self.validated: list[str] = []

    def run(self, lurd: str) -> Snapshot | None:
        board = self.board

        for index, char in enumerate(lurd):
            if char == SNAPSHOT_MARKER:
                self.validated.append(SNAPSHOT_MARKER)
                self.metrics_done_moves = self.metrics.copy()
                continue

            direction = direction_from_lurd_char(char)
            new_player = board.player_neighbor(direction)
            new_box = board.neighbor(new_player, direction)

            if board.is_box(new_player):
                if not self._move_player(direction):
                    logger.debug(f"Illegal push {char!r} at index {index}")
                    return None
                self.validated.append(push_char(direction))
                self._count_push(direction)
                self.last_pushed_box_position = new_box
                self.last_was_move = False

                if board.is_solved():
                    return self._result_when_solved()
            else:
                if not self._move_player(direction):
                    logger.debug(f"Illegal move {char!r} at index {index}")
                    return None
                self.validated.append(move_char(direction))
                self._count_move(direction)
                self.last_was_move = True

            self.last_direction = direction

        return Snapshot("".join(self.validated), self.metrics_done_moves)

    def _result_when_solved(self) -> Snapshot:
        lurd = "".join(self.validated)
        if SNAPSHOT_MARKER in lurd:
            # solved only by undone moves
            return Snapshot(lurd, self.metrics_done_moves)
        return Solution(lurd, self.metrics)

    def _move_player(self, direction: Dir) -> bool:
        board = self.board
        new_player = board.player_neighbor(direction)
        if new_player == NONE or board.is_wall(new_player):
            return False

        if board.is_box(new_player):
            new_box = board.neighbor(new_player, direction)
            if not board.push_box(new_player, new_box):
                return False

        board.player_position = new_player
        return True

    def _count_push(self, direction: Dir) -> None:
        m = self.metrics
        m.move_count += 1
        m.push_count += 1

        # The box pushed last was moved onto last_pushed_box_position.  If a
        # box is still there after this push, another box has been pushed.
        other_box = (self.last_pushed_box_position == NONE
                     or self.board.is_box(self.last_pushed_box_position))

        if other_box or self.last_was_move:
            m.box_line_count += 1
        if other_box:
            m.box_change_count += 1
        if self.last_was_move:
            m.pushing_session_count += 1
        if direction != self.last_direction:
            m.player_line_count += 1

    def _count_move(self, direction: Dir) -> None:
        self.metrics.move_count += 1
        if direction != self.last_direction:
            self.metrics.player_line_count += 1
