"""
Box path finding.

Finds the best way to push ONE box from a start position to a target
position while every other box stays where it is.  Pushing other boxes
out of the way would often be shorter, but that is a full solver's job.

Example::

    #########
    #   #   #
    #@$  * .#    <- the left box is to be pushed to the goal
    # o #  o#
    # o #  o#
    # oooooo#    <- path used: the box on goal must not be moved
    #       #
    #########

The search runs over (box position, player position) states.  One
transition is: the player walks to the cell behind the box, then pushes
once.  Uniform-cost search (Dijkstra) with two orders:

  - moves/pushes: fewest moves first, ties broken by pushes
  - pushes/moves: fewest pushes first, ties broken by moves

Every search works on a private clone of the board, so the caller's
board is never touched, whatever the outcome.
"""

from __future__ import annotations

import heapq
import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from board import DIRS, OPPOSITE, Board
from player_distances import PlayerDistances

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Search states & orders
# ---------------------------------------------------------------------------

@dataclass(eq=False)
class State:
    box_position: int
    player_position: int
    move_count: int
    push_count: int
    previous: State | None = field(default=None, repr=False)

    @property
    def key(self) -> tuple[int, int]:
        return self.box_position, self.player_position

    def __lt__(self, other: State) -> bool:
        return False   # tie-break for heapq; equal keys pop in any order


Order = Callable[[State], tuple[int, int]]


def moves_pushes(state: State) -> tuple[int, int]:
    return state.move_count, state.push_count


def pushes_moves(state: State) -> tuple[int, int]:
    return state.push_count, state.move_count


@dataclass
class BoxPath:
    """Box positions after each push (start excluded) and the path's cost."""
    positions: list[int]
    move_count: int
    push_count: int


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------

def search(board: Board, start: int, target: int | None,
           order: Order) -> tuple[State | None, dict[tuple[int, int], State]]:
    """Uniform-cost search for the box at ``start``.

    ``board`` is owned by the search and gets modified.  With
    ``target=None`` the whole state space is explored.

    Returns the final state of the best path (None if the target can't be
    reached) and the settled states keyed by (box, player).
    """
    distances = PlayerDistances(board)

    start_state = State(start, board.player_position, 0, 0)
    settled: dict[tuple[int, int], State] = {start_state.key: start_state}
    open_heap: list[tuple[tuple[int, int], State]] = [(order(start_state), start_state)]
    expanded = 0

    while open_heap:
        _, state = heapq.heappop(open_heap)
        if settled[state.key] is not state:
            continue   # superseded by a cheaper state with the same key

        if state.box_position == target:
            logger.debug(f"Box path found after {expanded} expansions")
            return state, settled

        expanded += 1
        box = state.box_position

        # The box must block the player while distances are computed,
        # but must not block its own destination cell.
        board.set_box(box)
        distances.update(state.player_position)
        board.remove_box(box)

        for d in DIRS:
            push_from = board.neighbor(box, OPPOSITE[d])
            new_box = board.neighbor(box, d)

            if not distances.is_reachable(push_from):
                continue
            if not board.is_accessible_box(new_box):
                continue

            new_state = State(
                new_box,
                box,
                state.move_count + distances.get_distance(push_from) + 1,
                state.push_count + 1,
                state,
            )

            stored = settled.get(new_state.key)
            if stored is None or order(new_state) < order(stored):
                settled[new_state.key] = new_state
                heapq.heappush(open_heap, (order(new_state), new_state))

    logger.debug(f"Search exhausted after {expanded} expansions, "
                 f"{len(settled)} states settled")
    return None, settled


def _box_path_from(state: State) -> BoxPath:
    positions: list[int] = []
    current: State | None = state
    while current is not None:
        positions.append(current.box_position)
        current = current.previous
    positions.reverse()
    return BoxPath(positions[1:], state.move_count, state.push_count)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

class BoxPathFinding:
    """Push paths and reachable positions for a single box of ``board``.

    The board is read at call time (current boxes and player position) and
    is never modified.
    """

    def __init__(self, board: Board) -> None:
        self.board = board

    def find_box_path(self, start: int, target: int,
                      order: Order = pushes_moves) -> BoxPath | None:
        """Best path for the box at ``start`` to ``target``, None if none exists."""
        self._check_start(start)
        final_state, _ = search(self.board.clone(), start, target, order)
        return _box_path_from(final_state) if final_state is not None else None

    def get_box_path_moves_pushes(self, start: int, target: int) -> list[int] | None:
        """Box positions of the best moves/pushes path, start excluded."""
        path = self.find_box_path(start, target, moves_pushes)
        return path.positions if path is not None else None

    def get_box_path_pushes_moves(self, start: int, target: int) -> list[int] | None:
        """Box positions of the best pushes/moves path, start excluded.

        Example::

            get_box_path_pushes_moves(1, 3)  =>  [2, 3]
        """
        path = self.find_box_path(start, target, pushes_moves)
        return path.positions if path is not None else None

    def get_reachable_box_positions(self, start: int) -> set[int]:
        """All positions the box at ``start`` can be pushed to (start included)."""
        self._check_start(start)
        _, settled = search(self.board.clone(), start, None, pushes_moves)
        return {box for box, _ in settled}

    def _check_start(self, start: int) -> None:
        if not self.board.is_box(start):
            raise ValueError(f"No box at start position {start}")
