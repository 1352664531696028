"""Breadth-first player distances over the free cells of a board."""

from __future__ import annotations

from collections import deque

from board import DIRS, Board

UNREACHABLE = -1


class PlayerDistances:
    """Distance of the player to every position it can walk to.

    Walls and boxes block the player; the boxes are taken as they stand
    on the board when ``update`` is called.
    """

    def __init__(self, board: Board) -> None:
        self.board = board
        self._distance_to: dict[int, int] = {}

    def update(self, start: int | None = None) -> None:
        """Recompute all distances from ``start`` (default: the player)."""
        if start is None:
            start = self.board.player_position

        board = self.board
        distance_to = {start: 0}
        queue: deque[int] = deque([start])
        while queue:
            pos = queue.popleft()
            new_distance = distance_to[pos] + 1
            for d in DIRS:
                nb = board.neighbor(pos, d)
                if nb not in distance_to and board.is_accessible(nb):
                    distance_to[nb] = new_distance
                    queue.append(nb)

        self._distance_to = distance_to

    def get_distance(self, position: int) -> int:
        """Moves needed to reach ``position``, or UNREACHABLE."""
        return self._distance_to.get(position, UNREACHABLE)

    def is_reachable(self, position: int) -> bool:
        return position in self._distance_to
