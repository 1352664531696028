"""Player paths, and expanding a box path into the player's moves."""

from __future__ import annotations

from collections import deque

from board import DIRS, NONE, Board, move_char, push_char


class PlayerPathFinding:
    """Shortest player paths on ``board``; walls and boxes block the player."""

    def __init__(self, board: Board) -> None:
        self.board = board

    def get_path_to(self, target: int) -> list[int] | None:
        return self.get_path(self.board.player_position, target)

    def get_path(self, start: int, target: int) -> list[int] | None:
        """Positions of the shortest path from ``start`` to ``target``.

        The start position isn't part of the path.  Returns None if the
        target can't be reached.
        """
        if start == target:
            return []

        parent = self._explore(start, target)
        if target not in parent:
            return None

        path = [target]
        while parent[path[-1]] != NONE:
            path.append(parent[path[-1]])
        path.pop()   # start position
        path.reverse()
        return path

    def get_reachable_positions(self) -> list[int]:
        """All positions the player can walk to, including its own."""
        return sorted(self._explore(self.board.player_position, None))

    def _explore(self, start: int, target: int | None) -> dict[int, int]:
        """BFS from start, stopping early at target.  Returns the parent map."""
        parent = {start: NONE}
        queue: deque[int] = deque([start])
        while queue:
            pos = queue.popleft()
            for d in DIRS:
                nb = self.board.neighbor(pos, d)
                if nb not in parent and self.board.is_accessible(nb):
                    parent[nb] = pos
                    if nb == target:
                        return parent
                    queue.append(nb)
        return parent


def lurd_for_box_path(board: Board, start: int, box_path: list[int]) -> str:
    """Turn a box path into the player's LURD string.

    ``box_path`` is the output of BoxPathFinding: the box positions after
    each push, without ``start``.  ``board`` is not modified.
    Raises ValueError if the path can't be played on the board.
    """
    board = board.clone()
    player_paths = PlayerPathFinding(board)
    lurd: list[str] = []
    box = start

    for new_box in box_path:
        direction = board.direction_of_move(box, new_box)
        push_from = box - (new_box - box)
        walk = player_paths.get_path_to(push_from)
        if walk is None:
            raise ValueError(f"Player can't reach {push_from} to push the box at {box}")

        for pos in walk:
            lurd.append(move_char(board.direction_of_move(board.player_position, pos)))
            board.player_position = pos

        if not board.push_box(box, new_box):
            raise ValueError(f"Box at {box} can't be pushed to {new_box}")
        lurd.append(push_char(direction))
        board.player_position = box
        box = new_box

    return "".join(lurd)
