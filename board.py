"""
Sokoban board model.

A board is parsed once from XSB text.  Positions are integer indices
``row * width + col``; ``NONE`` (-1) stands for "no position".
Walls, goals and the active area never change after parsing, only the
box set, the player position and the reachable markers do.
"""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import NamedTuple

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Direction helpers
# ---------------------------------------------------------------------------

class Dir(NamedTuple):
    dr: int
    dc: int
    name: str

UP    = Dir(-1,  0, "U")
DOWN  = Dir( 1,  0, "D")
LEFT  = Dir( 0, -1, "L")
RIGHT = Dir( 0,  1, "R")
DIRS  = (UP, DOWN, LEFT, RIGHT)

OPPOSITE = {UP: DOWN, DOWN: UP, LEFT: RIGHT, RIGHT: LEFT}

LURD_CHARS = "UDLRudlr"
SNAPSHOT_MARKER = "*"

_DIR_BY_CHAR = {d.name.lower(): d for d in DIRS}


def direction_from_lurd_char(char: str) -> Dir:
    """Return the direction of a LURD character, ignoring its case."""
    try:
        return _DIR_BY_CHAR[char.lower()]
    except KeyError:
        raise ValueError(f"Invalid LURD character: {char!r}") from None


def move_char(direction: Dir) -> str:
    return direction.name.lower()


def push_char(direction: Dir) -> str:
    return direction.name.upper()


# ---------------------------------------------------------------------------
# Board representation
# ---------------------------------------------------------------------------

NONE = -1

NOT_REACHABLE = 0
REACHABLE_PLAYER = 1
REACHABLE_BOX = 2

XSB_WALL = "#"
XSB_FLOOR = " "
XSB_BOX = "$"
XSB_BOX_ON_GOAL = "*"
XSB_PLAYER = "@"
XSB_PLAYER_ON_GOAL = "+"
XSB_GOAL = "."
XSB_BACKGROUND = "-"

XSB_CHARS = frozenset("# $*@+.-_")


@dataclass
class Board:
    """One puzzle instance: static layout plus box and player occupancy."""
    width: int
    height: int
    walls: frozenset[int]
    goals: frozenset[int]
    active_positions: tuple[int, ...]     # player reachable ignoring boxes
    dead_squares: frozenset[int]
    boxes: set[int]
    player_position: int = NONE
    reachable_marker: list[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._active = frozenset(self.active_positions)
        if not self.reachable_marker:
            self.reachable_marker = [NOT_REACHABLE] * self.size

    @property
    def size(self) -> int:
        return self.width * self.height

    # -- coordinates ---------------------------------------------------------

    def position(self, row: int, col: int) -> int:
        return row * self.width + col

    def coordinates(self, position: int) -> tuple[int, int]:
        return divmod(position, self.width)

    def neighbor(self, position: int, direction: Dir) -> int:
        """Return the neighbor of ``position`` or NONE if it is off the grid."""
        if position < 0 or position >= self.size:
            return NONE
        row, col = divmod(position, self.width)
        r, c = row + direction.dr, col + direction.dc
        if 0 <= r < self.height and 0 <= c < self.width:
            return r * self.width + c
        return NONE

    def player_neighbor(self, direction: Dir) -> int:
        return self.neighbor(self.player_position, direction)

    def direction_of_move(self, start: int, end: int) -> Dir:
        """Return the direction leading from ``start`` to the adjacent ``end``."""
        for d in DIRS:
            if self.neighbor(start, d) == end and end != NONE:
                return d
        raise ValueError(f"Positions {start} and {end} are not adjacent")

    # -- queries -------------------------------------------------------------

    def is_wall(self, position: int) -> bool:
        return position in self.walls

    def is_goal(self, position: int) -> bool:
        return position in self.goals

    def is_box(self, position: int) -> bool:
        return position in self.boxes

    def is_box_on_goal(self, position: int) -> bool:
        return position in self.boxes and position in self.goals

    def is_active(self, position: int) -> bool:
        return position in self._active

    def is_dead_square(self, position: int) -> bool:
        return position in self.dead_squares

    def is_accessible(self, position: int) -> bool:
        """True if neither a wall nor a box is at ``position``."""
        return position in self._active and position not in self.boxes

    def is_accessible_box(self, position: int) -> bool:
        """True if a box may be pushed onto ``position``."""
        return self.is_accessible(position) and position not in self.dead_squares

    @property
    def box_count(self) -> int:
        return len(self.boxes)

    @property
    def goal_count(self) -> int:
        return len(self.goals)

    @property
    def box_on_goal_count(self) -> int:
        return len(self.boxes & self.goals)

    def is_solved(self) -> bool:
        return self.goals <= self.boxes

    # -- mutation ------------------------------------------------------------

    def set_box(self, position: int) -> None:
        self.boxes.add(position)

    def remove_box(self, position: int) -> None:
        self.boxes.discard(position)

    def push_box(self, position: int, new_position: int) -> bool:
        """Move the box at ``position`` to ``new_position`` if possible."""
        if position not in self.boxes:
            logger.debug(f"No box at position {position} to push")
            return False
        if position == new_position:
            logger.debug(f"Box at {position} pushed onto itself")
            return False
        if not self.is_accessible(new_position) or new_position == self.player_position:
            logger.debug(f"Box at {position} blocked: {new_position} is not accessible")
            return False

        self.boxes.remove(position)
        self.boxes.add(new_position)
        return True

    def clone(self) -> Board:
        """Copy the dynamic state; the static layout is shared."""
        return Board(
            width=self.width,
            height=self.height,
            walls=self.walls,
            goals=self.goals,
            active_positions=self.active_positions,
            dead_squares=self.dead_squares,
            boxes=set(self.boxes),
            player_position=self.player_position,
            reachable_marker=list(self.reachable_marker),
        )

    # -- reachable markers (UI highlighting) ---------------------------------

    def mark_player_reachable(self, positions) -> None:
        for position in positions:
            self.reachable_marker[position] = REACHABLE_PLAYER

    def mark_box_reachable(self, positions) -> None:
        for position in positions:
            self.reachable_marker[position] = REACHABLE_BOX

    def remove_all_reachable_markers(self) -> None:
        self.reachable_marker = [NOT_REACHABLE] * self.size

    def has_reachable_markers(self) -> bool:
        return any(marker != NOT_REACHABLE for marker in self.reachable_marker)

    # -- rendering -----------------------------------------------------------

    def xsb_char(self, position: int) -> str:
        if position == self.player_position:
            return XSB_PLAYER_ON_GOAL if self.is_goal(position) else XSB_PLAYER
        if self.is_box_on_goal(position):
            return XSB_BOX_ON_GOAL
        if self.is_box(position):
            return XSB_BOX
        if self.is_goal(position):
            return XSB_GOAL
        if self.is_wall(position):
            return XSB_WALL
        return XSB_FLOOR if self.is_active(position) else XSB_BACKGROUND

    def to_string(self) -> str:
        """Render the board as XSB text, one line per row."""
        return "\n".join(
            "".join(self.xsb_char(row * self.width + col) for col in range(self.width))
            for row in range(self.height)
        )


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _is_board_row(line: str) -> bool:
    return all(ch in XSB_CHARS for ch in line)


def parse_board(text: str) -> Board:
    """Parse an XSB level string into a Board.

    Lines containing other characters (titles, comments) are skipped.
    Raises ValueError if the text does not describe a playable board.
    """
    lines = [line for line in text.replace("\r", "").split("\n") if _is_board_row(line)]
    while lines and not lines[0].strip():
        lines.pop(0)
    while lines and not lines[-1].strip():
        lines.pop()

    height = len(lines)
    width = max((len(line) for line in lines), default=0)
    if width < 3 or height < 3:
        raise ValueError("No valid board")

    walls: set[int] = set()
    goals: set[int] = set()
    boxes: set[int] = set()
    player = NONE

    for r, line in enumerate(lines):
        for c, ch in enumerate(line.ljust(width)):
            pos = r * width + c
            if ch == XSB_WALL:
                walls.add(pos)
            elif ch == XSB_BOX:
                boxes.add(pos)
            elif ch == XSB_BOX_ON_GOAL:
                boxes.add(pos)
                goals.add(pos)
            elif ch == XSB_GOAL:
                goals.add(pos)
            elif ch == XSB_PLAYER:
                player = pos
            elif ch == XSB_PLAYER_ON_GOAL:
                player = pos
                goals.add(pos)

    if player == NONE:
        raise ValueError("Board does not contain a player!")

    active = _active_positions(player, frozenset(walls), width, height)
    if active is None:
        raise ValueError("Player can leave the board!")

    active_set = frozenset(active)
    boxes &= active_set
    goals &= active_set

    if len(boxes) != len(goals):
        raise ValueError(
            f"Number of boxes and goals don't match! "
            f"boxes: {len(boxes)} but goals: {len(goals)}"
        )
    if not boxes:
        raise ValueError("There is no box in the puzzle!")

    frozen_walls = frozenset(walls)
    frozen_goals = frozenset(goals)
    board = Board(
        width=width,
        height=height,
        walls=frozen_walls,
        goals=frozen_goals,
        active_positions=tuple(active),
        dead_squares=frozenset(),
        boxes=boxes,
        player_position=player,
    )
    board.dead_squares = _simple_dead_squares(board)
    return board


def _active_positions(player: int, walls: frozenset[int],
                      width: int, height: int) -> list[int] | None:
    """Flood fill from the player ignoring boxes.

    Returns the sorted positions, or None if the player reaches the border
    of the grid (the board is not closed).
    """
    visited: set[int] = {player}
    queue: deque[int] = deque([player])
    while queue:
        pos = queue.popleft()
        r, c = divmod(pos, width)
        if r == 0 or r == height - 1 or c == 0 or c == width - 1:
            return None
        for d in DIRS:
            nb = (r + d.dr) * width + (c + d.dc)
            if nb not in walls and nb not in visited:
                visited.add(nb)
                queue.append(nb)
    return sorted(visited)


def _simple_dead_squares(board: Board) -> frozenset[int]:
    """Non-goal cells with a wall on both axes: a box there never moves again."""
    def wall_at(pos: int, d: Dir) -> bool:
        return board.is_wall(board.neighbor(pos, d))

    return frozenset(
        pos for pos in board.active_positions
        if not board.is_goal(pos)
        and (wall_at(pos, UP) or wall_at(pos, DOWN))
        and (wall_at(pos, LEFT) or wall_at(pos, RIGHT))
    )
