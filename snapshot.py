"""
Snapshots and solutions of a puzzle.

A snapshot is a LURD string (lowercase = move, uppercase = push) plus the
metrics of the moves it contains.  The moves the player actually played
and the moves that were undone are separated by a "*":

    uuur*rr   ->   played: uuur, undone: rr

A solution is a snapshot known to leave the board solved.  Both compare
equal by their LURD string only.
"""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field, replace
from datetime import datetime

from board import SNAPSHOT_MARKER


@dataclass
class Metrics:
    move_count: int = 0
    push_count: int = 0
    box_line_count: int = 0
    box_change_count: int = 0
    pushing_session_count: int = 0
    player_line_count: int = 0

    def copy(self) -> Metrics:
        return replace(self)


_ids = itertools.count()


@dataclass(eq=False)
class Snapshot:
    lurd: str
    metrics: Metrics = field(default_factory=Metrics)
    name: str = ""
    notes: str = ""
    unique_id: int = field(default_factory=lambda: next(_ids), init=False)
    created_date: datetime = field(default_factory=datetime.now, init=False)

    is_solution = False

    def __post_init__(self) -> None:
        self.metrics = self.metrics.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Snapshot):
            return NotImplemented
        return self.lurd == other.lurd

    def __hash__(self) -> int:
        return hash(self.lurd)

    def __str__(self) -> str:
        return self.lurd

    @property
    def played_lurd(self) -> str:
        played, marker, _ = self.lurd.rpartition(SNAPSHOT_MARKER)
        return played.replace(SNAPSHOT_MARKER, "") if marker else self.lurd

    @property
    def undone_lurd(self) -> str:
        return self.lurd.rpartition(SNAPSHOT_MARKER)[2] if SNAPSHOT_MARKER in self.lurd else ""

    # -- metrics -------------------------------------------------------------

    @property
    def move_count(self) -> int:
        return self.metrics.move_count

    @property
    def push_count(self) -> int:
        return self.metrics.push_count

    @property
    def box_line_count(self) -> int:
        return self.metrics.box_line_count

    @property
    def box_change_count(self) -> int:
        return self.metrics.box_change_count

    @property
    def pushing_session_count(self) -> int:
        return self.metrics.pushing_session_count

    @property
    def player_line_count(self) -> int:
        return self.metrics.player_line_count

    # -- quality orders (lower is better, older wins ties) -------------------

    def push_quality_key(self) -> tuple:
        """Sort key "best by pushes": ``sorted(solutions, key=Snapshot.push_quality_key)``."""
        m = self.metrics
        return (m.push_count, m.move_count, m.box_line_count, m.box_change_count,
                m.pushing_session_count, m.player_line_count, self.created_date)

    def move_quality_key(self) -> tuple:
        """Sort key "best by moves"."""
        m = self.metrics
        return (m.move_count, m.push_count, m.box_line_count, m.box_change_count,
                m.pushing_session_count, m.player_line_count, self.created_date)


@dataclass(eq=False)
class Solution(Snapshot):
    """A snapshot whose moves solve the puzzle."""

    is_solution = True
