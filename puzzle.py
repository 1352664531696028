"""A puzzle: its board plus the snapshots and solutions found for it."""

from __future__ import annotations

import logging

from board import Board
from lurd_verifier import LURDVerifier
from snapshot import Snapshot, Solution

logger = logging.getLogger(__name__)


class Puzzle:
    """Holds at most one snapshot and one solution per LURD string."""

    def __init__(self, board: Board, title: str = "", author: str = "") -> None:
        self.board = board
        self.title = title
        self.author = author
        self.notes = ""
        self.snapshots: dict[str, Snapshot] = {}
        self.solutions: dict[str, Solution] = {}

    @property
    def has_solutions(self) -> bool:
        return bool(self.solutions)

    @property
    def has_snapshots(self) -> bool:
        return bool(self.snapshots)

    def add_solution(self, solution: Solution) -> bool:
        """Add ``solution``; False if one with the same LURD already exists."""
        if solution.lurd in self.solutions:
            return False
        self.solutions[solution.lurd] = solution
        return True

    def add_snapshot(self, snapshot: Snapshot) -> bool:
        """Add ``snapshot``; False if one with the same LURD already exists."""
        if snapshot.lurd in self.snapshots:
            return False
        self.snapshots[snapshot.lurd] = snapshot
        return True

    def import_lurd(self, lurd: str) -> Snapshot | None:
        """Verify ``lurd`` and store it as a snapshot or solution.

        Returns the stored object (the existing one for a duplicate), or
        None if ``lurd`` is not valid for this puzzle.
        """
        result = LURDVerifier(self.board).verify_lurd(lurd.strip())
        if result is None:
            return None

        if result.is_solution:
            added = self.add_solution(result)
            stored = self.solutions[result.lurd]
        else:
            added = self.add_snapshot(result)
            stored = self.snapshots[result.lurd]

        if not added:
            logger.info(f"Duplicate {'solution' if result.is_solution else 'snapshot'} "
                        f"ignored for '{self.title}'")
        return stored

    def best_solution_by_pushes(self) -> Solution | None:
        return min(self.solutions.values(), key=Solution.push_quality_key, default=None)

    def best_solution_by_moves(self) -> Solution | None:
        return min(self.solutions.values(), key=Solution.move_quality_key, default=None)
