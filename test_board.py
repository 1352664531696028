"""Tests for the board model and XSB parsing."""

import unittest

from board import (
    DOWN,
    LEFT,
    NONE,
    NOT_REACHABLE,
    REACHABLE_BOX,
    REACHABLE_PLAYER,
    RIGHT,
    UP,
    direction_from_lurd_char,
    move_char,
    parse_board,
    push_char,
)
from puzzles import PUZZLES, get_puzzle, get_puzzle_names

CORRIDOR = """\
#####
#@$.#
#####"""


class TestParsing(unittest.TestCase):
    """Test board parsing."""

    def test_corridor(self):
        board = parse_board(CORRIDOR)
        self.assertEqual(board.width, 5)
        self.assertEqual(board.height, 3)
        self.assertEqual(board.player_position, board.position(1, 1))
        self.assertEqual(board.boxes, {board.position(1, 2)})
        self.assertEqual(board.goals, frozenset({board.position(1, 3)}))
        self.assertEqual(board.active_positions, (6, 7, 8))

    def test_box_on_goal_and_player_on_goal(self):
        board = parse_board("""\
######
# *+ #
# $  #
######""")
        self.assertTrue(board.is_box_on_goal(board.position(1, 2)))
        self.assertTrue(board.is_goal(board.position(1, 3)))
        self.assertEqual(board.player_position, board.position(1, 3))
        self.assertEqual(board.box_count, 2)
        self.assertEqual(board.goal_count, 2)

    def test_short_rows_are_padded(self):
        board = parse_board("""\
#####
#@$.#
####""")
        self.assertEqual(board.width, 5)
        self.assertEqual(board.to_string().split("\n")[2], "####-")

    def test_title_lines_are_ignored(self):
        board = parse_board("Title: Corridor\n\n" + CORRIDOR + "\nAuthor: me\n")
        self.assertEqual(board.height, 3)
        self.assertEqual(board.to_string(), CORRIDOR)

    def test_no_player_raises(self):
        with self.assertRaises(ValueError):
            parse_board("""\
####
#.$#
####""")

    def test_open_board_raises(self):
        with self.assertRaises(ValueError):
            parse_board("""\
#####
 @$.#
#####""")

    def test_box_goal_mismatch_raises(self):
        with self.assertRaises(ValueError):
            parse_board("""\
#####
#.$.#
# @ #
#####""")

    def test_no_box_raises(self):
        with self.assertRaises(ValueError):
            parse_board("""\
####
#@ #
####""")

    def test_too_small_raises(self):
        with self.assertRaises(ValueError):
            parse_board("#@$.#")

    def test_all_puzzles_parse(self):
        """Every built-in board should parse and render back unchanged."""
        for name in get_puzzle_names():
            with self.subTest(puzzle=name):
                board = parse_board(PUZZLES[name])
                self.assertEqual(board.box_count, board.goal_count)
                self.assertEqual(parse_board(board.to_string()).to_string(),
                                 board.to_string())

    def test_get_puzzle(self):
        self.assertEqual(get_puzzle("Corridor"), CORRIDOR)
        with self.assertRaises(KeyError):
            get_puzzle("No Such Puzzle")


class TestDeadSquares(unittest.TestCase):

    def test_corners_are_dead(self):
        board = parse_board("""\
#####
#  .#
# $ #
#@  #
#####""")
        self.assertTrue(board.is_dead_square(board.position(1, 1)))
        self.assertTrue(board.is_dead_square(board.position(3, 1)))
        self.assertTrue(board.is_dead_square(board.position(3, 3)))
        # goal corner is never dead
        self.assertFalse(board.is_dead_square(board.position(1, 3)))
        self.assertFalse(board.is_dead_square(board.position(2, 2)))

    def test_dead_square_not_accessible_for_box(self):
        board = parse_board(CORRIDOR)
        self.assertTrue(board.is_accessible(board.position(1, 1)))
        self.assertFalse(board.is_accessible_box(board.position(1, 1)))
        self.assertTrue(board.is_accessible_box(board.position(1, 3)))
        self.assertFalse(board.is_accessible_box(board.position(1, 2)))   # box


class TestQueriesAndMutation(unittest.TestCase):

    def setUp(self):
        self.board = parse_board(CORRIDOR)

    def test_neighbor(self):
        b = self.board
        self.assertEqual(b.neighbor(7, LEFT), 6)
        self.assertEqual(b.neighbor(7, RIGHT), 8)
        self.assertEqual(b.neighbor(7, UP), 2)
        self.assertEqual(b.neighbor(7, DOWN), 12)
        self.assertEqual(b.neighbor(0, UP), NONE)
        self.assertEqual(b.neighbor(4, RIGHT), NONE)
        self.assertEqual(b.neighbor(5, LEFT), NONE)
        self.assertEqual(b.neighbor(NONE, DOWN), NONE)

    def test_direction_of_move(self):
        self.assertEqual(self.board.direction_of_move(6, 7), RIGHT)
        self.assertEqual(self.board.direction_of_move(7, 2), UP)
        with self.assertRaises(ValueError):
            self.board.direction_of_move(6, 8)
        with self.assertRaises(ValueError):
            self.board.direction_of_move(4, 5)   # wraps around a row

    def test_push_box(self):
        b = self.board
        self.assertTrue(b.push_box(7, 8))
        self.assertEqual(b.boxes, {8})
        self.assertTrue(b.is_solved())
        self.assertEqual(b.box_on_goal_count, 1)

    def test_push_box_into_wall_fails(self):
        b = self.board
        self.assertFalse(b.push_box(7, 2))
        self.assertFalse(b.push_box(6, 7))     # no box at 6
        self.assertFalse(b.push_box(7, 7))
        self.assertEqual(b.boxes, {7})

    def test_clone_is_independent(self):
        clone = self.board.clone()
        clone.push_box(7, 8)
        clone.player_position = 7
        self.assertEqual(self.board.boxes, {7})
        self.assertEqual(self.board.player_position, 6)
        self.assertIs(clone.walls, self.board.walls)

    def test_to_string(self):
        self.assertEqual(self.board.to_string(), CORRIDOR)
        self.board.push_box(7, 8)
        self.board.player_position = 7
        self.assertEqual(self.board.to_string(), "#####\n# @*#\n#####")

    def test_reachable_markers(self):
        b = self.board
        self.assertFalse(b.has_reachable_markers())
        b.mark_player_reachable([6])
        b.mark_box_reachable([8])
        self.assertEqual(b.reachable_marker[6], REACHABLE_PLAYER)
        self.assertEqual(b.reachable_marker[8], REACHABLE_BOX)
        self.assertTrue(b.has_reachable_markers())
        b.remove_all_reachable_markers()
        self.assertTrue(all(m == NOT_REACHABLE for m in b.reachable_marker))


class TestLurdChars(unittest.TestCase):

    def test_direction_from_char(self):
        self.assertEqual(direction_from_lurd_char("l"), LEFT)
        self.assertEqual(direction_from_lurd_char("U"), UP)
        with self.assertRaises(ValueError):
            direction_from_lurd_char("x")

    def test_move_and_push_chars(self):
        self.assertEqual(move_char(DOWN), "d")
        self.assertEqual(push_char(DOWN), "D")


if __name__ == "__main__":
    unittest.main(verbosity=2)
