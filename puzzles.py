"""
Built-in Sokoban boards.

Small boards for trying out box paths and move strings.

Standard format:
  # = wall, ' ' = floor, . = goal, $ = box, @ = player,
  * = box on goal, + = player on goal
"""

PUZZLES: dict[str, str] = {}

# ------------------------------------------------------------------
# Single box
# ------------------------------------------------------------------

PUZZLES["Corridor"] = """\
#####
#@$.#
#####"""

PUZZLES["One Box"] = """\
####
#. #
#$ #
#@ #
####"""

# The cheapest path in moves takes three pushes, the cheapest in
# pushes takes one push after a long walk.
PUZZLES["Two Routes"] = """\
##########
#        #
# ##  ## #
#  @$    #
####.  ###
##########"""

# ------------------------------------------------------------------
# Other boxes in the way
# ------------------------------------------------------------------

# The left box must go around the box on goal.
PUZZLES["Detour"] = """\
#########
#   #   #
#@$  * .#
#   #   #
#   #   #
#       #
#       #
#########"""

PUZZLES["Blocked"] = """\
#######
#@$ *.#
#######"""

PUZZLES["Two Box Across"] = """\
######
# .  #
#  $ #
# $  #
#  . #
# @  #
######"""


def get_puzzle_names() -> list[str]:
    """Return all puzzle names in order."""
    return list(PUZZLES.keys())


def get_puzzle(name: str) -> str:
    """Return the level text for a named puzzle."""
    return PUZZLES[name]
