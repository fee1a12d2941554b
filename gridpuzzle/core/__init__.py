# -*- coding: utf-8 -*-
"""
This module provides the two grid puzzle engines.

The merge engine applies directional moves, merges equal tiles, spawns new tiles and detects the end of the
game. The sliding engine shuffles boards into solvable arrangements, moves single tiles into the empty slot
and detects the solved arrangement. Both are pure functions over square integer boards.
"""

from . import gameboard, slidingboard
from .errors import InvalidGridError, InvalidMoveError
from .gameboard import (
    has_any_move,
    legal_actions,
    legal_actions_mask,
    merge_line,
    new_board,
    next_state,
    slide_and_merge,
    spawn_random_tile,
    validate_merge_board,
)
from .gamemove import ACTIONS, as_action
from .slidingboard import (
    count_inversions,
    empty_position,
    is_solvable,
    is_solved,
    movable_tiles,
    shuffle,
    solved_board,
    validate_sliding_board,
)
from .types import GameStatus, MoveOutcome

__all__ = [
    "gameboard",
    "slidingboard",
    "InvalidGridError",
    "InvalidMoveError",
    "MoveOutcome",
    "GameStatus",
    "ACTIONS",
    "as_action",
    "legal_actions",
    "legal_actions_mask",
    "merge_line",
    "slide_and_merge",
    "spawn_random_tile",
    "new_board",
    "next_state",
    "has_any_move",
    "validate_merge_board",
    "solved_board",
    "count_inversions",
    "empty_position",
    "is_solvable",
    "shuffle",
    "movable_tiles",
    "is_solved",
    "validate_sliding_board",
]
