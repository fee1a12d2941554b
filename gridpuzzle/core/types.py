# -*- coding: utf-8 -*-
"""
Set of types shared by both engines.
"""
from enum import Enum
from typing import NamedTuple

from numpy import ndarray


class MoveOutcome(NamedTuple):
    """
    Result of applying one player input to a grid.

    Attributes
    ----------
    grid : ndarray
        A freshly built grid; the input grid is never modified.
    changed : bool
        Whether any cell differs from the input grid.
    score_delta : int
        Points gained by the move. Always zero for the sliding puzzle.
    """

    grid: ndarray
    changed: bool
    score_delta: int = 0


class GameStatus(Enum):
    """Lifecycle of a game session."""

    ACTIVE = 'active'
    TERMINAL = 'terminal'
