# -*- coding: utf-8 -*-
"""
Game sessions for the grid puzzles.

This module provides the `TwentyFortyEight` and `SlidingPuzzle` classes, which keep the state of one game and
drive the corresponding engine.
"""

from .slidingpuzzle import SlidingPuzzle
from .twentyfortyeight import TwentyFortyEight

__all__ = ["TwentyFortyEight", "SlidingPuzzle"]
