# -*- coding: utf-8 -*-
"""
Grid puzzle engines: a 2048-style merge game and a sliding tile puzzle.
"""

from .envs import SlidingPuzzle, TwentyFortyEight
from .scores import MemoryScoreStore, ScoreStore

__all__ = ["TwentyFortyEight", "SlidingPuzzle", "MemoryScoreStore", "ScoreStore"]
