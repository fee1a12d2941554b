# -*- coding: utf-8 -*-
"""
Game specific configuration.
"""
from dataclasses import dataclass

# ##>: Tile spawn probabilities for the merge game (90% for 2, 10% for 4).
TILE_SPAWN_PROBS: dict[int, float] = {2: 0.9, 4: 0.1}

# ##>: Board sizes offered by the sliding puzzle.
SLIDING_SIZES: tuple[int, ...] = (3, 4, 5)

# ##>: Identifiers under which results are recorded in the score store.
MERGE_GAME_ID = '2048'
SLIDING_GAME_ID = 'sliding-puzzle'


@dataclass
class MergeConfig:
    """Data needed to start a merge game."""

    size: int = 4
    start_tiles: int = 2
    game_id: str = MERGE_GAME_ID

    def __post_init__(self):
        if self.size < 2:
            raise ValueError(f'size must be at least 2, got {self.size}')
        if not 0 < self.start_tiles < self.size * self.size:
            raise ValueError(f'start_tiles must be below {self.size * self.size} and positive, got {self.start_tiles}')


@dataclass
class SlidingConfig:
    """Data needed to start a sliding puzzle."""

    size: int = 3
    game_id: str = SLIDING_GAME_ID

    def __post_init__(self):
        if self.size not in SLIDING_SIZES:
            raise ValueError(f'size must be one of {SLIDING_SIZES}, got {self.size}')
