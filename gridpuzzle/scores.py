"""
Score store interface used by the game sessions, with an in-memory implementation.

Sessions only call ``record_result`` once per finished game and never interpret the score; whether a
higher or a lower score is better is decided by the store.
"""

import time
from collections import deque
from dataclasses import dataclass, field
from typing import Iterable, Protocol

# ##>: How many scores and games are remembered.
RECENT_SCORES = 5
RECENT_GAMES = 10


class ScoreStore(Protocol):
    """Anything that can keep the results of finished games."""

    def record_result(self, game_id: str, score: int) -> None:
        ...

    def best_score(self, game_id: str) -> int:
        ...


@dataclass
class GameRecord:
    """Results kept for one game."""

    played: int = 0
    best: int | None = None
    recent: deque = field(default_factory=lambda: deque(maxlen=RECENT_SCORES))


class MemoryScoreStore:
    """
    Keep game results in memory.

    Parameters
    ----------
    lower_is_better : iterable of str, optional
        Game identifiers whose best score is the lowest one (e.g. a move count).
    """

    def __init__(self, lower_is_better: Iterable[str] = ()):
        self._lower_is_better = frozenset(lower_is_better)
        self._records: dict[str, GameRecord] = {}
        self._recent_games: deque[str] = deque(maxlen=RECENT_GAMES)

    def record_result(self, game_id: str, score: int) -> None:
        """
        Record the final score of a game.

        Parameters
        ----------
        game_id : str
            Identifier of the game.
        score : int
            Final score (or move count).
        """
        record = self._records.setdefault(game_id, GameRecord())
        record.played += 1
        record.recent.append((score, time.time()))
        if record.best is None or self._is_better(game_id, score, record.best):
            record.best = score

        # ##: Most recent game first, each game once.
        if game_id in self._recent_games:
            self._recent_games.remove(game_id)
        self._recent_games.appendleft(game_id)

    def best_score(self, game_id: str) -> int:
        """Best score recorded for a game, 0 if it was never played."""
        record = self._records.get(game_id)
        if record is None or record.best is None:
            return 0
        return record.best

    def played(self, game_id: str) -> int:
        """Number of finished games recorded."""
        record = self._records.get(game_id)
        return record.played if record else 0

    def recent_results(self, game_id: str) -> list[tuple[int, float]]:
        """
        Last results recorded for a game, oldest first.

        Parameters
        ----------
        game_id : str
            Identifier of the game.

        Returns
        -------
        list of tuple
            Pairs of score and time of recording, in seconds since the epoch.
        """
        record = self._records.get(game_id)
        return list(record.recent) if record else []

    def recent_scores(self, game_id: str) -> list[int]:
        """Last scores recorded for a game, oldest first."""
        return [score for score, _ in self.recent_results(game_id)]

    @property
    def recent_games(self) -> list[str]:
        """Identifiers of the last games played, most recent first."""
        return list(self._recent_games)

    def reset(self) -> None:
        """Forget every recorded result."""
        self._records.clear()
        self._recent_games.clear()

    def _is_better(self, game_id: str, score: int, best: int) -> bool:
        if game_id in self._lower_is_better:
            return score < best
        return score > best
