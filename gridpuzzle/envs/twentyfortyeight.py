"""2048 game session built on the merge engine."""

import logging

from numpy import ndarray
from numpy.random import Generator

from gridpuzzle.config import MergeConfig
from gridpuzzle.core.gameboard import has_any_move, new_board, next_state, validate_merge_board
from gridpuzzle.core.gamemove import ACTIONS
from gridpuzzle.core.generator import resolve_generator
from gridpuzzle.core.types import GameStatus
from gridpuzzle.scores import ScoreStore

_logger = logging.getLogger(__name__)


class TwentyFortyEight:
    """
    2048 game session.

    This class keeps the board, the cumulative score and the move count of one game, feeding each output of the
    merge engine back as its next input. When the game ends the final score is sent to the score store.
    """

    # ##: All Actions.
    ACTIONS = ACTIONS

    def __init__(self, size: int = 4, store: ScoreStore | None = None, config: MergeConfig | None = None):
        """
        Initialize the 2048 game board.

        Parameters
        ----------
        size : int, optional
            The size of the square grid (default is 4). Ignored when ``config`` is given.
        store : ScoreStore, optional
            Where the final score is recorded.
        config : MergeConfig, optional
            Full game configuration.
        """
        self.config = config or MergeConfig(size=size)
        self.size = self.config.size
        self._store = store
        self._rng: Generator = resolve_generator()

        self._current_state: ndarray | None = None
        self._current_reward = 0
        self.score = 0
        self.moves = 0
        self.status = GameStatus.ACTIVE

        self.reset()

    @property
    def is_finished(self) -> bool:
        """
        Check if the game is finished.

        Returns
        -------
        bool
            True if the game is finished (no more moves possible), False otherwise.
        """
        return self.status is GameStatus.TERMINAL

    @property
    def observation(self) -> ndarray:
        """
        Get a read-only snapshot of the game board.

        Returns
        -------
        ndarray
            The current state of the game board as a 2D numpy array.
        """
        snapshot = self._current_state.copy()
        snapshot.flags.writeable = False
        return snapshot

    @property
    def reward(self) -> int:
        """Points gained by the last step."""
        return self._current_reward

    def reset(self, seed: int | None = None) -> ndarray:
        """
        Initialize an empty board and add the starting tiles.

        Parameters
        ----------
        seed : int, optional
            Seed for this game. Every spawn of the game is drawn from it.

        Returns
        -------
        ndarray
            The new game board as a 2D numpy array.
        """
        if seed is not None:
            self._rng = resolve_generator(seed=seed)
        self._current_state = new_board(self.size, start_tiles=self.config.start_tiles, rng=self._rng)
        self._current_reward = 0
        self.score = 0
        self.moves = 0
        self.status = GameStatus.ACTIVE
        _logger.debug('New %dx%d game %s', self.size, self.size, self.config.game_id)
        self._check_terminal(record=False)
        return self.observation

    def load(self, board: ndarray, score: int = 0, moves: int = 0) -> ndarray:
        """
        Restore a game from a board snapshot.

        Parameters
        ----------
        board : ndarray
            A board previously produced by the engine.
        score : int, optional
            Cumulative score reached on this board.
        moves : int, optional
            Number of moves already played.

        Returns
        -------
        ndarray
            The restored board.

        Raises
        ------
        InvalidGridError
            If ``board`` is not a valid board of this game's size.
        """
        self._current_state = validate_merge_board(board, size=self.size).copy()
        self._current_reward = 0
        self.score = score
        self.moves = moves
        self.status = GameStatus.ACTIVE
        self._check_terminal(record=False)
        return self.observation

    def step(self, action: int | str) -> tuple[ndarray, int, bool]:
        """
        Apply the selected action to the board.

        Parameters
        ----------
        action : int or str
            The direction to move (0 or 'left', 1 or 'up', 2 or 'right', 3 or 'down').

        Returns
        -------
        tuple[ndarray, int, bool]
            The updated board, the points gained by this action and whether the game is over.

        Notes
        -----
        - A move that does not change the board gains nothing, spawns nothing and is not counted.
        - Once the game is over every action is ignored until ``reset``.
        """
        if self.is_finished:
            _logger.debug('Ignoring action %r on a finished game', action)
            self._current_reward = 0
            return self.observation, self.reward, True

        outcome = next_state(self._current_state, action, rng=self._rng)
        self._current_reward = outcome.score_delta
        if outcome.changed:
            self._current_state = outcome.grid
            self.score += outcome.score_delta
            self.moves += 1
            self._check_terminal()
        return self.observation, self.reward, self.is_finished

    def render(self) -> None:
        """
        Render the game board. This method prints the current state of the game board to the console.
        """
        for row in self._current_state.tolist():
            print(' \t'.join(map(str, row)))

    def _check_terminal(self, record: bool = True) -> None:
        if has_any_move(self._current_state):
            return
        self.status = GameStatus.TERMINAL
        _logger.info('Game %s over: score=%d moves=%d', self.config.game_id, self.score, self.moves)
        if record and self._store is not None:
            self._store.record_result(self.config.game_id, self.score)
