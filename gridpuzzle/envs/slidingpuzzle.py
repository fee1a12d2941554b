"""Sliding puzzle session built on the sliding engine."""

import logging

from numpy import ndarray
from numpy.random import Generator

from gridpuzzle.config import SlidingConfig
from gridpuzzle.core.generator import resolve_generator
from gridpuzzle.core.slidingboard import apply_move, is_solved, shuffle, solved_board, validate_sliding_board
from gridpuzzle.core.types import GameStatus
from gridpuzzle.scores import ScoreStore

_logger = logging.getLogger(__name__)


class SlidingPuzzle:
    """
    Sliding puzzle session.

    Keeps the board and the move count of one puzzle. When the puzzle is solved the move count is sent to the
    score store, where fewer moves is the better result.
    """

    def __init__(self, size: int = 3, store: ScoreStore | None = None, config: SlidingConfig | None = None):
        """
        Initialize the puzzle.

        Parameters
        ----------
        size : int, optional
            The size of the square grid, one of 3, 4 or 5 (default is 3). Ignored when ``config`` is given.
        store : ScoreStore, optional
            Where the move count of a solved puzzle is recorded.
        config : SlidingConfig, optional
            Full puzzle configuration.
        """
        self.config = config or SlidingConfig(size=size)
        self.size = self.config.size
        self._store = store
        self._rng: Generator = resolve_generator()

        self._current_state: ndarray | None = None
        self.moves = 0
        self.status = GameStatus.ACTIVE

        self.reset()

    @property
    def is_finished(self) -> bool:
        """True once the puzzle is solved."""
        return self.status is GameStatus.TERMINAL

    @property
    def observation(self) -> ndarray:
        """Read-only snapshot of the board."""
        snapshot = self._current_state.copy()
        snapshot.flags.writeable = False
        return snapshot

    def reset(self, seed: int | None = None) -> ndarray:
        """
        Shuffle a new puzzle.

        Parameters
        ----------
        seed : int, optional
            Seed for the shuffle.

        Returns
        -------
        ndarray
            The shuffled board.

        Notes
        -----
        A shuffle that lands on the solved arrangement is drawn again, so a new puzzle is never already over.
        """
        if seed is not None:
            self._rng = resolve_generator(seed=seed)

        board = shuffle(solved_board(self.size), rng=self._rng)
        while is_solved(board):
            board = shuffle(board, rng=self._rng)

        self._current_state = board
        self.moves = 0
        self.status = GameStatus.ACTIVE
        _logger.debug('New %dx%d puzzle %s', self.size, self.size, self.config.game_id)
        return self.observation

    def load(self, board: ndarray, moves: int = 0) -> ndarray:
        """
        Restore a puzzle from a board snapshot.

        Parameters
        ----------
        board : ndarray
            A board previously produced by the engine.
        moves : int, optional
            Number of moves already played.

        Returns
        -------
        ndarray
            The restored board.

        Raises
        ------
        InvalidGridError
            If ``board`` is not a valid board of this puzzle's size.
        """
        self._current_state = validate_sliding_board(board, sizes=(self.size,)).copy()
        self.moves = moves
        self.status = GameStatus.ACTIVE
        self._check_terminal(record=False)
        return self.observation

    def step(self, tile: int) -> tuple[ndarray, bool, bool]:
        """
        Slide a tile into the empty slot.

        Parameters
        ----------
        tile : int
            Label of the tile to move.

        Returns
        -------
        tuple[ndarray, bool, bool]
            The board, whether the tile moved, and whether the puzzle is solved.
        """
        if self.is_finished:
            _logger.debug('Ignoring tile %r on a solved puzzle', tile)
            return self.observation, False, True

        outcome = apply_move(self._current_state, tile)
        if outcome.changed:
            self._current_state = outcome.grid
            self.moves += 1
            self._check_terminal()
        return self.observation, outcome.changed, self.is_finished

    def render(self) -> None:
        """
        Render the puzzle. This method prints the board to the console, leaving the empty slot blank.
        """
        for row in self._current_state.tolist():
            print(' \t'.join(str(value) if value else '' for value in row))

    def _check_terminal(self, record: bool = True) -> None:
        if not is_solved(self._current_state):
            return
        self.status = GameStatus.TERMINAL
        _logger.info('Puzzle %s solved in %d moves', self.config.game_id, self.moves)
        if record and self._store is not None:
            self._store.record_result(self.config.game_id, self.moves)
