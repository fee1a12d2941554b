"""
Core functionality of the sliding puzzle (15-puzzle rules) on square boards.

The empty slot is stored as ``0`` and the tiles are labelled ``1`` to ``size ** 2 - 1``. Moves only permute
positions, never labels, and every function returns a new board.
"""

from numbers import Integral

from numpy import arange, argwhere, array_equal, asarray, flatnonzero, int64, ndarray, sort, triu
from numpy.random import Generator

from gridpuzzle.config import SLIDING_SIZES
from gridpuzzle.core.errors import InvalidGridError, InvalidMoveError
from gridpuzzle.core.generator import resolve_generator
from gridpuzzle.core.types import MoveOutcome

# ##>: Orthogonal neighbour offsets as (row, col).
_NEIGHBOURS = ((-1, 0), (1, 0), (0, -1), (0, 1))


def solved_board(size: int) -> ndarray:
    """
    Build the solved arrangement: labels in row-major order, empty slot bottom-right.

    Parameters
    ----------
    size : int
        The size of the square grid.

    Returns
    -------
    ndarray
        The solved board.
    """
    flat = arange(1, size * size + 1, dtype=int64)
    flat[-1] = 0
    return flat.reshape(size, size)


def validate_sliding_board(state: ndarray, sizes: tuple[int, ...] = SLIDING_SIZES) -> ndarray:
    """
    Check that a board holds exactly one empty slot and every label once.

    Parameters
    ----------
    state : ndarray
        The board to check. Nested sequences are accepted.
    sizes : tuple of int, optional
        Allowed board dimensions.

    Returns
    -------
    ndarray
        The board as an ``int64`` array.

    Raises
    ------
    InvalidGridError
        If the board does not hold integers, is not square, its size is not allowed, or its values are not
        a permutation of ``0 .. size ** 2 - 1``.
    """
    if asarray(state).dtype.kind not in 'iu':
        raise InvalidGridError('Board must hold integer labels')
    board = asarray(state, dtype=int64)
    if board.ndim != 2 or board.shape[0] != board.shape[1]:
        raise InvalidGridError(f'Board must be a square matrix, got shape {board.shape}')
    size = board.shape[0]
    if size not in sizes:
        raise InvalidGridError(f'Board size must be one of {sizes}, got {size}')
    if not array_equal(sort(board.ravel()), arange(size * size)):
        raise InvalidGridError('Board labels must be a permutation of 0 .. size ** 2 - 1')
    return board


def empty_position(state: ndarray) -> tuple[int, int]:
    """Return the (row, col) of the empty slot."""
    row, col = argwhere(asarray(state) == 0)[0]
    return int(row), int(col)


def count_inversions(state: ndarray) -> int:
    """
    Count pairs of tiles that appear out of ascending order when reading the board row by row.

    Parameters
    ----------
    state : ndarray
        The board.

    Returns
    -------
    int
        Number of pairs ``(a, b)`` where ``a`` is read before ``b`` and ``a > b``. The empty slot is ignored.
    """
    values = asarray(state).ravel()
    values = values[values != 0]
    return int(triu(values[:, None] > values[None, :], k=1).sum())


def is_solvable(state: ndarray) -> bool:
    """
    Check whether the solved arrangement can be reached from this board.

    Parameters
    ----------
    state : ndarray
        The board.

    Returns
    -------
    bool
        True if the board is solvable.

    Notes
    -----
    - Odd size: solvable iff the number of inversions is even.
    - Even size: solvable iff inversions plus the empty slot's row counted from the bottom (1 for the
      bottom row) is odd.
    """
    state = asarray(state)
    size = state.shape[0]
    inversions = count_inversions(state)
    if size % 2 == 1:
        return inversions % 2 == 0

    row, _ = empty_position(state)
    return (inversions + size - row) % 2 == 1


def shuffle(state: ndarray, rng: Generator | None = None, seed: int | None = None) -> ndarray:
    """
    Shuffle every cell of the board, then make the result solvable.

    Parameters
    ----------
    state : ndarray
        The board to shuffle. It is not modified.
    rng : Generator, optional
        Random source to draw from.
    seed : int, optional
        Random number generator seed for reproducibility, used when ``rng`` is not given.

    Returns
    -------
    ndarray
        A uniformly shuffled, solvable board.

    Notes
    -----
    - The empty slot is shuffled with the tiles, so its position is random too.
    - An unsolvable permutation is fixed by swapping the labels of the first two tiles in row-major
      order, which flips the inversion parity while leaving the empty slot in place.
    """
    board = asarray(state, dtype=int64)
    generator = resolve_generator(rng, seed)

    flat = generator.permutation(board.ravel())
    shuffled = flat.reshape(board.shape)
    if not is_solvable(shuffled):
        first, second = flatnonzero(flat)[:2]
        flat[first], flat[second] = flat[second], flat[first]
    return shuffled


def movable_tiles(state: ndarray) -> list[int]:
    """
    List the labels of the tiles that can slide into the empty slot.

    Parameters
    ----------
    state : ndarray
        The board.

    Returns
    -------
    list[int]
        Labels of the tiles orthogonally adjacent to the empty slot.
    """
    state = asarray(state)
    size = state.shape[0]
    empty_row, empty_col = empty_position(state)

    tiles = []
    for d_row, d_col in _NEIGHBOURS:
        row, col = empty_row + d_row, empty_col + d_col
        if 0 <= row < size and 0 <= col < size:
            tiles.append(int(state[row, col]))
    return tiles


def apply_move(state: ndarray, tile: int) -> MoveOutcome:
    """
    Slide a tile into the empty slot.

    Parameters
    ----------
    state : ndarray
        The current board.
    tile : int
        Label of the tile to move.

    Returns
    -------
    MoveOutcome
        The new board and whether the tile moved. ``score_delta`` is always zero.

    Raises
    ------
    InvalidGridError
        If ``state`` is not a valid sliding board.
    InvalidMoveError
        If ``tile`` is not the label of a tile on this board.

    Notes
    -----
    A tile that is not orthogonally adjacent to the empty slot (diagonal, or further away) does not move:
    the returned board equals ``state`` and ``changed`` is False.
    """
    board = validate_sliding_board(state)
    size = board.shape[0]
    if isinstance(tile, bool) or not isinstance(tile, Integral) or not 1 <= tile <= size * size - 1:
        raise InvalidMoveError(f'Unknown tile: {tile!r}')

    tile_row, tile_col = (int(index) for index in argwhere(board == tile)[0])
    empty_row, empty_col = empty_position(board)

    new_state = board.copy()
    if abs(tile_row - empty_row) + abs(tile_col - empty_col) != 1:
        return MoveOutcome(grid=new_state, changed=False)

    new_state[empty_row, empty_col] = tile
    new_state[tile_row, tile_col] = 0
    return MoveOutcome(grid=new_state, changed=True)


def is_solved(state: ndarray) -> bool:
    """True if the board reads ``1, 2, ..., size ** 2 - 1, 0`` row by row."""
    state = asarray(state)
    return array_equal(state, solved_board(state.shape[0]))
