"""
Core functionality of the merge game (2048 rules), including board manipulation and game logic.

Every function returns a new board and leaves its input untouched.
"""

from numpy import all as np_all
from numpy import any as np_any
from numpy import argwhere, array, array_equal, asarray, int64, ndarray, rot90, zeros, zeros_like
from numpy.random import Generator

from gridpuzzle.config import TILE_SPAWN_PROBS
from gridpuzzle.core.errors import InvalidGridError
from gridpuzzle.core.gamemove import as_action
from gridpuzzle.core.generator import resolve_generator
from gridpuzzle.core.types import MoveOutcome

# ##>: Pre-computed tile values and probabilities for fast sampling.
_TILE_VALUES = list(TILE_SPAWN_PROBS)
_TILE_PROBS = list(TILE_SPAWN_PROBS.values())


def validate_merge_board(state: ndarray, size: int | None = None) -> ndarray:
    """
    Check that a board obeys the merge game invariants.

    Parameters
    ----------
    state : ndarray
        The board to check. Nested sequences are accepted.
    size : int, optional
        Expected dimension of the board.

    Returns
    -------
    ndarray
        The board as an ``int64`` array.

    Raises
    ------
    InvalidGridError
        If the board does not hold integers, is not square, has the wrong size, or holds a value that is
        neither zero nor a power of two.
    """
    if asarray(state).dtype.kind not in 'iu':
        raise InvalidGridError('Board must hold integer values')
    board = asarray(state, dtype=int64)
    if board.ndim != 2 or board.shape[0] != board.shape[1] or board.shape[0] == 0:
        raise InvalidGridError(f'Board must be a non-empty square matrix, got shape {board.shape}')
    if size is not None and board.shape[0] != size:
        raise InvalidGridError(f'Board must be {size}x{size}, got {board.shape[0]}x{board.shape[1]}')
    if np_any(board < 0):
        raise InvalidGridError('Board holds negative values')

    # ##: A power of two shares no bit with its predecessor.
    tiles = board[board != 0]
    if np_any(tiles < 2) or np_any(tiles & (tiles - 1)):
        raise InvalidGridError('Board holds values that are not powers of two')
    return board


def merge_line(line: ndarray) -> tuple[int, ndarray]:
    """
    Merge adjacent equal values in a line and compute the total score.

    Parameters
    ----------
    line : ndarray
        A 1D array representing one row of the game board, oriented so that tiles move towards index 0.

    Returns
    -------
    score : int
        The total score obtained from merging.
    merged_line : ndarray
        The non-empty values after merging, without padding.

    Notes
    -----
    - Zeros (empty cells) are removed before merging.
    - Merging scans from index 0 onwards, so ``[2, 2, 2]`` gives ``[4, 2]``.
    - A merged value is never merged again in the same call.
    """
    # ##: Handle empty lines.
    non_zero = line[line != 0]
    if len(non_zero) <= 1:
        return 0, non_zero

    # ##: Initialize the score.
    result = []
    score = 0

    # ##: Iterate over the line and merge values.
    i = 0
    while i < len(non_zero) - 1:
        if non_zero[i] == non_zero[i + 1]:
            merged = non_zero[i] * 2
            result.append(merged)
            score += int(merged)
            i += 2
        else:
            result.append(non_zero[i])
            i += 1

    if i == len(non_zero) - 1:
        result.append(non_zero[-1])

    return score, array(result, dtype=line.dtype)


def slide_and_merge(board: ndarray) -> tuple[int, ndarray]:
    """
    Slide the game board to the left, merge adjacent cells, and compute the score.

    Parameters
    ----------
    board : ndarray
        The game board represented as a 2D NumPy array.

    Returns
    -------
    score : int
        The total score obtained from all merges.
    updated_board : ndarray
        The updated game board after sliding and merging.

    Notes
    -----
    For other directions, rotate the board before calling this function.
    """
    result = zeros_like(board)
    score = 0

    for i, row in enumerate(board):
        score_row, merged_row = merge_line(row)
        score += score_row
        result[i, : len(merged_row)] = merged_row

    return score, result


def apply_move(state: ndarray, direction: int | str) -> MoveOutcome:
    """
    Slide and merge every line of the board towards one edge, without adding a new tile.

    Parameters
    ----------
    state : ndarray
        The current state of the game board.
    direction : int or str
        The direction to move (0 or 'left', 1 or 'up', 2 or 'right', 3 or 'down').

    Returns
    -------
    MoveOutcome
        The new board, whether it differs from ``state``, and the points gained.

    Raises
    ------
    InvalidGridError
        If ``state`` is not a valid merge board.
    InvalidMoveError
        If ``direction`` is unknown.
    """
    board = validate_merge_board(state)
    action = as_action(direction)

    # ##: Bring the target edge to the left, move, and turn back.
    score, updated_board = slide_and_merge(rot90(board, k=action))
    new_state = rot90(updated_board, k=-action).copy()
    return MoveOutcome(grid=new_state, changed=not array_equal(new_state, board), score_delta=score)


def legal_actions_mask(state: ndarray) -> tuple[bool, bool, bool, bool]:
    """
    Tell for each direction whether moving that way would change the board.

    Parameters
    ----------
    state : ndarray
        The current state of the game board.

    Returns
    -------
    tuple of bool
        One flag per action index (left, up, right, down).
    """
    return tuple(apply_move(state, action).changed for action in range(4))


def legal_actions(state: ndarray) -> list[int]:
    """List the action indexes that would change the board."""
    return [action for action, legal in enumerate(legal_actions_mask(state)) if legal]


def spawn_random_tile(
    state: ndarray, rng: Generator | None = None, seed: int | None = None
) -> tuple[ndarray, bool]:
    """
    Place a new tile (2 or 4) on one empty cell chosen uniformly at random.

    Parameters
    ----------
    state : ndarray
        The current state of the game board. It is not modified.
    rng : Generator, optional
        Random source to draw from.
    seed : int, optional
        Random number generator seed for reproducibility, used when ``rng`` is not given.

    Returns
    -------
    new_state : ndarray
        A copy of the board with the new tile.
    spawned : bool
        False when the board had no empty cell; the copy is then identical to ``state``.

    Notes
    -----
    New tiles have a 90% chance of being 2 and a 10% chance of being 4.
    """
    new_state = array(state, dtype=int64)
    available_cells = argwhere(new_state == 0)
    if len(available_cells) == 0:
        return new_state, False

    generator = resolve_generator(rng, seed)
    cell = available_cells[generator.integers(len(available_cells))]
    new_state[tuple(cell)] = generator.choice(_TILE_VALUES, p=_TILE_PROBS)
    return new_state, True


def new_board(size: int = 4, start_tiles: int = 2, rng: Generator | None = None, seed: int | None = None) -> ndarray:
    """
    Create an empty board seeded with ``start_tiles`` random tiles.

    Parameters
    ----------
    size : int, optional
        The size of the square grid (default is 4).
    start_tiles : int, optional
        Number of tiles spawned on the empty board (default is 2).
    rng : Generator, optional
        Random source to draw from.
    seed : int, optional
        Random number generator seed for reproducibility, used when ``rng`` is not given.

    Returns
    -------
    ndarray
        The new game board.
    """
    generator = resolve_generator(rng, seed)
    state = zeros((size, size), dtype=int64)
    for _ in range(start_tiles):
        state, _ = spawn_random_tile(state, rng=generator)
    return state


def next_state(
    state: ndarray, direction: int | str, rng: Generator | None = None, seed: int | None = None
) -> MoveOutcome:
    """
    Play one turn: apply a move, then add a new tile if the move changed the board.

    Parameters
    ----------
    state : ndarray
        The current state of the game board.
    direction : int or str
        The direction to move (0: left, 1: up, 2: right, 3: down).
    rng : Generator, optional
        Random source for the new tile.
    seed : int, optional
        Random number generator seed for reproducibility, used when ``rng`` is not given.

    Returns
    -------
    MoveOutcome
        The board after the move and the spawn, whether the move changed the board, and the points gained.

    Notes
    -----
    A blocked move gains nothing and spawns no tile, so it does not count as a played turn.
    """
    outcome = apply_move(state, direction)
    if not outcome.changed:
        return outcome

    # ##: Fill randomly one cell.
    new_state, _ = spawn_random_tile(outcome.grid, rng=rng, seed=seed)
    return outcome._replace(grid=new_state)


def has_any_move(state: ndarray) -> bool:
    """
    Check if at least one move can still change the board.

    Parameters
    ----------
    state : ndarray
        The current state of the game board.

    Returns
    -------
    bool
        True if any cell is empty or two orthogonally adjacent cells hold the same value.

    Notes
    -----
    The game is over when this returns False right after a spawn.
    """
    state = asarray(state)
    return not bool(
        np_all(state != 0) and not np_any(state[:-1] == state[1:]) and not np_any(state[:, :-1] == state[:, 1:])
    )
