"""
Tests for the sliding puzzle engine: solvability, shuffling, tile moves and the solved arrangement.
"""

from collections import deque
from itertools import combinations, permutations
from unittest import TestCase, main

import numpy as np

from gridpuzzle.core.errors import InvalidGridError, InvalidMoveError
from gridpuzzle.core.slidingboard import (
    apply_move,
    count_inversions,
    empty_position,
    is_solvable,
    is_solved,
    movable_tiles,
    shuffle,
    solved_board,
    validate_sliding_board,
)


def reachable_states(size: int) -> set[tuple[int, ...]]:
    """Breadth-first search over every arrangement reachable from the solved one."""
    start = tuple(solved_board(size).ravel().tolist())
    seen = {start}
    queue = deque([start])
    while queue:
        state = queue.popleft()
        empty = state.index(0)
        row, col = divmod(empty, size)
        for d_row, d_col in ((-1, 0), (1, 0), (0, -1), (0, 1)):
            n_row, n_col = row + d_row, col + d_col
            if 0 <= n_row < size and 0 <= n_col < size:
                cells = list(state)
                other = n_row * size + n_col
                cells[empty], cells[other] = cells[other], cells[empty]
                neighbour = tuple(cells)
                if neighbour not in seen:
                    seen.add(neighbour)
                    queue.append(neighbour)
    return seen


def random_walk(board: np.ndarray, steps: int, generator: np.random.Generator) -> tuple[np.ndarray, list[int]]:
    """Play random legal moves and return the final board with the tiles moved."""
    tiles = []
    for _ in range(steps):
        tile = int(generator.choice(movable_tiles(board)))
        board = apply_move(board, tile).grid
        tiles.append(tile)
    return board, tiles


class FixedPermutation:
    """Random source whose permutation is always the same arrangement."""

    def __init__(self, arrangement):
        self.arrangement = np.array(arrangement, dtype=np.int64).ravel()

    def permutation(self, values):
        return self.arrangement.copy()


class TestSolvedBoard(TestCase):
    def test_solved_board(self):
        np.testing.assert_array_equal(solved_board(3), [[1, 2, 3], [4, 5, 6], [7, 8, 0]])

    def test_is_solved(self):
        for size in (3, 4, 5):
            self.assertTrue(is_solved(solved_board(size)))

    def test_single_transposition_is_not_solved(self):
        """Swapping any two cells of the solved board, empty slot included, breaks it."""
        for size in (3, 4):
            board = solved_board(size)
            for first, second in combinations(range(size * size), 2):
                swapped = board.ravel().copy()
                swapped[first], swapped[second] = swapped[second], swapped[first]
                self.assertFalse(is_solved(swapped.reshape(size, size)))


class TestSolvability(TestCase):
    def test_count_inversions(self):
        self.assertEqual(count_inversions(solved_board(3)), 0)
        self.assertEqual(count_inversions(np.array([[8, 7, 6], [5, 4, 3], [2, 1, 0]])), 28)

        # ##>: The empty slot is ignored wherever it is.
        self.assertEqual(count_inversions(np.array([[0, 1, 2], [3, 4, 5], [6, 8, 7]])), 1)

    def test_solved_boards_are_solvable(self):
        for size in (3, 4, 5):
            self.assertTrue(is_solvable(solved_board(size)))

    def test_swapped_tiles_are_not_solvable(self):
        """The classic 14-15 puzzle and its odd-sized counterparts."""
        for size in (3, 4, 5):
            board = solved_board(size)
            last, before = size * size - 2, size * size - 3
            flat = board.ravel()
            flat[last], flat[before] = flat[before], flat[last]
            self.assertFalse(is_solvable(board))

    def test_exhaustive_three_by_three(self):
        """Solvability agrees with reachability for every arrangement of a 3x3 board."""
        reachable = reachable_states(3)
        self.assertEqual(len(reachable), 181440)

        mismatches = 0
        for cells in permutations(range(9)):
            board = np.array(cells, dtype=np.int64).reshape(3, 3)
            if is_solvable(board) != (cells in reachable):
                mismatches += 1
        self.assertEqual(mismatches, 0)

    def test_random_walks_stay_solvable(self):
        """Every board reached from the solved one by legal moves is solvable, on even sizes too."""
        generator = np.random.default_rng(11)
        for size in (4, 5):
            board = solved_board(size)
            for _ in range(200):
                board, _ = random_walk(board, 7, generator)
                self.assertTrue(is_solvable(board))


class TestShuffle(TestCase):
    def test_shuffle_is_always_solvable(self):
        generator = np.random.default_rng(2024)
        for size in (3, 4, 5):
            for _ in range(1000):
                board = shuffle(solved_board(size), rng=generator)
                self.assertTrue(is_solvable(board))
                validate_sliding_board(board)

    def test_shuffle_keeps_labels_and_input(self):
        board = solved_board(4)
        shuffled = shuffle(board, seed=5)
        np.testing.assert_array_equal(board, solved_board(4))
        np.testing.assert_array_equal(np.sort(shuffled.ravel()), np.arange(16))

    def test_seed_reproducibility(self):
        np.testing.assert_array_equal(shuffle(solved_board(5), seed=9), shuffle(solved_board(5), seed=9))

    def test_empty_slot_position_is_shuffled(self):
        generator = np.random.default_rng(3)
        positions = {empty_position(shuffle(solved_board(3), rng=generator)) for _ in range(300)}
        self.assertEqual(len(positions), 9)

    def test_unsolvable_permutation_is_fixed(self):
        """The first two tiles in reading order are swapped."""
        for size in (3, 4, 5):
            arrangement = solved_board(size).ravel()
            arrangement[0], arrangement[1] = arrangement[1], arrangement[0]
            board = shuffle(solved_board(size), rng=FixedPermutation(arrangement))
            np.testing.assert_array_equal(board, solved_board(size))

    def test_fix_skips_the_empty_slot(self):
        board = shuffle(solved_board(3), rng=FixedPermutation([[0, 2, 1], [3, 4, 5], [6, 7, 8]]))
        np.testing.assert_array_equal(board, [[0, 1, 2], [3, 4, 5], [6, 7, 8]])

    def test_solvable_permutation_is_kept(self):
        arrangement = [[1, 2, 3], [4, 5, 6], [7, 0, 8]]
        board = shuffle(solved_board(3), rng=FixedPermutation(arrangement))
        np.testing.assert_array_equal(board, arrangement)


class TestApplyMove(TestCase):
    def setUp(self):
        self.board = solved_board(3)

    def test_adjacent_tiles_move(self):
        outcome = apply_move(self.board, 8)
        self.assertTrue(outcome.changed)
        self.assertEqual(outcome.score_delta, 0)
        np.testing.assert_array_equal(outcome.grid, [[1, 2, 3], [4, 5, 6], [7, 0, 8]])

        outcome = apply_move(self.board, 6)
        self.assertTrue(outcome.changed)
        np.testing.assert_array_equal(outcome.grid, [[1, 2, 3], [4, 5, 0], [7, 8, 6]])

    def test_diagonal_tile_is_rejected(self):
        outcome = apply_move(self.board, 5)
        self.assertFalse(outcome.changed)
        np.testing.assert_array_equal(outcome.grid, self.board)

    def test_tiles_two_cells_away_are_rejected(self):
        for tile in (7, 3):
            outcome = apply_move(self.board, tile)
            self.assertFalse(outcome.changed)
            np.testing.assert_array_equal(outcome.grid, self.board)

    def test_input_is_not_modified(self):
        outcome = apply_move(self.board, 8)
        self.assertIsNot(outcome.grid, self.board)
        np.testing.assert_array_equal(self.board, solved_board(3))

    def test_unknown_tile(self):
        for tile in (0, 9, -1, 2.5, True):
            with self.assertRaises(InvalidMoveError):
                apply_move(self.board, tile)

    def test_numpy_integer_tile(self):
        self.assertTrue(apply_move(self.board, np.int64(8)).changed)

    def test_movable_tiles(self):
        self.assertEqual(sorted(movable_tiles(self.board)), [6, 8])
        self.assertEqual(sorted(movable_tiles([[1, 2, 3], [4, 0, 5], [6, 7, 8]])), [2, 4, 5, 7])

    def test_moves_preserve_labels(self):
        generator = np.random.default_rng(1)
        board, _ = random_walk(shuffle(solved_board(4), rng=generator), 100, generator)
        np.testing.assert_array_equal(np.sort(board.ravel()), np.arange(16))

    def test_round_trip(self):
        """Replaying the moved tiles in reverse order restores the board."""
        generator = np.random.default_rng(8)
        for size in (3, 4, 5):
            start = shuffle(solved_board(size), rng=generator)
            board, tiles = random_walk(start, 60, generator)
            for tile in reversed(tiles):
                outcome = apply_move(board, tile)
                self.assertTrue(outcome.changed)
                board = outcome.grid
            np.testing.assert_array_equal(board, start)


class TestValidateBoard(TestCase):
    def test_duplicate_label(self):
        with self.assertRaises(InvalidGridError):
            validate_sliding_board([[1, 2, 3], [4, 5, 6], [7, 7, 0]])

    def test_missing_empty_slot(self):
        with self.assertRaises(InvalidGridError):
            validate_sliding_board([[1, 2, 3], [4, 5, 6], [7, 8, 9]])

    def test_size_not_allowed(self):
        with self.assertRaises(InvalidGridError):
            validate_sliding_board([[1, 2], [3, 0]])

    def test_not_square(self):
        with self.assertRaises(InvalidGridError):
            validate_sliding_board(np.arange(12).reshape(3, 4))

    def test_non_integer_labels(self):
        with self.assertRaises(InvalidGridError):
            validate_sliding_board([[1.5, 2, 3], [4, 5, 6], [7, 8, 0]])
        with self.assertRaises(InvalidGridError):
            apply_move(np.array([[1, 2, 3], [4, 5, 6], [7, 8, 0]], dtype=float), 8)

    def test_move_on_invalid_board(self):
        with self.assertRaises(InvalidGridError):
            apply_move([[1, 2, 3], [4, 5, 6], [7, 7, 0]], 7)


if __name__ == '__main__':
    main()
