# -*- coding: utf-8 -*-
"""
Evaluate the grid puzzle engines with simple policies.
"""
from collections import Counter
from typing import Callable, Dict

import numpy as np
from numpy.random import Generator, default_rng
from tqdm import trange

from gridpuzzle.config import SLIDING_SIZES
from gridpuzzle.core import count_inversions, is_solvable, legal_actions, shuffle, solved_board
from gridpuzzle.core.gameboard import apply_move
from gridpuzzle.envs import TwentyFortyEight


def random_policy(board: np.ndarray, rng: Generator) -> int:
    """Pick any move that changes the board."""
    return int(rng.choice(legal_actions(board)))


def greedy_policy(board: np.ndarray, rng: Generator) -> int:
    """Pick the move with the best immediate score, breaking ties at random."""
    actions = legal_actions(board)
    gains = np.array([apply_move(board, action).score_delta for action in actions])
    best = np.flatnonzero(gains == gains.max())
    return actions[int(rng.choice(best))]


POLICIES: Dict[str, Callable[[np.ndarray, Generator], int]] = {
    "random": random_policy,
    "greedy": greedy_policy,
}


def evaluate(policy: str, length: int = 10, seed: int = 0) -> Dict[int, int]:
    """
    Play 2048 games with a policy.

    Parameters
    ----------
    policy : str
        The name of the policy to evaluate.
    length : int, optional
        The number of games to play (default is 10).
    seed : int, optional
        Seed of the policy and of the games.

    Returns
    -------
    Dict[int, int]
        How many games ended on each max tile.
    """
    choose_action = POLICIES[policy]
    rng = default_rng(seed)
    env = TwentyFortyEight()
    score = []

    with trange(length) as period:
        for num in period:
            env.reset(seed=seed + num)
            done = False

            # ##: Play a game.
            while not done:
                _, _, done = env.step(choose_action(env.observation, rng))

                # ##: Log.
                period.set_description(f"Evaluation: {num + 1}")
                period.set_postfix(score=env.score, max=int(np.max(env.observation)))

            # ##: Save max cells.
            score.append(int(np.max(env.observation)))

    return dict(Counter(score))


def evaluate_shuffle(length: int = 1000, seed: int = 0) -> Dict[int, float]:
    """
    Shuffle boards of every sliding puzzle size and check that they are all solvable.

    Parameters
    ----------
    length : int, optional
        The number of boards shuffled per size (default is 1000).
    seed : int, optional
        Seed of the shuffles.

    Returns
    -------
    Dict[int, float]
        Mean number of inversions per board size.

    Raises
    ------
    RuntimeError
        If a shuffled board is not solvable.
    """
    rng = default_rng(seed)
    inversions = {}
    for size in SLIDING_SIZES:
        counts = []
        for _ in trange(length, desc=f"Shuffle {size}x{size}"):
            board = shuffle(solved_board(size), rng=rng)
            if not is_solvable(board):
                raise RuntimeError(f"Unsolvable board:\n{board}")
            counts.append(count_inversions(board))
        inversions[size] = float(np.mean(counts))
    return inversions


if __name__ == "__main__":
    from argparse import ArgumentParser

    parser = ArgumentParser()
    parser.add_argument("--game", type=str, default="2048", choices=["2048", "sliding"])
    parser.add_argument("--policy", type=str, default="random", choices=sorted(POLICIES))
    parser.add_argument("--length", type=int, default=10)
    parser.add_argument("--seed", type=int, default=0)
    args = parser.parse_args()

    if args.game == "sliding":
        result = evaluate_shuffle(length=args.length, seed=args.seed)
        print(f"All shuffled boards solvable, mean inversions: {result}")
    else:
        result = evaluate(policy=args.policy, length=args.length, seed=args.seed)
        print(f"Evaluation of the {args.policy} policy, max tiles: {result}")
