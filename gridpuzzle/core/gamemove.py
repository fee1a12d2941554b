"""
Direction handling for the merge game.
"""

from gridpuzzle.core.errors import InvalidMoveError

# ##: All Actions. The index is also the number of quarter turns that bring the target edge to the left.
ACTIONS = {'left': 0, 'up': 1, 'right': 2, 'down': 3}


def as_action(direction: int | str) -> int:
    """
    Resolve a direction given by name or by index to its action index.

    Parameters
    ----------
    direction : int or str
        Either one of ``ACTIONS`` keys or one of its values.

    Returns
    -------
    int
        The action index (0: left, 1: up, 2: right, 3: down).

    Raises
    ------
    InvalidMoveError
        If the direction is unknown.
    """
    if isinstance(direction, str):
        action = ACTIONS.get(direction.lower())
        if action is None:
            raise InvalidMoveError(f'Unknown direction: {direction!r}')
        return action
    if isinstance(direction, bool) or direction not in ACTIONS.values():
        raise InvalidMoveError(f'Unknown direction: {direction!r}')
    return int(direction)

