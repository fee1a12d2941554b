"""Exceptions raised when a caller hands the engines a malformed grid or move."""


class InvalidGridError(ValueError):
    """The grid breaks the invariants of the engine it was given to."""


class InvalidMoveError(ValueError):
    """The move does not name a direction or tile the engine knows about."""
