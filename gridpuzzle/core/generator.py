"""Random source shared by the engines when the caller does not inject one."""

from numpy.random import PCG64DXSM, Generator, default_rng

# ##>: Module-level generator for performance (avoids repeated initialization).
_GENERATOR = default_rng(PCG64DXSM())


def resolve_generator(rng: Generator | None = None, seed: int | None = None) -> Generator:
    """
    Pick the random source for one engine call.

    Parameters
    ----------
    rng : Generator, optional
        Injected generator, used as is when given.
    seed : int, optional
        Seed for a fresh generator when no generator is injected.

    Returns
    -------
    Generator
        The injected generator, a seeded one, or the module-level default.
    """
    if rng is not None:
        return rng
    if seed is not None:
        return default_rng(seed)
    return _GENERATOR
