"""Randomized treatment cost estimation."""

import random

DEFAULT_COST_MIN = 150_000
DEFAULT_COST_SPAN = 100_000


def estimate_cost(
    rng: random.Random | None = None,
    minimum: int = DEFAULT_COST_MIN,
    span: int = DEFAULT_COST_SPAN,
) -> int:
    """Return a pseudo-random cost estimate in [minimum, minimum + span).

    Args:
        rng: Random generator to draw from. Defaults to the module generator.
        minimum: Lowest possible estimate.
        span: Width of the estimate range, must be positive.

    Returns:
        The estimated cost in rubles.
    """
    if span <= 0:
        raise ValueError(f"span must be positive, got {span}")
    source = rng if rng is not None else random
    return minimum + source.randrange(span)
