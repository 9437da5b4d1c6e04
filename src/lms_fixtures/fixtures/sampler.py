"""Random selection of the tree leaves a fixture exercises."""

from __future__ import annotations

import random

from .errors import TooManyTests

_PROCESS_RNG = random.Random()
"""Shared, OS-seeded generator used when no other one is injected."""


class LeafSampler:
    """
    Draws distinct leaf offsets uniformly without replacement.

    The randomness source is injectable so tests can pass a seeded
    `random.Random` and get a reproducible batch. The sampler only draws
    from the generator and never reseeds it.

    Args:
        rng: The generator to draw from. Defaults to a process-wide one.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self.rng = rng if rng is not None else _PROCESS_RNG

    def sample(self, count: int, tree_height: int) -> list[int]:
        """
        Pick `count` distinct leaf offsets from `[0, 2^tree_height)`.

        Args:
            count: How many leaves to pick.
            tree_height: Height of the tree the leaves belong to.

        Returns:
            The offsets, in the order they were drawn.

        Raises:
            TooManyTests: If `count` is zero or exceeds the number of leaves.
        """
        leaf_count = 1 << tree_height
        if count < 1 or count > leaf_count:
            raise TooManyTests(count, tree_height)
        return self.rng.sample(range(leaf_count), count)
