from abc import ABC, abstractmethod
import random
from typing import TypeVar

from loguru import logger

I = TypeVar("I")


class PopulationRemover(ABC):
    """Base class for culling strategies that make room for children."""

    @abstractmethod
    def __call__(
        self, population: list[I], count: int, rng: random.Random
    ) -> list[I]:
        """Remove ``count`` individuals from ``population`` in place.

        Returns the removed individuals.
        """


class StochasticRemover(PopulationRemover):
    """Culls individuals by stochastic universal sampling.

    Starts at a random index and removes individuals at evenly spaced
    positions, wrapping around the shrinking population. Removal shifts the
    tail left by one, so advancing ``ratio - 1`` positions lands ``ratio``
    positions further in the layout before removal.
    """

    def __call__(
        self, population: list[I], count: int, rng: random.Random
    ) -> list[I]:
        if count == 0:
            return []
        if count < 0 or count >= len(population):
            raise ValueError(
                f"Cannot cull {count} individuals from a population of {len(population)}"
            )

        ratio = len(population) // count
        i = rng.randrange(len(population))
        removed: list[I] = []
        while len(removed) < count:
            removed.append(population.pop(i))
            i = (i + ratio - 1) % len(population)

        logger.debug(
            "StochasticRemover: culled {} (stride {}), {} left",
            count,
            ratio,
            len(population),
        )
        return removed
