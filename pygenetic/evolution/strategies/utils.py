from __future__ import annotations

from typing import Sequence, TypeVar

import numpy as np

from pygenetic.exceptions import SelectionError

I = TypeVar("I")


def sort_by_fitness(population: Sequence[I], descending: bool = True) -> list[I]:
    """Stable sort by fitness; equal fitness keeps population order."""
    return sorted(population, key=lambda ind: ind.fitness(), reverse=descending)


def fitness_array(population: Sequence[I]) -> np.ndarray:
    """Fitness of every individual as a float array (fitness must support float())."""
    return np.fromiter(
        (float(ind.fitness()) for ind in population),
        dtype=np.float64,
        count=len(population),
    )


def check_count(count: int, population_size: int, *, half: bool) -> None:
    """Validate a parent count shared by all selectors.

    ``count`` must be positive and even. With ``half`` it must be less than half
    the population size, otherwise less than the population size.
    """
    limit = population_size if not half else population_size / 2
    if count <= 0 or count % 2 != 0 or count >= limit:
        bound = "half the population size" if half else "the population size"
        raise SelectionError(
            f"Invalid parameter `count`: {count}. Should be larger than zero, "
            f"a multiple of two and less than {bound} ({population_size})."
        )


def pair_up(individuals: Sequence[I]) -> list[tuple[I, I]]:
    """Group a flat sequence into consecutive pairs: (0, 1), (2, 3), ..."""
    return [
        (individuals[index], individuals[index + 1])
        for index in range(0, len(individuals) - 1, 2)
    ]
