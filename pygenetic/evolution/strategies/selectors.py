from abc import ABC, abstractmethod
import random
from typing import Sequence, TypeVar

from loguru import logger
import numpy as np

from pygenetic.evolution.strategies.utils import (
    check_count,
    fitness_array,
    pair_up,
    sort_by_fitness,
)
from pygenetic.exceptions import SelectionError

I = TypeVar("I")

Parents = list[tuple[I, I]]


class ParentSelector(ABC):
    """Base class for parent selection strategies.

    A selector picks parent pairs from a population; each pair later produces
    one child. Parameters are checked against the population on every call and
    violations raise ``SelectionError`` before any work is done.
    """

    @abstractmethod
    def select(
        self, population: Sequence[I], rng: random.Random | None = None
    ) -> Parents:
        """Select parent pairs from ``population``.

        Args:
            population: Individuals to choose from (not modified)
            rng: Random generator to draw from; a fresh unseeded one if None

        Returns:
            List of parent pairs, every member taken from ``population``

        Raises:
            SelectionError: If the parameters do not fit the population
        """

    @staticmethod
    def _rng(rng: random.Random | None) -> random.Random:
        return rng if rng is not None else random.Random()

    def __repr__(self) -> str:
        params = ", ".join(f"{k}={v!r}" for k, v in vars(self).items())
        return f"{type(self).__name__}({params})"


class MaximizeSelector(ParentSelector):
    """Selects the ``count`` fittest individuals and pairs them by rank.

    Rank 0 is paired with rank 1, rank 2 with rank 3 and so on. The sort is
    stable, so individuals of equal fitness keep their population order.

    * ``count``: larger than zero, a multiple of two and less than half the
      population size.
    """

    def __init__(self, count: int):
        self.count = count

    def select(
        self, population: Sequence[I], rng: random.Random | None = None
    ) -> Parents:
        check_count(self.count, len(population), half=True)

        ranked = sort_by_fitness(population)[: self.count]
        logger.debug(
            "MaximizeSelector: top {} of {} individuals",
            self.count,
            len(population),
        )
        return pair_up(ranked)


class UnstableMaximizeSelector(ParentSelector):
    """Like ``MaximizeSelector``, without ordering guarantees for ties.

    Uses a numpy partial sort, which is faster on large populations but needs
    fitness values that convert to float.
    """

    def __init__(self, count: int):
        self.count = count

    def select(
        self, population: Sequence[I], rng: random.Random | None = None
    ) -> Parents:
        check_count(self.count, len(population), half=True)

        negated = -fitness_array(population)
        top = np.argpartition(negated, self.count - 1)[: self.count]
        top = top[np.argsort(negated[top], kind="quicksort")]
        logger.debug(
            "UnstableMaximizeSelector: top {} of {} individuals",
            self.count,
            len(population),
        )
        return pair_up([population[int(i)] for i in top])


class TournamentSelector(ParentSelector):
    """Runs ``count / 2`` tournaments and keeps the best two of each.

    Each tournament draws ``participants`` individuals uniformly with
    replacement, yielding ``count`` parents in total.

    * ``count``: larger than zero, a multiple of two and less than half the
      population size.
    * ``participants``: at least two and less than the population size.
    """

    def __init__(self, count: int, participants: int):
        self.count = count
        self.participants = participants

    def select(
        self, population: Sequence[I], rng: random.Random | None = None
    ) -> Parents:
        check_count(self.count, len(population), half=True)
        if self.participants < 2 or self.participants >= len(population):
            raise SelectionError(
                f"Invalid parameter `participants`: {self.participants}. Should be at "
                f"least two and less than the population size ({len(population)})."
            )

        rng = self._rng(rng)
        result: Parents = []
        for _ in range(self.count // 2):
            tournament = [
                population[rng.randrange(len(population))]
                for _ in range(self.participants)
            ]
            ranked = sort_by_fitness(tournament)
            result.append((ranked[0], ranked[1]))

        logger.debug(
            "TournamentSelector: {} tournaments of {} participants",
            len(result),
            self.participants,
        )
        return result


class StochasticSelector(ParentSelector):
    """Stochastic universal sampling.

    Starts at a random index and walks the population with a fixed stride,
    pairing each position with the one a stride further. Parents come from
    across the whole population, which gives weaker selection pressure than
    ``MaximizeSelector``.

    * ``count``: larger than zero, a multiple of two and less than the
      population size.
    """

    def __init__(self, count: int):
        self.count = count

    def select(
        self, population: Sequence[I], rng: random.Random | None = None
    ) -> Parents:
        check_count(self.count, len(population), half=False)

        rng = self._rng(rng)
        size = len(population)
        stride = size // self.count - 1
        i = rng.randrange(size)

        result: Parents = []
        selected = 0
        while selected < self.count:
            result.append((population[i], population[(i + stride) % size]))
            i = (i + stride) % size
            selected += 2
        return result


class RouletteSelector(ParentSelector):
    """Fitness-proportionate selection.

    Individuals are sorted by ascending fitness and laid out on a wheel by
    cumulative fitness. Each spin draws a value in ``[0, total fitness]`` and
    picks the first individual whose cumulative fitness reaches it, so every
    individual's share of the wheel equals its own fitness. Fitness must
    convert to float and be non-negative, otherwise the wheel is not monotonic
    and the result is skewed. This precondition is not enforced.

    * ``count``: larger than zero, a multiple of two and less than the
      population size.
    """

    def __init__(self, count: int):
        self.count = count

    def select(
        self, population: Sequence[I], rng: random.Random | None = None
    ) -> Parents:
        check_count(self.count, len(population), half=False)

        rng = self._rng(rng)
        ranked = sort_by_fitness(population, descending=False)
        fitnesses = fitness_array(ranked)
        if fitnesses[0] < 0:
            logger.warning(
                "RouletteSelector: negative fitness {:.3f} in population, selection will be skewed",
                fitnesses[0],
            )
        cumulative = np.cumsum(fitnesses)
        total = float(cumulative[-1])

        chosen: list[I] = []
        while len(chosen) < self.count:
            spin = rng.uniform(0.0, total)
            index = int(np.searchsorted(cumulative, spin, side="left"))
            chosen.append(ranked[min(index, len(ranked) - 1)])

        logger.debug(
            "RouletteSelector: {} spins over total fitness {:.3f}",
            len(chosen),
            total,
        )
        return pair_up(chosen)
