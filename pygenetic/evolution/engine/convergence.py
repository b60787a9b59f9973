from __future__ import annotations

from typing import Any

from loguru import logger

from pygenetic.phenotype import fitness_abs_diff, fitness_zero


class IterLimit:
    """Counter that reports when a maximum number of iterations is reached."""

    def __init__(self, max_iters: int):
        if max_iters < 0:
            raise ValueError(f"max_iters must be non-negative, got {max_iters}")
        self._max = max_iters
        self._cur = 0

    @property
    def max(self) -> int:
        return self._max

    def inc(self) -> None:
        self._cur += 1

    def reached(self) -> bool:
        return self._cur >= self._max

    def reset(self) -> None:
        self._cur = 0

    def get(self) -> int:
        return self._cur

    def __repr__(self) -> str:
        return f"IterLimit(max={self._max}, cur={self._cur})"


class EarlyStopper:
    """Detects stagnation of the best fitness.

    ``reached()`` becomes true once ``n_iters`` consecutive updates changed the
    fitness by less than ``delta``. Any larger change resets the count.
    ``previous`` always follows the latest observed fitness.
    """

    def __init__(self, delta: Any, n_iters: int):
        self.delta = delta
        self._previous: Any = None
        self._iter_limit = IterLimit(n_iters)

    @property
    def previous(self) -> Any:
        return self._previous

    @property
    def count(self) -> int:
        return self._iter_limit.get()

    def update(self, fitness: Any) -> None:
        if self._previous is None:
            self._previous = fitness_zero(fitness)

        if fitness_abs_diff(self._previous, fitness) < self.delta:
            self._iter_limit.inc()
        else:
            logger.debug(
                "[EarlyStopper] Reset after change {} -> {} (delta={})",
                self._previous,
                fitness,
                self.delta,
            )
            self._iter_limit.reset()
        self._previous = fitness

    def reached(self) -> bool:
        return self._iter_limit.reached()
