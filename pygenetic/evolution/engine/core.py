from __future__ import annotations

from enum import Enum
import random
import time
from typing import Any, Generic, Iterable, TypeVar

from loguru import logger

from pygenetic.evolution.engine.config import SimulatorConfig
from pygenetic.evolution.engine.convergence import EarlyStopper, IterLimit
from pygenetic.evolution.engine.metrics import SimulatorMetrics
from pygenetic.evolution.strategies.removers import (
    PopulationRemover,
    StochasticRemover,
)
from pygenetic.evolution.strategies.selectors import MaximizeSelector, ParentSelector
from pygenetic.exceptions import (
    EmptyPopulationError,
    PopulationInvariantError,
    SimulationError,
    ValidationError,
)
from pygenetic.utils.stats import NoStats, StatsCollector

__all__ = ["RunResult", "Simulator", "SimulatorBuilder", "StepResult"]

I = TypeVar("I")


class StepResult(Enum):
    """Outcome of a single generation."""

    SUCCESS = "success"  # generation done, simulation continues
    FAILURE = "failure"  # see Simulator.get() for the reason
    DONE = "done"  # iteration limit or early stopping reached


class RunResult(Enum):
    """Outcome of a complete run."""

    DONE = "done"
    FAILURE = "failure"


class Simulator(Generic[I]):
    """
    Sequential genetic algorithm:
    - Each generation selects parent pairs, breeds one mutated child per pair,
      culls as many individuals as there are children and inserts the children.
    - The population size is the same before and after every generation.
    - Stops when the iteration limit or the early stopper is reached.

    Build instances with ``Simulator.builder(population)``.
    """

    def __init__(
        self,
        population: list[I],
        selector: ParentSelector,
        iter_limit: IterLimit,
        early_stopper: EarlyStopper | None = None,
        rng: random.Random | None = None,
        remover: PopulationRemover | None = None,
        stats: StatsCollector | None = None,
    ):
        self._population = population
        self.selector = selector
        self.iter_limit = iter_limit
        self.early_stopper = early_stopper
        self.rng = rng if rng is not None else random.Random()
        self.remover = remover or StochasticRemover()
        self.stats = stats or NoStats()

        self._error: str | None = None
        self.metrics = SimulatorMetrics()

        logger.info(
            "[Simulator] Init | population={}, selector={}, max_iters={}, early_stop={}",
            len(self._population),
            self.selector,
            self.iter_limit.max,
            self.early_stopper is not None,
        )

    @classmethod
    def builder(cls, population: Iterable[I]) -> SimulatorBuilder[I]:
        """Start building a Simulator that evolves ``population``."""
        return SimulatorBuilder(population)

    def step(self) -> StepResult:
        """Run one generation.

        Returns ``StepResult.SUCCESS`` when the generation completed,
        ``StepResult.DONE`` once the simulation has converged and
        ``StepResult.FAILURE`` when an error occurred (check ``get()``).

        Raises:
            SimulationError: If called again after a failure
            PopulationInvariantError: If culling changed the population size
                by anything other than the number of children
        """
        if self._error is not None:
            raise SimulationError(
                f"step() called on a failed simulation: {self._error}"
            )

        if not self._population:
            self._fail(
                "Tried to run a simulator without a population, or the population was empty."
            )
            return StepResult.FAILURE

        if self._should_stop():
            return StepResult.DONE

        started = time.perf_counter()
        size_before = len(self._population)
        try:
            parents = self.selector.select(self._population, rng=self.rng)
        except ValidationError as exc:
            self.metrics.record_selection_error()
            self._fail(str(exc))
            return StepResult.FAILURE

        children = [a.crossover(b).mutate() for a, b in parents]
        if len(children) >= size_before:
            self._fail(
                f"Selector produced {len(children)} parent pairs for a population of {size_before}"
            )
            return StepResult.FAILURE

        # Hooks only run for generations that go on to complete
        self.stats.before_step(self._fitnesses())
        culled = self.remover(self._population, len(children), self.rng)
        self._population.extend(children)
        if len(self._population) != size_before:
            raise PopulationInvariantError(
                f"Population size changed from {size_before} to {len(self._population)} "
                f"after culling {len(culled)} and inserting {len(children)}"
            )

        if self.early_stopper is not None:
            self.early_stopper.update(self._best().fitness())

        self.iter_limit.inc()
        self.stats.after_step(self._fitnesses())
        self.metrics.record_generation(
            children=len(children),
            culled=len(culled),
            seconds=time.perf_counter() - started,
        )
        logger.debug(
            "[Simulator] Generation {} | children={}, culled={}",
            self.iter_limit.get(),
            len(children),
            len(culled),
        )
        return StepResult.SUCCESS

    def run(self) -> RunResult:
        """Step until the simulation is done or fails."""
        logger.info("[Simulator] Start")
        while True:
            result = self.step()
            if result is StepResult.DONE:
                logger.info(
                    "[Simulator] Done after {} generation(s) in {:.3f}s",
                    self.iterations(),
                    self.time(),
                )
                return RunResult.DONE
            if result is StepResult.FAILURE:
                return RunResult.FAILURE

    def get(self) -> I:
        """Return the fittest individual of the current population.

        Raises:
            SimulationError: If the simulation failed; the message is the reason
        """
        if self._error is not None:
            raise SimulationError(self._error)
        if not self._population:
            raise EmptyPopulationError("The population is empty")
        return self._best()

    @property
    def error(self) -> str | None:
        return self._error

    def iterations(self) -> int:
        return self.iter_limit.get()

    def population(self) -> list[I]:
        """Snapshot of the current population."""
        return list(self._population)

    def time(self) -> float:
        """Seconds spent running generations so far."""
        return self.metrics.elapsed_seconds

    def _should_stop(self) -> bool:
        if self.iter_limit.reached():
            return True
        return self.early_stopper is not None and self.early_stopper.reached()

    def _best(self) -> I:
        return max(self._population, key=lambda ind: ind.fitness())

    def _fitnesses(self) -> list[Any]:
        return [ind.fitness() for ind in self._population]

    def _fail(self, message: str) -> None:
        self._error = message
        logger.error("[Simulator] Failure: {}", message)


class SimulatorBuilder(Generic[I]):
    """Builder for ``Simulator``. Every setter returns the builder."""

    def __init__(self, population: Iterable[I]):
        self._population = list(population)
        self._selector: ParentSelector = MaximizeSelector(2)
        self._max_iters = 100
        self._early_stop: tuple[Any, int] | None = None
        self._rng: random.Random | None = None
        self._remover: PopulationRemover | None = None
        self._stats: StatsCollector | None = None

    def set_selector(self, selector: ParentSelector) -> SimulatorBuilder[I]:
        self._selector = selector
        return self

    def set_max_iters(self, max_iters: int) -> SimulatorBuilder[I]:
        """The Simulator stops after ``max_iters`` generations."""
        self._max_iters = max_iters
        return self

    def set_early_stop(self, delta: Any, n_iters: int) -> SimulatorBuilder[I]:
        """Stop once the best fitness changed by less than ``delta`` for
        ``n_iters`` consecutive generations."""
        self._early_stop = (delta, n_iters)
        return self

    def set_rng(self, rng: random.Random) -> SimulatorBuilder[I]:
        self._rng = rng
        return self

    def set_seed(self, seed: int) -> SimulatorBuilder[I]:
        return self.set_rng(random.Random(seed))

    def set_remover(self, remover: PopulationRemover) -> SimulatorBuilder[I]:
        self._remover = remover
        return self

    def set_stats_collector(self, stats: StatsCollector) -> SimulatorBuilder[I]:
        self._stats = stats
        return self

    def from_config(self, config: SimulatorConfig) -> SimulatorBuilder[I]:
        self.set_max_iters(config.max_iters)
        if config.early_stopping:
            self.set_early_stop(config.early_stop_delta, config.early_stop_iters)
        if config.seed is not None:
            self.set_seed(config.seed)
        return self

    def build(self) -> Simulator[I]:
        early_stopper = (
            EarlyStopper(*self._early_stop) if self._early_stop is not None else None
        )
        return Simulator(
            population=list(self._population),
            selector=self._selector,
            iter_limit=IterLimit(self._max_iters),
            early_stopper=early_stopper,
            rng=self._rng,
            remover=self._remover,
            stats=self._stats,
        )
