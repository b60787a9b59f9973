from __future__ import annotations

import random

import pytest

from pygenetic.evolution.engine import (
    RunResult,
    Simulator,
    SimulatorConfig,
    StepResult,
)
from pygenetic.evolution.strategies.removers import PopulationRemover
from pygenetic.evolution.strategies.selectors import (
    MaximizeSelector,
    ParentSelector,
    RouletteSelector,
    StochasticSelector,
    TournamentSelector,
)
from pygenetic.exceptions import (
    EmptyPopulationError,
    PopulationInvariantError,
    SimulationError,
)
from pygenetic.phenotype import InvertedFitness
from pygenetic.utils.stats import FitnessHistory, StatsCollector

from tests.conftest import AbsIndividual, Counter


class _EveryoneSelector(ParentSelector):
    def select(self, population, rng=None):
        return [(p, p) for p in population]


class _NoopRemover(PopulationRemover):
    def __call__(self, population, count, rng):
        return []


def test_max_iters(population) -> None:
    sim = (
        Simulator.builder(population)
        .set_selector(MaximizeSelector(2))
        .set_max_iters(2)
        .build()
    )
    assert sim.run() is RunResult.DONE
    assert sim.iterations() == 2


def test_zero_max_iters_is_done_immediately(population) -> None:
    sim = Simulator.builder(population).set_max_iters(0).build()
    assert sim.step() is StepResult.DONE
    assert sim.iterations() == 0


def test_done_is_terminal(population) -> None:
    sim = Simulator.builder(population).set_max_iters(1).build()
    assert sim.step() is StepResult.SUCCESS
    assert sim.step() is StepResult.DONE
    assert sim.step() is StepResult.DONE
    assert sim.iterations() == 1


def test_early_stopping() -> None:
    population = [Counter(0) for _ in range(100)]
    sim = (
        Simulator.builder(population)
        .set_selector(MaximizeSelector(2))
        .set_early_stop(10, 5)
        .set_max_iters(10)
        .build()
    )
    assert sim.run() is RunResult.DONE
    assert sim.iterations() == 5


def test_selector_error_propagates(population) -> None:
    sim = Simulator.builder(population).set_selector(MaximizeSelector(0)).build()
    assert sim.run() is RunResult.FAILURE
    assert "count" in sim.error
    with pytest.raises(SimulationError, match="count"):
        sim.get()
    assert sim.metrics.selection_errors == 1
    assert len(sim.population()) == 100


def test_empty_population_fails() -> None:
    sim = Simulator.builder([]).build()
    assert sim.step() is StepResult.FAILURE
    with pytest.raises(SimulationError, match="empty"):
        sim.get()


def test_get_on_empty_population_before_step() -> None:
    sim = Simulator.builder([]).build()
    with pytest.raises(EmptyPopulationError):
        sim.get()


def test_step_after_failure_raises() -> None:
    sim = Simulator.builder([]).build()
    assert sim.step() is StepResult.FAILURE
    with pytest.raises(SimulationError):
        sim.step()


def test_population_get(population) -> None:
    sim = Simulator.builder(population).set_selector(MaximizeSelector(0)).build()
    snapshot = sim.population()
    assert len(snapshot) == len(population)
    snapshot.clear()
    assert len(sim.population()) == len(population)


def test_builder_copies_population(population) -> None:
    before = list(population)
    sim = Simulator.builder(population).set_seed(1).set_max_iters(20).build()
    sim.run()
    assert population == before


@pytest.mark.parametrize(
    "selector",
    [
        MaximizeSelector(10),
        TournamentSelector(10, 4),
        StochasticSelector(20),
        RouletteSelector(20),
    ],
    ids=repr,
)
def test_population_size_is_constant(selector, population) -> None:
    sim = Simulator.builder(population).set_selector(selector).set_seed(3).build()
    for _ in range(50):
        assert sim.step() is StepResult.SUCCESS
        assert len(sim.population()) == 100


def test_get_returns_fittest(population) -> None:
    sim = Simulator.builder(population).set_max_iters(0).build()
    assert sim.get().fitness() == 99


def test_converges_to_minimum() -> None:
    population = [AbsIndividual(v) for v in range(-495, 505, 10)]
    assert len(population) == 100

    sim = (
        Simulator.builder(population)
        .set_selector(MaximizeSelector(10))
        .set_max_iters(1000)
        .set_seed(1234)
        .build()
    )
    assert sim.run() is RunResult.DONE
    assert sim.iterations() == 1000
    assert sim.get().fitness() == InvertedFitness(0)
    assert sim.get().value == 0


def test_converges_with_early_stopping() -> None:
    population = [AbsIndividual(v) for v in range(-495, 505, 10)]
    sim = (
        Simulator.builder(population)
        .set_selector(MaximizeSelector(10))
        .set_max_iters(1000)
        .set_early_stop(1, 10)
        .set_seed(1234)
        .build()
    )
    assert sim.run() is RunResult.DONE
    assert sim.iterations() < 1000
    assert sim.get().fitness() == InvertedFitness(0)


def test_seed_makes_runs_reproducible(population) -> None:
    def run(seed: int) -> list[Counter]:
        sim = (
            Simulator.builder(population)
            .set_selector(StochasticSelector(10))
            .set_max_iters(30)
            .set_seed(seed)
            .build()
        )
        sim.run()
        return sim.population()

    assert run(5) == run(5)


def test_injected_rng_is_used(population) -> None:
    rng = random.Random(9)
    state = rng.getstate()
    sim = Simulator.builder(population).set_rng(rng).set_max_iters(1).build()
    sim.run()
    assert rng.getstate() != state


def test_too_many_children_fail(population) -> None:
    sim = Simulator.builder(population).set_selector(_EveryoneSelector()).build()
    assert sim.step() is StepResult.FAILURE
    assert "parent pairs" in sim.error


def test_population_drift_raises(population) -> None:
    sim = Simulator.builder(population).set_remover(_NoopRemover()).build()
    with pytest.raises(PopulationInvariantError):
        sim.step()


def test_stats_collector_sees_every_generation(population) -> None:
    history = FitnessHistory()
    sim = (
        Simulator.builder(population)
        .set_stats_collector(history)
        .set_max_iters(7)
        .set_seed(2)
        .build()
    )
    sim.run()
    assert len(history.history) == 7
    assert [entry.generation for entry in history.history] == list(range(7))
    assert all(entry.mean is not None for entry in history.history)


def test_metrics_and_time(population) -> None:
    sim = (
        Simulator.builder(population)
        .set_selector(MaximizeSelector(10))
        .set_max_iters(4)
        .set_seed(0)
        .build()
    )
    sim.run()
    assert sim.metrics.total_generations == 4
    assert sim.metrics.children_created == 20
    assert sim.metrics.individuals_culled == 20
    assert sim.time() >= 0.0


def test_from_config(population) -> None:
    config = SimulatorConfig(max_iters=3, early_stop_delta=100, early_stop_iters=2, seed=11)
    sim = Simulator.builder(population).from_config(config).build()
    assert sim.run() is RunResult.DONE
    assert sim.iterations() == 2


class _HookCounter(StatsCollector):
    def __init__(self) -> None:
        self.before = 0
        self.after = 0

    def before_step(self, fitnesses) -> None:
        self.before += 1

    def after_step(self, fitnesses) -> None:
        self.after += 1


@pytest.mark.parametrize("selector", [MaximizeSelector(0), _EveryoneSelector()], ids=repr)
def test_failed_generation_does_not_call_stats_hooks(selector, population) -> None:
    hooks = _HookCounter()
    sim = (
        Simulator.builder(population)
        .set_selector(selector)
        .set_stats_collector(hooks)
        .build()
    )
    assert sim.step() is StepResult.FAILURE
    assert (hooks.before, hooks.after) == (0, 0)


def test_stats_hooks_are_paired(population) -> None:
    hooks = _HookCounter()
    sim = Simulator.builder(population).set_stats_collector(hooks).set_max_iters(6).build()
    sim.run()
    assert hooks.before == hooks.after == 6
