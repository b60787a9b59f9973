"""
pygenetic: a small framework for genetic algorithms.

Supply individuals that know their fitness and how to cross over and mutate,
pick a parent selector and let a ``Simulator`` evolve the population.
"""

from pygenetic.evolution.engine import (
    EarlyStopper,
    IterLimit,
    RunResult,
    Simulator,
    SimulatorBuilder,
    SimulatorConfig,
    SimulatorMetrics,
    StepResult,
)
from pygenetic.evolution.strategies import (
    MaximizeSelector,
    ParentSelector,
    PopulationRemover,
    RouletteSelector,
    StochasticRemover,
    StochasticSelector,
    TournamentSelector,
    UnstableMaximizeSelector,
)
from pygenetic.exceptions import (
    EmptyPopulationError,
    GeneticError,
    PopulationInvariantError,
    SelectionError,
    SimulationError,
    ValidationError,
)
from pygenetic.phenotype import (
    Fitness,
    Individual,
    InvertedFitness,
    fitness_abs_diff,
    fitness_zero,
)
from pygenetic.utils.stats import FitnessHistory, NoStats, StatsCollector
