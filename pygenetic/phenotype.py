"""
Capabilities consumed by the simulator.

An individual (also called a phenotype) knows its fitness and how to
recombine and mutate. A fitness is any totally ordered value with a zero and
an absolute difference; higher is always better. Plain Python numbers
qualify without a wrapper.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import total_ordering
import numbers
from typing import Any, Protocol, TypeVar, runtime_checkable

F = TypeVar("F")


@runtime_checkable
class Fitness(Protocol):
    """Totally ordered quality measure of an individual."""

    def __lt__(self, other: Any) -> bool: ...

    @classmethod
    def zero(cls) -> Any: ...

    def abs_diff(self, other: Any) -> Any:
        """Non-negative, commutative distance to ``other``."""
        ...


@runtime_checkable
class Individual(Protocol):
    """Candidate solution. All operations return new values."""

    def fitness(self) -> Any: ...

    def crossover(self, other: Any) -> Any: ...

    def mutate(self) -> Any: ...


def fitness_zero(value_or_type: Any) -> Any:
    """Return the zero of a fitness type (or of the type of a fitness value)."""
    fitness_type = value_or_type if isinstance(value_or_type, type) else type(value_or_type)
    if issubclass(fitness_type, numbers.Number):
        return fitness_type(0)
    zero = getattr(fitness_type, "zero", None)
    if zero is None:
        raise TypeError(
            f"{fitness_type.__name__} is not a fitness type: it is not a number and has no zero()"
        )
    return zero()


def fitness_abs_diff(a: Any, b: Any) -> Any:
    """Absolute difference between two fitness values."""
    if isinstance(a, numbers.Number) and isinstance(b, numbers.Number):
        return abs(a - b)
    return a.abs_diff(b)


@total_ordering
@dataclass(frozen=True)
class InvertedFitness:
    """Fitness whose order is the reverse of the wrapped value's order.

    Wrap an objective that should be minimised: the smallest ``value`` becomes
    the fittest. ``abs_diff`` returns the plain distance between the wrapped
    values, so early-stopping deltas are given as plain numbers.
    """

    value: Any

    @classmethod
    def zero(cls) -> InvertedFitness:
        return cls(0)

    def abs_diff(self, other: InvertedFitness) -> Any:
        return fitness_abs_diff(self.value, other.value)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, InvertedFitness):
            return NotImplemented
        return other.value < self.value

    def __float__(self) -> float:
        return -float(self.value)
