from __future__ import annotations

from dataclasses import dataclass
import random

from loguru import logger
import pytest

from pygenetic.phenotype import InvertedFitness


def _towards_zero(value: int) -> int:
    if value < 0:
        return value + 1
    if value > 0:
        return value - 1
    return value


@dataclass(frozen=True)
class Counter:
    """Fitness is |f|; crossover keeps the smaller value; mutation steps towards zero."""

    f: int

    def fitness(self) -> int:
        return abs(self.f)

    def crossover(self, other: Counter) -> Counter:
        return Counter(min(self.f, other.f))

    def mutate(self) -> Counter:
        return Counter(_towards_zero(self.f))


@dataclass(frozen=True)
class AbsIndividual:
    """Minimises |value| through an inverted fitness order."""

    value: int

    def fitness(self) -> InvertedFitness:
        return InvertedFitness(abs(self.value))

    def crossover(self, other: AbsIndividual) -> AbsIndividual:
        return AbsIndividual(min(self.value, other.value, key=abs))

    def mutate(self) -> AbsIndividual:
        return AbsIndividual(_towards_zero(self.value))


@dataclass(frozen=True)
class Scored:
    """Individual with a fixed fitness and a tag to tell equal scores apart."""

    score: float
    tag: int = 0

    def fitness(self) -> float:
        return self.score

    def crossover(self, other: Scored) -> Scored:
        return Scored(max(self.score, other.score), self.tag)

    def mutate(self) -> Scored:
        return self


@pytest.fixture
def population() -> list[Counter]:
    return [Counter(i) for i in range(100)]


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)


@pytest.fixture
def log_messages():
    messages: list[str] = []
    handler_id = logger.add(messages.append, level="DEBUG", format="{message}")
    yield messages
    logger.remove(handler_id)
