from __future__ import annotations

from typing import Any, Sequence

import numpy as np
from pydantic import BaseModel, Field


class StatsCollector:
    """Hooks called by the Simulator around every generation.

    Both hooks receive the fitness of every individual in the current
    population. ``before_step`` runs once selection and breeding succeeded,
    right before culling, so every ``before_step`` is followed by an
    ``after_step``. The default implementations do nothing.
    """

    def before_step(self, fitnesses: Sequence[Any]) -> None:
        pass

    def after_step(self, fitnesses: Sequence[Any]) -> None:
        pass


class NoStats(StatsCollector):
    """Collector that records nothing."""


class GenerationStats(BaseModel):
    """Fitness summary of one population snapshot."""

    generation: int = Field(ge=0)
    best: Any
    mean: float | None = None
    std: float | None = None


class FitnessHistory(StatsCollector):
    """Records the best fitness of every generation.

    Mean and sample standard deviation are recorded as well when fitness
    values convert to float.
    """

    def __init__(self) -> None:
        self.history: list[GenerationStats] = []

    def after_step(self, fitnesses: Sequence[Any]) -> None:
        if not fitnesses:
            return

        mean = std = None
        try:
            values = np.array([float(value) for value in fitnesses], dtype=np.float64)
        except (TypeError, ValueError):
            values = None
        if values is not None:
            mean = float(values.mean())
            std = float(values.std(ddof=1)) if len(values) > 1 else 0.0

        self.history.append(
            GenerationStats(
                generation=len(self.history),
                best=max(fitnesses),
                mean=mean,
                std=std,
            )
        )

    def best(self) -> list[Any]:
        return [entry.best for entry in self.history]
