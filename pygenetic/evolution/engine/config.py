from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class SimulatorConfig(BaseModel):
    """Configuration options controlling Simulator behaviour."""

    max_iters: int = Field(
        default=100, ge=0, description="Maximum number of generations to run"
    )
    early_stop_delta: Any | None = Field(
        default=None,
        description="Fitness change below which a generation counts as stagnant",
    )
    early_stop_iters: int | None = Field(
        default=None,
        gt=0,
        description="Consecutive stagnant generations before stopping early",
    )
    seed: int | None = Field(
        default=None, description="Seed for the simulator's random generator"
    )
    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    @model_validator(mode="after")
    def validate_early_stop(self):
        if (self.early_stop_delta is None) != (self.early_stop_iters is None):
            raise ValueError(
                "early_stop_delta and early_stop_iters must be given together"
            )
        return self

    @property
    def early_stopping(self) -> bool:
        return self.early_stop_iters is not None
