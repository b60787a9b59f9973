from __future__ import annotations

from pydantic import BaseModel, Field


class SimulatorMetrics(BaseModel):
    """Counters accumulated over the lifetime of a Simulator."""

    total_generations: int = Field(
        default=0, description="Total number of completed generations"
    )
    children_created: int = Field(
        default=0, description="Total number of children inserted"
    )
    individuals_culled: int = Field(
        default=0, description="Total number of individuals removed by culling"
    )
    selection_errors: int = Field(
        default=0, description="Total number of failed selections"
    )
    elapsed_seconds: float = Field(
        default=0.0, description="Wall time spent inside generations"
    )

    def record_generation(self, children: int, culled: int, seconds: float) -> None:
        """Record metrics from one successful generation."""
        self.total_generations += 1
        self.children_created += children
        self.individuals_culled += culled
        self.elapsed_seconds += seconds

    def record_selection_error(self) -> None:
        self.selection_errors += 1
