from __future__ import annotations

from pygenetic.evolution.engine.config import SimulatorConfig
from pygenetic.evolution.engine.convergence import EarlyStopper, IterLimit
from pygenetic.evolution.engine.core import (
    RunResult,
    Simulator,
    SimulatorBuilder,
    StepResult,
)
from pygenetic.evolution.engine.metrics import SimulatorMetrics
