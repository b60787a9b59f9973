from pygenetic.evolution.strategies.removers import (
    PopulationRemover,
    StochasticRemover,
)
from pygenetic.evolution.strategies.selectors import (
    MaximizeSelector,
    ParentSelector,
    Parents,
    RouletteSelector,
    StochasticSelector,
    TournamentSelector,
    UnstableMaximizeSelector,
)
