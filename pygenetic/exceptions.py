class GeneticError(Exception):
    """Base for all pygenetic exceptions."""

    pass


# High-level families
class ValidationError(GeneticError):
    """Parameter validation failures."""

    pass


class SimulationError(GeneticError):
    """Simulation process failures."""

    pass


# Selection subtypes
class SelectionError(ValidationError):
    """Selector parameters do not fit the population."""

    pass


# Simulation subtypes
class EmptyPopulationError(SimulationError):
    """A simulator was asked to work on an empty population."""

    pass


class PopulationInvariantError(SimulationError):
    """Population size drifted during a generation."""

    pass
