"""Application services."""

from .actuals import ActualsBook, extend_duration, shrink_duration
from .simulation import SimulationEngine, calculate_simulation

__all__ = [
    "ActualsBook",
    "SimulationEngine",
    "calculate_simulation",
    "extend_duration",
    "shrink_duration",
]
