"""Data models for brokersim."""

from .inputs import SimulationInput, default_simulation_input
from .results import (
    MonthlyActuals,
    MonthlyResult,
    SimulationResult,
    SimulationSummary,
    SimulationTotals,
)

__all__ = [
    "SimulationInput",
    "default_simulation_input",
    "MonthlyActuals",
    "MonthlyResult",
    "SimulationResult",
    "SimulationSummary",
    "SimulationTotals",
]
