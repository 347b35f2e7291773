"""Core configuration, logging, errors and calendar helpers."""

from .dates import current_month_index, month_date, month_label, parse_start_date
from .exceptions import (
    BrokerSimError,
    ConfigurationError,
    InputLoadError,
    InvalidParameterError,
    SimulationError,
)

__all__ = [
    "current_month_index",
    "month_date",
    "month_label",
    "parse_start_date",
    # Exceptions
    "BrokerSimError",
    "ConfigurationError",
    "InputLoadError",
    "InvalidParameterError",
    "SimulationError",
]
