"""Custom exceptions for brokersim.

Domain-specific exception types raised at the record and override boundaries.
The simulation engine itself never raises on well-typed input.
"""

from __future__ import annotations

from typing import Any


class BrokerSimError(Exception):
    """Base exception for all brokersim errors."""
    pass


# --- Data Errors ---

class InputLoadError(BrokerSimError):
    """Failed to rehydrate a stored simulation record."""

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        self.errors = errors or []
        super().__init__(message)


class InvalidParameterError(BrokerSimError):
    """Invalid parameter value provided."""

    def __init__(self, param_name: str, value: Any, reason: str = ""):
        self.param_name = param_name
        self.value = value
        self.reason = reason
        msg = f"Invalid parameter '{param_name}': {value!r}"
        if reason:
            msg += f" - {reason}"
        super().__init__(msg)


# --- Calculation Errors ---

class SimulationError(BrokerSimError):
    """Error during financial simulation."""
    pass


# --- Configuration Errors ---

class ConfigurationError(BrokerSimError):
    """Error in application configuration."""
    pass
