"""Pytest fixtures for brokersim tests."""

import os
import sys
from datetime import date

import pytest

# Add project root to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from brokersim.core.settings import get_settings
from brokersim.domain.models.inputs import SimulationInput, default_simulation_input


START_DATE = date(2026, 1, 1)


@pytest.fixture
def start_date() -> date:
    return START_DATE


@pytest.fixture
def today_at_start() -> date:
    """Reference date inside month 1: no month is in the past."""
    return date(2026, 1, 15)


@pytest.fixture
def today_in_month_4() -> date:
    """Reference date inside month 4: months 1-3 are in the past."""
    return date(2026, 4, 10)


@pytest.fixture
def default_inputs() -> SimulationInput:
    """Default parameter set starting on a fixed date."""
    return default_simulation_input(today=START_DATE)


@pytest.fixture
def expansion_inputs(default_inputs) -> SimulationInput:
    """Full targets and broker expansion from month 1."""
    return default_inputs.updated(slow_start_months=0, expansion_start_month=1)


@pytest.fixture
def sample_record():
    """Stored simulation record as saved by the brokerage app."""
    return {
        "avgSaleValue": 450000,
        "avgRentalValue": 3200,
        "taxRate": 8,
        "initialCash": 25000,
        "expansionStartMonth": 7,
        "numberOfBrokers": 2,
        "percRampaMes1": 40,
        "taxaSelicEstimadaAnual": 11.25,
        "startDate": "2026-03-01",
        "legacyField": "ignored",
    }


@pytest.fixture
def clean_settings():
    """Drop cached settings before and after the test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
