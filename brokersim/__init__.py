"""
brokersim - Brokerage Financial Viability Simulator

Month-by-month cash-flow projection for a real-estate brokerage: sales and
rental ramp-up, commission splits, taxes, fixed costs, one-off property
payments and a projected-vs-actual reconciliation.

Modules:
    - core: settings, logging, exceptions, constants and calendar helpers
    - domain: pydantic input model, result structures and per-month formulas
    - application: simulation engine and actuals editing services
"""

__version__ = "1.4.0"
