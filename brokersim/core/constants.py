"""Fixed business constants used by the simulation engine."""

# Payroll tax on partner pró-labore: 3 partners * R$2000 base * 11%
INSS_PRO_LABORE_COST = 660.0

# Partner headcount behind the per-partner sales targets
NUMBER_OF_PARTNERS = 3

# Cash buffer expected at the end of the horizon, as % of property cost
BUFFER_TARGET_PCT = 10.0
