"""Per-month brokerage formulas.

Pure functions used by the simulation engine: sales/rental counts with the
ramp-up curves, fixed costs, one-off property payments, commission splits
and the profitability ratios. All rates are percentages.
"""

from __future__ import annotations

import math
from typing import NamedTuple

from brokersim.core.constants import INSS_PRO_LABORE_COST, NUMBER_OF_PARTNERS
from brokersim.domain.models.inputs import SimulationInput


class SalesProjection(NamedTuple):
    partners: float
    brokers: float
    rentals: float

    @property
    def total(self) -> float:
        return self.partners + self.brokers


class SalesSplit(NamedTuple):
    total: float
    partners: float
    brokers: float


class RentalCommissions(NamedTuple):
    partners: float
    brokers_1st: float
    brokers_admin: float
    interns: float


def round_half_away(value: float) -> int:
    """Round to the nearest integer, ties away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def is_slow_month(inputs: SimulationInput, month: int) -> bool:
    return month <= inputs.slow_start_months


def is_expansion_active(inputs: SimulationInput, month: int) -> bool:
    return month >= inputs.expansion_start_month


def broker_ramp_sales(inputs: SimulationInput, month: int) -> int:
    """Broker team sales for ``month``, ramped over the first expansion months.

    Expansion month 0 uses ramp 1, month 1 uses ramp 2, later months ramp 3;
    each ramp % is applied to the full team target and rounded up.
    """
    full_target = inputs.number_of_brokers * inputs.sales_target_brokers_full
    if not is_expansion_active(inputs, month) or inputs.number_of_brokers <= 0 or full_target <= 0:
        return 0

    elapsed = month - inputs.expansion_start_month
    if elapsed == 0:
        pct = inputs.ramp_pct_month_1
    elif elapsed == 1:
        pct = inputs.ramp_pct_month_2
    else:
        pct = inputs.ramp_pct_month_3
    return math.ceil(full_target * (pct / 100.0))


def project_sales(inputs: SimulationInput, month: int) -> SalesProjection:
    """Projected partner sales, broker sales and team rentals."""
    slow = is_slow_month(inputs, month)
    per_partner = inputs.sales_target_partners_slow if slow else inputs.sales_target_partners_full
    rentals = inputs.rentals_target_slow if slow else inputs.rentals_target_full
    return SalesProjection(
        partners=per_partner * NUMBER_OF_PARTNERS,
        brokers=broker_ramp_sales(inputs, month),
        rentals=rentals,
    )


def split_sales(projection: SalesProjection, actual_total: float | None) -> SalesSplit:
    """Apply an actual sales count, keeping the projected partner share.

    Without an actual count the projected split stands. Brokers absorb the
    rounding remainder so partners + brokers == actual total.
    """
    if actual_total is None:
        return SalesSplit(projection.total, projection.partners, projection.brokers)

    partner_ratio = projection.partners / (projection.total or 1)
    partners = round_half_away(actual_total * partner_ratio)
    return SalesSplit(actual_total, partners, actual_total - partners)


def projected_fixed_costs(inputs: SimulationInput, month: int) -> float:
    """Admin/utility base + payroll + INSS + marketing + interns."""
    expansion = is_expansion_active(inputs, month)
    marketing = inputs.marketing_expanded_cost if expansion else inputs.marketing_base_cost
    interns = inputs.number_of_interns * inputs.intern_cost if expansion else 0.0

    payroll, payroll_tax = 0.0, 0.0
    if month >= inputs.pro_labore_start_month:
        payroll = inputs.pro_labore_total
        payroll_tax = INSS_PRO_LABORE_COST

    return inputs.base_fixed_costs + payroll + payroll_tax + marketing + interns


def corrected_payment_2(inputs: SimulationInput) -> float:
    """Payment 2 plus its annual Selic correction."""
    return inputs.property_payment_2_amount * (1 + inputs.selic_annual_rate / 100.0)


def projected_property_payment(inputs: SimulationInput, month: int) -> float:
    """One-off outflows due in ``month``; triggers are additive."""
    payment = 0.0
    if month == 1:
        payment += inputs.setup_cost
    if month == inputs.property_payment_1_month:
        payment += inputs.property_payment_1_amount
    if month == inputs.property_payment_2_month:
        payment += corrected_payment_2(inputs)
    if month == inputs.property_payment_3_month:
        payment += inputs.property_payment_3_amount
    return payment


def total_property_cost(inputs: SimulationInput) -> float:
    """Corrected cost of the three property payments (setup excluded)."""
    return inputs.property_payment_1_amount + corrected_payment_2(inputs) + inputs.property_payment_3_amount


def sales_commission_revenue(inputs: SimulationInput, sales_count: float) -> float:
    return sales_count * inputs.avg_sale_value * (inputs.commission_rate_sale / 100.0)


def rental_admin_revenue(inputs: SimulationInput, prior_contracts: float) -> float:
    """Recurring admin fee on contracts signed in earlier months."""
    return prior_contracts * inputs.avg_rental_value * (inputs.commission_rate_rental_admin / 100.0)


def regularization_revenue(inputs: SimulationInput) -> float:
    return inputs.avg_regularizations_per_month * inputs.avg_regularization_value


def broker_paid_commission(inputs: SimulationInput, broker_sales: float) -> float:
    """Commission paid out to external brokers on their sales.

    Internally listed sales earn the sale rate; the rest also earn the
    listing rate.
    """
    if broker_sales <= 0 or inputs.avg_sale_value <= 0:
        return 0.0

    internal = round_half_away(broker_sales * (inputs.broker_internal_listing_ratio / 100.0))
    external = broker_sales - internal
    per_sale_internal = inputs.avg_sale_value * (inputs.broker_commission_sale / 100.0)
    per_sale_external = inputs.avg_sale_value * (
        (inputs.broker_commission_sale + inputs.broker_commission_listing) / 100.0
    )
    return internal * per_sale_internal + external * per_sale_external


def rental_commissions(
    inputs: SimulationInput,
    month: int,
    rental_1st_revenue: float,
    admin_revenue: float,
) -> RentalCommissions:
    """Partner, broker and intern shares of the rental streams."""
    partners = rental_1st_revenue * (inputs.partner_commission_var_rental_1st / 100.0)
    if not is_expansion_active(inputs, month):
        return RentalCommissions(partners, 0.0, 0.0, 0.0)

    brokers_1st = rental_1st_revenue * (inputs.broker_commission_rental_1st_pct / 100.0)
    brokers_admin = admin_revenue * (inputs.broker_commission_rental_admin_pct / 100.0)
    interns = 0.0
    if inputs.number_of_interns > 0:
        intern_portion = rental_1st_revenue * (inputs.intern_rental_ratio / 100.0)
        interns = intern_portion * (inputs.intern_commission_rental_1st_pct / 100.0)
    return RentalCommissions(partners, brokers_1st, brokers_admin, interns)


def contribution_margin_pct(net_revenue: float, taxable_revenue: float) -> float:
    return (net_revenue / taxable_revenue) * 100 if taxable_revenue > 0 else 0.0


def operating_profitability_pct(cash_flow: float, net_revenue: float) -> float:
    return (cash_flow / net_revenue) * 100 if net_revenue > 0 else 0.0


def break_even_point(fixed_costs: float, margin_pct: float) -> float:
    """Gross taxable revenue needed to cover ``fixed_costs``."""
    return fixed_costs / (margin_pct / 100) if margin_pct > 0 else 0.0
