"""Brokerage cash-flow simulation.

Month-by-month projection of sales, rentals, commissions, taxes and fixed
costs, with user-entered actuals superseding the projection for months that
are already in the past. The engine is a pure function of its arguments:
no caching, no I/O, nothing retained between calls.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Union

from brokersim.core.constants import BUFFER_TARGET_PCT
from brokersim.core.dates import current_month_index
from brokersim.core.exceptions import SimulationError
from brokersim.core.logging import get_logger
from brokersim.domain.calculator import revenue as calc
from brokersim.domain.models.inputs import SimulationInput
from brokersim.domain.models.results import (
    MonthlyActuals,
    MonthlyResult,
    SimulationResult,
    SimulationSummary,
    SimulationTotals,
)

log = get_logger(__name__)

_NO_ACTUALS = MonthlyActuals()

ActualOverrides = Mapping[int, Union[MonthlyActuals, Mapping[str, Any], None]]


def _resolve(is_past: bool, actual: float | None, projected: float) -> float:
    """Actual value for a past month when supplied, else the projection."""
    if is_past and actual is not None:
        return actual
    return projected


def _coerce_overrides(overrides: ActualOverrides | None) -> dict[int, MonthlyActuals]:
    if not overrides:
        return {}
    coerced: dict[int, MonthlyActuals] = {}
    for month, value in overrides.items():
        if value is None:
            continue
        try:
            month_number = int(month)
            if not isinstance(value, MonthlyActuals):
                value = MonthlyActuals.model_validate(dict(value))
        except (TypeError, ValueError) as e:
            raise SimulationError(f"Invalid actuals for month {month!r}: {e}") from e
        coerced[month_number] = value
    return coerced


class SimulationEngine:
    """Month-by-month cash-flow projection for the brokerage.

    Months are folded in increasing order: month *m* reads two accumulators
    (cash and signed rental contracts) left by months 1..m-1.
    """

    def calculate(
        self,
        inputs: SimulationInput,
        duration_months: int,
        actual_overrides: ActualOverrides | None = None,
        today: date | None = None,
    ) -> SimulationResult:
        """Run the projection.

        Args:
            inputs: Parameter set for this run.
            duration_months: Number of months to project. Values <= 0 yield
                an empty month list and zeroed totals.
            actual_overrides: 1-based month -> actual figures. Only applied to
                months before the current month; echoed for every month.
            today: Reference date for past/future classification. Defaults
                to ``date.today()``.

        Returns:
            SimulationResult with monthly rows, totals and viability summary.
        """
        actuals = _coerce_overrides(actual_overrides)
        current_index = current_month_index(inputs.start_date, today)

        months: list[MonthlyResult] = []
        accumulated_cash = inputs.initial_cash
        accumulated_rentals = 0.0

        for month in range(1, max(0, duration_months) + 1):
            row = self._simulate_month(
                inputs,
                month,
                actuals.get(month, _NO_ACTUALS),
                is_past=month < current_index,
                accumulated_cash=accumulated_cash,
                prior_rentals=accumulated_rentals,
            )
            months.append(row)
            accumulated_cash = row.accumulated_cash_flow
            accumulated_rentals += row.rentals_count

        totals = SimulationTotals.from_months(months, inputs.initial_cash)
        summary = self._summarize(inputs, totals.final_accumulated_cash_flow)

        log.debug(
            "simulation_completed",
            months=len(months),
            past_months=sum(1 for m in months if m.is_past_month),
            final_cash=round(summary.final_cash, 2),
            is_viable=summary.is_viable,
        )
        return SimulationResult(monthly_data=months, totals=totals, summary=summary)

    def _simulate_month(
        self,
        inputs: SimulationInput,
        month: int,
        actual: MonthlyActuals,
        is_past: bool,
        accumulated_cash: float,
        prior_rentals: float,
    ) -> MonthlyResult:
        """Compute one month given the carried accumulators."""
        # 1. Counts
        projection = calc.project_sales(inputs, month)
        actual_sales = actual.actual_sales_count if is_past else None
        split = calc.split_sales(projection, actual_sales)
        rentals = _resolve(is_past, actual.actual_rentals_count, projection.rentals)
        vgv = split.total * inputs.avg_sale_value

        # 2. Fixed costs and one-off payments
        fixed_costs = _resolve(
            is_past, actual.actual_current_fixed_costs, calc.projected_fixed_costs(inputs, month)
        )
        property_payment = _resolve(
            is_past, actual.actual_property_payment, calc.projected_property_payment(inputs, month)
        )

        # 3. Gross revenue
        gross_sales_partners = calc.sales_commission_revenue(inputs, split.partners)
        gross_sales_brokers = calc.sales_commission_revenue(inputs, split.brokers)
        gross_sales = gross_sales_partners + gross_sales_brokers
        gross_rental_1st = rentals * inputs.avg_rental_value
        gross_rental_admin = calc.rental_admin_revenue(inputs, prior_rentals)
        gross_regularization = calc.regularization_revenue(inputs)
        calculated_gross = gross_sales + gross_rental_1st + gross_rental_admin + gross_regularization
        gross_total = _resolve(is_past, actual.actual_gross_revenue_total, calculated_gross)

        # 4. Variable costs and net revenue
        brokers_paid = calc.broker_paid_commission(inputs, split.brokers)
        taxable = gross_total - brokers_paid
        tax = taxable * (inputs.tax_rate / 100.0)
        other_variable = gross_total * (inputs.other_variable_costs_pct / 100.0)
        partner_sales_comm = gross_sales_partners * (inputs.partner_commission_var_sale / 100.0)
        rental_comm = calc.rental_commissions(inputs, month, gross_rental_1st, gross_rental_admin)

        net_revenue = (
            taxable
            - tax
            - partner_sales_comm
            - rental_comm.partners
            - other_variable
            - rental_comm.brokers_1st
            - rental_comm.brokers_admin
            - rental_comm.interns
        )

        # 5. Cash flow
        calculated_cash_flow = net_revenue - fixed_costs - property_payment
        cash_flow = _resolve(is_past, actual.actual_monthly_cash_flow, calculated_cash_flow)

        # 6. Ratios
        margin = calc.contribution_margin_pct(net_revenue, taxable)

        return MonthlyResult(
            month=month,
            is_past_month=is_past,
            sales_count=split.total,
            sales_count_partners=split.partners,
            sales_count_brokers=split.brokers,
            rentals_count=rentals,
            vgv=vgv,
            gross_revenue_sales=gross_sales,
            gross_revenue_rental_1st=gross_rental_1st,
            gross_revenue_rental_admin=gross_rental_admin,
            gross_revenue_regularization=gross_regularization,
            gross_revenue_total=gross_total,
            commission_var_sales_brokers_paid=brokers_paid,
            taxable_gross_revenue=taxable,
            tax_amount=tax,
            other_variable_costs=other_variable,
            commission_var_sales_partners=partner_sales_comm,
            commission_var_rental_1st_partners=rental_comm.partners,
            commission_var_rental_1st_brokers=rental_comm.brokers_1st,
            commission_var_rental_admin_brokers=rental_comm.brokers_admin,
            commission_var_rental_1st_interns=rental_comm.interns,
            net_revenue_for_fixed_costs=net_revenue,
            current_fixed_costs=fixed_costs,
            current_property_payment=property_payment,
            monthly_cash_flow=cash_flow,
            accumulated_cash_flow=accumulated_cash + cash_flow,
            contribution_margin_percent=margin,
            operating_profitability_percent=calc.operating_profitability_pct(cash_flow, net_revenue),
            break_even_point=calc.break_even_point(fixed_costs, margin),
            actual_sales_count=actual.actual_sales_count,
            actual_rentals_count=actual.actual_rentals_count,
            actual_gross_revenue_total=actual.actual_gross_revenue_total,
            actual_current_fixed_costs=actual.actual_current_fixed_costs,
            actual_property_payment=actual.actual_property_payment,
            actual_monthly_cash_flow=actual.actual_monthly_cash_flow,
        )

    @staticmethod
    def _summarize(inputs: SimulationInput, final_cash: float) -> SimulationSummary:
        property_cost = calc.total_property_cost(inputs)
        buffer_target = property_cost * (BUFFER_TARGET_PCT / 100.0)
        is_viable = final_cash >= 0
        return SimulationSummary(
            final_cash=final_cash,
            total_property_cost=property_cost,
            is_viable=is_viable,
            buffer_target=buffer_target,
            buffer_met=is_viable and final_cash >= buffer_target,
        )


def calculate_simulation(
    inputs: SimulationInput | Mapping[str, Any],
    duration_months: int | None = None,
    actual_overrides: ActualOverrides | None = None,
    today: date | None = None,
) -> SimulationResult:
    """Run a simulation from a model or a stored record.

    This is a convenience wrapper around SimulationEngine. A ``None``
    duration uses the configured default horizon.
    """
    from brokersim.core.settings import get_settings

    if not isinstance(inputs, SimulationInput):
        inputs = SimulationInput.from_record(inputs)
    if duration_months is None:
        duration_months = get_settings().default_duration_months

    return SimulationEngine().calculate(inputs, duration_months, actual_overrides, today)
