"""Simulation output structures.

``MonthlyResult`` rows are produced one per simulated month. Totals and the
viability summary are derived from the finished month list, never kept as
running counters alongside it.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from functools import reduce
from typing import Any

import pandas as pd
from pydantic import BaseModel, Field


class MonthlyActuals(BaseModel):
    """User-entered real figures for one month.

    ``None`` means "no override"; 0 is a legitimate actual value.
    """

    actual_sales_count: float | None = Field(default=None, alias="actualSalesCount")
    actual_rentals_count: float | None = Field(default=None, alias="actualRentalsCount")
    actual_gross_revenue_total: float | None = Field(default=None, alias="actualGrossRevenueTotal")
    actual_current_fixed_costs: float | None = Field(default=None, alias="actualCurrentFixedCosts")
    actual_property_payment: float | None = Field(default=None, alias="actualPropertyPayment")
    actual_monthly_cash_flow: float | None = Field(default=None, alias="actualMonthlyCashFlow")

    model_config = {
        "populate_by_name": True,
        "frozen": True,
        "extra": "ignore",
    }

    @property
    def is_empty(self) -> bool:
        return all(v is None for v in self.model_dump().values())


@dataclass(frozen=True)
class MonthlyResult:
    """Single month projection (1-indexed)."""

    month: int
    is_past_month: bool

    # Counts (projected, or actual for past months)
    sales_count: float
    sales_count_partners: float
    sales_count_brokers: float
    rentals_count: float
    vgv: float

    # Gross revenue streams (always calculated from the counts)
    gross_revenue_sales: float
    gross_revenue_rental_1st: float
    gross_revenue_rental_admin: float
    gross_revenue_regularization: float
    gross_revenue_total: float

    # Variable costs
    commission_var_sales_brokers_paid: float
    taxable_gross_revenue: float
    tax_amount: float
    other_variable_costs: float
    commission_var_sales_partners: float
    commission_var_rental_1st_partners: float
    commission_var_rental_1st_brokers: float
    commission_var_rental_admin_brokers: float
    commission_var_rental_1st_interns: float
    net_revenue_for_fixed_costs: float

    # Fixed costs & cash
    current_fixed_costs: float
    current_property_payment: float
    monthly_cash_flow: float
    accumulated_cash_flow: float

    # Ratios
    contribution_margin_percent: float
    operating_profitability_percent: float
    break_even_point: float

    # Echo of the caller's actuals for comparison
    actual_sales_count: float | None = None
    actual_rentals_count: float | None = None
    actual_gross_revenue_total: float | None = None
    actual_current_fixed_costs: float | None = None
    actual_property_payment: float | None = None
    actual_monthly_cash_flow: float | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "Mês": self.month,
            "Nº Vendas": self.sales_count,
            "Vendas Sócios": self.sales_count_partners,
            "Vendas Corretores": self.sales_count_brokers,
            "VGV": self.vgv,
            "Nº Aluguéis": self.rentals_count,
            "Fat Bruto Venda": self.gross_revenue_sales,
            "Fat Bruto Alug (1º)": self.gross_revenue_rental_1st,
            "Fat Bruto Alug (Adm)": self.gross_revenue_rental_admin,
            "Fat Bruto Regularização": self.gross_revenue_regularization,
            "Fat Bruto Total": self.gross_revenue_total,
            "Fat Tributável": self.taxable_gross_revenue,
            "Imposto SN": self.tax_amount,
            "Outros Custos Var": self.other_variable_costs,
            "Com Var Venda (S)": self.commission_var_sales_partners,
            "Com Var Venda (C)": self.commission_var_sales_brokers_paid,
            "Com Var Alug (1º S)": self.commission_var_rental_1st_partners,
            "Com Var Alug (1º C)": self.commission_var_rental_1st_brokers,
            "Com Var Alug (Adm C)": self.commission_var_rental_admin_brokers,
            "Com Var Alug (1º E)": self.commission_var_rental_1st_interns,
            "Rec Líquida": self.net_revenue_for_fixed_costs,
            "Custo Fixo": self.current_fixed_costs,
            "Pagto Imóvel": self.current_property_payment,
            "Caixa Mês": self.monthly_cash_flow,
            "Caixa Acum.": self.accumulated_cash_flow,
            "Margem Contrib.": self.contribution_margin_percent,
            "Lucratividade Op.": self.operating_profitability_percent,
            "Ponto Equil.": self.break_even_point,
        }


# Totals field -> MonthlyResult field, summed across the horizon
_SUMMED_FIELDS: dict[str, str] = {
    "gross_revenue_sales": "gross_revenue_sales",
    "gross_revenue_rental_1st": "gross_revenue_rental_1st",
    "gross_revenue_rental_admin": "gross_revenue_rental_admin",
    "gross_revenue_regularization": "gross_revenue_regularization",
    "gross_revenue_total": "gross_revenue_total",
    "tax_amount": "tax_amount",
    "other_variable_costs": "other_variable_costs",
    "commission_var_sales_partners": "commission_var_sales_partners",
    "commission_var_sales_brokers_paid": "commission_var_sales_brokers_paid",
    "commission_var_rental_1st_partners": "commission_var_rental_1st_partners",
    "commission_var_rental_1st_brokers": "commission_var_rental_1st_brokers",
    "commission_var_rental_admin_brokers": "commission_var_rental_admin_brokers",
    "commission_var_rental_1st_interns": "commission_var_rental_1st_interns",
    "net_revenue_for_fixed_costs": "net_revenue_for_fixed_costs",
    "total_fixed_costs": "current_fixed_costs",
    "total_property_payments": "current_property_payment",
    "total_sales_count": "sales_count",
    "total_rentals_count": "rentals_count",
    "total_vgv": "vgv",
    "_sum_break_even": "break_even_point",
}


@dataclass(frozen=True)
class SimulationTotals:
    """Column sums across the horizon plus recomputed averages."""

    gross_revenue_sales: float = 0.0
    gross_revenue_rental_1st: float = 0.0
    gross_revenue_rental_admin: float = 0.0
    gross_revenue_regularization: float = 0.0
    gross_revenue_total: float = 0.0
    tax_amount: float = 0.0
    other_variable_costs: float = 0.0
    commission_var_sales_partners: float = 0.0
    commission_var_sales_brokers_paid: float = 0.0
    commission_var_rental_1st_partners: float = 0.0
    commission_var_rental_1st_brokers: float = 0.0
    commission_var_rental_admin_brokers: float = 0.0
    commission_var_rental_1st_interns: float = 0.0
    net_revenue_for_fixed_costs: float = 0.0
    total_fixed_costs: float = 0.0
    total_property_payments: float = 0.0
    total_sales_count: float = 0.0
    total_rentals_count: float = 0.0
    total_vgv: float = 0.0
    total_taxable_gross_revenue: float = 0.0
    final_accumulated_cash_flow: float = 0.0
    avg_contribution_margin_percent: float = 0.0
    avg_operating_profitability_percent: float = 0.0
    avg_break_even_point: float = 0.0

    @classmethod
    def from_months(cls, months: list[MonthlyResult], initial_cash: float) -> SimulationTotals:
        """Fold the month list into one totals record.

        An empty list yields zeroed totals with the final cash equal to
        ``initial_cash``.
        """
        def accumulate(acc: dict[str, float], row: MonthlyResult) -> dict[str, float]:
            return {k: acc[k] + getattr(row, src) for k, src in _SUMMED_FIELDS.items()}

        sums = reduce(accumulate, months, dict.fromkeys(_SUMMED_FIELDS, 0.0))

        sum_break_even = sums.pop("_sum_break_even")

        final_cash = months[-1].accumulated_cash_flow if months else initial_cash
        taxable = sums["gross_revenue_total"] - sums["commission_var_sales_brokers_paid"]
        net = sums["net_revenue_for_fixed_costs"]

        return cls(
            **sums,
            total_taxable_gross_revenue=taxable,
            final_accumulated_cash_flow=final_cash,
            avg_contribution_margin_percent=(net / taxable) * 100 if taxable > 0 else 0.0,
            avg_operating_profitability_percent=(
                ((final_cash - initial_cash) / net) * 100 if net > 0 else 0.0
            ),
            avg_break_even_point=sum_break_even / len(months) if months else 0.0,
        )

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class SimulationSummary:
    """Viability verdict for the horizon."""

    final_cash: float
    total_property_cost: float
    is_viable: bool
    buffer_target: float
    buffer_met: bool


@dataclass(frozen=True)
class SimulationResult:
    """Complete engine output."""

    monthly_data: list[MonthlyResult] = field(default_factory=list)
    totals: SimulationTotals = field(default_factory=SimulationTotals)
    summary: SimulationSummary | None = None

    def to_dataframe(self) -> pd.DataFrame:
        """Month rows as a DataFrame with report column labels."""
        return pd.DataFrame([r.to_dict() for r in self.monthly_data])
