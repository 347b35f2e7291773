"""Unit tests for brokersim.domain.models."""

from datetime import date

import pytest
from pydantic import ValidationError

from brokersim.core.exceptions import InputLoadError
from brokersim.domain.models.inputs import SimulationInput, default_simulation_input
from brokersim.domain.models.results import MonthlyActuals, SimulationTotals


class TestSimulationInput:
    """Tests for the SimulationInput pydantic model."""

    def test_defaults(self):
        """Defaults should match the brokerage's reference plan."""
        inputs = default_simulation_input(today=date(2026, 1, 1))
        assert inputs.avg_sale_value == 300000
        assert inputs.tax_rate == 6
        assert inputs.initial_cash == 0
        assert inputs.slow_start_months == 3
        assert inputs.sales_target_partners_slow == 1
        assert inputs.setup_cost == 5000
        assert inputs.start_date == date(2026, 1, 1)

    def test_default_start_date_is_today(self):
        assert default_simulation_input().start_date == date.today()

    def test_defaults_are_fresh(self):
        """Each call returns an independent instance."""
        a = default_simulation_input(today=date(2026, 1, 1))
        b = a.updated(tax_rate=15)
        assert a.tax_rate == 6
        assert b.tax_rate == 15

    def test_base_fixed_costs(self, default_inputs):
        """Sum of the seven admin/utility items."""
        assert default_inputs.base_fixed_costs == pytest.approx(5720.30)

    def test_pro_labore_total(self, default_inputs):
        assert default_inputs.pro_labore_total == 6000

    def test_from_record_camel_case(self, sample_record):
        inputs = SimulationInput.from_record(sample_record)
        assert inputs.avg_sale_value == 450000
        assert inputs.selic_annual_rate == 11.25
        assert inputs.ramp_pct_month_1 == 40
        assert inputs.start_date == date(2026, 3, 1)

    def test_from_record_missing_fields_use_defaults(self, sample_record):
        """Records saved before a field existed still load."""
        inputs = SimulationInput.from_record(sample_record)
        assert inputs.intern_rental_ratio == 20
        assert inputs.property_payment_3_amount == 15000

    def test_from_record_snake_case(self):
        inputs = SimulationInput.from_record({"avg_sale_value": 1, "start_date": "2026-01-01"})
        assert inputs.avg_sale_value == 1

    def test_round_trip(self, sample_record):
        inputs = SimulationInput.from_record(sample_record)
        record = inputs.to_record()
        assert record["startDate"] == "2026-03-01"
        assert "avgSaleValue" in record
        assert "legacyField" not in record
        assert "base_fixed_costs" not in record
        assert SimulationInput.from_record(record) == inputs

    def test_negative_rates_accepted(self):
        """Rates are not range-checked."""
        inputs = SimulationInput(tax_rate=-5, commission_rate_sale=150, start_date=date(2026, 1, 1))
        assert inputs.tax_rate == -5
        assert inputs.commission_rate_sale == 150

    def test_whole_float_months_coerced(self):
        inputs = SimulationInput.from_record({"propertyPayment1Month": 6.0, "startDate": "2026-01-01"})
        assert inputs.property_payment_1_month == 6

    def test_invalid_record_raises_input_load_error(self):
        with pytest.raises(InputLoadError) as exc_info:
            SimulationInput.from_record({"avgSaleValue": "a lot", "startDate": "2026-01-01"})
        assert exc_info.value.errors
        assert isinstance(exc_info.value.__cause__, ValidationError)

    def test_invalid_start_date_raises_input_load_error(self):
        with pytest.raises(InputLoadError):
            SimulationInput.from_record({"startDate": "not-a-date"})

    def test_frozen(self, default_inputs):
        with pytest.raises(ValidationError):
            default_inputs.tax_rate = 10


class TestMonthlyActuals:
    """Tests for MonthlyActuals."""

    def test_empty(self):
        assert MonthlyActuals().is_empty

    def test_zero_is_a_value(self):
        """0 is a real actual, not 'missing'."""
        actuals = MonthlyActuals(actual_sales_count=0)
        assert not actuals.is_empty
        assert actuals.actual_sales_count == 0

    def test_alias(self):
        actuals = MonthlyActuals.model_validate({"actualMonthlyCashFlow": -1500})
        assert actuals.actual_monthly_cash_flow == -1500


class TestSimulationTotals:
    """Tests for the totals reducer."""

    def test_empty_months(self):
        totals = SimulationTotals.from_months([], initial_cash=1000)
        assert totals.final_accumulated_cash_flow == 1000
        assert totals.gross_revenue_total == 0
        assert totals.avg_break_even_point == 0
        assert totals.avg_contribution_margin_percent == 0
        assert totals.avg_operating_profitability_percent == 0
