"""Unit tests for brokersim.application.services.actuals module."""

import pytest

from brokersim.application.services.actuals import ActualsBook, extend_duration, shrink_duration
from brokersim.core.exceptions import InputLoadError, InvalidParameterError
from brokersim.domain.models.results import MonthlyActuals


class TestActualsBook:
    """Tests for override-map editing."""

    def test_set_value(self):
        book = ActualsBook().set_value(2, "actual_sales_count", 5)
        assert book.get(2).actual_sales_count == 5
        assert book.months() == [2]

    def test_camel_case_field(self):
        book = ActualsBook().set_value(1, "actualMonthlyCashFlow", -300)
        assert book.get(1).actual_monthly_cash_flow == -300

    def test_edits_return_new_book(self):
        empty = ActualsBook()
        book = empty.set_value(1, "actual_sales_count", 3)
        assert len(empty) == 0
        assert len(book) == 1

    def test_clearing_last_field_drops_month(self):
        book = (
            ActualsBook()
            .set_value(3, "actual_sales_count", 4)
            .set_value(3, "actual_rentals_count", 2)
            .set_value(3, "actual_sales_count", None)
        )
        assert 3 in book
        book = book.set_value(3, "actual_rentals_count", None)
        assert 3 not in book
        assert book.as_overrides() == {}

    def test_zero_is_kept(self):
        book = ActualsBook().set_value(1, "actual_property_payment", 0)
        assert 1 in book

    def test_unknown_field_raises(self):
        with pytest.raises(InvalidParameterError) as exc_info:
            ActualsBook().set_value(1, "vgv", 10)
        assert exc_info.value.value == "vgv"

    def test_month_must_be_positive(self):
        with pytest.raises(InvalidParameterError):
            ActualsBook().set_value(0, "actual_sales_count", 1)

    def test_empty_entries_dropped_on_construction(self):
        book = ActualsBook({1: MonthlyActuals(), 2: MonthlyActuals(actual_sales_count=1)})
        assert book.months() == [2]

    def test_records_round_trip(self):
        records = {
            "1": {"actualSalesCount": 2, "actualGrossRevenueTotal": 41000.5},
            "3": {"actualCurrentFixedCosts": 12000},
        }
        book = ActualsBook.from_records(records)
        assert book.months() == [1, 3]
        assert book.to_records() == {
            "1": {"actualSalesCount": 2, "actualGrossRevenueTotal": 41000.5},
            "3": {"actualCurrentFixedCosts": 12000},
        }
        assert ActualsBook.from_records(book.to_records()) == book

    def test_bad_month_key(self):
        with pytest.raises(InvalidParameterError):
            ActualsBook.from_records({"march": {"actualSalesCount": 1}})

    def test_numeric_string_is_coerced(self):
        book = ActualsBook().set_value(1, "actual_sales_count", "5")
        assert book.get(1).actual_sales_count == 5.0
        assert isinstance(book.get(1).actual_sales_count, float)

    def test_non_numeric_value_rejected(self):
        book = ActualsBook().set_value(1, "actual_rentals_count", 2)
        with pytest.raises(InvalidParameterError) as exc_info:
            book.set_value(1, "actual_sales_count", "five")
        assert exc_info.value.param_name == "actual_sales_count"
        assert book.get(1).actual_sales_count is None

    def test_coerced_string_runs_through_engine(self, default_inputs, today_in_month_4):
        from brokersim.application.services.simulation import SimulationEngine

        book = ActualsBook().set_value(1, "actual_sales_count", "5")
        result = SimulationEngine().calculate(default_inputs, 2, book.as_overrides(), today=today_in_month_4)
        m1 = result.monthly_data[0]
        assert m1.sales_count == 5
        assert m1.sales_count_partners + m1.sales_count_brokers == 5

    def test_malformed_record_raises_load_error(self):
        with pytest.raises(InputLoadError) as exc_info:
            ActualsBook.from_records({"2": {"actualSalesCount": "lots"}})
        assert exc_info.value.errors

    def test_overrides_feed_engine(self, default_inputs, today_in_month_4):
        from brokersim.application.services.simulation import SimulationEngine

        book = ActualsBook().set_value(1, "actual_sales_count", 0)
        result = SimulationEngine().calculate(default_inputs, 2, book.as_overrides(), today=today_in_month_4)
        assert result.monthly_data[0].sales_count == 0


class TestDurationStepping:
    """Tests for extend/shrink of the horizon."""

    def test_extend(self, clean_settings):
        assert extend_duration(12) == 24

    def test_extend_capped(self, clean_settings, monkeypatch):
        monkeypatch.setenv("BROKERSIM_MAX_DURATION_MONTHS", "30")
        assert extend_duration(24) == 30

    def test_shrink(self, clean_settings):
        assert shrink_duration(36) == 24

    def test_shrink_floor(self, clean_settings):
        assert shrink_duration(12) == 12
        assert shrink_duration(5) == 12

    def test_custom_step(self, clean_settings):
        assert extend_duration(12, step=6) == 18
        assert shrink_duration(12, step=6) == 6

    def test_zero_step_is_honoured(self, clean_settings):
        assert extend_duration(12, step=0) == 12
        assert shrink_duration(12, step=0) == 12
