"""Simulation input parameters.

A flat record of the brokerage's unit economics, cost structure, sales
targets and commission schedule. Field aliases follow the camelCase keys of
the stored simulation records so saved inputs rehydrate unchanged.

Rates are percentages (6.0 means 6%). Nothing here is range-checked:
negative or >100 values are accepted and flow through the engine as-is.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Mapping

from pydantic import BaseModel, Field, ValidationError, computed_field, field_validator

from brokersim.core.dates import parse_start_date
from brokersim.core.exceptions import InputLoadError, InvalidParameterError


class SimulationInput(BaseModel):
    """Immutable parameter set for one simulation run."""

    # Unit economics
    avg_sale_value: float = Field(default=300000.0, alias="avgSaleValue", description="Average sale price")
    avg_rental_value: float = Field(default=2500.0, alias="avgRentalValue", description="Average monthly rent")
    avg_regularizations_per_month: float = Field(default=1.0, alias="avgRegularizationsPerMonth")
    avg_regularization_value: float = Field(default=3000.0, alias="avgRegularizationValue")

    # Tax & variable-cost rates
    tax_rate: float = Field(default=6.0, alias="taxRate", description="Tax on taxable gross revenue %")
    other_variable_costs_pct: float = Field(
        default=1.0, alias="outrosCustosVarPercentFatBruto", description="Other variable costs % of gross revenue"
    )

    # One-off property payments
    property_payment_1_month: int = Field(default=6, alias="propertyPayment1Month")
    property_payment_1_amount: float = Field(default=40000.0, alias="propertyPayment1Amount")
    property_payment_2_month: int = Field(default=12, alias="propertyPayment2Month")
    property_payment_2_amount: float = Field(default=275000.0, alias="propertyPayment2Amount")
    property_payment_3_month: int = Field(default=8, alias="propertyPayment3Month", description="Renovation payment month")
    property_payment_3_amount: float = Field(default=15000.0, alias="propertyPayment3Amount")
    selic_annual_rate: float = Field(
        default=10.0, alias="taxaSelicEstimadaAnual", description="Correction applied to payment 2 %"
    )

    # Starting conditions
    initial_cash: float = Field(default=0.0, alias="initialCash")
    setup_cost: float = Field(default=5000.0, alias="custoSetupInicial", description="One-time cost paid in month 1")
    start_date: date = Field(default_factory=date.today, alias="startDate")

    # Fixed monthly costs
    accounting_cost: float = Field(default=100.0, alias="custoContabilidade")
    crm_cost: float = Field(default=470.30, alias="custoCRM")
    internet_phone_cost: float = Field(default=150.0, alias="custoInternetTel")
    utilities_cost: float = Field(default=300.0, alias="custoAguaLuz")
    rent_condo_cost: float = Field(default=2000.0, alias="custoAluguelCondominio")
    admin_salary: float = Field(default=2500.0, alias="salarioAdministrativo")
    other_fixed_cost: float = Field(default=200.0, alias="custoOutrosFixos")

    # Partner payroll (pró-labore)
    pro_labore_start_month: int = Field(default=1, alias="proLaboreStartMonth")
    pro_labore_alessandro: float = Field(default=2000.0, alias="proLaboreAlessandro")
    pro_labore_tamires: float = Field(default=2000.0, alias="proLaboreTamires")
    pro_labore_moisez: float = Field(default=2000.0, alias="proLaboreMoisez")

    # Marketing & staffing
    marketing_base_cost: float = Field(default=500.0, alias="marketingBaseCost")
    marketing_expanded_cost: float = Field(default=3000.0, alias="marketingExpandedCost")
    expansion_start_month: int = Field(default=5, alias="expansionStartMonth")
    number_of_interns: int = Field(default=2, alias="numberOfInterns")
    intern_cost: float = Field(default=1000.0, alias="internCost")
    number_of_brokers: int = Field(default=4, alias="numberOfBrokers")

    # Sales & rental targets
    slow_start_months: int = Field(default=3, alias="slowStartMonths")
    sales_target_partners_slow: float = Field(default=1.0, alias="salesTargetPartnersSlow", description="Per partner")
    rentals_target_slow: float = Field(default=4.0, alias="rentalsTargetSlow", description="Whole team")
    sales_target_partners_full: float = Field(default=3.0, alias="salesTargetPartnersFull", description="Per partner")
    sales_target_brokers_full: float = Field(default=1.0, alias="salesTargetBrokersFull", description="Per broker")
    ramp_pct_month_1: float = Field(default=50.0, alias="percRampaMes1")
    ramp_pct_month_2: float = Field(default=75.0, alias="percRampaMes2")
    ramp_pct_month_3: float = Field(default=100.0, alias="percRampaMes3")
    rentals_target_full: float = Field(default=8.0, alias="rentalsTargetFull", description="Whole team")

    # Commission schedule
    commission_rate_sale: float = Field(default=6.0, alias="commissionRateSale", description="Company commission on VGV %")
    partner_commission_var_sale: float = Field(default=20.0, alias="partnerCommissionVarSale")
    broker_commission_sale: float = Field(default=3.0, alias="brokerCommissionSale")
    broker_commission_listing: float = Field(default=1.0, alias="brokerCommissionListing")
    broker_internal_listing_ratio: float = Field(default=50.0, alias="brokerInternalListingRatio")
    partner_commission_var_rental_1st: float = Field(default=30.0, alias="partnerCommissionVarRental1st")
    broker_commission_rental_1st_pct: float = Field(default=0.0, alias="brokerCommissionRental1stPercent")
    broker_commission_rental_admin_pct: float = Field(default=0.0, alias="brokerCommissionRentalAdminPercent")
    commission_rate_rental_admin: float = Field(default=10.0, alias="commissionRateRentalAdmin")
    intern_commission_rental_1st_pct: float = Field(default=10.0, alias="internCommissionRental1stPercent")
    intern_rental_ratio: float = Field(default=20.0, alias="internRentalRatio", description="% of rentals closed by interns")

    model_config = {
        "populate_by_name": True,
        "frozen": True,
        "extra": "ignore",
    }

    @field_validator("start_date", mode="before")
    @classmethod
    def _coerce_start_date(cls, v: Any) -> date:
        try:
            return parse_start_date(v)
        except InvalidParameterError as e:
            raise ValueError(str(e)) from e

    @computed_field
    @property
    def base_fixed_costs(self) -> float:
        """Sum of the seven fixed admin/utility line items."""
        return (
            self.accounting_cost
            + self.crm_cost
            + self.internet_phone_cost
            + self.utilities_cost
            + self.other_fixed_cost
            + self.rent_condo_cost
            + self.admin_salary
        )

    @property
    def pro_labore_total(self) -> float:
        return self.pro_labore_alessandro + self.pro_labore_tamires + self.pro_labore_moisez

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> SimulationInput:
        """Rehydrate a stored record (camelCase or snake_case keys).

        Missing keys take the default value, so records saved before a field
        existed still load.
        """
        try:
            return cls.model_validate(dict(record))
        except ValidationError as e:
            raise InputLoadError(
                f"Invalid simulation record: {e.error_count()} error(s)",
                errors=e.errors(include_url=False),
            ) from e

    def to_record(self) -> dict[str, Any]:
        """Dump as a stored record with camelCase keys and ISO start date."""
        return self.model_dump(mode="json", by_alias=True, exclude={"base_fixed_costs"})

    def updated(self, **changes: Any) -> SimulationInput:
        """Return a validated copy with ``changes`` applied."""
        data = self.model_dump(exclude={"base_fixed_costs"})
        data.update(changes)
        return type(self).model_validate(data)


def default_simulation_input(today: date | None = None) -> SimulationInput:
    """Fresh default parameter set, starting in the current month."""
    return SimulationInput(start_date=today or date.today())
