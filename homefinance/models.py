from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from .presets import DEFAULT_MAINTENANCE_RATE


class _Record(BaseModel):
    model_config = ConfigDict(frozen=True, allow_inf_nan=False)


class MortgageParams(_Record):
    principal: float
    annual_interest_rate: float
    loan_term_years: int


class MortgageResult(_Record):
    monthly_payment: float
    total_payments: float
    total_interest: float


class TotalCostParams(_Record):
    """Recurring ownership costs around a mortgage.

    Optional costs left as ``None`` count as omitted and fall back to their
    defaults.
    """

    purchase_price: float
    mortgage: MortgageParams
    property_tax_annual: Optional[float] = 0.0
    insurance_annual: Optional[float] = 0.0
    hoa_monthly: Optional[float] = 0.0
    pmi_monthly: Optional[float] = 0.0
    maintenance_rate: Optional[float] = DEFAULT_MAINTENANCE_RATE


class TotalCostResult(_Record):
    monthly_mortgage: float
    monthly_property_tax: float
    monthly_insurance: float
    monthly_hoa: float
    monthly_pmi: float
    monthly_maintenance: float
    total_monthly: float
    total_annual: float


class DTIParams(_Record):
    gross_monthly_income: float
    monthly_housing_cost: float
    monthly_other_debts: Optional[float] = 0.0


class DTIResult(_Record):
    front_end_dti: float
    back_end_dti: float
    can_afford_conventional: bool
    can_afford_fha: bool
    can_afford_ideal: bool


class AffordabilityInputs(_Record):
    """DTI inputs for a snapshot; housing cost is derived when omitted."""

    gross_monthly_income: float
    monthly_other_debts: Optional[float] = 0.0
    monthly_housing_cost: Optional[float] = None


class FinancialInputs(_Record):
    mortgage: MortgageParams
    total_cost: Optional[TotalCostParams] = None
    affordability: Optional[AffordabilityInputs] = None


class FinancialResults(_Record):
    monthly_payment: float
    total_payments: float
    total_interest: float
    total_monthly: Optional[float] = None
    front_end_dti: Optional[float] = None
    back_end_dti: Optional[float] = None
    can_afford: Optional[bool] = None
    calculated_at: datetime


class FinancialData(_Record):
    """Everything a caller stores against a property after a calculation."""

    mortgage: MortgageParams
    total_cost: Optional[TotalCostParams] = None
    affordability: Optional[AffordabilityInputs] = None
    mortgage_result: MortgageResult
    total_cost_result: Optional[TotalCostResult] = None
    dti_result: Optional[DTIResult] = None
    results: FinancialResults
