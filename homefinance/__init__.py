"""Mortgage, ownership cost and affordability calculations.

This module also exposes the package version for runtime display."""

from importlib import metadata

from .calculators import (
    amortization_schedule,
    calculate_dti,
    calculate_financials,
    calculate_mortgage_payment,
    calculate_total_cost,
    compute_ltv,
    pmi_required,
)
from .errors import InvalidInput
from .models import (
    AffordabilityInputs,
    DTIParams,
    DTIResult,
    FinancialData,
    FinancialInputs,
    FinancialResults,
    MortgageParams,
    MortgageResult,
    TotalCostParams,
    TotalCostResult,
)
from .rules import RuleResult, affordability_findings, has_blocking

try:
    __version__ = metadata.version("homefinance")
except metadata.PackageNotFoundError:  # pragma: no cover - during local dev
    __version__ = "0.1.0"

__all__ = [
    "__version__",
    "InvalidInput",
    "MortgageParams",
    "MortgageResult",
    "TotalCostParams",
    "TotalCostResult",
    "DTIParams",
    "DTIResult",
    "AffordabilityInputs",
    "FinancialInputs",
    "FinancialResults",
    "FinancialData",
    "RuleResult",
    "calculate_mortgage_payment",
    "calculate_total_cost",
    "calculate_dti",
    "compute_ltv",
    "pmi_required",
    "amortization_schedule",
    "calculate_financials",
    "affordability_findings",
    "has_blocking",
]
