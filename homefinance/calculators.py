from __future__ import annotations

import logging
import math
from datetime import datetime, timezone
from typing import Optional

import pandas as pd

from .errors import InvalidInput
from .models import (
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
from .presets import (
    AFFORDABILITY_LIMITS,
    DEFAULT_MAINTENANCE_RATE,
    INCOME_NOT_POSITIVE,
    MONTHS_PER_YEAR,
    PMI_LTV_THRESHOLD,
    PRICE_MISSING,
    PRICE_NEGATIVE,
    PRINCIPAL_NEGATIVE,
    RATE_NEGATIVE,
    TERM_NOT_POSITIVE,
)

logger = logging.getLogger(__name__)

SCHEDULE_COLUMNS = ["Month", "Payment", "Interest", "Principal", "Balance"]
ANNUAL_SCHEDULE_COLUMNS = ["Year", "Payment", "Interest", "Principal", "Balance"]


def nz(x, default=0.0):
    """Return a float for ``x`` or a fallback value.

    Optional cost fields arrive as ``None`` when the caller leaves them blank;
    that counts as omitted.  The models reject ``NaN`` before it gets here.
    """

    if x is None:
        return default
    return float(x)


def _reject(message: str):
    logger.debug("Rejected calculation input: %s", message)
    raise InvalidInput(message)


def validate_mortgage_params(params: MortgageParams) -> None:
    """Check mortgage inputs in a fixed order; the first failure wins."""

    if params.principal < 0:
        _reject(PRINCIPAL_NEGATIVE)
    if params.annual_interest_rate < 0:
        _reject(RATE_NEGATIVE)
    if params.loan_term_years <= 0:
        _reject(TERM_NOT_POSITIVE)


def calculate_mortgage_payment(params: MortgageParams) -> MortgageResult:
    """Calculate the fully amortizing monthly payment for a fixed-rate loan.

    ``annual_interest_rate`` is a fraction (``0.06`` for 6%).  Uses the
    standard form

        M = P * r(1+r)^n / ((1+r)^n - 1)

    with ``r`` the monthly rate and ``n`` the number of monthly payments,
    evaluated as ``P * r / (1 - (1+r)^-n)`` through ``expm1``/``log1p``.  The
    formula is undefined at ``r = 0``, so a zero rate divides the principal
    evenly and reports ``total_payments`` as the principal itself.  Nothing is
    rounded; display rounding is up to the caller.
    """

    validate_mortgage_params(params)
    L = params.principal
    n = params.loan_term_years * MONTHS_PER_YEAR

    if L == 0:
        return MortgageResult(monthly_payment=0.0, total_payments=0.0, total_interest=0.0)

    if params.annual_interest_rate == 0:
        logger.debug("Zero-rate loan: principal=%s months=%s", L, n)
        return MortgageResult(monthly_payment=L / n, total_payments=L, total_interest=0.0)

    r = params.annual_interest_rate / MONTHS_PER_YEAR
    # r / (1 - (1+r)^-n), kept finite for tiny rates and very long terms
    payment = L * r / -math.expm1(-n * math.log1p(r))
    total = payment * n
    logger.debug(
        "Mortgage payment: principal=%s rate=%s months=%s payment=%s",
        L,
        params.annual_interest_rate,
        n,
        payment,
    )
    # near-zero rates can round total just under L
    return MortgageResult(
        monthly_payment=payment, total_payments=total, total_interest=max(0.0, total - L)
    )


def calculate_total_cost(params: TotalCostParams) -> TotalCostResult:
    """Blend the mortgage payment with recurring ownership costs.

    Taxes and insurance are annual figures; HOA dues and PMI are already
    monthly.  Maintenance is budgeted as a share of the purchase price per
    year.  Mortgage validation errors propagate unchanged.
    """

    mortgage = calculate_mortgage_payment(params.mortgage)
    taxes = nz(params.property_tax_annual) / MONTHS_PER_YEAR
    insurance = nz(params.insurance_annual) / MONTHS_PER_YEAR
    hoa = nz(params.hoa_monthly)
    pmi = nz(params.pmi_monthly)
    maintenance = (
        params.purchase_price * nz(params.maintenance_rate, DEFAULT_MAINTENANCE_RATE)
    ) / MONTHS_PER_YEAR
    total = mortgage.monthly_payment + taxes + insurance + hoa + pmi + maintenance
    logger.debug("Total monthly cost: %s", total)
    return TotalCostResult(
        monthly_mortgage=mortgage.monthly_payment,
        monthly_property_tax=taxes,
        monthly_insurance=insurance,
        monthly_hoa=hoa,
        monthly_pmi=pmi,
        monthly_maintenance=maintenance,
        total_monthly=total,
        total_annual=total * MONTHS_PER_YEAR,
    )


def calculate_dti(params: DTIParams) -> DTIResult:
    """Return front-end and back-end DTI percentages with affordability flags.

    Each flag is an independent, inclusive check against
    :data:`~homefinance.presets.AFFORDABILITY_LIMITS`.
    """

    inc = params.gross_monthly_income
    if inc <= 0:
        _reject(INCOME_NOT_POSITIVE)
    housing = params.monthly_housing_cost
    fe = housing / inc * 100
    be = (housing + nz(params.monthly_other_debts)) / inc * 100

    conventional = AFFORDABILITY_LIMITS["Conventional"]
    fha = AFFORDABILITY_LIMITS["FHA"]
    ideal = AFFORDABILITY_LIMITS["Ideal"]
    return DTIResult(
        front_end_dti=fe,
        back_end_dti=be,
        can_afford_conventional=be <= conventional["BE"],
        can_afford_fha=fe <= fha["FE"] and be <= fha["BE"],
        can_afford_ideal=be <= ideal["BE"],
    )


def compute_ltv(principal, purchase_price):
    """Compute loan-to-value percentage.

    A zero price is only meaningful with no loan against it.
    """

    if principal < 0:
        _reject(PRINCIPAL_NEGATIVE)
    if purchase_price < 0:
        _reject(PRICE_NEGATIVE)
    if purchase_price == 0:
        if principal > 0:
            _reject(PRICE_MISSING)
        return 0.0
    return 100.0 * principal / purchase_price


def pmi_required(principal, purchase_price) -> bool:
    """True when the loan is large enough that lenders expect PMI.

    A down payment of at least 20% (LTV at or below 80%) avoids it.
    """

    return compute_ltv(principal, purchase_price) > PMI_LTV_THRESHOLD


def amortization_schedule(params: MortgageParams, annual: bool = False) -> pd.DataFrame:
    """Month-by-month amortization schedule, optionally aggregated by year.

    Interest accrues on the opening balance each month and the rest of the
    payment reduces principal.  The last payment clears whatever balance
    remains, so the ``Principal`` column always sums to the loan amount.
    """

    result = calculate_mortgage_payment(params)
    n = params.loan_term_years * MONTHS_PER_YEAR
    r = params.annual_interest_rate / MONTHS_PER_YEAR

    rows = []
    bal = params.principal
    for m in range(1, n + 1):
        if bal <= 0:
            break
        interest = bal * r
        principal_paid = result.monthly_payment - interest
        if m == n or principal_paid > bal:
            principal_paid = bal
        bal = max(0.0, bal - principal_paid)
        rows.append(
            {
                "Month": m,
                "Payment": interest + principal_paid,
                "Interest": interest,
                "Principal": principal_paid,
                "Balance": bal,
            }
        )

    out = pd.DataFrame(rows, columns=SCHEDULE_COLUMNS)
    if not annual:
        return out
    if out.empty:
        return pd.DataFrame(columns=ANNUAL_SCHEDULE_COLUMNS)
    out["Year"] = (out["Month"] - 1) // MONTHS_PER_YEAR + 1
    agg = (
        out.groupby("Year")
        .agg(
            Payment=("Payment", "sum"),
            Interest=("Interest", "sum"),
            Principal=("Principal", "sum"),
            Balance=("Balance", "last"),
        )
        .reset_index()
    )
    return agg[ANNUAL_SCHEDULE_COLUMNS]


def calculate_financials(
    inputs: FinancialInputs, now: Optional[datetime] = None
) -> FinancialData:
    """Run every calculation a property needs and stamp the results.

    The mortgage is always calculated; total cost and affordability only when
    their inputs are present.  Without an explicit housing cost the DTI uses
    the blended monthly total, or the bare mortgage payment when no total cost
    was requested.  Any validation error aborts the whole snapshot.
    """

    mortgage = calculate_mortgage_payment(inputs.mortgage)

    total = None
    if inputs.total_cost is not None:
        total = calculate_total_cost(inputs.total_cost)

    dti_result = None
    aff = inputs.affordability
    if aff is not None:
        housing = aff.monthly_housing_cost
        if housing is None:
            housing = total.total_monthly if total is not None else mortgage.monthly_payment
        dti_result = calculate_dti(
            DTIParams(
                gross_monthly_income=aff.gross_monthly_income,
                monthly_housing_cost=housing,
                monthly_other_debts=aff.monthly_other_debts,
            )
        )

    if now is None:
        now = datetime.now(timezone.utc)
    results = FinancialResults(
        monthly_payment=mortgage.monthly_payment,
        total_payments=mortgage.total_payments,
        total_interest=mortgage.total_interest,
        total_monthly=total.total_monthly if total is not None else None,
        front_end_dti=dti_result.front_end_dti if dti_result is not None else None,
        back_end_dti=dti_result.back_end_dti if dti_result is not None else None,
        can_afford=dti_result.can_afford_conventional if dti_result is not None else None,
        calculated_at=now,
    )
    logger.debug("Calculated financials at %s", now.isoformat())
    return FinancialData(
        mortgage=inputs.mortgage,
        total_cost=inputs.total_cost,
        affordability=inputs.affordability,
        mortgage_result=mortgage,
        total_cost_result=total,
        dti_result=dti_result,
        results=results,
    )
