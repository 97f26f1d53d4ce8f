"""
Financial calculation API endpoints.

These endpoints accept form inputs and return calculated results.
Amounts are rounded to cents here and nowhere else.
"""

from fastapi import APIRouter
from pydantic import BaseModel, Field
from typing import Dict, List, Optional
from datetime import date
from dateutil.relativedelta import relativedelta

from calcdesk.api.common import money, to_http_error
from calcdesk.calculations import amortization, inflation, rates
from calcdesk.calculations.errors import CalculationError
from calcdesk.reference import get_cpi_table

router = APIRouter()

MAX_TERM_YEARS = 100
MAX_TERM_MONTHS = MAX_TERM_YEARS * 12


class AmortizationInput(BaseModel):
    """Input for amortization calculation."""

    principal: float
    annual_rate_pct: float
    term_months: int = Field(le=MAX_TERM_MONTHS)
    down_payment: float = 0.0
    annual: bool = False


class ScheduleRow(BaseModel):
    period: int
    principal_paid: float
    interest_paid: float
    remaining_balance: float


class AnnualRow(BaseModel):
    year: int
    principal_paid: float
    interest_paid: float
    remaining_balance: float


class AmortizationResponse(BaseModel):
    """Response with payment, totals and schedule."""

    financed_amount: float
    monthly_payment: float
    total_payment: float
    total_interest: float
    schedule: List[ScheduleRow]
    annual_schedule: Optional[List[AnnualRow]] = None


def _schedule_rows(result: amortization.AmortizationResult) -> List[ScheduleRow]:
    return [
        ScheduleRow(
            period=row.period,
            principal_paid=money(row.principal_paid),
            interest_paid=money(row.interest_paid),
            remaining_balance=money(max(0.0, row.remaining_balance)),
        )
        for row in result.schedule
    ]


def _annual_rows(result: amortization.AmortizationResult) -> List[AnnualRow]:
    return [
        AnnualRow(
            year=row.year,
            principal_paid=money(row.principal_paid),
            interest_paid=money(row.interest_paid),
            remaining_balance=money(max(0.0, row.remaining_balance)),
        )
        for row in amortization.summarize_by_year(result.schedule)
    ]


@router.post("/amortization", response_model=AmortizationResponse)
async def calculate_amortization(inputs: AmortizationInput):
    """Generate loan amortization schedule."""
    loan = amortization.LoanInput(
        principal=inputs.principal,
        annual_rate_pct=inputs.annual_rate_pct,
        term_months=inputs.term_months,
        down_payment=inputs.down_payment,
    )
    try:
        result = amortization.amortize(loan)
    except CalculationError as e:
        raise to_http_error(e)

    return AmortizationResponse(
        financed_amount=money(loan.financed_amount),
        monthly_payment=money(result.monthly_payment),
        total_payment=money(result.total_payment),
        total_interest=money(result.total_interest),
        schedule=_schedule_rows(result),
        annual_schedule=_annual_rows(result) if inputs.annual else None,
    )


class MortgageInput(BaseModel):
    """Input for mortgage calculation."""

    home_price: float
    down_payment_percent: float = 20.0
    loan_term_years: int = Field(default=30, le=MAX_TERM_YEARS)
    interest_rate_pct: float
    start_date: Optional[date] = None

    # Annual property tax as percent of home price
    property_tax_rate_pct: float = 0.0
    home_insurance_annual: float = 0.0
    pmi_monthly: float = 0.0
    hoa_monthly: float = 0.0
    other_costs_annual: float = 0.0


class MortgageResponse(BaseModel):
    loan_amount: float
    down_payment_amount: float
    monthly_payment: float
    total_payment: float
    total_interest: float
    payoff_date: Optional[date] = None
    monthly_property_tax: float
    monthly_home_insurance: float
    monthly_pmi: float
    monthly_hoa: float
    monthly_other_costs: float
    total_monthly_cost: float
    total_out_of_pocket: float
    annual_schedule: List[AnnualRow]


@router.post("/mortgage", response_model=MortgageResponse)
async def calculate_mortgage(inputs: MortgageInput):
    """Mortgage payment with taxes, insurance and other ownership costs."""
    down_payment_amount = inputs.home_price * inputs.down_payment_percent / 100
    term_months = inputs.loan_term_years * 12

    try:
        result = amortization.amortize(
            amortization.LoanInput(
                principal=inputs.home_price,
                annual_rate_pct=inputs.interest_rate_pct,
                term_months=term_months,
                down_payment=down_payment_amount,
            )
        )
        costs = amortization.estimate_housing_costs(
            home_price=inputs.home_price,
            monthly_payment=result.monthly_payment,
            term_months=term_months,
            property_tax_rate_pct=inputs.property_tax_rate_pct,
            home_insurance_annual=inputs.home_insurance_annual,
            pmi_monthly=inputs.pmi_monthly,
            hoa_monthly=inputs.hoa_monthly,
            other_costs_annual=inputs.other_costs_annual,
            total_payment=result.total_payment,
        )
    except CalculationError as e:
        raise to_http_error(e)

    payoff_date = None
    if inputs.start_date:
        payoff_date = inputs.start_date + relativedelta(months=term_months)

    return MortgageResponse(
        loan_amount=money(inputs.home_price - down_payment_amount),
        down_payment_amount=money(down_payment_amount),
        monthly_payment=money(result.monthly_payment),
        total_payment=money(result.total_payment),
        total_interest=money(result.total_interest),
        payoff_date=payoff_date,
        monthly_property_tax=money(costs.monthly_property_tax),
        monthly_home_insurance=money(costs.monthly_home_insurance),
        monthly_pmi=money(costs.monthly_pmi),
        monthly_hoa=money(costs.monthly_hoa),
        monthly_other_costs=money(costs.monthly_other_costs),
        total_monthly_cost=money(costs.total_monthly_cost),
        total_out_of_pocket=money(costs.total_out_of_pocket),
        annual_schedule=_annual_rows(result),
    )


class InterestRateInput(BaseModel):
    """Input for solving the rate of a loan."""

    loan_amount: float
    term_months: int = Field(le=MAX_TERM_MONTHS)
    monthly_payment: float


class InterestRateResponse(BaseModel):
    annual_rate_pct: float
    total_payment: float
    total_interest: float


@router.post("/interest-rate", response_model=InterestRateResponse)
async def calculate_interest_rate(inputs: InterestRateInput):
    """Find the annual rate implied by a loan's amount, term and payment."""
    try:
        rate = amortization.solve_annual_rate(
            inputs.loan_amount, inputs.term_months, inputs.monthly_payment
        )
    except CalculationError as e:
        raise to_http_error(e)

    total_payment = inputs.monthly_payment * inputs.term_months

    return InterestRateResponse(
        annual_rate_pct=round(rate, 5),
        total_payment=money(total_payment),
        total_interest=money(total_payment - inputs.loan_amount),
    )


class RateConversionInput(BaseModel):
    """Input for compounding-period conversion."""

    nominal_rate_pct: float
    source_periods_per_year: int
    target_periods_per_year: int


class RateConversionResponse(BaseModel):
    equivalent_rate_pct: float
    effective_annual_rate_pct: float


@router.post("/rate-conversion", response_model=RateConversionResponse)
async def calculate_rate_conversion(inputs: RateConversionInput):
    """Convert a nominal rate to another compounding frequency."""
    try:
        equivalent = rates.convert_rate(
            inputs.nominal_rate_pct,
            inputs.source_periods_per_year,
            inputs.target_periods_per_year,
        )
        ear = rates.effective_annual_rate(
            inputs.nominal_rate_pct, inputs.source_periods_per_year
        )
    except CalculationError as e:
        raise to_http_error(e)

    return RateConversionResponse(
        equivalent_rate_pct=round(equivalent, 5),
        effective_annual_rate_pct=round(ear * 100, 5),
    )


@router.get("/compounding-periods")
async def list_compounding_periods() -> Dict[str, int]:
    """Named compounding frequencies and their periods per year."""
    return rates.COMPOUNDING_PERIODS


class CpiInflationInput(BaseModel):
    amount: float
    from_year: int
    from_month: int
    to_year: int
    to_month: int


class FlatRateInflationInput(BaseModel):
    amount: float
    rate_pct: float
    years: float


class InflationResponse(BaseModel):
    amount: float
    result: float


@router.post("/inflation/cpi", response_model=InflationResponse)
async def calculate_cpi_inflation(inputs: CpiInflationInput):
    """Convert an amount between two months of CPI history."""
    try:
        result = inflation.adjust_for_cpi(
            inputs.amount,
            inputs.from_year,
            inputs.from_month,
            inputs.to_year,
            inputs.to_month,
            get_cpi_table(),
        )
    except CalculationError as e:
        raise to_http_error(e)

    return InflationResponse(amount=inputs.amount, result=money(result))


@router.post("/inflation/flat-rate", response_model=InflationResponse)
async def calculate_flat_rate_inflation(inputs: FlatRateInflationInput, backward: bool = False):
    """Project an amount forward, or discount it backward, at a constant rate."""
    try:
        if backward:
            result = inflation.discount_backward(inputs.amount, inputs.rate_pct, inputs.years)
        else:
            result = inflation.project_forward(inputs.amount, inputs.rate_pct, inputs.years)
    except CalculationError as e:
        raise to_http_error(e)

    return InflationResponse(amount=inputs.amount, result=money(result))


@router.get("/inflation/rates")
async def list_inflation_rates() -> Dict[int, float]:
    """Year-over-year inflation from the CPI table, in percent."""
    return {
        year: round(rate, 1)
        for year, rate in inflation.annual_inflation_rates(get_cpi_table()).items()
    }
