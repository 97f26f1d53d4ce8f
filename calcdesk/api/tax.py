"""
Income tax API endpoints.
"""

from fastapi import APIRouter
from pydantic import BaseModel
from typing import List

from calcdesk.api.common import money, to_http_error
from calcdesk.calculations import tax as tax_engine
from calcdesk.calculations.errors import CalculationError
from calcdesk.calculations.tax import FilingStatus
from calcdesk.reference import get_tax_tables

router = APIRouter()


class IncomeTaxInput(BaseModel):
    """Input for standard-deduction income tax."""

    gross_income: float
    filing_status: FilingStatus = FilingStatus.single
    year: int


class IncomeTaxResponse(BaseModel):
    taxable_income: float
    total_tax: float
    marginal_rate: float
    effective_rate: float


@router.post("/income", response_model=IncomeTaxResponse)
async def calculate_income_tax(inputs: IncomeTaxInput):
    """Compute tax on gross income using the standard deduction."""
    try:
        result = tax_engine.compute_tax(
            tax_engine.TaxInput(
                gross_income=inputs.gross_income,
                filing_status=inputs.filing_status,
                year=inputs.year,
            ),
            get_tax_tables(),
        )
    except CalculationError as e:
        raise to_http_error(e)

    return IncomeTaxResponse(
        taxable_income=money(result.taxable_income),
        total_tax=money(result.total_tax),
        marginal_rate=result.marginal_rate,
        effective_rate=round(result.effective_rate, 6),
    )


class TaxReturnInput(BaseModel):
    """Line items of a simplified federal return."""

    filing_status: FilingStatus = FilingStatus.single
    year: int

    # Income
    wages: float = 0.0
    interest_income: float = 0.0
    ordinary_dividends: float = 0.0
    rental_income: float = 0.0
    short_term_gains: float = 0.0
    long_term_gains: float = 0.0
    other_income: float = 0.0

    # Adjustments
    ira_contributions: float = 0.0
    student_loan_interest: float = 0.0

    # Itemized deductions
    real_estate_tax: float = 0.0
    mortgage_interest: float = 0.0
    charitable_donations: float = 0.0
    other_deductibles: float = 0.0

    # Credits and payments
    young_dependents: int = 0
    other_dependents: int = 0
    federal_withheld: float = 0.0


class TaxReturnResponse(BaseModel):
    gross_income: float
    adjusted_gross_income: float
    deduction: float
    itemized: bool
    taxable_income: float
    tax_before_credits: float
    total_credits: float
    federal_tax: float
    marginal_rate: float
    effective_rate: float
    refund_or_owed: float


@router.post("/return", response_model=TaxReturnResponse)
async def calculate_tax_return(inputs: TaxReturnInput):
    """Estimate a return including deductions, credits and withholding."""
    try:
        result = tax_engine.compute_tax_return(
            tax_engine.TaxReturnInput(**inputs.model_dump()),
            get_tax_tables(),
        )
    except CalculationError as e:
        raise to_http_error(e)

    return TaxReturnResponse(
        gross_income=money(result.gross_income),
        adjusted_gross_income=money(result.adjusted_gross_income),
        deduction=money(result.deduction),
        itemized=result.itemized,
        taxable_income=money(result.taxable_income),
        tax_before_credits=money(result.tax_before_credits),
        total_credits=money(result.total_credits),
        federal_tax=money(result.federal_tax),
        marginal_rate=result.marginal_rate,
        effective_rate=round(result.effective_rate, 6),
        refund_or_owed=money(result.refund_or_owed),
    )


@router.get("/years", response_model=List[int])
async def list_tax_years():
    """Tax years with reference tables loaded."""
    return sorted(get_tax_tables())
