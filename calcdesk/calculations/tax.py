"""
Income Tax Calculations

Progressive marginal-bracket tax. Bracket ladders, standard deductions and
credits are reference data keyed by tax year; the calculations themselves
are year-agnostic.
"""

import enum
from typing import Dict, List, Mapping, Optional, Tuple
from dataclasses import dataclass

from pydantic import BaseModel, Field, model_validator

from calcdesk.calculations.errors import (
    InvalidInputError,
    UnsupportedParameterError,
    require_finite,
)

STUDENT_LOAN_INTEREST_CAP = 2500


class FilingStatus(str, enum.Enum):
    single = "single"
    married_jointly = "married_jointly"
    head_of_household = "head_of_household"


class TaxBracket(BaseModel):
    """A marginal rate applied to income up to ``limit`` (None = unbounded)."""

    rate: float = Field(ge=0, le=1)
    limit: Optional[float] = None

    @property
    def upper_limit(self) -> float:
        return float("inf") if self.limit is None else self.limit


class TaxCredits(BaseModel):
    child_tax_credit: float = 0.0
    other_dependent_credit: float = 0.0


class TaxTable(BaseModel):
    """Deductions, bracket ladders and credits for one tax year."""

    standard_deduction: Dict[FilingStatus, float]
    brackets: Dict[FilingStatus, List[TaxBracket]]
    credits: TaxCredits = TaxCredits()

    @model_validator(mode="after")
    def check_ladders(self) -> "TaxTable":
        for status in FilingStatus:
            if status not in self.standard_deduction:
                raise ValueError(f"Missing standard deduction for {status.value}")
            ladder = self.brackets.get(status)
            if not ladder:
                raise ValueError(f"Missing brackets for {status.value}")

            limits = [bracket.upper_limit for bracket in ladder]
            if any(lower >= upper for lower, upper in zip(limits, limits[1:])):
                raise ValueError(
                    f"Bracket limits for {status.value} must be strictly increasing"
                )
            if ladder[-1].limit is not None:
                raise ValueError(
                    f"Last bracket for {status.value} must be unbounded"
                )
        return self


@dataclass(frozen=True)
class TaxInput:
    gross_income: float
    filing_status: FilingStatus
    year: int


@dataclass(frozen=True)
class TaxResult:
    taxable_income: float
    total_tax: float
    marginal_rate: float
    effective_rate: float


@dataclass(frozen=True)
class TaxReturnInput:
    """Line items of a simplified federal return."""

    filing_status: FilingStatus
    year: int
    wages: float = 0.0
    interest_income: float = 0.0
    ordinary_dividends: float = 0.0
    rental_income: float = 0.0
    short_term_gains: float = 0.0
    long_term_gains: float = 0.0
    other_income: float = 0.0
    ira_contributions: float = 0.0
    student_loan_interest: float = 0.0
    real_estate_tax: float = 0.0
    mortgage_interest: float = 0.0
    charitable_donations: float = 0.0
    other_deductibles: float = 0.0
    young_dependents: int = 0
    other_dependents: int = 0
    federal_withheld: float = 0.0


@dataclass(frozen=True)
class TaxReturnResult:
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


def get_table(tables: Mapping[int, TaxTable], year: int) -> TaxTable:
    """Look up the table for a tax year."""
    table = tables.get(year)
    if table is None:
        raise UnsupportedParameterError(f"No tax table available for {year}")
    return table


def apply_brackets(
    taxable_income: float, brackets: List[TaxBracket]
) -> Tuple[float, float]:
    """
    Walk a bracket ladder and accumulate tax.

    Each bracket taxes the slice of income between the previous limit and
    its own limit. The walk stops once taxable income is exhausted.

    Returns:
        (total_tax, marginal_rate) where marginal_rate is the rate of the
        last bracket touched, or the first bracket's rate for zero income
    """
    total_tax = 0.0
    marginal_rate = brackets[0].rate
    lower = 0.0

    for bracket in brackets:
        if taxable_income <= lower:
            break
        upper = min(taxable_income, bracket.upper_limit)
        total_tax += (upper - lower) * bracket.rate
        marginal_rate = bracket.rate
        lower = bracket.upper_limit

    return total_tax, marginal_rate


def compute_tax(tax_input: TaxInput, tables: Mapping[int, TaxTable]) -> TaxResult:
    """
    Compute federal income tax using the standard deduction.

    Args:
        tax_input: Gross income, filing status and year
        tables: Tax tables keyed by year

    Raises:
        InvalidInputError: If gross income is negative or not finite
        UnsupportedParameterError: If no table exists for the year
    """
    require_finite(gross_income=tax_input.gross_income)
    if tax_input.gross_income < 0:
        raise InvalidInputError("Gross income cannot be negative")

    table = get_table(tables, tax_input.year)
    status = FilingStatus(tax_input.filing_status)

    deduction = table.standard_deduction[status]
    taxable_income = max(0.0, tax_input.gross_income - deduction)

    total_tax, marginal_rate = apply_brackets(taxable_income, table.brackets[status])

    return TaxResult(
        taxable_income=taxable_income,
        total_tax=total_tax,
        marginal_rate=marginal_rate,
        effective_rate=total_tax / taxable_income if taxable_income > 0 else 0.0,
    )


def compute_tax_return(
    return_input: TaxReturnInput, tables: Mapping[int, TaxTable]
) -> TaxReturnResult:
    """
    Estimate a full return: adjustments, standard vs. itemized deduction,
    dependent credits and the refund or balance due against withholding.
    """
    amounts = {
        name: value
        for name, value in vars(return_input).items()
        if name not in ("filing_status", "year")
    }
    require_finite(**amounts)
    if any(value < 0 for value in amounts.values()):
        raise InvalidInputError("Return amounts cannot be negative")

    table = get_table(tables, return_input.year)
    status = FilingStatus(return_input.filing_status)

    gross_income = (
        return_input.wages
        + return_input.interest_income
        + return_input.ordinary_dividends
        + return_input.rental_income
        + return_input.short_term_gains
        + return_input.long_term_gains
        + return_input.other_income
    )
    require_finite(gross_income=gross_income)

    adjustments = return_input.ira_contributions + min(
        return_input.student_loan_interest, STUDENT_LOAN_INTEREST_CAP
    )
    adjusted_gross_income = gross_income - adjustments

    itemized_total = (
        return_input.real_estate_tax
        + return_input.mortgage_interest
        + return_input.charitable_donations
        + return_input.other_deductibles
    )
    require_finite(itemized_deductions=itemized_total)
    standard = table.standard_deduction[status]
    deduction = max(standard, itemized_total)

    taxable_income = max(0.0, adjusted_gross_income - deduction)
    tax_before_credits, marginal_rate = apply_brackets(
        taxable_income, table.brackets[status]
    )

    total_credits = (
        return_input.young_dependents * table.credits.child_tax_credit
        + return_input.other_dependents * table.credits.other_dependent_credit
    )
    federal_tax = max(0.0, tax_before_credits - total_credits)

    return TaxReturnResult(
        gross_income=gross_income,
        adjusted_gross_income=adjusted_gross_income,
        deduction=deduction,
        itemized=itemized_total > standard,
        taxable_income=taxable_income,
        tax_before_credits=tax_before_credits,
        total_credits=total_credits,
        federal_tax=federal_tax,
        marginal_rate=marginal_rate,
        effective_rate=federal_tax / taxable_income if taxable_income > 0 else 0.0,
        refund_or_owed=return_input.federal_withheld - federal_tax,
    )
