"""
Loan Amortization Calculations

Implements fixed-rate annuity payments and month-by-month amortization
schedules for mortgage, loan and auto-loan calculators.

Balances are carried unrounded; rounding to cents happens at presentation.
"""

import math
from typing import List, Optional
from dataclasses import dataclass

from calcdesk.calculations.errors import InvalidInputError, require_finite

RATE_SOLVER_MAX_ITERATIONS = 100
RATE_SOLVER_TOLERANCE = 0.0001


@dataclass(frozen=True)
class LoanInput:
    """A loan request."""

    principal: float
    annual_rate_pct: float  # e.g. 5.0 for 5%
    term_months: int
    down_payment: float = 0.0

    @property
    def financed_amount(self) -> float:
        return self.principal - self.down_payment


@dataclass(frozen=True)
class AmortizationRow:
    """One month of the schedule."""

    period: int
    principal_paid: float
    interest_paid: float
    remaining_balance: float


@dataclass(frozen=True)
class AnnualSummaryRow:
    """Schedule rows bucketed into a loan year."""

    year: int
    principal_paid: float
    interest_paid: float
    remaining_balance: float


@dataclass(frozen=True)
class AmortizationResult:
    monthly_payment: float
    total_payment: float
    total_interest: float
    schedule: List[AmortizationRow]


@dataclass(frozen=True)
class HousingCosts:
    """Recurring ownership costs on top of principal and interest."""

    monthly_property_tax: float
    monthly_home_insurance: float
    monthly_pmi: float
    monthly_hoa: float
    monthly_other_costs: float
    total_monthly_cost: float
    total_property_tax: float
    total_home_insurance: float
    total_pmi: float
    total_hoa: float
    total_other_costs: float
    total_out_of_pocket: float


def _monthly_rate(annual_rate_pct: float) -> float:
    return annual_rate_pct / 100 / 12


def calculate_payment(
    principal: float, annual_rate_pct: float, term_months: int
) -> float:
    """
    Calculate the fixed monthly payment of an annuity loan.

    payment = P * r * (1 + r)^n / ((1 + r)^n - 1)

    Args:
        principal: Financed amount
        annual_rate_pct: Annual nominal rate in percent (e.g., 5 for 5%)
        term_months: Number of monthly payments

    Returns:
        Monthly payment amount

    Raises:
        InvalidInputError: If principal, rate or term is not positive, or
            the payment is too large to represent
    """
    require_finite(principal=principal, annual_rate_pct=annual_rate_pct)
    if principal <= 0:
        raise InvalidInputError("Financed principal must be positive")
    if term_months <= 0:
        raise InvalidInputError("Term must be at least one month")

    monthly_rate = _monthly_rate(annual_rate_pct)
    if monthly_rate <= 0:
        raise InvalidInputError("Interest rate must be positive")

    # Same formula as P*r/(1 - (1 + r)^-n); the discount factor underflows to 0
    # for long terms at high rates.
    discount = (1 + monthly_rate) ** -term_months
    payment = principal * monthly_rate / (1 - discount)
    if not math.isfinite(payment):
        raise InvalidInputError("Payment is too large to represent")
    return payment


def amortize(loan: LoanInput) -> AmortizationResult:
    """
    Generate the full monthly amortization schedule for a loan.

    Args:
        loan: Loan inputs; the down payment is subtracted from the principal

    Returns:
        Payment, totals and one AmortizationRow per month

    Raises:
        InvalidInputError: If the financed amount, rate or term is not positive
    """
    financed = loan.financed_amount
    payment = calculate_payment(financed, loan.annual_rate_pct, loan.term_months)
    monthly_rate = _monthly_rate(loan.annual_rate_pct)

    schedule = []
    balance = financed

    for period in range(1, loan.term_months + 1):
        interest = balance * monthly_rate
        principal_pmt = payment - interest
        balance -= principal_pmt

        schedule.append(
            AmortizationRow(
                period=period,
                principal_paid=principal_pmt,
                interest_paid=interest,
                remaining_balance=balance,
            )
        )

    total_payment = payment * loan.term_months
    if not math.isfinite(total_payment):
        raise InvalidInputError("Total payment is too large to represent")

    return AmortizationResult(
        monthly_payment=payment,
        total_payment=total_payment,
        total_interest=total_payment - financed,
        schedule=schedule,
    )


def summarize_by_year(schedule: List[AmortizationRow]) -> List[AnnualSummaryRow]:
    """
    Bucket a monthly schedule into loan years.

    A row is emitted every 12th period and on the final period, so a term
    that is not a whole number of years ends with a partial year.
    """
    summary = []
    principal_acc = 0.0
    interest_acc = 0.0

    for index, row in enumerate(schedule):
        principal_acc += row.principal_paid
        interest_acc += row.interest_paid

        is_last = index == len(schedule) - 1
        if row.period % 12 == 0 or is_last:
            summary.append(
                AnnualSummaryRow(
                    year=(row.period - 1) // 12 + 1,
                    principal_paid=principal_acc,
                    interest_paid=interest_acc,
                    remaining_balance=row.remaining_balance,
                )
            )
            principal_acc = 0.0
            interest_acc = 0.0

    return summary


def solve_annual_rate(
    loan_amount: float, term_months: int, monthly_payment: float
) -> float:
    """
    Find the annual rate implied by a loan amount, term and payment.

    Bisects the monthly rate between 0% and 100% until the annuity payment
    matches within RATE_SOLVER_TOLERANCE.

    Returns:
        Annual nominal rate in percent
    """
    require_finite(loan_amount=loan_amount, monthly_payment=monthly_payment)
    if loan_amount <= 0 or monthly_payment <= 0:
        raise InvalidInputError("Loan amount and payment must be positive")
    if term_months <= 0:
        raise InvalidInputError("Term must be at least one month")
    if loan_amount / term_months >= monthly_payment:
        raise InvalidInputError(
            "Monthly payment does not cover the loan amount over the term"
        )

    low = 0.0
    high = 1.0
    mid = 0.5

    for _ in range(RATE_SOLVER_MAX_ITERATIONS):
        mid = (low + high) / 2
        guess = loan_amount * mid / (1 - (1 + mid) ** -term_months)

        if abs(guess - monthly_payment) < RATE_SOLVER_TOLERANCE:
            break
        if guess > monthly_payment:
            high = mid
        else:
            low = mid

    return mid * 12 * 100


def estimate_housing_costs(
    home_price: float,
    monthly_payment: float,
    term_months: int,
    property_tax_rate_pct: float = 0.0,
    home_insurance_annual: float = 0.0,
    pmi_monthly: float = 0.0,
    hoa_monthly: float = 0.0,
    other_costs_annual: float = 0.0,
    total_payment: Optional[float] = None,
) -> HousingCosts:
    """
    Add ownership costs to a mortgage payment.

    Args:
        home_price: Purchase price, the base for property tax
        monthly_payment: Principal and interest payment
        term_months: Loan term used for lifetime totals
        property_tax_rate_pct: Annual property tax as percent of home price
        home_insurance_annual: Annual insurance premium
        pmi_monthly: Monthly private mortgage insurance
        hoa_monthly: Monthly HOA dues
        other_costs_annual: Annual maintenance and other costs
        total_payment: Lifetime principal and interest; defaults to
            monthly_payment * term_months
    """
    extras = {
        "property_tax_rate_pct": property_tax_rate_pct,
        "home_insurance_annual": home_insurance_annual,
        "pmi_monthly": pmi_monthly,
        "hoa_monthly": hoa_monthly,
        "other_costs_annual": other_costs_annual,
    }
    require_finite(home_price=home_price, monthly_payment=monthly_payment, **extras)
    if any(value < 0 for value in extras.values()):
        raise InvalidInputError("Housing costs cannot be negative")
    if term_months <= 0:
        raise InvalidInputError("Term must be at least one month")

    if total_payment is None:
        total_payment = monthly_payment * term_months

    monthly_property_tax = home_price * (property_tax_rate_pct / 100) / 12
    monthly_home_insurance = home_insurance_annual / 12
    monthly_other_costs = other_costs_annual / 12

    total_monthly_cost = (
        monthly_payment
        + monthly_property_tax
        + monthly_home_insurance
        + pmi_monthly
        + hoa_monthly
        + monthly_other_costs
    )

    total_property_tax = monthly_property_tax * term_months
    total_home_insurance = monthly_home_insurance * term_months
    total_pmi = pmi_monthly * term_months
    total_hoa = hoa_monthly * term_months
    total_other_costs = monthly_other_costs * term_months

    return HousingCosts(
        monthly_property_tax=monthly_property_tax,
        monthly_home_insurance=monthly_home_insurance,
        monthly_pmi=pmi_monthly,
        monthly_hoa=hoa_monthly,
        monthly_other_costs=monthly_other_costs,
        total_monthly_cost=total_monthly_cost,
        total_property_tax=total_property_tax,
        total_home_insurance=total_home_insurance,
        total_pmi=total_pmi,
        total_hoa=total_hoa,
        total_other_costs=total_other_costs,
        total_out_of_pocket=total_payment
        + total_property_tax
        + total_home_insurance
        + total_pmi
        + total_hoa
        + total_other_costs,
    )
