"""
Interest Rate Conversions

Converts nominal rates between compounding frequencies by normalizing
through the effective annual rate (APY).
"""

from typing import Dict

from calcdesk.calculations.errors import InvalidInputError, require_finite

COMPOUNDING_PERIODS: Dict[str, int] = {
    "annually": 1,
    "semiannually": 2,
    "quarterly": 4,
    "monthly": 12,
    "semimonthly": 24,
    "biweekly": 26,
    "weekly": 52,
    "daily": 365,
}


def _validate(nominal_rate_pct: float, *periods_per_year: int) -> None:
    require_finite(nominal_rate_pct=nominal_rate_pct)
    if nominal_rate_pct < 0:
        raise InvalidInputError("Interest rate cannot be negative")
    for periods in periods_per_year:
        if periods <= 0:
            raise InvalidInputError("Compounding periods per year must be positive")


def effective_annual_rate(nominal_rate_pct: float, periods_per_year: int) -> float:
    """
    Calculate the effective annual rate (APY) of a nominal rate.

    Args:
        nominal_rate_pct: Nominal annual rate in percent (e.g., 6 for 6%)
        periods_per_year: Compounding periods per year

    Returns:
        Effective annual rate as decimal (e.g., 0.0617 for 6.17%)

    Raises:
        InvalidInputError: Negative or non-finite rate, non-positive periods,
            or a result too large to represent
    """
    _validate(nominal_rate_pct, periods_per_year)
    rate = nominal_rate_pct / 100
    try:
        return (1 + rate / periods_per_year) ** periods_per_year - 1
    except OverflowError as e:
        raise InvalidInputError("Rate is too large to compound") from e


def convert_rate(
    nominal_rate_pct: float,
    source_periods_per_year: int,
    target_periods_per_year: int,
) -> float:
    """
    Convert a nominal rate to the equivalent rate at another compounding frequency.

    Args:
        nominal_rate_pct: Nominal annual rate in percent
        source_periods_per_year: Compounding frequency of the input rate
        target_periods_per_year: Compounding frequency of the result

    Returns:
        Equivalent nominal annual rate in percent
    """
    _validate(nominal_rate_pct, source_periods_per_year, target_periods_per_year)

    ear = effective_annual_rate(nominal_rate_pct, source_periods_per_year)
    target = target_periods_per_year * (
        (1 + ear) ** (1 / target_periods_per_year) - 1
    )
    return target * 100
