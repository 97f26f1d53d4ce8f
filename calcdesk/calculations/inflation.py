"""
Inflation Calculations

CPI-based conversion between two months of history, and flat-rate
projection forward or discounting backward.
"""

import math
from typing import Dict, Mapping

from calcdesk.calculations.errors import (
    InvalidInputError,
    UnsupportedParameterError,
    require_finite,
)

CpiTable = Mapping[int, Mapping[int, float]]


def _cpi_for(cpi: CpiTable, year: int, month: int) -> float:
    if not 1 <= month <= 12:
        raise InvalidInputError("Month must be between 1 and 12")
    value = cpi.get(year, {}).get(month)
    if value is None:
        raise UnsupportedParameterError(f"No CPI data for {year}-{month:02d}")
    return value


def adjust_for_cpi(
    amount: float,
    from_year: int,
    from_month: int,
    to_year: int,
    to_month: int,
    cpi: CpiTable,
) -> float:
    """
    Convert an amount between two months using the consumer price index.

    Returns:
        amount * CPI(to) / CPI(from)

    Raises:
        UnsupportedParameterError: If either month is missing from the table
    """
    require_finite(amount=amount)
    from_cpi = _cpi_for(cpi, from_year, from_month)
    to_cpi = _cpi_for(cpi, to_year, to_month)
    return _finite_amount(amount * (to_cpi / from_cpi))


def _growth(rate_pct: float, years: float) -> float:
    require_finite(rate_pct=rate_pct, years=years)
    if rate_pct <= -100:
        raise InvalidInputError("Inflation rate must be greater than -100%")
    if years < 0:
        raise InvalidInputError("Years cannot be negative")
    try:
        growth = (1 + rate_pct / 100) ** years
    except OverflowError as e:
        raise InvalidInputError("Rate and years are too large to compound") from e
    return growth


def _finite_amount(value: float) -> float:
    if not math.isfinite(value):
        raise InvalidInputError("Result is too large to represent")
    return value


def project_forward(amount: float, rate_pct: float, years: float) -> float:
    """Future cost of ``amount`` after ``years`` of constant inflation."""
    require_finite(amount=amount)
    return _finite_amount(amount * _growth(rate_pct, years))


def discount_backward(amount: float, rate_pct: float, years: float) -> float:
    """Value ``years`` ago of an amount in today's money."""
    require_finite(amount=amount)
    growth = _growth(rate_pct, years)
    if growth == 0:
        raise InvalidInputError("Rate and years are too small to discount")
    return _finite_amount(amount / growth)


def annual_inflation_rates(cpi: CpiTable) -> Dict[int, float]:
    """
    Year-over-year inflation in percent, from the average CPI of each year.

    Only complete consecutive years are compared.
    """
    averages = {
        year: sum(months.values()) / len(months)
        for year, months in cpi.items()
        if len(months) == 12
    }
    return {
        year: (average / averages[year - 1] - 1) * 100
        for year, average in sorted(averages.items())
        if year - 1 in averages
    }
