"""
Calculation Engine

Pure, UI-agnostic calculation modules for the calculator catalog.
Every function takes plain values and returns an immutable result, raising
InvalidInputError or UnsupportedParameterError instead of returning NaN.
"""

from calcdesk.calculations import (
    amortization,
    dates,
    expression,
    inflation,
    rates,
    statistics,
    subnet,
    tax,
)
from calcdesk.calculations.errors import (
    CalculationError,
    InvalidInputError,
    UnsupportedParameterError,
)

__all__ = [
    "amortization",
    "dates",
    "expression",
    "inflation",
    "rates",
    "statistics",
    "subnet",
    "tax",
    "CalculationError",
    "InvalidInputError",
    "UnsupportedParameterError",
]
