"""
Calculation Errors

Every engine reports bad input by raising one of these.
All of them are ValueError subclasses.
"""

import math


class CalculationError(ValueError):
    """Base class for calculation failures."""


class InvalidInputError(CalculationError):
    """Input is out of range, malformed, or would produce degenerate math."""


class UnsupportedParameterError(CalculationError):
    """A requested parameter (tax year, CPI period) has no reference data."""


def require_finite(**values: float) -> None:
    """Raise InvalidInputError naming the first value that is NaN or infinite."""
    for name, value in values.items():
        if not math.isfinite(value):
            raise InvalidInputError(f"{name} must be a finite number")
