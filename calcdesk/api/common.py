"""
Helpers shared by the API routers.
"""

import logging

from fastapi import HTTPException

from calcdesk.config import get_settings
from calcdesk.calculations.errors import CalculationError, UnsupportedParameterError

logger = logging.getLogger(__name__)


def money(value: float) -> float:
    """Round a currency amount for presentation."""
    return round(value, get_settings().currency_decimals)


def to_http_error(error: CalculationError) -> HTTPException:
    """Translate a calculation failure into an HTTP error response."""
    status_code = 404 if isinstance(error, UnsupportedParameterError) else 400
    logger.warning(f"Calculation rejected ({status_code}): {error}")
    return HTTPException(status_code=status_code, detail=str(error))
