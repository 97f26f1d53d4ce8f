"""
Date and age API endpoints.
"""

from fastapi import APIRouter
from pydantic import BaseModel
from typing import Literal, Optional
from datetime import date

from calcdesk.api.common import to_http_error
from calcdesk.calculations import dates
from calcdesk.calculations.errors import CalculationError

router = APIRouter()


class AgeInput(BaseModel):
    dob: date
    as_of: Optional[date] = None  # defaults to today


class AgeResponse(BaseModel):
    years: int
    months: int
    days: int
    total_weeks: int
    total_days: int
    total_hours: int
    total_minutes: int
    total_seconds: int


@router.post("/age", response_model=AgeResponse)
async def calculate_age(inputs: AgeInput):
    """Age in calendar years, months and days, plus flat totals."""
    try:
        result = dates.age_breakdown(inputs.dob, inputs.as_of or date.today())
    except CalculationError as e:
        raise to_http_error(e)
    return AgeResponse(**vars(result))


class DifferenceInput(BaseModel):
    start_date: date
    end_date: date


class DifferenceResponse(BaseModel):
    years: int
    months: int
    total_weeks: int
    total_days: int


@router.post("/difference", response_model=DifferenceResponse)
async def calculate_difference(inputs: DifferenceInput):
    """Time between two dates."""
    try:
        result = dates.date_difference(inputs.start_date, inputs.end_date)
    except CalculationError as e:
        raise to_http_error(e)
    return DifferenceResponse(**vars(result))


class ShiftInput(BaseModel):
    start_date: date
    operation: Literal["add", "subtract"] = "add"
    years: int = 0
    months: int = 0
    weeks: int = 0
    days: int = 0


class ShiftResponse(BaseModel):
    result_date: date


@router.post("/shift", response_model=ShiftResponse)
async def calculate_shift(inputs: ShiftInput):
    """Add or subtract a duration from a date."""
    try:
        result = dates.shift_date(
            inputs.start_date,
            years=inputs.years,
            months=inputs.months,
            weeks=inputs.weeks,
            days=inputs.days,
            subtract=inputs.operation == "subtract",
        )
    except CalculationError as e:
        raise to_http_error(e)
    return ShiftResponse(result_date=result)
