"""
Descriptive statistics API endpoints.
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import List, Optional

from calcdesk.api.common import to_http_error
from calcdesk.calculations import statistics
from calcdesk.calculations.errors import CalculationError
from calcdesk.calculations.statistics import VarianceMode

router = APIRouter()


class DescribeInput(BaseModel):
    """Numbers as a list, or as comma-separated text."""

    values: Optional[List[float]] = None
    text: Optional[str] = None
    mode: VarianceMode = VarianceMode.sample


class DescribeResponse(BaseModel):
    count: int
    mean: float
    sum: float
    variance: float
    std_dev: float
    margin_of_error_95: float


@router.post("/describe", response_model=DescribeResponse)
async def describe_numbers(inputs: DescribeInput):
    """Mean, variance, standard deviation and 95% margin of error."""
    if inputs.values is None and inputs.text is None:
        raise HTTPException(status_code=400, detail="Provide either values or text")

    try:
        values = inputs.values
        if values is None:
            values = statistics.parse_samples(inputs.text)
        result = statistics.describe(values, inputs.mode)
    except CalculationError as e:
        raise to_http_error(e)

    return DescribeResponse(**vars(result))
