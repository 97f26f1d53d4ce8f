"""
Expression evaluation API endpoints.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from calcdesk.api.common import to_http_error
from calcdesk.calculations import expression
from calcdesk.calculations.errors import CalculationError
from calcdesk.calculations.expression import AngleMode

router = APIRouter()


class ExpressionInput(BaseModel):
    expression: str
    angle_mode: AngleMode = AngleMode.radians


class ExpressionResponse(BaseModel):
    expression: str
    result: float


@router.post("/evaluate", response_model=ExpressionResponse)
async def evaluate_expression(inputs: ExpressionInput):
    """Evaluate a calculator expression without executing code."""
    try:
        result = expression.evaluate(inputs.expression, inputs.angle_mode)
    except CalculationError as e:
        raise to_http_error(e)
    return ExpressionResponse(expression=inputs.expression, result=result)
