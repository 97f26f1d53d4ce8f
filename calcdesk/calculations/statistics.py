"""
Descriptive Statistics

Mean, variance, standard deviation and a 95% margin of error for a
sample or a full population.
"""

import enum
from typing import List, Sequence
from dataclasses import dataclass

import numpy as np

from calcdesk.calculations.errors import InvalidInputError

Z_SCORE_95 = 1.96


class VarianceMode(str, enum.Enum):
    sample = "sample"
    population = "population"


@dataclass(frozen=True)
class Description:
    count: int
    mean: float
    sum: float
    variance: float
    std_dev: float
    margin_of_error_95: float


def parse_samples(text: str) -> List[float]:
    """Parse comma-separated numbers, ignoring blank entries."""
    samples = []
    for token in text.split(","):
        token = token.strip()
        if not token:
            continue
        try:
            samples.append(float(token))
        except ValueError as e:
            raise InvalidInputError(f"Not a number: {token!r}") from e
    return samples


def describe(
    samples: Sequence[float], mode: VarianceMode = VarianceMode.sample
) -> Description:
    """
    Describe a set of numbers.

    Args:
        samples: Observed values
        mode: ``sample`` divides by n - 1, ``population`` by n

    Returns:
        Count, mean, sum, variance, standard deviation and margin of error
        at a fixed 95% confidence (z = 1.96)

    Raises:
        InvalidInputError: Empty input, non-finite values, fewer than
            two values in sample mode, or totals too large to represent
    """
    mode = VarianceMode(mode)
    values = np.asarray(samples, dtype=float)

    if values.size == 0:
        raise InvalidInputError("At least one value is required")
    if not np.all(np.isfinite(values)):
        raise InvalidInputError("Values must be finite numbers")

    ddof = 1 if mode == VarianceMode.sample else 0
    if values.size - ddof < 1:
        raise InvalidInputError("Sample variance requires at least 2 values")

    n = int(values.size)
    with np.errstate(over="ignore", invalid="ignore"):
        total = float(values.sum())
        mean = float(values.mean())
        variance = float(np.var(values, ddof=ddof))
    if not np.all(np.isfinite([total, mean, variance])):
        raise InvalidInputError("Values are too large to describe")
    std_dev = float(np.sqrt(variance))

    return Description(
        count=n,
        mean=mean,
        sum=total,
        variance=variance,
        std_dev=std_dev,
        margin_of_error_95=Z_SCORE_95 * std_dev / float(np.sqrt(n)),
    )
