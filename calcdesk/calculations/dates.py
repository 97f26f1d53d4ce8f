"""
Date and Duration Calculations

Calendar-aware age and interval arithmetic built on dateutil's relativedelta.
"""

from datetime import date
from dataclasses import dataclass

from dateutil.relativedelta import relativedelta

from calcdesk.calculations.errors import InvalidInputError


@dataclass(frozen=True)
class AgeBreakdown:
    years: int
    months: int
    days: int
    total_weeks: int
    total_days: int
    total_hours: int
    total_minutes: int
    total_seconds: int


@dataclass(frozen=True)
class DateDifference:
    years: int
    months: int  # months beyond the whole years
    total_weeks: int
    total_days: int


def _whole_years(later: date, earlier: date) -> int:
    years = later.year - earlier.year
    if (later.month, later.day) < (earlier.month, earlier.day):
        years -= 1
    return years


def _whole_months(later: date, earlier: date) -> int:
    months = (later.year - earlier.year) * 12 + later.month - earlier.month
    if later.day < earlier.day:
        months -= 1
    return months


def age_breakdown(dob: date, as_of: date) -> AgeBreakdown:
    """
    Break the time between two dates into calendar years, months and days.

    Whole years are taken first and subtracted from ``as_of``; whole months
    are counted against that intermediate date and subtracted in turn; the
    remainder is days. Subtracting the parts from ``as_of`` in that order
    lands exactly on ``dob``.

    The flat totals are measured over the full span independently of the
    breakdown.

    Raises:
        InvalidInputError: If ``dob`` is after ``as_of``
    """
    if dob > as_of:
        raise InvalidInputError("Date of birth must not be after the target date")

    years = _whole_years(as_of, dob)
    months_date = as_of - relativedelta(years=years)
    months = _whole_months(months_date, dob)
    days_date = months_date - relativedelta(months=months)
    days = (days_date - dob).days

    total_days = (as_of - dob).days

    return AgeBreakdown(
        years=years,
        months=months,
        days=days,
        total_weeks=total_days // 7,
        total_days=total_days,
        total_hours=total_days * 24,
        total_minutes=total_days * 24 * 60,
        total_seconds=total_days * 24 * 60 * 60,
    )


def date_difference(start: date, end: date) -> DateDifference:
    """Whole years, leftover months, and total weeks and days between two dates."""
    if end < start:
        raise InvalidInputError("End date must not be before start date")

    total_days = (end - start).days
    total_months = _whole_months(end, start)

    return DateDifference(
        years=total_months // 12,
        months=total_months % 12,
        total_weeks=total_days // 7,
        total_days=total_days,
    )


def shift_date(
    start: date,
    years: int = 0,
    months: int = 0,
    weeks: int = 0,
    days: int = 0,
    subtract: bool = False,
) -> date:
    """
    Add (or subtract) a duration to a date.

    Years and months are applied before weeks and days; month ends are
    clamped (Jan 31 + 1 month = Feb 28/29).
    """
    delta = relativedelta(years=years, months=months, weeks=weeks, days=days)
    try:
        return start - delta if subtract else start + delta
    except (OverflowError, ValueError) as e:
        raise InvalidInputError("Resulting date is out of range") from e
