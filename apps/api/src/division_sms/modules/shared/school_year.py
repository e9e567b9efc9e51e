"""
School Year Helpers

A school year runs from June to May and is written "YYYY-YYYY".
"""

import re
from datetime import date

SCHOOL_YEAR_START_MONTH = 6

_SCHOOL_YEAR_PATTERN = re.compile(r"^(\d{4})-(\d{4})$")


def get_current_school_year(today: date | None = None) -> str:
    """
    School year containing ``today``.

    June onwards starts a new school year; January to May still belongs
    to the previous one.
    """
    today = today or date.today()
    year = today.year
    if today.month >= SCHOOL_YEAR_START_MONTH:
        return f"{year}-{year + 1}"
    return f"{year - 1}-{year}"


def get_school_year_options(
    years_before: int = 2,
    years_after: int = 2,
    today: date | None = None,
) -> list[str]:
    """School years around the current calendar year, for dropdowns."""
    year = (today or date.today()).year
    return [f"{start}-{start + 1}" for start in range(year - years_before, year + years_after + 1)]


def is_valid_school_year(value: str) -> bool:
    match = _SCHOOL_YEAR_PATTERN.match(value or "")
    if not match:
        return False
    start, end = int(match.group(1)), int(match.group(2))
    return end == start + 1


def next_school_year(value: str) -> str:
    start = int(value.split("-")[0])
    return f"{start + 1}-{start + 2}"


def validate_school_year(value: str) -> str:
    """Pydantic field validator helper."""
    if not is_valid_school_year(value):
        raise ValueError("school_year must look like '2024-2025' with consecutive years")
    return value
