"""
Grade Computations

A subject's final grade is the mean of its quarterly grades; the general
average is the mean of the final grades. Both are rounded to two places.
"""

from collections import defaultdict
from collections.abc import Iterable
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

PASSING_GRADE = Decimal("75")
PASSED = "Passed"
FAILED = "Failed"

_CENTS = Decimal("0.01")


def grade_remarks(grade: Decimal | float | int) -> str:
    return PASSED if Decimal(str(grade)) >= PASSING_GRADE else FAILED


def _mean(values: list[Decimal]) -> Decimal:
    return (sum(values, Decimal("0")) / len(values)).quantize(_CENTS, rounding=ROUND_HALF_UP)


def final_grades(grades: Iterable[Any]) -> dict[str, Decimal]:
    """subject_id -> mean of the subject's grades."""
    by_subject: dict[str, list[Decimal]] = defaultdict(list)
    for grade in grades:
        by_subject[grade.subject_id].append(Decimal(str(grade.grade)))
    return {subject_id: _mean(values) for subject_id, values in by_subject.items()}


def general_average(grades: Iterable[Any]) -> Decimal | None:
    """Mean of the final grades of every subject; None when nothing is graded."""
    finals = list(final_grades(grades).values())
    if not finals:
        return None
    return _mean(finals)


def general_averages_by_student(grades: Iterable[Any]) -> dict[str, tuple[int, Decimal | None]]:
    """student_id -> (subjects graded, general average)."""
    by_student: dict[str, list[Any]] = defaultdict(list)
    for grade in grades:
        by_student[grade.student_id].append(grade)

    result = {}
    for student_id, rows in by_student.items():
        result[student_id] = (len({r.subject_id for r in rows}), general_average(rows))
    return result
