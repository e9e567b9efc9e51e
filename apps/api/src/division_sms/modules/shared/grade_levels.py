"""Grade levels: 0 is Kindergarten, 1-12 are Grades 1 to 12."""

GRADE_LEVEL_MIN = 0
GRADE_LEVEL_MAX = 12


def get_grade_level_label(grade_level: int) -> str:
    if grade_level == 0:
        return "Kindergarten"
    return f"Grade {grade_level}"


GRADE_LEVEL_OPTIONS = [
    {"value": level, "label": get_grade_level_label(level)}
    for level in range(GRADE_LEVEL_MIN, GRADE_LEVEL_MAX + 1)
]
