"""
Unit tests for school year and grade level helpers.
"""

from datetime import date

import pytest

from division_sms.modules.shared.grade_levels import GRADE_LEVEL_OPTIONS, get_grade_level_label
from division_sms.modules.shared.school_year import (
    get_current_school_year,
    get_school_year_options,
    is_valid_school_year,
    next_school_year,
    validate_school_year,
)


class TestCurrentSchoolYear:
    def test_june_starts_new_school_year(self):
        assert get_current_school_year(date(2024, 6, 1)) == "2024-2025"

    def test_may_belongs_to_previous_school_year(self):
        assert get_current_school_year(date(2025, 5, 31)) == "2024-2025"

    def test_january(self):
        assert get_current_school_year(date(2025, 1, 15)) == "2024-2025"


def test_school_year_options_span_calendar_year():
    assert get_school_year_options(today=date(2025, 3, 1)) == [
        "2023-2024",
        "2024-2025",
        "2025-2026",
        "2026-2027",
        "2027-2028",
    ]


class TestSchoolYearValidation:
    @pytest.mark.parametrize("value", ["2024-2025", "1999-2000"])
    def test_valid(self, value):
        assert is_valid_school_year(value)
        assert validate_school_year(value) == value

    @pytest.mark.parametrize("value", ["2024-2026", "2024/2025", "24-25", "", "2025-2024"])
    def test_invalid(self, value):
        assert not is_valid_school_year(value)
        with pytest.raises(ValueError):
            validate_school_year(value)

    def test_next_school_year(self):
        assert next_school_year("2024-2025") == "2025-2026"


class TestGradeLevels:
    def test_kindergarten_label(self):
        assert get_grade_level_label(0) == "Kindergarten"

    def test_numbered_label(self):
        assert get_grade_level_label(7) == "Grade 7"

    def test_options_cover_kindergarten_to_grade_12(self):
        assert len(GRADE_LEVEL_OPTIONS) == 13
        assert GRADE_LEVEL_OPTIONS[0] == {"value": 0, "label": "Kindergarten"}
        assert GRADE_LEVEL_OPTIONS[-1] == {"value": 12, "label": "Grade 12"}
