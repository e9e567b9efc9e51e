"""
Unit tests for GPA threshold eligibility.
"""

from decimal import Decimal
from types import SimpleNamespace

from division_sms.modules.enrollment.gpa import (
    DEFAULT_THRESHOLDS,
    GpaThresholds,
    filter_eligible_sections,
    get_suggested_section_type,
    section_type_matches_gpa,
    thresholds_from_cache,
    thresholds_from_row,
    thresholds_to_cache,
    thresholds_to_row,
)
from division_sms.modules.sections.models import SectionType


class TestSuggestedSectionType:
    def test_no_gpa_no_suggestion(self):
        assert get_suggested_section_type(None, DEFAULT_THRESHOLDS) is None

    def test_fast_learner_at_minimum(self):
        assert (
            get_suggested_section_type(90.0, DEFAULT_THRESHOLDS) == "Homogeneous - Fast learner"
        )

    def test_crack_section_below_maximum(self):
        assert (
            get_suggested_section_type(74.99, DEFAULT_THRESHOLDS)
            == "Homogeneous - Crack section"
        )

    def test_heterogeneous_in_between(self):
        assert get_suggested_section_type(75.0, DEFAULT_THRESHOLDS) == "Heterogeneous"
        assert get_suggested_section_type(89.99, DEFAULT_THRESHOLDS) == "Heterogeneous"


class TestSectionTypeMatchesGpa:
    def test_untyped_section_or_missing_gpa_always_allowed(self):
        assert section_type_matches_gpa(None, 60.0, DEFAULT_THRESHOLDS)
        assert section_type_matches_gpa(
            SectionType.HOMOGENEOUS_FAST_LEARNER, None, DEFAULT_THRESHOLDS
        )

    def test_unknown_type_allowed(self):
        assert section_type_matches_gpa("star_section", 60.0, DEFAULT_THRESHOLDS)

    def test_fast_learner_requires_minimum(self):
        assert section_type_matches_gpa("homogeneous_fast_learner", 90.0, DEFAULT_THRESHOLDS)
        assert not section_type_matches_gpa("homogeneous_fast_learner", 89.5, DEFAULT_THRESHOLDS)

    def test_crack_section_requires_below_maximum(self):
        assert section_type_matches_gpa(
            SectionType.HOMOGENEOUS_CRACK_SECTION, 74.0, DEFAULT_THRESHOLDS
        )
        assert not section_type_matches_gpa(
            SectionType.HOMOGENEOUS_CRACK_SECTION, 75.0, DEFAULT_THRESHOLDS
        )

    def test_disabled_types_excluded(self):
        thresholds = GpaThresholds(90.0, 75.0, False, False)
        assert not section_type_matches_gpa(SectionType.HETEROGENEOUS, 80.0, thresholds)
        assert not section_type_matches_gpa(SectionType.HOMOGENEOUS_RANDOM, 80.0, thresholds)


def test_filter_eligible_sections_keeps_order():
    sections = [
        SimpleNamespace(name="A", section_type=SectionType.HOMOGENEOUS_FAST_LEARNER),
        SimpleNamespace(name="B", section_type=SectionType.HETEROGENEOUS),
        SimpleNamespace(name="C", section_type=None),
        SimpleNamespace(name="D", section_type=SectionType.HOMOGENEOUS_CRACK_SECTION),
    ]
    eligible = filter_eligible_sections(sections, 82.0, DEFAULT_THRESHOLDS)
    assert [s.name for s in eligible] == ["B", "C"]


class TestThresholdConversions:
    def test_missing_row_means_defaults(self):
        assert thresholds_from_row(None) == DEFAULT_THRESHOLDS

    def test_row_values_are_read_as_floats(self):
        row = SimpleNamespace(
            homogeneous_fast_learner_min=Decimal("92.50"),
            homogeneous_crack_section_max=Decimal("70.00"),
            heterogeneous_enabled=True,
            homogeneous_random_enabled=False,
        )
        assert thresholds_from_row(row) == GpaThresholds(92.5, 70.0, True, False)

    def test_to_row_uses_decimals(self):
        row = thresholds_to_row(GpaThresholds(92.5, 70.0, True, False))
        assert row["homogeneous_fast_learner_min"] == Decimal("92.5")
        assert row["homogeneous_random_enabled"] is False

    def test_cache_payload_restores_same_thresholds(self):
        thresholds = GpaThresholds(88.0, 72.5, False, True)
        assert thresholds_from_cache(thresholds_to_cache(thresholds)) == thresholds
