"""
GPA Threshold Eligibility

Pure functions deciding which section types a student qualifies for, given
the GPA of their previous grade level and the school's thresholds.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Protocol, TypeVar

from division_sms.modules.sections.models import SectionType

SECTION_TYPE_LABELS: dict[SectionType, str] = {
    SectionType.HETEROGENEOUS: "Heterogeneous",
    SectionType.HOMOGENEOUS_FAST_LEARNER: "Homogeneous - Fast learner",
    SectionType.HOMOGENEOUS_CRACK_SECTION: "Homogeneous - Crack section",
    SectionType.HOMOGENEOUS_RANDOM: "Homogeneous - Random",
}


@dataclass(frozen=True)
class GpaThresholds:
    fast_learner_min_gpa: float
    crack_section_max_gpa: float
    heterogeneous_enabled: bool
    homogeneous_random_enabled: bool


DEFAULT_THRESHOLDS = GpaThresholds(
    fast_learner_min_gpa=90.0,
    crack_section_max_gpa=75.0,
    heterogeneous_enabled=True,
    homogeneous_random_enabled=True,
)


class _HasSectionType(Protocol):
    section_type: SectionType | str | None


S = TypeVar("S", bound=_HasSectionType)


def get_suggested_section_type(gpa: float | None, thresholds: GpaThresholds) -> str | None:
    """Label of the section type a student with ``gpa`` should go to."""
    if gpa is None:
        return None
    if gpa >= thresholds.fast_learner_min_gpa:
        return SECTION_TYPE_LABELS[SectionType.HOMOGENEOUS_FAST_LEARNER]
    if gpa < thresholds.crack_section_max_gpa:
        return SECTION_TYPE_LABELS[SectionType.HOMOGENEOUS_CRACK_SECTION]
    return SECTION_TYPE_LABELS[SectionType.HETEROGENEOUS]


def section_type_matches_gpa(
    section_type: SectionType | str | None,
    gpa: float | None,
    thresholds: GpaThresholds,
) -> bool:
    """
    Whether a section of ``section_type`` is open to a student with ``gpa``.

    Sections without a type, students without a GPA and unknown types are
    always allowed.
    """
    if not section_type or gpa is None:
        return True

    try:
        section_type = SectionType(section_type)
    except ValueError:
        return True

    if section_type == SectionType.HETEROGENEOUS:
        return thresholds.heterogeneous_enabled
    if section_type == SectionType.HOMOGENEOUS_RANDOM:
        return thresholds.homogeneous_random_enabled
    if section_type == SectionType.HOMOGENEOUS_FAST_LEARNER:
        return gpa >= thresholds.fast_learner_min_gpa
    if section_type == SectionType.HOMOGENEOUS_CRACK_SECTION:
        return gpa < thresholds.crack_section_max_gpa
    return True


def filter_eligible_sections(
    sections: Iterable[S],
    gpa: float | None,
    thresholds: GpaThresholds,
) -> list[S]:
    return [s for s in sections if section_type_matches_gpa(s.section_type, gpa, thresholds)]


def thresholds_from_row(row: Any | None) -> GpaThresholds:
    """Build thresholds from a stored GpaThreshold row. No row means defaults."""
    if row is None:
        return DEFAULT_THRESHOLDS
    return GpaThresholds(
        fast_learner_min_gpa=float(row.homogeneous_fast_learner_min),
        crack_section_max_gpa=float(row.homogeneous_crack_section_max),
        heterogeneous_enabled=bool(row.heterogeneous_enabled),
        homogeneous_random_enabled=bool(row.homogeneous_random_enabled),
    )


def thresholds_to_row(thresholds: GpaThresholds) -> dict[str, Any]:
    """Column values for persisting ``thresholds``."""
    return {
        "homogeneous_fast_learner_min": Decimal(str(thresholds.fast_learner_min_gpa)),
        "homogeneous_crack_section_max": Decimal(str(thresholds.crack_section_max_gpa)),
        "heterogeneous_enabled": thresholds.heterogeneous_enabled,
        "homogeneous_random_enabled": thresholds.homogeneous_random_enabled,
    }


def thresholds_to_cache(thresholds: GpaThresholds) -> dict[str, Any]:
    return {
        "fast_learner_min_gpa": thresholds.fast_learner_min_gpa,
        "crack_section_max_gpa": thresholds.crack_section_max_gpa,
        "heterogeneous_enabled": thresholds.heterogeneous_enabled,
        "homogeneous_random_enabled": thresholds.homogeneous_random_enabled,
    }


def thresholds_from_cache(data: dict[str, Any]) -> GpaThresholds:
    return GpaThresholds(**data)
