"""
Unit tests for schedule conflict detection.
"""

from datetime import time

from division_sms.modules.schedules.conflicts import (
    ConflictType,
    ScheduleSlot,
    check_schedule_conflicts,
    format_days,
    format_time_range,
    get_day_name,
    has_common_days,
    is_time_overlapping,
    time_to_minutes,
)


def make_slot(**overrides) -> ScheduleSlot:
    fields = {
        "id": "existing-1",
        "room_id": "room-1",
        "teacher_id": "teacher-1",
        "section_id": "section-1",
        "days_of_week": (1, 3, 5),
        "start_time": "08:00",
        "end_time": "09:00",
        "school_year": "2024-2025",
    }
    fields.update(overrides)
    return ScheduleSlot(**fields)


class TestTimeHelpers:
    def test_time_to_minutes_accepts_strings_and_times(self):
        assert time_to_minutes("08:30") == 510
        assert time_to_minutes("08:30:45") == 510
        assert time_to_minutes(time(13, 15)) == 795

    def test_touching_ranges_do_not_overlap(self):
        assert not is_time_overlapping("08:00", "09:00", "09:00", "10:00")
        assert not is_time_overlapping("09:00", "10:00", "08:00", "09:00")

    def test_partial_and_contained_ranges_overlap(self):
        assert is_time_overlapping("08:00", "09:30", "09:00", "10:00")
        assert is_time_overlapping("08:00", "12:00", "09:00", "10:00")
        assert is_time_overlapping(time(9, 0), time(10, 0), "08:00", "12:00")

    def test_has_common_days(self):
        assert has_common_days([1, 3], [3, 4])
        assert not has_common_days([1, 3], [2, 4])
        assert not has_common_days([], [1])

    def test_format_days_sorts(self):
        assert format_days([5, 1, 3]) == "Mon, Wed, Fri"

    def test_format_time_range_drops_seconds(self):
        assert format_time_range("08:30:00", time(10, 15)) == "08:30 - 10:15"

    def test_get_day_name(self):
        assert get_day_name(0) == "Sunday"
        assert get_day_name(6) == "Saturday"
        assert get_day_name(7) == "Unknown"


class TestCheckScheduleConflicts:
    def test_no_conflict_when_nothing_shared(self):
        candidate = make_slot(
            id=None, room_id="room-2", teacher_id="teacher-2", section_id="section-2"
        )
        assert check_schedule_conflicts(candidate, [make_slot()]) == []

    def test_room_conflict(self):
        candidate = make_slot(id=None, teacher_id="teacher-2", section_id="section-2")
        conflicts = check_schedule_conflicts(candidate, [make_slot()])

        assert [c.type for c in conflicts] == [ConflictType.ROOM]
        assert conflicts[0].message == "Room is already scheduled at this time on Mon, Wed, Fri"
        assert conflicts[0].conflicting_schedule.id == "existing-1"

    def test_all_three_dimensions_reported_in_order(self):
        candidate = make_slot(id=None, start_time="08:30", end_time="09:30", days_of_week=(3,))
        conflicts = check_schedule_conflicts(candidate, [make_slot()])

        assert [c.type for c in conflicts] == [
            ConflictType.ROOM,
            ConflictType.TEACHER,
            ConflictType.SECTION,
        ]

    def test_different_days_never_conflict(self):
        candidate = make_slot(id=None, days_of_week=(2, 4))
        assert check_schedule_conflicts(candidate, [make_slot()]) == []

    def test_back_to_back_schedules_do_not_conflict(self):
        candidate = make_slot(id=None, start_time="09:00", end_time="10:00")
        assert check_schedule_conflicts(candidate, [make_slot()]) == []

    def test_other_school_year_is_ignored(self):
        candidate = make_slot(id=None, school_year="2025-2026")
        assert check_schedule_conflicts(candidate, [make_slot()]) == []

    def test_excluded_schedule_does_not_clash_with_itself(self):
        candidate = make_slot()
        assert check_schedule_conflicts(candidate, [make_slot()], exclude_id="existing-1") == []

    def test_one_conflict_per_dimension_per_schedule(self):
        existing = [
            make_slot(id="a", teacher_id="teacher-x", section_id="section-x"),
            make_slot(id="b", room_id="room-x", section_id="section-x"),
        ]
        candidate = make_slot(id=None)
        conflicts = check_schedule_conflicts(candidate, existing)

        assert [(c.type, c.conflicting_schedule.id) for c in conflicts] == [
            (ConflictType.ROOM, "a"),
            (ConflictType.TEACHER, "b"),
        ]
