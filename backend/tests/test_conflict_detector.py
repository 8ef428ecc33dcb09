from slotwise.schemas.schedule import ScheduleOut
from slotwise.schemas.slot import SlotKey, TeacherSlotKey
from slotwise.services.conflict_detector import find_double_bookings, group_by_teacher_slot


def make_entry(schedule_id, teacher_id, day, slot, course_id=1):
    return ScheduleOut(
        id=schedule_id,
        program_id=1,
        semester=1,
        day_of_week=day,
        time_slot=slot,
        course_id=course_id,
        teacher_id=teacher_id,
    )


def test_no_entries_yield_no_conflicts():
    assert find_double_bookings([]) == []


def test_teacher_spread_across_slots_is_not_a_conflict():
    entries = [make_entry(index, 1, day, slot) for index, (day, slot) in enumerate([(0, 0), (0, 1), (1, 0), (5, 4)], 1)]
    assert find_double_bookings(entries) == []


def test_different_teachers_sharing_a_slot_is_not_a_conflict():
    entries = [make_entry(1, 1, 2, 3), make_entry(2, 2, 2, 3), make_entry(3, 3, 2, 3)]
    assert find_double_bookings(entries) == []


def test_two_entries_for_one_teacher_in_one_slot():
    entries = [
        make_entry(4, 2, 0, 0),
        make_entry(10, 1, 1, 2),
        make_entry(7, 3, 1, 2),
        make_entry(11, 1, 1, 2),
        make_entry(12, 1, 3, 2),
    ]

    conflicts = find_double_bookings(entries)

    assert len(conflicts) == 1
    conflict = conflicts[0]
    assert conflict.teacher_id == 1
    assert conflict.day_of_week == 1
    assert conflict.time_slot == 2
    assert set(conflict.conflicting_schedule_ids) == {10, 11}
    assert conflict.resolved is False
    assert conflict.suggestions == []
    assert conflict.key == TeacherSlotKey(1, 1, 2)
    assert conflict.slot == SlotKey(1, 2)


def test_n_way_collision_produces_a_single_conflict():
    entries = [make_entry(schedule_id, 5, 4, 1) for schedule_id in (21, 22, 23, 24)]

    conflicts = find_double_bookings(entries)

    assert len(conflicts) == 1
    assert conflicts[0].conflicting_schedule_ids == [21, 22, 23, 24]


def test_separate_collisions_are_reported_separately():
    entries = [
        make_entry(1, 1, 0, 0),
        make_entry(2, 1, 0, 0),
        make_entry(3, 1, 0, 1),
        make_entry(4, 1, 0, 1),
        make_entry(5, 2, 0, 0),
        make_entry(6, 2, 0, 0),
    ]

    keys = {conflict.key: conflict.conflicting_schedule_ids for conflict in find_double_bookings(entries)}

    assert keys == {
        TeacherSlotKey(1, 0, 0): [1, 2],
        TeacherSlotKey(1, 0, 1): [3, 4],
        TeacherSlotKey(2, 0, 0): [5, 6],
    }


def test_grouping_keeps_singletons():
    groups = group_by_teacher_slot([make_entry(1, 1, 0, 0), make_entry(2, 2, 0, 0)])
    assert groups == {TeacherSlotKey(1, 0, 0): [1], TeacherSlotKey(2, 0, 0): [2]}
