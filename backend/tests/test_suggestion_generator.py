from itertools import count
from types import SimpleNamespace

import pytest

from slotwise.schemas.conflict import SuggestionAction
from slotwise.schemas.schedule import ScheduleCreate
from slotwise.schemas.teacher import TimePreference
from slotwise.services.conflict_detector import find_double_bookings
from slotwise.services.suggestion_generator import PREFERENCE_NOTE, SuggestionGenerator

MOVE = SuggestionAction.move
SWAP = SuggestionAction.swap
REASSIGN = SuggestionAction.reassign


def build_timetable(builder, **alice_fields):
    alice = builder.teacher("Alice", **alice_fields)
    bob = builder.teacher("Bob")
    carol = builder.teacher("Carol")
    algebra = builder.course("Algebra", teacher_id=alice.id)
    physics = builder.course("Physics", teacher_id=alice.id)
    chemistry = builder.course("Chemistry", teacher_id=bob.id)
    return SimpleNamespace(
        alice=alice,
        bob=bob,
        carol=carol,
        algebra=algebra,
        physics=physics,
        chemistry=chemistry,
        first=builder.entry(alice, 1, 2, course=algebra),
        second=builder.entry(alice, 1, 2, course=physics),
        other=builder.entry(bob, 0, 0, course=chemistry),
    )


def only_conflict(store):
    conflicts = find_double_bookings(store.list_schedules())
    assert len(conflicts) == 1
    return conflicts[0]


@pytest.fixture()
def timetable(builder):
    return build_timetable(builder)


def test_families_are_ordered_per_conflicting_entry(store, timetable):
    suggestions = SuggestionGenerator(store).generate(only_conflict(store))

    # 30 slots minus the conflict slot and Bob's slot, one swap, Bob and Carol.
    per_entry = [MOVE] * 28 + [SWAP] + [REASSIGN] * 2
    assert [item.action for item in suggestions] == per_entry + per_entry
    assert {item.schedule_id for item in suggestions[:31]} == {timetable.first.id}
    assert {item.schedule_id for item in suggestions[31:]} == {timetable.second.id}


def test_moves_scan_days_then_slots_and_skip_occupied_slots(store, timetable):
    suggestions = SuggestionGenerator(store).generate(only_conflict(store))

    targets = [(item.new_day_of_week, item.new_time_slot) for item in suggestions[:28]]
    expected = [(day, slot) for day in range(6) for slot in range(5) if (day, slot) not in {(1, 2), (0, 0)}]
    assert targets == expected

    all_targets = {(item.new_day_of_week, item.new_time_slot) for item in suggestions if item.action == MOVE}
    assert (1, 2) not in all_targets
    assert (0, 0) not in all_targets
    assert all(day < 6 for day, _ in all_targets)


def test_slots_used_by_unrelated_teachers_are_not_move_targets(store, builder, timetable):
    builder.entry(timetable.carol, 4, 4)

    suggestions = SuggestionGenerator(store).generate(only_conflict(store))

    targets = {(item.new_day_of_week, item.new_time_slot) for item in suggestions if item.action == MOVE}
    assert (4, 4) not in targets
    assert len(targets) == 27


def test_descriptions_name_course_day_and_slot(store, timetable):
    suggestions = SuggestionGenerator(store).generate(only_conflict(store))

    assert suggestions[0].description == f"Move Algebra to Sunday at 7:20 AM - 8:10 AM {PREFERENCE_NOTE}"
    swap = suggestions[28]
    assert swap.swap_with_schedule_id == timetable.other.id
    assert swap.description == "Swap Algebra with Chemistry on Sunday at 6:30 AM - 7:20 AM"
    assert [item.description for item in suggestions[29:31]] == ["Reassign Algebra to Bob", "Reassign Algebra to Carol"]
    assert [item.new_teacher_id for item in suggestions[29:31]] == [timetable.bob.id, timetable.carol.id]
    assert suggestions[31].description.startswith("Move Physics to Sunday")


def test_preference_note_only_inside_preferred_range(store, builder):
    timetable = build_timetable(
        builder, time_preferences=[TimePreference(day_of_week=1, start_time_slot=0, end_time_slot=1)]
    )

    suggestions = SuggestionGenerator(store).generate(only_conflict(store))

    moves = {
        (item.new_day_of_week, item.new_time_slot): item.description
        for item in suggestions
        if item.action == MOVE and item.schedule_id == timetable.first.id
    }
    assert moves[(1, 0)].endswith(PREFERENCE_NOTE)
    assert moves[(1, 1)].endswith(PREFERENCE_NOTE)
    assert not moves[(1, 3)].endswith(PREFERENCE_NOTE)
    assert not moves[(2, 0)].endswith(PREFERENCE_NOTE)
    assert moves[(2, 0)] == "Move Algebra to Tuesday at 6:30 AM - 7:20 AM"


def test_inverted_preference_range_matches_nothing(store, builder):
    build_timetable(builder, time_preferences=[TimePreference(day_of_week=2, start_time_slot=3, end_time_slot=1)])

    suggestions = SuggestionGenerator(store).generate(only_conflict(store))

    assert not any(item.description.endswith(PREFERENCE_NOTE) for item in suggestions if item.action == MOVE)


def test_reassignment_skips_teachers_busy_at_the_conflict_slot(store, builder, timetable):
    carol_entry = builder.entry(timetable.carol, 1, 2)

    suggestions = SuggestionGenerator(store).generate(only_conflict(store))

    reassigned_to = {item.new_teacher_id for item in suggestions if item.action == REASSIGN}
    assert reassigned_to == {timetable.bob.id}
    swapped_with = [item.swap_with_schedule_id for item in suggestions if item.action == SWAP]
    assert swapped_with == [timetable.other.id, carol_entry.id] * 2


def test_swaps_exclude_the_conflicted_teacher_and_conflicting_entries(store, builder, timetable):
    builder.entry(timetable.alice, 3, 3)

    suggestions = SuggestionGenerator(store).generate(only_conflict(store))

    swapped_with = {item.swap_with_schedule_id for item in suggestions if item.action == SWAP}
    assert swapped_with == {timetable.other.id}


def test_every_entry_of_an_n_way_collision_gets_suggestions(store, builder, timetable):
    third = builder.entry(timetable.alice, 1, 2)

    suggestions = SuggestionGenerator(store).generate(only_conflict(store))

    assert {item.schedule_id for item in suggestions} == {timetable.first.id, timetable.second.id, third.id}
    assert len(suggestions) == 3 * 31


def test_stale_conflict_returns_no_suggestions(store, timetable):
    conflict = only_conflict(store)
    store.delete_schedule(timetable.second.id)

    assert SuggestionGenerator(store).generate(conflict) == []


def test_partially_stale_collision_still_suggests_for_remaining_entries(store, builder, timetable):
    third = builder.entry(timetable.alice, 1, 2)
    conflict = only_conflict(store)
    store.delete_schedule(timetable.first.id)

    suggestions = SuggestionGenerator(store).generate(conflict)

    assert {item.schedule_id for item in suggestions} == {timetable.second.id, third.id}


def test_suggestion_ids_are_unique_and_fresh_per_batch(store, timetable):
    generator = SuggestionGenerator(store)
    conflict = only_conflict(store)

    first_batch = generator.generate(conflict)
    second_batch = generator.generate(conflict)

    first_ids = {item.id for item in first_batch}
    assert len(first_ids) == len(first_batch)
    assert first_ids.isdisjoint(item.id for item in second_batch)
    assert [item.description for item in first_batch] == [item.description for item in second_batch]


def test_custom_id_factory_and_move_window(store, timetable):
    counter = count(1)
    generator = SuggestionGenerator(store, move_search_days=7, id_factory=lambda: f"s{next(counter)}")

    suggestions = generator.generate(only_conflict(store))

    moves = [item for item in suggestions if item.action == MOVE and item.schedule_id == timetable.first.id]
    assert len(moves) == 33
    assert moves[-1].description.startswith("Move Algebra to Saturday")
    assert suggestions[0].id == "s1"
    assert suggestions[-1].id == f"s{len(suggestions)}"


def test_missing_course_and_teacher_fall_back_gracefully(store, builder):
    bob = builder.teacher("Bob")
    for _ in range(2):
        store.create_schedule(
            ScheduleCreate(program_id=1, semester=1, day_of_week=0, time_slot=0, course_id=999, teacher_id=77)
        )

    suggestions = SuggestionGenerator(store).generate(only_conflict(store))

    assert suggestions[0].description == f"Move Course to Sunday at 7:20 AM - 8:10 AM {PREFERENCE_NOTE}"
    assert [item.new_teacher_id for item in suggestions if item.action == REASSIGN] == [bob.id, bob.id]
