import datetime

import pytest

from habitflow.core.errors import ValidationError
from habitflow.models import Habit, Schedule, describe_schedule
from habitflow.services.schedule_service import day_of_week, habits_due_on, is_due


def _habit(name, days, category="Health", habit_id=None):
    return Habit(id=habit_id, name=name, category=category, frequency=Schedule(days).to_json())


def test_day_of_week_starts_on_sunday():
    assert day_of_week(datetime.date(2026, 10, 18)) == 0
    assert day_of_week(datetime.date(2026, 10, 19)) == 1
    assert day_of_week(datetime.date(2026, 10, 24)) == 6


def test_is_due_matches_schedule_membership_for_every_day():
    habit = _habit("Meditate", [1, 3, 5])
    for day in range(7):
        assert is_due(habit, day) is (day in {1, 3, 5})


def test_empty_schedule_is_never_due():
    habit = _habit("Someday", [])
    assert not any(is_due(habit, day) for day in range(7))


def test_habits_due_on_sorts_by_category_then_name():
    habits = [
        _habit("Run", [2], category="Physical"),
        _habit("Read", [2], category="Academic"),
        _habit("Floss", [2], category="Health"),
        _habit("Brush", [2], category="Health"),
        _habit("Nap", [3], category="Health"),
    ]
    due = habits_due_on(habits, 2)
    assert [(h.category, h.name) for h in due] == [
        ("Academic", "Read"),
        ("Health", "Brush"),
        ("Health", "Floss"),
        ("Physical", "Run"),
    ]


@pytest.mark.parametrize("day", [-1, 7, True, "1", None])
def test_invalid_weekday_is_rejected(day):
    with pytest.raises(ValidationError):
        habits_due_on([], day)


@pytest.mark.parametrize("days", [[7], [-1], [True], ["1"], [1.0]])
def test_schedule_rejects_non_weekday_values(days):
    with pytest.raises(ValidationError):
        Schedule(days)


def test_schedule_json_encoding_is_sorted_and_deduplicated():
    schedule = Schedule([5, 1, 3, 1])
    assert schedule == {1, 3, 5}
    assert schedule.to_json() == "[1, 3, 5]"
    assert Schedule.from_json(schedule.to_json()) == schedule
    assert Schedule.from_json("") == Schedule()


@pytest.mark.parametrize("raw", ["{", '{"days": [1]}'])
def test_schedule_from_json_rejects_bad_encoding(raw):
    with pytest.raises(ValidationError):
        Schedule.from_json(raw)


@pytest.mark.parametrize(
    "days, label",
    [
        (range(7), "Every day"),
        ([], "No days"),
        ([1, 2, 3, 4, 5], "Weekdays"),
        ([6, 0], "Weekends"),
        ([5, 1, 3], "Mon, Wed, Fri"),
    ],
)
def test_describe_schedule(days, label):
    assert describe_schedule(days) == label
